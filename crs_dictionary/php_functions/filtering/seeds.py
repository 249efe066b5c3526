"""Curated seed lists merged into computed buckets."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, List, Set

from ...errors import ConfigError

logger = logging.getLogger(__name__)


def read_seed_list(path: Path) -> List[str]:
    """
    Read a seed list, one entry per line.

    Comment lines (starting with '#', which includes the `##!` regex-assembly
    directives) and blank lines are skipped. Order and duplicates are kept.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            lines = [line.strip() for line in fh]
    except OSError as exc:
        raise ConfigError(f"Cannot read seed list {path}: {exc}") from exc
    return [line for line in lines if line and not line.startswith("#")]


def merge_seeds(bucket: Set[str], seeds: Iterable[str], source: str, target: str) -> List[str]:
    """
    Add every seed missing from `bucket` (in place).

    Returns the entries that were added, in seed order.
    """
    added: List[str] = []
    for entry in seeds:
        if entry in bucket:
            logger.info('Function "%s" from %s already present in %s', entry, source, target)
            continue
        logger.info('Function "%s" from %s added to %s', entry, source, target)
        bucket.add(entry)
        added.append(entry)
    return added


__all__ = ["read_seed_list", "merge_seeds"]
