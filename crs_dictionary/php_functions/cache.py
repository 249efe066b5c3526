"""Persistent frequency cache for PHP function names.

The store is a plain text file, one record per line::

    array_walk 1234567 2023-06-20

It is loaded fully into memory and rewritten (sorted) after every mutation so
an interrupted run never leaves a half-written file behind.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Iterator, Optional

from ..errors import StoreFormatError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrequencyRecord:
    identifier: str
    count: int
    observed_at: date

    def age_in_days(self, today: date) -> int:
        return (today - self.observed_at).days

    def is_stale(self, today: date, age_limit: int) -> bool:
        return self.age_in_days(today) > age_limit

    def to_line(self) -> str:
        return f"{self.identifier} {self.count} {self.observed_at.isoformat()}"

    @classmethod
    def from_line(cls, line: str) -> "FrequencyRecord":
        parts = line.split()
        if len(parts) != 3:
            raise ValueError(f"expected 'identifier count date', got {line!r}")
        identifier, raw_count, raw_date = parts
        count = int(raw_count)
        if count < 0:
            raise ValueError(f"negative count {count}")
        return cls(identifier, count, date.fromisoformat(raw_date))


class FrequencyStore:
    """Identifier -> FrequencyRecord mapping backed by a sorted text file."""

    def __init__(self, path: Path, records: Optional[dict[str, FrequencyRecord]] = None):
        self.path = Path(path)
        self._records: dict[str, FrequencyRecord] = dict(records or {})

    @classmethod
    def load(cls, path: Path) -> "FrequencyStore":
        path = Path(path)
        records: dict[str, FrequencyRecord] = {}
        if path.exists():
            with path.open("r", encoding="utf-8") as fh:
                for lineno, line in enumerate(fh, 1):
                    if not line.strip():
                        continue
                    try:
                        record = FrequencyRecord.from_line(line)
                    except ValueError as exc:
                        raise StoreFormatError(f"{path}:{lineno}: {exc}") from exc
                    records[record.identifier] = record
        logger.debug("Loaded %d frequency records from %s", len(records), path)
        return cls(path, records)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records

    def __iter__(self) -> Iterator[FrequencyRecord]:
        for key in sorted(self._records):
            yield self._records[key]

    def lookup(self, identifier: str) -> Optional[FrequencyRecord]:
        return self._records.get(identifier)

    def upsert(self, identifier: str, count: int, observed_at: date) -> FrequencyRecord:
        record = FrequencyRecord(identifier, count, observed_at)
        self._records[identifier] = record
        self.persist()
        return record

    def remove(self, identifier: str) -> bool:
        if self._records.pop(identifier, None) is None:
            return False
        self.persist()
        return True

    def persist(self) -> None:
        """Rewrite the whole store atomically (temp file + rename)."""
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, prefix=".frequencies_", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                for record in self:
                    fh.write(record.to_line() + "\n")
            os.replace(tmp_path, self.path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise


__all__ = ["FrequencyRecord", "FrequencyStore"]
