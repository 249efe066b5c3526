"""Serialization of the rule artifacts."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Iterable

from ..config import RULE_FREQUENT, RULE_RARE, RULE_WORDS, RunConfig
from .pipeline import ClassificationResult

logger = logging.getLogger(__name__)

RA_933161_PREFIX = """##! Please refer to the documentation at
##! https://coreruleset.org/docs/development/regex_assembly/.

##!+ i
##!^ \\b
##!$ (?:\\s|/\\*.*\\*/|//.*|#.*)*\\(.*\\)"""


def _lines(entries: Iterable[str]) -> str:
    body = "\n".join(entries)
    return body + "\n" if body else ""


def render_regex_assembly(words: Iterable[str]) -> str:
    """933161 source: header, two blank lines, one word per line."""
    return RA_933161_PREFIX + "\n\n\n" + _lines(words)


def render_data_file(names: Iterable[str]) -> str:
    return _lines(names)


class ArtifactWriter:
    """Write the requested rule files, replacing whatever was there."""

    def __init__(self, config: RunConfig):
        self.config = config

    def write(self, result: ClassificationResult) -> Dict[str, Path]:
        written: Dict[str, Path] = {}
        if self.config.wants(RULE_WORDS):
            written[RULE_WORDS] = self._write(RULE_WORDS, render_regex_assembly(result.words))
        if self.config.wants(RULE_FREQUENT):
            written[RULE_FREQUENT] = self._write(RULE_FREQUENT, render_data_file(result.frequent))
        if self.config.wants(RULE_RARE):
            written[RULE_RARE] = self._write(RULE_RARE, render_data_file(result.rare))
        return written

    def _write(self, rule: str, content: str) -> Path:
        path = self.config.output_path(rule)
        path.write_text(content, encoding="utf-8")
        logger.info("File %s updated.", path.name)
        return path

    @staticmethod
    def write_error_report(errors: Iterable[str], path: Path) -> Path:
        path = Path(path)
        path.write_text(_lines(f"- {name}" for name in errors), encoding="utf-8")
        return path


__all__ = ["ArtifactWriter", "RA_933161_PREFIX", "render_regex_assembly", "render_data_file"]
