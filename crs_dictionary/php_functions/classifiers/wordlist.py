"""Dictionary-file classifier."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Set

from ...errors import ClassifierError
from .base import WordClassifier


class WordListClassifier(WordClassifier):
    """Treat a name as a word when it appears verbatim in a fixed word list."""

    def __init__(self, words: Iterable[str]):
        self.words = frozenset(words)

    @classmethod
    def from_file(cls, path: Path) -> "WordListClassifier":
        """Load a dictionary with one word per line (e.g. /usr/share/dict/words)."""
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as fh:
                return cls(line.strip() for line in fh if line.strip())
        except OSError as exc:
            raise ClassifierError(f"Cannot read word list {path}: {exc}") from exc

    def classify(self, identifiers: Iterable[str]) -> Set[str]:
        return {name for name in identifiers if name in self.words}


__all__ = ["WordListClassifier"]
