"""Classifier backed by the fp-finder `spell.sh` script (WordNet)."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Iterable, Optional, Set

from ...errors import ClassifierError
from .base import WordClassifier

logger = logging.getLogger(__name__)

WORDNET_BINARY = "wn"

WORDNET_MISSING = """WordNet binary not found.

This program depends on a script (spell.sh) that requires WordNet
to be installed. The WordNet shell binary 'wn' can be obtained
via the package manager of your choice.

The package is usually called 'wordnet'."""


class SpellScriptClassifier(WordClassifier):
    """
    Run `spell.sh --machine <file>` and read the English words from stdout.

    The identifiers are written one per line to a file in `work_dir`
    (or the system temp directory), which is removed afterwards.
    """

    def __init__(self, script_path: Path, work_dir: Optional[Path] = None, timeout: float = 3600):
        self.script_path = Path(script_path)
        self.work_dir = Path(work_dir) if work_dir else None
        self.timeout = timeout

    def check_available(self) -> None:
        if not (self.script_path.is_file() and os.access(self.script_path, os.X_OK)):
            raise ClassifierError(f"{self.script_path} is not existing or is not executable.")
        if shutil.which(WORDNET_BINARY) is None:
            raise ClassifierError(WORDNET_MISSING)

    def classify(self, identifiers: Iterable[str]) -> Set[str]:
        names = list(identifiers)
        if not names:
            return set()

        fd, list_path = tempfile.mkstemp(prefix="php_functions_", suffix=".txt", dir=self.work_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write("\n".join(names) + "\n")
            try:
                result = subprocess.run(
                    [str(self.script_path), "--machine", list_path],
                    capture_output=True, text=True, timeout=self.timeout,
                )
            except (FileNotFoundError, PermissionError) as exc:
                raise ClassifierError(f"Cannot run {self.script_path}: {exc}") from exc
            except subprocess.TimeoutExpired as exc:
                raise ClassifierError(f"{self.script_path} timed out after {self.timeout}s") from exc
        finally:
            os.unlink(list_path)

        if result.returncode != 0:
            raise ClassifierError(
                f"{self.script_path} exited with status {result.returncode}\n{result.stdout}{result.stderr}"
            )

        words = {line.strip() for line in result.stdout.splitlines() if line.strip()}
        logger.debug("spell.sh recognized %d of %d names", len(words), len(names))
        return words


__all__ = ["SpellScriptClassifier", "WORDNET_BINARY"]
