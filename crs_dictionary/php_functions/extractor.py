"""PHP function name extraction from the php-src C sources."""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Iterable, List

from pygments import lex
from pygments.lexers import get_lexer_by_name
from pygments.token import Comment, String

from ..errors import ExtractionError

logger = logging.getLogger(__name__)


SKIP_PATH_PARTS = frozenset({".git", ".github", "autom4te.cache"})

SOURCE_EXTENSIONS = frozenset({".c", ".h", ".cpp", ".cc", ".y", ".re"})

DECLARATION = "ZEND_FUNCTION"
DECLARATION_PATTERN = re.compile(r"\bZEND_FUNCTION\s*\(\s*([^()]*?)\s*\)")
IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class FunctionNameExtractor:
    """
    Collect the names declared with ZEND_FUNCTION(name).

    Comments, string literals and preprocessor lines are blanked out with the
    pygments C lexer first, so the macro definition itself and commented-out
    declarations do not contribute names. Names containing '$' (template
    placeholders such as "{$this->getDeclarationName") are dropped.
    """

    def __init__(self):
        self._lexer = get_lexer_by_name("c")

    def extract_tree(self, root: Path) -> List[str]:
        root = Path(root)
        if not root.is_dir():
            raise ExtractionError(f"Source tree {root} is not a directory.")

        names: set[str] = set()
        files = 0
        for path in self._iter_sources(root):
            try:
                code = path.read_text(encoding="utf-8", errors="ignore")
            except OSError as exc:
                logger.debug("Skipping unreadable %s: %s", path, exc)
                continue
            if DECLARATION not in code:
                continue
            files += 1
            names.update(self.extract(code))

        logger.debug("Scanned %d files declaring functions under %s", files, root)
        if not names:
            raise ExtractionError(f"No {DECLARATION} declarations found under {root}.")
        return sorted(names)

    def extract(self, code: str) -> List[str]:
        stripped = self._strip_non_code(code)
        found = [match.group(1) for match in DECLARATION_PATTERN.finditer(stripped)]
        return sorted({name for name in found if self._is_function_name(name)})

    def _iter_sources(self, root: Path) -> Iterable[Path]:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_PATH_PARTS)
            for filename in sorted(filenames):
                if os.path.splitext(filename)[1] in SOURCE_EXTENSIONS:
                    yield Path(dirpath) / filename

    def _strip_non_code(self, code: str) -> str:
        parts = []
        for tok_type, tok in lex(code, self._lexer):
            if tok_type in Comment or tok_type in String:
                parts.append(" ")
            else:
                parts.append(tok)
        return "".join(parts)

    @staticmethod
    def _is_function_name(name: str) -> bool:
        return "$" not in name and bool(IDENTIFIER_PATTERN.match(name))


__all__ = ["FunctionNameExtractor", "SKIP_PATH_PARTS", "SOURCE_EXTENSIONS"]
