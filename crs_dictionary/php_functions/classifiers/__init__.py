"""Word classifiers: decide which function names are English words."""

from .base import WordClassifier
from .spell import SpellScriptClassifier
from .wordlist import WordListClassifier

__all__ = ["WordClassifier", "SpellScriptClassifier", "WordListClassifier"]
