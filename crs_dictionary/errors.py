"""Exception hierarchy for the dictionary creator.

Everything derived from `DictionaryError` is fatal for a run: the CLI logs it
and exits non-zero. Per-identifier lookup failures are not exceptions, they
are collected in the pipeline result.
"""

from __future__ import annotations


class DictionaryError(Exception):
    """Base class for fatal errors."""


class ConfigError(DictionaryError):
    """Invalid run parameters or missing required environment."""


class StoreFormatError(DictionaryError):
    """The frequency store file cannot be parsed."""


class ClassifierError(DictionaryError):
    """The word classifier is unavailable or failed."""


class RepositoryError(DictionaryError):
    """Cloning or updating the PHP source repository failed."""


class ExtractionError(DictionaryError):
    """Function names could not be extracted from the source tree."""


__all__ = [
    "DictionaryError",
    "ConfigError",
    "StoreFormatError",
    "ClassifierError",
    "RepositoryError",
    "ExtractionError",
]
