"""Base classifier interface for English-word detection."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Iterable, Set


class WordClassifier(ABC):
    """
    Abstract base class for word classifiers.

    Classifiers decide which function names are natural-language words.
    Matching is exact and case-sensitive on the original token.
    """

    @abstractmethod
    def classify(self, identifiers: Iterable[str]) -> Set[str]:
        """
        Pick the English words out of a list of identifiers.

        Args:
            identifiers: Function names to test

        Returns:
            Subset of the input recognized as words (may be empty)
        """
        pass

    def check_available(self) -> None:
        """
        Verify the classifier can run.

        Raises:
            ClassifierError: if a required tool is missing
        """
        return None


__all__ = ["WordClassifier"]
