"""Two-stage classification of PHP function names.

Filter 1: is the function name an English word?
    yes -> word list for rule 933161
Filter 2: is it frequently used in PHP code on GitHub?
    yes -> 933150, no -> 933151

Rules 933150 and 933151 are parallel match rules; 933161 is a regex rule and
stricter sibling of 933160, so the 933160 entries are also merged into it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional, Sequence

from ..config import R933150_FILENAME, R933160_FILENAME, R933161_FILENAME, RunConfig
from .cache import FrequencyStore
from .classifiers.base import WordClassifier
from .filtering.seeds import merge_seeds
from .oracle import FrequencyOracle

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClassificationResult:
    words: tuple[str, ...]
    frequent: tuple[str, ...]
    rare: tuple[str, ...]
    errors: tuple[str, ...] = ()
    queries: int = 0
    added_word_seeds: tuple[str, ...] = ()
    added_high_risk: tuple[str, ...] = ()


class ClassificationPipeline:
    """
    Route function names into the word, frequent and rare buckets.

    The frequency store is mutated (and flushed) as lookups complete, so an
    interrupted run keeps every count it already paid for.
    """

    def __init__(
        self,
        config: RunConfig,
        classifier: WordClassifier,
        oracle: FrequencyOracle,
        store: FrequencyStore,
        word_seeds: Sequence[str] = (),
        high_risk_seeds: Sequence[str] = (),
        today: Optional[date] = None,
    ):
        self.config = config
        self.classifier = classifier
        self.oracle = oracle
        self.store = store
        self.word_seeds = list(word_seeds)
        self.high_risk_seeds = list(high_risk_seeds)
        self.today = today or date.today()

    def run(self, identifiers: Iterable[str]) -> ClassificationResult:
        names = sorted(set(identifiers))

        recognized = self.classifier.classify(names)
        words = {name for name in names if name in recognized}
        logger.info("%d English words found among %d function names", len(words), len(names))

        added_word_seeds = merge_seeds(words, self.word_seeds, R933160_FILENAME, f"the stricter sibling {R933161_FILENAME}")
        # 933160 entries are words too and never get a frequency
        non_words = [name for name in names if name not in words]

        logger.info("Creating / updating frequency list for %d functions", len(non_words))
        counts: dict[str, int] = {}
        errors: list[str] = []
        queries = 0
        for name in non_words:
            count, queried = self._resolve(name)
            queries += queried
            if count is None:
                errors.append(name)
            else:
                counts[name] = count
        logger.info("Done creating / updating frequency list.")

        frequent, rare = self._bucket(counts)
        added_high_risk = merge_seeds(frequent, self.high_risk_seeds, "high-risk list", R933150_FILENAME)
        # 933150 and 933151 must stay disjoint
        rare -= frequent

        if errors:
            logger.warning("Failed to retrieve frequency for %d function(s)", len(errors))
            if self.config.verbose:
                for name in errors:
                    logger.warning("- %s", name)

        return ClassificationResult(
            words=tuple(sorted(words)),
            frequent=tuple(sorted(frequent)),
            rare=tuple(sorted(rare)),
            errors=tuple(errors),
            queries=queries,
            added_word_seeds=tuple(added_word_seeds),
            added_high_risk=tuple(added_high_risk),
        )

    def _resolve(self, name: str) -> tuple[Optional[int], int]:
        """Return (count or None, number of oracle queries made)."""
        record = self.store.lookup(name)
        if record is None:
            logger.info("Function %s not found in frequency file. Attempting to add.", name)
            count = self.oracle.query(name)
            if count is None:
                logger.error("  Retrieving frequency for %s failed. Cannot add item.", name)
                return None, 1
            logger.info("  Adding entry for function %s with frequency %d", name, count)
            self.store.upsert(name, count, self.today)
            return count, 1

        age = record.age_in_days(self.today)
        logger.debug(
            "Function %s exists (timestamp: %s, age: %d, frequency: %d)",
            name, record.observed_at.isoformat(), age, record.count,
        )
        if not record.is_stale(self.today, self.config.age_limit):
            return record.count, 0

        count = self.oracle.query(name)
        if count is None:
            logger.error("Entry for function %s is too old. Updating failed. Removing record.", name)
            self.store.remove(name)
            return None, 1
        logger.info("Entry for function %s is too old. Updating with new data (new frequency: %d).", name, count)
        self.store.upsert(name, count, self.today)
        return count, 1

    def _bucket(self, counts: dict[str, int]) -> tuple[set[str], set[str]]:
        limit = self.config.frequency_limit
        logger.info("Filtering PHP function names with frequency limit: %d", limit)
        frequent: set[str] = set()
        rare: set[str] = set()
        for name in sorted(counts):
            count = counts[name]
            if count > limit:
                logger.debug('Function "%s" (frequency %d) is frequent', name, count)
                frequent.add(name)
            else:
                logger.debug('Function "%s" (frequency %d) is rare', name, count)
                rare.add(name)
        return frequent, rare


__all__ = ["ClassificationPipeline", "ClassificationResult"]
