"""Frequency lookups against GitHub code search."""

from __future__ import annotations

import http.client
import logging
import socket
import time
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional

from ..github_base import build_headers, code_search_url, make_request, rate_limit_exhausted

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """
    Attempt ceiling and waits for oracle queries.

    `delay` is slept after every attempt, successful or not. When the service
    reports an exhausted quota, `rate_limit_cooldown` is slept on top of it.
    The /search/code endpoint allows 10 requests per minute.
    """

    attempts: int = 5
    delay: float = 1.0
    rate_limit_cooldown: float = 25.0

    def __post_init__(self):
        if self.attempts < 1:
            raise ValueError("attempts must be at least 1")
        if self.delay < 0 or self.rate_limit_cooldown < 0:
            raise ValueError("delays must be non-negative")

    def cooldown_for(self, rate_limited: bool) -> float:
        return self.rate_limit_cooldown if rate_limited else 0.0


class FrequencyOracle(ABC):
    """Source of occurrence counts for a search term."""

    @abstractmethod
    def query(self, term: str) -> Optional[int]:
        """Return the occurrence count of `term`, or None if it could not be determined."""
        pass


class GitHubCodeSearch(FrequencyOracle):
    """
    Count occurrences of a term in public code via the GitHub search API.

    Each call blocks until a count is found or the retry policy is exhausted.
    Failures never raise; they are reported as None.
    """

    def __init__(
        self,
        token: str,
        language: str = "php",
        policy: RetryPolicy = RetryPolicy(),
        sleep: Callable[[float], None] = time.sleep,
        opener: Callable = urllib.request.urlopen,
        timeout: float = 30,
    ):
        self.language = language
        self.policy = policy
        self.queries = 0
        self._headers = build_headers(token)
        self._sleep = sleep
        self._opener = opener
        self._timeout = timeout

    def query(self, term: str) -> Optional[int]:
        url = code_search_url(term, self.language)
        for attempt in range(1, self.policy.attempts + 1):
            count, rate_limited = self._attempt(url)
            if count is None:
                if rate_limited:
                    logger.warning("Search for %s failed. Hit rate limit, waiting (attempt %d).", term, attempt)
                    self._sleep(self.policy.cooldown_for(rate_limited))
                else:
                    logger.warning("Search for %s failed (attempt %d).", term, attempt)
            self._sleep(self.policy.delay)
            if count is not None:
                return count
        return None

    def _attempt(self, url: str) -> tuple[Optional[int], bool]:
        """One request. Returns (count or None, rate limit exhausted)."""
        self.queries += 1
        try:
            payload, headers = make_request(url, self._headers, self._opener, self._timeout)
        except urllib.error.HTTPError as exc:
            logger.debug("HTTP %s from code search: %s", exc.code, exc.reason)
            return None, rate_limit_exhausted(exc.headers)
        except (urllib.error.URLError, socket.timeout, OSError, http.client.HTTPException, ValueError) as exc:
            # ValueError covers undecodable and non-JSON bodies
            logger.debug("Code search request failed: %s", exc)
            return None, False

        count = payload.get("total_count") if isinstance(payload, dict) else None
        if isinstance(count, bool) or not isinstance(count, int) or count < 0:
            return None, rate_limit_exhausted(headers)
        return count, False


__all__ = ["RetryPolicy", "FrequencyOracle", "GitHubCodeSearch"]
