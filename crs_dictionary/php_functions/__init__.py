"""Classification of PHP function names into the 933150/933151/933161 word lists."""

from .cache import FrequencyRecord, FrequencyStore
from .oracle import FrequencyOracle, GitHubCodeSearch, RetryPolicy
from .pipeline import ClassificationPipeline, ClassificationResult
from .writer import ArtifactWriter

__all__ = [
    "FrequencyRecord",
    "FrequencyStore",
    "FrequencyOracle",
    "GitHubCodeSearch",
    "RetryPolicy",
    "ClassificationPipeline",
    "ClassificationResult",
    "ArtifactWriter",
]
