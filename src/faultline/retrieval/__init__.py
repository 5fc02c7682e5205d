"""Secondary, declarative payload retrieval."""

from .retrieval_combinator import (
    NO_MATCH,
    Attempt,
    MatchResult,
    RetrievalCombinator,
    attempt,
    retrieve,
    unwrap,
)

__all__ = [
    "NO_MATCH",
    "Attempt",
    "MatchResult",
    "RetrievalCombinator",
    "attempt",
    "retrieve",
    "unwrap",
]
