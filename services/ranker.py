from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Sequence, TypeVar

from rapidfuzz import fuzz, utils

T = TypeVar("T")

Scorer = Callable[[str, str], float]
NameKey = Callable[[Any], str]

DEFAULT_THRESHOLD = 70.0


def default_name(candidate: Any) -> str:
    """Mappings use their "name" key, objects their `name` attribute."""
    if isinstance(candidate, dict):
        return candidate.get("name") or ""
    return getattr(candidate, "name", None) or ""


def ratio(a: str, b: str) -> float:
    """Whole-number similarity 0..100 after dropping punctuation and case."""
    return round(fuzz.ratio(a, b, processor=utils.default_process))


@dataclass(frozen=True)
class ScoredCandidate(Generic[T]):
    candidate: T
    score: float


@dataclass
class Page(Generic[T]):
    data: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 0


def score_candidates(
    query: str,
    candidates: Sequence[T],
    *,
    scorer: Scorer = ratio,
    key: NameKey = default_name,
) -> List[ScoredCandidate[T]]:
    q = (query or "").lower()
    return [ScoredCandidate(c, scorer(q, (key(c) or "").lower())) for c in candidates]


def rank(
    query: str,
    candidates: Sequence[T],
    threshold: float = DEFAULT_THRESHOLD,
    page: int = 1,
    page_size: int = 10,
    *,
    scorer: Scorer = ratio,
    key: NameKey = default_name,
) -> Page[T]:
    """
    Fuzzy-filter `candidates` by name against `query` and return one page.

    Matching is case-insensitive. Candidates scoring at or below `threshold`
    are dropped, survivors are ordered by descending score (ties keep their
    input order) and sliced with offset pagination. `total` counts the
    survivors, not the input.

    A `page` below 1 is read as 1; a non-positive `page_size` returns every
    survivor on a single page.
    """
    scored = score_candidates(query, candidates, scorer=scorer, key=key)
    survivors = [s for s in scored if s.score > threshold]
    # sorted() is stable, so equal scores stay in input order
    survivors = sorted(survivors, key=lambda s: s.score, reverse=True)

    page = max(1, page)
    if page_size <= 0:
        window = survivors
    else:
        offset = (page - 1) * page_size
        window = survivors[offset:offset + page_size]

    return Page(
        data=[s.candidate for s in window],
        total=len(survivors),
        page=page,
        limit=page_size,
    )


class SearchRanker:
    """`rank` with a bound scorer, name key and default threshold."""

    def __init__(
        self,
        threshold: float = DEFAULT_THRESHOLD,
        scorer: Scorer = ratio,
        key: NameKey = default_name,
    ):
        self.threshold = threshold
        self.scorer = scorer
        self.key = key

    def rank(
        self,
        query: str,
        candidates: Sequence[T],
        page: int = 1,
        page_size: int = 10,
        threshold: float | None = None,
    ) -> Page[T]:
        return rank(
            query,
            candidates,
            self.threshold if threshold is None else threshold,
            page,
            page_size,
            scorer=self.scorer,
            key=self.key,
        )
