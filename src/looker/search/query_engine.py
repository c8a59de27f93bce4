"""Cosine-similarity ranking over an :class:`IndexStore`."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from itertools import islice
import logging
from types import MappingProxyType

from looker.search.analyzers import normalize
from looker.search.index_store import IndexStore
from looker.search.models import Document, SearchResult, Term
from looker.search.stats import l2_norm, safe_norm


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryVector:
    """Immutable snapshot of a normalized query and its tf-idf weights."""

    tokens: tuple[Term, ...]
    weights: Mapping[Term, float]
    norm: float
    raw_text: str

    @classmethod
    def empty(cls, raw_text: str = "") -> QueryVector:
        return cls((), MappingProxyType({}), 0.0, raw_text)

    def is_empty(self) -> bool:
        return not self.tokens


class QueryEngine:
    """Turn raw query strings into ranked documents for one index.

    Candidate retrieval uses OR semantics: a document needs a single query
    term to qualify. Scores are ``q . d / (|d| * |q|)`` and equal scores are
    ordered by document path.
    """

    def __init__(self, index: IndexStore) -> None:
        self.index = index

    def tokenize_query(self, raw_query: str) -> QueryVector:
        """Normalize ``raw_query`` and weight each occurrence by the term idf."""

        tokens = tuple(normalize(raw_query))
        if not tokens:
            return QueryVector.empty(raw_query)

        weights: dict[Term, float] = defaultdict(float)
        for token in tokens:
            weights[token] += 1.0 * self.index.idf_for(token)

        return QueryVector(
            tokens=tokens,
            weights=MappingProxyType(dict(weights)),
            norm=l2_norm(weights.values()),
            raw_text=raw_query,
        )

    def retrieve_candidates(self, query: QueryVector) -> set[Document]:
        """Return every document that contains at least one query term."""

        candidates: set[Document] = set()
        for term in query.weights:
            candidates.update(self.index.postings(term))
        return candidates

    def score(self, query: QueryVector, candidates: set[Document]) -> list[SearchResult]:
        """Return candidates ranked by normalized score, best first."""

        if query.is_empty() or not candidates:
            return []

        raw_scores: dict[Document, float] = defaultdict(float)
        for term, query_weight in query.weights.items():
            postings = self.index.postings(term)
            if not postings:
                continue
            idf = self.index.idf_for(term)
            for document, frequency in postings.items():
                if document in candidates:
                    raw_scores[document] += query_weight * frequency * idf

        query_norm = safe_norm(query.norm)
        ranked = [
            SearchResult(document=document, score=raw / (safe_norm(self.index.norm_for(document)) * query_norm))
            for document, raw in raw_scores.items()
        ]
        ranked.sort(key=lambda result: (-result.score, result.document.path))
        return ranked

    def resolve(self, raw_query: str) -> Iterator[SearchResult]:
        """Lazily yield ranked results for ``raw_query``.

        Nothing is computed until the iterator is first consumed. Queries that
        normalize to nothing, or match no document, yield nothing.
        """

        query = self.tokenize_query(raw_query)
        if query.is_empty():
            logger.debug("Query %r normalized to no terms", raw_query)
            return
        candidates = self.retrieve_candidates(query)
        logger.debug("Query %r matched %d candidates", raw_query, len(candidates))
        yield from self.score(query, candidates)


def search(raw_query: str, index: IndexStore, *, limit: int | None = None) -> list[SearchResult]:
    """Resolve ``raw_query`` against ``index`` and return at most ``limit`` results."""

    results = QueryEngine(index).resolve(raw_query)
    if limit is None:
        return list(results)
    if limit <= 0:
        return []
    return list(islice(results, limit))
