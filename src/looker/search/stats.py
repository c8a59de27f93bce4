"""Statistical helpers for tf-idf style scoring.

The functions here stay independent of the index container so they can be
shared by ingestion (document norms) and query resolution (query norms).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import math


DEFAULT_IDF = 1.0


def calculate_idf(doc_freq: int, total_docs: int) -> float:
    """Return the corpus weight of a term as the plain ratio ``N / df``.

    This is deliberately not the logarithmic textbook idf; persisted indexes
    and rankings depend on the ratio form.
    """

    if doc_freq <= 0:
        return DEFAULT_IDF
    return total_docs / doc_freq


def lookup_idf(idf: Mapping[str, float], term: str) -> float:
    """Return the idf weight of ``term`` or the default weight when unknown."""

    return idf.get(term, DEFAULT_IDF)


def l2_norm(weights: Iterable[float]) -> float:
    """Return the Euclidean magnitude of a weight vector."""

    return math.sqrt(sum(weight * weight for weight in weights))


def tfidf_norm(frequencies: Mapping[str, int], idf: Mapping[str, float]) -> float:
    """Return the magnitude of a document's tf-idf vector.

    ``frequencies`` maps each term recorded for the document to its raw count.
    """

    return l2_norm(frequency * lookup_idf(idf, term) for term, frequency in frequencies.items())


def safe_norm(value: float | None) -> float:
    """Treat missing or zero norms as 1.0 so scores never divide by zero."""

    if value is None or value == 0.0:
        return 1.0
    return value
