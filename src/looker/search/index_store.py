"""In-memory inverted index with the term statistics used for ranking.

``IndexStore`` owns four tables:

* ``inverted_index`` - term -> {document: raw term frequency}
* ``idf`` - term -> corpus weight, filled by :meth:`IndexStore.finalize_idf`
* ``document_norms`` - document -> magnitude of its tf-idf vector
* ``num_docs`` - number of :meth:`IndexStore.ingest` calls

The inverted index, norms and document count change only while ingesting;
the idf table changes only while finalizing. Ingestion is single-threaded
and the store is read-only once queries start.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Mapping
import logging

from looker.search.analyzers import normalize
from looker.search.models import Document, Term
from looker.search.stats import calculate_idf, lookup_idf, tfidf_norm


logger = logging.getLogger(__name__)


class IndexStore:
    """Accumulates term/document frequencies and derives idf and norms."""

    def __init__(
        self,
        *,
        inverted_index: Mapping[Term, Mapping[Document, int]] | None = None,
        idf: Mapping[Term, float] | None = None,
        document_norms: Mapping[Document, float] | None = None,
        num_docs: int = 0,
    ) -> None:
        self.inverted_index: dict[Term, dict[Document, int]] = {
            term: dict(postings) for term, postings in (inverted_index or {}).items()
        }
        self.idf: dict[Term, float] = dict(idf or {})
        self.document_norms: dict[Document, float] = dict(document_norms or {})
        self.num_docs = num_docs
        # document -> terms recorded for it, so norms never scan the whole index
        self._document_terms: defaultdict[Document, set[Term]] = defaultdict(set)
        for term, postings in self.inverted_index.items():
            for document in postings:
                self._document_terms[document].add(term)

    def ingest(self, document: Document, raw_text: str) -> None:
        """Normalize ``raw_text`` and record its terms against ``document``.

        Re-ingesting a document accumulates on top of its earlier counts.
        """

        tokens = normalize(raw_text)
        self.num_docs += 1

        for token in tokens:
            self._insert_token(token, document)

        self._update_document_norm(document)
        logger.debug("Ingested %s (%d tokens)", document.path, len(tokens))

    def finalize_idf(self) -> None:
        """Set every term's weight to ``num_docs / document frequency``."""

        for term, postings in self.inverted_index.items():
            self.idf[term] = calculate_idf(len(postings), self.num_docs)
        logger.info("Finalized idf for %d terms across %d documents", len(self.idf), self.num_docs)

    def recompute_norms(self) -> None:
        """Recompute every stored norm against the current idf table.

        Norms computed during ingestion use whatever idf existed at that
        moment; running this after :meth:`finalize_idf` makes query scores
        true cosine similarities.
        """

        for document in list(self.document_norms):
            self._update_document_norm(document)
        logger.info("Recomputed norms for %d documents", len(self.document_norms))

    # --- read helpers -----------------------------------------------------

    def postings(self, term: Term) -> Mapping[Document, int]:
        """Return the document -> frequency map for ``term`` (empty if unseen)."""
        return self.inverted_index.get(term, {})

    def document_frequency(self, term: Term) -> int:
        return len(self.inverted_index.get(term, {}))

    def idf_for(self, term: Term) -> float:
        return lookup_idf(self.idf, term)

    def norm_for(self, document: Document) -> float | None:
        return self.document_norms.get(document)

    def term_frequencies(self, document: Document) -> dict[Term, int]:
        """Return every term recorded for ``document`` with its frequency."""
        return {term: self.inverted_index[term][document] for term in self._document_terms.get(document, ())}

    @property
    def documents(self) -> frozenset[Document]:
        return frozenset(self.document_norms) | frozenset(self._document_terms)

    @property
    def vocabulary_size(self) -> int:
        return len(self.inverted_index)

    @property
    def is_finalized(self) -> bool:
        return all(term in self.idf for term in self.inverted_index)

    # --- internal helpers -------------------------------------------------

    def _insert_token(self, token: Term, document: Document) -> None:
        postings = self.inverted_index.setdefault(token, {})
        postings[document] = postings.get(document, 0) + 1
        self._document_terms[document].add(token)

    def _update_document_norm(self, document: Document) -> None:
        self.document_norms[document] = tfidf_norm(self.term_frequencies(document), self.idf)

    def __repr__(self) -> str:
        return (
            f"IndexStore(num_docs={self.num_docs}, terms={len(self.inverted_index)}, "
            f"documents={len(self.documents)}, finalized={self.is_finalized})"
        )
