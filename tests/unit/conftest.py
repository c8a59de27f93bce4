"""Fixtures for unit tests; every test collected here is marked ``unit``."""

from __future__ import annotations

import pytest

from looker.search.index_store import IndexStore
from looker.search.models import Document


SAMPLE_CORPUS = {
    "doc1": "apple apple banana",
    "doc2": "apple apple apple banana banana",
    "doc3": "banana",
}


def pytest_collection_modifyitems(config, items):
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def sample_index() -> IndexStore:
    """Three-document fruit corpus, ingested in order and finalized."""

    index = IndexStore()
    for name, text in SAMPLE_CORPUS.items():
        index.ingest(Document(name), text)
    index.finalize_idf()
    return index
