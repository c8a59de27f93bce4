"""Unit tests for the directory indexer."""

import logging
import os

import pytest

from looker.search.index_store import IndexStore
from looker.search.indexer import DirectoryIndexer, IndexingContext, build_index
from looker.search.models import Document


@pytest.fixture
def corpus(tmp_path, write_file):
    root = tmp_path / "corpus"
    write_file(root / "fruit.txt", "apple apple banana")
    write_file(root / "notes" / "more.md", "---\ntitle: hidden\n---\napple pear")
    write_file(root / "notes" / "deep" / "plum.txt", "plum")
    write_file(root / "image.png", b"\x89PNG")
    write_file(root / "broken.txt", b"\xff\xfe\xfa")
    write_file(root / ".git" / "HEAD.txt", "ref: refs/heads/main")
    return root


def test_indexes_supported_files_recursively(corpus):
    result = build_index(corpus)

    assert result.documents_indexed == 3
    assert {document.as_path().name for document in result.index.documents} == {
        "fruit.txt",
        "more.md",
        "plum.txt",
    }
    assert result.index.num_docs == 3
    assert result.index.is_finalized


def test_bad_files_are_skipped_and_recorded(corpus, caplog):
    with caplog.at_level(logging.WARNING, logger="looker.search.indexer"):
        result = build_index(corpus)

    assert result.documents_skipped == 2
    assert len(result.errors) == 2
    assert any("png" in error for error in result.errors)
    assert any("UTF-8" in error for error in result.errors)
    assert sum("Skipping" in record.getMessage() for record in caplog.records) == 2


def test_version_control_directories_are_skipped(corpus):
    result = build_index(corpus)

    assert result.index.postings("ref") == {}


def test_markdown_front_matter_values_are_indexed(corpus):
    result = build_index(corpus)

    more = Document.from_path(corpus / "notes" / "more.md")
    assert result.index.postings("hidden") == {more: 1}
    assert result.index.postings("pear") == {more: 1}
    assert result.index.postings("title") == {}


def test_idf_reflects_indexed_documents_only(corpus):
    result = build_index(corpus)

    assert result.index.idf["apple"] == 3 / 2
    assert result.index.idf["plum"] == 3 / 1


def test_recompute_norms_option(corpus):
    plain = build_index(corpus)
    refreshed = build_index(corpus, recompute_norms=True)

    fruit = Document.from_path(corpus / "fruit.txt")
    assert plain.index.norm_for(fruit) == pytest.approx(5**0.5)
    assert refreshed.index.norm_for(fruit) == pytest.approx(((2 * 1.5) ** 2 + 3.0**2) ** 0.5)


def test_ingests_into_existing_store(corpus):
    store = IndexStore()
    store.ingest(Document("manual"), "apple")

    result = DirectoryIndexer(IndexingContext(corpus_root=corpus)).build(store)

    assert result.index is store
    assert store.num_docs == 4
    assert store.idf["apple"] == 4 / 3


def test_missing_root_raises(tmp_path):
    with pytest.raises(NotADirectoryError):
        build_index(tmp_path / "nope")


def test_file_root_raises(tmp_path, write_file):
    path = write_file(tmp_path / "a.txt", "apple")

    with pytest.raises(NotADirectoryError):
        build_index(path)


@pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="named pipes are not supported on this platform")
def test_non_regular_files_are_ignored(corpus):
    os.mkfifo(corpus / "pipe.txt")

    result = build_index(corpus)

    assert result.documents_indexed == 3
    assert result.documents_skipped == 2
    assert Document.from_path(corpus / "pipe.txt") not in result.index.documents


def test_relative_root_yields_absolute_document_paths(corpus, monkeypatch):
    monkeypatch.chdir(corpus)

    result = build_index(".")

    assert {document.path for document in result.index.documents} == {
        str(corpus / "fruit.txt"),
        str(corpus / "notes" / "more.md"),
        str(corpus / "notes" / "deep" / "plum.txt"),
    }
