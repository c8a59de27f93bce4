"""Unit tests for content readers."""

from pathlib import Path

import pytest

from looker.search.analyzers import normalize
from looker.search.readers import (
    ContentReadError,
    MarkdownReader,
    PlainTextReader,
    UnsupportedContentError,
    file_extension,
    read_contents,
    reader_for,
)


@pytest.mark.parametrize(
    ("name", "reader_type"),
    [("notes.txt", PlainTextReader), ("README.md", MarkdownReader), ("guide.MARKDOWN", MarkdownReader)],
)
def test_reader_selected_by_extension(name, reader_type):
    assert isinstance(reader_for(Path(name)), reader_type)


def test_file_without_extension_is_unsupported():
    with pytest.raises(UnsupportedContentError, match="no extension"):
        file_extension(Path("Makefile"))


def test_unknown_extension_is_unsupported():
    with pytest.raises(UnsupportedContentError, match="pdf"):
        reader_for(Path("paper.pdf"))


def test_plain_text_is_read_verbatim(tmp_path, write_file):
    path = write_file(tmp_path / "a.txt", "---\nnot: front matter\n---\nbody")

    assert read_contents(path) == "---\nnot: front matter\n---\nbody"


def test_markdown_front_matter_values_are_kept(tmp_path, write_file):
    path = write_file(
        tmp_path / "a.md",
        "---\ntitle: Kubernetes migration\ntags: [ops, cluster]\ndraft: null\n---\n# Heading\nbody text",
    )

    assert read_contents(path) == "Kubernetes migration\nops\ncluster\n# Heading\nbody text"


def test_markdown_front_matter_values_are_searchable(tmp_path, write_file):
    path = write_file(tmp_path / "a.md", "---\ntitle: Kubernetes migration\n---\nbody text")

    assert normalize(read_contents(path)) == ["kubernetes", "migration", "body", "text"]


def test_markdown_without_front_matter_is_read_verbatim(tmp_path, write_file):
    path = write_file(tmp_path / "a.md", "# Heading\n\nbody text")

    assert read_contents(path) == "# Heading\n\nbody text"


def test_invalid_utf8_raises_read_error(tmp_path, write_file):
    path = write_file(tmp_path / "bad.txt", b"caf\xe9")

    with pytest.raises(ContentReadError, match="UTF-8"):
        read_contents(path)


def test_missing_file_raises_read_error(tmp_path):
    with pytest.raises(ContentReadError, match="Cannot read"):
        read_contents(tmp_path / "gone.txt")


def test_custom_reader_list_limits_supported_types(tmp_path, write_file):
    path = write_file(tmp_path / "a.md", "text")

    with pytest.raises(UnsupportedContentError):
        read_contents(path, readers=[PlainTextReader()])
