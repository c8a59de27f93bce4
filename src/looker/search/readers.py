"""Content readers that turn supported files into indexable text.

Each reader advertises the file extensions it understands and returns the
file's text. The indexer picks a reader by extension; anything without a
matching reader is reported as unsupported and skipped by the caller.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import Any, Protocol

from looker.utils.front_matter import parse_front_matter


class UnsupportedContentError(ValueError):
    """Raised when no reader handles a file's extension."""


class ContentReadError(OSError):
    """Raised when a supported file cannot be read or decoded."""


class ContentReader(Protocol):
    """Protocol implemented by content readers."""

    def can_handle(self, extension: str) -> bool:  # pragma: no cover - interface definition
        ...

    def read(self, path: Path) -> str:  # pragma: no cover - interface definition
        ...


def _read_utf8(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ContentReadError(f"{path} is not valid UTF-8: {exc.reason}") from exc
    except OSError as exc:
        raise ContentReadError(f"Cannot read {path}: {exc.strerror or exc}") from exc


class PlainTextReader:
    """Reads ``.txt`` files verbatim."""

    extensions = frozenset({"txt"})

    def can_handle(self, extension: str) -> bool:
        return extension.lower() in self.extensions

    def read(self, path: Path) -> str:
        return _read_utf8(path)


class MarkdownReader:
    """Reads Markdown files, flattening YAML front matter into plain text.

    Metadata values (titles, tags, ...) stay searchable; the YAML keys and
    fences do not reach the index.
    """

    extensions = frozenset({"md", "markdown"})

    def can_handle(self, extension: str) -> bool:
        return extension.lower() in self.extensions

    def read(self, path: Path) -> str:
        metadata, body = parse_front_matter(_read_utf8(path))
        values = list(_metadata_values(metadata))
        if not values:
            return body
        return "\n".join([*values, body])


def _metadata_values(value: Any) -> Iterator[str]:
    if isinstance(value, dict):
        for item in value.values():
            yield from _metadata_values(item)
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            yield from _metadata_values(item)
    elif value is not None:
        yield str(value)


DEFAULT_READERS: tuple[ContentReader, ...] = (PlainTextReader(), MarkdownReader())


def file_extension(path: Path) -> str:
    """Return the extension of ``path`` without the dot, or raise if it has none."""

    suffix = path.suffix
    if not suffix or suffix == ".":
        raise UnsupportedContentError(f"File has no extension: {path}")
    return suffix[1:]


def reader_for(path: Path, readers: Sequence[ContentReader] = DEFAULT_READERS) -> ContentReader:
    """Return the first reader able to handle ``path``."""

    extension = file_extension(path)
    for reader in readers:
        if reader.can_handle(extension):
            return reader
    raise UnsupportedContentError(f"File extension {extension} is not supported: {path}")


def read_contents(path: Path, readers: Sequence[ContentReader] = DEFAULT_READERS) -> str:
    """Read ``path`` with the matching reader."""

    return reader_for(path, readers).read(path)
