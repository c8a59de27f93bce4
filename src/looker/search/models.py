"""Search data models."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path


Term = str


@dataclass(frozen=True, order=True, slots=True)
class Document:
    """A document identified by its filesystem path.

    No content is kept; equality, hashing and ordering all go through ``path``.
    """

    path: str

    @classmethod
    def from_path(cls, path: str | os.PathLike[str]) -> Document:
        """Create a document from a filesystem path, normalizing separators."""
        return cls(path=os.path.normpath(os.fspath(path)))

    def as_path(self) -> Path:
        return Path(self.path)

    def __str__(self) -> str:
        return self.path


@dataclass(frozen=True, slots=True)
class SearchResult:
    """A ranked document with its cosine-similarity score."""

    document: Document
    score: float

    @property
    def path(self) -> str:
        return self.document.path

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for serialization."""
        return {"path": self.document.path, "score": self.score}
