"""JSON persistence for :class:`IndexStore`.

JSON objects only accept string keys, so every table keyed by a term or a
document is written as an explicit association list and rebuilt on load:

* ``inverted_index`` - ``[[term, [[document, frequency], ...]], ...]``
* ``idf`` - ``[[term, weight], ...]``
* ``document_norms`` - ``[[document, norm], ...]``
* ``num_docs`` - integer ingestion count

Documents are written as their path string. Entries are sorted so equal
indexes produce byte-identical files. Loading validates the payload with
pydantic and fails fast on missing or mistyped fields.
"""

from __future__ import annotations

from contextlib import suppress
import logging
from pathlib import Path
from typing import Annotated, Any

import orjson
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from looker.search.index_store import IndexStore
from looker.search.models import Document


logger = logging.getLogger(__name__)

TermText = Annotated[str, Field(strict=True)]
DocumentPath = Annotated[str, Field(strict=True)]
Frequency = Annotated[int, Field(strict=True, ge=1)]
Weight = Annotated[float, Field(strict=True, ge=0.0)]


class StorageError(ValueError):
    """Raised when an index cannot be written or read."""


class IndexFormatError(StorageError):
    """Raised when a persisted index is malformed."""


class IndexPayload(BaseModel):
    """Validated shape of a persisted index file."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    inverted_index: list[tuple[TermText, list[tuple[DocumentPath, Frequency]]]]
    idf: list[tuple[TermText, Weight]]
    document_norms: list[tuple[DocumentPath, Weight]]
    num_docs: Annotated[int, Field(strict=True, ge=0)]


def encode_index(index: IndexStore) -> dict[str, Any]:
    """Convert ``index`` into its association-list payload."""

    return {
        "inverted_index": [
            [term, [[document.path, frequency] for document, frequency in sorted(postings.items())]]
            for term, postings in sorted(index.inverted_index.items())
        ],
        "idf": [[term, weight] for term, weight in sorted(index.idf.items())],
        "document_norms": [[document.path, norm] for document, norm in sorted(index.document_norms.items())],
        "num_docs": index.num_docs,
    }


def decode_index(data: Any) -> IndexStore:
    """Validate ``data`` and rebuild the keyed tables of an :class:`IndexStore`."""

    try:
        payload = IndexPayload.model_validate(data)
    except ValidationError as exc:
        raise IndexFormatError(f"Invalid index payload: {exc}") from exc

    inverted_index = {
        term: {Document(path): frequency for path, frequency in postings} for term, postings in payload.inverted_index
    }
    return IndexStore(
        inverted_index=inverted_index,
        idf=dict(payload.idf),
        document_norms={Document(path): norm for path, norm in payload.document_norms},
        num_docs=payload.num_docs,
    )


def save_index(index: IndexStore, destination: str | Path) -> Path:
    """Write ``index`` to ``destination`` atomically and return the path.

    The data is written to a sibling temp file first and renamed into place,
    so a failed write never leaves a partial index behind.
    """

    path = Path(destination)
    tmp_path = path.with_name(path.name + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_bytes(orjson.dumps(encode_index(index)))
        tmp_path.replace(path)
    except OSError as exc:
        with suppress(OSError):
            tmp_path.unlink(missing_ok=True)
        raise StorageError(f"Failed to write index to {path}: {exc}") from exc

    logger.info("Saved index with %d terms to %s", index.vocabulary_size, path)
    return path


def load_index(source: str | Path) -> IndexStore:
    """Read and validate an index previously written by :func:`save_index`."""

    path = Path(source)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise StorageError(f"Failed to read index from {path}: {exc}") from exc

    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as exc:
        raise IndexFormatError(f"Index file {path} is not valid JSON: {exc}") from exc

    index = decode_index(data)
    logger.info("Loaded index with %d terms from %s", index.vocabulary_size, path)
    return index
