"""Filesystem-backed indexing for a local document collection.

The indexer walks a corpus root, reads every supported file and feeds its
text into an :class:`IndexStore`. A file that cannot be read, or whose type
has no reader, is logged and skipped so one bad file never aborts the run.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
import logging
import os
from pathlib import Path

from looker.search.index_store import IndexStore
from looker.search.models import Document
from looker.search.readers import (
    DEFAULT_READERS,
    ContentReader,
    ContentReadError,
    UnsupportedContentError,
    read_contents,
)


logger = logging.getLogger(__name__)

_SKIP_DIRS = {
    ".git",
    ".hg",
    ".svn",
    "__pycache__",
}


@dataclass(frozen=True)
class IndexingContext:
    """Immutable context describing how to index one corpus."""

    corpus_root: Path
    readers: tuple[ContentReader, ...] = field(default_factory=lambda: DEFAULT_READERS)
    recompute_norms: bool = False


@dataclass(frozen=True)
class IndexBuildResult:
    """Outcome of an indexing run."""

    index: IndexStore
    documents_indexed: int
    documents_skipped: int
    errors: tuple[str, ...]


class DirectoryIndexer:
    """Coordinate traversal, content extraction and ingestion for one corpus."""

    def __init__(self, context: IndexingContext) -> None:
        self.context = context

    def build(self, index: IndexStore | None = None) -> IndexBuildResult:
        """Ingest every supported file under the corpus root and finalize idf.

        Args:
            index: Optional store to ingest into; a fresh one is created when omitted.
        """

        root = Path(os.path.abspath(self.context.corpus_root))
        if not root.is_dir():
            raise NotADirectoryError(f"Corpus root must be a directory: {root}")

        store = index if index is not None else IndexStore()
        documents_indexed = 0
        documents_skipped = 0
        errors: list[str] = []

        for path in self._discover_files(root):
            try:
                text = read_contents(path, self.context.readers)
            except (UnsupportedContentError, ContentReadError) as exc:
                logger.warning("Skipping %s: %s", path, exc)
                errors.append(str(exc))
                documents_skipped += 1
                continue

            store.ingest(Document.from_path(path), text)
            documents_indexed += 1

        store.finalize_idf()
        if self.context.recompute_norms:
            store.recompute_norms()

        logger.info(
            "Indexed %d documents from %s (%d skipped, %d terms)",
            documents_indexed,
            root,
            documents_skipped,
            store.vocabulary_size,
        )
        return IndexBuildResult(
            index=store,
            documents_indexed=documents_indexed,
            documents_skipped=documents_skipped,
            errors=tuple(errors),
        )

    # --- internal helpers -------------------------------------------------

    def _discover_files(self, root: Path) -> Iterator[Path]:
        def on_error(exc: OSError) -> None:
            logger.warning("Cannot list %s: %s", exc.filename, exc.strerror or exc)

        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
            dirnames[:] = sorted(name for name in dirnames if name not in _SKIP_DIRS)
            for filename in sorted(filenames):
                path = Path(dirpath) / filename
                # regular files only; FIFOs and devices block on read
                if not path.is_file():
                    logger.debug("Ignoring %s: not a regular file", path)
                    continue
                yield path


def build_index(
    corpus_root: str | Path,
    *,
    readers: Sequence[ContentReader] = DEFAULT_READERS,
    recompute_norms: bool = False,
) -> IndexBuildResult:
    """Index ``corpus_root`` into a new, finalized :class:`IndexStore`."""

    context = IndexingContext(
        corpus_root=Path(corpus_root),
        readers=tuple(readers),
        recompute_norms=recompute_norms,
    )
    return DirectoryIndexer(context).build()
