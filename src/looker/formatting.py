"""Terminal rendering of ranked search results.

Rows look like::

    Search results
    ----------------
    Doc: file:///home/me/notes/todo.txt [0.50]

Paths become clickable ``file://`` links; each path component is
percent-encoded so spaces, ``#`` and ``?`` do not break the link.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
import os
from urllib.parse import quote

import orjson
from rich.console import Console
from rich.text import Text

from looker.search.models import SearchResult


DEFAULT_LIMIT = 10
HEADER = "Search results"
RULE = "-" * 16
EMPTY_MESSAGE = "No results."
PATH_STYLE = "bold blue"

# Printable ASCII except space, '#' and '?'; controls and non-ASCII are always encoded
_SAFE_CHARS = "".join(chr(code) for code in range(0x21, 0x7F) if chr(code) not in "#?/")


def encode_path(path: str) -> str:
    """Percent-encode each ``/``-separated component of ``path``."""

    return "/".join(quote(component, safe=_SAFE_CHARS) for component in path.split("/"))


def file_uri(path: str) -> str:
    """Build a ``file://`` link; relative paths are resolved against the working directory."""

    return f"file://{encode_path(os.path.abspath(path))}"


def _take(results: Iterable[SearchResult], limit: int) -> list[SearchResult]:
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")
    taken: list[SearchResult] = []
    for result in results:
        if len(taken) >= limit:
            break
        taken.append(result)
    return taken


def render_results(
    results: Iterable[SearchResult],
    *,
    limit: int = DEFAULT_LIMIT,
    color: bool = True,
) -> Text:
    """Build the result listing as a rich ``Text``; at most ``limit`` rows."""

    rows = _take(results, limit)
    if not rows:
        return Text(EMPTY_MESSAGE)

    text = Text()
    text.append(f"{HEADER}\n{RULE}\n")
    for result in rows:
        text.append("Doc: ")
        text.append(file_uri(result.path), style=PATH_STYLE if color else None)
        text.append(f" [{result.score:.2f}]\n")
    text.rstrip()
    return text


def format_results(results: Iterable[SearchResult], *, limit: int = DEFAULT_LIMIT) -> str:
    """Plain-text form of :func:`render_results`."""

    return render_results(results, limit=limit, color=False).plain


def json_lines(results: Iterable[SearchResult], *, limit: int = DEFAULT_LIMIT) -> list[str]:
    """One JSON object per result, in rank order."""

    return [orjson.dumps(result.to_dict()).decode("utf-8") for result in _take(results, limit)]


def print_results(
    results: Sequence[SearchResult],
    console: Console,
    *,
    limit: int = DEFAULT_LIMIT,
    color: bool = True,
    json_output: bool = False,
) -> None:
    """Write the results to ``console`` in the requested format."""

    if json_output:
        for line in json_lines(results, limit=limit):
            console.out(line, highlight=False)
        return
    console.print(render_results(results, limit=limit, color=color), soft_wrap=True, highlight=False)
