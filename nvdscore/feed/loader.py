"""Loading NVD JSON vulnerability feeds into dictionaries keyed by CVE ID."""

from __future__ import annotations

import gzip
import json
import zlib
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from typing import IO, Any, Optional

from nvdscore.feed.schema import CVEItem, Feed

_GZIP_MAGIC = b"\x1f\x8b"
_MAX_WORKERS = 8


class FeedLoadError(Exception):
    """Raised when a feed cannot be read or parsed.

    ``dictionary`` holds whatever was loaded from the feeds that did succeed.
    """

    def __init__(self, message: str, dictionary: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.dictionary: dict[str, Any] = dictionary if dictionary is not None else {}


def _decompress(raw: bytes) -> bytes:
    if len(raw) < 2:
        raise FeedLoadError("can't setup reader: unexpected end of input")
    if raw[:2] != _GZIP_MAGIC:
        return raw
    try:
        return gzip.decompress(raw)
    except (OSError, EOFError, zlib.error) as exc:
        raise FeedLoadError(f"can't setup reader: {exc}") from exc


def read_feed(stream: IO) -> Feed:
    """Read a whole feed, plain or gzip-compressed, from a binary stream."""
    raw = stream.read()
    if isinstance(raw, str):
        raw = raw.encode("utf-8")
    data = _decompress(raw)
    try:
        document = json.loads(data)
    except ValueError as exc:
        raise FeedLoadError(str(exc)) from exc
    try:
        return Feed.from_dict({} if document is None else document)
    except ValueError as exc:
        raise FeedLoadError(str(exc)) from exc


def parse_items(stream: IO) -> list[CVEItem]:
    """Return the feed's entries that carry a configuration."""
    try:
        feed = read_feed(stream)
    except FeedLoadError as exc:
        raise FeedLoadError(f"parse feed: {exc}") from exc
    return [item for item in feed.items if item.configurations is not None]


def load_feed(
    load: Callable[[str], Iterable[Any]], paths: Iterable[str]
) -> dict[str, Any]:
    """Call ``load`` on every path and merge the entries by their ``id()``.

    Entries without an identifier are left out. If any path fails, a
    FeedLoadError listing every failure is raised, carrying the rest.
    """
    paths = list(paths)

    def attempt(path: str) -> tuple[Optional[Iterable[Any]], Optional[str]]:
        try:
            return load(path), None
        except Exception as exc:  # any loader failure is reported per path
            return None, f'dictionary: failed to load feed "{path}": {exc}'

    workers = max(1, min(len(paths), _MAX_WORKERS))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(attempt, paths))

    dictionary: dict[str, Any] = {}
    errors: list[str] = []
    for entries, error in outcomes:
        if error is not None:
            errors.append(error)
            continue
        for entry in entries:
            entry_id = entry.id()
            if entry_id:
                dictionary[entry_id] = entry
    if errors:
        raise FeedLoadError("\n".join(errors), dictionary)
    return dictionary


def _load_json_file(path: str) -> list[CVEItem]:
    with open(path, "rb") as stream:
        return parse_items(stream)


def load_json_dictionary(*args: str) -> dict[str, CVEItem]:
    """Load NVD JSON feed files, given as paths, into one dictionary."""
    return load_feed(_load_json_file, args)