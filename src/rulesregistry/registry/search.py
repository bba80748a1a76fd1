"""Case-insensitive substring search over record titles and tags."""

from dataclasses import dataclass
from typing import Iterable

from rulesregistry.core import ContentRecord

# Match ranks, best first
EXACT_TITLE = 0
TITLE_PREFIX = 1
EXACT_TAG = 2
SUBSTRING = 3


@dataclass(frozen=True)
class _Entry:
    position: int
    record: ContentRecord
    title_key: str
    tag_keys: tuple[str, ...]


def normalize(text: str) -> str:
    """Fold text for case-insensitive comparison."""
    return text.strip().casefold()


def match_rank(title_key: str, tag_keys: Iterable[str], needle: str) -> int | None:
    """Rank how well a folded title/tags pair matches a folded query.

    Args:
        title_key: Folded record title
        tag_keys: Folded record tags
        needle: Folded, non-empty query

    Returns:
        One of EXACT_TITLE, TITLE_PREFIX, EXACT_TAG, SUBSTRING, or None if
        the query does not occur in the title or any tag
    """
    if title_key == needle:
        return EXACT_TITLE
    if title_key.startswith(needle):
        return TITLE_PREFIX
    tag_keys = tuple(tag_keys)
    if needle in tag_keys:
        return EXACT_TAG
    if needle in title_key or any(needle in tag for tag in tag_keys):
        return SUBSTRING
    return None


class SearchIndex:
    """Precomputed folded titles and tags for ranked substring search.

    Results are ordered by match rank, then by the record's original
    insertion position, so the same query always yields the same sequence.
    """

    def __init__(self, records: Iterable[ContentRecord]):
        self._entries = tuple(
            _Entry(
                position=i,
                record=record,
                title_key=normalize(record.title),
                tag_keys=tuple(normalize(tag) for tag in record.tags),
            )
            for i, record in enumerate(records)
        )

    def search(self, query: str) -> tuple[ContentRecord, ...]:
        """Return records matching the query, best matches first.

        A blank query matches nothing.
        """
        needle = normalize(query)
        if not needle:
            return ()

        ranked = []
        for entry in self._entries:
            rank = match_rank(entry.title_key, entry.tag_keys, needle)
            if rank is not None:
                ranked.append((rank, entry.position, entry.record))

        ranked.sort(key=lambda item: (item[0], item[1]))
        return tuple(record for _, _, record in ranked)
