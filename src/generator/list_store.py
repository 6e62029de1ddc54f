"""Session storage for the lists being combined."""

from typing import Iterator, List, Optional, Tuple

from src.generator.errors import ListIndexOutOfRange
from src.models.generator import ListEntry


def parse_items(raw_text: str) -> List[str]:
    """
    Split raw textarea text into items.

    Lines are trimmed and empty lines dropped. Duplicates are kept.

    Args:
        raw_text: Newline-separated items

    Returns:
        Items in input order
    """
    return [line.strip() for line in raw_text.split("\n") if line.strip()]


class ListStore:
    """Ordered lists of items. List order defines axis order of the product."""

    def __init__(self, lists: Optional[List[ListEntry]] = None):
        self._lists: List[ListEntry] = list(lists or [])

    def add_list(self, raw_text: str, title: Optional[str] = None) -> ListEntry:
        """Parse raw text into a new list. Empty lists are stored too."""
        entry = ListEntry(title=title or None, items=parse_items(raw_text))
        self._lists.append(entry)
        return entry

    def add_items(self, items: List[str], title: Optional[str] = None) -> ListEntry:
        entry = ListEntry(title=title or None, items=items)
        self._lists.append(entry)
        return entry

    def remove_list(self, index: int) -> ListEntry:
        if index < 0 or index >= len(self._lists):
            raise ListIndexOutOfRange(index, len(self._lists))
        return self._lists.pop(index)

    def clear(self) -> None:
        self._lists = []

    @property
    def lists(self) -> List[ListEntry]:
        """Snapshot of the stored lists."""
        return [entry.model_copy(deep=True) for entry in self._lists]

    def entries(self) -> Tuple[ListEntry, ...]:
        """Stored lists without copying; callers must not mutate them."""
        return tuple(self._lists)

    def __len__(self) -> int:
        return len(self._lists)

    def __iter__(self) -> Iterator[ListEntry]:
        return iter(self.lists)
