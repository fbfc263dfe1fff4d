"""Leaf page of a B+ tree: sorted unique keys paired with row ids."""

from bisect import bisect_left
from functools import cmp_to_key

from minidb.btree_page import UNDEFINED_SIZE, BPlusTreePage, IndexPageType
from minidb.page import INVALID_PAGE_ID


class DuplicateKeyError(KeyError):
    """Raised when inserting a key that the leaf already holds."""


class LeafPage(BPlusTreePage):
    """Ordered (key, row id) pairs plus a link to the next leaf.

    ``compare`` arguments are three-way comparison functions returning a
    negative number, zero, or a positive number.
    """

    def __init__(self, page_id, parent_id=INVALID_PAGE_ID, key_size=UNDEFINED_SIZE, max_size=UNDEFINED_SIZE):
        self._items = []
        super().__init__(IndexPageType.LEAF_PAGE, page_id, parent_id, key_size, max_size)
        self.next_page_id = INVALID_PAGE_ID

    @property
    def size(self):
        """Number of stored pairs."""
        return len(self._items)

    @size.setter
    def size(self, value):
        if not 0 <= value <= len(self._items):
            raise ValueError(f"cannot set leaf size to {value} with {len(self._items)} pairs stored")
        del self._items[value:]

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def key_at(self, index):
        """Key stored at ``index``."""
        return self._items[index][0]

    def value_at(self, index):
        """Row id stored at ``index``."""
        return self._items[index][1]

    def get_item(self, index):
        """The (key, row id) pair at ``index``."""
        return self._items[index]

    def key_index(self, key, compare):
        """First index whose key is not less than ``key``; the size if there is none."""
        return self._search(key, compare)[0]

    def insert(self, key, value, compare):
        """Insert a pair in key order and return the new size."""
        index, found = self._search(key, compare)
        if found:
            raise DuplicateKeyError(key)
        self._items.insert(index, (key, value))
        return len(self._items)

    def lookup(self, key, compare):
        """Row id stored under ``key``, or None if absent."""
        index, found = self._search(key, compare)
        return self._items[index][1] if found else None

    def remove_and_delete_record(self, key, compare):
        """Remove the pair for ``key`` if present and return the resulting size."""
        index, found = self._search(key, compare)
        if found:
            del self._items[index]
        return len(self._items)

    def move_half_to(self, recipient):
        """Move the upper half of the pairs to the end of ``recipient``."""
        start = len(self._items) - len(self._items) // 2
        recipient._items.extend(self._items[start:])
        del self._items[start:]

    def move_all_to(self, recipient):
        """Append every pair to ``recipient`` and hand it this page's next link."""
        recipient._items.extend(self._items)
        recipient.next_page_id = self.next_page_id
        self._items.clear()

    def move_first_to_end_of(self, recipient):
        """Move the first pair to the end of ``recipient``."""
        recipient._items.append(self._items.pop(0))

    def move_last_to_front_of(self, recipient):
        """Move the last pair to the front of ``recipient``."""
        recipient._items.insert(0, self._items.pop())

    def _search(self, key, compare):
        wrap = cmp_to_key(compare)
        index = bisect_left(self._items, wrap(key), key=lambda item: wrap(item[0]))
        found = index < len(self._items) and compare(self._items[index][0], key) == 0
        return index, found