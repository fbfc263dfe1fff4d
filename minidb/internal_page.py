"""Internal page of a B+ tree: separator keys paired with child page ids."""

from bisect import bisect_right
from functools import cmp_to_key

from minidb.btree_page import UNDEFINED_SIZE, BPlusTreePage, IndexPageType
from minidb.page import INVALID_PAGE_ID


class InternalPage(BPlusTreePage):
    """Ordered (key, child page id) pairs; the key at index 0 is unused.

    The child at index ``i`` holds every key ``K`` with
    ``key_at(i) <= K < key_at(i + 1)``.

    ``compare`` arguments are three-way comparison functions returning a
    negative number, zero, or a positive number.

    ``pool`` arguments give access to the other tree pages. They need
    ``fetch_page(page_id)``, returning the page object or None,
    ``unpin_page(page_id, is_dirty)`` and ``delete_page(page_id)``.
    """

    def __init__(self, page_id, parent_id=INVALID_PAGE_ID, key_size=UNDEFINED_SIZE, max_size=UNDEFINED_SIZE):
        self._items = []
        super().__init__(IndexPageType.INTERNAL_PAGE, page_id, parent_id, key_size, max_size)

    @property
    def size(self):
        """Number of stored pairs, counting the one with the unused key."""
        return len(self._items)

    @size.setter
    def size(self, value):
        if not 0 <= value <= len(self._items):
            raise ValueError(f"cannot set internal page size to {value} with {len(self._items)} pairs stored")
        del self._items[value:]

    def __len__(self):
        return len(self._items)

    def __iter__(self):
        return iter([tuple(item) for item in self._items])

    def key_at(self, index):
        """Key stored at ``index``."""
        return self._items[index][0]

    def set_key_at(self, index, key):
        """Replace the key stored at ``index``."""
        self._items[index][0] = key

    def value_at(self, index):
        """Child page id stored at ``index``."""
        return self._items[index][1]

    def set_value_at(self, index, value):
        """Replace the child page id stored at ``index``."""
        self._items[index][1] = value

    def value_index(self, value):
        """Index of the child ``value``, or None if it is not a child of this page."""
        return next((i for i, (_, child) in enumerate(self._items) if child == value), None)

    def lookup(self, key, compare):
        """Child page id of the subtree that may contain ``key``."""
        if not self._items:
            raise LookupError("lookup on an empty internal page")
        wrap = cmp_to_key(compare)
        index = bisect_right(self._items, wrap(key), lo=1, key=lambda item: wrap(item[0]))
        return self._items[index - 1][1]

    def populate_new_root(self, old_value, new_key, new_value):
        """Fill a fresh root with two children split by ``new_key``."""
        self._items = [[None, old_value], [new_key, new_value]]

    def insert_node_after(self, old_value, new_key, new_value):
        """Insert a pair right after the child ``old_value`` and return the new size."""
        index = self.value_index(old_value)
        if index is None:
            raise ValueError(f"page {old_value} is not a child of page {self.page_id}")
        self._items.insert(index + 1, [new_key, new_value])
        return len(self._items)

    def remove(self, index):
        """Remove the pair at ``index``; an index out of range is ignored."""
        if 0 <= index < len(self._items):
            del self._items[index]

    def remove_and_return_only_child(self):
        """Empty the page and return the child it held at index 0."""
        child = self._items[0][1]
        self._items.clear()
        return child

    def move_all_to(self, recipient, middle_key, pool):
        """Append every pair to ``recipient`` and delete this page.

        ``middle_key`` is the parent's separator and takes the place of this
        page's unused first key.
        """
        items = self._items
        recipient._copy_last_from(middle_key, items[0][1], pool)
        recipient._copy_n_from(items[1:], pool)
        self._items = []
        pool.delete_page(self.page_id)

    def move_half_to(self, recipient, pool):
        """Move the upper half of the pairs to the end of ``recipient``."""
        start = len(self._items) - len(self._items) // 2
        moved = self._items[start:]
        del self._items[start:]
        recipient._copy_n_from(moved, pool)

    def move_first_to_end_of(self, recipient, middle_key, pool):
        """Move the first child to the end of ``recipient`` under ``middle_key``.

        Returns the key now first in this page, the new separator.
        """
        recipient._copy_last_from(middle_key, self._items[0][1], pool)
        self.remove(0)
        return self._items[0][0] if self._items else None

    def move_last_to_front_of(self, recipient, middle_key, pool):
        """Move the last child to the front of ``recipient``.

        ``middle_key`` becomes the key separating the moved child from the
        recipient's former first child. Returns the new separator, the key
        the moved child was stored under.
        """
        if len(self._items) == self.min_size() or len(recipient) == recipient.max_size:
            raise ValueError("moving the last pair would underflow this page or overflow the recipient")
        key, value = self._items[-1]
        if recipient._items:
            recipient._items[0][0] = middle_key
        recipient._copy_first_from(key, value, pool)
        self.remove(len(self._items) - 1)
        return key

    def _copy_n_from(self, items, pool):
        for key, value in items:
            self._items.append([key, value])
            self._adopt(value, pool)

    def _copy_last_from(self, key, value, pool):
        self._items.append([key, value])
        self._adopt(value, pool)

    def _copy_first_from(self, key, value, pool):
        self._items.insert(0, [key, value])
        self._adopt(value, pool)

    def _adopt(self, child_id, pool):
        child = pool.fetch_page(child_id)
        if child is not None:
            child.parent_page_id = self.page_id
            pool.unpin_page(child_id, True)