"""Header shared by the leaf and internal pages of a B+ tree."""

import math
from enum import IntEnum

from minidb.page import INVALID_LSN, INVALID_PAGE_ID

UNDEFINED_SIZE = 0


class IndexPageType(IntEnum):
    """Kind of B+ tree page."""

    INVALID_INDEX_PAGE = 0
    LEAF_PAGE = 1
    INTERNAL_PAGE = 2


class BPlusTreePage:
    """Fields common to every B+ tree page: type, sizes, and page links."""

    def __init__(
        self,
        page_type=IndexPageType.INVALID_INDEX_PAGE,
        page_id=INVALID_PAGE_ID,
        parent_page_id=INVALID_PAGE_ID,
        key_size=UNDEFINED_SIZE,
        max_size=UNDEFINED_SIZE,
    ):
        self.page_type = page_type
        self.key_size = key_size
        self.lsn = INVALID_LSN
        self.size = 0
        self.max_size = max_size
        self.parent_page_id = parent_page_id
        self.page_id = page_id

    def is_leaf_page(self):
        """Whether this page is a leaf."""
        return self.page_type == IndexPageType.LEAF_PAGE

    def is_root_page(self):
        """Whether this page has no parent."""
        return self.parent_page_id == INVALID_PAGE_ID

    def increase_size(self, amount):
        """Adjust the number of stored pairs by ``amount``."""
        self.size += amount

    def min_size(self):
        """Fewest pairs the page may hold before it underflows."""
        if self.is_root_page():
            return 2
        if self.is_leaf_page():
            return math.ceil((self.max_size - 1) / 2)
        return math.ceil(self.max_size / 2)

    def __repr__(self):
        return (
            f"{type(self).__name__}(page_id={self.page_id}, parent={self.parent_page_id}, "
            f"size={self.size}, max_size={self.max_size})"
        )