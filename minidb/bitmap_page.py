"""Bitmap page tracking which pages of an extent are allocated."""

from minidb.page import PAGE_SIZE


class BitmapFullError(Exception):
    """Raised when every page tracked by a bitmap is already allocated."""


class BitmapPage:
    """Allocation bitmap occupying one page of ``page_size`` bytes."""

    HEADER_SIZE = 8

    def __init__(self, page_size=PAGE_SIZE):
        if page_size <= self.HEADER_SIZE:
            raise ValueError(f"page size must exceed {self.HEADER_SIZE} bytes, got {page_size}")
        self.page_size = page_size
        self.page_allocated = 0
        self.next_free_page = 0
        self._bits = bytearray(page_size - self.HEADER_SIZE)

    def max_supported_size(self):
        """Number of pages this bitmap can record."""
        return 8 * len(self._bits)

    def allocate_page(self):
        """Allocate the next free page and return its offset within the extent."""
        if self.page_allocated >= self.max_supported_size():
            raise BitmapFullError("no free page left in extent")
        offset = self.next_free_page
        byte_index, bit_index = divmod(offset, 8)
        self._bits[byte_index] |= 1 << bit_index
        self.page_allocated += 1
        self.next_free_page = self._first_free(default=offset)
        return offset

    def deallocate_page(self, page_offset):
        """Free an allocated page; return False if it was out of range or already free."""
        if not 0 <= page_offset < self.max_supported_size():
            return False
        if self.is_page_free(page_offset):
            return False
        byte_index, bit_index = divmod(page_offset, 8)
        self._bits[byte_index] &= ~(1 << bit_index) & 0xFF
        self.next_free_page = page_offset
        self.page_allocated -= 1
        return True

    def is_page_free(self, page_offset):
        """Whether the page at ``page_offset`` is unallocated."""
        if not 0 <= page_offset < self.max_supported_size():
            raise IndexError(f"page offset {page_offset} out of range")
        byte_index, bit_index = divmod(page_offset, 8)
        return not self._bits[byte_index] & (1 << bit_index)

    def _first_free(self, default):
        for byte_index, byte in enumerate(self._bits):
            if byte != 0xFF:
                bit_index = next(bit for bit in range(8) if not byte & (1 << bit))
                return byte_index * 8 + bit_index
        return default