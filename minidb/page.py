"""Fixed-size storage page held in memory by the buffer pool."""

import struct

PAGE_SIZE = 4096
INVALID_PAGE_ID = -1
INVALID_LSN = -1

_INT32 = struct.Struct("<i")


class Page:
    """A page of raw bytes with the bookkeeping the buffer pool needs."""

    SIZE_PAGE_HEADER = 8
    OFFSET_PAGE_START = 0
    OFFSET_LSN = 4

    def __init__(self):
        self.data = bytearray(PAGE_SIZE)
        self.page_id = INVALID_PAGE_ID
        self.pin_count = 0
        self.is_dirty = False

    def reset(self):
        """Zero out the page contents."""
        self.data[:] = bytes(PAGE_SIZE)

    @property
    def lsn(self):
        """The log sequence number stored in the page header."""
        return _INT32.unpack_from(self.data, self.OFFSET_LSN)[0]

    @lsn.setter
    def lsn(self, value):
        _INT32.pack_into(self.data, self.OFFSET_LSN, value)