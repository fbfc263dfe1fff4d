"""Header page mapping names to root page ids."""

import struct

from minidb.page import INVALID_PAGE_ID, PAGE_SIZE, Page

_INT32 = struct.Struct("<i")


class HeaderPage(Page):
    """Page 0 of the database file: a table of (name, root page id) records.

    Layout: a 4-byte record count followed by 36-byte records, each a
    32-byte null-terminated name and a 4-byte root page id.
    """

    HEADER_PAGE_MAX_ENTRY_NAME_LEN = 32
    _RECORD_SIZE = 36
    _COUNT_SIZE = 4
    MAX_RECORDS = (PAGE_SIZE - _COUNT_SIZE) // _RECORD_SIZE

    def init(self):
        """Clear all records."""
        self._set_record_count(0)

    @property
    def record_count(self):
        """Number of records stored."""
        return _INT32.unpack_from(self.data, 0)[0]

    def insert_record(self, name, root_id):
        """Add a record; return False if the name is already present."""
        raw = self._encode(name)
        if root_id <= INVALID_PAGE_ID:
            raise ValueError(f"invalid root page id {root_id}")
        if self._find(raw) != -1:
            return False
        count = self.record_count
        if count >= self.MAX_RECORDS:
            raise ValueError("header page is full")
        offset = self._offset(count)
        self.data[offset:offset + self.HEADER_PAGE_MAX_ENTRY_NAME_LEN] = raw.ljust(
            self.HEADER_PAGE_MAX_ENTRY_NAME_LEN, b"\0"
        )
        _INT32.pack_into(self.data, offset + self.HEADER_PAGE_MAX_ENTRY_NAME_LEN, root_id)
        self._set_record_count(count + 1)
        return True

    def delete_record(self, name):
        """Remove a record; return False if the name is absent."""
        count = self.record_count
        if count <= 0:
            raise ValueError("header page has no records")
        index = self._find(self._encode(name, check_length=False))
        if index == -1:
            return False
        start = self._offset(index)
        end = self._offset(count)
        self.data[start:end - self._RECORD_SIZE] = self.data[start + self._RECORD_SIZE:end]
        self._set_record_count(count - 1)
        return True

    def update_record(self, name, root_id):
        """Change a record's root id; return False if the name is absent."""
        index = self._find(self._encode(name))
        if index == -1:
            return False
        _INT32.pack_into(self.data, self._offset(index) + self.HEADER_PAGE_MAX_ENTRY_NAME_LEN, root_id)
        return True

    def get_root_id(self, name):
        """Return the root id recorded for ``name``, or None if absent."""
        index = self._find(self._encode(name))
        if index == -1:
            return None
        return _INT32.unpack_from(self.data, self._offset(index) + self.HEADER_PAGE_MAX_ENTRY_NAME_LEN)[0]

    def _set_record_count(self, count):
        _INT32.pack_into(self.data, 0, count)

    def _offset(self, index):
        return self._COUNT_SIZE + index * self._RECORD_SIZE

    def _encode(self, name, check_length=True):
        raw = name.encode("utf-8")
        if b"\0" in raw:
            raise ValueError("record name may not contain NUL characters")
        if check_length and len(raw) >= self.HEADER_PAGE_MAX_ENTRY_NAME_LEN:
            raise ValueError(f"record name too long: {name!r}")
        return raw

    def _find(self, raw):
        for index in range(self.record_count):
            offset = self._offset(index)
            stored = bytes(self.data[offset:offset + self.HEADER_PAGE_MAX_ENTRY_NAME_LEN])
            if stored.split(b"\0", 1)[0] == raw:
                return index
        return -1