"""Slotted page holding the tuples of a table heap."""

import struct
from dataclasses import dataclass
from enum import IntEnum

from minidb.page import INVALID_PAGE_ID, PAGE_SIZE, Page

_U32 = struct.Struct("<I")
_I32 = struct.Struct("<i")


@dataclass(frozen=True)
class RowId:
    """Location of a tuple: the page it lives on and its slot number."""

    page_id: int = INVALID_PAGE_ID
    slot_num: int = 0


INVALID_ROWID = RowId(INVALID_PAGE_ID, 0)


class UpdateStatus(IntEnum):
    """Outcome of an in-place tuple update."""

    SLOT_NUM_INVALID = 0
    TUPLE_DELETED = 1
    NOT_ENOUGH_SPACE = 2
    UPDATE_SUCCESS = 3


class TablePage(Page):
    """Slotted page: header and slot array grow forward, tuples grow backward.

    Header layout (bytes): page id (4), LSN (4), previous page id (4),
    next page id (4), free space pointer (4), tuple count (4), followed by
    one (offset, size) pair of 4 bytes each per slot.
    """

    DELETE_MASK = 1 << 31
    SIZE_TABLE_PAGE_HEADER = 24
    SIZE_TUPLE = 8
    OFFSET_PREV_PAGE_ID = 8
    OFFSET_NEXT_PAGE_ID = 12
    OFFSET_FREE_SPACE = 16
    OFFSET_TUPLE_COUNT = 20
    OFFSET_TUPLE_OFFSET = 24
    OFFSET_TUPLE_SIZE = 28
    SIZE_MAX_ROW = PAGE_SIZE - SIZE_TABLE_PAGE_HEADER - SIZE_TUPLE

    def init(self, page_id, prev_id):
        """Format the page as an empty table page."""
        _I32.pack_into(self.data, 0, page_id)
        self.prev_page_id = prev_id
        self.next_page_id = INVALID_PAGE_ID
        self._free_space_pointer = PAGE_SIZE
        self._tuple_count = 0

    @property
    def table_page_id(self):
        """The page id recorded in the page header."""
        return _I32.unpack_from(self.data, 0)[0]

    @property
    def prev_page_id(self):
        """Id of the previous page in the table heap."""
        return _I32.unpack_from(self.data, self.OFFSET_PREV_PAGE_ID)[0]

    @prev_page_id.setter
    def prev_page_id(self, value):
        _I32.pack_into(self.data, self.OFFSET_PREV_PAGE_ID, value)

    @property
    def next_page_id(self):
        """Id of the next page in the table heap."""
        return _I32.unpack_from(self.data, self.OFFSET_NEXT_PAGE_ID)[0]

    @next_page_id.setter
    def next_page_id(self, value):
        _I32.pack_into(self.data, self.OFFSET_NEXT_PAGE_ID, value)

    @property
    def tuple_count(self):
        """Number of slots in use, including emptied ones."""
        return self._tuple_count

    def insert_tuple(self, data):
        """Store serialized tuple bytes; return its RowId, or None if the page is full."""
        size = len(data)
        if size == 0:
            raise ValueError("cannot insert an empty tuple")
        if self._free_space_remaining() < size + self.SIZE_TUPLE:
            return None
        count = self._tuple_count
        slot = next((i for i in range(count) if self._tuple_size(i) == 0), count)
        pointer = self._free_space_pointer - size
        self._free_space_pointer = pointer
        self.data[pointer:pointer + size] = data
        self._set_tuple_offset(slot, pointer)
        self._set_tuple_size(slot, size)
        if slot == count:
            self._tuple_count = count + 1
        return RowId(self.table_page_id, slot)

    def mark_delete(self, rid):
        """Flag a tuple as deleted; return False if the slot is invalid or already deleted."""
        slot = rid.slot_num
        if slot >= self._tuple_count:
            return False
        size = self._tuple_size(slot)
        if self._is_deleted(size):
            return False
        self._set_tuple_size(slot, size | self.DELETE_MASK)
        return True

    def update_tuple(self, data, rid):
        """Replace a tuple in place.

        Returns the status and, on success, the bytes of the old tuple.
        """
        size = len(data)
        if size == 0:
            raise ValueError("cannot update to an empty tuple")
        slot = rid.slot_num
        if slot >= self._tuple_count:
            return UpdateStatus.SLOT_NUM_INVALID, None
        tuple_size = self._tuple_size(slot)
        if self._is_deleted(tuple_size):
            return UpdateStatus.TUPLE_DELETED, None
        if self._free_space_remaining() + tuple_size < size:
            return UpdateStatus.NOT_ENOUGH_SPACE, None
        offset = self._tuple_offset(slot)
        old = bytes(self.data[offset:offset + tuple_size])
        pointer = self._free_space_pointer
        if offset < pointer:
            raise ValueError("tuple offset lies before the free space pointer")
        shift = tuple_size - size
        self.data[pointer + shift:offset + shift] = self.data[pointer:offset]
        self._free_space_pointer = pointer + shift
        start = offset + shift
        self.data[start:start + size] = data
        self._set_tuple_size(slot, size)
        for i in range(self._tuple_count):
            offset_i = self._tuple_offset(i)
            if self._tuple_size(i) > 0 and offset_i < offset + tuple_size:
                self._set_tuple_offset(i, offset_i + shift)
        return UpdateStatus.UPDATE_SUCCESS, old

    def apply_delete(self, rid):
        """Physically remove a tuple and compact the tuple area."""
        slot = rid.slot_num
        if slot >= self._tuple_count:
            raise IndexError(f"slot {slot} out of range")
        offset = self._tuple_offset(slot)
        size = self._tuple_size(slot) & ~self.DELETE_MASK
        pointer = self._free_space_pointer
        if offset < pointer:
            raise ValueError("free space appears after the tuple")
        self.data[pointer + size:offset + size] = self.data[pointer:offset]
        self._free_space_pointer = pointer + size
        self._set_tuple_size(slot, 0)
        self._set_tuple_offset(slot, 0)
        for i in range(self._tuple_count):
            offset_i = self._tuple_offset(i)
            if self._tuple_size(i) != 0 and offset_i < offset:
                self._set_tuple_offset(i, offset_i + size)

    def rollback_delete(self, rid):
        """Clear the deleted flag of a tuple."""
        slot = rid.slot_num
        if slot >= self._tuple_count:
            raise IndexError(f"slot {slot} out of range")
        size = self._tuple_size(slot)
        if self._is_deleted(size):
            self._set_tuple_size(slot, size & ~self.DELETE_MASK)

    def get_tuple(self, rid):
        """Return the bytes of a live tuple, or None if the slot is invalid or deleted."""
        slot = rid.slot_num
        if slot >= self._tuple_count:
            return None
        size = self._tuple_size(slot)
        if self._is_deleted(size):
            return None
        offset = self._tuple_offset(slot)
        return bytes(self.data[offset:offset + size])

    def first_tuple_rid(self):
        """RowId of the first live tuple, or None if there is none."""
        return self._live_from(0)

    def next_tuple_rid(self, rid):
        """RowId of the first live tuple after ``rid``, or None if there is none."""
        if rid.page_id != self.table_page_id:
            raise ValueError("row id belongs to another page")
        return self._live_from(rid.slot_num + 1)

    def _live_from(self, start):
        page_id = self.table_page_id
        for slot in range(start, self._tuple_count):
            if not self._is_deleted(self._tuple_size(slot)):
                return RowId(page_id, slot)
        return None

    @classmethod
    def _is_deleted(cls, size):
        return bool(size & cls.DELETE_MASK) or size == 0

    @property
    def _free_space_pointer(self):
        return _U32.unpack_from(self.data, self.OFFSET_FREE_SPACE)[0]

    @_free_space_pointer.setter
    def _free_space_pointer(self, value):
        _U32.pack_into(self.data, self.OFFSET_FREE_SPACE, value)

    @property
    def _tuple_count(self):
        return _U32.unpack_from(self.data, self.OFFSET_TUPLE_COUNT)[0]

    @_tuple_count.setter
    def _tuple_count(self, value):
        _U32.pack_into(self.data, self.OFFSET_TUPLE_COUNT, value)

    def _free_space_remaining(self):
        return self._free_space_pointer - self.SIZE_TABLE_PAGE_HEADER - self.SIZE_TUPLE * self._tuple_count

    def _tuple_offset(self, slot):
        return _U32.unpack_from(self.data, self.OFFSET_TUPLE_OFFSET + self.SIZE_TUPLE * slot)[0]

    def _set_tuple_offset(self, slot, offset):
        _U32.pack_into(self.data, self.OFFSET_TUPLE_OFFSET + self.SIZE_TUPLE * slot, offset)

    def _tuple_size(self, slot):
        return _U32.unpack_from(self.data, self.OFFSET_TUPLE_SIZE + self.SIZE_TUPLE * slot)[0]

    def _set_tuple_size(self, slot, size):
        _U32.pack_into(self.data, self.OFFSET_TUPLE_SIZE + self.SIZE_TUPLE * slot, size)