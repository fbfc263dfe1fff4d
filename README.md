# minidb

Building blocks of a small relational database engine, written in plain Python
with no runtime dependencies: on-page data structures, B+ tree nodes,
transaction bookkeeping and predicate expressions.

## Modules

- `minidb.page`: `Page`, a `PAGE_SIZE` (4096) byte `bytearray` with a page id,
  pin count, dirty flag and an `lsn` property stored in the page header.
  `reset()` zeroes the contents.
- `minidb.bitmap_page`: `BitmapPage(page_size)` tracks the allocated pages of
  an extent. `allocate_page()` returns the offset it allocated, or raises
  `BitmapFullError` when no page is free. `deallocate_page(offset)` returns
  `False` for an offset that is out of range or already free.
  `is_page_free(offset)` and `max_supported_size()` complete it.
- `minidb.header_page`: `HeaderPage`, a `Page` that holds named records of up
  to 31 bytes, each with a root page id. It has `init()`, `insert_record`,
  `delete_record`, `update_record`, `get_root_id` (which returns `None` for an
  unknown name) and `record_count`.
- `minidb.index_roots_page`: `IndexRootsPage` maps index ids to root page ids
  through `insert`, `delete`, `update`, `get_root_id` and `index_count`.
- `minidb.table_page`: `TablePage`, a slotted `Page` that stores tuples as raw
  bytes. `insert_tuple(data)` returns a `RowId`, or `None` when the page is
  full. `update_tuple(data, rid)` returns an `UpdateStatus` and, on success,
  the old bytes. The page also supports `mark_delete`, `rollback_delete`,
  `apply_delete`, `get_tuple`, `first_tuple_rid` and `next_tuple_rid`.
- `minidb.txn`: `Txn`, with `IsolationLevel`, `TxnState`, `AbortReason` and
  the `TxnAbortError` exception.
- `minidb.lock_request`: `LockMode`, `LockRequest` and `LockRequestQueue`, the
  per-row queue of lock requests with a `threading.Condition` in `cv`.
- `minidb.btree_page`: `IndexPageType` and `BPlusTreePage`, the header fields
  that every tree node shares. It also provides `min_size()`.
- `minidb.leaf_page`: `LeafPage` keeps sorted unique keys paired with row ids
  and provides lookup, insert and remove, plus the split, merge and
  redistribute moves. Inserting a key that is already present raises
  `DuplicateKeyError`.
- `minidb.internal_page`: `InternalPage` keeps separator keys paired with child
  page ids and provides `lookup`, `populate_new_root`, `insert_node_after` and
  the move operations. Moves that re-parent children take a `pool` object with
  `fetch_page(page_id)`, `unpin_page(page_id, is_dirty)` and
  `delete_page(page_id)`.
- `minidb.expressions`: `ColumnValueExpression`, `ConstantValueExpression`,
  `ComparisonExpression` (`= <> < <= > >= is not`) and `LogicExpression`
  (`and`, `or`). They are evaluated against rows, which are any sequences of
  values, and follow three-valued logic through `CmpBool`. `None` is NULL.

Key comparisons in the tree pages take a three-way `compare(a, b)` function
that returns a negative number, zero or a positive number.

## Examples

```python
from minidb.bitmap_page import BitmapPage
from minidb.index_roots_page import IndexRootsPage

bitmap = BitmapPage(4096)
offset = bitmap.allocate_page()
assert not bitmap.is_page_free(offset)
assert bitmap.deallocate_page(offset)

roots = IndexRootsPage()
roots.insert(1, 42)
assert roots.get_root_id(1) == 42
```

```python
from minidb.page import INVALID_PAGE_ID
from minidb.table_page import TablePage

page = TablePage()
page.init(0, INVALID_PAGE_ID)
rid = page.insert_tuple(b"hello")
assert page.get_tuple(rid) == b"hello"
```

```python
from minidb.leaf_page import LeafPage
from minidb.table_page import RowId

def compare(a, b):
    return (a > b) - (a < b)

leaf = LeafPage(1, max_size=8)
leaf.insert(5, RowId(0, 0), compare)
leaf.insert(3, RowId(0, 1), compare)
assert leaf.lookup(3, compare) == RowId(0, 1)
assert [key for key, _ in leaf] == [3, 5]
```

```python
from minidb.expressions import (
    CmpBool, ColumnValueExpression, ComparisonExpression,
    ConstantValueExpression, TypeId,
)

pred = ComparisonExpression(
    ColumnValueExpression(0, 0, TypeId.INT), ConstantValueExpression(3), ">"
)
assert pred.evaluate((5,)) is CmpBool.TRUE
assert pred.evaluate((None,)) is CmpBool.NULL
```

## What it does not do

This package has the pieces but not the engine built from them. It has no
buffer pool or disk manager, so nothing is read from or written to files, and
callers supply the `pool` that `InternalPage` needs. It has no B+ tree that
drives the leaf and internal pages, and no lock manager that grants locks from
the queues. There is no row or schema serialization: `TablePage` stores bytes
that the caller supplies. The package also has no catalog, no SQL parser,
planner or executor, and no command-line program.

## Installation and tests

```
pip install .
pip install ".[test]"
pytest
```