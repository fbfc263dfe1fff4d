"""Storage pages, B+ tree nodes, transaction records and predicate expressions for a small database engine."""

__version__ = "2022.7.0"

__all__ = [
    "page",
    "bitmap_page",
    "header_page",
    "index_roots_page",
    "table_page",
    "txn",
    "lock_request",
    "btree_page",
    "leaf_page",
    "internal_page",
    "expressions",
]