import pytest

from minidb.btree_page import BPlusTreePage, IndexPageType
from minidb.internal_page import InternalPage


def compare(a, b):
    return (a > b) - (a < b)


class FakePool:
    def __init__(self, child_ids):
        self.pages = {pid: BPlusTreePage(IndexPageType.LEAF_PAGE, pid, 1) for pid in child_ids}
        self.unpinned = []
        self.deleted = []

    def fetch_page(self, page_id):
        return self.pages.get(page_id)

    def unpin_page(self, page_id, is_dirty):
        self.unpinned.append((page_id, is_dirty))

    def delete_page(self, page_id):
        self.deleted.append(page_id)


def build(page_id, pairs, parent_id=100, max_size=8):
    """pairs: list of (key, child); the first key is ignored."""
    page = InternalPage(page_id, parent_id=parent_id, max_size=max_size)
    (_, first), (key, second) = pairs[0], pairs[1]
    page.populate_new_root(first, key, second)
    previous = second
    for key, child in pairs[2:]:
        page.insert_node_after(previous, key, child)
        previous = child
    return page


def test_init_sets_header():
    page = InternalPage(7, parent_id=3, key_size=4, max_size=5)
    assert page.page_id == 7
    assert page.parent_page_id == 3
    assert page.max_size == 5
    assert page.size == 0
    assert not page.is_leaf_page()
    assert page.page_type == IndexPageType.INTERNAL_PAGE


def test_populate_new_root():
    page = InternalPage(1)
    page.populate_new_root(10, 5, 20)
    assert page.size == 2
    assert page.value_at(0) == 10
    assert page.key_at(1) == 5
    assert page.value_at(1) == 20


def test_insert_node_after_keeps_order_and_returns_size():
    page = InternalPage(1)
    page.populate_new_root(10, 5, 30)
    assert page.insert_node_after(10, 3, 20) == 3
    assert [page.value_at(i) for i in range(page.size)] == [10, 20, 30]
    assert [page.key_at(i) for i in range(1, page.size)] == [3, 5]


def test_insert_node_after_unknown_child_raises():
    page = InternalPage(1)
    page.populate_new_root(10, 5, 20)
    with pytest.raises(ValueError):
        page.insert_node_after(99, 7, 30)


def test_value_index():
    page = build(1, [(None, 10), (5, 20), (9, 30)])
    assert page.value_index(30) == 2
    assert page.value_index(10) == 0
    assert page.value_index(99) is None


def test_lookup_routes_keys():
    page = build(1, [(None, 10), (5, 20), (9, 30)])
    assert page.lookup(1, compare) == 10
    assert page.lookup(5, compare) == 20
    assert page.lookup(7, compare) == 20
    assert page.lookup(9, compare) == 30
    assert page.lookup(100, compare) == 30


def test_set_key_and_value():
    page = build(1, [(None, 10), (5, 20)])
    page.set_key_at(1, 6)
    page.set_value_at(1, 21)
    assert page.key_at(1) == 6
    assert page.value_at(1) == 21


def test_remove_shifts_and_ignores_out_of_range():
    page = build(1, [(None, 10), (5, 20), (9, 30)])
    page.remove(1)
    assert [page.value_at(i) for i in range(page.size)] == [10, 30]
    assert page.key_at(1) == 9
    page.remove(5)
    page.remove(-1)
    assert page.size == 2


def test_remove_and_return_only_child():
    page = InternalPage(1)
    page.populate_new_root(10, 5, 20)
    page.remove(1)
    assert page.remove_and_return_only_child() == 10
    assert page.size == 0


def test_move_half_to_adopts_children():
    children = [10, 20, 30, 40, 50]
    pool = FakePool(children)
    donor = build(1, [(None, 10), (2, 20), (4, 30), (6, 40), (8, 50)])
    recipient = InternalPage(2, parent_id=100, max_size=8)
    donor.move_half_to(recipient, pool)
    assert donor.size + recipient.size == 5
    assert [donor.value_at(i) for i in range(donor.size)] == [10, 20, 30]
    assert [recipient.value_at(i) for i in range(recipient.size)] == [40, 50]
    assert recipient.key_at(0) == 6
    assert all(pool.pages[c].parent_page_id == 2 for c in (40, 50))
    assert all(pool.pages[c].parent_page_id == 1 for c in (10, 20, 30))
    assert sorted(pool.unpinned) == [(40, True), (50, True)]


def test_move_all_to_uses_middle_key_and_deletes_page():
    pool = FakePool([10, 20, 30, 40])
    left = build(1, [(None, 10), (3, 20)])
    right = build(2, [(None, 30), (9, 40)])
    left.move_all_to_ok = None
    right.move_all_to(left, 7, pool)
    assert [left.value_at(i) for i in range(left.size)] == [10, 20, 30, 40]
    assert [left.key_at(i) for i in range(1, left.size)] == [3, 7, 9]
    assert pool.pages[30].parent_page_id == 1
    assert pool.pages[40].parent_page_id == 1
    assert pool.deleted == [2]
    assert right.size == 0


def test_move_first_to_end_of():
    pool = FakePool([10, 20, 30, 40, 50])
    left = build(1, [(None, 10), (3, 20)])
    right = build(2, [(None, 30), (9, 40), (12, 50)])
    new_separator = right.move_first_to_end_of(left, 7, pool)
    assert [left.value_at(i) for i in range(left.size)] == [10, 20, 30]
    assert left.key_at(2) == 7
    assert [right.value_at(i) for i in range(right.size)] == [40, 50]
    assert new_separator == 9
    assert pool.pages[30].parent_page_id == 1


def test_move_last_to_front_of():
    pool = FakePool([10, 20, 30, 40, 50])
    left = build(1, [(None, 10), (3, 20), (5, 30)], max_size=4)
    right = build(2, [(None, 40), (9, 50)], max_size=4)
    new_separator = left.move_last_to_front_of(right, 7, pool)
    assert new_separator == 5
    assert [left.value_at(i) for i in range(left.size)] == [10, 20]
    assert [right.value_at(i) for i in range(right.size)] == [30, 40, 50]
    assert [right.key_at(i) for i in range(1, right.size)] == [7, 9]
    assert pool.pages[30].parent_page_id == 2
    assert right.lookup(6, compare) == 30
    assert right.lookup(8, compare) == 40


def test_move_last_to_front_of_rejects_underflow():
    pool = FakePool([10, 20, 40, 50])
    left = build(1, [(None, 10), (3, 20)], max_size=4)
    right = build(2, [(None, 40), (9, 50)], max_size=4)
    with pytest.raises(ValueError):
        left.move_last_to_front_of(right, 7, pool)
    assert left.size == 2
    assert right.size == 2


def test_min_size_of_non_root_internal_page():
    page = build(1, [(None, 10), (3, 20)], max_size=4)
    assert page.min_size() == 2
    root = build(2, [(None, 10), (3, 20)], parent_id=-1, max_size=4)
    assert root.is_root_page()
    assert root.min_size() == 2