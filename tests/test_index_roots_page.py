import pytest

from minidb.index_roots_page import IndexRootsPage


@pytest.fixture
def roots():
    return IndexRootsPage()


def test_starts_empty(roots):
    assert roots.index_count == 0
    assert roots.get_root_id(1) is None


def test_insert_and_get(roots):
    assert roots.insert(1, 10)
    assert roots.get_root_id(1) == 10
    assert roots.index_count == 1


def test_duplicate_insert(roots):
    roots.insert(1, 10)
    assert roots.insert(1, 20) is False
    assert roots.get_root_id(1) == 10


def test_update(roots):
    roots.insert(1, 10)
    assert roots.update(1, 30)
    assert roots.get_root_id(1) == 30


def test_update_missing(roots):
    assert roots.update(4, 30) is False
    assert roots.get_root_id(4) is None


def test_delete(roots):
    roots.insert(1, 10)
    roots.insert(2, 20)
    assert roots.delete(1)
    assert roots.get_root_id(1) is None
    assert roots.get_root_id(2) == 20
    assert roots.index_count == 1


def test_delete_missing(roots):
    assert roots.delete(1) is False


def test_reinsert_after_delete(roots):
    roots.insert(1, 10)
    roots.delete(1)
    assert roots.insert(1, 11)
    assert roots.get_root_id(1) == 11


def test_full_raises(roots):
    for i in range(IndexRootsPage.MAX_INDEX_COUNT):
        roots.insert(i, i)
    assert roots.index_count == IndexRootsPage.MAX_INDEX_COUNT
    with pytest.raises(ValueError):
        roots.insert(IndexRootsPage.MAX_INDEX_COUNT, 0)