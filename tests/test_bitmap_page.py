import pytest

from minidb.bitmap_page import BitmapFullError, BitmapPage


@pytest.fixture
def bitmap():
    return BitmapPage(64)


def test_allocations_are_sequential(bitmap):
    offsets = [bitmap.allocate_page() for _ in range(10)]
    assert offsets == list(range(10))
    assert bitmap.page_allocated == 10


def test_new_bitmap_has_all_pages_free(bitmap):
    assert all(bitmap.is_page_free(i) for i in range(bitmap.max_supported_size()))


def test_allocated_page_is_not_free(bitmap):
    offset = bitmap.allocate_page()
    assert bitmap.is_page_free(offset) is False


def test_fill_then_full_raises(bitmap):
    total = bitmap.max_supported_size()
    offsets = [bitmap.allocate_page() for _ in range(total)]
    assert sorted(offsets) == list(range(total))
    with pytest.raises(BitmapFullError):
        bitmap.allocate_page()


def test_deallocate_then_reuse(bitmap):
    for _ in range(5):
        bitmap.allocate_page()
    assert bitmap.deallocate_page(2) is True
    assert bitmap.is_page_free(2)
    assert bitmap.page_allocated == 4
    assert bitmap.allocate_page() == 2


def test_deallocate_free_page_fails(bitmap):
    assert bitmap.deallocate_page(3) is False
    assert bitmap.page_allocated == 0


def test_deallocate_out_of_range_fails(bitmap):
    assert bitmap.deallocate_page(bitmap.max_supported_size()) is False


def test_deallocate_after_full_allows_one_more(bitmap):
    total = bitmap.max_supported_size()
    for _ in range(total):
        bitmap.allocate_page()
    assert bitmap.deallocate_page(total - 1)
    assert bitmap.allocate_page() == total - 1


def test_is_page_free_out_of_range(bitmap):
    with pytest.raises(IndexError):
        bitmap.is_page_free(bitmap.max_supported_size())


def test_invalid_page_size():
    with pytest.raises(ValueError):
        BitmapPage(8)


def test_capacity_grows_with_page_size():
    assert BitmapPage(128).max_supported_size() > BitmapPage(64).max_supported_size()