"""Page recording the root page id of every index."""

from minidb.page import PAGE_SIZE


class IndexRootsPage:
    """Ordered table of (index id, root page id) pairs."""

    MAX_INDEX_COUNT = (PAGE_SIZE - 4) // 8

    def __init__(self):
        self._roots = {}

    @property
    def index_count(self):
        """Number of indexes recorded."""
        return len(self._roots)

    def insert(self, index_id, root_id):
        """Record a new index; return False if it is already present."""
        if index_id in self._roots:
            return False
        if len(self._roots) >= self.MAX_INDEX_COUNT:
            raise ValueError("index roots page is full")
        self._roots[index_id] = root_id
        return True

    def delete(self, index_id):
        """Forget an index; return False if it is absent."""
        if index_id not in self._roots:
            return False
        del self._roots[index_id]
        return True

    def update(self, index_id, root_id):
        """Change an index's root id; return False if it is absent."""
        if index_id not in self._roots:
            return False
        self._roots[index_id] = root_id
        return True

    def get_root_id(self, index_id):
        """Return the root id of ``index_id``, or None if absent."""
        return self._roots.get(index_id)