"""Lock requests and the per-row queue that holds them."""

import threading
from dataclasses import dataclass
from enum import Enum, auto


class LockMode(Enum):
    """Kind of row lock."""

    NONE = auto()
    SHARED = auto()
    EXCLUSIVE = auto()


@dataclass
class LockRequest:
    """A transaction's request for a lock, and what has been granted so far."""

    txn_id: int
    lock_mode: LockMode = LockMode.SHARED
    granted: LockMode = LockMode.NONE


class LockRequestQueue:
    """Lock requests on one row, newest first, with a condition to wait on."""

    def __init__(self):
        self._requests = {}
        self.cv = threading.Condition()
        self.is_writing = False
        self.is_upgrading = False
        self.sharing_cnt = 0

    @property
    def requests(self):
        """The queued requests, most recent first."""
        return list(reversed(self._requests.values()))

    def __len__(self):
        return len(self._requests)

    def __contains__(self, txn_id):
        return txn_id in self._requests

    def emplace_lock_request(self, txn_id, lock_mode):
        """Queue a new request at the front and return it."""
        if txn_id in self._requests:
            raise ValueError(f"transaction {txn_id} already has a request queued")
        request = LockRequest(txn_id, lock_mode)
        self._requests[txn_id] = request
        return request

    def erase_lock_request(self, txn_id):
        """Drop a transaction's request; return False if it had none."""
        return self._requests.pop(txn_id, None) is not None

    def get_lock_request(self, txn_id):
        """Return a transaction's queued request."""
        try:
            return self._requests[txn_id]
        except KeyError:
            raise KeyError(f"no lock request for transaction {txn_id}") from None