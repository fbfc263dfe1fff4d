"""Transactions and their states under two-phase locking."""

import copy
import threading
from enum import Enum, auto

INVALID_TXN_ID = -1


class IsolationLevel(Enum):
    """Transaction isolation level."""

    READ_UNCOMMITTED = auto()
    READ_COMMITTED = auto()
    REPEATED_READ = auto()


class AbortReason(Enum):
    """Why a transaction was aborted."""

    LOCK_ON_SHRINKING = auto()
    UNLOCK_ON_SHRINKING = auto()
    UPGRADE_CONFLICT = auto()
    DEADLOCK = auto()
    LOCK_SHARED_ON_READ_UNCOMMITTED = auto()


class TxnState(Enum):
    """Lifecycle state of a transaction."""

    GROWING = auto()
    SHRINKING = auto()
    COMMITTED = auto()
    ABORTED = auto()


class TxnAbortError(Exception):
    """Raised when a transaction must abort."""

    def __init__(self, txn_id, abort_reason):
        super().__init__(f"transaction {txn_id} aborted: {abort_reason.name}")
        self.txn_id = txn_id
        self.abort_reason = abort_reason


class Txn:
    """A transaction and the row locks it holds."""

    def __init__(self, txn_id=INVALID_TXN_ID, iso_level=IsolationLevel.REPEATED_READ):
        self.txn_id = txn_id
        self.iso_level = iso_level
        self.state = TxnState.GROWING
        self.thread_id = threading.get_ident()
        self.shared_lock_set = set()
        self.exclusive_lock_set = set()

    def __copy__(self):
        raise TypeError("transactions cannot be copied")

    def __deepcopy__(self, memo):
        raise TypeError("transactions cannot be copied")

    def __repr__(self):
        return f"Txn(txn_id={self.txn_id}, state={self.state.name})"


__all__ = [
    "INVALID_TXN_ID",
    "AbortReason",
    "IsolationLevel",
    "Txn",
    "TxnAbortError",
    "TxnState",
    "copy",
]