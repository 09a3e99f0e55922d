"""Mini README: Record keeping for customer deliveries and business expenses.

The package exposes an in-memory store that owns both collections. Other
layers read records through ``list_all``/``get`` and write through
``create``/``update``/``delete`` so identifiers and creation timestamps stay
under the store's control.
"""

from .store import (
    CustomerTransaction,
    ExpenseRecord,
    PaymentStatus,
    Record,
    RecordKind,
    RecordStore,
)

__all__ = [
    "CustomerTransaction",
    "ExpenseRecord",
    "PaymentStatus",
    "Record",
    "RecordKind",
    "RecordStore",
]
