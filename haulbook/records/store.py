"""Mini README: In-memory record store for customer transactions and expenses.

Structure:
    * PaymentStatus - enum representing paid versus unpaid deliveries.
    * RecordKind - enum naming the two collections held by the store.
    * CustomerTransaction - dataclass describing one delivery to a customer.
    * ExpenseRecord - dataclass describing one business expense.
    * RecordStore - owns both collections and their identifier counters.

The store is deliberately simple: it keeps records in dictionaries keyed by
integer identifiers, assigns identifiers from per-collection counters that
never go backwards (until an explicit reset) and stamps each record with the
time it was created. Lookups of unknown identifiers are reported through
``None``/``False`` results rather than exceptions so callers can decide how to
surface a missing record. Invalid field payloads raise ``ValueError``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Callable, Dict, List, Mapping, Optional, Union

from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

Clock = Callable[[], datetime]


class PaymentStatus(str, Enum):
    """Enumerate whether a customer has settled a delivery."""

    PAID = "paid"
    UNPAID = "unpaid"

    @classmethod
    def from_str(cls, value: str) -> "PaymentStatus":
        """Coerce arbitrary casing into a valid payment status."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported payment status: {value}") from error


class RecordKind(str, Enum):
    """Name the collections managed by :class:`RecordStore`."""

    CUSTOMERS = "customers"
    EXPENSES = "expenses"


@dataclass(slots=True)
class CustomerTransaction:
    """A delivery of goods to a named customer."""

    id: int
    name: str
    goods_type: str
    car_count: int
    amount: str
    payment_status: PaymentStatus
    created_at: datetime

    @property
    def is_paid(self) -> bool:
        return self.payment_status is PaymentStatus.PAID

    def as_dict(self) -> Dict[str, object]:
        """Export the transaction with serialisable values."""

        return {
            "id": self.id,
            "name": self.name,
            "goods_type": self.goods_type,
            "car_count": self.car_count,
            "amount": self.amount,
            "payment_status": self.payment_status.value,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(slots=True)
class ExpenseRecord:
    """A business expense such as fuel or wages."""

    id: int
    description: str
    amount: str
    created_at: datetime

    def as_dict(self) -> Dict[str, object]:
        """Export the expense with serialisable values."""

        return {
            "id": self.id,
            "description": self.description,
            "amount": self.amount,
            "created_at": self.created_at.isoformat(),
        }


Record = Union[CustomerTransaction, ExpenseRecord]

_EDITABLE_FIELDS = {
    RecordKind.CUSTOMERS: ("name", "goods_type", "car_count", "amount", "payment_status"),
    RecordKind.EXPENSES: ("description", "amount"),
}


def _coerce_fields(kind: RecordKind, fields: Mapping[str, object]) -> Dict[str, object]:
    """Validate and coerce a create or update payload for ``kind``."""

    allowed = _EDITABLE_FIELDS[kind]
    coerced: Dict[str, object] = {}
    for key, value in fields.items():
        if key not in allowed:
            raise ValueError(f"Field '{key}' cannot be set on {kind.value}.")
        if value is None:
            continue
        if key == "payment_status":
            coerced[key] = (
                value if isinstance(value, PaymentStatus) else PaymentStatus.from_str(str(value))
            )
        elif key == "car_count":
            coerced[key] = _parse_car_count(value)
        elif key == "amount":
            coerced[key] = _normalise_amount(value)
        else:
            coerced[key] = str(value)
    return coerced


def _parse_car_count(value: object) -> int:
    """Parse a car count, rejecting anything below one."""

    if isinstance(value, bool):
        raise ValueError("Car count must be a whole number.")
    try:
        count = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as error:
        raise ValueError(f"Car count must be a whole number, got {value!r}.") from error
    if count < 1:
        raise ValueError("Car count must be at least 1.")
    return count


def _normalise_amount(value: object) -> str:
    """Return a positive amount as a decimal string."""

    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as error:
        raise ValueError(f"Amount must be a decimal number, got {value!r}.") from error
    if not amount.is_finite() or amount <= 0:
        raise ValueError("Amount must be a positive number.")
    if amount.as_tuple().exponent < -2:
        raise ValueError(f"Amount must have at most two decimal places, got {value!r}.")
    return format(amount, "f")


class RecordStore:
    """Own the customer and expense collections and their identifier counters."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self._clock: Clock = clock or datetime.now
        self._records: Dict[RecordKind, Dict[int, Record]] = {kind: {} for kind in RecordKind}
        self._next_ids: Dict[RecordKind, int] = {kind: 1 for kind in RecordKind}
        LOGGER.debug("Record store initialised")

    def _next_id(self, kind: RecordKind) -> int:
        """Hand out the next identifier for ``kind``."""

        record_id = self._next_ids[kind]
        self._next_ids[kind] = record_id + 1
        return record_id

    def list_all(self, kind: RecordKind) -> List[Record]:
        """Return records ordered by most recent creation time first."""

        return sorted(
            self._records[kind].values(),
            key=lambda record: (record.created_at, record.id),
            reverse=True,
        )

    def get(self, kind: RecordKind, record_id: int) -> Optional[Record]:
        return self._records[kind].get(record_id)

    def create(self, kind: RecordKind, fields: Mapping[str, object]) -> Record:
        """Create a record from ``fields`` with a fresh identifier and timestamp."""

        return self._insert(kind, fields, self._clock())

    def _insert(
        self, kind: RecordKind, fields: Mapping[str, object], created_at: datetime
    ) -> Record:
        coerced = _coerce_fields(kind, fields)
        missing = [name for name in _EDITABLE_FIELDS[kind] if name not in coerced]
        if missing:
            raise ValueError(f"Missing required fields for {kind.value}: {', '.join(missing)}")

        record_id = self._next_id(kind)
        if kind is RecordKind.CUSTOMERS:
            record: Record = CustomerTransaction(id=record_id, created_at=created_at, **coerced)
        else:
            record = ExpenseRecord(id=record_id, created_at=created_at, **coerced)
        self._records[kind][record_id] = record
        LOGGER.info("Created %s record %s", kind.value, record_id)
        return record

    def update(
        self, kind: RecordKind, record_id: int, fields: Mapping[str, object]
    ) -> Optional[Record]:
        """Merge ``fields`` over an existing record, keeping its id and timestamp."""

        existing = self._records[kind].get(record_id)
        if existing is None:
            LOGGER.debug("Update skipped, %s record %s not found", kind.value, record_id)
            return None
        updated = replace(existing, **_coerce_fields(kind, fields))
        self._records[kind][record_id] = updated
        LOGGER.info("Updated %s record %s", kind.value, record_id)
        return updated

    def delete(self, kind: RecordKind, record_id: int) -> bool:
        """Remove a record, returning ``False`` when it does not exist."""

        removed = self._records[kind].pop(record_id, None)
        if removed is None:
            LOGGER.debug("Delete skipped, %s record %s not found", kind.value, record_id)
            return False
        LOGGER.info("Deleted %s record %s", kind.value, record_id)
        return True

    def reset_all(self) -> None:
        """Drop every record of both kinds and restart both counters at 1."""

        for kind in RecordKind:
            self._records[kind].clear()
            self._next_ids[kind] = 1
        LOGGER.info("Record store cleared")

    def seed_demo_records(self) -> None:
        """Populate the store with a few days of deterministic demo activity."""

        now = self._clock()
        demo_customers = [
            (2, {"name": "Abu Ali", "goods_type": "Cement", "car_count": 3, "amount": "450000", "payment_status": "paid"}),
            (1, {"name": "Karim Stores", "goods_type": "Bricks", "car_count": 2, "amount": "300000", "payment_status": "unpaid"}),
            (1, {"name": "Abu Ali", "goods_type": "Cement", "car_count": 1, "amount": "150000", "payment_status": "paid"}),
            (0, {"name": "Karim Stores", "goods_type": "Bricks", "car_count": 4, "amount": "600000", "payment_status": "paid"}),
        ]
        demo_expenses = [
            (1, {"description": "Fuel", "amount": "85000"}),
            (0, {"description": "Driver wages", "amount": "200000"}),
        ]
        for days_ago, fields in demo_customers:
            self._insert(RecordKind.CUSTOMERS, fields, now - timedelta(days=days_ago))
        for days_ago, fields in demo_expenses:
            self._insert(RecordKind.EXPENSES, fields, now - timedelta(days=days_ago))
        LOGGER.debug(
            "Seeded %s customer and %s expense demo records",
            len(demo_customers),
            len(demo_expenses),
        )
