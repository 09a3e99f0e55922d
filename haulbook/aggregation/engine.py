"""Mini README: Summaries and day/customer grouping over ledger records.

Structure:
    * FinancialSummary - revenue, expenses, net total and counts.
    * NameGroup - all deliveries to one customer on one day.
    * DateGroup - all name groups for one calendar day plus day totals.
    * ReportSnapshot - everything a report exporter needs in one object.
    * compute_summary / compute_date_groups - pure functions over record lists.
    * LedgerAggregator - binds the pure functions to a ``RecordStore``.

Amounts are stored as decimal strings and summed with ``decimal.Decimal`` so
totals stay exact to the cent. Nothing here is cached: each call recomputes
from the complete record lists, which keeps results consistent with the
store after any create, update or delete.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Tuple

from ..logging_utils import get_logger
from ..records import CustomerTransaction, ExpenseRecord, RecordKind, RecordStore

LOGGER = get_logger(__name__)

DATE_KEY_FORMAT = "%d/%m/%Y"
TWO_PLACES = Decimal("0.01")


def format_date_key(moment: date | datetime) -> str:
    """Render the calendar day of ``moment`` as ``DD/MM/YYYY``."""

    return moment.strftime(DATE_KEY_FORMAT)


def serialise_amount(value: Decimal) -> str:
    return str(value.quantize(TWO_PLACES))


@dataclass(slots=True)
class FinancialSummary:
    """Global totals across every customer transaction and expense."""

    total_revenue: Decimal
    total_expenses: Decimal
    net_total: Decimal
    total_cars: int
    customer_count: int
    expense_count: int

    def as_dict(self) -> Dict[str, object]:
        return {
            "total_revenue": serialise_amount(self.total_revenue),
            "total_expenses": serialise_amount(self.total_expenses),
            "net_total": serialise_amount(self.net_total),
            "total_cars": self.total_cars,
            "customer_count": self.customer_count,
            "expense_count": self.expense_count,
        }


@dataclass(slots=True)
class NameGroup:
    """Deliveries to a single customer name within one day."""

    name: str
    goods_type: str
    goods_types: List[str] = field(default_factory=list)
    total_cars: int = 0
    total_amount: Decimal = Decimal("0")
    all_paid: bool = True
    entries: List[CustomerTransaction] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    def add(self, transaction: CustomerTransaction) -> None:
        """Fold one transaction into the running totals."""

        self.total_cars += transaction.car_count
        self.total_amount += Decimal(transaction.amount)
        if not transaction.is_paid:
            self.all_paid = False
        if transaction.goods_type not in self.goods_types:
            self.goods_types.append(transaction.goods_type)
        self.entries.append(transaction)

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "goods_type": self.goods_type,
            "goods_types": list(self.goods_types),
            "total_cars": self.total_cars,
            "total_amount": serialise_amount(self.total_amount),
            "all_paid": self.all_paid,
            "entries": [entry.as_dict() for entry in self.entries],
        }


@dataclass(slots=True)
class DateGroup:
    """Name groups sharing a calendar day, with the day's own totals."""

    day: date
    groups: List[NameGroup]

    @property
    def date_key(self) -> str:
        return format_date_key(self.day)

    @property
    def total_amount(self) -> Decimal:
        return sum((group.total_amount for group in self.groups), Decimal("0"))

    @property
    def total_cars(self) -> int:
        return sum(group.total_cars for group in self.groups)

    @property
    def customer_count(self) -> int:
        return len(self.groups)

    def as_dict(self) -> Dict[str, object]:
        return {
            "date_key": self.date_key,
            "total_amount": serialise_amount(self.total_amount),
            "total_cars": self.total_cars,
            "customer_count": self.customer_count,
            "groups": [group.as_dict() for group in self.groups],
        }


@dataclass(slots=True)
class ReportSnapshot:
    """Point-in-time export of both collections with derived totals."""

    customers: List[CustomerTransaction]
    expenses: List[ExpenseRecord]
    generated_at: datetime
    summary: FinancialSummary
    date_groups: List[DateGroup]

    def as_dict(self) -> Dict[str, object]:
        return {
            "customers": [customer.as_dict() for customer in self.customers],
            "expenses": [expense.as_dict() for expense in self.expenses],
            "generated_at": self.generated_at.isoformat(),
            "summary": self.summary.as_dict(),
            "date_groups": [group.as_dict() for group in self.date_groups],
        }


def compute_summary(
    customers: Sequence[CustomerTransaction], expenses: Sequence[ExpenseRecord]
) -> FinancialSummary:
    """Aggregate revenue, expenses and car counts across all records."""

    total_revenue = sum((Decimal(customer.amount) for customer in customers), Decimal("0"))
    total_expenses = sum((Decimal(expense.amount) for expense in expenses), Decimal("0"))
    total_cars = sum(customer.car_count for customer in customers)
    return FinancialSummary(
        total_revenue=total_revenue,
        total_expenses=total_expenses,
        net_total=total_revenue - total_expenses,
        total_cars=total_cars,
        customer_count=len(customers),
        expense_count=len(expenses),
    )


def compute_date_groups(
    customers: Sequence[CustomerTransaction], limit: Optional[int] = None
) -> List[DateGroup]:
    """Group transactions by calendar day, then by customer name.

    Days are returned most recent first and truncated to ``limit`` when given.
    Name groups and their entries keep the order in which transactions appear
    in ``customers``; the group's ``goods_type`` is the first one seen.
    """

    buckets: Dict[date, Dict[str, NameGroup]] = {}
    for customer in customers:
        by_name = buckets.setdefault(customer.created_at.date(), {})
        group = by_name.get(customer.name)
        if group is None:
            group = by_name[customer.name] = NameGroup(
                name=customer.name, goods_type=customer.goods_type
            )
        group.add(customer)

    ordered_days: List[Tuple[date, Dict[str, NameGroup]]] = sorted(
        buckets.items(), key=lambda item: item[0], reverse=True
    )
    if limit is not None:
        ordered_days = ordered_days[: max(limit, 0)]
    return [DateGroup(day=day, groups=list(by_name.values())) for day, by_name in ordered_days]


class LedgerAggregator:
    """Compute summaries and groupings from the current contents of a store."""

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def _customers(self) -> List[CustomerTransaction]:
        return self._store.list_all(RecordKind.CUSTOMERS)  # type: ignore[return-value]

    def _expenses(self) -> List[ExpenseRecord]:
        return self._store.list_all(RecordKind.EXPENSES)  # type: ignore[return-value]

    def compute_summary(self) -> FinancialSummary:
        summary = compute_summary(self._customers(), self._expenses())
        LOGGER.debug(
            "Summary -> revenue: %s expenses: %s net: %s cars: %s",
            summary.total_revenue,
            summary.total_expenses,
            summary.net_total,
            summary.total_cars,
        )
        return summary

    def compute_date_groups(self, limit: Optional[int] = None) -> List[DateGroup]:
        date_groups = compute_date_groups(self._customers(), limit=limit)
        LOGGER.debug("Computed %s date groups (limit=%s)", len(date_groups), limit)
        return date_groups

    def export_snapshot(self, generated_at: Optional[datetime] = None) -> ReportSnapshot:
        """Capture both collections, the full grouping and the global summary."""

        customers = self._customers()
        expenses = self._expenses()
        snapshot = ReportSnapshot(
            customers=customers,
            expenses=expenses,
            generated_at=generated_at or datetime.now(),
            summary=compute_summary(customers, expenses),
            date_groups=compute_date_groups(customers),
        )
        LOGGER.info(
            "Report snapshot generated with %s customers and %s expenses",
            len(customers),
            len(expenses),
        )
        return snapshot
