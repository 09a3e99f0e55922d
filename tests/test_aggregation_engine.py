"""Mini README: Tests for ledger summaries and day/customer grouping.

These tests cover the global summary arithmetic, the lossless two-level
partition of customer transactions, the payment-completeness flag, the
recent-day limit and the report snapshot assembled from a live store.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from haulbook.aggregation import LedgerAggregator, compute_date_groups, compute_summary
from haulbook.records import (
    CustomerTransaction,
    ExpenseRecord,
    PaymentStatus,
    RecordKind,
    RecordStore,
)


def transaction(
    record_id: int,
    name: str,
    created_at: datetime,
    *,
    goods_type: str = "Cement",
    car_count: int = 1,
    amount: str = "100",
    paid: bool = True,
) -> CustomerTransaction:
    return CustomerTransaction(
        id=record_id,
        name=name,
        goods_type=goods_type,
        car_count=car_count,
        amount=amount,
        payment_status=PaymentStatus.PAID if paid else PaymentStatus.UNPAID,
        created_at=created_at,
    )


def test_worked_example_summary_and_group() -> None:
    """Two deliveries to the same customer on one day with one expense."""

    day1 = datetime(2024, 5, 1, 9, 0)
    customers = [
        transaction(1, "A", day1, goods_type="X", car_count=2, amount="100", paid=True),
        transaction(2, "A", day1, goods_type="X", car_count=1, amount="50", paid=False),
    ]
    expenses = [ExpenseRecord(id=1, description="fuel", amount="30", created_at=day1)]

    summary = compute_summary(customers, expenses)
    assert summary.total_revenue == Decimal("150")
    assert summary.total_expenses == Decimal("30")
    assert summary.net_total == Decimal("120")
    assert summary.total_cars == 3
    assert (summary.customer_count, summary.expense_count) == (2, 1)

    date_groups = compute_date_groups(customers)
    assert [group.date_key for group in date_groups] == ["01/05/2024"]
    group = date_groups[0].groups[0]
    assert group.name == "A"
    assert group.total_cars == 3
    assert group.total_amount == Decimal("150")
    assert group.all_paid is False
    assert [entry.id for entry in group.entries] == [1, 2]


def test_empty_lists_produce_zero_summary() -> None:
    summary = compute_summary([], [])

    assert summary.total_revenue == Decimal("0")
    assert summary.net_total == Decimal("0")
    assert summary.total_cars == 0
    assert summary.as_dict()["net_total"] == "0.00"
    assert compute_date_groups([]) == []


def test_decimal_sums_do_not_drift() -> None:
    """Cent values add up exactly instead of accumulating float error."""

    moment = datetime(2024, 5, 1, 9, 0)
    customers = [transaction(index, "A", moment, amount="0.10") for index in range(1, 11)]
    expenses = [ExpenseRecord(id=1, description="tip", amount="0.30", created_at=moment)]

    summary = compute_summary(customers, expenses)
    assert summary.total_revenue == Decimal("1.00")
    assert summary.net_total == Decimal("0.70")


def test_grouping_is_lossless_partition() -> None:
    """Group totals add back up to the global revenue and car count."""

    customers = [
        transaction(6, "B", datetime(2024, 5, 3, 17, 0), car_count=4, amount="410.25"),
        transaction(5, "A", datetime(2024, 5, 3, 8, 0), car_count=1, amount="99.75"),
        transaction(4, "A", datetime(2024, 5, 2, 15, 0), car_count=2, amount="250"),
        transaction(3, "C", datetime(2024, 5, 2, 9, 0), car_count=3, amount="300"),
        transaction(2, "A", datetime(2024, 5, 1, 11, 0), car_count=5, amount="120.50"),
        transaction(1, "A", datetime(2024, 5, 1, 10, 0), car_count=1, amount="10"),
    ]
    summary = compute_summary(customers, [])
    date_groups = compute_date_groups(customers)

    grouped_amount = sum(
        (group.total_amount for day in date_groups for group in day.groups), Decimal("0")
    )
    grouped_cars = sum(group.total_cars for day in date_groups for group in day.groups)
    assert grouped_amount == summary.total_revenue
    assert grouped_cars == summary.total_cars
    assert [day.date_key for day in date_groups] == ["03/05/2024", "02/05/2024", "01/05/2024"]
    assert [group.name for group in date_groups[0].groups] == ["B", "A"]
    assert date_groups[2].customer_count == 1
    assert date_groups[2].total_amount == Decimal("130.50")


def test_limit_keeps_most_recent_days_only() -> None:
    customers = [
        transaction(index, "A", datetime(2024, 5, day, 9, 0))
        for index, day in enumerate((1, 7, 3, 5), start=1)
    ]

    recent = compute_date_groups(customers, limit=3)

    assert [day.date_key for day in recent] == ["07/05/2024", "05/05/2024", "03/05/2024"]


def test_goods_type_keeps_first_seen_and_lists_all() -> None:
    moment = datetime(2024, 5, 1, 9, 0)
    customers = [
        transaction(2, "A", moment, goods_type="Bricks"),
        transaction(1, "A", moment, goods_type="Cement"),
        transaction(3, "A", moment, goods_type="Bricks"),
    ]

    group = compute_date_groups(customers)[0].groups[0]

    assert group.goods_type == "Bricks"
    assert group.goods_types == ["Bricks", "Cement"]


def test_all_paid_flips_when_one_entry_becomes_unpaid() -> None:
    """Marking a single entry unpaid clears the group's paid flag."""

    store = RecordStore(clock=lambda: datetime(2024, 5, 1, 9, 0))
    fields = {"name": "A", "goods_type": "X", "car_count": 1, "amount": "10", "payment_status": "paid"}
    store.create(RecordKind.CUSTOMERS, fields)
    second = store.create(RecordKind.CUSTOMERS, fields)
    aggregator = LedgerAggregator(store)

    assert aggregator.compute_date_groups()[0].groups[0].all_paid is True

    store.update(RecordKind.CUSTOMERS, second.id, {"payment_status": "unpaid"})

    assert aggregator.compute_date_groups()[0].groups[0].all_paid is False


def test_aggregator_recomputes_after_writes_and_is_idempotent() -> None:
    store = RecordStore(clock=lambda: datetime(2024, 5, 1, 9, 0))
    aggregator = LedgerAggregator(store)
    record = store.create(
        RecordKind.CUSTOMERS,
        {"name": "A", "goods_type": "X", "car_count": 2, "amount": "80", "payment_status": "paid"},
    )
    store.create(RecordKind.EXPENSES, {"description": "fuel", "amount": "30"})

    assert aggregator.compute_summary() == aggregator.compute_summary()
    assert aggregator.compute_summary().net_total == Decimal("50")

    store.delete(RecordKind.CUSTOMERS, record.id)

    assert aggregator.compute_summary().net_total == Decimal("-30")
    assert aggregator.compute_date_groups() == []


def test_export_snapshot_serialises_everything() -> None:
    store = RecordStore(clock=lambda: datetime(2024, 5, 1, 9, 0))
    store.create(
        RecordKind.CUSTOMERS,
        {"name": "A", "goods_type": "X", "car_count": 2, "amount": "80", "payment_status": "paid"},
    )
    generated_at = datetime(2024, 5, 2, 18, 30)

    payload = LedgerAggregator(store).export_snapshot(generated_at=generated_at).as_dict()

    assert payload["generated_at"] == generated_at.isoformat()
    assert payload["customers"][0]["amount"] == "80"
    assert payload["expenses"] == []
    assert payload["summary"]["total_revenue"] == "80.00"
    assert payload["date_groups"][0]["groups"][0]["total_amount"] == "80.00"
