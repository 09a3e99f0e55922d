"""Mini README: Interactive expand/collapse view of recent daily operations.

Structure:
    * EntryNode - one transaction line with its edit/delete affordances.
    * GroupNode - one customer's deliveries on a day.
    * DayNode - header for a calendar day, optionally holding its groups.
    * DailyOperationsView - tracks which days are expanded and builds nodes.

The view holds no ledger data of its own. It receives date groups from the
aggregation layer on every render and only remembers the set of expanded
date keys between renders. Collapsed days still report their customer count
and day total so the dashboard can show a compact header.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..aggregation import DateGroup, NameGroup, serialise_amount
from ..logging_utils import get_logger
from ..records import ExpenseRecord

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class EntryNode:
    record_id: int
    car_count: int
    amount: str
    payment_status: str
    resource_path: str
    edit_path: str
    delete_path: str

    def as_dict(self) -> Dict[str, object]:
        return {
            "id": self.record_id,
            "car_count": self.car_count,
            "amount": self.amount,
            "payment_status": self.payment_status,
            "actions": {
                "resource": self.resource_path,
                "edit": self.edit_path,
                "delete": self.delete_path,
            },
        }


@dataclass(slots=True)
class GroupNode:
    name: str
    goods_type: str
    total_cars: int
    total_amount: str
    all_paid: bool
    entries: List[EntryNode]

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    def as_dict(self) -> Dict[str, object]:
        return {
            "name": self.name,
            "goods_type": self.goods_type,
            "total_cars": self.total_cars,
            "total_amount": self.total_amount,
            "all_paid": self.all_paid,
            "entry_count": self.entry_count,
            "entries": [entry.as_dict() for entry in self.entries],
        }


@dataclass(slots=True)
class DayNode:
    date_key: str
    expanded: bool
    customer_count: int
    total_amount: str
    groups: List[GroupNode] = field(default_factory=list)

    def as_dict(self) -> Dict[str, object]:
        return {
            "date_key": self.date_key,
            "expanded": self.expanded,
            "customer_count": self.customer_count,
            "total_amount": self.total_amount,
            "groups": [group.as_dict() for group in self.groups],
        }


class DailyOperationsView:
    """Remember which days are expanded and render date groups as a tree."""

    def __init__(
        self,
        expanded: Optional[Iterable[str]] = None,
        *,
        resource_prefix: str = "/api/customers",
        form_prefix: str = "/customers",
    ) -> None:
        self._expanded: Set[str] = set(expanded or ())
        self._resource_prefix = resource_prefix.rstrip("/")
        self._form_prefix = form_prefix.rstrip("/")

    @property
    def expanded(self) -> Set[str]:
        return set(self._expanded)

    def is_expanded(self, date_key: str) -> bool:
        return date_key in self._expanded

    def expand(self, date_key: str) -> None:
        self._expanded.add(date_key)

    def collapse(self, date_key: str) -> None:
        self._expanded.discard(date_key)

    def toggle(self, date_key: str) -> bool:
        """Flip a day's expansion and return the new state."""

        if date_key in self._expanded:
            self._expanded.remove(date_key)
            expanded = False
        else:
            self._expanded.add(date_key)
            expanded = True
        LOGGER.debug("Day %s expanded=%s", date_key, expanded)
        return expanded

    def build(self, date_groups: Sequence[DateGroup]) -> List[DayNode]:
        """Convert date groups to day nodes, listing groups only for expanded days."""

        nodes: List[DayNode] = []
        for date_group in date_groups:
            expanded = date_group.date_key in self._expanded
            nodes.append(
                DayNode(
                    date_key=date_group.date_key,
                    expanded=expanded,
                    customer_count=date_group.customer_count,
                    total_amount=serialise_amount(date_group.total_amount),
                    groups=[self._group_node(group) for group in date_group.groups] if expanded else [],
                )
            )
        return nodes

    def _group_node(self, group: NameGroup) -> GroupNode:
        return GroupNode(
            name=group.name,
            goods_type=group.goods_type,
            total_cars=group.total_cars,
            total_amount=serialise_amount(group.total_amount),
            all_paid=group.all_paid,
            entries=[
                EntryNode(
                    record_id=entry.id,
                    car_count=entry.car_count,
                    amount=entry.amount,
                    payment_status=entry.payment_status.value,
                    resource_path=f"{self._resource_prefix}/{entry.id}",
                    edit_path=f"{self._form_prefix}/{entry.id}/edit",
                    delete_path=f"{self._form_prefix}/{entry.id}/delete",
                )
                for entry in group.entries
            ],
        )


def recent_expenses(expenses: Sequence[ExpenseRecord], limit: int = 3) -> List[ExpenseRecord]:
    """Return the newest ``limit`` expenses from a newest-first list."""

    return list(expenses[: max(limit, 0)])
