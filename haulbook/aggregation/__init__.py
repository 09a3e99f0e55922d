"""Mini README: Aggregation of ledger records into summaries and day groups.

Pure functions compute the global summary and the two-level day/customer
grouping from record lists; ``LedgerAggregator`` applies them to the live
contents of a ``RecordStore``.
"""

from .engine import (
    DateGroup,
    FinancialSummary,
    LedgerAggregator,
    NameGroup,
    ReportSnapshot,
    compute_date_groups,
    compute_summary,
    format_date_key,
    serialise_amount,
)

__all__ = [
    "DateGroup",
    "FinancialSummary",
    "LedgerAggregator",
    "NameGroup",
    "ReportSnapshot",
    "compute_date_groups",
    "compute_summary",
    "format_date_key",
    "serialise_amount",
]
