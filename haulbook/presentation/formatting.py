"""Mini README: Display formatting shared by the dashboard and reports."""

from __future__ import annotations

from decimal import Decimal
from typing import Union


def format_amount(value: Union[Decimal, str], currency: str = "IQD") -> str:
    """Render an amount with thousands separators, two decimals and a currency code."""

    amount = Decimal(value) if isinstance(value, str) else value
    return f"{amount:,.2f} {currency}"


def format_payment_label(paid: bool) -> str:
    return "Paid" if paid else "Unpaid"
