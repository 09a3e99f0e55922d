"""Mini README: Request payload schemas for the bookkeeping API.

Structure:
    * CustomerCreate / CustomerUpdate - delivery payloads (update is partial).
    * ExpenseCreate / ExpenseUpdate - expense payloads (update is partial).

Field constraints mirror the store invariants: names are non-empty, car
counts start at one and amounts are positive with at most two decimals.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from ..records import PaymentStatus


class CustomerCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Customer name")
    goods_type: str = Field(..., min_length=1, description="Type of goods delivered")
    car_count: int = Field(..., ge=1, description="Number of cars delivered")
    amount: Decimal = Field(..., gt=0, decimal_places=2, description="Amount charged")
    payment_status: PaymentStatus = Field(..., description="Whether the delivery is paid")


class CustomerUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    goods_type: Optional[str] = Field(None, min_length=1)
    car_count: Optional[int] = Field(None, ge=1)
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    payment_status: Optional[PaymentStatus] = None


class ExpenseCreate(BaseModel):
    description: str = Field(..., min_length=1, description="What the money was spent on")
    amount: Decimal = Field(..., gt=0, decimal_places=2, description="Amount spent")


class ExpenseUpdate(BaseModel):
    description: Optional[str] = Field(None, min_length=1)
    amount: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
