"""Pydantic result models for the monitoring and admin reports."""

import datetime as dt
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PaymentRow(BaseModel):
    id: int
    program: str
    full_name: str
    email: str
    phone: str
    transaction_id: str
    amount: Decimal
    currency: Optional[str] = None
    payment_method: Optional[str] = None
    status: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None


class RevenueTotals(BaseModel):
    total_payments: int
    total_revenue: Decimal


class ProgramRevenue(BaseModel):
    program: str
    transaction_count: int
    total_revenue: Decimal


class DailyRevenue(BaseModel):
    date: dt.date
    transactions: int
    revenue: Decimal


class HourlyTrend(BaseModel):
    hour: dt.datetime
    count: int
    total: Decimal


class DuplicateTransaction(BaseModel):
    transaction_id: str
    duplicates: int


class PaymentStatistics(BaseModel):
    """Aggregate amounts over all payments. Min/max/avg are None when empty."""
    total_payments: int
    total_revenue: Decimal
    avg_amount: Optional[Decimal] = None
    min_amount: Optional[Decimal] = None
    max_amount: Optional[Decimal] = None
