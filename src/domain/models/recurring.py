"""Domain models for externally owned planning reference data."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class RecurringDefinition:
    """Template for a repeating income or expense.

    Attributes:
        id: Budget item ID (e.g. ``R35``).
        name: Display name.
        type: ``Income`` or ``Expense``.
        category: Category code (``Savings``, ``Food``...).
        amount: Native amount per occurrence.
        currency: Currency of ``amount``.
        frequency: Raw frequency (times per year, a keyword, or a
            semicolon-separated month list).
        specific_month: Raw designated month or semicolon-separated list.
        payment_day: Day of month the payment happens, when known.
        start_date: First month the item applies (inclusive).
        end_date: Last month the item applies (inclusive).
    """

    id: str
    name: str
    type: str
    category: str
    amount: Decimal
    currency: str
    frequency: str = "12"
    specific_month: str = ""
    payment_day: int | None = None
    start_date: date | None = None
    end_date: date | None = None
    category_name: str = ""
    note: str = ""


@dataclass(frozen=True)
class OneOffEvent:
    """Single-date income or expense."""

    id: str
    name: str
    type: str
    amount: Decimal
    date: date | None
    category: str = ""
    status: str = ""
    note: str = ""


@dataclass(frozen=True)
class InsuranceYearRecord:
    """Policy-year figures for an insurance-linked recurring item.

    Attributes:
        policy_id: Recurring item ID the record belongs to.
        date: Payment date of the policy year.
        year: Explicit policy calendar year, when provided.
        premium: Premium paid for the year.
        cash_value: Year-end cash value (actual, else expected).
        accumulated_savings: Accumulated savings amount.
        cost: Insurance cost portion of the premium.
        expense_component: Precomputed expense part of the premium.
        savings_component: Precomputed savings part of the premium.
        gain_component: Precomputed cash-value gain.
    """

    policy_id: str
    date: date | None
    year: int | None
    premium: Decimal
    cash_value: Decimal
    accumulated_savings: Decimal = Decimal("0")
    cost: Decimal = Decimal("0")
    expense_component: Decimal = Decimal("0")
    savings_component: Decimal = Decimal("0")
    gain_component: Decimal = Decimal("0")

    @property
    def calendar_year(self) -> int | None:
        if self.date is not None:
            return self.date.year
        return self.year


@dataclass(frozen=True)
class Asset:
    """Holding from the asset inventory."""

    id: str
    type: str
    category: str
    name: str
    quantity: Decimal
    currency: str
    unit_price: Decimal | None = None
    location: str = ""
    note: str = ""


__all__ = [
    "RecurringDefinition",
    "OneOffEvent",
    "InsuranceYearRecord",
    "Asset",
]
