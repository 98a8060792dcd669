"""Twelve-month cash-flow projection from recurring definitions.

Every month of the target year sums the applicable recurring items and the
one-off events dated in that month into income, expense and savings.
Savings are retained assets, so the projected net worth grows by the net
cash change plus savings.
"""

import calendar
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from decimal import Decimal

from src.domain.constants import (
    BASE_CURRENCY,
    HOUSE_CATEGORY,
    INCOME_TYPE,
    INSURANCE_COMPONENT_POLICY,
    INSURANCE_COST_POLICY,
    INSURANCE_POLICY_IDS,
    PROJECTION_MONTHS,
    SAVINGS_CATEGORIES,
    SAVINGS_NAME_KEYWORDS,
)
from src.domain.models import (
    InsuranceYearRecord,
    OneOffEvent,
    ProjectionLine,
    ProjectionMonth,
    RecurringDefinition,
)
from src.utils.decimal_utils import coerce_decimal, round_half_up


_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

FREQUENCY_KEYWORDS = {
    "year": 1,
    "yearly": 1,
    "month": 12,
    "monthly": 12,
    "quarter": 4,
    "quarterly": 4,
    "week": 52,
    "weekly": 52,
}


def _leading_int(value: str) -> int | None:
    match = _LEADING_INT.match(value or "")
    return int(match.group(1)) if match else None


def parse_frequency(frequency: str) -> int:
    """Return times per year; unknown values default to monthly."""
    raw = (frequency or "").strip().lower()
    if raw in FREQUENCY_KEYWORDS:
        return FREQUENCY_KEYWORDS[raw]
    parsed = _leading_int(raw)
    return parsed if parsed is not None else 12


def parse_month_list(value: str) -> set[int]:
    """Parse ``"1;4;7;10"`` into month numbers, ignoring junk entries."""
    months = set()
    for part in (value or "").split(";"):
        parsed = _leading_int(part)
        if parsed is not None:
            months.add(parsed)
    return months


def applies_in_month(definition: RecurringDefinition, month: int) -> bool:
    """Return whether a recurring item is due in the given month (1-12).

    An explicit semicolon-separated list (in the specific month or the
    frequency field) wins. Otherwise 12 means every month, 4 the first month
    of each quarter and 1 the designated month (January by default).
    """
    frequency = str(definition.frequency or "").strip()
    specific = str(definition.specific_month or "").strip()
    if ";" in specific or ";" in frequency:
        source = specific if ";" in specific else frequency
        return month in parse_month_list(source)

    times = parse_frequency(frequency)
    if times == 12:
        return True
    if times == 4:
        return (month - 1) % 3 == 0
    if times == 1:
        target = _leading_int(specific) if specific else None
        return month == (target if target is not None else 1)
    return False


def within_bounds(
    definition: RecurringDefinition,
    year: int,
    month: int,
) -> bool:
    """Compare the month against the item's start/end dates by month."""
    start = definition.start_date
    end = definition.end_date
    if start is not None and (year, month) < (start.year, start.month):
        return False
    if end is not None and (year, month) > (end.year, end.month):
        return False
    return True


def rate_for(currency: str, rates: Mapping[str, Decimal]) -> Decimal:
    """Return the caller-supplied rate to base, or 1 when unknown."""
    if not currency or currency == BASE_CURRENCY:
        return Decimal("1")
    rate = rates.get(currency.upper())
    return coerce_decimal(rate) if rate else Decimal("1")


def is_savings_item(definition: RecurringDefinition) -> bool:
    if definition.category in SAVINGS_CATEGORIES:
        return True
    return any(keyword in definition.name for keyword in SAVINGS_NAME_KEYWORDS)


@dataclass
class _MonthTotals:
    income: Decimal = Decimal("0")
    expense: Decimal = Decimal("0")
    savings: Decimal = Decimal("0")
    insurance_gain: Decimal = Decimal("0")
    income_items: list[ProjectionLine] = field(default_factory=list)
    expense_items: list[ProjectionLine] = field(default_factory=list)
    savings_items: list[ProjectionLine] = field(default_factory=list)

    def add_income(self, line: ProjectionLine) -> None:
        self.income += line.amount
        self.income_items.append(line)

    def add_expense(self, line: ProjectionLine) -> None:
        self.expense += line.amount
        self.expense_items.append(line)

    def add_savings(self, line: ProjectionLine) -> None:
        self.savings += line.amount
        self.savings_items.append(line)


def _insurance_record_for_year(
    records: Iterable[InsuranceYearRecord],
    year: int,
) -> InsuranceYearRecord | None:
    return next(
        (record for record in records if record.calendar_year == year),
        None,
    )


def _split_insurance(
    definition: RecurringDefinition,
    amount: Decimal,
    rate: Decimal,
    record: InsuranceYearRecord | None,
    totals: _MonthTotals,
) -> None:
    """Split an insurance premium into cost, cash value and gain lines."""
    policy_id = definition.id.strip()
    converted = rate != 1
    savings_part = Decimal("0")
    expense_part = amount
    gain_part = Decimal("0")

    if record is not None:
        if policy_id == INSURANCE_COMPONENT_POLICY:
            savings_part = record.savings_component * rate
            expense_part = record.expense_component * rate
            gain_part = record.gain_component * rate
            savings_part += gain_part
        elif policy_id == INSURANCE_COST_POLICY:
            expense_part = record.cost * rate
            savings_part = amount - expense_part

    expense_part = max(expense_part, Decimal("0"))
    savings_part = max(savings_part, Decimal("0"))
    if policy_id == INSURANCE_COST_POLICY:
        savings_part = min(savings_part, amount)

    if savings_part > 0:
        if policy_id == INSURANCE_COMPONENT_POLICY and gain_part > 0:
            base_savings = savings_part - gain_part
            if base_savings > 0:
                totals.savings_items.append(
                    ProjectionLine(
                        f"{definition.name} (CV/Inv)",
                        base_savings,
                        definition.id,
                        converted,
                    )
                )
            totals.savings_items.append(
                ProjectionLine(
                    f"{definition.name} (Win)",
                    gain_part,
                    definition.id,
                    converted,
                )
            )
        else:
            totals.savings_items.append(
                ProjectionLine(
                    f"{definition.name} (CV/Inv)",
                    savings_part,
                    definition.id,
                    converted,
                )
            )
        totals.savings += savings_part
    if expense_part > 0:
        totals.add_expense(
            ProjectionLine(
                f"{definition.name} (Cost)",
                expense_part,
                definition.id,
                converted,
            )
        )
    if gain_part > 0:
        totals.insurance_gain += gain_part


def _add_recurring(
    definition: RecurringDefinition,
    year: int,
    rates: Mapping[str, Decimal],
    insurance: Mapping[str, list[InsuranceYearRecord]],
    totals: _MonthTotals,
) -> None:
    rate = rate_for(definition.currency, rates)
    amount = coerce_decimal(definition.amount) * rate
    line = ProjectionLine(definition.name, amount, definition.id, rate != 1)

    if definition.type == INCOME_TYPE:
        totals.add_income(line)
    elif definition.id.strip() in INSURANCE_POLICY_IDS:
        record = _insurance_record_for_year(
            insurance.get(definition.id.strip(), []),
            year,
        )
        _split_insurance(definition, amount, rate, record, totals)
    elif is_savings_item(definition):
        totals.add_savings(line)
    else:
        totals.add_expense(line)


def _add_event(event: OneOffEvent, totals: _MonthTotals) -> None:
    amount = coerce_decimal(event.amount)
    if amount == 0:
        return
    name = f"{event.name} (Event)"
    if event.type == INCOME_TYPE:
        totals.add_income(ProjectionLine(name, amount, event.id))
    elif event.category == HOUSE_CATEGORY:
        totals.add_savings(
            ProjectionLine(f"{name} (Equity)", amount, event.id)
        )
    else:
        totals.add_expense(ProjectionLine(name, amount, event.id))


def group_insurance_records(
    records: Iterable[InsuranceYearRecord],
) -> dict[str, list[InsuranceYearRecord]]:
    """Index insurance year records by policy ID."""
    grouped: dict[str, list[InsuranceYearRecord]] = {}
    for record in records:
        grouped.setdefault(record.policy_id.strip(), []).append(record)
    return grouped


def project_cash_flow(
    recurring: Iterable[RecurringDefinition],
    target_year: int,
    initial_total: Decimal = Decimal("0"),
    insurance: Mapping[str, list[InsuranceYearRecord]] | None = None,
    rates: Mapping[str, Decimal] | None = None,
    one_off_events: Iterable[OneOffEvent] = (),
) -> list[ProjectionMonth]:
    """Project income, expense, savings and net worth for a calendar year.

    Args:
        recurring: Recurring definitions to expand.
        target_year: Calendar year to project.
        initial_total: Net worth before January of the target year.
        insurance: Insurance year records per policy ID.
        rates: Currency to base-currency rates.
        one_off_events: Single-date events added on top.

    Returns:
        list[ProjectionMonth]: Twelve months, January to December.
    """
    recurring = list(recurring)
    one_off_events = list(one_off_events)
    insurance = insurance or {}
    rates = rates or {}

    months = []
    accumulated = coerce_decimal(initial_total)
    for month in range(1, PROJECTION_MONTHS + 1):
        totals = _MonthTotals()
        for definition in recurring:
            if not within_bounds(definition, target_year, month):
                continue
            if not applies_in_month(definition, month):
                continue
            _add_recurring(definition, target_year, rates, insurance, totals)

        for event in one_off_events:
            if event.date is None:
                continue
            if (event.date.year, event.date.month) == (target_year, month):
                _add_event(event, totals)

        net = round_half_up(
            totals.income
            - totals.expense
            - (totals.savings - totals.insurance_gain)
        )
        accumulated += round_half_up(net + totals.savings)
        months.append(
            ProjectionMonth(
                year=target_year,
                month=month,
                label=f"{calendar.month_abbr[month]} {target_year}",
                income=round_half_up(totals.income),
                expense=round_half_up(totals.expense),
                savings=round_half_up(totals.savings),
                insurance_gain=totals.insurance_gain,
                net=net,
                projected_net_worth=accumulated,
                income_items=totals.income_items,
                expense_items=totals.expense_items,
                savings_items=totals.savings_items,
            )
        )
    return months


__all__ = [
    "FREQUENCY_KEYWORDS",
    "parse_frequency",
    "parse_month_list",
    "applies_in_month",
    "within_bounds",
    "rate_for",
    "is_savings_item",
    "group_insurance_records",
    "project_cash_flow",
]
