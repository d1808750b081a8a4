"""Financial summary derivation from fetched link data."""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Sequence

from coach.core.timezone import now_utc
from coach.domain.models import Account, IncomeStream, RecurringExpense, Transaction
from coach.domain.views import FinancialSummary

DEFAULT_MONTHS_COVERED = Decimal("3")
CENT = Decimal("0.01")
ZERO = Decimal("0")


def _to_cents(value: Decimal) -> Decimal:
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def build_summary(
    link_id: str,
    accounts: Sequence[Account],
    transactions: Sequence[Transaction],
    income_streams: Sequence[IncomeStream],
    *,
    recurring_expenses: Optional[Sequence[RecurringExpense]] = None,
    months_covered: Decimal = DEFAULT_MONTHS_COVERED,
    default_currency: str = "BRL",
    generated_at: Optional[datetime] = None,
) -> FinancialSummary:
    """
    Build the financial summary of a link from whatever data arrived.

    Missing resources are simply empty sequences; this never raises.

    - Monthly inflow/outflow are the transaction totals divided by
      `months_covered` (the span of the transaction fetch window).
    - Monthly income is the sum of income stream averages when that sum is
      nonzero, otherwise the transaction-derived inflow.
    - Variable expenses are the transaction-derived outflow.
    - Fixed expenses are the sum of recurring expense averages when those
      are supplied, otherwise zero.
    - Currency comes from the first account, else `default_currency`.

    Monthly figures are rounded to cents.
    """
    if months_covered <= ZERO:
        months_covered = DEFAULT_MONTHS_COVERED

    total_inflow = sum((t.amount for t in transactions if t.is_inflow), ZERO)
    total_outflow = sum((t.amount for t in transactions if t.is_outflow), ZERO)

    monthly_inflow = _to_cents(total_inflow / months_covered)
    monthly_outflow = _to_cents(total_outflow / months_covered)

    # Provider income streams beat inferring income from raw inflows
    stream_income = sum((s.monthly_average for s in income_streams), ZERO)
    monthly_income = _to_cents(stream_income) if stream_income != ZERO else monthly_inflow

    fixed_expenses = ZERO
    if recurring_expenses:
        fixed_expenses = _to_cents(
            sum((e.average_transaction_amount for e in recurring_expenses), ZERO)
        )

    currency = accounts[0].currency if accounts and accounts[0].currency else default_currency

    return FinancialSummary(
        link_id=link_id,
        generated_at=generated_at or now_utc(),
        monthly_income=monthly_income,
        monthly_fixed_expenses=fixed_expenses,
        monthly_variable_expenses=monthly_outflow,
        currency=currency,
        accounts=tuple(accounts),
        transactions=tuple(transactions),
        income_streams=tuple(income_streams),
        recurring_expenses=tuple(recurring_expenses or ()),
    )
