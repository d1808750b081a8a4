"""Stub banking data provider for offline/testing use."""

from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from coach.core.timezone import now_utc
from coach.domain.models import (
    Account,
    DateRange,
    IncomeStream,
    Owner,
    ProviderCredentials,
    RecurringExpense,
    ResourceType,
    Transaction,
    TransactionFlow,
)

# (suffix, category, name, available, current)
_STUB_ACCOUNTS: list[tuple[str, str, str, Decimal, Decimal]] = [
    ("chk", "CHECKING_ACCOUNT", "Conta Corrente", Decimal("1000.00"), Decimal("1080.00")),
    ("sav", "SAVINGS_ACCOUNT", "Poupança", Decimal("250.50"), Decimal("250.50")),
]

# (days before window end, flow, amount, description)
_STUB_TRANSACTIONS: list[tuple[int, TransactionFlow, Decimal, str]] = [
    (5, TransactionFlow.INFLOW, Decimal("2000.00"), "SALARIO"),
    (35, TransactionFlow.INFLOW, Decimal("2000.00"), "SALARIO"),
    (65, TransactionFlow.INFLOW, Decimal("2000.00"), "SALARIO"),
    (3, TransactionFlow.OUTFLOW, Decimal("1200.00"), "ALUGUEL"),
    (33, TransactionFlow.OUTFLOW, Decimal("1200.00"), "ALUGUEL"),
    (63, TransactionFlow.OUTFLOW, Decimal("1200.00"), "ALUGUEL"),
    (10, TransactionFlow.OUTFLOW, Decimal("300.00"), "SUPERMERCADO"),
    (40, TransactionFlow.OUTFLOW, Decimal("300.00"), "SUPERMERCADO"),
    (70, TransactionFlow.OUTFLOW, Decimal("300.00"), "SUPERMERCADO"),
]


class StubBankingDataProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Every link gets the same two accounts and a quarter of salary, rent and
    groceries: inflow 6000, outflow 4500. No income streams are reported, so
    summaries fall back to transaction-derived income.
    """

    def __init__(self, currency: str = "BRL"):
        self._currency = currency

    def fetch(
        self,
        resource: ResourceType,
        link_id: str,
        credentials: ProviderCredentials,
        date_range: Optional[DateRange] = None,
    ) -> list:
        """Return stub records for the requested resource."""
        if resource == ResourceType.ACCOUNTS:
            return self._accounts(link_id)
        if resource == ResourceType.TRANSACTIONS:
            end = date_range.date_to if date_range else now_utc().date()
            return self._transactions(link_id, end, date_range)
        if resource == ResourceType.OWNERS:
            return [Owner(owner_id=f"{link_id}-owner", link_id=link_id, display_name="Maria Silva")]
        if resource == ResourceType.INCOMES:
            return []
        if resource == ResourceType.RECURRING_EXPENSES:
            return [
                RecurringExpense(
                    expense_id=f"{link_id}-rent",
                    account_id=f"{link_id}-chk",
                    average_transaction_amount=Decimal("1200.00"),
                    frequency="MONTHLY",
                    category="Housing",
                    currency=self._currency,
                )
            ]
        return []

    def _accounts(self, link_id: str) -> list[Account]:
        return [
            Account(
                account_id=f"{link_id}-{suffix}",
                link_id=link_id,
                category=category,
                name=name,
                currency=self._currency,
                current_balance=current,
                available_balance=available,
                institution="Stub Bank",
            )
            for suffix, category, name, available, current in _STUB_ACCOUNTS
        ]

    def _transactions(
        self, link_id: str, end: date, date_range: Optional[DateRange]
    ) -> list[Transaction]:
        result: list[Transaction] = []
        for i, (days_back, flow, amount, description) in enumerate(_STUB_TRANSACTIONS):
            booked = end - timedelta(days=days_back)
            if date_range and booked < date_range.date_from:
                continue
            result.append(
                Transaction(
                    transaction_id=f"{link_id}-txn-{i}",
                    account_id=f"{link_id}-chk",
                    flow=flow,
                    amount=amount,
                    currency=self._currency,
                    description=description,
                    accounting_date=booked,
                )
            )
        return result
