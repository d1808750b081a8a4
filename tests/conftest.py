"""
Pytest configuration and fixtures for financial context tests.

This module provides:
- A controllable clock for cache TTL tests
- Factory helpers for accounts, transactions, owners and income streams
- Scripted and failing banking data providers
- Service fixtures and a FastAPI test client backed by a scripted provider
"""

import threading
import time
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, Union

import pytest
from fastapi.testclient import TestClient

from coach.api.deps import get_context
from coach.app_context import AppContext
from coach.config.settings import Settings, reset_settings
from coach.core.exceptions import ResourceUnavailableError
from coach.core.timezone import UTC
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
from coach.main import app
from coach.services import ContextCache, ContextService, FanOutCoordinator

LINK_ID = "8f3a1c2e-5b7d-4e9f-a0b1-c2d3e4f5a6b7"
FIXED_TODAY = date(2024, 6, 15)


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a timezone-aware UTC datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: Optional[datetime] = None):
        self.now = start or utc_datetime(2024, 6, 15, 14, 30, 0)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Clock fixed at 2024-06-15 14:30 UTC."""
    return FakeClock()


@pytest.fixture(autouse=True)
def _clean_settings():
    """Make sure no test leaks settings into another."""
    reset_settings()
    yield
    reset_settings()


# =============================================================================
# FACTORIES
# =============================================================================


def make_account(
    account_id: str = "acc-1",
    available: Union[str, Decimal] = "0",
    current: Optional[Union[str, Decimal]] = None,
    category: str = "CHECKING_ACCOUNT",
    currency: str = "BRL",
    name: str = "Conta Corrente",
    link_id: str = LINK_ID,
) -> Account:
    return Account(
        account_id=account_id,
        link_id=link_id,
        category=category,
        name=name,
        currency=currency,
        current_balance=Decimal(current if current is not None else available),
        available_balance=Decimal(available),
    )


def make_transaction(
    flow: TransactionFlow,
    amount: Union[str, Decimal],
    transaction_id: Optional[str] = None,
    account_id: str = "acc-1",
    accounting_date: date = date(2024, 5, 10),
    description: str = "",
) -> Transaction:
    return Transaction(
        transaction_id=transaction_id or f"txn-{flow.value.lower()}-{amount}",
        account_id=account_id,
        flow=flow,
        amount=Decimal(amount),
        currency="BRL",
        description=description,
        accounting_date=accounting_date,
    )


def make_owner(display_name: str = "", full_name: str = "", link_id: str = LINK_ID) -> Owner:
    return Owner(owner_id="owner-1", link_id=link_id, display_name=display_name, full_name=full_name)


def make_income(monthly_average: Union[str, Decimal], income_id: str = "inc-1") -> IncomeStream:
    return IncomeStream(
        income_id=income_id,
        account_id="acc-1",
        monthly_average=Decimal(monthly_average),
        frequency="MONTHLY",
        currency="BRL",
    )


def make_recurring_expense(amount: Union[str, Decimal], expense_id: str = "rec-1") -> RecurringExpense:
    return RecurringExpense(
        expense_id=expense_id,
        account_id="acc-1",
        average_transaction_amount=Decimal(amount),
        frequency="MONTHLY",
        category="Housing",
        currency="BRL",
    )


# =============================================================================
# PROVIDERS
# =============================================================================


class ScriptedProvider:
    """
    Banking data provider answering from a fixed script.

    Each resource maps to a list (returned) or an exception (raised).
    Unscripted resources return an empty list. Calls are recorded.
    An optional barrier makes every fetch wait for its siblings, which only
    succeeds if the fetches really run at the same time.
    """

    def __init__(
        self,
        script: Optional[dict] = None,
        barrier: Optional[threading.Barrier] = None,
        delays: Optional[dict] = None,
    ):
        self._script = script or {}
        self._barrier = barrier
        self._delays = delays or {}
        self._lock = threading.Lock()
        self.calls: list[tuple[ResourceType, str, Optional[DateRange]]] = []

    def fetch(
        self,
        resource: ResourceType,
        link_id: str,
        credentials: ProviderCredentials,
        date_range: Optional[DateRange] = None,
    ) -> list:
        with self._lock:
            self.calls.append((resource, link_id, date_range))
        if self._barrier is not None:
            self._barrier.wait()
        if resource in self._delays:
            time.sleep(self._delays[resource])
        response = self._script.get(resource, [])
        if isinstance(response, Exception):
            raise response
        return list(response)

    def requested(self) -> set[ResourceType]:
        return {call[0] for call in self.calls}


class FailingProvider:
    """Provider whose every fetch fails."""

    def fetch(
        self,
        resource: ResourceType,
        link_id: str,
        credentials: ProviderCredentials,
        date_range: Optional[DateRange] = None,
    ) -> list:
        raise ResourceUnavailableError(resource.value, link_id, "provider returned status 503", 503)


def unavailable(resource: ResourceType, link_id: str = LINK_ID) -> ResourceUnavailableError:
    return ResourceUnavailableError(resource.value, link_id, "provider returned status 500", 500)


@pytest.fixture
def credentials() -> ProviderCredentials:
    """Well-formed sandbox credentials."""
    return ProviderCredentials(secret_id="test-secret-id", secret_key="test-secret-key")


@pytest.fixture
def sample_accounts() -> list[Account]:
    """Checking account with 1000.00 and savings with 250.50 available."""
    return [
        make_account("acc-1", available="1000.00", category="CHECKING_ACCOUNT"),
        make_account("acc-2", available="250.50", category="SAVINGS_ACCOUNT", name="Poupança"),
    ]


@pytest.fixture
def sample_transactions() -> list[Transaction]:
    """A quarter of data: inflow 6000, outflow 4500."""
    return [
        make_transaction(TransactionFlow.INFLOW, "2000.00", "in-1", accounting_date=date(2024, 4, 5)),
        make_transaction(TransactionFlow.INFLOW, "2000.00", "in-2", accounting_date=date(2024, 5, 5)),
        make_transaction(TransactionFlow.INFLOW, "2000.00", "in-3", accounting_date=date(2024, 6, 5)),
        make_transaction(TransactionFlow.OUTFLOW, "1500.00", "out-1", accounting_date=date(2024, 4, 8)),
        make_transaction(TransactionFlow.OUTFLOW, "1500.00", "out-2", accounting_date=date(2024, 5, 8)),
        make_transaction(TransactionFlow.OUTFLOW, "1500.00", "out-3", accounting_date=date(2024, 6, 8)),
    ]


@pytest.fixture
def full_script(sample_accounts, sample_transactions) -> dict:
    """Script where every resource succeeds."""
    return {
        ResourceType.OWNERS: [make_owner(display_name="Maria Silva")],
        ResourceType.ACCOUNTS: sample_accounts,
        ResourceType.TRANSACTIONS: sample_transactions,
        ResourceType.INCOMES: [],
        ResourceType.RECURRING_EXPENSES: [make_recurring_expense("1200.00")],
    }


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def context_cache(fake_clock) -> ContextCache:
    """Provide a 24h ContextCache driven by the fake clock."""
    return ContextCache(ttl_seconds=24 * 60 * 60, clock=fake_clock)


def make_coordinator(provider, join_timeout_seconds: float = 5.0) -> FanOutCoordinator:
    return FanOutCoordinator(
        provider=provider,
        join_timeout_seconds=join_timeout_seconds,
        lookback_months=3,
        today=lambda: FIXED_TODAY,
    )


def make_service(
    provider,
    cache: ContextCache,
    clock: FakeClock,
    default_credentials: Optional[ProviderCredentials] = None,
) -> ContextService:
    return ContextService(
        coordinator=make_coordinator(provider),
        cache=cache,
        default_currency="BRL",
        owner_placeholder="Unknown Customer",
        default_credentials=default_credentials,
        clock=clock,
    )


@pytest.fixture
def scripted_provider(full_script) -> ScriptedProvider:
    """Provider where every resource succeeds."""
    return ScriptedProvider(full_script)


@pytest.fixture
def context_service(scripted_provider, context_cache, fake_clock) -> ContextService:
    """Provide ContextService over the fully successful provider."""
    return make_service(scripted_provider, context_cache, fake_clock)


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def app_context(scripted_provider) -> AppContext:
    """Provide an AppContext whose provider is the scripted one."""
    return AppContext(settings=Settings(banking_provider="stub"), provider=scripted_provider)


@pytest.fixture
def client(app_context) -> TestClient:
    """Provide FastAPI test client bound to the test AppContext."""
    app.dependency_overrides[get_context] = lambda: app_context
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
