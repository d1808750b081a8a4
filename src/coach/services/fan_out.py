"""Concurrent per-link fetching with independent outcomes."""

import logging
from concurrent.futures import Future, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional, Sequence

from coach.core.exceptions import ResourceUnavailableError, short_id
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
)
from coach.providers.banking_data_provider import BankingDataProvider

logger = logging.getLogger(__name__)

DETAILED_RESOURCES: tuple[ResourceType, ...] = (
    ResourceType.OWNERS,
    ResourceType.ACCOUNTS,
    ResourceType.TRANSACTIONS,
    ResourceType.INCOMES,
)

SUMMARY_RESOURCES: tuple[ResourceType, ...] = (
    ResourceType.ACCOUNTS,
    ResourceType.TRANSACTIONS,
    ResourceType.INCOMES,
    ResourceType.RECURRING_EXPENSES,
)


@dataclass(frozen=True)
class FetchOutcome:
    """Tagged result of one fetch: items on success, error on failure."""

    resource: ResourceType
    items: tuple = ()
    error: Optional[ResourceUnavailableError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class LinkFetchResult:
    """
    Outcomes of one fan-out, keyed by resource type.

    Accessors return an empty list for failed or unrequested resources.
    """

    link_id: str
    date_range: DateRange
    outcomes: dict[ResourceType, FetchOutcome] = field(default_factory=dict)

    def items(self, resource: ResourceType) -> list:
        outcome = self.outcomes.get(resource)
        if outcome is None or not outcome.ok:
            return []
        return list(outcome.items)

    @property
    def owners(self) -> list[Owner]:
        return self.items(ResourceType.OWNERS)

    @property
    def accounts(self) -> list[Account]:
        return self.items(ResourceType.ACCOUNTS)

    @property
    def transactions(self) -> list[Transaction]:
        return self.items(ResourceType.TRANSACTIONS)

    @property
    def income_streams(self) -> list[IncomeStream]:
        return self.items(ResourceType.INCOMES)

    @property
    def recurring_expenses(self) -> list[RecurringExpense]:
        return self.items(ResourceType.RECURRING_EXPENSES)

    @property
    def failed_resources(self) -> list[ResourceType]:
        return [r for r, outcome in self.outcomes.items() if not outcome.ok]

    @property
    def all_failed(self) -> bool:
        return bool(self.outcomes) and all(not o.ok for o in self.outcomes.values())


class FanOutCoordinator:
    """
    Issues one concurrent fetch per resource type and joins on all of them.

    A failing or slow fetch never affects its siblings: each task's result
    or exception is captured as a FetchOutcome. Tasks still running when the
    join timeout elapses are recorded as timed-out failures and abandoned.
    """

    def __init__(
        self,
        provider: BankingDataProvider,
        join_timeout_seconds: float = 45.0,
        lookback_months: int = 3,
        today: Callable[[], date] = lambda: now_utc().date(),
    ):
        self._provider = provider
        self._join_timeout = join_timeout_seconds
        self._lookback_months = lookback_months
        self._today = today

    def transaction_window(self) -> DateRange:
        """Return the trailing window transactions are fetched for."""
        return DateRange.trailing(self._lookback_months, self._today())

    def fetch_all(
        self,
        link_id: str,
        credentials: ProviderCredentials,
        resources: Sequence[ResourceType] = DETAILED_RESOURCES,
    ) -> LinkFetchResult:
        """
        Fetch `resources` for a link concurrently and wait for every one.

        Never raises for fetch failures; even if all fail the result is
        returned with every outcome marked failed.
        """
        date_range = self.transaction_window()
        result = LinkFetchResult(link_id=link_id, date_range=date_range)
        if not resources:
            return result

        executor = ThreadPoolExecutor(
            max_workers=len(resources), thread_name_prefix=f"fetch-{short_id(link_id)}"
        )
        try:
            futures: dict[ResourceType, Future] = {
                resource: executor.submit(
                    self._provider.fetch,
                    resource,
                    link_id,
                    credentials,
                    date_range if resource == ResourceType.TRANSACTIONS else None,
                )
                for resource in resources
            }
            wait(futures.values(), timeout=self._join_timeout)
        finally:
            # Do not block on stragglers; their results are discarded
            executor.shutdown(wait=False, cancel_futures=True)

        for resource, future in futures.items():
            result.outcomes[resource] = self._outcome(resource, link_id, future)

        failed = result.failed_resources
        if failed:
            logger.warning(
                "Fan-out for link %s: %d/%d fetches failed (%s)",
                short_id(link_id),
                len(failed),
                len(resources),
                ", ".join(r.value for r in failed),
            )
        return result

    def _outcome(self, resource: ResourceType, link_id: str, future: Future) -> FetchOutcome:
        if future.cancelled() or not future.done():
            future.cancel()
            error = ResourceUnavailableError(resource.value, link_id, "fetch timed out")
            logger.warning("%s", error.message)
            return FetchOutcome(resource=resource, error=error)

        exc = future.exception()
        if exc is None:
            return FetchOutcome(resource=resource, items=tuple(future.result() or ()))

        if isinstance(exc, ResourceUnavailableError):
            error = exc
        else:
            # Provider bugs degrade the same way as remote failures
            error = ResourceUnavailableError(resource.value, link_id, f"unexpected error: {exc!r}")
        logger.warning("%s", error.message)
        return FetchOutcome(resource=resource, error=error)
