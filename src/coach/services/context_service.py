"""Financial context service: fan-out, summarize, cache."""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Callable, Optional

from coach.core.exceptions import AggregationError, ValidationError, short_id
from coach.core.timezone import now_utc
from coach.domain.models import Account, ProviderCredentials, select_owner_name
from coach.domain.views import CacheEntry, DetailedContextView, FinancialSummary
from coach.services.context_cache import ContextCache
from coach.services.fan_out import DETAILED_RESOURCES, SUMMARY_RESOURCES, FanOutCoordinator
from coach.services.summary_builder import build_summary

logger = logging.getLogger(__name__)

UNCATEGORIZED = "OTHER"


class ContextService:
    """
    Entry point for building and reusing a link's financial context.

    The detailed path tolerates any subset of failed fetches and always
    returns a view; the strict summary path requires every resource.
    """

    def __init__(
        self,
        coordinator: FanOutCoordinator,
        cache: ContextCache,
        default_currency: str = "BRL",
        owner_placeholder: str = "Unknown Customer",
        default_credentials: Optional[ProviderCredentials] = None,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._coordinator = coordinator
        self._cache = cache
        self._default_currency = default_currency
        self._owner_placeholder = owner_placeholder
        self._default_credentials = default_credentials
        self._clock = clock

    def get_detailed_context(
        self,
        link_id: str,
        credentials: ProviderCredentials,
    ) -> DetailedContextView:
        """
        Aggregate everything available for a link and cache the summary.

        Owners, accounts, transactions and incomes are fetched concurrently.
        Failed resources count as empty. `has_data` is True iff at least one
        account or transaction arrived.

        Raises:
            ValidationError: blank link id or malformed credentials, before
                any fetch is attempted.
        """
        self._validate(link_id, credentials)

        fetched = self._coordinator.fetch_all(link_id, credentials, DETAILED_RESOURCES)
        owner_name = select_owner_name(fetched.owners, self._owner_placeholder)
        accounts = fetched.accounts
        transactions = fetched.transactions

        summary = build_summary(
            link_id,
            accounts,
            transactions,
            fetched.income_streams,
            months_covered=fetched.date_range.months_covered,
            default_currency=self._default_currency,
            generated_at=self._clock(),
        )
        self._cache.put(link_id, summary, owner_name)

        account_categories, accounts_by_category = _group_by_category(accounts)
        view = DetailedContextView(
            link_id=link_id,
            owner_name=owner_name,
            accounts=accounts,
            transactions=transactions,
            summary=summary,
            has_data=bool(accounts or transactions),
            failed_resources=fetched.failed_resources,
            account_categories=account_categories,
            accounts_by_category=accounts_by_category,
            context_line=_context_line(owner_name, summary, account_categories),
        )

        logger.info(
            "Detailed context for link %s: %d accounts, %d transactions, has_data=%s",
            short_id(link_id),
            len(accounts),
            len(transactions),
            view.has_data,
        )
        return view

    def cache_lookup(self, link_id: str) -> Optional[FinancialSummary]:
        """Return the fresh cached summary for a link, or None."""
        return self._cache.get(link_id)

    def store_context(
        self,
        link_id: str,
        summary: FinancialSummary,
        owner_name: Optional[str] = None,
    ) -> CacheEntry:
        """Cache a summary produced elsewhere."""
        if not link_id or not link_id.strip():
            raise ValidationError("link_id is required")
        return self._cache.put(link_id, summary, owner_name or self._owner_placeholder)

    def get_financial_summary(
        self,
        link_id: str,
        credentials: ProviderCredentials,
    ) -> FinancialSummary:
        """
        Build the full summary, including recurring expenses as fixed costs.

        Unlike the detailed path this needs every resource: accounts,
        transactions, incomes and recurring expenses.

        Raises:
            ValidationError: blank link id or malformed credentials.
            AggregationError: any of the fetches failed.
        """
        self._validate(link_id, credentials)

        fetched = self._coordinator.fetch_all(link_id, credentials, SUMMARY_RESOURCES)
        if fetched.failed_resources:
            raise AggregationError(link_id, [r.value for r in fetched.failed_resources])

        return build_summary(
            link_id,
            fetched.accounts,
            fetched.transactions,
            fetched.income_streams,
            recurring_expenses=fetched.recurring_expenses,
            months_covered=fetched.date_range.months_covered,
            default_currency=self._default_currency,
            generated_at=self._clock(),
        )

    def resolve_conversation_context(
        self,
        link_id: str,
        credentials: Optional[ProviderCredentials] = None,
    ) -> FinancialSummary:
        """
        Return the financial picture the conversational layer should use.

        Prefers a fresh cached summary. Otherwise builds the full summary
        (with the caller's credentials, else the configured defaults) and
        caches it. If that fails an all-zero summary is returned uncached.
        """
        cached = self._cache.get(link_id)
        if cached is not None:
            return cached

        creds = credentials or self._default_credentials
        try:
            if creds is None:
                raise ValidationError("no provider credentials available")
            summary = self.get_financial_summary(link_id, creds)
        except (ValidationError, AggregationError) as e:
            logger.warning(
                "Falling back to empty context for link %s: %s", short_id(link_id), e.message
            )
            return build_summary(
                link_id,
                [],
                [],
                [],
                default_currency=self._default_currency,
                generated_at=self._clock(),
            )

        self._cache.put(link_id, summary, self._owner_placeholder)
        return summary

    @staticmethod
    def _validate(link_id: str, credentials: ProviderCredentials) -> None:
        if not link_id or not link_id.strip():
            raise ValidationError("link_id is required")
        if credentials is None:
            raise ValidationError("provider credentials are required")
        credentials.validate()


def _group_by_category(
    accounts: list[Account],
) -> tuple[dict[str, int], dict[str, list[Account]]]:
    grouped: dict[str, list[Account]] = defaultdict(list)
    for account in accounts:
        grouped[account.category or UNCATEGORIZED].append(account)
    counts = {category: len(items) for category, items in grouped.items()}
    return counts, dict(grouped)


def _context_line(
    owner_name: str,
    summary: FinancialSummary,
    account_categories: dict[str, int],
) -> str:
    """One-line digest of a link's finances for prompt context."""
    currency = summary.currency
    categories = ", ".join(f"{c}: {n}" for c, n in sorted(account_categories.items()))
    return (
        f"Customer: {owner_name} | Link: {short_id(summary.link_id)} | "
        f"Total Balance: {summary.total_balance:.2f} {currency} | "
        f"Accounts: {len(summary.accounts)} ({categories}) | "
        f"Transactions: {len(summary.transactions)} | "
        f"Monthly Income: {summary.monthly_income:.2f} {currency} | "
        f"Monthly Expenses: {summary.monthly_variable_expenses:.2f} {currency} | "
        f"Net Flow: {summary.monthly_surplus:.2f} {currency}"
    )
