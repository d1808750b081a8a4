"""Belvo API client: one authenticated call per resource type."""

import logging
from decimal import InvalidOperation
from typing import Optional

import httpx

from coach.config.settings import BELVO_PRODUCTION_URL, BELVO_SANDBOX_URL
from coach.core.exceptions import ResourceUnavailableError, short_id
from coach.domain.models import DateRange, ProviderCredentials, ResourceType
from coach.providers.belvo_parsing import PARSERS, unwrap_records

logger = logging.getLogger(__name__)

# Belvo wants POST with the link in the body for these, GET with a query for the rest
_ROUTES: dict[ResourceType, tuple[str, str]] = {
    ResourceType.ACCOUNTS: ("POST", "/api/accounts/"),
    ResourceType.TRANSACTIONS: ("POST", "/api/transactions/"),
    ResourceType.OWNERS: ("POST", "/api/owners/"),
    ResourceType.INCOMES: ("GET", "/api/incomes/"),
    ResourceType.RECURRING_EXPENSES: ("GET", "/api/recurring-expenses/"),
}

_SUCCESS_STATUSES = (200, 201)


class BelvoClient:
    """
    Banking data provider backed by the Belvo REST API.

    Every failure (transport error, timeout, non-success status, malformed
    body) is raised as ResourceUnavailableError. No retries.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Fixed API root. If not provided, derived per call from
                the credentials' environment.
            timeout_seconds: Bound on each individual request.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self._base_url = base_url.rstrip("/") if base_url else None
        self._timeout = httpx.Timeout(timeout_seconds)
        self._transport = transport

    def base_url_for(self, credentials: ProviderCredentials) -> str:
        """Return the API root to use for the given credentials."""
        if self._base_url:
            return self._base_url
        if credentials.environment == "production":
            return BELVO_PRODUCTION_URL
        return BELVO_SANDBOX_URL

    def fetch(
        self,
        resource: ResourceType,
        link_id: str,
        credentials: ProviderCredentials,
        date_range: Optional[DateRange] = None,
    ) -> list:
        """Fetch all records of one resource type for a link."""
        method, path = _ROUTES[resource]
        request_kwargs: dict = {}
        if method == "POST":
            body = {"link": link_id}
            if resource == ResourceType.TRANSACTIONS and date_range is not None:
                body["date_from"] = date_range.date_from.isoformat()
                body["date_to"] = date_range.date_to.isoformat()
            request_kwargs["json"] = body
        else:
            request_kwargs["params"] = {"link": link_id}

        try:
            with httpx.Client(
                base_url=self.base_url_for(credentials),
                timeout=self._timeout,
                transport=self._transport,
                headers={"Accept": "application/json"},
            ) as client:
                response = client.request(
                    method,
                    path,
                    auth=(credentials.secret_id, credentials.secret_key),
                    **request_kwargs,
                )
        except httpx.TimeoutException as e:
            raise ResourceUnavailableError(resource.value, link_id, "request timed out") from e
        except httpx.HTTPError as e:
            raise ResourceUnavailableError(resource.value, link_id, f"request failed: {e}") from e

        if response.status_code not in _SUCCESS_STATUSES:
            raise ResourceUnavailableError(
                resource.value,
                link_id,
                f"provider returned status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            records = unwrap_records(response.json())
        except ValueError as e:
            raise ResourceUnavailableError(resource.value, link_id, "response is not JSON") from e
        if records is None:
            raise ResourceUnavailableError(resource.value, link_id, "unexpected response shape")

        parse = PARSERS[resource]
        try:
            items = [parse(record, link_id) for record in records]
        except (KeyError, TypeError, ValueError, InvalidOperation) as e:
            raise ResourceUnavailableError(
                resource.value, link_id, f"malformed record: {e!r}"
            ) from e

        logger.debug("Fetched %d %s for link %s", len(items), resource.value, short_id(link_id))
        return items
