"""Banking data provider protocol."""

from typing import Optional, Protocol

from coach.domain.models import DateRange, ProviderCredentials, ResourceType


class BankingDataProvider(Protocol):
    """
    Protocol for remote banking data providers.

    One call fetches one resource type for one link. Implementations return a
    (possibly empty) list of domain objects or raise ResourceUnavailableError;
    they never retry.
    """

    def fetch(
        self,
        resource: ResourceType,
        link_id: str,
        credentials: ProviderCredentials,
        date_range: Optional[DateRange] = None,
    ) -> list:
        """
        Fetch every record of `resource` for `link_id`.

        `date_range` only applies to transactions and is ignored otherwise.
        """
        ...
