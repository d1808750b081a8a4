"""Application context for in-process service management.

Holds the process-wide services, the context cache in particular, so the
HTTP layer and in-process callers (the conversational layer) share one
cache instead of each building their own.
"""

from typing import Optional

from coach.config.settings import Settings, get_settings
from coach.domain.models import ProviderCredentials
from coach.providers import BankingDataProvider, BelvoClient, StubBankingDataProvider
from coach.services import ContextCache, ContextService, FanOutCoordinator


class AppContext:
    """
    Application context providing in-process access to all services.

    Services are created lazily from settings on first access.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[BankingDataProvider] = None,
    ):
        """
        Initialize application context.

        Args:
            settings: Settings to build services from. Uses global settings if not provided.
            provider: Banking data provider. Built from settings if not provided.
        """
        self._settings = settings

        # Service instances (lazy initialized)
        self._provider: Optional[BankingDataProvider] = provider
        self._context_cache: Optional[ContextCache] = None
        self._coordinator: Optional[FanOutCoordinator] = None
        self._context_service: Optional[ContextService] = None

    @property
    def settings(self) -> Settings:
        """Get the settings this context was built from."""
        return self._settings or get_settings()

    @property
    def provider(self) -> BankingDataProvider:
        """Get the banking data provider selected by settings."""
        if self._provider is None:
            settings = self.settings
            if settings.banking_provider == "stub":
                self._provider = StubBankingDataProvider(currency=settings.default_currency)
            else:
                self._provider = BelvoClient(
                    base_url=settings.belvo_base_url,
                    timeout_seconds=settings.request_timeout_seconds,
                )
        return self._provider

    @property
    def context_cache(self) -> ContextCache:
        """Get the shared ContextCache instance."""
        if self._context_cache is None:
            self._context_cache = ContextCache(
                ttl_seconds=self.settings.context_cache_ttl_seconds,
            )
        return self._context_cache

    @property
    def coordinator(self) -> FanOutCoordinator:
        """Get the FanOutCoordinator instance."""
        if self._coordinator is None:
            settings = self.settings
            self._coordinator = FanOutCoordinator(
                provider=self.provider,
                join_timeout_seconds=settings.fan_out_timeout_seconds,
                lookback_months=settings.transaction_lookback_months,
            )
        return self._coordinator

    @property
    def context_service(self) -> ContextService:
        """Get the ContextService instance."""
        if self._context_service is None:
            settings = self.settings
            default_credentials = None
            if settings.has_default_credentials():
                default_credentials = ProviderCredentials(
                    secret_id=settings.belvo_secret_id,
                    secret_key=settings.belvo_secret_key,
                    environment=settings.belvo_environment,
                )
            self._context_service = ContextService(
                coordinator=self.coordinator,
                cache=self.context_cache,
                default_currency=settings.default_currency,
                owner_placeholder=settings.owner_placeholder,
                default_credentials=default_credentials,
            )
        return self._context_service


# Global application context (one shared cache per process)
_app_context: Optional[AppContext] = None


def get_app_context() -> AppContext:
    """Get or create the global application context."""
    global _app_context
    if _app_context is None:
        _app_context = AppContext()
    return _app_context


def set_app_context(context: Optional[AppContext]) -> None:
    """Set (or clear, with None) the global application context."""
    global _app_context
    _app_context = context
