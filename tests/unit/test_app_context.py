"""Unit tests for settings and the application context wiring."""

from datetime import timedelta

from coach.app_context import AppContext, get_app_context, set_app_context
from coach.config.settings import (
    BELVO_PRODUCTION_URL,
    BELVO_SANDBOX_URL,
    Settings,
    get_settings,
    set_settings,
)
from coach.domain.models import ProviderCredentials
from coach.providers import BelvoClient, StubBankingDataProvider

from tests.conftest import LINK_ID


class TestSettings:
    """Settings defaults and derived values."""

    def test_defaults(self):
        settings = Settings()

        assert settings.context_cache_ttl_seconds == 24 * 60 * 60
        assert settings.request_timeout_seconds == 30.0
        assert settings.default_currency == "BRL"
        assert settings.owner_placeholder == "Unknown Customer"

    def test_default_credentials_need_both_secrets(self):
        assert not Settings(belvo_secret_id="id").has_default_credentials()
        assert Settings(belvo_secret_id="id", belvo_secret_key="key").has_default_credentials()

    def test_global_settings_can_be_replaced(self):
        custom = Settings(default_currency="MXN")

        set_settings(custom)

        assert get_settings() is custom


class TestAppContext:
    """Lazy service construction."""

    def test_stub_provider_selected(self):
        context = AppContext(settings=Settings(banking_provider="stub"))

        assert isinstance(context.provider, StubBankingDataProvider)

    def test_belvo_provider_selected(self):
        context = AppContext(settings=Settings(banking_provider="belvo"))

        assert isinstance(context.provider, BelvoClient)

    def test_belvo_base_url_override_from_settings(self):
        context = AppContext(settings=Settings(belvo_base_url="https://proxy/"))
        production = ProviderCredentials("id", "key", environment="production")

        assert context.provider.base_url_for(production) == "https://proxy"

    def test_belvo_base_url_follows_credentials_environment(self):
        context = AppContext(settings=Settings(banking_provider="belvo"))
        sandbox = ProviderCredentials("id", "key", environment="sandbox")
        production = ProviderCredentials("id", "key", environment="production")

        assert context.provider.base_url_for(sandbox) == BELVO_SANDBOX_URL
        assert context.provider.base_url_for(production) == BELVO_PRODUCTION_URL

    def test_cache_ttl_from_settings(self):
        context = AppContext(settings=Settings(context_cache_ttl_seconds=60))

        assert context.context_cache.ttl == timedelta(seconds=60)

    def test_services_share_one_cache(self):
        context = AppContext(settings=Settings(banking_provider="stub"))

        assert context.context_service is context.context_service
        assert context.context_cache is context.context_cache

    def test_default_credentials_feed_conversation_context(self):
        """
        GIVEN server-side credentials configured and the stub provider
        WHEN the conversation context is resolved without credentials
        THEN the stub data is fetched and cached
        """
        context = AppContext(
            settings=Settings(
                banking_provider="stub",
                belvo_secret_id="id",
                belvo_secret_key="key",
            )
        )

        summary = context.context_service.resolve_conversation_context(LINK_ID)

        assert summary.total_balance > 0
        assert context.context_cache.get(LINK_ID) is summary

    def test_global_context(self):
        custom = AppContext(settings=Settings(banking_provider="stub"))
        try:
            set_app_context(custom)
            assert get_app_context() is custom
        finally:
            set_app_context(None)
