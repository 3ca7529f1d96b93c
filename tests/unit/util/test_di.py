"""Unit tests for DI provider selection."""

import pytest

from agora.util.di import (
    PersistenceProvider,
    ProdConfigProvider,
    ProdPersistenceProvider,
    ProviderBase,
    get_provider,
)
from agora.util.error import ConfigurationError
from tests.di import MockPersistenceProvider, build_test_container


class TestGetProvider:
    """Tests for get_provider."""

    def test_concrete_provider_is_used_as_is(self):
        assert get_provider(ProdConfigProvider) is ProdConfigProvider

    def test_mockable_component_selects_by_flag(self):
        assert get_provider(PersistenceProvider, use_mock=False) is ProdPersistenceProvider
        assert get_provider(PersistenceProvider, use_mock=True) is MockPersistenceProvider

    def test_missing_implementation(self):
        class SearchProvider(ProviderBase):
            __mock_component__ = "search"

        class ProdSearchProvider(SearchProvider):
            __is_mock__ = False

        with pytest.raises(ConfigurationError, match="No mock implementation for search"):
            get_provider(SearchProvider, use_mock=True)
        assert get_provider(SearchProvider) is ProdSearchProvider


class TestBuildTestContainer:
    """Tests for build_test_container."""

    def test_unknown_component_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"search"})
