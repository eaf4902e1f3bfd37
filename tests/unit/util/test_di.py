"""Unit tests for provider selection."""

import pytest

from booking.util.di import PROVIDERS, ProviderBase, get_provider
from booking.util.di.infrastructure import (
    ChangeOutboxProvider,
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdRealtimeProvider,
    RealtimeProvider,
)
from booking.util.error import DependencyInjectionError
from tests.di import MockPersistenceProvider, MockRealtimeProvider, build_test_container


class TestGetProvider:
    def test_concrete_provider_is_returned_as_is(self):
        assert get_provider(ChangeOutboxProvider) is ChangeOutboxProvider

    def test_selects_mock_or_production_implementation(self):
        assert get_provider(PersistenceProvider) is ProdPersistenceProvider
        assert get_provider(PersistenceProvider, use_mock=True) is (
            MockPersistenceProvider
        )
        assert get_provider(RealtimeProvider) is ProdRealtimeProvider
        assert get_provider(RealtimeProvider, use_mock=True) is MockRealtimeProvider

    def test_missing_implementation_raises(self):
        class OrphanProvider(ProviderBase):
            __mock_component__ = "persistence"

        class OnlyProdProvider(OrphanProvider):
            pass

        assert get_provider(OrphanProvider) is OnlyProdProvider
        with pytest.raises(DependencyInjectionError):
            get_provider(OrphanProvider, use_mock=True)

    def test_every_mockable_component_has_a_mock(self):
        for base in PROVIDERS:
            if base.__subclasses__():
                get_provider(base, use_mock=True)

    def test_unknown_component_is_rejected(self):
        with pytest.raises(ValueError, match="Unknown components"):
            build_test_container(unmock={"search"})
