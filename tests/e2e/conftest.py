"""Fixtures for end-to-end API tests."""

import asyncio

import pytest
from fastapi.testclient import TestClient

from agora.interface.api.app import create_app
from agora.persistence.repository.inmemory import InMemoryStore
from agora.util.di.container import setup_di
from tests.di import build_test_container


@pytest.fixture
def container():
    """Test container with in-memory persistence, one per test."""
    return build_test_container()


@pytest.fixture
def store(container) -> InMemoryStore:
    """The store behind the test container, for seeding and inspection."""
    return asyncio.run(container.get(InMemoryStore))


@pytest.fixture
def client(container):
    """Create test client with test container."""
    app_instance = create_app()
    setup_di(app_instance, container)
    return TestClient(app_instance)


@pytest.fixture
def seed(store):
    """Put users and items straight into the store."""

    def _seed(*entities):
        for entity in entities:
            if hasattr(entity, "handle"):
                store.users[entity.id] = entity
            else:
                store.items[entity.ref] = entity
        return entities

    return _seed
