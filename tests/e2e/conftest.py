"""End-to-end fixtures: the full app over a mocked container."""

import pytest
from fastapi.testclient import TestClient

from quill.interface.api.app import create_app
from quill.util.clock import FakeClock
from tests.di import build_test_container


@pytest.fixture
def container():
    """Fresh mocked container; the app's lifespan closes it."""
    return build_test_container()


@pytest.fixture
def client(container):
    """Test client with startup and shutdown hooks running."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


@pytest.fixture
def clock(client, container) -> FakeClock:
    """The clock behind the running app's security tables."""
    return client.portal.call(container.get, FakeClock)
