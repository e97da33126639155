"""Shared fixtures for todo service tests."""

import itertools

import pytest
from starlette.testclient import TestClient

from todo_service.server import create_app
from todo_service.service import TodoService
from todo_service.store import TaskStore


class FakeClock:
    """Clock that returns a fixed time until advanced."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float = 1.0):
        self.now += seconds


def sequential_ids(prefix: str = "id"):
    """Id factory yielding id00000, id00001, ..."""
    counter = itertools.count()
    return lambda: f"{prefix}{next(counter):05d}"


@pytest.fixture
def store():
    return TaskStore()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def service(store):
    return TodoService(store=store)


@pytest.fixture
def http(service):
    """Test client bound to a fresh app around the service fixture."""
    return TestClient(create_app(service))


@pytest.fixture
def ids():
    return sequential_ids()
