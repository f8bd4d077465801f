"""Shared pytest fixtures for contextwire tests."""

from collections.abc import Iterator

import pytest

from contextwire.container import Container
from contextwire.container_context import container_context
from contextwire.lock_mode import LockMode


@pytest.fixture()
def container() -> Container:
    """Default container with thread locking."""
    return Container()


@pytest.fixture()
def unlocked_container() -> Container:
    """Container confined to the test thread."""
    return Container(lock_mode=LockMode.NONE)


@pytest.fixture()
def global_container() -> Iterator[Container]:
    """Process-wide container, flushed and unbound after the test."""
    container = container_context.get_current()
    yield container
    container.flush()
    container_context.reset()
