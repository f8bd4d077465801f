from __future__ import annotations

from collections.abc import Iterator

import pytest

from contextwire.container import Container
from contextwire.container_context import container_context


@pytest.fixture()
def contextwire_container() -> Iterator[Container]:
    """Yield a fresh container and flush it after the test.

    Override this fixture to provide shared registrations for a test suite.
    The fixture is function-scoped, so registrations are isolated between
    tests unless users override fixture scope explicitly.

    Yields:
        A new ``Container`` instance.

    """
    container = Container()
    try:
        yield container
    finally:
        container.flush()


@pytest.fixture()
def contextwire_global_container(contextwire_container: Container) -> Iterator[Container]:
    """Bind ``contextwire_container`` as the process-wide container for one test.

    The process-wide binding is dropped afterwards so the next test starts
    from a fresh default container.

    Yields:
        The container bound to ``container_context``.

    """
    container_context.set_current(contextwire_container)
    try:
        yield contextwire_container
    finally:
        container_context.reset()
