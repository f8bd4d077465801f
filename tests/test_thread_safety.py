"""Tests for thread safety of Container."""

import threading
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any

from contextwire.container import Container
from contextwire.container_context import ContainerContext
from contextwire.lock_mode import LockMode
from mocks import C, Contract, ContractImplementation, ContractImplementation2, D, NeedsContract


class TestConcurrentResolution:
    def test_concurrent_singleton_resolution_same_instance(self, container: Container) -> None:
        """Concurrent singleton resolution returns same instance."""
        container.singleton(D)
        results: list[D] = []
        errors: list[Exception] = []

        def resolve_service() -> None:
            try:
                results.append(container.make(D))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=resolve_service) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert not errors
        assert len(results) == 10
        assert all(r is results[0] for r in results)

    def test_singleton_factory_runs_once(self, container: Container) -> None:
        calls: list[int] = []
        barrier = threading.Barrier(8)

        def slow_factory(container: Container, args: Mapping[str, Any]) -> D:
            calls.append(1)
            return D("slow")

        container.singleton(D, slow_factory)

        def resolve_after_barrier() -> D:
            barrier.wait()
            return container.make(D)

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(resolve_after_barrier) for _ in range(8)]
            results = [future.result() for future in as_completed(futures)]

        assert len(calls) == 1
        assert all(r is results[0] for r in results)

    def test_concurrent_contextual_resolution_keeps_scoping(self, container: Container) -> None:
        """Build stacks of concurrent resolutions never see each other's frames."""
        container.bind(Contract, ContractImplementation)
        container.when(C).needs(Contract).give(ContractImplementation2)

        def resolve_pair() -> tuple[Any, Any]:
            return container.make(C), container.make(NeedsContract)

        with ThreadPoolExecutor(max_workers=8) as executor:
            futures = [executor.submit(resolve_pair) for _ in range(50)]
            pairs = [future.result() for future in as_completed(futures)]

        assert all(isinstance(c.contract, ContractImplementation2) for c, _ in pairs)
        assert all(isinstance(n.contract, ContractImplementation) for _, n in pairs)
        assert len(container._build_stack) == 0


class TestConcurrentRegistration:
    def test_concurrent_registration_no_corruption(self) -> None:
        """Concurrent registration doesn't corrupt registry."""
        container = Container()
        keys = [f"service-{index}" for index in range(20)]

        def register(key: str) -> None:
            container.singleton(key, lambda container, args, key=key: key)

        with ThreadPoolExecutor(max_workers=8) as executor:
            list(executor.map(register, keys))

        assert all(container.has(key) for key in keys)
        assert [container.make(key) for key in keys] == keys


def test_unlocked_container_resolves_in_owner_thread(unlocked_container: Container) -> None:
    unlocked_container.singleton(D)

    assert unlocked_container._lock_mode is LockMode.NONE
    assert unlocked_container.make(D) is unlocked_container.make(D)


def test_container_context_creates_default_container_once() -> None:
    context = ContainerContext()
    barrier = threading.Barrier(8)

    def get_current() -> Container:
        barrier.wait()
        return context.get_current()

    with ThreadPoolExecutor(max_workers=8) as executor:
        futures = [executor.submit(get_current) for _ in range(8)]
        containers = [future.result() for future in as_completed(futures)]

    assert all(c is containers[0] for c in containers)
