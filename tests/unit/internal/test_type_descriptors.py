from dataclasses import dataclass
from inspect import Parameter
from typing import Annotated, Optional

from contextwire._internal.type_descriptors import TypeDescriptorProvider


class Engine:
    pass


class Car:
    def __init__(
        self,
        engine: Engine,
        /,
        wheels: int = 4,
        *spares: Engine,
        owner: "Engine",
        tag: Annotated[Engine, "meta"],
        nickname=None,  # noqa: ANN001
        **extras: str,
    ) -> None:
        pass


class Dangling:
    def __init__(self, missing: "DoesNotExist") -> None:  # noqa: F821
        pass


class Maybe:
    def __init__(self, engine: Optional[Engine]) -> None:  # noqa: UP045
        pass


@dataclass
class Settings:
    host: str
    port: int = 8080


class NoConstructor:
    pass


def test_describes_parameters_in_declaration_order() -> None:
    descriptor = TypeDescriptorProvider().describe(Car)

    assert descriptor.concrete is Car
    assert [parameter.name for parameter in descriptor.parameters] == [
        "engine",
        "wheels",
        "spares",
        "owner",
        "tag",
        "nickname",
        "extras",
    ]


def test_reads_kinds_types_and_defaults() -> None:
    parameters = {p.name: p for p in TypeDescriptorProvider().describe(Car).parameters}

    assert parameters["engine"].kind is Parameter.POSITIONAL_ONLY
    assert parameters["engine"].declared_type is Engine
    assert not parameters["engine"].has_default

    assert parameters["wheels"].declared_type is int
    assert parameters["wheels"].has_default
    assert parameters["wheels"].default == 4

    assert parameters["spares"].is_variadic
    assert parameters["spares"].declared_type is Engine

    assert parameters["owner"].is_keyword_only
    assert parameters["owner"].declared_type is Engine

    assert parameters["tag"].declared_type is Engine

    assert parameters["nickname"].declared_type is None
    assert parameters["nickname"].has_default
    assert parameters["nickname"].default is None

    assert parameters["extras"].is_variadic
    assert parameters["extras"].is_keyword_only


def test_unresolvable_forward_reference_is_untyped() -> None:
    (parameter,) = TypeDescriptorProvider().describe(Dangling).parameters

    assert parameter.name == "missing"
    assert parameter.declared_type is None


def test_optional_annotation_is_kept_as_is() -> None:
    (parameter,) = TypeDescriptorProvider().describe(Maybe).parameters

    assert parameter.declared_type == Optional[Engine]  # noqa: UP045


def test_describes_dataclass_fields() -> None:
    host, port = TypeDescriptorProvider().describe(Settings).parameters

    assert (host.name, host.declared_type, host.has_default) == ("host", str, False)
    assert (port.name, port.declared_type, port.default) == ("port", int, 8080)


def test_class_without_constructor_has_no_parameters() -> None:
    assert TypeDescriptorProvider().describe(NoConstructor).parameters == ()


def test_descriptors_are_cached_per_class() -> None:
    provider = TypeDescriptorProvider()

    first = provider.describe(Engine)

    assert provider.describe(Engine) is first
    provider.clear()
    assert provider.describe(Engine) is not first
