# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for constructor selection and parameter introspection."""

import inspect
from abc import ABC, abstractmethod
from typing import Annotated, Any, Protocol, runtime_checkable

import pytest

from pyioc.container import (
    BeanInstantiationError,
    IocContainer,
    Marker,
    Named,
    NoSuitableConstructorError,
    Provider,
    inject,
    qualifier,
    singleton,
)
from pyioc.container.introspection import (
    constructor_parameters,
    default_constructor,
    generic_argument_of,
    has_marker,
    is_assignable,
    is_default_constructor,
    list_constructors,
)
from pyioc.container.selector import select_injection_point


class Greeter:
    def greet(self) -> str:
        return "hello"


@qualifier
class Primary:
    pass


class DefaultOnly:
    def __init__(self, greeting: str = "hi") -> None:
        self.greeting = greeting


class FactoryPreferred:
    def __init__(self) -> None:
        self.via = "__init__"
        self.greeter = None

    @classmethod
    @inject
    def create(cls, greeter: Greeter) -> "FactoryPreferred":
        instance = cls()
        instance.via = "create"
        instance.greeter = greeter
        return instance


class FactoryMarkedOutside:
    def __init__(self, value: int) -> None:
        self.value = value

    @inject
    @classmethod
    def build(cls, greeter: Greeter) -> "FactoryMarkedOutside":
        return cls(len(greeter.greet()))


class InitWinsOverFactory:
    @inject
    def __init__(self, greeter: Greeter) -> None:
        self.via = "__init__"

    @classmethod
    @inject
    def create(cls) -> "InitWinsOverFactory":
        raise AssertionError("should not be selected")


class UnmarkedFactory:
    def __init__(self, value: int) -> None:
        self.value = value

    @classmethod
    def create(cls) -> "UnmarkedFactory":
        return cls(1)


class PrivateFactory:
    def __init__(self, value: int) -> None:
        self.value = value

    @classmethod
    @inject
    def _create(cls) -> "PrivateFactory":
        return cls(1)


class InheritedFactory(FactoryPreferred):
    pass


class LyingFactory:
    def __init__(self) -> None:
        pass

    @classmethod
    @inject
    def create(cls) -> "LyingFactory":
        return "not an instance"  # type: ignore[return-value]


class Exploding:
    def __init__(self) -> None:
        raise RuntimeError("boom")


class NeedsExploding:
    def __init__(self, exploding: Exploding) -> None:
        self.exploding = exploding


class Untyped:
    def __init__(self, greeter: Greeter, retries=3, *args, **kwargs) -> None:
        self.greeter = greeter
        self.retries = retries


class UntypedRequired:
    def __init__(self, mystery) -> None:
        self.mystery = mystery


class PositionalOnly:
    def __init__(self, greeter: Greeter, /, label: Annotated[str, Named("label")]) -> None:
        self.greeter = greeter
        self.label = label


class UntypedPositionalDefault:
    def __init__(self, retries=3, greeter: Greeter = None, /) -> None:  # type: ignore[assignment]
        self.retries = retries
        self.greeter = greeter


class Described:
    def __init__(
        self,
        greeter: Greeter,
        url: Annotated[str, Named("url")],
        primary: Annotated[Greeter, Primary],
        primary_instance: Annotated[Greeter, Primary()],
        lazy: Provider[Greeter],
        bare: Provider,
        fallback: int = 5,
    ) -> None:
        pass


class AbstractThing(ABC):
    @abstractmethod
    def run(self) -> None: ...


class Greeting(Protocol):
    def greet(self) -> str: ...


@runtime_checkable
class CheckedGreeting(Protocol):
    def greet(self) -> str: ...


@singleton
class ScopedBase:
    pass


class ScopedChild(ScopedBase):
    pass


class TestConstructorSelection:
    def test_default_constructor_used_when_nothing_marked(self):
        point = select_injection_point(DefaultOnly)
        assert point.constructor.name == "__init__"

    def test_marked_factory_beats_zero_argument_init(self):
        point = select_injection_point(FactoryPreferred)
        assert point.constructor.name == "create"
        assert [p.name for p in point.parameters] == ["greeter"]

    def test_marker_applied_outside_classmethod(self):
        point = select_injection_point(FactoryMarkedOutside)
        assert point.constructor.name == "build"

    def test_first_marked_constructor_wins(self):
        point = select_injection_point(InitWinsOverFactory)
        assert point.constructor.name == "__init__"

    def test_unmarked_factory_is_ignored(self):
        with pytest.raises(NoSuitableConstructorError):
            select_injection_point(UnmarkedFactory)

    def test_private_factory_is_ignored(self):
        with pytest.raises(NoSuitableConstructorError):
            select_injection_point(PrivateFactory)

    def test_inherited_factory_builds_subclass(self):
        point = select_injection_point(InheritedFactory)
        assert point.constructor.name == "create"
        assert point.constructor.owner is InheritedFactory

    def test_abstract_class_has_no_constructor(self):
        assert list_constructors(AbstractThing) == []
        with pytest.raises(NoSuitableConstructorError):
            select_injection_point(AbstractThing)

    def test_protocol_has_no_constructor(self):
        assert list_constructors(Greeting) == []
        assert default_constructor(Greeting) is None


class TestResolutionThroughConstructors:
    def test_resolves_through_factory(self):
        container = IocContainer()
        container.register_contract(FactoryPreferred)
        instance = container.resolve(FactoryPreferred)
        assert instance.via == "create"
        assert isinstance(instance.greeter, Greeter)

    def test_resolves_through_outside_marked_factory(self):
        container = IocContainer()
        container.register_contract(FactoryMarkedOutside)
        assert container.resolve(FactoryMarkedOutside).value == len("hello")

    def test_registered_contract_keeps_default_argument(self):
        container = IocContainer()
        container.register_contract(DefaultOnly)
        assert container.resolve(DefaultOnly).greeting == "hi"

    def test_untyped_parameter_with_default_is_left_alone(self):
        container = IocContainer()
        container.register_contract(Untyped)
        instance = container.resolve(Untyped)
        assert isinstance(instance.greeter, Greeter)
        assert instance.retries == 3

    def test_untyped_required_parameter_is_rejected(self):
        container = IocContainer()
        container.register_contract(UntypedRequired)
        with pytest.raises(NoSuitableConstructorError, match="mystery"):
            container.resolve(UntypedRequired)

    def test_positional_only_parameters(self):
        container = IocContainer()
        container.register_named("label", "front-door")
        container.register_contract(PositionalOnly)
        instance = container.resolve(PositionalOnly)
        assert isinstance(instance.greeter, Greeter)
        assert instance.label == "front-door"

    def test_untyped_positional_default_keeps_later_slots_in_place(self):
        container = IocContainer()
        container.register_contract(UntypedPositionalDefault)
        instance = container.resolve(UntypedPositionalDefault)
        assert instance.retries == 3
        assert isinstance(instance.greeter, Greeter)

    def test_constructor_failure_is_wrapped(self):
        container = IocContainer()
        with pytest.raises(BeanInstantiationError) as exc_info:
            container.resolve(Exploding)
        assert isinstance(exc_info.value.__cause__, RuntimeError)
        assert "boom" in str(exc_info.value)

    def test_nested_constructor_failure_is_wrapped(self):
        container = IocContainer()
        container.register_contract(NeedsExploding)
        with pytest.raises(BeanInstantiationError) as exc_info:
            container.resolve(NeedsExploding)
        assert exc_info.value.bean_type is Exploding

    def test_factory_returning_wrong_type_fails(self):
        container = IocContainer()
        container.register_contract(LyingFactory)
        with pytest.raises(BeanInstantiationError, match="not an instance"):
            container.resolve(LyingFactory)


class TestParameterDescriptors:
    def test_describes_every_binding_strategy(self):
        init = next(c for c in list_constructors(Described) if c.name == "__init__")
        params = {p.name: p for p in constructor_parameters(init)}

        assert params["greeter"].declared_type is Greeter
        assert params["greeter"].named is None
        assert params["greeter"].qualifier is None

        assert params["url"].declared_type is str
        assert params["url"].named == "url"

        assert params["primary"].qualifier is Primary
        assert params["primary_instance"].qualifier is Primary

        assert params["lazy"].provider is True
        assert params["lazy"].provided_type is Greeter

        assert params["bare"].provider is True
        assert params["bare"].provided_type is None

        assert params["fallback"].has_default is True

    def test_skips_self_and_variadics(self):
        init = list_constructors(Untyped)[0]
        assert [p.name for p in constructor_parameters(init)] == ["greeter", "retries"]

    def test_records_parameter_kind(self):
        init = list_constructors(PositionalOnly)[0]
        greeter, label = constructor_parameters(init)
        assert greeter.kind is inspect.Parameter.POSITIONAL_ONLY
        assert label.kind is inspect.Parameter.POSITIONAL_OR_KEYWORD

    def test_object_init_has_no_parameters(self):
        init = list_constructors(Greeter)[0]
        assert is_default_constructor(init)
        assert constructor_parameters(init) == ()

    def test_records_defaults(self):
        init = list_constructors(UntypedPositionalDefault)[0]
        retries, greeter = constructor_parameters(init)
        assert retries.has_default and retries.default == 3
        assert greeter.declared_type is Greeter

    def test_parameter_cache_is_bounded(self):
        assert constructor_parameters.cache_info().maxsize is not None


class TestMarkers:
    def test_inject_marker(self):
        assert has_marker(FactoryPreferred.create.__func__, Marker.INJECT)
        assert not has_marker(UnmarkedFactory.create.__func__, Marker.INJECT)

    def test_named_marker(self):
        assert has_marker(Named("x"), Marker.NAMED)
        assert not has_marker("x", Marker.NAMED)

    def test_qualifier_marker(self):
        assert has_marker(Primary, Marker.QUALIFIER)
        assert not has_marker(Greeter, Marker.QUALIFIER)

    def test_singleton_marker_is_not_inherited(self):
        assert has_marker(ScopedBase, Marker.SINGLETON)
        assert not has_marker(ScopedChild, Marker.SINGLETON)

    def test_generic_argument_of(self):
        assert generic_argument_of(Provider[Greeter]) is Greeter
        assert generic_argument_of(Provider) is None


class TestAssignability:
    def test_plain_types(self):
        assert is_assignable("text", str)
        assert not is_assignable(object(), str)
        assert is_assignable(True, int)

    def test_any_accepts_everything(self):
        assert is_assignable(object(), Any)

    def test_union_members(self):
        assert is_assignable(None, str | None)
        assert is_assignable(3, int | str)
        assert not is_assignable(3.0, int | str)

    def test_generic_alias_checks_origin(self):
        assert is_assignable(["a"], list[str])
        assert not is_assignable(("a",), list[str])

    def test_structural_protocol_is_not_checked(self):
        assert is_assignable(object(), Greeting)

    def test_runtime_checkable_protocol_is_checked(self):
        assert is_assignable(Greeter(), CheckedGreeting)
        assert not is_assignable(object(), CheckedGreeting)
