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
"""IoC container with constructor injection driven by type hints."""

from __future__ import annotations

import difflib
import inspect
import logging
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, cast, runtime_checkable

import structlog

from pyioc.config.properties.container import ContainerProperties
from pyioc.container.exceptions import (
    CyclicDependencyError,
    IncompatibleBindingError,
    MissingNamedBindingError,
    MissingQualifierBindingError,
    NoSuitableConstructorError,
    UnknownTypeError,
    type_name,
)
from pyioc.container.introspection import (
    InjectionPoint,
    ParameterDescriptor,
    default_constructor,
    has_marker,
    instantiate,
    is_assignable,
)
from pyioc.container.provider import Provider
from pyioc.container.registry import BindingRegistry
from pyioc.container.selector import select_injection_point
from pyioc.container.types import Marker
from pyioc.kernel.exceptions import ConfigurationException
from pyioc.logging.structlog_adapter import CONTAINER_LOGGER

if TYPE_CHECKING:
    from pyioc.core.config import Config

T = TypeVar("T")

logger = structlog.wrap_logger(logging.getLogger(CONTAINER_LOGGER))

_MISSING: Any = object()

# Type keys currently mid-resolution, outermost first
Path = tuple[Any, ...]


@runtime_checkable
class Container(Protocol):
    """Contract every container satisfies.

    Components may declare a ``Container`` (or ``IocContainer``) constructor
    parameter to receive the container that is building them.
    """

    def resolve(self, key: type[T]) -> T: ...

    def register_singleton(self, contract_or_instance: Any, instance: Any = ...) -> None: ...

    def register_contract(self, contract: Any, implementation: Any = None) -> None: ...

    def register_named(self, name: str, value: Any) -> None: ...

    def register_qualified(self, tag: type, value: Any) -> None: ...


class IocContainer:
    """Dependency injection container.

    Resolves constructor dependencies recursively from type hints, with
    contract-to-implementation bindings, pre-built singletons, ``Named`` and
    qualifier bindings, ``Provider[T]`` deferred handles, ``@singleton``
    caching and cycle detection.

    Resolution order for a requested type:

    1. a registered singleton wins unconditionally;
    2. a type already on the current resolution path is a cycle;
    3. a contract binding names the implementation to build, otherwise a
       class with a zero-argument ``__init__`` is built directly;
    4. the implementation's injection point is invoked with every parameter
       resolved (Named, then qualifier, then Provider, then by type);
    5. ``@singleton`` types are cached under the requested key.
    """

    def __init__(self, config: Config | None = None) -> None:
        self._registry = BindingRegistry()
        for key in (Container, IocContainer, type(self)):
            self._registry.put_singleton(key, lambda: self)
        if config is not None:
            self.configure(config)

    # -- registration --

    def register_singleton(self, contract_or_instance: Any, instance: Any = _MISSING) -> None:
        """Bind a pre-built instance.

        ``register_singleton(instance)`` binds under ``type(instance)``;
        ``register_singleton(contract, instance)`` binds under *contract*.
        """
        if instance is _MISSING:
            contract, instance = type(contract_or_instance), contract_or_instance
        else:
            contract = contract_or_instance
        self._registry.put_singleton(contract, lambda: instance)
        logger.debug("singleton_registered", contract=type_name(contract))

    def register_contract(self, contract: Any, implementation: Any = None) -> None:
        """Map *contract* to *implementation*, or to itself when omitted."""
        implementation = contract if implementation is None else implementation
        self._registry.put_contract(contract, implementation)
        logger.debug(
            "contract_registered",
            contract=type_name(contract),
            implementation=type_name(implementation),
        )

    def register_named(self, name: str, value: Any) -> None:
        """Bind a raw value, or a type to resolve, under *name*."""
        if value is None:
            raise ConfigurationException(f"Named binding {name!r} cannot be None", code="BINDING_NULL")
        self._registry.put_named(name, value)
        logger.debug("named_registered", name=name)

    def register_qualified(self, tag: type, value: Any) -> None:
        """Bind a raw value, or a type to resolve, under a ``@qualifier`` class."""
        if not has_marker(tag, Marker.QUALIFIER):
            raise ConfigurationException(
                f"{type_name(tag)} is not marked @qualifier", code="BINDING_NOT_QUALIFIER"
            )
        if value is None:
            raise ConfigurationException(
                f"Qualified binding {type_name(tag)} cannot be None", code="BINDING_NULL"
            )
        self._registry.put_qualified(tag, value)
        logger.debug("qualified_registered", qualifier=type_name(tag))

    def configure(self, config: Config) -> None:
        """Apply declarative bindings from the ``pyioc.container`` section."""
        properties = config.bind(ContainerProperties)
        for name, value in properties.named.items():
            self.register_named(name, value)

    # -- resolution --

    def resolve(self, key: type[T]) -> T:
        """Resolve an instance of the given type."""
        return cast(T, self._resolve(key, ()))

    def _resolve(self, key: Any, path: Path) -> Any:
        factory = self._registry.singleton_factory(key)
        if factory is not None:
            return factory()

        if key in path:
            raise CyclicDependencyError(chain=list(path), current=key)
        path = (*path, key)

        implementation = self._registry.implementation_of(key)
        if implementation is None:
            ctor = default_constructor(key)
            if ctor is None:
                raise UnknownTypeError(bean_type=key, suggestions=self._get_similar_type_names(key))
            return instantiate(ctor)

        injection_point = select_injection_point(implementation)
        args, kwargs = self._resolve_arguments(injection_point, path)
        instance = instantiate(injection_point.constructor, tuple(args), kwargs)

        if has_marker(key, Marker.SINGLETON):
            self._registry.put_singleton(key, lambda: instance)
            logger.debug("singleton_cached", contract=type_name(key))

        return instance

    def _resolve_arguments(
        self, injection_point: InjectionPoint, path: Path
    ) -> tuple[list[Any], dict[str, Any]]:
        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        required_by = injection_point.constructor.description

        for param in injection_point.parameters:
            if param.declared_type is None:
                if param.has_default:
                    # Positional slots after this one must not shift left
                    if param.kind is inspect.Parameter.POSITIONAL_ONLY:
                        args.append(param.default)
                    continue
                raise NoSuitableConstructorError(
                    bean_type=injection_point.constructor.owner,
                    parameter=f"{param.name} (missing type annotation)",
                )

            try:
                value = self._resolve_parameter(param, required_by, path)
            except UnknownTypeError as exc:
                if exc.required_by is not None:
                    raise
                raise UnknownTypeError(
                    bean_type=exc.bean_type,
                    required_by=required_by,
                    parameter=param.description,
                    suggestions=exc.suggestions,
                ) from None

            if param.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[param.name] = value
        return args, kwargs

    def _resolve_parameter(self, param: ParameterDescriptor, required_by: str, path: Path) -> Any:
        if param.named is not None:
            value = self._registry.named(param.named)
            if value is None:
                raise MissingNamedBindingError(
                    name=param.named, required_by=required_by, parameter=param.description
                )
            return self._check_assignable(
                param, self._resolve_binding(value, path), f"named: {param.named}", required_by
            )

        if param.qualifier is not None:
            value = self._registry.qualified(param.qualifier)
            if value is None:
                raise MissingQualifierBindingError(
                    qualifier=param.qualifier, required_by=required_by, parameter=param.description
                )
            return self._check_assignable(
                param,
                self._resolve_binding(value, path),
                f"qualified by: {type_name(param.qualifier)}",
                required_by,
            )

        if param.provider and param.provided_type is not None:
            return Provider(self, param.provided_type)

        # Bare Provider without a type argument falls through to a plain lookup
        return self._resolve(param.declared_type, path)

    def _resolve_binding(self, value: Any, path: Path) -> Any:
        """Named/qualified bindings hold either a type to resolve or a raw value."""
        if isinstance(value, type):
            return self._resolve(value, path)
        return value

    def _check_assignable(
        self, param: ParameterDescriptor, value: Any, binding: str, required_by: str
    ) -> Any:
        if not is_assignable(value, param.declared_type):
            raise IncompatibleBindingError(
                requested_type=param.declared_type,
                provided_type=type(value),
                binding=binding,
                required_by=required_by,
                parameter=param.description,
            )
        return value

    def _get_similar_type_names(self, key: Any) -> list[str]:
        """Return registered type names similar to *key* using fuzzy matching."""
        name = getattr(key, "__name__", "")
        if not name:
            return []
        registered = [type_name(t) for t in self._registry.registered_types() if not _is_self_key(t)]
        return difflib.get_close_matches(name, registered, n=5, cutoff=0.4)


def _is_self_key(key: Any) -> bool:
    return key is Container or (isinstance(key, type) and issubclass(key, IocContainer))
