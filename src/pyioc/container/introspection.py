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
"""Type introspection and instantiation used by the resolver.

Everything the resolver needs to know about a class goes through the
functions in this module: which constructors it exposes, what their
parameters look like, which markers are present, and how to invoke them.
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Annotated, Any, Union, get_args, get_origin

from pyioc.container.exceptions import BeanInstantiationError, type_name
from pyioc.container.markers import INJECT_ATTR, QUALIFIER_ATTR, SINGLETON_ATTR, Named
from pyioc.container.provider import Provider
from pyioc.container.types import Marker

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


@dataclass(frozen=True)
class Constructor:
    """A buildable entry point of ``owner``: ``__init__`` or a classmethod."""

    owner: type
    name: str
    func: Callable[..., Any]

    @property
    def description(self) -> str:
        return f"{self.owner.__qualname__}.{self.name}()"


@dataclass(frozen=True)
class ParameterDescriptor:
    """Metadata for a single constructor parameter."""

    name: str
    declared_type: Any = None
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD
    has_default: bool = False
    default: Any = None
    named: str | None = None
    qualifier: type | None = None
    provider: bool = False
    provided_type: Any = None

    @property
    def description(self) -> str:
        if self.declared_type is None:
            return self.name
        return f"{self.name}: {type_name(self.declared_type)}"


@dataclass(frozen=True)
class InjectionPoint:
    """The constructor selected to build a type, with its ordered parameters."""

    constructor: Constructor
    parameters: tuple[ParameterDescriptor, ...]


def is_instantiable(cls: Any) -> bool:
    """Abstract classes and protocol definitions expose no public constructors."""
    if not isinstance(cls, type):
        return False
    if inspect.isabstract(cls):
        return False
    return not getattr(cls, "_is_protocol", False)


def list_constructors(cls: Any) -> list[Constructor]:
    """Enumerate the public constructors of *cls*.

    ``__init__`` comes first, followed by every public classmethod marked
    ``@inject``, walking the MRO from *cls* outward in definition order.
    """
    if not is_instantiable(cls):
        return []

    constructors = [Constructor(cls, "__init__", cls.__init__)]
    seen: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        for attr_name, attr in vars(klass).items():
            if attr_name in seen:
                continue
            seen.add(attr_name)
            if (
                isinstance(attr, classmethod)
                and not attr_name.startswith("_")
                and has_marker(attr.__func__, Marker.INJECT)
            ):
                constructors.append(Constructor(cls, attr_name, attr.__func__))
    return constructors


def _signature(func: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def is_default_constructor(ctor: Constructor) -> bool:
    """True for an ``__init__`` that can be called without arguments."""
    if ctor.name != "__init__":
        return False
    if ctor.func is object.__init__:
        return True
    sig = _signature(ctor.func)
    if sig is None:
        return False
    params = list(sig.parameters.values())[1:]
    return all(p.kind in _VARIADIC or p.default is not inspect.Parameter.empty for p in params)


def default_constructor(cls: Any) -> Constructor | None:
    """Return the zero-argument ``__init__`` of *cls*, if it has one."""
    for ctor in list_constructors(cls):
        if is_default_constructor(ctor):
            return ctor
    return None


@lru_cache(maxsize=1024)
def constructor_parameters(ctor: Constructor) -> tuple[ParameterDescriptor, ...]:
    """Describe the injectable parameters of *ctor* in declaration order.

    The leading ``self``/``cls`` parameter and variadic parameters are
    omitted.
    """
    if ctor.func is object.__init__:
        return ()
    sig = _signature(ctor.func)
    if sig is None:
        return ()

    hints = typing.get_type_hints(ctor.func, include_extras=True)
    descriptors = []
    for param in list(sig.parameters.values())[1:]:
        if param.kind in _VARIADIC:
            continue
        descriptors.append(_describe(param, hints.get(param.name)))
    return tuple(descriptors)


def _describe(param: inspect.Parameter, annotation: Any) -> ParameterDescriptor:
    has_default = param.default is not inspect.Parameter.empty
    default = param.default if has_default else None
    if annotation is None:
        return ParameterDescriptor(
            name=param.name, kind=param.kind, has_default=has_default, default=default
        )

    named: str | None = None
    qualifier_tag: type | None = None
    declared = annotation

    # Annotated[T, Named("x")] / Annotated[T, SomeQualifier]
    if get_origin(annotation) is Annotated:
        declared, *metadata = get_args(annotation)
        for meta in metadata:
            if named is None and has_marker(meta, Marker.NAMED):
                named = meta.name
                continue
            tag = meta if isinstance(meta, type) else type(meta)
            if qualifier_tag is None and has_marker(tag, Marker.QUALIFIER):
                qualifier_tag = tag

    provider = declared is Provider or get_origin(declared) is Provider
    return ParameterDescriptor(
        name=param.name,
        declared_type=declared,
        kind=param.kind,
        has_default=has_default,
        default=default,
        named=named,
        qualifier=qualifier_tag,
        provider=provider,
        provided_type=generic_argument_of(declared) if provider else None,
    )


def has_marker(element: Any, marker: Marker) -> bool:
    """Check whether *element* carries the given marker.

    Class markers (singleton, qualifier) are read from the class's own
    namespace and are not inherited.
    """
    if marker is Marker.NAMED:
        return isinstance(element, Named)
    if marker is Marker.INJECT:
        func = element.__func__ if isinstance(element, classmethod) else element
        return getattr(func, INJECT_ATTR, False) is True
    if not isinstance(element, type):
        return False
    attr = SINGLETON_ATTR if marker is Marker.SINGLETON else QUALIFIER_ATTR
    return vars(element).get(attr, False) is True


def generic_argument_of(annotation: Any) -> Any:
    """First generic type argument of *annotation*, or None when bare."""
    args = get_args(annotation)
    return args[0] if args else None


def is_assignable(value: Any, declared: Any) -> bool:
    """Runtime equivalent of "declared type is assignable from type(value)"."""
    if declared is Any:
        return True
    origin = get_origin(declared)
    if origin is Union or origin is types.UnionType:
        return any(is_assignable(value, arg) for arg in get_args(declared))
    target = origin or declared
    if not isinstance(target, type):
        return True
    # Structural protocols cannot be checked without @runtime_checkable
    if getattr(target, "_is_protocol", False) and not getattr(target, "_is_runtime_protocol", False):
        return True
    return isinstance(value, target)


def instantiate(ctor: Constructor, args: tuple[Any, ...] = (), kwargs: dict[str, Any] | None = None) -> Any:
    """Invoke *ctor* and return the new instance.

    Any exception raised by the constructor body is wrapped in
    ``BeanInstantiationError``.
    """
    target = ctor.owner if ctor.name == "__init__" else getattr(ctor.owner, ctor.name)
    try:
        instance = target(*args, **(kwargs or {}))
    except Exception as exc:
        raise BeanInstantiationError(
            bean_type=ctor.owner,
            constructor=ctor.name,
            reason=f"{type(exc).__name__}: {exc}",
        ) from exc

    if not isinstance(instance, ctor.owner):
        raise BeanInstantiationError(
            bean_type=ctor.owner,
            constructor=ctor.name,
            reason=f"returned {type_name(type(instance))}, not an instance of {type_name(ctor.owner)}",
        )
    return instance
