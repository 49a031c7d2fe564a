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
"""Injection markers: @inject, @singleton, @qualifier and Named."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T", bound=type)

INJECT_ATTR = "__pyioc_inject__"
SINGLETON_ATTR = "__pyioc_singleton__"
QUALIFIER_ATTR = "__pyioc_qualifier__"


def inject(func: F) -> F:
    """Mark a constructor as the injection point of its class.

    Applies to ``__init__`` or to an alternate-constructor classmethod, in
    either decorator order::

        class OrderService:
            @inject
            def __init__(self, repo: OrderRepository) -> None: ...

        class Connection:
            @classmethod
            @inject
            def from_settings(cls, settings: Settings) -> "Connection": ...
    """
    target = func.__func__ if isinstance(func, classmethod) else func
    setattr(target, INJECT_ATTR, True)
    return func


def singleton(cls: T) -> T:
    """Mark a class as singleton-scoped.

    The first successful resolution of the class is cached and returned for
    every later request. The marker is not inherited by subclasses.
    """
    setattr(cls, SINGLETON_ATTR, True)
    return cls


def qualifier(cls: T) -> T:
    """Mark a class as a qualifier tag.

    Qualifier tags select a binding registered with ``register_qualified``::

        @qualifier
        class Primary: ...

        def __init__(self, db: Annotated[DataSource, Primary]) -> None: ...
    """
    setattr(cls, QUALIFIER_ATTR, True)
    return cls


class Named:
    """Used with typing.Annotated to select a binding registered by name.

    Usage::

        def __init__(self, url: Annotated[str, Named("database_url")]):
            ...
    """

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"Named({self.name!r})"
