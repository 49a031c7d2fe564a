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
"""Binding registry — the four lookup tables behind the resolver."""

from __future__ import annotations

from collections.abc import Callable
from threading import RLock
from typing import Any


class BindingRegistry:
    """Thread-safe binding tables.

    - singletons: type key -> zero-argument factory returning the instance
    - contracts: type key -> implementation type (may map to itself)
    - named: name -> raw value or type key
    - qualified: qualifier class -> raw value or type key

    Writes overwrite (last write wins); nothing is ever removed. The lock
    guards individual table operations only, there is no cross-table
    atomicity.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._singletons: dict[Any, Callable[[], Any]] = {}
        self._contracts: dict[Any, Any] = {}
        self._named: dict[str, Any] = {}
        self._qualified: dict[type, Any] = {}

    # -- singletons --

    def put_singleton(self, key: Any, factory: Callable[[], Any]) -> None:
        with self._lock:
            self._singletons[key] = factory

    def singleton_factory(self, key: Any) -> Callable[[], Any] | None:
        with self._lock:
            return self._singletons.get(key)

    def has_singleton(self, key: Any) -> bool:
        with self._lock:
            return key in self._singletons

    # -- contracts --

    def put_contract(self, key: Any, implementation: Any) -> None:
        with self._lock:
            self._contracts[key] = implementation

    def implementation_of(self, key: Any) -> Any | None:
        with self._lock:
            return self._contracts.get(key)

    # -- named / qualified --

    def put_named(self, name: str, value: Any) -> None:
        with self._lock:
            self._named[name] = value

    def named(self, name: str) -> Any | None:
        with self._lock:
            return self._named.get(name)

    def put_qualified(self, tag: type, value: Any) -> None:
        with self._lock:
            self._qualified[tag] = value

    def qualified(self, tag: type) -> Any | None:
        with self._lock:
            return self._qualified.get(tag)

    def registered_types(self) -> list[Any]:
        """All type keys known to the singleton and contract tables."""
        with self._lock:
            return list(dict.fromkeys([*self._singletons, *self._contracts]))
