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
"""Provider[T] — deferred resolution handle."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from pyioc.container.container import Container

T = TypeVar("T")


class Provider(Generic[T]):
    """Zero-argument handle that resolves ``T`` each time it is called.

    Declare a ``Provider[T]`` constructor parameter to defer resolution::

        class ReportJob:
            def __init__(self, clock: Provider[Clock]) -> None:
                self._clock = clock

            def run(self) -> None:
                now = self._clock().now()

    The handle caches nothing: every call starts a fresh top-level
    ``resolve``, so it returns whatever is bound at invocation time.
    """

    __slots__ = ("_container", "_key")

    def __init__(self, container: Container, key: type[T]) -> None:
        self._container = container
        self._key = key

    @property
    def key(self) -> Any:
        return self._key

    def get(self) -> T:
        return self._container.resolve(self._key)

    def __call__(self) -> T:
        return self.get()

    def __repr__(self) -> str:
        return f"Provider[{getattr(self._key, '__name__', repr(self._key))}]"
