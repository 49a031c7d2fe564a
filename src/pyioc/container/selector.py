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
"""Injection point selection."""

from __future__ import annotations

from typing import Any

from pyioc.container.exceptions import NoSuitableConstructorError
from pyioc.container.introspection import (
    Constructor,
    InjectionPoint,
    constructor_parameters,
    has_marker,
    is_default_constructor,
    list_constructors,
)
from pyioc.container.types import Marker


def select_injection_point(cls: Any) -> InjectionPoint:
    """Pick the constructor used to build *cls*.

    Precedence, in one pass over ``list_constructors``:

    1. the first constructor marked ``@inject`` (beats a zero-argument one);
    2. otherwise the zero-argument ``__init__``;
    3. otherwise ``NoSuitableConstructorError``.
    """
    fallback: Constructor | None = None
    for ctor in list_constructors(cls):
        if has_marker(ctor.func, Marker.INJECT):
            return InjectionPoint(ctor, constructor_parameters(ctor))
        if fallback is None and is_default_constructor(ctor):
            fallback = ctor

    if fallback is not None:
        return InjectionPoint(fallback, constructor_parameters(fallback))
    raise NoSuitableConstructorError(bean_type=cls)
