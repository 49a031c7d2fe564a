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
"""PyIoC DI Container — constructor injection with contracts, qualifiers and providers."""

from pyioc.container.container import Container, IocContainer
from pyioc.container.exceptions import (
    BeanCreationException,
    BeanInstantiationError,
    CyclicDependencyError,
    IncompatibleBindingError,
    MissingNamedBindingError,
    MissingQualifierBindingError,
    NoSuitableConstructorError,
    UnknownTypeError,
)
from pyioc.container.markers import Named, inject, qualifier, singleton
from pyioc.container.provider import Provider
from pyioc.container.types import Marker

__all__ = [
    "BeanCreationException",
    "BeanInstantiationError",
    "Container",
    "CyclicDependencyError",
    "IncompatibleBindingError",
    "IocContainer",
    "Marker",
    "MissingNamedBindingError",
    "MissingQualifierBindingError",
    "Named",
    "NoSuitableConstructorError",
    "Provider",
    "UnknownTypeError",
    "inject",
    "qualifier",
    "singleton",
]
