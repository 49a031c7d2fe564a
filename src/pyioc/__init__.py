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
"""PyIoC — a dependency injection container for Python."""

from pyioc.container import (
    BeanCreationException,
    BeanInstantiationError,
    Container,
    CyclicDependencyError,
    IncompatibleBindingError,
    IocContainer,
    Marker,
    MissingNamedBindingError,
    MissingQualifierBindingError,
    Named,
    NoSuitableConstructorError,
    Provider,
    UnknownTypeError,
    inject,
    qualifier,
    singleton,
)
from pyioc.kernel.exceptions import ConfigurationException, PyIocException

__version__ = "0.1.0"

__all__ = [
    "BeanCreationException",
    "BeanInstantiationError",
    "ConfigurationException",
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
    "PyIocException",
    "UnknownTypeError",
    "inject",
    "qualifier",
    "singleton",
]
