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
"""Container configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pyioc.core.config import config_properties
from pyioc.kernel.exceptions import ConfigurationException


@config_properties(prefix="pyioc.container")
@dataclass
class ContainerProperties:
    """Declarative bindings for the container (pyioc.container.*).

    ``named`` maps binding names to raw values, registered with
    ``register_named`` when a container is configured.
    """

    named: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.named, dict):
            raise ConfigurationException(
                f"pyioc.container.named must be a mapping, got {type(self.named).__name__}",
                code="CONFIG_NOT_A_MAPPING",
            )
