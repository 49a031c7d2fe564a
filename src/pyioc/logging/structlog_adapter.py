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
"""StructlogAdapter — structured logging for container diagnostics.

The container emits debug events (registrations, singleton caching) on the
``pyioc.container`` logger. They stay silent until an application turns the
level down, e.g. with::

    pyioc:
      logging:
        format: json
        level:
          root: INFO
          pyioc.container: DEBUG
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from pyioc.core.config import Config

CONTAINER_LOGGER = "pyioc.container"


class StructlogAdapter:
    """Configures structlog and stdlib levels from the ``pyioc.logging`` section."""

    def __init__(self) -> None:
        self.root_level: str = "INFO"
        self.format: str = "console"
        self.module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        levels = dict(config.get_section("pyioc.logging.level"))
        self.root_level = str(levels.pop("root", "INFO")).upper()
        self.module_levels = {name: str(level).upper() for name, level in levels.items()}
        self.format = str(config.get("pyioc.logging.format", "console")).lower()

        structlog.configure(
            processors=self._processors(),
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=_level(self.root_level),
            force=True,
        )
        for name, level in self.module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str = CONTAINER_LOGGER) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))

    def _processors(self) -> list[structlog.types.Processor]:
        processors: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.UnicodeDecoder(),
        ]
        if self.format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())
        return processors


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def configure_logging(config: Config) -> StructlogAdapter:
    """Build and apply a StructlogAdapter in one call."""
    adapter = StructlogAdapter()
    adapter.configure(config)
    return adapter
