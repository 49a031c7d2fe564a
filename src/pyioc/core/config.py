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
"""Container and logging settings loaded from YAML/TOML and the environment."""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

import yaml  # type: ignore[import-untyped]

from pyioc.kernel.exceptions import ConfigurationException

T = TypeVar("T")

_PREFIX_ATTR = "__pyioc_config_prefix__"
_ENV_PREFIX = "PYIOC_"
_DEFAULTS = "pyioc-defaults.yaml"


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass as the typed view of the section under *prefix*."""

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _PREFIX_ATTR, prefix)
        return cls

    return decorator


def _env_key(key: str) -> str:
    # pyioc.logging.format -> PYIOC_LOGGING_FORMAT
    return _ENV_PREFIX + key.removeprefix("pyioc.").upper().replace(".", "_").replace("-", "_")


def _merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class Config:
    """Nested settings with dot-notation lookup.

    Scalar lookups through :meth:`get` honour ``PYIOC_*`` environment
    overrides; sections returned by :meth:`get_section` are taken as written.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_file(cls, path: str | Path, load_defaults: bool = True) -> Config:
        """Read *path* (YAML, or TOML by suffix) over the packaged defaults.

        A missing file leaves only the defaults.
        """
        path = Path(path)
        data = cls._read_defaults() if load_defaults else {}
        if path.exists():
            data = _merge(data, cls._read(path))
        return cls(data)

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                loaded = tomllib.load(f)
        else:
            with open(path) as f:
                loaded = yaml.safe_load(f)
        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigurationException(
                f"Configuration file {path} must contain a mapping at the top level",
                code="CONFIG_NOT_A_MAPPING",
                context={"path": str(path)},
            )
        return loaded

    @staticmethod
    def _read_defaults() -> dict[str, Any]:
        resource = importlib.resources.files("pyioc.resources").joinpath(_DEFAULTS)
        return yaml.safe_load(resource.read_text()) or {}

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value at *key*; ``PYIOC_<KEY>`` in the environment wins."""
        env_val = os.environ.get(_env_key(key))
        if env_val is not None:
            return env_val
        value = self._lookup(key)
        return default if value is None else value

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Return the mapping under *prefix*, or an empty dict."""
        section = self._lookup(prefix)
        return section if isinstance(section, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Build a ``@config_properties`` dataclass from its section.

        Keys without a matching field are ignored; absent fields keep their
        dataclass defaults.
        """
        prefix = getattr(config_cls, _PREFIX_ATTR, None)
        if prefix is None or not dataclasses.is_dataclass(config_cls):
            raise ConfigurationException(
                f"{config_cls.__name__} is not a @config_properties dataclass",
                code="CONFIG_NOT_BINDABLE",
            )
        section = self.get_section(prefix)
        fields = {f.name for f in dataclasses.fields(config_cls)}
        return config_cls(**{k: v for k, v in section.items() if k in fields})
