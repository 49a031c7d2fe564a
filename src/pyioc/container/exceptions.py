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
"""Container exceptions — fatal errors raised while resolving object graphs."""

from __future__ import annotations

from typing import Any

from pyioc.kernel.exceptions import InfrastructureException


def type_name(tp: Any) -> str:
    """Human-readable name for a type key, generic alias or qualifier tag."""
    return getattr(tp, "__qualname__", None) or getattr(tp, "__name__", None) or repr(tp)


def _render(
    kind: str,
    headline: str,
    *,
    required_by: str | None = None,
    parameter: str | None = None,
    hints: list[str] | None = None,
) -> str:
    lines = [f"{kind}: {headline}"]

    if required_by or parameter:
        lines.append("")
        if required_by:
            lines.append(f"  Required by: {required_by}")
        if parameter:
            lines.append(f"    Parameter: {parameter}")

    if hints:
        lines.append("")
        lines.extend(hints)

    return "\n".join(lines)


class BeanCreationException(InfrastructureException):
    """Fatal error during bean creation — the requested graph cannot be built."""

    def __init__(self, subsystem: str, provider: str, reason: str) -> None:
        self.subsystem = subsystem
        self.provider = provider
        self.reason = reason
        message = f"Failed to configure {subsystem} with provider '{provider}': {reason}"
        super().__init__(message=message, code=f"BEAN_CREATION_{subsystem.upper()}")


class _ResolutionError(BeanCreationException):
    """Shared plumbing: detailed multi-line message, resolution subsystem."""

    def _finish(self, message: str, provider: str, reason: str) -> None:
        BeanCreationException.__init__(
            self,
            subsystem="resolution",
            provider=provider,
            reason=reason,
        )
        self.args = (message,)

    def __str__(self) -> str:
        return self.args[0] if self.args else ""


class NoSuitableConstructorError(_ResolutionError):
    """Concrete type has neither an ``@inject`` constructor nor a zero-argument one."""

    def __init__(self, *, bean_type: Any, parameter: str | None = None) -> None:
        self.bean_type = bean_type
        self.parameter = parameter

        headline = f"No suitable constructor found for '{type_name(bean_type)}'"
        message = _render(
            "NoSuitableConstructorError",
            headline,
            parameter=parameter,
            hints=[
                "  Suggestions:",
                "    - Mark __init__ or an alternate-constructor classmethod with @inject",
                "    - Give every constructor parameter a default value",
                "    - Annotate every constructor parameter that has no default",
            ],
        )
        self._finish(message, provider=type_name(bean_type), reason=headline)


class CyclicDependencyError(_ResolutionError):
    """A type transitively requires itself.

    ``chain`` holds the resolution path in request order; ``current`` is the
    type whose re-entrant request closed the cycle.
    """

    def __init__(self, *, chain: list[Any], current: Any) -> None:
        self.chain = chain
        self.current = current

        chain_str = " -> ".join([type_name(t) for t in chain] + [type_name(current)])
        headline = f"Cyclic dependency: {chain_str}"
        message = _render(
            "CyclicDependencyError",
            headline,
            hints=["  Suggestion: Break the cycle by injecting Provider[T] on one side"],
        )
        self._finish(message, provider=type_name(current), reason=headline)


class UnknownTypeError(_ResolutionError):
    """Requested type has no contract binding and no usable zero-argument constructor."""

    def __init__(
        self,
        *,
        bean_type: Any,
        required_by: str | None = None,
        parameter: str | None = None,
        suggestions: list[str] | None = None,
    ) -> None:
        self.bean_type = bean_type
        self.required_by = required_by
        self.parameter = parameter
        self.suggestions = suggestions or []

        headline = f"Unknown type: '{type_name(bean_type)}' is not registered"
        hints = [
            "  Suggestions:",
            "    - Call register_contract() for the type or its abstract contract",
            "    - Call register_singleton() with a pre-built instance",
        ]
        if self.suggestions:
            hints.append("")
            hints.append(f"  Similar registered types: {', '.join(self.suggestions)}")

        message = _render(
            "UnknownTypeError",
            headline,
            required_by=required_by,
            parameter=parameter,
            hints=hints,
        )
        self._finish(message, provider=required_by or "container", reason=headline)


class MissingNamedBindingError(_ResolutionError):
    """A parameter demands a ``Named`` binding that was never registered."""

    def __init__(
        self,
        *,
        name: str,
        required_by: str | None = None,
        parameter: str | None = None,
    ) -> None:
        self.name = name
        self.required_by = required_by
        self.parameter = parameter

        headline = f"Parameter Named({name!r}) was requested but not provided"
        message = _render(
            "MissingNamedBindingError",
            headline,
            required_by=required_by,
            parameter=parameter,
            hints=[f"  Fix: container.register_named({name!r}, value_or_type)"],
        )
        self._finish(message, provider=required_by or "container", reason=headline)


class MissingQualifierBindingError(_ResolutionError):
    """A parameter demands a qualifier binding that was never registered."""

    def __init__(
        self,
        *,
        qualifier: type,
        required_by: str | None = None,
        parameter: str | None = None,
    ) -> None:
        self.qualifier = qualifier
        self.required_by = required_by
        self.parameter = parameter

        qualifier_name = type_name(qualifier)
        headline = f"No binding available for qualifier '{qualifier_name}'"
        message = _render(
            "MissingQualifierBindingError",
            headline,
            required_by=required_by,
            parameter=parameter,
            hints=[f"  Fix: container.register_qualified({qualifier_name}, value_or_type)"],
        )
        self._finish(message, provider=required_by or "container", reason=headline)


class IncompatibleBindingError(_ResolutionError):
    """A named or qualified binding produced a value of the wrong type."""

    def __init__(
        self,
        *,
        requested_type: Any,
        provided_type: type,
        binding: str,
        required_by: str | None = None,
        parameter: str | None = None,
    ) -> None:
        self.requested_type = requested_type
        self.provided_type = provided_type
        self.binding = binding
        self.required_by = required_by
        self.parameter = parameter

        headline = (
            f"Incompatible type was provided! Requested type: {type_name(requested_type)}, "
            f"{binding}, provided type: {type_name(provided_type)}"
        )
        message = _render(
            "IncompatibleBindingError",
            headline,
            required_by=required_by,
            parameter=parameter,
        )
        self._finish(message, provider=required_by or "container", reason=headline)


class BeanInstantiationError(_ResolutionError):
    """The selected constructor raised, or returned something that is not an instance.

    The original exception, if any, is available as ``__cause__``.
    """

    def __init__(self, *, bean_type: Any, constructor: str, reason: str) -> None:
        self.bean_type = bean_type
        self.constructor = constructor

        headline = f"Failed to instantiate '{type_name(bean_type)}' via {constructor}(): {reason}"
        message = _render("BeanInstantiationError", headline)
        self._finish(message, provider=type_name(bean_type), reason=headline)
