"""Unified exception hierarchy for PyIoC.

All library exceptions inherit from PyIocException, enabling unified
error handling: catch PyIocException to handle every container failure,
or catch a specific subclass for targeted handling.

Categories:
- ConfigurationException: invalid registrations or configuration input
- InfrastructureException: failures while wiring or building object graphs
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PyIocException(Exception):
    """Base exception for all PyIoC errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "BEAN_CREATION_RESOLUTION").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(PyIocException, ValueError):
    """A registration or configuration value was rejected."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(PyIocException):
    """Failures while wiring or constructing object graphs."""
