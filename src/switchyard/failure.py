"""
Failure descriptions — a structured payload for the failure track.

An AsyncResult merges two kinds of failure into the same Failure(E) slot:

  - domain failures: values the computation produced on purpose
  - host failures: exceptions the driver captured from the body

FailureDescription gives both a single shape, so a pipeline can coerce
whatever landed on the failure track into something it can branch on:

    outcome = await (
        AsyncResult.lift_async_op(fetch_user)
        .map_left(FailureDescription.coerce)
        .run()
    )
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum, unique
from typing import Any, Optional


@unique
class ErrorCode(Enum):
    """
    Structured error codes for the failure track.

    Domain codes describe failures the computation chose to report.
    Host codes describe faults raised by the environment it ran in.
    """

    # --- Domain failures ---
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Invalid input format, missing fields, type mismatches."""

    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    """Invalid credentials, expired tokens."""

    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    """Insufficient permissions."""

    NOT_FOUND = "NOT_FOUND"
    """Resource doesn't exist."""

    BUSINESS_RULE_ERROR = "BUSINESS_RULE_ERROR"
    """Domain invariant violated."""

    # --- Host failures ---
    TECHNICAL_ERROR = "TECHNICAL_ERROR"
    """Infrastructure issues."""

    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"
    """Connection or I/O failures talking to something else."""

    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    """Operation exceeded time limit."""

    UNKNOWN_ERROR = "UNKNOWN_ERROR"
    """Unexpected/unclassified failures."""

    @property
    def is_host(self) -> bool:
        return self in _HOST_CODES


_HOST_CODES = frozenset(
    {
        ErrorCode.TECHNICAL_ERROR,
        ErrorCode.EXTERNAL_SERVICE_ERROR,
        ErrorCode.TIMEOUT_ERROR,
        ErrorCode.UNKNOWN_ERROR,
    }
)


@dataclass(frozen=True, slots=True)
class FailureDescription:
    """
    Immutable failure descriptor carrying error code, message, optional exception, and timestamp.

    >>> desc = FailureDescription(ErrorCode.VALIDATION_ERROR, "Name is required")
    >>> desc.code
    <ErrorCode.VALIDATION_ERROR: 'VALIDATION_ERROR'>
    >>> desc.is_host_failure
    False
    """

    code: ErrorCode
    message: str
    exception: Optional[BaseException] = field(default=None, repr=False, compare=False)
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC), compare=False)

    @property
    def is_host_failure(self) -> bool:
        """True when this describes a captured exception rather than a domain decision."""
        return self.code.is_host

    @staticmethod
    def from_exception(exception: BaseException, message: str | None = None) -> FailureDescription:
        """
        Classify a captured exception.

        Mapping:
          - ValueError, TypeError, KeyError → VALIDATION_ERROR
          - LookupError → NOT_FOUND
          - PermissionError → AUTHORIZATION_ERROR
          - TimeoutError → TIMEOUT_ERROR
          - ConnectionError, OSError → EXTERNAL_SERVICE_ERROR
          - Everything else → UNKNOWN_ERROR
        """
        return FailureDescription(
            code=_map_exception_to_code(exception),
            message=message if message is not None else str(exception),
            exception=exception,
        )

    @staticmethod
    def coerce(value: Any) -> FailureDescription:
        """
        Turn anything found on the failure track into a FailureDescription.

        Descriptions pass through, exceptions are classified, and any other
        value becomes an UNKNOWN_ERROR carrying its repr.
        """
        match value:
            case FailureDescription():
                return value
            case BaseException():
                return FailureDescription.from_exception(value)
            case str():
                return FailureDescription(ErrorCode.UNKNOWN_ERROR, value)
            case _:
                return FailureDescription(ErrorCode.UNKNOWN_ERROR, repr(value))

    def full_stack_trace(self) -> str:
        """Message followed by the formatted exception chain, if any."""
        if self.exception is None:
            return self.message
        tb = "".join(
            traceback.format_exception(type(self.exception), self.exception, self.exception.__traceback__)
        )
        return f"{self.message}\n{tb}"


def _map_exception_to_code(exception: BaseException) -> ErrorCode:
    # Order matters: KeyError is a LookupError, PermissionError and TimeoutError are OSErrors.
    match exception:
        case ValueError() | TypeError() | KeyError():
            return ErrorCode.VALIDATION_ERROR
        case LookupError():
            return ErrorCode.NOT_FOUND
        case PermissionError():
            return ErrorCode.AUTHORIZATION_ERROR
        case TimeoutError():
            return ErrorCode.TIMEOUT_ERROR
        case ConnectionError() | OSError():
            return ErrorCode.EXTERNAL_SERVICE_ERROR
        case _:
            return ErrorCode.UNKNOWN_ERROR
