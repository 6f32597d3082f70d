"""Exceptions and vendor error codes for the Synology SRM API.

Every error raised by the client derives from :class:`SRMError`. Vendor
failures reported in the response envelope are mapped to a description
through :data:`ERROR_CODES`.
"""

from __future__ import annotations

import copy
from typing import Dict, Optional

# Error codes returned by SRM in ``error.code``
ERROR_CODES: Dict[int, str] = {
    100: "Unknown error",
    101: "Invalid parameters",
    102: "API does not exist",
    103: "Method does not exist",
    104: "This API version is not supported",
    105: "Insufficient user privilege",
    106: "Connection time out",
    107: "Multiple login detected",
    117: "Need manager rights for operation",
    119: "Missing SID",
    400: "Invalid credentials",
    401: "Account disabled",
    402: "Permission denied",
    403: "2-step verification code required",
    404: "Failed to authenticate 2-step verification code",
}


def describe_error_code(code: int) -> str:
    """Return the description of an SRM error code.

    Args:
        code: Numeric code from the response envelope.

    Returns:
        The known description, or ``"Error code: <code>"`` for unknown codes.
    """
    return ERROR_CODES.get(code, f"Error code: {code}")


class SRMError(Exception):
    """Base exception for all SRM client errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def with_context(self, context: str) -> SRMError:
        """Return a copy of this error with ``context`` prepended.

        The copy keeps the same class and attributes, so callers can still
        catch the original error type.

        Args:
            context: Description of the failed operation.

        Returns:
            New error whose message reads ``"<context> (<message>)"``.
        """
        wrapped = copy.copy(self)
        wrapped.message = f"{context} ({self.message})"
        wrapped.args = (wrapped.message,)
        return wrapped


class MissingSessionError(SRMError):
    """An API other than authentication was called without a session id."""


class TransportError(SRMError):
    """The HTTP request could not be performed."""


class InvalidResponseError(SRMError):
    """The router answered with something that is not a valid envelope."""


class ApiError(SRMError):
    """The router reported a failure in the response envelope."""

    def __init__(self, message: str, code: Optional[int] = None) -> None:
        super().__init__(message)
        self.code = code

    @classmethod
    def from_code(cls, code: Optional[int]) -> ApiError:
        """Build the error for an envelope ``error.code`` (may be missing)."""
        if code is None:
            return cls("Unknown SRM error")
        return cls(describe_error_code(code), code)


class LoginError(SRMError):
    """Authentication against the router failed."""


class InvalidArgumentError(SRMError, ValueError):
    """A caller passed a value outside the accepted set."""
