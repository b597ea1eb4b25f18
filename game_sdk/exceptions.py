"""
Custom exceptions for the GAME SDK.

Every exception raised by the SDK inherits from GameSDKError, so callers
can catch all SDK errors with a single except clause.
"""

import json
from typing import Any, Dict, Optional


class GameSDKError(Exception):
    """
    Base exception for all GAME SDK errors.

    Attributes:
        message: Human-readable error description
        code: Optional machine-readable error code
        details: Optional additional error details
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.code:
            return f"[{self.code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r}, code={self.code!r})"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "code": self.code,
            "details": self.details,
        }


class ConfigurationError(GameSDKError):
    """Raised when a required credential or setting is missing."""

    def __init__(
        self,
        message: str = "The SDK is not properly configured.",
        **kwargs
    ):
        super().__init__(message, code="configuration_error", **kwargs)


# =============================================================================
# Argument Errors
# =============================================================================

class ArgumentError(GameSDKError):
    """Base exception for invalid function arguments."""
    pass


class ArgumentCountError(ArgumentError):
    """
    Raised when the number of supplied values differs from the
    number of declared arguments.
    """

    def __init__(self, function_name: str, expected: int, received: int):
        message = f"{function_name}: expected {expected} arguments, got {received}"
        super().__init__(
            message,
            code="argument_count",
            details={"expected": expected, "received": received},
        )
        self.function_name = function_name
        self.expected = expected
        self.received = received


class ArgumentTypeError(ArgumentError, TypeError):
    """Raised when a value does not match its argument's declared type."""

    def __init__(self, argument: str, expected_type: str, value: Any = None):
        message = f"Argument {argument} must be {'an' if expected_type[0] in 'aeiou' else 'a'} {expected_type}"
        super().__init__(
            message,
            code="argument_type",
            details={
                "argument": argument,
                "expected_type": expected_type,
                "received_type": type(value).__name__,
            },
        )
        self.argument = argument
        self.expected_type = expected_type


class UnknownFunctionError(GameSDKError):
    """Raised when a registry is asked for a function it does not provide."""

    def __init__(self, name: str, platform: Optional[str] = None):
        message = f"Function '{name}' not found"
        if platform:
            message += f" for {platform}"
        super().__init__(message, code="unknown_function", details={"name": name})
        self.name = name
        self.platform = platform


# =============================================================================
# Request Errors
# =============================================================================

class TransportError(GameSDKError):
    """
    Raised by the HTTP transport when a request could not complete.

    Attributes:
        response_data: Body received before the failure, if any
    """

    def __init__(
        self,
        message: str = "Request could not be completed.",
        response_data: Any = None,
        **kwargs
    ):
        super().__init__(message, code="transport_error", **kwargs)
        self.response_data = response_data


class RequestFailedError(GameSDKError):
    """
    Raised when an invoked function's request did not succeed.

    Attributes:
        reason: The failure reason (response body or transport message)
        status_code: HTTP status code when a response was received
    """

    def __init__(self, reason: Any, status_code: Optional[int] = None):
        super().__init__(
            f"Request failed: {_serialize(reason)}",
            code="request_failed",
            details={"status_code": status_code} if status_code else None,
        )
        self.reason = reason
        self.status_code = status_code


class APIError(GameSDKError):
    """
    Raised when the GAME backend returns an error response.

    Attributes:
        status_code: HTTP status code from the response
        response_body: Decoded response body if available
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        response_body: Any = None,
        code: Optional[str] = None,
    ):
        super().__init__(message, code=code)
        self.status_code = status_code
        self.response_body = response_body

    def __str__(self) -> str:
        base = f"[HTTP {self.status_code}]"
        if self.code:
            base += f" [{self.code}]"
        return f"{base} {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        result = super().to_dict()
        result["status_code"] = self.status_code
        return result


class AuthenticationError(APIError):
    """Raised when the GAME API key is rejected."""

    def __init__(
        self,
        message: str = "Authentication failed. Please check your API key.",
        response_body: Any = None,
    ):
        super().__init__(message, status_code=401, response_body=response_body, code="auth_error")


class InvalidPayloadError(GameSDKError):
    """Raised when an inbound webhook payload lacks the expected fields."""

    def __init__(
        self,
        message: str = "Invalid message structure or missing text",
        **kwargs
    ):
        super().__init__(message, code="invalid_payload", **kwargs)


def from_response(status_code: int, response_body: Any = None) -> APIError:
    """
    Create an appropriate exception from a GAME API error response.

    Args:
        status_code: HTTP status code
        response_body: Decoded response body

    Returns:
        APIError or a more specific subclass
    """
    message = f"API error: {status_code}"
    if isinstance(response_body, dict):
        message = str(response_body.get("message") or response_body.get("error") or message)
    elif isinstance(response_body, str) and response_body:
        message = response_body

    if status_code == 401:
        return AuthenticationError(message, response_body=response_body)
    return APIError(message, status_code=status_code, response_body=response_body)


def _serialize(value: Any) -> str:
    try:
        return json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
