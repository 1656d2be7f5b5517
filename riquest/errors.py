"""
Exceptions raised by riquest. Every failure of a call surfaces as a RiquestError.
"""

import builtins
from enum import Enum
from typing import Optional


class RiquestError(Exception):
    """Base class for every error raised while performing a request."""


class ValidationFailure(Enum):
    NOT_A_MAPPING = "not_a_mapping"
    MISSING = "missing"
    WRONG_TYPE = "wrong_type"
    UNSUPPORTED_VALUE = "unsupported_value"


class ValidationError(RiquestError):
    """Raised when the request params do not match the expected shape."""

    def __init__(self, detail: str, field: Optional[str] = None,
                 failure: ValidationFailure = ValidationFailure.WRONG_TYPE):
        super().__init__(f"Error on request params: {detail}")
        self.detail = detail
        self.field = field
        self.failure = failure


class UrlParseError(RiquestError):
    def __init__(self, detail: str):
        super().__init__(f"Error while parsing the url: {detail}")


class UnsupportedSchemeError(RiquestError):
    def __init__(self, scheme: str):
        super().__init__(f"Bad protocol used: {scheme}")
        self.scheme = scheme


class SerializationError(RiquestError):
    def __init__(self, detail: str):
        super().__init__(f"Could not set request body: {detail}")


class TransportError(RiquestError):
    """Connection level failure (DNS, refused, reset, TLS handshake...)."""

    def __init__(self, label: str, detail: str):
        super().__init__(f"{label} error: {detail}")


class TimeoutError(RiquestError, builtins.TimeoutError):
    def __init__(self, label: str, timeout_ms):
        super().__init__(f"{label} error: request timed out (timeout: {timeout_ms}ms)")
        self.timeout_ms = timeout_ms


class StatusError(RiquestError):
    def __init__(self, status_code: int):
        super().__init__(f"Query returned status code of {status_code}")
        self.status_code = status_code


class BodyParseError(RiquestError):
    def __init__(self, detail: str):
        super().__init__(f"Error parsing chunks: {detail}")
