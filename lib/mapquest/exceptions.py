"""
MapQuest API Exceptions

This module contains custom exception classes raised by the MapQuest client.
Every failed call surfaces exactly one of them.
"""

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class MapQuestError(Exception):
    """Base exception class for all MapQuest client errors, dood!

    Attributes:
        message: Human-readable error message
        code: Error code (if available)
        response: Raw response data (if available)
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.response = response
        logger.debug(f"{self.__class__.__name__}: {message} (code: {code})")

    def __str__(self) -> str:
        if self.code:
            return f"{self.message} (code: {self.code})"
        return self.message


class InvalidInputError(MapQuestError):
    """Raised when a request value fails validation before any network call."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = "invalid_input",
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message, code, response)


class DimensionTooLargeError(InvalidInputError):
    """Raised when a static map width or height exceeds the service limit."""

    def __init__(
        self,
        message: str = "Map dimension too large.",
        code: Optional[str] = "dimension_too_large",
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message, code, response)


class EncodingError(MapQuestError):
    """Raised when a value cannot be rendered into a query fragment.

    This occurs for values of the wrong type or non-finite coordinates.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = "encoding_failure",
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message, code, response)


class TransportError(MapQuestError):
    """Raised when the HTTP transport fails (connection error, timeout, ...).

    The underlying transport exception is kept in ``cause`` and chained as
    ``__cause__``.
    """

    def __init__(
        self,
        message: str = "Network error occurred.",
        code: Optional[str] = "transport_failure",
        response: Optional[Any] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, code, response)
        self.cause = cause


class ApiStatusError(MapQuestError):
    """Raised when the service answers with a non-2xx HTTP status."""

    def __init__(
        self,
        statusCode: int,
        body: bytes = b"",
        message: Optional[str] = None,
    ) -> None:
        if message is None:
            message = f"API request failed with HTTP status {statusCode}"
        super().__init__(message, str(statusCode), body)
        self.statusCode = statusCode
        self.body = body


class DecodeError(MapQuestError):
    """Raised when a response body is malformed or has an unexpected shape."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = "decode_failure",
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message, code, response)


class ImageCodecError(MapQuestError):
    """Raised when the static map bitmap is unrecognized or corrupt."""

    def __init__(
        self,
        message: str,
        code: Optional[str] = "image_codec_failure",
        response: Optional[Any] = None,
    ) -> None:
        super().__init__(message, code, response)


class ConfigurationError(MapQuestError):
    """Raised when the client configuration is missing or invalid."""

    def __init__(self, message: str, code: Optional[str] = None, response: Optional[Any] = None) -> None:
        super().__init__(message, code, response)
