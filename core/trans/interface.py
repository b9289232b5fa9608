"""This module defines the exceptions raised by the translation client.

All per-call failures derive from TranslateExceptionError so that callers can handle
construction, transport, decode and API-reported errors with a single except clause.
"""

from __future__ import annotations

from models.translation_models import StatusCode

__all__: list[str] = [
    "InvalidContextError",
    "RequestConstructionError",
    "ResponseFormatError",
    "TranslateExceptionError",
    "TranslationApiError",
    "TranslationTransportError",
]


class TranslateExceptionError(Exception):
    """An error occurred during the translation process."""


class InvalidContextError(TranslateExceptionError):
    """No translation context was supplied."""


class RequestConstructionError(TranslateExceptionError):
    """A request could not be built from the given descriptor.

    This always indicates a programming error on the caller's side.
    """


class TranslationTransportError(TranslateExceptionError):
    """The request did not reach the service or the service answered with an error status.

    Attributes:
        status (int | None): HTTP status of the response, if one was received.
    """

    def __init__(self, msg: str, *, status: int | None = None) -> None:
        super().__init__(msg)
        self.status: int | None = status


class ResponseFormatError(TranslateExceptionError):
    """The response body could not be decoded into the expected shape."""


class TranslationApiError(TranslateExceptionError):
    """The service reported an error in the 'message' field of its response.

    Attributes:
        message (str): The message as sent by the service.
        code (int): The status code sent alongside the message.
    """

    def __init__(self, message: str, code: int = 0) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: int = code

    @property
    def status(self) -> str:
        """Readable meaning of the reported status code."""
        return StatusCode.describe(self.code)
