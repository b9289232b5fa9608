"""Execution of API requests and decoding of their responses.

`ApiInvoker` turns an `ApiRequest` into a raw response body; `decode_response` turns that body into
one of the response models and raises for errors reported by the service.
"""

from __future__ import annotations

import json
from dataclasses import fields
from typing import TYPE_CHECKING, Any, Final, TypeVar

from dataclasses_json import DataClassJsonMixin

from core.trans.interface import ResponseFormatError, TranslationApiError, TranslationTransportError
from core.trans.request_builder import build_url, quote_value
from handlers.async_comm import AsyncCommError, AsyncHttp
from models.config_models import DEFAULT_BASE_URL
from models.translation_models import StatusCode
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.trans.request_builder import ApiRequest

__all__: list[str] = ["ApiInvoker", "decode_response"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

T = TypeVar("T", bound=DataClassJsonMixin)

_FIELD_TYPES: Final[dict[str, type]] = {
    "dirs": list,
    "text": list,
    "langs": dict,
    "lang": str,
    "code": int,
    "message": str,
}


class ApiInvoker:
    """Sends rendered requests to the service.

    The invoker neither retries nor looks into the payload.
    """

    def __init__(
        self, *, http: AsyncHttp | None = None, base_url: str = DEFAULT_BASE_URL, timeout: float = 0.0
    ) -> None:
        self.http: AsyncHttp = http if http is not None else AsyncHttp()
        self.base_url: str = base_url
        self.timeout: float = timeout

    async def invoke(self, request: ApiRequest) -> bytes:
        """Execute a request and return the raw response body.

        Args:
            request (ApiRequest): The call descriptor.

        Returns:
            bytes: The response body.

        Raises:
            RequestConstructionError: If the descriptor cannot be rendered.
            TranslationTransportError: If the request fails for any transport-level reason.
        """
        url: str = build_url(request, base_url=self.base_url)
        logger.debug("'route': '%s', 'url': '%s'", request.route, url.replace(quote_value(request.api_key), "***"))
        try:
            data: bytes = await self.http.get(url=url, total_timeout=self.timeout)
        except AsyncCommError as err:
            logger.debug("'route': '%s' failed: %s", request.route, err)
            raise TranslationTransportError(err.msg, status=err.status) from err
        logger.debug("'route': '%s', data received=%s", request.route, data)
        return data


def decode_response(model: type[T], raw: bytes) -> T:
    """Decode a raw JSON body into a response model.

    Args:
        model (type[T]): The response model class.
        raw (bytes): The response body.

    Returns:
        T: The decoded response.

    Raises:
        ResponseFormatError: If the body is not a JSON object of the expected shape.
        TranslationApiError: If the response carries a non-empty 'message'.
    """
    msg: str
    try:
        payload: Any = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as err:
        msg = f"failed to decode {model.__name__}: {err}"
        raise ResponseFormatError(msg) from err

    if not isinstance(payload, dict):
        msg = f"{model.__name__} must be a JSON object, got {type(payload).__name__}"
        raise ResponseFormatError(msg)

    _check_payload_types(model, payload)
    # null fields fall back to the model defaults
    payload = {name: value for name, value in payload.items() if value is not None}

    try:
        response: T = model.from_dict(payload, infer_missing=True)
    except (KeyError, TypeError, ValueError, AttributeError) as err:
        msg = f"invalid {model.__name__} payload: {err}"
        raise ResponseFormatError(msg) from err

    message: str = getattr(response, "message", None) or ""
    if message:
        code: int = getattr(response, "code", None) or 0
        logger.error("API reported an error: '%s' (code=%s, %s)", message, code, StatusCode.describe(code))
        raise TranslationApiError(message, code)
    return response


def _check_payload_types(model: type[DataClassJsonMixin], payload: dict[str, Any]) -> None:
    # dataclasses_json does not enforce annotations: a string where a list is expected
    # would be decoded character by character
    known: set[str] = {f.name for f in fields(model)}
    for name, value in payload.items():
        if name not in known or value is None:
            continue
        expected: type = _FIELD_TYPES.get(name, object)
        if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
            msg: str = f"field '{name}' of {model.__name__} must be {expected.__name__}"
            raise ResponseFormatError(msg)
        if expected is list and not all(isinstance(item, str) for item in value):
            msg = f"field '{name}' of {model.__name__} must contain strings"
            raise ResponseFormatError(msg)
