"""Construction of Yandex Translate request URLs.

Every API call is described by an `ApiRequest` and rendered by `build_url` into

    <base>/<version>/tr.json/<route>?key=<key>[&text=<text>][&lang=<direction>][&format=<format>]

Rendering is pure: the same descriptor always yields the same URL.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Final
from urllib.parse import quote

from core.trans.interface import RequestConstructionError
from models.config_models import DEFAULT_API_VERSION, DEFAULT_BASE_URL
from models.translation_models import LANGUAGE_DIRECTION_SEPARATOR, TextFormat

if TYPE_CHECKING:
    from collections.abc import Sequence

    from models.translation_models import Language

__all__: list[str] = [
    "JSON_INTERFACE",
    "ApiRequest",
    "Route",
    "build_url",
    "flatten_text",
    "language_direction",
    "quote_value",
]

# The service answers in JSON under 'tr.json' and in XML under 'tr'; only JSON is decoded here.
JSON_INTERFACE: Final[str] = "tr.json"

TEXT_SEGMENT_SEPARATOR: Final[str] = "+"


class Route(StrEnum):
    DETECT = "detect"
    TRANSLATE = "translate"
    GET_LANGUAGES = "getLangs"


_TEXT_ROUTES: Final[frozenset[Route]] = frozenset({Route.DETECT, Route.TRANSLATE})


@dataclass(frozen=True)
class ApiRequest:
    """Descriptor of a single API call.

    Attributes:
        route (Route): The remote operation.
        api_key (str): API key used to sign the request.
        api_version (str): API version. Empty selects the default version.
        text (str): Flattened text. Required by detect and translate.
        lang (str | None): Language direction such as "en-ru". Only sent with translate.
        text_format (TextFormat | None): Markup of the text. Only sent with translate.
    """

    route: Route
    api_key: str
    api_version: str = ""
    text: str = ""
    lang: str | None = None
    text_format: TextFormat | None = None


def flatten_text(segments: Sequence[str]) -> str:
    """Join text segments into a single request value.

    Segments are joined with '+' and every space is replaced with '+', which the service reads as a space.

    Args:
        segments (Sequence[str]): Text segments, e.g. lines of the input.

    Returns:
        str: The flattened text. Empty when there is nothing to send.
    """
    return TEXT_SEGMENT_SEPARATOR.join(segments).replace(" ", TEXT_SEGMENT_SEPARATOR)


def language_direction(from_lang: Language, to_lang: Language) -> str | None:
    """Return the "from-to" direction string, or None unless both languages are given."""
    if not from_lang or not to_lang:
        return None
    return f"{from_lang}{LANGUAGE_DIRECTION_SEPARATOR}{to_lang}"


def quote_value(value: str) -> str:
    """Percent-encode a query value the way request URLs carry it."""
    # '+' is kept literal: it encodes the spaces produced by flatten_text
    return quote(value, safe="+-")


def build_url(request: ApiRequest, *, base_url: str = DEFAULT_BASE_URL) -> str:
    """Render the request URL for an API call.

    Args:
        request (ApiRequest): The call descriptor.
        base_url (str): Service root, without a trailing slash.

    Returns:
        str: The request URL.

    Raises:
        RequestConstructionError: If the route is unsupported, the key is empty,
            or a text route is requested without text.
    """
    try:
        route = Route(request.route)
    except ValueError:
        msg: str = f"unsupported route '{request.route}'"
        raise RequestConstructionError(msg) from None

    if not request.api_key:
        msg = "an API key is required to build a request"
        raise RequestConstructionError(msg)
    if not base_url:
        msg = "a base URL is required to build a request"
        raise RequestConstructionError(msg)

    version: str = request.api_version or DEFAULT_API_VERSION
    url: str = f"{base_url.rstrip('/')}/{version}/{JSON_INTERFACE}/{route}?key={quote_value(request.api_key)}"

    if route in _TEXT_ROUTES:
        if not request.text:
            msg = f"route '{route}' requires text"
            raise RequestConstructionError(msg)
        url = f"{url}&text={quote_value(request.text)}"

    if route is Route.TRANSLATE:
        if request.lang:
            url = f"{url}&lang={quote_value(request.lang)}"
        if request.text_format is not None:
            try:
                text_format = TextFormat(request.text_format)
            except ValueError:
                msg = f"unsupported text format '{request.text_format}'"
                raise RequestConstructionError(msg) from None
            url = f"{url}&format={text_format}"

    return url
