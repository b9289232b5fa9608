"""Yandex Translate client, request pipeline and language directory.

This package provides detection, translation and direction validation on top of the
Yandex Translate JSON API, with the language directory cached per client.
"""

from core.trans.interface import (
    InvalidContextError,
    RequestConstructionError,
    ResponseFormatError,
    TranslateExceptionError,
    TranslationApiError,
    TranslationTransportError,
)
from core.trans.invoker import ApiInvoker, decode_response
from core.trans.language_directory import LanguageDirectory, LanguageDirectoryCache, map_languages
from core.trans.request_builder import ApiRequest, Route, build_url, flatten_text, language_direction, quote_value
from core.trans.yandex_client import YandexTranslator

__all__: list[str] = [
    "ApiInvoker",
    "ApiRequest",
    "InvalidContextError",
    "LanguageDirectory",
    "LanguageDirectoryCache",
    "RequestConstructionError",
    "ResponseFormatError",
    "Route",
    "TranslateExceptionError",
    "TranslationApiError",
    "TranslationTransportError",
    "YandexTranslator",
    "build_url",
    "decode_response",
    "flatten_text",
    "language_direction",
    "map_languages",
    "quote_value",
]
