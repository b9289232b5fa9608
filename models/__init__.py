"""Data models for the translation client.

This package contains dataclass definitions for credentials, client settings,
the translation context, and the API response payloads.
"""

from __future__ import annotations

from models.config_models import DEFAULT_API_VERSION, DEFAULT_BASE_URL, Credentials, TranslatorSettings
from models.translation_models import (
    LANGUAGE_DIRECTION_SEPARATOR,
    UNKNOWN_LANGUAGE,
    DetectionResponse,
    Language,
    LanguagesResponse,
    StatusCode,
    TextFormat,
    TranslationContext,
    TranslationResponse,
)

__all__: list[str] = [
    "DEFAULT_API_VERSION",
    "DEFAULT_BASE_URL",
    "LANGUAGE_DIRECTION_SEPARATOR",
    "UNKNOWN_LANGUAGE",
    "Credentials",
    "DetectionResponse",
    "Language",
    "LanguagesResponse",
    "StatusCode",
    "TextFormat",
    "TranslationContext",
    "TranslationResponse",
    "TranslatorSettings",
]
