"""Models for translation-related data.

Defines the language code alias, the per-call translation context and the response payloads
returned by the Yandex Translate JSON interface.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum, StrEnum
from typing import Final, TypeAlias

from dataclasses_json import DataClassJsonMixin, dataclass_json

__all__: list[str] = [
    "LANGUAGE_DIRECTION_SEPARATOR",
    "UNKNOWN_LANGUAGE",
    "DetectionResponse",
    "Language",
    "LanguagesResponse",
    "StatusCode",
    "TextFormat",
    "TranslationContext",
    "TranslationResponse",
]

Language: TypeAlias = str

# Returned when there is nothing to detect; never a valid language code.
UNKNOWN_LANGUAGE: Final[Language] = ""

LANGUAGE_DIRECTION_SEPARATOR: Final[str] = "-"


class StatusCode(IntEnum):
    """Status codes reported in the 'code' field of API responses.

    These are used for diagnostics only; the presence of a 'message' decides whether a call failed.
    """

    SUCCESS = 200
    INVALID_API_KEY = 401
    BLOCKED_API_KEY = 402
    DAILY_LIMIT_EXCEEDED = 404
    MAXIMUM_TEXT_SIZE_EXCEEDED = 413
    TEXT_CANNOT_BE_TRANSLATED = 422
    TRANSLATION_DIRECTION_NOT_SUPPORTED = 501

    @classmethod
    def describe(cls, code: int) -> str:
        """Return a readable name for a status code, including codes outside the known set."""
        try:
            return cls(code).name.lower().replace("_", " ")
        except ValueError:
            return f"unknown status {code}"


class TextFormat(StrEnum):
    """Markup of the text sent for translation."""

    PLAIN = "plain"
    HTML = "html"


@dataclass
class TranslationContext:
    """Input of a detect or translate call.

    Attributes:
        text (list[str]): Text segments; flattened into a single request value.
        from_lang (Language): Source language code. Only used by translate.
        to_lang (Language): Target language code. Only used by translate.
    """

    text: list[str] = field(default_factory=list)
    from_lang: Language = ""
    to_lang: Language = ""


@dataclass_json
@dataclass
class LanguagesResponse(DataClassJsonMixin):
    """Payload of the 'getLangs' route.

    'dirs' holds the permitted directions as "PRIMARY-SECONDARY" strings.
    """

    dirs: list[str] = field(default_factory=list)
    langs: dict[str, str] = field(default_factory=dict)
    code: int = 0
    message: str = ""


@dataclass_json
@dataclass
class DetectionResponse(DataClassJsonMixin):
    """Payload of the 'detect' route."""

    lang: str = UNKNOWN_LANGUAGE
    code: int = 0
    message: str = ""


@dataclass_json
@dataclass
class TranslationResponse(DataClassJsonMixin):
    """Payload of the 'translate' route."""

    text: list[str] = field(default_factory=list)
    lang: str = ""
    code: int = 0
    message: str = ""
