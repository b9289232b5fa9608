"""Configuration data models for the translation client.

Holds the API credentials read from the credentials file and the connection settings
that a caller may override when constructing a client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from dataclasses_json import DataClassJsonMixin, dataclass_json

from models.translation_models import TextFormat

__all__: list[str] = ["DEFAULT_API_VERSION", "DEFAULT_BASE_URL", "Credentials", "TranslatorSettings"]

DEFAULT_BASE_URL: Final[str] = "https://translate.yandex.net/api"
DEFAULT_API_VERSION: Final[str] = "v1.5"


@dataclass_json
@dataclass
class Credentials(DataClassJsonMixin):
    api_key: str

    def __repr__(self) -> str:
        # keep the key out of logs and tracebacks
        return "Credentials(api_key='***')"


@dataclass
class TranslatorSettings:
    API_BASE_URL: str = DEFAULT_BASE_URL
    API_VERSION: str = ""  # empty selects DEFAULT_API_VERSION
    TIMEOUT: float = 0.0  # seconds, 0 disables the timeout
    TEXT_FORMAT: TextFormat | None = None
