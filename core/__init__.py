"""Core components of the translation client.

This package contains the request pipeline, the language directory cache
and the user-facing translation client.
"""

from core.trans import YandexTranslator

__all__: list[str] = ["YandexTranslator"]
