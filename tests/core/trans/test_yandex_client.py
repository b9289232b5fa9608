"""Unit tests for core.trans.yandex_client module."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, cast
from urllib.parse import parse_qs, urlsplit

import pytest

from config.credentials import ENV_CREDENTIALS_KEY, CredentialsError, CredentialsNotFoundError
from core.trans.interface import (
    InvalidContextError,
    ResponseFormatError,
    TranslationApiError,
    TranslationTransportError,
)
from core.trans.yandex_client import YandexTranslator
from handlers.async_comm import AsyncCommError
from models.config_models import Credentials, TranslatorSettings
from models.translation_models import UNKNOWN_LANGUAGE, TextFormat, TranslationContext
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    from pathlib import Path

    from core.trans.language_directory import LanguageDirectory
    from handlers.async_comm import AsyncHttp


def _encode(payload: object) -> bytes:
    return json.dumps(payload).encode("utf-8")


LANGS_BODY: bytes = _encode({"dirs": ["en-ru", "en-fr", "ru-en"]})


class DummyHttp:
    """Answers requests by route name and records every URL it receives."""

    def __init__(self, responses: dict[str, bytes | Exception] | None = None, *, delay: float = 0.0) -> None:
        self.responses: dict[str, bytes | Exception] = responses if responses is not None else {}
        self.delay: float = delay
        self.urls: list[str] = []

    async def get(self, *, url: str, total_timeout: float = 0.0) -> bytes:
        _ = total_timeout
        self.urls.append(url)
        if self.delay:
            await asyncio.sleep(self.delay)
        result: bytes | Exception = self.responses[self.route_of(url)]
        if isinstance(result, Exception):
            raise result
        return result

    @staticmethod
    def route_of(url: str) -> str:
        return urlsplit(url).path.rsplit("/", 1)[-1]

    def routes(self) -> list[str]:
        return [self.route_of(url) for url in self.urls]


def _make_translator(http: DummyHttp, settings: TranslatorSettings | None = None) -> YandexTranslator:
    return YandexTranslator(Credentials(api_key="test-key"), settings=settings, http=cast("AsyncHttp", http))


def test_constructor_rejects_missing_credentials() -> None:
    with pytest.raises(CredentialsError):
        YandexTranslator(None)


def test_from_environment_reads_credentials_file(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    credentials_path: Path = tmp_path / "credentials.json"
    credentials_path.write_text('{"api_key": "from-file"}', encoding="utf-8")
    monkeypatch.setenv(ENV_CREDENTIALS_KEY, str(credentials_path))

    translator: YandexTranslator = YandexTranslator.from_environment()

    assert translator._credentials.api_key == "from-file"  # noqa: SLF001


def test_from_environment_fails_without_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_CREDENTIALS_KEY, raising=False)

    with pytest.raises(CredentialsNotFoundError):
        YandexTranslator.from_environment()


@pytest.mark.asyncio
async def test_validation_scenario() -> None:
    http = DummyHttp({"getLangs": LANGS_BODY})
    translator: YandexTranslator = _make_translator(http)

    assert await translator.valid_primary_language("en") is True
    assert await translator.valid_primary_language("fr") is False
    assert await translator.valid_transition("en", "ru") is True
    assert await translator.valid_transition("ru", "fr") is False
    assert http.routes() == ["getLangs"]


@pytest.mark.asyncio
@pytest.mark.parametrize("lang", ["", " ", "  ", "bogus", "EN"])
async def test_invalid_primary_languages(lang: str) -> None:
    translator: YandexTranslator = _make_translator(DummyHttp({"getLangs": LANGS_BODY}))

    assert await translator.valid_primary_language(lang) is False
    assert await translator.valid_transition(lang, "ru") is False


@pytest.mark.asyncio
async def test_fetch_languages_is_idempotent() -> None:
    http = DummyHttp({"getLangs": LANGS_BODY})
    translator: YandexTranslator = _make_translator(http)

    first: LanguageDirectory = await translator.fetch_languages()
    second: LanguageDirectory = await translator.fetch_languages()

    assert first == second
    assert len(http.urls) == 1


@pytest.mark.asyncio
async def test_get_languages_request_uses_key_and_version() -> None:
    http = DummyHttp({"getLangs": LANGS_BODY})
    translator: YandexTranslator = _make_translator(http, TranslatorSettings(API_VERSION="v1.6"))

    await translator.fetch_languages()

    assert http.urls == ["https://translate.yandex.net/api/v1.6/tr.json/getLangs?key=test-key"]


@pytest.mark.asyncio
async def test_failed_fetch_is_retried() -> None:
    http = DummyHttp({"getLangs": AsyncCommError("The server could not be reached.")})
    translator: YandexTranslator = _make_translator(http)

    assert await translator.valid_primary_language("en") is False
    with pytest.raises(TranslationTransportError):
        await translator.fetch_languages()

    http.responses["getLangs"] = LANGS_BODY

    assert await translator.valid_primary_language("en") is True
    assert len(http.urls) == 3


@pytest.mark.asyncio
async def test_malformed_directory_is_reported_only_by_fetch() -> None:
    translator: YandexTranslator = _make_translator(DummyHttp({"getLangs": b"<html></html>"}))

    assert await translator.valid_transition("en", "ru") is False
    with pytest.raises(ResponseFormatError):
        await translator.fetch_languages()


@pytest.mark.asyncio
async def test_concurrent_first_validations_are_consistent() -> None:
    http = DummyHttp({"getLangs": LANGS_BODY}, delay=0.01)
    translator: YandexTranslator = _make_translator(http)

    results: list[bool] = await asyncio.gather(
        *(translator.valid_primary_language("en") for _ in range(5)),
        *(translator.valid_transition("ru", "fr") for _ in range(5)),
    )

    assert results == [True] * 5 + [False] * 5
    assert http.routes() == ["getLangs"]


@pytest.mark.asyncio
async def test_clients_do_not_share_caches() -> None:
    first_http = DummyHttp({"getLangs": LANGS_BODY})
    second_http = DummyHttp({"getLangs": _encode({"dirs": ["fr-en"]})})
    first: YandexTranslator = _make_translator(first_http)
    second: YandexTranslator = _make_translator(second_http)

    assert await first.valid_primary_language("fr") is False
    assert await second.valid_primary_language("fr") is True


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [[""], []])
async def test_detect_empty_text_makes_no_request(text: list[str]) -> None:
    http = DummyHttp()
    translator: YandexTranslator = _make_translator(http)

    result: str = await translator.detect(TranslationContext(text=text))

    assert result == UNKNOWN_LANGUAGE
    assert http.urls == []


@pytest.mark.asyncio
async def test_detect_returns_language() -> None:
    http = DummyHttp({"detect": _encode({"code": 200, "lang": "en"})})
    translator: YandexTranslator = _make_translator(http)

    result: str = await translator.detect(TranslationContext(text=["word up though", "hey hey"]))

    assert result == "en"
    query: dict[str, list[str]] = parse_qs(urlsplit(http.urls[0]).query)
    assert query["key"] == ["test-key"]
    assert query["text"] == ["word up though hey hey"]
    assert "lang" not in query


@pytest.mark.asyncio
async def test_detect_raises_api_error() -> None:
    http = DummyHttp({"detect": _encode({"code": 401, "message": "API key is invalid"})})
    translator: YandexTranslator = _make_translator(http)

    with pytest.raises(TranslationApiError) as exc_info:
        await translator.detect(TranslationContext(text=["bonjour"]))

    assert exc_info.value.message == "API key is invalid"
    assert exc_info.value.code == 401


@pytest.mark.asyncio
async def test_detect_rejects_missing_context() -> None:
    translator: YandexTranslator = _make_translator(DummyHttp())

    with pytest.raises(InvalidContextError):
        await translator.detect(None)


@pytest.mark.asyncio
@pytest.mark.parametrize("text", [[""], []])
async def test_translate_empty_text_makes_no_request(text: list[str]) -> None:
    http = DummyHttp()
    translator: YandexTranslator = _make_translator(http)

    result: list[str] = await translator.translate(TranslationContext(text=text, from_lang="en", to_lang="de"))

    assert result == []
    assert http.urls == []


@pytest.mark.asyncio
async def test_translate_returns_segments() -> None:
    http = DummyHttp({"translate": _encode({"code": 200, "lang": "en-de", "text": ["guten morgen"]})})
    translator: YandexTranslator = _make_translator(http)

    result: list[str] = await translator.translate(
        TranslationContext(text=["good morning"], from_lang="en", to_lang="de")
    )

    assert result == ["guten morgen"]
    query: dict[str, list[str]] = parse_qs(urlsplit(http.urls[0]).query)
    assert query["lang"] == ["en-de"]
    assert query["text"] == ["good morning"]
    assert "format" not in query


@pytest.mark.asyncio
async def test_translate_omits_direction_without_both_languages() -> None:
    http = DummyHttp({"translate": _encode({"code": 200, "lang": "es-ru", "text": ["мамасита"]})})
    translator: YandexTranslator = _make_translator(http)

    await translator.translate(TranslationContext(text=["mamacita"], to_lang="ru"))

    assert "lang" not in parse_qs(urlsplit(http.urls[0]).query)


@pytest.mark.asyncio
async def test_translate_sends_configured_text_format() -> None:
    http = DummyHttp({"translate": _encode({"code": 200, "text": ["<b>hallo</b>"]})})
    translator: YandexTranslator = _make_translator(http, TranslatorSettings(TEXT_FORMAT=TextFormat.HTML))

    await translator.translate(TranslationContext(text=["<b>hello</b>"], from_lang="en", to_lang="de"))

    assert parse_qs(urlsplit(http.urls[0]).query)["format"] == ["html"]


@pytest.mark.asyncio
async def test_translate_raises_api_error() -> None:
    body: bytes = _encode({"code": 501, "message": "The specified translation direction is not supported"})
    translator: YandexTranslator = _make_translator(DummyHttp({"translate": body}))

    with pytest.raises(TranslationApiError, match="translation direction is not supported") as exc_info:
        await translator.translate(TranslationContext(text=["hi"], from_lang="en", to_lang="xx"))

    assert exc_info.value.status == "translation direction not supported"


@pytest.mark.asyncio
async def test_translate_raises_transport_error() -> None:
    http = DummyHttp({"translate": AsyncCommError("Error response from the server: status='500'", status=500)})
    translator: YandexTranslator = _make_translator(http)

    with pytest.raises(TranslationTransportError):
        await translator.translate(TranslationContext(text=["hi"], from_lang="en", to_lang="ru"))


@pytest.mark.asyncio
async def test_translate_rejects_missing_context() -> None:
    translator: YandexTranslator = _make_translator(DummyHttp())

    with pytest.raises(InvalidContextError):
        await translator.translate(None)


@pytest.mark.asyncio
async def test_call_failures_do_not_affect_cache() -> None:
    http = DummyHttp({"getLangs": LANGS_BODY, "detect": b"garbage"})
    translator: YandexTranslator = _make_translator(http)

    assert await translator.valid_primary_language("en") is True
    with pytest.raises(ResponseFormatError):
        await translator.detect(TranslationContext(text=["hello"]))

    assert await translator.valid_transition("en", "fr") is True
    assert http.routes() == ["getLangs", "detect"]


@pytest.mark.asyncio
async def test_primary_language_is_not_validated() -> None:
    http = DummyHttp()
    translator: YandexTranslator = _make_translator(http)

    assert await translator.get_primary_language() == UNKNOWN_LANGUAGE

    await translator.set_primary_language("bogus")

    assert await translator.get_primary_language() == "bogus"
    assert http.urls == []


@pytest.mark.asyncio
@pytest.mark.usefixtures("fresh_logger_utils")
async def test_debug_environment_traces_requests(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("DEBUG", "1")
    http = DummyHttp({"detect": _encode({"code": 200, "lang": "en"})})
    translator: YandexTranslator = _make_translator(http)

    await translator.detect(TranslationContext(text=["hi"]))

    assert LoggerUtils.get_logger("core.trans.invoker").isEnabledFor(logging.DEBUG)
    assert any("'route': 'detect', 'url'" in record.getMessage() for record in caplog.records)
    assert "test-key" not in caplog.text


@pytest.mark.usefixtures("fresh_logger_utils")
def test_request_tracing_is_off_without_debug_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DEBUG", raising=False)

    _make_translator(DummyHttp())

    assert not LoggerUtils.get_logger("core.trans.invoker").isEnabledFor(logging.DEBUG)
