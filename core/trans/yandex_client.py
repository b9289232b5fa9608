"""Yandex Translate client.

`YandexTranslator` is the entry point of the package: it binds the API credentials, owns the language
directory cache and exposes language detection, translation and direction validation.

Example:
    translator = YandexTranslator.from_environment()
    if await translator.valid_transition("en", "ru"):
        segments = await translator.translate(TranslationContext(text=["good morning"], from_lang="en", to_lang="ru"))
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from config.credentials import CredentialsError, discover_credentials
from core.trans.interface import InvalidContextError
from core.trans.invoker import ApiInvoker, decode_response
from core.trans.language_directory import LanguageDirectoryCache
from core.trans.request_builder import ApiRequest, Route, flatten_text, language_direction
from models.config_models import TranslatorSettings
from models.translation_models import UNKNOWN_LANGUAGE, DetectionResponse, TranslationResponse
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

    from core.trans.language_directory import LanguageDirectory
    from handlers.async_comm import AsyncHttp
    from models.config_models import Credentials
    from models.translation_models import Language, TranslationContext

__all__: list[str] = ["YandexTranslator"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class YandexTranslator:
    """Client for the Yandex Translate API.

    One instance may be shared by concurrent tasks. The language directory is fetched on first use and
    cached for the lifetime of the instance; every instance has its own cache.

    Attributes:
        settings (TranslatorSettings): Connection settings.
    """

    def __init__(
        self,
        credentials: Credentials | None,
        *,
        settings: TranslatorSettings | None = None,
        http: AsyncHttp | None = None,
    ) -> None:
        """Bind credentials and prepare an empty language directory cache.

        Request tracing is switched on here when the 'DEBUG' environment variable is set.

        Args:
            credentials (Credentials | None): API credentials.
            settings (TranslatorSettings | None): Connection settings. Defaults are used when None.
            http (AsyncHttp | None): HTTP transport. A default transport is created when None.

        Raises:
            CredentialsError: If no credentials are given.
        """
        if credentials is None:
            msg = "nil credentials passed in"
            raise CredentialsError(msg)

        LoggerUtils.apply_debug_switch()
        self.settings: TranslatorSettings = settings if settings is not None else TranslatorSettings()
        self._credentials: Credentials = credentials
        self._primary_language: Language = UNKNOWN_LANGUAGE
        self._lock: asyncio.Lock = asyncio.Lock()
        self._invoker: ApiInvoker = ApiInvoker(
            http=http,
            base_url=self.settings.API_BASE_URL,
            timeout=self.settings.TIMEOUT,
        )
        self._languages: LanguageDirectoryCache = LanguageDirectoryCache(
            self._invoker,
            self._build_request(Route.GET_LANGUAGES),
            lock=self._lock,
        )
        logger.debug("'%s' initialized (api_version='%s')", self.__class__.__name__, self.settings.API_VERSION)

    @classmethod
    def from_environment(cls, *, settings: TranslatorSettings | None = None) -> YandexTranslator:
        """Create a client using credentials discovered from the environment.

        Raises:
            CredentialsNotFoundError: If 'YANDEX_API_CREDENTIALS' is unset or the file cannot be read.
            CredentialsFormatError: If the credentials file is malformed.
        """
        return cls(discover_credentials(), settings=settings)

    def _build_request(self, route: Route, *, text: str = "", lang: str | None = None) -> ApiRequest:
        return ApiRequest(
            route=route,
            api_key=self._credentials.api_key,
            api_version=self.settings.API_VERSION,
            text=text,
            lang=lang,
            text_format=self.settings.TEXT_FORMAT if route is Route.TRANSLATE else None,
        )

    async def set_primary_language(self, primary: Language) -> None:
        """Set the client's primary language. The value is not validated."""
        async with self._lock:
            self._primary_language = primary

    async def get_primary_language(self) -> Language:
        async with self._lock:
            return self._primary_language

    async def detect(self, context: TranslationContext | None) -> Language:
        """Detect the language of the context text.

        Args:
            context (TranslationContext | None): The text to analyse.

        Returns:
            Language: The detected language code, or UNKNOWN_LANGUAGE when there is no text.
                No request is made in that case.

        Raises:
            InvalidContextError: If no context is given.
            TranslationTransportError: If the service cannot be reached.
            ResponseFormatError: If the response cannot be decoded.
            TranslationApiError: If the service reports an error.
        """
        if context is None:
            msg = "nil context cannot be used"
            raise InvalidContextError(msg)

        flat_text: str = flatten_text(context.text)
        if not flat_text:
            return UNKNOWN_LANGUAGE

        data: bytes = await self._invoker.invoke(self._build_request(Route.DETECT, text=flat_text))
        response: DetectionResponse = decode_response(DetectionResponse, data)
        logger.info("language detected: '%s'", response.lang)
        return response.lang or UNKNOWN_LANGUAGE

    async def translate(self, context: TranslationContext | None) -> list[str]:
        """Translate the context text.

        The direction is sent as "from-to" when both languages are set; otherwise it is left to the service.

        Args:
            context (TranslationContext | None): The text and languages.

        Returns:
            list[str]: The translated text segments. Empty when there is no text;
                no request is made in that case.

        Raises:
            InvalidContextError: If no context is given.
            TranslationTransportError: If the service cannot be reached.
            ResponseFormatError: If the response cannot be decoded.
            TranslationApiError: If the service reports an error.
        """
        if context is None:
            msg = "nil context cannot be used"
            raise InvalidContextError(msg)

        flat_text: str = flatten_text(context.text)
        if not flat_text:
            return []

        direction: str | None = language_direction(context.from_lang, context.to_lang)
        data: bytes = await self._invoker.invoke(self._build_request(Route.TRANSLATE, text=flat_text, lang=direction))
        response: TranslationResponse = decode_response(TranslationResponse, data)
        logger.info("translation completed (%s)", response.lang or direction)
        return list(response.text or [])

    async def fetch_languages(self) -> LanguageDirectory:
        """Retrieve the language directory that dictates valid language transitions.

        Unlike the validation methods, failures are raised to the caller.
        """
        return await self._languages.fetch()

    async def valid_primary_language(self, lang: Language) -> bool:
        """Report whether a language is an allowed primary language or a starting point language."""
        return await self._languages.is_valid_primary(lang)

    async def valid_transition(self, from_lang: Language, to_lang: Language) -> bool:
        """Report whether transitioning from one language to another is allowed e.g "en" -> "ro"."""
        return await self._languages.is_valid_transition(from_lang, to_lang)
