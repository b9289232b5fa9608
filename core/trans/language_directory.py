"""Language directory: the graph of translation directions permitted by the service.

The directory is fetched once per client through the 'getLangs' route and kept for the lifetime of the client.
There is no expiry and no refresh; a process that needs a newer directory creates a new client.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import TYPE_CHECKING, Final

from core.trans.interface import TranslateExceptionError
from core.trans.invoker import decode_response
from models.translation_models import LANGUAGE_DIRECTION_SEPARATOR, Language, LanguagesResponse
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Iterable, Iterator

    from core.trans.invoker import ApiInvoker
    from core.trans.request_builder import ApiRequest

__all__: list[str] = ["LanguageDirectory", "LanguageDirectoryCache", "map_languages"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

MIN_DIRECTION_COMPONENTS: Final[int] = 2


class LanguageDirectory(Mapping[Language, frozenset[Language]]):
    """Read-only mapping from a primary language to the languages it can be translated into.

    A primary language is present only if at least one direction starts from it.
    """

    __slots__ = ("_directions",)

    def __init__(self, directions: Mapping[Language, Iterable[Language]] | None = None) -> None:
        self._directions: dict[Language, frozenset[Language]] = {}
        for primary, secondaries in (directions or {}).items():
            secondary_set: frozenset[Language] = frozenset(secondaries)
            if secondary_set:
                self._directions[primary] = secondary_set

    def __getitem__(self, primary: Language) -> frozenset[Language]:
        return self._directions[primary]

    def __iter__(self) -> Iterator[Language]:
        return iter(self._directions)

    def __len__(self) -> int:
        return len(self._directions)

    def __repr__(self) -> str:
        return f"LanguageDirectory({len(self._directions)} primary languages)"

    def is_primary(self, lang: Language) -> bool:
        """Check whether translations may start from the given language."""
        return lang in self._directions

    def allows(self, from_lang: Language, to_lang: Language) -> bool:
        """Check whether translating from one language into another is permitted."""
        secondaries: frozenset[Language] | None = self._directions.get(from_lang)
        if not secondaries:
            return False
        return to_lang in secondaries


def map_languages(direction_set_langs: Iterable[str]) -> LanguageDirectory:
    """Build a language directory from "PRIMARY-SECONDARY" direction strings.

    Entries with fewer than two components are dropped. Empty language codes are dropped as well,
    so "en-" and "-ru" add no edge and no primary ever maps to an empty set.
    Every component after the first is a secondary of the first one.

    Args:
        direction_set_langs (Iterable[str]): Direction strings as returned by the service.

    Returns:
        LanguageDirectory: The resulting directory.
    """
    lang_mapping: dict[Language, set[Language]] = {}
    for dir_lang in direction_set_langs:
        splits: list[str] = dir_lang.split(LANGUAGE_DIRECTION_SEPARATOR)
        if len(splits) < MIN_DIRECTION_COMPONENTS:
            logger.debug("Skipping malformed language direction '%s'", dir_lang)
            continue

        primary, secondaries = splits[0], [secondary for secondary in splits[1:] if secondary]
        if not primary or not secondaries:
            logger.debug("Skipping malformed language direction '%s'", dir_lang)
            continue
        lang_mapping.setdefault(primary, set()).update(secondaries)

    return LanguageDirectory(lang_mapping)


class LanguageDirectoryCache:
    """Lazily fetched, per-client cache of the language directory.

    The cache state is only read and written while holding the lock; the lock is never held across
    the network call. Concurrent first-time callers share one in-flight fetch. A failed fetch leaves
    the cache empty so that the next call tries again.
    """

    def __init__(self, invoker: ApiInvoker, request: ApiRequest, *, lock: asyncio.Lock | None = None) -> None:
        """Initialize an empty cache.

        Args:
            invoker (ApiInvoker): Invoker used to reach the service.
            request (ApiRequest): The 'getLangs' request descriptor.
            lock (asyncio.Lock | None): Lock guarding the cache state. Shared with the owning client.
        """
        self._invoker: ApiInvoker = invoker
        self._request: ApiRequest = request
        self._lock: asyncio.Lock = lock if lock is not None else asyncio.Lock()
        self._directory: LanguageDirectory | None = None
        self._inflight: asyncio.Future[LanguageDirectory] | None = None

    @property
    def is_populated(self) -> bool:
        return self._directory is not None

    async def fetch(self) -> LanguageDirectory:
        """Return the language directory, fetching it on first use.

        Returns:
            LanguageDirectory: The cached or freshly fetched directory.

        Raises:
            TranslationTransportError: If the service cannot be reached.
            ResponseFormatError: If the response cannot be decoded.
            TranslationApiError: If the service reports an error.
        """
        async with self._lock:
            if self._directory is not None:
                return self._directory
            fut: asyncio.Future[LanguageDirectory] | None = self._inflight
            if fut is None:
                fut = asyncio.get_running_loop().create_future()
                self._inflight = fut
                is_owner = True
            else:
                is_owner = False

        if not is_owner:
            return await self._wait_for_inflight(fut)
        return await self._populate(fut)

    async def _wait_for_inflight(self, fut: asyncio.Future[LanguageDirectory]) -> LanguageDirectory:
        logger.debug("Waiting for the in-flight language directory fetch")
        try:
            return await asyncio.shield(fut)
        except asyncio.CancelledError:
            if not fut.cancelled():
                raise
            # the fetching task was cancelled, not this one
            logger.debug("In-flight language directory fetch was cancelled, fetching again")
            return await self.fetch()

    async def _populate(self, fut: asyncio.Future[LanguageDirectory]) -> LanguageDirectory:
        try:
            directory: LanguageDirectory = await self._load()
        except asyncio.CancelledError:
            async with self._lock:
                if self._inflight is fut:
                    self._inflight = None
            fut.cancel()
            raise
        except Exception as err:
            async with self._lock:
                if self._inflight is fut:
                    self._inflight = None
            fut.set_exception(err)
            fut.exception()  # retrieved here so an unawaited future does not log it
            raise

        async with self._lock:
            self._directory = directory
            if self._inflight is fut:
                self._inflight = None
        fut.set_result(directory)
        logger.info("Language directory cached (%d primary languages)", len(directory))
        return directory

    async def _load(self) -> LanguageDirectory:
        data: bytes = await self._invoker.invoke(self._request)
        response: LanguagesResponse = decode_response(LanguagesResponse, data)
        directory: LanguageDirectory = map_languages(response.dirs or [])
        logger.debug("languages mapped %s", dict(directory))
        return directory

    async def is_valid_primary(self, lang: Language) -> bool:
        """Report whether a language is an allowed starting point for translation.

        Failures to obtain the directory are not raised; they are reported as False.
        """
        try:
            directory: LanguageDirectory = await self.fetch()
        except TranslateExceptionError as err:
            logger.debug("encountered err=%s when fetching lang directory", err)
            return False
        return directory.is_primary(lang)

    async def is_valid_transition(self, from_lang: Language, to_lang: Language) -> bool:
        """Report whether translating from one language to another is allowed, e.g. "en" -> "ro".

        Failures to obtain the directory are not raised; they are reported as False.
        """
        try:
            directory: LanguageDirectory = await self.fetch()
        except TranslateExceptionError as err:
            logger.debug("encountered err=%s when fetching lang directory", err)
            return False
        return directory.allows(from_lang, to_lang)
