"""Asynchronous HTTP communication for the translation API.

This module provides the transport used to reach the remote service. It performs a single request per call
and hands back the raw response body; interpreting the payload is left to the caller.
Every failure, whether a connection problem, a timeout, an error status or a broken body, is reported
as `AsyncCommError` so that callers only have one transport error to deal with.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

import aiohttp
from aiohttp.client import ClientSession

from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging


__all__: list[str] = ["AsyncCommError", "AsyncCommTimeoutError", "AsyncHttp"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

CONNECT_TIMEOUT: Final[float] = 1.0
BODY_PREVIEW_LIMIT: Final[int] = 200


class AsyncHttp:
    """Asynchronous HTTP client that returns raw response bodies.

    A new session, and therefore a new connection, is opened for every request.
    No retries are performed.
    """

    def __init__(self) -> None:
        logger.debug("%s initializing", self.__class__.__name__)

    async def get(self, *, url: str, total_timeout: float = 0.0) -> bytes:
        """Perform an asynchronous HTTP GET request.

        Args:
            url (str): The URL to send the GET request to.
            total_timeout (float): Total timeout for the request in seconds. Zero or less disables it.

        Returns:
            bytes: The raw response body.

        Raises:
            AsyncCommTimeoutError: If the request times out.
            AsyncCommError: If the request fails or the server answers with an error status.
        """
        return await self._request(url=url, total_timeout=total_timeout)

    @staticmethod
    def _build_timeout(total_timeout: float) -> aiohttp.ClientTimeout:
        if total_timeout <= 0:
            return aiohttp.ClientTimeout(total=None)
        if total_timeout < CONNECT_TIMEOUT:
            # a connect timeout longer than the total would never apply
            return aiohttp.ClientTimeout(total=total_timeout)
        return aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT, total=total_timeout)

    @staticmethod
    def _build_body_preview(body: bytes, limit: int = BODY_PREVIEW_LIMIT) -> str:
        body_preview: str = body.decode("utf-8", errors="replace").strip().replace("\n", "\\n")
        if len(body_preview) > limit:
            return f"{body_preview[:limit]}..."
        return body_preview

    async def _request(self, *, url: str, total_timeout: float) -> bytes:
        try:
            async with (
                ClientSession(timeout=self._build_timeout(total_timeout)) as session,
                session.get(url) as resp,
            ):
                body: bytes = await resp.read()
                if resp.status >= 300:
                    msg: str = f"Error response from the server: status='{resp.status}'"
                    body_preview: str = self._build_body_preview(body)
                    if body_preview:
                        msg = f"{msg}. Body: {body_preview}"
                    raise AsyncCommError(msg, status=resp.status)
                return body

        except TimeoutError as err:
            logger.debug(err)
            msg = "Timeout due to a lack of response from the server."
            raise AsyncCommTimeoutError(msg) from err
        except ConnectionResetError as err:
            logger.debug(err)
            msg = "The connection to the server has been disconnected."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientConnectorError as err:
            logger.debug(err)
            msg = "The server could not be reached."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientError as err:
            logger.debug(err)
            msg = "The request to the server failed."
            raise AsyncCommError(msg) from err


class AsyncCommError(Exception):
    """Base class for asynchronous communication errors.

    Attributes:
        status (int | None): HTTP status of the response, if one was received.
    """

    def __init__(self, msg: str | BaseException, *, status: int | None = None) -> None:
        self.msg: str = str(msg)
        self.status: int | None = status
        super().__init__(self.msg)


class AsyncCommTimeoutError(AsyncCommError):
    """Error raised when an asynchronous communication operation times out."""
