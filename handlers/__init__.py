"""Transport handlers for the translation client.

This package provides the asynchronous HTTP communication used to reach the remote service.
"""

from handlers.async_comm import AsyncCommError, AsyncCommTimeoutError, AsyncHttp

__all__: list[str] = ["AsyncCommError", "AsyncCommTimeoutError", "AsyncHttp"]
