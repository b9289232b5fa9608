"""Unit tests for the Yandex Translate client.

Tests use pytest with asyncio support; HTTP traffic is faked with dummy transports
or served by a local aiohttp test server.
"""
