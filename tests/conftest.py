from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from utils.logger_utils import DEFAULT_NAMESPACE, LoggerUtils

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def fresh_logger_utils() -> Iterator[None]:
    """Reset the singleton so every test configures logging from scratch."""
    LoggerUtils._configured = False  # noqa: SLF001
    LoggerUtils._instance = None  # noqa: SLF001
    yield
    namespace_logger: logging.Logger = logging.getLogger(DEFAULT_NAMESPACE)
    for handler in list(namespace_logger.handlers):
        namespace_logger.removeHandler(handler)
        handler.close()
    namespace_logger.setLevel(logging.NOTSET)
    LoggerUtils._configured = False  # noqa: SLF001
    LoggerUtils._instance = None  # noqa: SLF001
