"""Credential discovery for the Yandex Translate client.

The API key is read from a JSON file whose path is given by the 'YANDEX_API_CREDENTIALS'
environment variable. Any problem is raised immediately; no default key is ever substituted.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

from models.config_models import Credentials
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging

__all__: list[str] = [
    "ENV_CREDENTIALS_KEY",
    "ConfigLoaderError",
    "CredentialsError",
    "CredentialsFormatError",
    "CredentialsNotFoundError",
    "discover_credentials",
    "load_credentials",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

ENV_CREDENTIALS_KEY: Final[str] = "YANDEX_API_CREDENTIALS"


class ConfigLoaderError(Exception):
    """An error occurred while processing configuration."""


class CredentialsError(ConfigLoaderError):
    """The API credentials could not be obtained."""


class CredentialsNotFoundError(CredentialsError):
    """No credentials file was configured, or it could not be read."""


class CredentialsFormatError(CredentialsError):
    """The credentials file is not formatted correctly."""


def discover_credentials() -> Credentials:
    """Load credentials from the file named by the 'YANDEX_API_CREDENTIALS' environment variable.

    Returns:
        Credentials: The loaded credentials.

    Raises:
        CredentialsNotFoundError: If the variable is unset or the file cannot be read.
        CredentialsFormatError: If the file content is not a valid credentials document.
    """
    env_resolved_file: str = os.getenv(ENV_CREDENTIALS_KEY, "")
    if not env_resolved_file:
        msg: str = f"no credentials were discovered, please set '{ENV_CREDENTIALS_KEY}' in your environment"
        raise CredentialsNotFoundError(msg)
    return load_credentials(env_resolved_file)


def load_credentials(path: str | Path) -> Credentials:
    """Load credentials from a JSON file of the form {"api_key": "<key>"}.

    Args:
        path (str | Path): Path to the credentials file.

    Returns:
        Credentials: The loaded credentials.

    Raises:
        CredentialsNotFoundError: If the file cannot be read.
        CredentialsFormatError: If the file content is not a valid credentials document.
    """
    credentials_path = Path(path)
    logger.debug("Loading credentials from '%s'", credentials_path)
    msg: str
    try:
        data: str = credentials_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as err:
        msg = f"Failed to read credentials file '{credentials_path}': {err}"
        raise CredentialsNotFoundError(msg) from err

    try:
        document: Any = json.loads(data)
    except json.JSONDecodeError as err:
        msg = f"Credentials file '{credentials_path}' is not valid JSON: {err}"
        raise CredentialsFormatError(msg) from err

    if not isinstance(document, dict):
        msg = f"Credentials file '{credentials_path}' must contain a JSON object"
        raise CredentialsFormatError(msg)

    if "api_key" not in document:
        msg = f"Credentials file '{credentials_path}' is missing 'api_key'"
        raise CredentialsFormatError(msg)

    api_key: Any = document["api_key"]
    if not isinstance(api_key, str) or not api_key.strip():
        msg = f"Credentials file '{credentials_path}' has an empty or invalid 'api_key'"
        raise CredentialsFormatError(msg)

    logger.info("Credentials loaded")
    return Credentials.from_dict(document)
