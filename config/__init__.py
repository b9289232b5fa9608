"""Credential discovery for the translation client.

This package locates and validates the API key used to sign every request.
"""

from config.credentials import (
    ENV_CREDENTIALS_KEY,
    ConfigLoaderError,
    CredentialsError,
    CredentialsFormatError,
    CredentialsNotFoundError,
    discover_credentials,
    load_credentials,
)

__all__: list[str] = [
    "ENV_CREDENTIALS_KEY",
    "ConfigLoaderError",
    "CredentialsError",
    "CredentialsFormatError",
    "CredentialsNotFoundError",
    "discover_credentials",
    "load_credentials",
]
