"""Utility modules for the translation client.

This package provides the logging utilities shared by every module.
"""

from utils.logger_utils import LoggerUtils

__all__: list[str] = ["LoggerUtils"]
