"""Utility modules for the translator client.

This package provides the logging utilities shared by all modules.
"""

from utils.logger_utils import LoggerUtils

__all__: list[str] = ["LoggerUtils"]
