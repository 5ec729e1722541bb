"""Configuration data models for the translator client.

Each dataclass is one section of the INI configuration file. Field names match the INI keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final

__all__: list[str] = [
    "DEFAULT_SERVICE_URL",
    "Authentication",
    "Config",
    "Logging",
    "Service",
    "Transport",
]

DEFAULT_SERVICE_URL: Final[str] = "https://gateway.watsonplatform.net/language-translator/api"


@dataclass
class Service:
    URL: str = DEFAULT_SERVICE_URL
    VERSION: str = ""
    HEADERS: dict[str, str] = field(default_factory=dict)


@dataclass
class Transport:
    TIMEOUT: float = 30.0
    PROXY: str = ""


@dataclass
class Authentication:
    """Static credentials handed to the transport as-is."""

    USERNAME: str = ""
    PASSWORD: str = ""
    BEARER_TOKEN: str = ""


@dataclass
class Logging:
    LEVEL: str = "WARNING"
    FILE: str = ""
    CONSOLE: bool = False


@dataclass
class Config:
    SERVICE: Service = field(default_factory=Service)
    TRANSPORT: Transport = field(default_factory=Transport)
    AUTHENTICATION: Authentication = field(default_factory=Authentication)
    LOGGING: Logging = field(default_factory=Logging)
