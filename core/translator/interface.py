"""This module defines the transport contract used by the translator service and the related exceptions.

The service never performs network I/O itself. It hands a fully assembled RequestDescriptor to an object
implementing TransportInterface and passes whatever that object returns (or raises) back to the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.request_models import DetailedResponse, RequestDescriptor

__all__: list[str] = [
    "ConfigurationError",
    "LanguageTranslatorError",
    "MissingPathParameterError",
    "TransportError",
    "TransportInterface",
    "ValidationError",
]


class LanguageTranslatorError(Exception):
    """Base class for all errors raised by the translator client."""


class ConfigurationError(LanguageTranslatorError):
    """The service was constructed with an incomplete configuration."""


class ValidationError(LanguageTranslatorError):
    """One or more required parameters of an operation are missing.

    Attributes:
        missing (list[str]): Names of the missing parameters, in declaration order.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing: list[str] = list(missing)
        super().__init__(f"Missing required parameters: {', '.join(self.missing)}")


class MissingPathParameterError(ValidationError):
    """A path placeholder has no value to be substituted with."""


class TransportError(LanguageTranslatorError):
    """A failure reported by the transport (network, authentication, HTTP status, malformed body)."""


class TransportInterface(ABC):
    """Abstract base class for transports that execute request descriptors.

    Implementations own authentication header injection, network I/O and response decoding.
    Errors must be raised as TransportError (or a subclass) and are passed through to the caller unmodified.
    """

    @abstractmethod
    async def send_request(self, request: RequestDescriptor) -> DetailedResponse:
        """Send the request and return the decoded response.

        Args:
            request (RequestDescriptor): Transport-ready description of a single call.

        Returns:
            DetailedResponse: Status, headers and decoded body of the response.

        Raises:
            TransportError: If the request fails for any reason.
        """
        raise NotImplementedError

    @abstractmethod
    async def close(self) -> None:
        """Release the resources held by the transport."""
        raise NotImplementedError
