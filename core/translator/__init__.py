"""Language Translator V3 service client.

This package turns operation parameters into request descriptors, validates required parameters
and hands the requests to a pluggable transport.
"""

from core.translator.interface import (
    ConfigurationError,
    LanguageTranslatorError,
    MissingPathParameterError,
    TransportError,
    TransportInterface,
    ValidationError,
)
from core.translator.request_builder import build_request
from core.translator.service import BaseService, ServiceOptions
from core.translator.validator import get_missing_params

__all__: list[str] = [
    "BaseService",
    "ConfigurationError",
    "LanguageTranslatorError",
    "MissingPathParameterError",
    "ServiceOptions",
    "TransportError",
    "TransportInterface",
    "ValidationError",
    "build_request",
    "get_missing_params",
]
