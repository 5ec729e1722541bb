"""Data models for the translator client.

This package contains dataclass definitions for configuration, operation and request descriptors,
per-operation parameters and the response payloads of the Language Translator V3 API.
"""

from __future__ import annotations

from models.config_models import DEFAULT_SERVICE_URL, Config
from models.request_models import BodyStyle, DetailedResponse, FormPart, OperationDescriptor, RequestDescriptor
from models.translator_models import (
    CreateModelParams,
    DeleteModelParams,
    DeleteModelResult,
    GetModelParams,
    IdentifiableLanguage,
    IdentifiableLanguages,
    IdentifiedLanguage,
    IdentifiedLanguages,
    IdentifyParams,
    ListIdentifiableLanguagesParams,
    ListModelsParams,
    TranslateParams,
    Translation,
    TranslationModel,
    TranslationModels,
    TranslationResult,
)

__all__: list[str] = [
    "DEFAULT_SERVICE_URL",
    "BodyStyle",
    "Config",
    "CreateModelParams",
    "DeleteModelParams",
    "DeleteModelResult",
    "DetailedResponse",
    "FormPart",
    "GetModelParams",
    "IdentifiableLanguage",
    "IdentifiableLanguages",
    "IdentifiedLanguage",
    "IdentifiedLanguages",
    "IdentifyParams",
    "ListIdentifiableLanguagesParams",
    "ListModelsParams",
    "OperationDescriptor",
    "RequestDescriptor",
    "TranslateParams",
    "Translation",
    "TranslationModel",
    "TranslationModels",
    "TranslationResult",
]
