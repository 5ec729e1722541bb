"""Parameter structures and response payload models for the Language Translator V3 API.

Each operation of the service takes its own parameter dataclass. Optional fields default to None,
which means "absent": absent fields are never sent to the service. The response models are typed
views over the decoded JSON bodies; the service passes bodies through untouched, callers may
convert them with ``Model.from_dict(body)``.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import IO, TYPE_CHECKING, Any, Self, TypeAlias

from dataclasses_json import DataClassJsonMixin, dataclass_json

if TYPE_CHECKING:
    from collections.abc import Mapping

__all__: list[str] = [
    "BinaryPayload",
    "CreateModelParams",
    "DeleteModelParams",
    "DeleteModelResult",
    "GetModelParams",
    "IdentifiableLanguage",
    "IdentifiableLanguages",
    "IdentifiedLanguage",
    "IdentifiedLanguages",
    "IdentifyParams",
    "ListIdentifiableLanguagesParams",
    "ListModelsParams",
    "TranslateParams",
    "Translation",
    "TranslationModel",
    "TranslationModels",
    "TranslationResult",
]

BinaryPayload: TypeAlias = "bytes | IO[bytes]"


@dataclass(kw_only=True)
class _OperationParams:
    """Options shared by every operation.

    Attributes:
        headers (dict[str, str] | None): Custom request headers, applied last.
        return_response (bool): Resolve with the full DetailedResponse instead of the decoded body.
    """

    headers: dict[str, str] | None = None
    return_response: bool = False

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any] | None) -> Self:
        """Build the parameter structure from a plain mapping.

        Raises:
            TypeError: If the mapping holds a key the operation does not recognize.
        """
        return cls(**dict(params or {}))

    def as_mapping(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def snapshot(self) -> Self:
        """Return a copy that later mutation of the caller's lists and dicts cannot reach.

        Binary payloads are shared, file objects are not read.
        """
        copied: dict[str, Any] = {}
        for name, value in self.as_mapping().items():
            if isinstance(value, list):
                value = list(value)
            elif isinstance(value, dict):
                value = dict(value)
            copied[name] = value
        return type(self)(**copied)


@dataclass(kw_only=True)
class TranslateParams(_OperationParams):
    """Parameters for ``translate``.

    Attributes:
        text (list[str]): Input text in UTF-8. Multiple entries yield multiple translations.
        model_id (str | None): Identifier of the model used for translation.
        source (str | None): Source language code.
        target (str | None): Target language code.
    """

    text: list[str] = field(default_factory=list)
    model_id: str | None = None
    source: str | None = None
    target: str | None = None


@dataclass(kw_only=True)
class IdentifyParams(_OperationParams):
    """Parameters for ``identify``. ``text`` is sent as the raw plain-text body."""

    text: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            msg = f"'text' must be a str, not {type(self.text).__name__}"
            raise TypeError(msg)


@dataclass(kw_only=True)
class ListIdentifiableLanguagesParams(_OperationParams):
    pass


@dataclass(kw_only=True)
class CreateModelParams(_OperationParams):
    """Parameters for ``create_model``.

    A model is customized either with a forced glossary or with parallel corpora. Several parallel
    corpus files may be uploaded in one request by passing a list.

    Attributes:
        base_model_id (str): Model used as the base for customization.
        forced_glossary (BinaryPayload | None): TMX file overriding domain translations.
        parallel_corpus (BinaryPayload | list[BinaryPayload] | None): TMX file(s) with parallel sentences.
        name (str | None): Optional model name.
    """

    base_model_id: str = ""
    forced_glossary: BinaryPayload | None = None
    parallel_corpus: BinaryPayload | list[BinaryPayload] | None = None
    name: str | None = None


@dataclass(kw_only=True)
class DeleteModelParams(_OperationParams):
    model_id: str = ""


@dataclass(kw_only=True)
class GetModelParams(_OperationParams):
    model_id: str = ""


@dataclass(kw_only=True)
class ListModelsParams(_OperationParams):
    """Parameters for ``list_models``.

    Attributes:
        source (str | None): Filter by source language.
        target (str | None): Filter by target language.
        default_models (bool | None): True returns only default models, False only non-default ones,
            None returns both. An explicit False is sent to the service.
    """

    source: str | None = None
    target: str | None = None
    default_models: bool | None = None


@dataclass_json
@dataclass
class DeleteModelResult(DataClassJsonMixin):
    """``status`` is "OK" when the model was deleted."""

    status: str


@dataclass_json
@dataclass
class IdentifiableLanguage(DataClassJsonMixin):
    language: str
    name: str


@dataclass_json
@dataclass
class IdentifiableLanguages(DataClassJsonMixin):
    languages: list[IdentifiableLanguage]


@dataclass_json
@dataclass
class IdentifiedLanguage(DataClassJsonMixin):
    """An identified language with its confidence score."""

    language: str
    confidence: float


@dataclass_json
@dataclass
class IdentifiedLanguages(DataClassJsonMixin):
    """Identified languages, ranked by confidence."""

    languages: list[IdentifiedLanguage]


@dataclass_json
@dataclass
class Translation(DataClassJsonMixin):
    translation_output: str


@dataclass_json
@dataclass
class TranslationResult(DataClassJsonMixin):
    """Result of ``translate``.

    Attributes:
        word_count (int): Number of words in the input text.
        character_count (int): Number of characters in the input text.
        translations (list[Translation]): One translation per input text entry.
    """

    word_count: int
    character_count: int
    translations: list[Translation]


@dataclass_json
@dataclass
class TranslationModel(DataClassJsonMixin):
    """Metadata of a translation model.

    Attributes:
        model_id (str): Globally unique model identifier.
        name (str | None): Name given at creation.
        source (str | None): Source language code.
        target (str | None): Target language code.
        base_model_id (str | None): Base model of a custom model, empty for IBM provided models.
        domain (str | None): Domain of the model.
        customizable (bool | None): Whether the model can be used as a customization base.
        default_model (bool | None): Whether the model is the default for its language pair.
        owner (str | None): Service instance that created a custom model, empty otherwise.
        status (str | None): Availability, "available" once training completed.
    """

    model_id: str
    name: str | None = None
    source: str | None = None
    target: str | None = None
    base_model_id: str | None = None
    domain: str | None = None
    customizable: bool | None = None
    default_model: bool | None = None
    owner: str | None = None
    status: str | None = None


@dataclass_json
@dataclass
class TranslationModels(DataClassJsonMixin):
    models: list[TranslationModel]
