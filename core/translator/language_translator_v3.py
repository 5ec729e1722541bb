"""Language Translator V3 service client.

Translates text between languages, identifies the language of a text, and manages custom
translation models built from translation memory (TMX) files.

Every operation returns an ``asyncio.Task`` and must therefore be called while an event loop is running::

    async with LanguageTranslatorV3(version="2018-05-01", transport=AsyncHttp(bearer_token=token)) as service:
        result = await service.translate({"text": ["hello"], "source": "en", "target": "es"})
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Self

from core.translator.service import BaseService
from handlers.async_comm import AsyncHttp
from models.config_models import DEFAULT_SERVICE_URL
from models.request_models import BodyStyle, OperationDescriptor
from models.translator_models import (
    CreateModelParams,
    DeleteModelParams,
    GetModelParams,
    IdentifyParams,
    ListIdentifiableLanguagesParams,
    ListModelsParams,
    TranslateParams,
)
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import asyncio
    import logging
    from collections.abc import Mapping

    from core.translator.interface import TransportInterface
    from core.translator.service import Callback
    from models.config_models import Config
    from models.translator_models import _OperationParams

__all__: list[str] = ["DEFAULT_SERVICE_URL", "LanguageTranslatorV3"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)


class LanguageTranslatorV3(BaseService):
    """Client of the Language Translator V3 API.

    Each operation accepts either its parameter dataclass or a plain mapping with the same keys,
    and an optional ``callback(error, body, response)`` invoked when the returned task completes.

    Args:
        version (str | None): API version date in "YYYY-MM-DD" format. Mandatory.
        url (str): Base URL of the service.
        headers (Mapping[str, str] | None): Default headers sent with every request.
        transport (TransportInterface | None): HTTP collaborator. Defaults to an unauthenticated AsyncHttp.

    Raises:
        ConfigurationError: If ``version`` is missing.
    """

    TRANSLATE: ClassVar[OperationDescriptor] = OperationDescriptor(
        name="translate",
        method="POST",
        path="/v3/translate",
        required=("text",),
        body_params=("text", "model_id", "source", "target"),
        body_style=BodyStyle.JSON,
    )
    IDENTIFY: ClassVar[OperationDescriptor] = OperationDescriptor(
        name="identify",
        method="POST",
        path="/v3/identify",
        required=("text",),
        text_param="text",
        body_style=BodyStyle.TEXT,
    )
    LIST_IDENTIFIABLE_LANGUAGES: ClassVar[OperationDescriptor] = OperationDescriptor(
        name="listIdentifiableLanguages",
        method="GET",
        path="/v3/identifiable_languages",
    )
    CREATE_MODEL: ClassVar[OperationDescriptor] = OperationDescriptor(
        name="createModel",
        method="POST",
        path="/v3/models",
        required=("base_model_id",),
        query_params=(("base_model_id", "base_model_id"), ("name", "name")),
        form_params=("forced_glossary", "parallel_corpus"),
        body_style=BodyStyle.MULTIPART,
    )
    DELETE_MODEL: ClassVar[OperationDescriptor] = OperationDescriptor(
        name="deleteModel",
        method="DELETE",
        path="/v3/models/{model_id}",
        required=("model_id",),
        path_params=("model_id",),
    )
    GET_MODEL: ClassVar[OperationDescriptor] = OperationDescriptor(
        name="getModel",
        method="GET",
        path="/v3/models/{model_id}",
        required=("model_id",),
        path_params=("model_id",),
    )
    LIST_MODELS: ClassVar[OperationDescriptor] = OperationDescriptor(
        name="listModels",
        method="GET",
        path="/v3/models",
        query_params=(("source", "source"), ("target", "target"), ("default", "default_models")),
    )

    def __init__(
        self,
        *,
        version: str | None,
        url: str = DEFAULT_SERVICE_URL,
        headers: Mapping[str, str] | None = None,
        transport: TransportInterface | None = None,
    ) -> None:
        super().__init__(
            url=url,
            version=version,
            headers=headers,
            transport=transport if transport is not None else AsyncHttp(),
        )

    @classmethod
    def from_config(cls, config: Config) -> Self:
        """Build the client and its AsyncHttp transport from a loaded configuration.

        Args:
            config (Config): Configuration produced by ConfigLoader.

        Returns:
            LanguageTranslatorV3: The configured client.
        """
        if config.LOGGING.FILE or config.LOGGING.CONSOLE:
            LoggerUtils.configure(config.LOGGING.FILE, level=config.LOGGING.LEVEL, console=config.LOGGING.CONSOLE)

        auth = config.AUTHENTICATION
        logger.debug(
            "Building %s from configuration: url='%s', timeout=%s, proxy=%s",
            cls.__name__,
            config.SERVICE.URL,
            config.TRANSPORT.TIMEOUT,
            bool(config.TRANSPORT.PROXY),
        )
        transport = AsyncHttp(
            total_timeout=config.TRANSPORT.TIMEOUT,
            proxy=config.TRANSPORT.PROXY or None,
            username=auth.USERNAME or None,
            password=auth.PASSWORD or None,
            bearer_token=auth.BEARER_TOKEN or None,
        )
        return cls(
            version=config.SERVICE.VERSION,
            url=config.SERVICE.URL,
            headers=config.SERVICE.HEADERS,
            transport=transport,
        )

    @staticmethod
    def _coerce(params_type: type[_OperationParams], params: Any) -> Any:
        if isinstance(params, params_type):
            return params
        return params_type.from_mapping(params)

    #########################
    # translation
    #########################

    def translate(
        self,
        params: TranslateParams | Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> asyncio.Task[Any]:
        """Translate the input text from the source language to the target language.

        Args:
            params (TranslateParams | Mapping[str, Any] | None): ``text`` is required;
                ``model_id``, ``source`` and ``target`` are optional.
            callback (Callback | None): Completion callback.

        Returns:
            asyncio.Task[Any]: Resolves with the TranslationResult payload.
        """
        return self._call(self.TRANSLATE, self._coerce(TranslateParams, params), callback)

    #########################
    # identification
    #########################

    def identify(
        self,
        params: IdentifyParams | Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> asyncio.Task[Any]:
        """Identify the language of the input text.

        Returns:
            asyncio.Task[Any]: Resolves with the IdentifiedLanguages payload.
        """
        return self._call(self.IDENTIFY, self._coerce(IdentifyParams, params), callback)

    def list_identifiable_languages(
        self,
        params: ListIdentifiableLanguagesParams | Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> asyncio.Task[Any]:
        """List the languages the service can identify, with their codes and names."""
        return self._call(
            self.LIST_IDENTIFIABLE_LANGUAGES, self._coerce(ListIdentifiableLanguagesParams, params), callback
        )

    #########################
    # models
    #########################

    def create_model(
        self,
        params: CreateModelParams | Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> asyncio.Task[Any]:
        """Upload TMX files to customize a translation model.

        A model is customized either with one forced glossary or with parallel corpora. To use both,
        customize with a parallel corpus first and then customize the resulting model with a glossary.

        Args:
            params (CreateModelParams | Mapping[str, Any] | None): ``base_model_id`` is required;
                ``forced_glossary``, ``parallel_corpus`` and ``name`` are optional.
            callback (Callback | None): Completion callback.

        Returns:
            asyncio.Task[Any]: Resolves with the TranslationModel payload of the new model.
        """
        return self._call(self.CREATE_MODEL, self._coerce(CreateModelParams, params), callback)

    def delete_model(
        self,
        params: DeleteModelParams | Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> asyncio.Task[Any]:
        """Delete a custom translation model."""
        return self._call(self.DELETE_MODEL, self._coerce(DeleteModelParams, params), callback)

    def get_model(
        self,
        params: GetModelParams | Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> asyncio.Task[Any]:
        """Get information about a translation model, including the training status of custom models.

        A model whose training completed has the status ``available``.
        """
        return self._call(self.GET_MODEL, self._coerce(GetModelParams, params), callback)

    def list_models(
        self,
        params: ListModelsParams | Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> asyncio.Task[Any]:
        """List the available translation models, optionally filtered by language pair.

        Returns:
            asyncio.Task[Any]: Resolves with the TranslationModels payload.
        """
        return self._call(self.LIST_MODELS, self._coerce(ListModelsParams, params), callback)
