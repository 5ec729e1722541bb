"""Base class shared by service façades.

BaseService holds the immutable construction-time options and runs the per-call pipeline:
snapshot the parameters, schedule a task, validate, build the request descriptor and hand it
to the transport. Completion callbacks are registered on that task.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Self, TypeAlias

from core.translator.interface import ConfigurationError, ValidationError
from core.translator.request_builder import build_request
from core.translator.validator import get_missing_params
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping

    from core.translator.interface import TransportInterface
    from models.request_models import DetailedResponse, OperationDescriptor, RequestDescriptor
    from models.translator_models import _OperationParams

__all__: list[str] = ["BaseService", "Callback", "ServiceOptions"]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

Callback: TypeAlias = "Callable[[BaseException | None, Any, DetailedResponse | None], None]"


@dataclass(frozen=True)
class ServiceOptions:
    """Configuration fixed when the service is constructed.

    Attributes:
        url (str): Base URL of the service.
        version (str): API version date sent as the ``version`` query parameter of every request.
        headers (Mapping[str, str]): Default headers sent with every request.
    """

    url: str
    version: str
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def query(self) -> dict[str, str]:
        return {"version": self.version}


class BaseService:
    """Façade base: immutable options plus the call pipeline used by every operation.

    Args:
        url (str): Base URL of the service.
        version (str | None): API version date. Mandatory.
        headers (Mapping[str, str] | None): Default headers sent with every request.
        transport (TransportInterface): Collaborator performing the HTTP I/O.

    Raises:
        ConfigurationError: If ``version`` is missing or empty.
    """

    def __init__(
        self,
        *,
        url: str,
        version: str | None,
        headers: Mapping[str, str] | None,
        transport: TransportInterface,
    ) -> None:
        if not version:
            msg = "Argument error: version was not specified"
            raise ConfigurationError(msg)
        self.__options = ServiceOptions(url=url, version=version, headers=MappingProxyType(dict(headers or {})))
        self.__transport: TransportInterface = transport
        self._pending: set[asyncio.Task[Any]] = set()
        logger.debug("'%s': url='%s', version='%s'", self.__class__.__name__, url, version)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        await self.close()

    @property
    def options(self) -> ServiceOptions:
        return self.__options

    @property
    def transport(self) -> TransportInterface:
        return self.__transport

    async def close(self) -> None:
        """Close the transport."""
        await self.__transport.close()

    def prepare_request(self, operation: OperationDescriptor, params: _OperationParams) -> RequestDescriptor:
        """Validate the parameters and build the request descriptor of one call.

        Raises:
            ValidationError: If a required parameter is missing or empty.
        """
        mapping: dict[str, Any] = params.as_mapping()
        missing: list[str] = get_missing_params(mapping, operation.required)
        if missing:
            logger.debug("'%s': missing required parameters %s", operation.name, missing)
            raise ValidationError(missing)

        return build_request(
            operation,
            mapping,
            service_url=self.__options.url,
            default_headers=self.__options.headers,
            default_query=self.__options.query,
        )

    async def _perform(
        self,
        operation: OperationDescriptor,
        params: _OperationParams,
        on_response: Callable[[DetailedResponse], None] | None = None,
    ) -> Any:
        request: RequestDescriptor = self.prepare_request(operation, params)
        logger.debug("[%s] %s %s query=%s", operation.name, request.method, request.url, request.query)
        response: DetailedResponse = await self.__transport.send_request(request)
        if on_response is not None:
            on_response(response)
        if params.return_response:
            return response
        return response.result

    def _call(
        self,
        operation: OperationDescriptor,
        params: _OperationParams,
        callback: Callback | None = None,
    ) -> asyncio.Task[Any]:
        """Schedule one operation on the running event loop.

        The parameters are snapshotted before this method returns, so the caller may reuse them.

        Args:
            operation (OperationDescriptor): Shape of the operation.
            params (_OperationParams): Parameters of the call.
            callback (Callback | None): Called as ``callback(error, body, response)`` once the task is done.

        Returns:
            asyncio.Task[Any]: Resolves with the decoded body, or with the DetailedResponse when
                ``return_response`` is set. Raises ValidationError or the transport's error.

        Raises:
            RuntimeError: If no event loop is running.
        """
        loop: asyncio.AbstractEventLoop = asyncio.get_running_loop()
        snapshot: _OperationParams = params.snapshot()
        received: list[DetailedResponse] = []
        task: asyncio.Task[Any] = loop.create_task(self._perform(operation, snapshot, received.append))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        if callback is not None:
            task.add_done_callback(_completion(callback, received))
        return task


def _completion(callback: Callback, received: list[DetailedResponse]) -> Callable[[asyncio.Task[Any]], None]:
    """Adapt a ``(error, body, response)`` callback to a task done-callback."""

    def done(task: asyncio.Task[Any]) -> None:
        if task.cancelled():
            callback(asyncio.CancelledError(), None, None)
            return
        err: BaseException | None = task.exception()
        if err is not None:
            callback(err, None, None)
            return
        response: DetailedResponse = received[0]
        callback(None, response.result, response)

    return done
