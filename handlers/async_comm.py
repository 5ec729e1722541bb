"""Asynchronous HTTP transport for the translator service.

This module provides the aiohttp-based implementation of TransportInterface. ``AsyncHttp`` turns a
RequestDescriptor into an aiohttp request, injects a static Authorization header, and decodes the
response body with content-type handlers. Failures are raised as AsyncCommError, a TransportError,
so the service passes them to the caller unmodified. No retries are performed.
"""

from __future__ import annotations

import base64
import json
from typing import TYPE_CHECKING, Any, Final, Self

import aiohttp
from aiohttp.client import ClientSession

from core.translator.interface import TransportError, TransportInterface
from models.request_models import DetailedResponse
from utils.logger_utils import LoggerUtils

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable

    from aiohttp.client import ClientResponse

    from models.request_models import RequestDescriptor


__all__: list[str] = [
    "AsyncCommError",
    "AsyncCommInvalidContentTypeError",
    "AsyncCommTimeoutError",
    "AsyncHttp",
]

logger: logging.Logger = LoggerUtils.get_logger(__name__)

CONNECT_TIMEOUT: Final[float] = 5.0
DEFAULT_TOTAL_TIMEOUT: Final[float] = 30.0


class AsyncHttp(TransportInterface):
    """Asynchronous HTTP transport executing request descriptors.

    The aiohttp session is opened lazily on first use (or when entering the context) and can be
    reopened after ``close()``.

    Args:
        total_timeout (float): Total timeout of one request in seconds. 0 or less disables the timeout.
        proxy (str | None): Proxy URL used for every request.
        username (str | None): Username for basic authentication.
        password (str | None): Password for basic authentication.
        bearer_token (str | None): Access token sent as ``Authorization: Bearer``. Takes precedence over
            basic authentication.
    """

    def __init__(
        self,
        *,
        total_timeout: float = DEFAULT_TOTAL_TIMEOUT,
        proxy: str | None = None,
        username: str | None = None,
        password: str | None = None,
        bearer_token: str | None = None,
    ) -> None:
        logger.info("%s initializing", self.__class__.__name__)
        self.__session: ClientSession | None = None
        self._total_timeout: float = total_timeout
        self._proxy: str | None = proxy
        self._authorization: str | None = None
        if bearer_token:
            self._authorization = f"Bearer {bearer_token}"
        elif username is not None and password is not None:
            credentials: bytes = f"{username}:{password}".encode()
            self._authorization = f"Basic {base64.b64encode(credentials).decode('ascii')}"
        self.content_handlers: dict[str, Callable[[bytes], Any]] = {}

        self.add_handler("text/plain", lambda x: x.decode("utf-8"))
        self.add_handler("application/json", lambda x: json.loads(x.decode("utf-8")))

    async def __aenter__(self) -> Self:
        logger.debug("%s entering context", self.__class__.__name__)
        self.initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        _ = exc_type, exc_val, exc_tb
        logger.debug("%s exiting context", self.__class__.__name__)
        await self.close()

    def initialize_session(self) -> None:
        """Open the aiohttp session unless one is already open."""
        if self.__session is None or self.__session.closed:
            self.__session = ClientSession()
            logger.debug("%s session initialized", self.__class__.__name__)

    @property
    def session(self) -> ClientSession:
        """Get the current aiohttp session."""
        if self.__session is None or self.__session.closed:
            msg = "Session is not initialized or has been closed"
            raise RuntimeError(msg)
        return self.__session

    @property
    def is_open(self) -> bool:
        return self.__session is not None and not self.__session.closed

    async def close(self) -> None:
        """Close the aiohttp session if it is open."""
        if self.__session and not self.__session.closed:
            await self.__session.close()
            logger.info("%s session closed", self.__class__.__name__)
        self.__session = None

    def add_handler(self, content_type: str, handler: Callable[[bytes], Any]) -> None:
        """Register a body decoder for a content type, replacing any existing one.

        Args:
            content_type (str): The content type to handle (e.g., "application/json").
            handler (Callable[[bytes], Any]): Function turning the raw body into the decoded value.
        """
        if content_type in self.content_handlers:
            logger.warning("Handler for content type '%s' already exists, replacing it", content_type)
        self.content_handlers[content_type] = handler
        logger.debug("Added handler for content type '%s'", content_type)

    async def decode_response(self, resp: ClientResponse) -> Any:
        """Decode the response body according to its Content-Type.

        Returns:
            Any: The decoded body, None for an empty body.

        Raises:
            AsyncCommInvalidContentTypeError: If no handler is registered for the content type.
        """
        content_type: str = resp.headers.get("Content-Type", "").split(";")[0].strip()
        logger.debug("'Content-Type': '%s'", content_type)

        raw: bytes = await resp.read()
        if not raw:
            logger.debug("Received empty response")
            return None

        handler: Callable[[bytes], Any] | None = self.content_handlers.get(content_type)
        if handler is None:
            msg: str = f"Unknown Content-Type '{content_type}'"
            raise AsyncCommInvalidContentTypeError(msg, status=resp.status)
        try:
            return handler(raw)
        except (UnicodeDecodeError, json.JSONDecodeError) as err:
            msg = f"Malformed '{content_type}' response body"
            raise AsyncCommError(msg, status=resp.status) from err

    def _timeout(self) -> aiohttp.ClientTimeout:
        if self._total_timeout <= 0:
            return aiohttp.ClientTimeout(total=None)
        if self._total_timeout < CONNECT_TIMEOUT:
            return aiohttp.ClientTimeout(total=self._total_timeout)
        return aiohttp.ClientTimeout(connect=CONNECT_TIMEOUT, total=self._total_timeout)

    def _request_kwargs(self, request: RequestDescriptor) -> dict[str, Any]:
        headers: dict[str, str] = dict(request.headers)
        if self._authorization and not any(name.lower() == "authorization" for name in headers):
            headers["Authorization"] = self._authorization

        kwargs: dict[str, Any] = {"params": request.query}
        if request.json is not None:
            kwargs["json"] = request.json
        elif request.text is not None:
            if not isinstance(request.text, str):
                msg: str = f"Plain-text body must be a str, not {type(request.text).__name__}"
                raise AsyncCommError(msg)
            kwargs["data"] = request.text.encode("utf-8")
        elif request.form is not None:
            # multipart even when there are no parts
            writer = aiohttp.MultipartWriter("form-data")
            for part in request.form:
                payload = writer.append(part.data, {"Content-Type": part.content_type})
                disposition: dict[str, str] = {"name": part.name}
                if part.filename is not None:
                    disposition["filename"] = part.filename
                payload.set_content_disposition("form-data", **disposition)
            kwargs["data"] = writer
            # aiohttp sets multipart/form-data together with the boundary.
            headers = {name: value for name, value in headers.items() if name.lower() != "content-type"}
        kwargs["headers"] = headers
        return kwargs

    async def send_request(self, request: RequestDescriptor) -> DetailedResponse:
        """Send the request and decode the response.

        Args:
            request (RequestDescriptor): The request to execute.

        Returns:
            DetailedResponse: Status, headers and decoded body.

        Raises:
            AsyncCommTimeoutError: If the server did not answer in time.
            AsyncCommError: On connection failures, HTTP error statuses and undecodable bodies.
        """
        self.initialize_session()
        logger.debug("[%s] url=%s query=%s", request.method, request.url, request.query)

        try:
            async with self.session.request(
                method=request.method,
                url=request.url,
                timeout=self._timeout(),
                proxy=self._proxy,
                **self._request_kwargs(request),
            ) as resp:
                if resp.status >= 400:
                    body: str = await resp.text(errors="replace")
                    logger.debug("Error response %s: %s", resp.status, body)
                    msg: str = _error_message(body) or resp.reason or "Error response from the server."
                    raise AsyncCommError(msg, status=resp.status)
                result: Any = await self.decode_response(resp)
                return DetailedResponse(status=resp.status, headers=dict(resp.headers), result=result)

        except TimeoutError as err:
            logger.debug(err)
            msg = "Timeout due to a lack of response from the server."
            raise AsyncCommTimeoutError(msg) from err
        except ConnectionResetError as err:
            logger.debug(err)
            msg = "The connection to the server has been disconnected."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientConnectorError as err:
            logger.debug(err)
            msg = "The server could not be reached."
            raise AsyncCommError(msg) from err
        except aiohttp.ClientError as err:
            logger.debug(err)
            msg = f"HTTP client error: {err}"
            raise AsyncCommError(msg) from err


def _error_message(body: str) -> str | None:
    """Extract the service's error message from a JSON error body."""
    try:
        payload: Any = json.loads(body)
    except ValueError:
        return body.strip() or None
    if isinstance(payload, dict):
        for key in ("error", "errorMessage", "message"):
            if isinstance(payload.get(key), str):
                return payload[key]
    return None


class AsyncCommError(TransportError):
    """Base class for transport errors.

    Attributes:
        msg (str): Error message.
        status (int | None): HTTP status of the response, None if no response was received.
    """

    def __init__(self, msg: str | BaseException, *, status: int | None = None) -> None:
        self.msg: str = str(msg)
        self.status: int | None = status
        if status is not None:
            self.msg = f"{self.msg}: status='{status}'"
        super().__init__(self.msg)


class AsyncCommTimeoutError(AsyncCommError):
    """The server did not respond within the configured timeout."""


class AsyncCommInvalidContentTypeError(AsyncCommError):
    """No handler is registered for the content type of the response."""
