"""Assembly of transport-ready request descriptors.

``build_request`` is a pure function: it reads an OperationDescriptor and the parameters of one call
and returns a RequestDescriptor. It performs no I/O and does not modify its inputs.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Final
from urllib.parse import quote

from core.translator.interface import MissingPathParameterError
from core.version import VERSION
from models.request_models import BodyStyle, FormPart, RequestDescriptor

if TYPE_CHECKING:
    from collections.abc import Mapping

    from models.request_models import OperationDescriptor

__all__: list[str] = [
    "ANALYTICS_HEADER",
    "SERVICE_NAME",
    "SERVICE_VERSION",
    "USER_AGENT",
    "build_request",
    "get_sdk_headers",
    "merge_headers",
]

SERVICE_NAME: Final[str] = "language_translator"
SERVICE_VERSION: Final[str] = "v3"
USER_AGENT: Final[str] = f"language-translator-python/{VERSION}"
ANALYTICS_HEADER: Final[str] = "X-IBMCloud-SDK-Analytics"

_PLACEHOLDER_PATTERN: Final[re.Pattern[str]] = re.compile(r"\{([^{}]+)\}")


def get_sdk_headers(operation_name: str) -> dict[str, str]:
    """Diagnostic headers identifying the client, the service and the operation."""
    return {
        "User-Agent": USER_AGENT,
        ANALYTICS_HEADER: (
            f"service_name={SERVICE_NAME};service_version={SERVICE_VERSION};operation_id={operation_name}"
        ),
    }


def merge_headers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge header layers, later layers overriding earlier ones.

    Header names compare case-insensitively; the spelling of the winning layer is kept.
    """
    merged: dict[str, str] = {}
    for layer in layers:
        if not layer:
            continue
        for name, value in layer.items():
            for existing in [key for key in merged if key.lower() == name.lower()]:
                del merged[existing]
            merged[name] = value
    return merged


def _expand_path(template: str, params: Mapping[str, Any]) -> str:
    def substitute(match: re.Match[str]) -> str:
        name: str = match.group(1)
        value: Any = params.get(name)
        if value is None or value == "":
            raise MissingPathParameterError([name])
        return quote(str(value), safe="")

    return _PLACEHOLDER_PATTERN.sub(substitute, template)


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _build_query(
    operation: OperationDescriptor, params: Mapping[str, Any], default_query: Mapping[str, str] | None
) -> dict[str, str]:
    query: dict[str, str] = dict(default_query or {})
    for wire_name, param_name in operation.query_params:
        value: Any = params.get(param_name)
        if value is None:
            continue
        query[wire_name] = _query_value(value)
    return query


def _filename(name: str, data: Any) -> str:
    file_name: Any = getattr(data, "name", None)
    if isinstance(file_name, str) and file_name:
        return file_name.replace("\\", "/").rsplit("/", 1)[-1]
    return name


def _build_form(operation: OperationDescriptor, params: Mapping[str, Any]) -> list[FormPart]:
    form: list[FormPart] = []
    for name in operation.form_params:
        value: Any = params.get(name)
        if value is None:
            continue
        payloads: list[Any] = value if isinstance(value, list) else [value]
        form.extend(
            FormPart(name=name, data=payload, content_type="application/octet-stream", filename=_filename(name, payload))
            for payload in payloads
            if payload is not None
        )
    return form


def build_request(
    operation: OperationDescriptor,
    params: Mapping[str, Any],
    *,
    service_url: str,
    default_headers: Mapping[str, str] | None = None,
    default_query: Mapping[str, str] | None = None,
) -> RequestDescriptor:
    """Produce the request descriptor of one call.

    Headers are merged in increasing precedence: client default headers, diagnostic headers,
    ``Accept``, ``Content-Type`` and finally the per-call ``headers`` parameter.

    Args:
        operation (OperationDescriptor): Shape of the operation.
        params (Mapping[str, Any]): Parameters of the call. None values are treated as absent.
        service_url (str): Base URL of the service.
        default_headers (Mapping[str, str] | None): Headers configured on the client.
        default_query (Mapping[str, str] | None): Query parameters sent with every request.

    Returns:
        RequestDescriptor: The assembled request.

    Raises:
        MissingPathParameterError: If a path placeholder has no value.
    """
    path: str = _expand_path(operation.path, params)

    content_type: dict[str, str] = {}
    request = RequestDescriptor(
        method=operation.method,
        url=f"{service_url.rstrip('/')}{path}",
        path=path,
        query=_build_query(operation, params, default_query),
    )

    match operation.body_style:
        case BodyStyle.JSON:
            request.json = {name: params[name] for name in operation.body_params if params.get(name) is not None}
            content_type = {"Content-Type": BodyStyle.JSON.value}
        case BodyStyle.TEXT:
            request.text = params.get(operation.text_param or "")
            content_type = {"Content-Type": BodyStyle.TEXT.value}
        case BodyStyle.MULTIPART:
            request.form = _build_form(operation, params)
            content_type = {"Content-Type": BodyStyle.MULTIPART.value}
        case BodyStyle.NONE:
            pass

    request.headers = merge_headers(
        default_headers,
        get_sdk_headers(operation.name),
        {"Accept": operation.accept},
        content_type,
        params.get("headers"),
    )
    return request
