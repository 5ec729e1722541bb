"""Models describing operations, assembled requests and transport responses.

OperationDescriptor is the static shape of one API capability. RequestDescriptor is what the
request builder produces from an operation and a set of parameters, and DetailedResponse is what
a transport hands back.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

__all__: list[str] = [
    "BodyStyle",
    "DetailedResponse",
    "FormPart",
    "OperationDescriptor",
    "RequestDescriptor",
]


class BodyStyle(StrEnum):
    """Encoding of the request body."""

    NONE = "none"
    JSON = "application/json"
    TEXT = "text/plain"
    MULTIPART = "multipart/form-data"


@dataclass(frozen=True)
class OperationDescriptor:
    """Static definition of one API operation.

    Attributes:
        name (str): Operation identifier, reported in the diagnostic header.
        method (str): HTTP method.
        path (str): URL path template, placeholders written as ``{name}``.
        required (tuple[str, ...]): Parameters that must be present and non-empty.
        path_params (tuple[str, ...]): Parameters substituted into the path template.
        query_params (tuple[tuple[str, str], ...]): ``(wire_name, param_name)`` pairs sent in the query string.
        body_params (tuple[str, ...]): Fields of the JSON body.
        text_param (str | None): Parameter whose raw string value is the plain-text body.
        form_params (tuple[str, ...]): Fields of the multipart body.
        body_style (BodyStyle): Encoding of the body.
        accept (str): Expected response content type.
    """

    name: str
    method: str
    path: str
    required: tuple[str, ...] = ()
    path_params: tuple[str, ...] = ()
    query_params: tuple[tuple[str, str], ...] = ()
    body_params: tuple[str, ...] = ()
    text_param: str | None = None
    form_params: tuple[str, ...] = ()
    body_style: BodyStyle = BodyStyle.NONE
    accept: str = "application/json"


@dataclass
class FormPart:
    """A single field of a multipart body.

    Attributes:
        name (str): Form field name.
        data (Any): Binary payload (bytes or a readable binary file object).
        content_type (str): Content type declared for the part.
        filename (str | None): File name reported for the part.
    """

    name: str
    data: Any
    content_type: str = "application/octet-stream"
    filename: str | None = None


@dataclass
class RequestDescriptor:
    """Transport-ready representation of one call.

    At most one of ``json``, ``text`` and ``form`` is set.
    """

    method: str
    url: str
    path: str
    query: dict[str, str] = field(default_factory=dict)
    headers: dict[str, str] = field(default_factory=dict)
    json: dict[str, Any] | None = None
    text: str | None = None
    form: list[FormPart] | None = None

    @property
    def has_body(self) -> bool:
        return self.json is not None or self.text is not None or self.form is not None


@dataclass
class DetailedResponse:
    """Response returned by a transport.

    Attributes:
        status (int): HTTP status code.
        headers (dict[str, str]): Response headers.
        result (Any): Decoded response body, None for an empty body.
    """

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    result: Any = None
