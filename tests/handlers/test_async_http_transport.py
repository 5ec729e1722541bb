from __future__ import annotations

import asyncio
import io
from typing import Any

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer

from core.translator.interface import TransportError
from core.translator.request_builder import build_request
from handlers.async_comm import AsyncCommError, AsyncCommInvalidContentTypeError, AsyncCommTimeoutError, AsyncHttp
from models.request_models import BodyStyle, DetailedResponse, OperationDescriptor, RequestDescriptor

TRANSLATE = OperationDescriptor(
    name="translate",
    method="POST",
    path="/v3/translate",
    required=("text",),
    body_params=("text", "source", "target"),
    body_style=BodyStyle.JSON,
)
IDENTIFY = OperationDescriptor(
    name="identify",
    method="POST",
    path="/v3/identify",
    required=("text",),
    text_param="text",
    body_style=BodyStyle.TEXT,
)
CREATE_MODEL = OperationDescriptor(
    name="createModel",
    method="POST",
    path="/v3/models",
    required=("base_model_id",),
    query_params=(("base_model_id", "base_model_id"),),
    form_params=("forced_glossary", "parallel_corpus"),
    body_style=BodyStyle.MULTIPART,
)
DELETE_MODEL = OperationDescriptor(
    name="deleteModel",
    method="DELETE",
    path="/v3/models/{model_id}",
    required=("model_id",),
    path_params=("model_id",),
)


async def _translate(request: web.Request) -> web.Response:
    return web.json_response(
        {
            "body": await request.json(),
            "query": dict(request.query),
            "authorization": request.headers.get("Authorization"),
            "content_type": request.content_type,
        }
    )


async def _identify(request: web.Request) -> web.Response:
    text: str = await request.text()
    return web.json_response({"text": text, "content_type": request.content_type})


async def _create_model(request: web.Request) -> web.Response:
    parts: list[dict[str, Any]] = []
    reader = await request.multipart()
    async for part in reader:
        parts.append(
            {
                "name": part.name,
                "filename": part.filename,
                "content_type": part.headers.get("Content-Type"),
                "data": (await part.read()).decode("utf-8"),
            }
        )
    return web.json_response(
        {"query": dict(request.query), "content_type": request.content_type, "parts": parts}, status=201
    )


async def _delete_model(request: web.Request) -> web.Response:
    model_id: str = request.match_info["model_id"]
    if model_id == "missing":
        return web.json_response({"code": 404, "error": "Model not found"}, status=404)
    if model_id == "gone":
        return web.Response(status=204)
    if model_id == "binary":
        return web.Response(body=b"\x00\x01", content_type="application/octet-stream")
    if model_id == "broken":
        return web.Response(body=b"{not json", content_type="application/json")
    if model_id == "plain":
        return web.Response(text="deleted", content_type="text/plain")
    if model_id == "slow":
        await asyncio.sleep(0.5)
    return web.json_response({"status": "OK"})


def _make_app() -> web.Application:
    app = web.Application()
    app.router.add_post("/api/v3/translate", _translate)
    app.router.add_post("/api/v3/identify", _identify)
    app.router.add_post("/api/v3/models", _create_model)
    app.router.add_delete("/api/v3/models/{model_id}", _delete_model)
    return app


def _service_url(server: TestServer) -> str:
    return str(server.make_url("/api"))


@pytest.mark.asyncio
async def test_json_request_with_bearer_token() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp(bearer_token="token") as http:
        request: RequestDescriptor = build_request(
            TRANSLATE,
            {"text": ["hello"], "source": "en", "target": "es"},
            service_url=_service_url(server),
            default_query={"version": "2018-05-01"},
        )
        response: DetailedResponse = await http.send_request(request)

    assert response.status == 200
    assert response.headers["Content-Type"].startswith("application/json")
    assert response.result == {
        "body": {"text": ["hello"], "source": "en", "target": "es"},
        "query": {"version": "2018-05-01"},
        "authorization": "Bearer token",
        "content_type": "application/json",
    }


@pytest.mark.asyncio
async def test_custom_authorization_header_is_kept() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp(username="apikey", password="secret") as http:
        request: RequestDescriptor = build_request(
            TRANSLATE,
            {"text": ["hello"], "headers": {"authorization": "Bearer caller"}},
            service_url=_service_url(server),
        )
        response: DetailedResponse = await http.send_request(request)

    assert response.result["authorization"] == "Bearer caller"


@pytest.mark.asyncio
async def test_text_request_sends_raw_body() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp() as http:
        request: RequestDescriptor = build_request(IDENTIFY, {"text": "Hola mundo"}, service_url=_service_url(server))
        response: DetailedResponse = await http.send_request(request)

    assert response.result == {"text": "Hola mundo", "content_type": "text/plain"}


@pytest.mark.asyncio
async def test_multipart_request_sends_octet_stream_parts() -> None:
    glossary = io.BytesIO(b"<tmx>glossary</tmx>")
    glossary.name = "glossary.tmx"

    async with TestServer(_make_app()) as server, AsyncHttp() as http:
        request: RequestDescriptor = build_request(
            CREATE_MODEL,
            {"base_model_id": "en-es", "forced_glossary": glossary},
            service_url=_service_url(server),
        )
        response: DetailedResponse = await http.send_request(request)

    assert response.status == 201
    assert response.result == {
        "query": {"base_model_id": "en-es"},
        "content_type": "multipart/form-data",
        "parts": [
            {
                "name": "forced_glossary",
                "filename": "glossary.tmx",
                "content_type": "application/octet-stream",
                "data": "<tmx>glossary</tmx>",
            }
        ],
    }


@pytest.mark.asyncio
async def test_multipart_request_without_parts_stays_multipart() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp() as http:
        request: RequestDescriptor = build_request(
            CREATE_MODEL, {"base_model_id": "en-es"}, service_url=_service_url(server)
        )
        response: DetailedResponse = await http.send_request(request)

    assert request.form == []
    assert response.result == {"query": {"base_model_id": "en-es"}, "content_type": "multipart/form-data", "parts": []}


@pytest.mark.asyncio
async def test_non_string_text_body_raises() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp() as http:
        request: RequestDescriptor = build_request(IDENTIFY, {"text": b"Hola"}, service_url=_service_url(server))
        with pytest.raises(AsyncCommError, match="Plain-text body must be a str, not bytes"):
            await http.send_request(request)


@pytest.mark.asyncio
async def test_error_status_raises_with_service_message() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp() as http:
        request: RequestDescriptor = build_request(
            DELETE_MODEL, {"model_id": "missing"}, service_url=_service_url(server)
        )
        with pytest.raises(AsyncCommError) as excinfo:
            await http.send_request(request)

    assert isinstance(excinfo.value, TransportError)
    assert excinfo.value.status == 404
    assert str(excinfo.value) == "Model not found: status='404'"


@pytest.mark.asyncio
async def test_empty_body_decodes_to_none() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp() as http:
        request: RequestDescriptor = build_request(DELETE_MODEL, {"model_id": "gone"}, service_url=_service_url(server))
        response: DetailedResponse = await http.send_request(request)

    assert response.status == 204
    assert response.result is None


@pytest.mark.asyncio
async def test_plain_text_body_is_decoded() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp() as http:
        request: RequestDescriptor = build_request(DELETE_MODEL, {"model_id": "plain"}, service_url=_service_url(server))
        response: DetailedResponse = await http.send_request(request)

    assert response.result == "deleted"


@pytest.mark.asyncio
async def test_unknown_content_type_raises() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp() as http:
        request: RequestDescriptor = build_request(
            DELETE_MODEL, {"model_id": "binary"}, service_url=_service_url(server)
        )
        with pytest.raises(AsyncCommInvalidContentTypeError):
            await http.send_request(request)


@pytest.mark.asyncio
async def test_malformed_json_raises() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp() as http:
        request: RequestDescriptor = build_request(
            DELETE_MODEL, {"model_id": "broken"}, service_url=_service_url(server)
        )
        with pytest.raises(AsyncCommError, match="Malformed 'application/json' response body"):
            await http.send_request(request)


@pytest.mark.asyncio
async def test_timeout_raises_timeout_error() -> None:
    async with TestServer(_make_app()) as server, AsyncHttp(total_timeout=0.05) as http:
        request: RequestDescriptor = build_request(DELETE_MODEL, {"model_id": "slow"}, service_url=_service_url(server))
        with pytest.raises(AsyncCommTimeoutError):
            await http.send_request(request)


@pytest.mark.asyncio
async def test_send_request_opens_session_on_demand() -> None:
    http = AsyncHttp()
    async with TestServer(_make_app()) as server:
        request: RequestDescriptor = build_request(DELETE_MODEL, {"model_id": "abc"}, service_url=_service_url(server))
        response: DetailedResponse = await http.send_request(request)
        assert http.is_open is True
        await http.close()

    assert response.result == {"status": "OK"}
    assert http.is_open is False
