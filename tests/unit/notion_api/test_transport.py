"""Unit tests for notionpub/notion_api/transport.py.

Covers:
- _error_message
- AsyncNotionTransport construction (headers, base URL)
- AsyncNotionTransport.request (success, non-2xx, network errors, metrics)
- Debug payload dump
- close / async context manager
"""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from notionpub.config import NotionpubConfig
from notionpub.errors import ErrorCode, NotionpubNetworkError, NotionpubUploadError
from notionpub.notion_api.transport import AsyncNotionTransport, _error_message

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

TOKEN = "test_token_1234"


def make_config(**overrides) -> NotionpubConfig:
    return NotionpubConfig(token=TOKEN, **overrides)


def make_transport(handler, **overrides) -> AsyncNotionTransport:
    """Transport whose HTTP client is served by *handler*."""
    config = make_config(**overrides)
    client = httpx.AsyncClient(
        base_url=config.base_url,
        transport=httpx.MockTransport(handler),
    )
    return AsyncNotionTransport(config, client=client)


def respond(status_code: int = 200, body: dict | str | None = None):
    def handler(request: httpx.Request) -> httpx.Response:
        if isinstance(body, dict):
            return httpx.Response(status_code, json=body)
        return httpx.Response(status_code, text=body or "")
    return handler


# ---------------------------------------------------------------------------
# _error_message
# ---------------------------------------------------------------------------

class TestErrorMessage:
    def test_json_message_field(self):
        resp = httpx.Response(400, json={"object": "error", "message": "bad property"})
        assert _error_message(resp) == "bad property"

    def test_json_without_message(self):
        resp = httpx.Response(400, json={"code": "x"})
        assert "code" in _error_message(resp)

    def test_plain_text_body(self):
        resp = httpx.Response(502, text="Bad Gateway")
        assert _error_message(resp) == "Bad Gateway"


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------

class TestConstruction:
    async def test_default_client_headers(self):
        transport = AsyncNotionTransport(make_config())
        headers = transport._client.headers
        assert headers["Authorization"] == f"Bearer {TOKEN}"
        assert headers["Notion-Version"] == "2022-06-28"
        assert headers["Content-Type"] == "application/json"
        assert str(transport._client.base_url).rstrip("/") == "https://api.notion.com/v1"
        await transport.close()

    async def test_custom_version_header(self):
        transport = AsyncNotionTransport(make_config(notion_version="2025-09-03"))
        assert transport._client.headers["Notion-Version"] == "2025-09-03"
        await transport.close()


# ---------------------------------------------------------------------------
# request()
# ---------------------------------------------------------------------------

class TestRequest:
    async def test_200_returns_json(self):
        transport = make_transport(respond(200, {"id": "page-1", "object": "page"}))
        result = await transport.request("POST", "/pages", json={"a": 1})
        assert result == {"id": "page-1", "object": "page"}
        await transport.close()

    async def test_empty_body_returns_empty_dict(self):
        transport = make_transport(respond(200))
        assert await transport.request("PATCH", "/blocks/x/children") == {}
        await transport.close()

    async def test_request_is_sent_to_path_with_json(self):
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={})

        transport = make_transport(handler)
        await transport.request("PATCH", "/blocks/b1/children", json={"children": []})
        assert len(seen) == 1
        assert seen[0].method == "PATCH"
        assert seen[0].url.path == "/v1/blocks/b1/children"
        assert json.loads(seen[0].content) == {"children": []}
        await transport.close()

    @pytest.mark.parametrize("status", [400, 401, 404, 409, 429, 500, 503])
    async def test_non_2xx_raises_upload_error(self, status):
        body = {"object": "error", "status": status, "message": "nope"}
        transport = make_transport(respond(status, body))
        with pytest.raises(NotionpubUploadError) as exc_info:
            await transport.request("POST", "/pages")
        err = exc_info.value
        assert err.code == ErrorCode.UPLOAD_ERROR
        assert err.status_code == status
        assert json.loads(err.body) == body
        assert err.context["method"] == "POST"
        assert err.context["path"] == "/pages"
        assert "nope" in err.message
        await transport.close()

    async def test_single_attempt_on_error(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(500, text="boom")

        transport = make_transport(handler)
        with pytest.raises(NotionpubUploadError):
            await transport.request("POST", "/pages")
        assert len(calls) == 1
        await transport.close()

    async def test_network_error_wrapped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused")

        transport = make_transport(handler)
        with pytest.raises(NotionpubNetworkError) as exc_info:
            await transport.request("POST", "/pages")
        err = exc_info.value
        assert err.code == ErrorCode.NETWORK_ERROR
        assert isinstance(err.cause, httpx.ConnectError)
        assert err.__cause__ is err.cause
        await transport.close()

    async def test_timeout_wrapped(self):
        transport = make_transport(respond(200, {}))
        with (
            patch.object(
                transport._client,
                "request",
                new=AsyncMock(side_effect=httpx.ReadTimeout("slow")),
            ),
            pytest.raises(NotionpubNetworkError),
        ):
            await transport.request("PATCH", "/blocks/x/children")
        await transport.close()


# ---------------------------------------------------------------------------
# Metrics
# ---------------------------------------------------------------------------

class TestMetrics:
    async def test_success_metrics(self):
        metrics = MagicMock()
        transport = make_transport(respond(200, {}), metrics=metrics)
        await transport.request("POST", "/pages")
        metrics.increment.assert_called_once_with(
            "notionpub.requests_total", tags={"method": "POST", "status": "200"},
        )
        name, elapsed = metrics.timing.call_args.args
        assert name == "notionpub.request_duration_ms"
        assert elapsed >= 0
        await transport.close()

    async def test_error_status_tagged(self):
        metrics = MagicMock()
        transport = make_transport(respond(429, {"message": "slow down"}), metrics=metrics)
        with pytest.raises(NotionpubUploadError):
            await transport.request("PATCH", "/blocks/x/children")
        metrics.increment.assert_called_once_with(
            "notionpub.requests_total", tags={"method": "PATCH", "status": "429"},
        )
        await transport.close()

    async def test_network_error_tagged(self):
        metrics = MagicMock()

        def handler(request):
            raise httpx.ConnectError("down")

        transport = make_transport(handler, metrics=metrics)
        with pytest.raises(NotionpubNetworkError):
            await transport.request("POST", "/pages")
        metrics.increment.assert_called_once_with(
            "notionpub.requests_total", tags={"method": "POST", "status": "error"},
        )
        metrics.timing.assert_not_called()
        await transport.close()


# ---------------------------------------------------------------------------
# Debug dump
# ---------------------------------------------------------------------------

class TestDebugDump:
    async def test_dump_writes_redacted_json(self, capsys):
        transport = make_transport(respond(200, {"id": "p1"}), debug_dump_payload=True)
        await transport.request(
            "POST", "/pages", json={"properties": {}, "api_key": TOKEN},
        )
        err = capsys.readouterr().err
        data = json.loads(err)
        assert data["method"] == "POST"
        assert data["path"] == "/pages"
        assert data["response_status"] == 200
        assert data["response_body"] == {"id": "p1"}
        assert TOKEN not in err
        await transport.close()

    async def test_dump_on_error_response(self, capsys):
        transport = make_transport(respond(400, "plain failure"), debug_dump_payload=True)
        with pytest.raises(NotionpubUploadError):
            await transport.request("POST", "/pages")
        err = capsys.readouterr().err
        assert '"response_status": 400' in err
        assert '"response_body": "plain failure"' in err
        await transport.close()

    async def test_no_dump_by_default(self, capsys):
        transport = make_transport(respond(200, {"id": "p1"}))
        await transport.request("POST", "/pages")
        assert capsys.readouterr().err == ""
        await transport.close()


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------

class TestLifecycle:
    async def test_context_manager_closes_client(self):
        transport = make_transport(respond(200, {}))
        with patch.object(transport._client, "aclose", new=AsyncMock()) as mock_close:
            async with transport:
                pass
        mock_close.assert_awaited_once()

    async def test_close_on_exception(self):
        transport = make_transport(respond(200, {}))
        with (
            patch.object(transport._client, "aclose", new=AsyncMock()) as mock_close,
            pytest.raises(ValueError, match="test error"),
        ):
            async with transport:
                raise ValueError("test error")
        mock_close.assert_awaited_once()
