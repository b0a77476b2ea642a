"""Async HTTP transport for the Notion API.

The transport performs exactly one attempt per request:

1. Send the HTTP request with auth and version headers.
2. On ``2xx`` -- return the parsed JSON response.
3. On any other status -- raise :class:`NotionpubUploadError` carrying the
   status code and raw body.
4. On a transport failure -- raise :class:`NotionpubNetworkError`.

There is no retry or backoff here; callers that want retries wrap the
whole publish operation.
"""

from __future__ import annotations

import json as _json
import sys
import time
from typing import Any

import httpx

from notionpub.config import NotionpubConfig
from notionpub.errors import NotionpubNetworkError, NotionpubUploadError
from notionpub.observability import NoopMetricsHook, get_logger

log = get_logger("notionpub.transport")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _error_message(response: httpx.Response) -> str:
    """Notion's ``message`` field if the body is JSON, else the raw text."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:500]
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.text[:500]


def _dump_payload(
    config: NotionpubConfig,
    method: str,
    path: str,
    payload: Any | None,
    response: httpx.Response,
) -> None:
    """Write a redacted dump of the request/response to stderr."""
    from notionpub.utils.redact import redact

    try:
        response_body: Any = response.json()
    except ValueError:
        response_body = response.text[:1000]

    dump: dict[str, Any] = {
        "method": method,
        "path": path,
        "request_body": payload,
        "response_status": response.status_code,
        "response_body": response_body,
    }
    print(
        _json.dumps(redact(dump, config.token), indent=2, ensure_ascii=False, default=str),
        file=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Async transport
# ---------------------------------------------------------------------------

class AsyncNotionTransport:
    """Asynchronous HTTP transport with auth headers and typed errors.

    Parameters
    ----------
    config:
        Supplies the token, version header, base URL, timeout, proxy,
        metrics hook and debug flags.
    client:
        Optional pre-built :class:`httpx.AsyncClient`.  Tests pass one
        backed by :class:`httpx.MockTransport`; it must already carry the
        base URL and headers.
    """

    def __init__(
        self,
        config: NotionpubConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._metrics = config.metrics if config.metrics is not None else NoopMetricsHook()

        if client is None:
            client = httpx.AsyncClient(
                base_url=config.base_url,
                headers={
                    "Authorization": f"Bearer {config.token}",
                    "Notion-Version": config.notion_version,
                    "Content-Type": "application/json",
                },
                timeout=httpx.Timeout(config.timeout_seconds),
                proxy=config.http_proxy,
            )
        self._client = client

    # -- public API --------------------------------------------------------

    async def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Execute one HTTP request against the Notion API.

        Parameters
        ----------
        method:
            HTTP method (``POST``, ``PATCH``, ...).
        path:
            API path relative to ``base_url`` (e.g. ``/pages``).
        **kwargs:
            Forwarded to :meth:`httpx.AsyncClient.request`; use ``json=``
            for JSON bodies.

        Returns
        -------
        dict
            Parsed JSON response body (``{}`` for an empty body).

        Raises
        ------
        NotionpubUploadError
            On any non-2xx response.
        NotionpubNetworkError
            On timeouts and connection failures.
        """
        t0 = time.monotonic()
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.TransportError as exc:
            self._metrics.increment(
                "notionpub.requests_total",
                tags={"method": method, "status": "error"},
            )
            log.warning(
                "Request network error",
                extra={
                    "extra_fields": {
                        "op": "request",
                        "method": method,
                        "path": path,
                        "error": str(exc),
                    }
                },
            )
            raise NotionpubNetworkError(
                message=f"Network error on {method} {path}: {exc}",
                context={"method": method, "path": path},
                cause=exc,
            ) from exc

        elapsed_ms = (time.monotonic() - t0) * 1000
        status = str(response.status_code)
        self._metrics.increment(
            "notionpub.requests_total",
            tags={"method": method, "status": status},
        )
        self._metrics.timing(
            "notionpub.request_duration_ms",
            elapsed_ms,
            tags={"method": method, "status": status},
        )

        if self._config.debug_dump_payload:
            _dump_payload(self._config, method, path, kwargs.get("json"), response)

        if 200 <= response.status_code < 300:
            if not response.content:
                return {}
            result: dict = response.json()
            return result

        log.error(
            "Notion API error",
            extra={
                "extra_fields": {
                    "op": "request",
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                }
            },
        )
        raise NotionpubUploadError(
            message=(
                f"Notion API error {response.status_code} on {method} {path}: "
                f"{_error_message(response)}"
            ),
            status_code=response.status_code,
            body=response.text,
            context={"method": method, "path": path},
        )

    async def close(self) -> None:
        """Close the underlying async HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> AsyncNotionTransport:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.close()
