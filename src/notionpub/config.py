"""Configuration for notionpub.

:class:`NotionpubConfig` is a dataclass that captures every tuneable knob
used by the converter, the publisher and the HTTP transport.  Instances are
passed to :class:`~notionpub.async_client.AsyncNotionpubClient` and to the
lower-level components directly.
"""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any

# ---------------------------------------------------------------------------
# Notion API limits
# ---------------------------------------------------------------------------

NOTION_MAX_CHILDREN = 100
"""Maximum number of blocks accepted by a single create or append call."""

NOTION_MAX_TEXT_LENGTH = 2000
"""Maximum characters in one rich_text content string."""


# ---------------------------------------------------------------------------
# Configuration dataclass
# ---------------------------------------------------------------------------

@dataclass
class NotionpubConfig:
    """Complete configuration for a notionpub client.

    Every parameter has a sensible default so that the only *required*
    value is ``token``.

    Parameters
    ----------
    token:
        Notion integration token.  **Required** for publishing.  Never logged.
    notion_version:
        Value of the ``Notion-Version`` header sent with every request.
    base_url:
        API root URL.  Override for proxy or testing environments.
    title_property:
        Name of the title property of the target database.
    title_template:
        :meth:`str.format` template applied to the page title.  Receives a
        single ``title`` field, e.g. ``"{title} : design doc"``.
    default_title:
        Title used when none is given and the Markdown has no H1.
    max_line_length:
        Lines longer than this are cut to ``max_line_length - 3`` characters
        followed by ``"..."`` before inline formatting.
    chunk_size:
        Blocks sent per create / append request.  Capped at 100 by Notion.
    chunk_pacing_seconds:
        Pause between consecutive append requests of one publish call.
    timeout_seconds:
        HTTP request timeout in seconds.
    http_proxy:
        Optional HTTP/HTTPS proxy URL.
    metrics:
        Optional :class:`~notionpub.observability.MetricsHook` backend.
    debug_dump_payload:
        Write the (redacted) request and response of every API call to
        *stderr*.
    """

    # ── Core ────────────────────────────────────────────────────────────
    token: str = ""

    notion_version: str = "2022-06-28"

    base_url: str = "https://api.notion.com/v1"

    # ── Page ────────────────────────────────────────────────────────────
    title_property: str = "Name"

    title_template: str = "{title}"

    default_title: str = "Untitled"

    # ── Conversion ──────────────────────────────────────────────────────
    max_line_length: int = NOTION_MAX_TEXT_LENGTH

    # ── Upload ──────────────────────────────────────────────────────────
    chunk_size: int = NOTION_MAX_CHILDREN

    chunk_pacing_seconds: float = 0.3

    # ── HTTP ────────────────────────────────────────────────────────────
    timeout_seconds: float = 30.0

    http_proxy: str | None = None

    # ── Observability ──────────────────────────────────────────────────
    metrics: Any | None = None

    # ── Debug ───────────────────────────────────────────────────────────
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        from urllib.parse import urlparse

        parsed = urlparse(self.base_url)
        if parsed.scheme == "http" and parsed.hostname not in (
            "localhost",
            "127.0.0.1",
            "::1",
        ):
            raise ValueError(
                f"base_url uses insecure HTTP for non-local host '{parsed.hostname}'. "
                "Use HTTPS to protect your API token, or target localhost for testing."
            )

        if not 1 <= self.chunk_size <= NOTION_MAX_CHILDREN:
            raise ValueError(
                f"chunk_size must be between 1 and {NOTION_MAX_CHILDREN}, got {self.chunk_size}"
            )
        if self.chunk_pacing_seconds < 0:
            raise ValueError(
                f"chunk_pacing_seconds must be >= 0, got {self.chunk_pacing_seconds}"
            )
        # Room for at least one character plus the "..." marker.
        if self.max_line_length < 4:
            raise ValueError(f"max_line_length must be >= 4, got {self.max_line_length}")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be > 0, got {self.timeout_seconds}")
        if "{title}" not in self.title_template:
            raise ValueError(
                f"title_template must contain a '{{title}}' field, got {self.title_template!r}"
            )
        try:
            self.title_template.format(title="")
        except (AttributeError, IndexError, KeyError, ValueError) as exc:
            raise ValueError(
                f"title_template may only use the '{{title}}' field, got {self.title_template!r}"
            ) from exc

    @classmethod
    def from_env(cls, **overrides: Any) -> NotionpubConfig:
        """Build a config from ``NOTION_*`` environment variables.

        Reads ``NOTION_API_KEY``, ``NOTION_VERSION`` and ``NOTION_BASE_URL``.
        Keyword arguments take precedence over the environment.
        """
        values: dict[str, Any] = {}
        env_map = {
            "token": "NOTION_API_KEY",
            "notion_version": "NOTION_VERSION",
            "base_url": "NOTION_BASE_URL",
        }
        for field_name, env_name in env_map.items():
            raw = os.getenv(env_name)
            if raw:
                values[field_name] = raw
        values.update(overrides)
        return cls(**values)

    def __repr__(self) -> str:
        """Mask the token to prevent accidental credential leakage."""
        parts: list[str] = []
        for f in dataclasses.fields(self):
            val = getattr(self, f.name)
            if f.name == "token":
                masked = f"...{val[-4:]}" if len(val) >= 4 else "****"
                parts.append(f"token='{masked}'")
            else:
                parts.append(f"{f.name}={val!r}")
        return f"NotionpubConfig({', '.join(parts)})"
