"""Metrics hook protocol and no-op default implementation.

notionpub reports a handful of counters and timings.  By default a
:class:`NoopMetricsHook` discards them; pass any object satisfying
:class:`MetricsHook` as ``NotionpubConfig(metrics=...)`` to route them to
StatsD, Prometheus, Datadog or similar.

Emitted metric names:

* ``notionpub.requests_total``            -- counter, tagged with ``status``
* ``notionpub.request_duration_ms``       -- timing
* ``notionpub.blocks_published_total``    -- counter
* ``notionpub.upload_failures_total``     -- counter, tagged with ``stage``
* ``notionpub.conversion_warnings_total`` -- counter, tagged with ``code``
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Protocol that any metrics backend must satisfy.

    *tags* is an optional ``str -> str`` mapping that implementations may
    translate into labels or tags of their backend.
    """

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Increment a counter metric."""
        ...

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """Record a duration in milliseconds."""
        ...


class NoopMetricsHook:
    """Metrics backend that silently discards all data points."""

    __slots__ = ()

    def increment(
        self,
        name: str,
        value: int = 1,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass

    def timing(
        self,
        name: str,
        ms: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        pass
