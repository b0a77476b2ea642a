"""Error hierarchy for the notionpub package.

Every public error class inherits from :class:`NotionpubError`.  Each carries
a machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Markdown conversion never raises: malformed input degrades to plain
paragraphs or flattened lists and is reported through
:class:`~notionpub.models.ConversionWarning` instead.  Only the network
layer and client-side id validation raise.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the package can raise."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    UPLOAD_ERROR = "UPLOAD_ERROR"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class NotionpubError(Exception):
    """Base exception for all notionpub errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
        Keys are documented per subclass.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Concrete errors
# ---------------------------------------------------------------------------

class NotionpubValidationError(NotionpubError):
    """A value supplied by the caller is malformed (e.g. a database id).

    Context keys: ``field``, ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class NotionpubNetworkError(NotionpubError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``method``, ``path``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class NotionpubUploadError(NotionpubError):
    """The Notion API answered a create or append request with a non-2xx status.

    There is no retry at this layer.  When raised while appending, the page
    already exists and holds every block sent before the failing chunk.

    Context keys: ``status_code``, ``body``, ``method``, ``path``.
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.status_code: int = status_code
        self.body: str = body
        merged: dict[str, Any] = {"status_code": status_code, "body": body}
        if context:
            merged.update(context)
        super().__init__(
            code=ErrorCode.UPLOAD_ERROR,
            message=message,
            context=merged,
            cause=cause,
        )
