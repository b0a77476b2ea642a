"""Payload redaction for debug dumps.

:func:`redact` is applied to every request/response dump before it is
written to *stderr*:

* values under sensitive keys (``authorization``, ``token``, ...) are
  masked, keeping at most the last four characters of the token;
* the integration token is scrubbed from every string in the tree;
* long strings (typically page text) are shortened to a prefix plus a
  ``<+N_chars>`` marker so a 100-block dump stays readable.
"""

from __future__ import annotations

import re
from typing import Any

_SENSITIVE_KEY_PATTERNS: frozenset[str] = frozenset({
    "token",
    "secret",
    "password",
    "authorization",
    "cookie",
    "api_key",
})

_BEARER_RE = re.compile(r"(Bearer\s+)\S+")

_MAX_STRING_LENGTH = 200


def _mask_token(value: str, token: str | None) -> str:
    if token and token in value:
        suffix = token[-4:] if len(token) >= 4 else "****"
        placeholder = f"<redacted:...{suffix}>"
        if token in placeholder:
            placeholder = "<redacted>"
        value = value.replace(token, placeholder)
    return _BEARER_RE.sub(lambda m: f"{m.group(1)}<redacted>", value)


def _redact_value(value: Any, token: str | None) -> Any:
    if isinstance(value, dict):
        return _redact_dict(value, token)
    if isinstance(value, list):
        return [_redact_value(item, token) for item in value]
    if isinstance(value, str):
        value = _mask_token(value, token)
        if len(value) > _MAX_STRING_LENGTH:
            hidden = len(value) - _MAX_STRING_LENGTH
            value = f"{value[:_MAX_STRING_LENGTH]}<+{hidden}_chars>"
        return value
    return value


def _redact_dict(d: dict, token: str | None) -> dict:
    result: dict = {}
    for key, value in d.items():
        key_lower = key.lower() if isinstance(key, str) else ""
        if any(pat in key_lower for pat in _SENSITIVE_KEY_PATTERNS):
            result[key] = _mask_token(value, token) if isinstance(value, str) else "<redacted>"
        else:
            result[key] = _redact_value(value, token)
    return result


def redact(payload: dict, token: str | None = None) -> dict:
    """Return a redacted copy of *payload*; the input is never mutated.

    Examples
    --------
    >>> redact({"Authorization": "Bearer ntn_abc123"})
    {'Authorization': 'Bearer <redacted>'}
    """
    return _redact_dict(payload, token)
