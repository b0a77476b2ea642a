"""Split one line of Markdown into rich_text spans.

Only two inline forms are recognised:

* ``**text**`` becomes a bold span.
* ``[label](url)`` becomes a link span.  The URL may hold balanced
  parentheses one level deep, as in ``wiki/Foo_(bar)``.

Both are searched for together and the earliest match wins; at the same
position bold is tried first.  Text between matches becomes plain spans.
Anything else, including unterminated ``**`` or a link missing its closing
parenthesis, is kept verbatim as plain text.  Nested markup is not
interpreted: ``**[a](b)**`` is a bold span whose content is ``[a](b)``.
"""

from __future__ import annotations

import re

from notionpub.models import RichTextSpan

_INLINE_RE = re.compile(
    r"\*\*(?P<bold>.+?)\*\*"
    r"|\[(?P<label>[^\]]+)\]\((?P<url>(?:[^()]|\([^()]*\))+)\)"
)


def format_inline(text: str) -> list[RichTextSpan]:
    """Convert *text* to an ordered list of :class:`RichTextSpan`.

    Parameters
    ----------
    text:
        A single line (no newlines expected, but they are harmless).

    Returns
    -------
    list[RichTextSpan]
        Spans in left-to-right order.  The concatenation of their
        ``content`` equals *text* with the markup markers removed.  Plain
        spans are never empty, so an empty *text* yields an empty list.
    """
    spans: list[RichTextSpan] = []
    last = 0

    for match in _INLINE_RE.finditer(text):
        if match.start() > last:
            spans.append(RichTextSpan(text[last:match.start()]))

        if match.group("bold") is not None:
            spans.append(RichTextSpan(match.group("bold"), bold=True))
        else:
            spans.append(RichTextSpan(match.group("label"), link_url=match.group("url")))

        last = match.end()

    if last < len(text):
        spans.append(RichTextSpan(text[last:]))

    return spans
