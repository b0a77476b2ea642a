"""Indentation depth of a raw Markdown line."""

from __future__ import annotations


def measure_indent(line: str) -> int:
    """Return the indentation level of *line*.

    Each leading tab counts one level and each pair of consecutive leading
    spaces counts one level; an odd space left over in a run counts
    nothing.  Scanning stops at the first character that is neither a
    space nor a tab.

    >>> measure_indent("    - item")
    2
    >>> measure_indent("\\t - item")
    1
    """
    level = 0
    spaces = 0
    for ch in line:
        if ch == " ":
            spaces += 1
        elif ch == "\t":
            level += spaces // 2 + 1
            spaces = 0
        else:
            break
    return level + spaces // 2
