"""
Helpers for pulling JSON literals out of free-form model output.

Models often wrap their answer in prose or markdown fences, so instead of
parsing the whole text we scan for balanced literals with the requested
opening bracket, skipping brackets inside string values. Prose such as
"Tasks [draft]:" can precede the real answer, so a candidate that does not
balance or does not parse is skipped and the scan resumes at the next opener.
"""

from __future__ import annotations

import json
from typing import Any, Iterator, Optional, Tuple

_CLOSERS = {"[": "]", "{": "}"}


def _balanced_at(text: str, start: int) -> Tuple[Optional[str], int]:
    """Literal opening at ``start`` and the index to resume scanning from."""
    stack = []
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in _CLOSERS:
            stack.append(_CLOSERS[ch])
        elif ch in ("]", "}"):
            if not stack or stack.pop() != ch:
                return None, start + 1
            if not stack:
                return text[start:i + 1], i + 1
    # unterminated: the rest of the text belongs to this literal
    return None, len(text)


def iter_balanced(text: str, opener: str = "[") -> Iterator[str]:
    """Yield balanced top-level literals starting at ``opener``, left to right.

    Openers nested inside an already yielded literal are not tried again.
    """
    start = text.find(opener)
    while start >= 0:
        literal, resume = _balanced_at(text, start)
        if literal is not None:
            yield literal
        start = text.find(opener, resume)


def find_balanced(text: str, opener: str = "[") -> Optional[str]:
    """Return the first balanced ``[...]`` or ``{...}`` substring, or None."""
    return next(iter_balanced(text, opener), None)


def load_first(text: str, opener: str = "[") -> Optional[Any]:
    """Parse the first balanced literal that is valid JSON; None if there is none."""
    for literal in iter_balanced(text or "", opener):
        try:
            return json.loads(literal)
        except ValueError:
            continue
    return None


def load_first_array(text: str) -> Optional[list]:
    value = load_first(text, "[")
    return value if isinstance(value, list) else None


def load_first_object(text: str) -> Optional[dict]:
    value = load_first(text, "{")
    return value if isinstance(value, dict) else None
