"""Best-effort repair of nearly-JSON text.

Used for two things: streamed tool-call arguments, which arrive as JSON text
fragments and are incomplete until the last one; and structured-output
replies that models sometimes wrap in Markdown fences.
"""
from __future__ import annotations

import json
import re
from typing import Any, Dict


def clean_json_markers(s: str) -> str:
    """Strip common Markdown code fences (```json ... ``` or ``` ... ```)."""
    s = s.strip()
    if s.startswith("```json"):
        s = s[7:]
    elif s.startswith("```"):
        s = s[3:]
    if s.endswith("```"):
        s = s[:-3]
    return s.strip()


def _drop_trailing_commas(text: str) -> str:
    return re.sub(r",\s*(\}|\])", r"\1", text)


def _count_unescaped_quotes(text: str) -> int:
    cnt = 0
    for i, ch in enumerate(text):
        if ch != '"':
            continue
        bs = 0
        j = i - 1
        while j >= 0 and text[j] == "\\":
            bs += 1
            j -= 1
        if bs % 2 == 0:
            cnt += 1
    return cnt


def _open_closers(text: str) -> str:
    """Return the closers needed for brackets left open outside string literals."""
    stack = []
    in_str = False
    escaped = False
    for ch in text:
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch in "{[":
            stack.append("}" if ch == "{" else "]")
        elif ch in "}]" and stack:
            stack.pop()
    return "".join(reversed(stack))


def attempt_json_repair(s: str) -> str:
    """Normalize a nearly-JSON string so ``json.loads`` is more likely to succeed.

    Steps:
        1. Remove Markdown code fences if present.
        2. Trim leading text before the first ``{`` or ``[``.
        3. Remove trailing commas immediately before ``}`` or ``]``.
        4. Close an unterminated string literal.
        5. Append closers for brackets that are still open, innermost first.

    Never raises; the result may still be unparseable.
    """
    s = clean_json_markers(s)
    if idx_candidates := [i for i in (s.find("{"), s.find("[")) if i != -1]:
        s = s[min(idx_candidates):]
    s = _drop_trailing_commas(s)
    if _count_unescaped_quotes(s) % 2 == 1:
        s += '"'
    s = s.rstrip()
    if s.endswith(","):
        s = s[:-1]
    s += _open_closers(s)
    return _drop_trailing_commas(s)


def parse_partial_json(buffer: str, max_backtracks: int = 16) -> Dict[str, Any]:
    """Parse a possibly truncated JSON object into a dict.

    The buffer is repaired first; when that still fails (e.g. it ends inside a
    key or right after a colon) the tail is cut back to the previous member
    boundary and retried. Returns ``{}`` when nothing usable remains or the
    document is not an object.
    """
    candidate = buffer.strip()
    for _ in range(max_backtracks):
        if not candidate:
            return {}
        try:
            value = json.loads(attempt_json_repair(candidate))
        except ValueError:
            pass
        else:
            return value if isinstance(value, dict) else {}
        cut_comma = candidate.rfind(",")
        cut_open = candidate.rfind("{")
        if cut_comma > cut_open:
            candidate = candidate[:cut_comma]
        elif 0 <= cut_open < len(candidate) - 1:
            candidate = candidate[: cut_open + 1]
        else:
            return {}
    return {}


__all__ = ["attempt_json_repair", "clean_json_markers", "parse_partial_json"]
