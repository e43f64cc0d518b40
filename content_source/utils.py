"""Helpers for ids arriving from external input and the queries built on them."""

from __future__ import annotations

import json
import math
import re
from collections.abc import Sequence

# Leading numeric prefix of a string, the part a loose integer cast reads.
_LEADING_NUMBER_RE = re.compile(r"\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_json_int_array(raw: str | None) -> list[int]:
    """Parse a JSON array into unique positive integers, first occurrence first.

    Anything that is not a JSON array yields an empty list.
    """
    if not raw or not isinstance(raw, str):
        return []

    try:
        decoded = json.loads(raw)
    except ValueError:
        return []

    if not isinstance(decoded, list):
        return []

    # dict keeps insertion order
    ids: dict[int, None] = {}
    for value in decoded:
        number = _to_int(value)
        if number > 0:
            ids.setdefault(number, None)
    return list(ids)


def build_in_placeholders(ids: Sequence[object], placeholder: str = "%d") -> str:
    """Comma-joined positional placeholders, one per id, for an IN (...) clause."""
    return ",".join([placeholder] * len(ids))


def _to_int(value: object) -> int:
    """Loose integer cast; values with no numeric reading become 0."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    if isinstance(value, str):
        m = _LEADING_NUMBER_RE.match(value)
        if m is None:
            return 0
        if "." not in m.group(1) and m.group(3) is None:
            return int(m.group(0))
        number = float(m.group(0))
        return int(number) if math.isfinite(number) else 0
    return 0
