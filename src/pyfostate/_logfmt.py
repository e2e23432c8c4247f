"""Helpers for compact debug logging.

State values can be long lists (field samples, histories). This module
renders them in a bounded form before they are emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import BaseModel


def format_for_log(value: Any, *, max_string: int = 120, max_items: int = 8, _depth: int = 0) -> Any:
    """Return a truncated copy of *value* suitable for debug logs."""
    if _depth > 10:
        return "<max-depth>"

    if value is None or isinstance(value, (bool, int, float)):
        return value

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, BaseModel):
        return format_for_log(
            value.model_dump(mode="json"),
            max_string=max_string,
            max_items=max_items,
            _depth=_depth + 1,
        )

    if isinstance(value, Mapping):
        return {
            str(k): format_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
            for k, v in value.items()
        }

    if isinstance(value, Sequence) and not isinstance(value, (bytes, bytearray)):
        items = [
            format_for_log(v, max_string=max_string, max_items=max_items, _depth=_depth + 1)
            for v in value[:max_items]
        ]
        if len(value) > max_items:
            items.append(f"<+{len(value) - max_items} more>")
        return items

    # Unknown objects are represented without dumping internals.
    return repr(value)
