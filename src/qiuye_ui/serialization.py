#!/usr/bin/env python3
# src/qiuye_ui/serialization.py
"""
Serialization - orjson helpers for tool output, resources and files on disk.
"""

from typing import Any

import orjson
from pydantic import BaseModel


def _plain(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(exclude_none=True)
    if isinstance(payload, list):
        return [_plain(item) for item in payload]
    return payload


def to_json_bytes(payload: Any) -> bytes:
    """Pretty JSON (two-space indent) as UTF-8 bytes."""
    result: bytes = orjson.dumps(_plain(payload), option=orjson.OPT_INDENT_2)
    return result


def to_json_text(payload: Any) -> str:
    """Pretty JSON text; strings pass through unchanged."""
    if isinstance(payload, str):
        return payload
    return to_json_bytes(payload).decode()


def to_json_file_bytes(payload: Any) -> bytes:
    """JSON document as written to disk: two-space indent plus trailing newline."""
    return to_json_bytes(payload) + b"\n"


__all__ = ["to_json_bytes", "to_json_text", "to_json_file_bytes"]
