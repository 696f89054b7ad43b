from __future__ import annotations

import json
from typing import Any, List, Optional

import yaml

from forth.forth_datatypes import VALUE_MIN, VALUE_MAX


def detect_format(content_type: Optional[str] = None, data_hint: Optional[str] = None) -> Optional[str]:
    """
    Returns a canonical format name among: 'json', 'yaml'.
    Uses content-type first, then a light sniff of the data.
    """
    ct = (content_type or '').lower()
    if 'json' in ct:
        return 'json'
    if 'yaml' in ct:
        return 'yaml'
    if data_hint is not None:
        s = data_hint.lstrip()
        if s.startswith('['):
            return 'json'
        if s:
            return 'yaml'
    return None


def _check_stack(value: Any) -> List[int]:
    if not isinstance(value, list):
        raise ValueError(f"Stack snapshot must be a list, not {type(value).__name__}")
    for v in value:
        # bool is an int subclass; true/false are not stack values
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"Stack value must be an integer: {v!r}")
        if v < VALUE_MIN or v > VALUE_MAX:
            raise ValueError(f"Stack value out of 32-bit range: {v}")
    return value


def deserialize(data: bytes | bytearray | str,
                *,
                fmt: Optional[str] = None,
                content_type: Optional[str] = None) -> List[int]:
    """
    Parse a stack snapshot (a list of integers, bottom to top).
    Format resolution order: explicit fmt, content_type, sniffing.
    JSON that fails to parse falls back to YAML (a superset for flow lists).
    """
    text = data.decode('utf-8') if isinstance(data, (bytes, bytearray)) else data
    f = (fmt or detect_format(content_type, text) or 'yaml').lower()
    if f == 'json':
        try:
            return _check_stack(json.loads(text))
        except json.JSONDecodeError:
            f = 'yaml'
    if f == 'yaml':
        try:
            loaded = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid stack snapshot: {e}") from e
        return _check_stack([] if loaded is None else loaded)
    raise ValueError(f"Unsupported serialization format: {fmt!r}")


def serialize(stack: List[int],
              *,
              fmt: str = 'json',
              pretty: bool = False) -> str:
    """
    Convert a stack snapshot into a textual representation.
    - fmt: 'json' | 'yaml'
    """
    f = (fmt or '').lower()
    built = _check_stack(list(stack))
    if f == 'json':
        return json.dumps(built, indent=2 if pretty else None)
    if f == 'yaml':
        return yaml.safe_dump(built, default_flow_style=not pretty)
    raise ValueError(f"Unsupported serialization format: {fmt!r}")


__all__ = [
    "deserialize",
    "serialize",
    "detect_format",
]
