from __future__ import annotations
import sys
from typing import Any, Dict, List, Optional, Union, get_args, get_origin, get_type_hints

from .types import MatchParams


_BOOL_WORDS = {
    **dict.fromkeys(("1", "true", "yes", "y", "on"), True),
    **dict.fromkeys(("0", "false", "no", "n", "off"), False),
}


def _parse_bool(s: str) -> bool:
    try:
        return _BOOL_WORDS[s.strip().lower()]
    except KeyError:
        raise ValueError(f"Invalid boolean value: {s}") from None


def _coerce_value(key: str, value: str, field_types: Dict[str, Any]):
    t = field_types.get(key)
    if t is None:
        return value
    # Optional[X]: an explicit 'none' clears the field
    if get_origin(t) is Union:
        if value.strip().lower() in ("none", "null", ""):
            return None
        t = next(a for a in get_args(t) if a is not type(None))
    if t is bool:
        return _parse_bool(value)
    if t is int:
        return int(value)
    if t is str:
        return value
    # Best-effort fallback
    try:
        return int(value)
    except ValueError:
        try:
            return _parse_bool(value)
        except ValueError:
            return value


def parse_key_values(items: Optional[List[str]], what: str) -> Dict[str, str]:
    """Parse repeatable 'key=value' items; malformed ones are reported and skipped."""
    out: Dict[str, str] = {}
    for item in items or []:
        if "=" not in item:
            print(f"Ignoring {what} without '=': {item}", file=sys.stderr)
            continue
        k, v = item.split("=", 1)
        k = k.strip()
        if not k:
            print(f"Ignoring {what} with empty key: {item}", file=sys.stderr)
            continue
        out[k] = v.strip()
    return out


def apply_matchparams_overrides(params: MatchParams, overrides: Optional[List[str]] = None) -> MatchParams:
    """Apply 'key=value' overrides to MatchParams in-place and return it.

    Unknown keys are reported on stderr and skipped; a value that cannot be
    coerced to the field's type raises ValueError.
    """
    field_types = get_type_hints(MatchParams)
    for k, v in parse_key_values(overrides, "--match-param").items():
        if not hasattr(params, k):
            print(f"Unknown MatchParams field in --match-param: {k}", file=sys.stderr)
            continue
        try:
            setattr(params, k, _coerce_value(k, v, field_types))
        except ValueError as e:
            raise ValueError(f"Bad value for --match-param {k}: {v!r} ({e})") from e
    return params
