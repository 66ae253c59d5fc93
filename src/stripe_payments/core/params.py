"""
Form parameter helpers for POST requests sent to Stripe.
"""

from __future__ import annotations

import re
from typing import Any, Dict, Mapping, Optional, Tuple

from .codecs import to_wire_string

__all__ = [
    "PostParams",
    "flatten",
    "nest",
    "split_namespaced",
]

PostParams = Dict[str, str]

_NAMESPACED_KEY = re.compile(r"^([a-z_]+)\[([a-z0-9_]+)\]$")


def flatten(values: Mapping[str, Any]) -> PostParams:
    """
    Keep the entries of ``values`` that are present, rendered as wire strings.

    Absent values (``None``) are dropped rather than sent as empty strings.
    """
    params: PostParams = {}
    for key, value in values.items():
        if value is None:
            continue
        params[key] = to_wire_string(value)
    return params


def nest(params: Optional[Mapping[str, str]], prefix: str) -> PostParams:
    """Re-key ``params`` as ``prefix[key]``."""
    if not params:
        return {}
    return {f"{prefix}[{key}]": value for key, value in params.items()}


def split_namespaced(params: Mapping[str, str]) -> Tuple[PostParams, Dict[str, PostParams]]:
    """
    Inverse of :func:`nest`: separate top level keys from namespaced ones.

    Returns ``(top_level, {prefix: {field: value}})``.
    """
    top_level: PostParams = {}
    namespaces: Dict[str, PostParams] = {}
    for key, value in params.items():
        match = _NAMESPACED_KEY.match(key)
        if match is None:
            top_level[key] = value
            continue
        prefix, field_name = match.groups()
        namespaces.setdefault(prefix, {})[field_name] = value
    return top_level, namespaces
