"""
Utilities for building the environment used to configure the Stripe client.

The helpers understand .env files, allow callers to layer overrides, and
return a plain mapping that can be fed into
:class:`stripe_payments.core.config.ClientConfig`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

def _parse_env_file(path: Path) -> Dict[str, str]:
    values: Dict[str, str] = {}
    try:
        data = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return values

    for raw_line in data.splitlines():
        line = raw_line.strip()
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] and value[0] in "'\"":
            value = value[1:-1]
        values[key.strip()] = value
    return values


@dataclass(frozen=True)
class StripeEnvironment:
    """A resolved set of STRIPE_* variables."""

    variables: Mapping[str, str]


def build_environment(
    *,
    env_file: Optional[str] = ".env",
    base: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, str]] = None,
) -> StripeEnvironment:
    """
    Assemble a :class:`StripeEnvironment` from multiple sources.

    ``base`` defaults to :data:`os.environ`. Set ``env_file`` to ``None`` to
    skip file loading. ``overrides`` always win.
    """
    merged: Dict[str, str] = dict(os.environ if base is None else base)

    if env_file is not None:
        for key, value in _parse_env_file(Path(env_file)).items():
            merged.setdefault(key, value)

    if overrides:
        merged.update(overrides)

    return StripeEnvironment(variables=merged)
