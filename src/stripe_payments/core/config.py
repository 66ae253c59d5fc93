"""
Configuration objects and helpers for the Stripe client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from .environment import build_environment
from .errors import StripeError

__all__ = [
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "load_client_config",
]

DEFAULT_ENDPOINT = "https://api.stripe.com"
DEFAULT_TIMEOUT_SECONDS = 30.0

_PARAMETER_TO_ENV_KEY = {
    "api_key": "STRIPE_API_KEY",
    "endpoint": "STRIPE_ENDPOINT",
    "timeout_seconds": "STRIPE_TIMEOUT_SECONDS",
    "api_version": "STRIPE_API_VERSION",
}

_API_KEY_PREFIXES = ("sk_", "rk_")


class ConfigError(StripeError):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Callers can either instantiate this helper or pass the individual keyword
    arguments directly to :func:`load_client_config`.
    """

    api_key: Optional[str] = None
    endpoint: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None
    api_version: Optional[str] = None

    def as_overrides(self) -> Dict[str, str]:
        return _collect_parameter_overrides(None, vars(self))


def _collect_parameter_overrides(
    parameters: Optional[ClientParameters],
    explicit: Mapping[str, Any],
) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    if parameters is not None:
        overrides.update(parameters.as_overrides())

    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _normalize_api_key(raw_key: Optional[str]) -> str:
    if raw_key is None:
        raise ConfigError("STRIPE_API_KEY must be provided")
    key = raw_key.strip()
    if not key:
        raise ConfigError("STRIPE_API_KEY must not be empty")
    if not key.startswith(_API_KEY_PREFIXES):
        raise ConfigError("STRIPE_API_KEY must be a secret (sk_) or restricted (rk_) key")
    return key


def _normalize_endpoint(raw_endpoint: str) -> str:
    endpoint = raw_endpoint.strip().rstrip("/")
    parsed = urlparse(endpoint)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ConfigError(f"STRIPE_ENDPOINT must be an http(s) URL, got '{raw_endpoint}'")
    return endpoint


def _parse_timeout(raw_timeout: str) -> float:
    try:
        timeout = float(raw_timeout)
    except ValueError as exc:
        raise ConfigError(
            f"STRIPE_TIMEOUT_SECONDS must be a number, got '{raw_timeout}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("STRIPE_TIMEOUT_SECONDS must be greater than zero")
    return timeout


@dataclass(frozen=True)
class ClientConfig:
    api_key: str
    endpoint: str = DEFAULT_ENDPOINT
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    api_version: Optional[str] = None

    @property
    def livemode(self) -> bool:
        return "_live_" in self.api_key

    def url(self, path: str) -> str:
        return f"{self.endpoint}{path}"

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        api_key = _normalize_api_key(values.get("STRIPE_API_KEY"))
        endpoint = _normalize_endpoint(values.get("STRIPE_ENDPOINT", DEFAULT_ENDPOINT))
        timeout_seconds = _parse_timeout(
            values.get("STRIPE_TIMEOUT_SECONDS", str(DEFAULT_TIMEOUT_SECONDS))
        )
        api_version = values.get("STRIPE_API_VERSION") or None

        return cls(
            api_key=api_key,
            endpoint=endpoint,
            timeout_seconds=timeout_seconds,
            api_version=api_version,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        api_key: Optional[str] = None,
        endpoint: Optional[str] = None,
        timeout_seconds: Optional[float | int | str] = None,
        api_version: Optional[str] = None,
    ) -> "ClientConfig":
        parameter_overrides = _collect_parameter_overrides(
            parameters,
            {
                "api_key": api_key,
                "endpoint": endpoint,
                "timeout_seconds": timeout_seconds,
                "api_version": api_version,
            },
        )
        merged_overrides = dict(overrides or {})
        merged_overrides.update(parameter_overrides)

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    api_version: Optional[str] = None,
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    The configuration can be provided through environment variables, a
    ``.env`` file, direct keyword arguments, or any combination of the three.
    """
    return ClientConfig.from_env(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        api_key=api_key,
        endpoint=endpoint,
        timeout_seconds=timeout_seconds,
        api_version=api_version,
    )
