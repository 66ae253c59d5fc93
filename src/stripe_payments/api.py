"""
Public, high-level helpers for the Stripe tokens API.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import AsyncTokenClient, TokenClient
from .core.config import ClientConfig, ClientParameters, load_client_config
from .core.tokens import Token, TokenInput
from .core.transport import HttpxAsyncExecutor, RequestsExecutor

__all__ = [
    "create_async_token_client",
    "create_token",
    "create_token_client",
    "get_token",
]


def _resolve_config(
    config: Optional[ClientConfig],
    *,
    env_file: Optional[str],
    overrides: Optional[Mapping[str, str]],
    base: Optional[Mapping[str, str]],
    parameters: Optional[ClientParameters],
    api_key: Optional[str],
    endpoint: Optional[str],
    timeout_seconds: Optional[float | int | str],
    api_version: Optional[str],
) -> ClientConfig:
    if config is not None:
        extras = (overrides, base, parameters, api_key, endpoint, timeout_seconds, api_version)
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        return config
    return load_client_config(
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        api_key=api_key,
        endpoint=endpoint,
        timeout_seconds=timeout_seconds,
        api_version=api_version,
    )


def create_token_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    api_version: Optional[str] = None,
) -> TokenClient:
    """
    Construct a :class:`TokenClient` backed by :mod:`requests`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data.
    """
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        api_key=api_key,
        endpoint=endpoint,
        timeout_seconds=timeout_seconds,
        api_version=api_version,
    )
    return TokenClient(cfg, executor=RequestsExecutor(cfg, session=session))


def create_async_token_client(
    *,
    config: Optional[ClientConfig] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
    api_version: Optional[str] = None,
) -> AsyncTokenClient:
    """Construct an :class:`AsyncTokenClient` backed by :mod:`httpx`."""
    cfg = _resolve_config(
        config,
        env_file=env_file,
        overrides=overrides,
        base=base,
        parameters=parameters,
        api_key=api_key,
        endpoint=endpoint,
        timeout_seconds=timeout_seconds,
        api_version=api_version,
    )
    return AsyncTokenClient(cfg, executor=HttpxAsyncExecutor(cfg))


def create_token(
    token_input: TokenInput,
    *,
    idempotency_key: Optional[str] = None,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
) -> Token:
    """One-shot helper around :meth:`TokenClient.create`."""
    client = create_token_client(
        config=config,
        session=session,
        env_file=env_file,
        api_key=api_key,
        endpoint=endpoint,
    )
    return client.create(token_input, idempotency_key=idempotency_key)


def get_token(
    token_id: str,
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    api_key: Optional[str] = None,
    endpoint: Optional[str] = None,
) -> Token:
    """One-shot helper around :meth:`TokenClient.get`."""
    client = create_token_client(
        config=config,
        session=session,
        env_file=env_file,
        api_key=api_key,
        endpoint=endpoint,
    )
    return client.get(token_id)
