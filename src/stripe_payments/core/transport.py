"""
HTTP executors: the only part of the package that performs network I/O.

An executor receives a fully built request and answers with the status code
and raw body. Authentication and the API version header are added here, so
the request building code never sees the API key.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional, Protocol, Tuple

import httpx
import requests

from .config import ClientConfig
from .errors import ApiConnectionError

__all__ = [
    "AsyncHttpExecutor",
    "HttpExecutor",
    "HttpxAsyncExecutor",
    "RequestsExecutor",
]

logger = logging.getLogger(__name__)

Response = Tuple[int, bytes]


class HttpExecutor(Protocol):
    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
    ) -> Response: ...


class AsyncHttpExecutor(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
    ) -> Response: ...


def _auth_headers(config: ClientConfig, headers: Mapping[str, str]) -> dict[str, str]:
    merged = {"Authorization": f"Bearer {config.api_key}"}
    if config.api_version:
        merged["Stripe-Version"] = config.api_version
    merged.update(headers)
    return merged


class RequestsExecutor:
    """Blocking executor backed by a :class:`requests.Session`."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
    ) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                headers=_auth_headers(self.config, headers),
                data=body,
                timeout=self.config.timeout_seconds,
            )
        except requests.Timeout as exc:
            raise ApiConnectionError(f"Request to Stripe timed out: {exc}", url=url) from exc
        except requests.RequestException as exc:
            raise ApiConnectionError(f"Could not connect to Stripe: {exc}", url=url) from exc
        logger.debug("%s %s answered %s", method, url, response.status_code)
        return response.status_code, response.content


class HttpxAsyncExecutor:
    """Non-blocking executor backed by an :class:`httpx.AsyncClient`."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.config = config
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(timeout=config.timeout_seconds)

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
    ) -> Response:
        try:
            response = await self.client.request(
                method,
                url,
                headers=_auth_headers(self.config, headers),
                content=body,
            )
        except httpx.TimeoutException as exc:
            raise ApiConnectionError(f"Request to Stripe timed out: {exc}", url=url) from exc
        except httpx.HTTPError as exc:
            raise ApiConnectionError(f"Could not connect to Stripe: {exc}", url=url) from exc
        logger.debug("%s %s answered %s", method, url, response.status_code)
        return response.status_code, response.content

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()
