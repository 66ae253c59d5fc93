"""
Token resource client: build request, send through an executor, decode or classify.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional
from urllib.parse import quote, urlencode

from .classifier import classify_error
from .config import ClientConfig
from .decoding import loads_object
from .errors import ApiConnectionError, ModelDecodeError
from .params import PostParams
from .tokens import Token, TokenInput, encode_token_input
from .transport import AsyncHttpExecutor, HttpExecutor, HttpxAsyncExecutor, RequestsExecutor

__all__ = [
    "AsyncTokenClient",
    "PreparedRequest",
    "TokenClient",
    "build_create_token_request",
    "build_get_token_request",
    "read_token_response",
]

logger = logging.getLogger(__name__)

TOKENS_PATH = "/v1/tokens"

_SENSITIVE_FIELDS = ("number", "cvc", "account_number", "personal_id_number", "pii")


def _redact(params: Mapping[str, str]) -> Dict[str, str]:
    redacted: Dict[str, str] = {}
    for key, value in params.items():
        if any(key.endswith(f"[{name}]") for name in _SENSITIVE_FIELDS):
            value = "*" * max(len(value) - 4, 0) + value[-4:] if len(value) > 8 else "****"
        redacted[key] = value
    return redacted


@dataclass(frozen=True)
class PreparedRequest:
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[PostParams] = None

    @property
    def body(self) -> Optional[bytes]:
        if self.params is None:
            return None
        return urlencode(self.params).encode("ascii")


def build_create_token_request(
    config: ClientConfig,
    token_input: TokenInput,
    idempotency_key: Optional[str] = None,
) -> PreparedRequest:
    params = encode_token_input(token_input)
    logger.debug("Generated POST form parameters %s", _redact(params))
    headers = {"Content-Type": "application/x-www-form-urlencoded"}
    if idempotency_key is not None:
        headers["Idempotency-Key"] = idempotency_key
    return PreparedRequest("POST", config.url(TOKENS_PATH), headers, params)


def build_get_token_request(config: ClientConfig, token_id: str) -> PreparedRequest:
    if not token_id:
        raise ValueError("token_id must not be empty")
    return PreparedRequest("GET", config.url(f"{TOKENS_PATH}/{quote(token_id, safe='')}"))


def read_token_response(request: PreparedRequest, status_code: int, body: bytes) -> Token:
    """
    Turn a response into a :class:`Token` or raise the matching error.

    2xx bodies that do not decode raise :class:`ModelDecodeError`; every
    other status raises the value produced by :func:`classify_error`.
    """
    if not 200 <= status_code < 300:
        raise classify_error(status_code, body, url=request.url)
    try:
        return Token.from_json(loads_object(body))
    except ModelDecodeError as exc:
        raise exc.with_context(
            status_code=status_code,
            url=request.url,
            post_parameters=request.params,
            response_body=body,
        ) from None


class TokenClient:
    """
    Blocking client for the ``/v1/tokens`` resource.

    Any object with a ``send(method, url, headers, body)`` method returning
    ``(status_code, body)`` can stand in for the default requests executor.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        executor: Optional[HttpExecutor] = None,
    ) -> None:
        self.config = config
        self.executor = executor or RequestsExecutor(config)

    def _execute(self, request: PreparedRequest) -> Token:
        logger.info("Sending %s %s", request.method, request.url)
        try:
            status_code, body = self.executor.send(
                request.method, request.url, request.headers, request.body
            )
        except (ConnectionError, TimeoutError) as exc:
            raise ApiConnectionError(f"Could not reach Stripe: {exc}", url=request.url) from exc
        return read_token_response(request, status_code, body)

    def create(self, token_input: TokenInput, idempotency_key: Optional[str] = None) -> Token:
        return self._execute(build_create_token_request(self.config, token_input, idempotency_key))

    def get(self, token_id: str) -> Token:
        return self._execute(build_get_token_request(self.config, token_id))


class AsyncTokenClient:
    """Coroutine flavour of :class:`TokenClient`; only the send is awaited."""

    def __init__(
        self,
        config: ClientConfig,
        *,
        executor: Optional[AsyncHttpExecutor] = None,
    ) -> None:
        self.config = config
        self.executor = executor or HttpxAsyncExecutor(config)

    async def _execute(self, request: PreparedRequest) -> Token:
        logger.info("Sending %s %s", request.method, request.url)
        try:
            status_code, body = await self.executor.send(
                request.method, request.url, request.headers, request.body
            )
        except (ConnectionError, TimeoutError) as exc:
            raise ApiConnectionError(f"Could not reach Stripe: {exc}", url=request.url) from exc
        return read_token_response(request, status_code, body)

    async def create(
        self, token_input: TokenInput, idempotency_key: Optional[str] = None
    ) -> Token:
        return await self._execute(
            build_create_token_request(self.config, token_input, idempotency_key)
        )

    async def get(self, token_id: str) -> Token:
        return await self._execute(build_get_token_request(self.config, token_id))

    async def aclose(self) -> None:
        close = getattr(self.executor, "aclose", None)
        if close is not None:
            await close()

    async def __aenter__(self) -> "AsyncTokenClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
