"""
Classification of failed HTTP responses into the error hierarchy.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, FrozenSet, Optional, Type

from .codecs import STRING, enum_codec
from .decoding import WireRecord, loads_object, wire_field
from .errors import (
    BadRequest,
    ErrorCode,
    ErrorType,
    ModelDecodeError,
    NotFound,
    RawResponse,
    RequestFailed,
    StripeApiError,
    StripeError,
    StripeServerError,
    TooManyRequests,
    Unauthorized,
    UnhandledServerError,
)

__all__ = [
    "SERVER_ERROR_STATUSES",
    "ErrorBody",
    "classify_error",
    "decode_api_error",
]

logger = logging.getLogger(__name__)

SERVER_ERROR_STATUSES: FrozenSet[int] = frozenset({500, 502, 503, 504})

_STATUS_VARIANTS: Dict[int, Type[StripeApiError]] = {
    variant.status_code: variant
    for variant in (BadRequest, Unauthorized, RequestFailed, NotFound, TooManyRequests)
}


@dataclass(frozen=True)
class ErrorBody(WireRecord):
    type: ErrorType = wire_field(enum_codec(ErrorType))
    code: Optional[ErrorCode] = wire_field(enum_codec(ErrorCode), optional=True)
    message: Optional[str] = wire_field(STRING, optional=True)
    param: Optional[str] = wire_field(STRING, optional=True)


def decode_api_error(status_code: int, body: bytes) -> StripeApiError:
    """
    Decode the error body of a status Stripe documents a typed error for.

    Accepts both the ``{"error": {...}}`` envelope and a bare error object.
    Raises :class:`ModelDecodeError` or ``KeyError`` for unknown statuses.
    """
    variant = _STATUS_VARIANTS[status_code]
    payload: Any = loads_object(body)
    if isinstance(payload.get("error"), dict):
        payload = payload["error"]
    error = ErrorBody.from_json(payload)
    return variant(error.type, error.code, error.message, error.param)


def classify_error(status_code: int, body: bytes, *, url: Optional[str] = None) -> StripeError:
    """
    Map a non-success response onto exactly one error value. Never raises.

    * 500/502/503/504: :class:`StripeServerError`, body left undecoded.
    * 400/401/402/404/429 with a decodable body: the matching
      :class:`StripeApiError` variant.
    * Anything else, including undecodable bodies: :class:`UnhandledServerError`.
    """
    response = RawResponse(status_code=status_code, body=body, url=url)

    if status_code in SERVER_ERROR_STATUSES:
        logger.warning("Stripe server error %s from %s", status_code, url)
        return StripeServerError(response)

    if status_code in _STATUS_VARIANTS:
        try:
            error = decode_api_error(status_code, body)
        except ModelDecodeError as exc:
            logger.warning(
                "Could not decode %s error body from %s: %s", status_code, url, exc.errors
            )
            return UnhandledServerError(response)
        logger.warning(
            "Stripe returned %s (%s, code=%s) for %s",
            status_code,
            error.type.value,
            error.code.value if error.code is not None else None,
            url,
        )
        return error

    logger.warning("Unhandled status %s from %s", status_code, url)
    return UnhandledServerError(response)
