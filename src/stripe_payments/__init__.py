"""
Public facade for the Stripe tokens binding.

The most useful pieces are re-exported so integrators can
``from stripe_payments import ...`` without navigating the package.
"""

from .api import create_async_token_client, create_token, create_token_client, get_token
from .core import (
    AccountHolderType,
    ApiConnectionError,
    AsyncTokenClient,
    BadRequest,
    BankAccount,
    BankAccountTokenData,
    Card,
    CardTokenData,
    ClientConfig,
    ClientParameters,
    ConfigError,
    Currency,
    ErrorCode,
    ErrorType,
    ModelDecodeError,
    NotFound,
    PIITokenData,
    RawResponse,
    RequestFailed,
    StripeApiError,
    StripeError,
    StripeServerError,
    Token,
    TokenClient,
    TokenData,
    TokenInput,
    TokenType,
    TooManyRequests,
    Unauthorized,
    UnhandledServerError,
    UnknownErrorCode,
    UnknownErrorType,
    UnrecognizedVariant,
    classify_error,
    decode_token_data,
    decode_token_input,
    encode_token_data,
    encode_token_input,
    flatten,
    load_client_config,
    nest,
)

__all__ = (
    "AccountHolderType",
    "ApiConnectionError",
    "AsyncTokenClient",
    "BadRequest",
    "BankAccount",
    "BankAccountTokenData",
    "Card",
    "CardTokenData",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "Currency",
    "ErrorCode",
    "ErrorType",
    "ModelDecodeError",
    "NotFound",
    "PIITokenData",
    "RawResponse",
    "RequestFailed",
    "StripeApiError",
    "StripeError",
    "StripeServerError",
    "Token",
    "TokenClient",
    "TokenData",
    "TokenInput",
    "TokenType",
    "TooManyRequests",
    "Unauthorized",
    "UnhandledServerError",
    "UnknownErrorCode",
    "UnknownErrorType",
    "UnrecognizedVariant",
    "classify_error",
    "create_async_token_client",
    "create_token",
    "create_token_client",
    "decode_token_data",
    "decode_token_input",
    "encode_token_data",
    "encode_token_input",
    "flatten",
    "get_token",
    "load_client_config",
    "nest",
)
