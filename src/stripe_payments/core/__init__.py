"""
Core primitives: codecs, models, error classification and the token client.
"""

from .bank_accounts import AccountHolderType, BankAccount
from .cards import Card
from .classifier import classify_error
from .client import AsyncTokenClient, TokenClient
from .codecs import Currency
from .config import ClientConfig, ClientParameters, ConfigError, load_client_config
from .environment import StripeEnvironment, build_environment
from .errors import (
    ApiConnectionError,
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
    UnknownErrorCode,
    UnknownErrorType,
    UnrecognizedVariant,
)
from .params import PostParams, flatten, nest
from .tokens import (
    BankAccountTokenData,
    CardTokenData,
    PIITokenData,
    Token,
    TokenData,
    TokenInput,
    TokenType,
    decode_token_data,
    decode_token_input,
    encode_token_data,
    encode_token_input,
)
from .transport import HttpxAsyncExecutor, RequestsExecutor

__all__ = [
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
    "HttpxAsyncExecutor",
    "ModelDecodeError",
    "NotFound",
    "PIITokenData",
    "PostParams",
    "RawResponse",
    "RequestFailed",
    "RequestsExecutor",
    "StripeApiError",
    "StripeEnvironment",
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
    "build_environment",
    "classify_error",
    "decode_token_data",
    "decode_token_input",
    "encode_token_data",
    "encode_token_input",
    "flatten",
    "load_client_config",
    "nest",
]
