"""
Token models and the codecs for single-use token payloads.

@see https://stripe.com/docs/api#tokens
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, Mapping, Optional, Type, Union

from .bank_accounts import AccountHolderType, BankAccount
from .cards import Card
from .codecs import (
    BOOLEAN,
    COUNTRY,
    CURRENCY,
    INTEGER,
    STRING,
    TIMESTAMP,
    Currency,
    decode_country,
    enum_codec,
)
from .decoding import WireRecord, nested, wire_field
from .errors import ModelDecodeError, UnrecognizedVariant
from .params import PostParams, flatten, nest, split_namespaced

__all__ = [
    "BankAccountTokenData",
    "CardTokenData",
    "PIITokenData",
    "Token",
    "TokenData",
    "TokenInput",
    "TokenType",
    "decode_token_data",
    "decode_token_input",
    "encode_token_data",
    "encode_token_input",
]


class TokenType(str, Enum):
    CARD = "card"
    BANK_ACCOUNT = "bank_account"
    PII = "pii"

    @classmethod
    def from_wire(cls, value: str) -> "TokenType":
        try:
            return cls(value)
        except ValueError:
            raise UnrecognizedVariant(value, "token type") from None


@dataclass(frozen=True)
class CardTokenData(WireRecord):
    """
    Details of a credit card to exchange for a single-use token.

    @see https://stripe.com/docs/api#create_card_token

    ``currency`` only matters when the card (which must be a debit card) is
    added to a managed account as a transfer destination.
    """

    token_type: ClassVar[TokenType] = TokenType.CARD

    exp_month: int = wire_field(INTEGER)
    exp_year: int = wire_field(INTEGER)
    number: str = wire_field(STRING)
    address_city: Optional[str] = wire_field(STRING, optional=True)
    address_country: Optional[str] = wire_field(STRING, optional=True)
    address_line1: Optional[str] = wire_field(STRING, optional=True)
    address_line2: Optional[str] = wire_field(STRING, optional=True)
    address_state: Optional[str] = wire_field(STRING, optional=True)
    address_zip: Optional[str] = wire_field(STRING, optional=True)
    currency: Optional[Currency] = wire_field(CURRENCY, optional=True)
    cvc: Optional[str] = wire_field(STRING, optional=True)
    name: Optional[str] = wire_field(STRING, optional=True)


@dataclass(frozen=True)
class BankAccountTokenData(WireRecord):
    """
    Details of a checking account to exchange for a single-use token.

    @see https://stripe.com/docs/api#create_bank_account_token

    ``routing_number`` is required for US accounts (the ACH routing number)
    and may be omitted when ``account_number`` is an IBAN.
    """

    token_type: ClassVar[TokenType] = TokenType.BANK_ACCOUNT

    account_number: str = wire_field(STRING)
    country: str = wire_field(COUNTRY)
    currency: Currency = wire_field(CURRENCY)
    routing_number: Optional[str] = wire_field(STRING, optional=True)
    account_holder_name: Optional[str] = wire_field(STRING, optional=True)
    account_holder_type: Optional[AccountHolderType] = wire_field(
        enum_codec(AccountHolderType), optional=True
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "country", decode_country(self.country))


@dataclass(frozen=True)
class PIITokenData(WireRecord):
    """Personally identifiable information for the account update API."""

    token_type: ClassVar[TokenType] = TokenType.PII

    personal_id_number: str = wire_field(STRING)
    pii: Optional[str] = wire_field(STRING, optional=True)


TokenData = Union[CardTokenData, BankAccountTokenData, PIITokenData]

_VARIANTS: Dict[str, Type[WireRecord]] = {
    TokenType.CARD.value: CardTokenData,
    TokenType.BANK_ACCOUNT.value: BankAccountTokenData,
    TokenType.PII.value: PIITokenData,
}


def _variant_for(tag: str) -> Type[WireRecord]:
    variant = _VARIANTS.get(tag)
    if variant is None:
        raise UnrecognizedVariant(tag, "token data")
    return variant


def encode_token_data(data: TokenData) -> PostParams:
    """Flatten ``data`` under its ``card``/``bank_account``/``pii`` namespace."""
    if type(data) not in _VARIANTS.values():
        raise TypeError(f"not a token data variant: {type(data).__name__}")
    return nest(data.to_params(), data.token_type.value)


def decode_token_data(payload: Any, tag: str) -> TokenData:
    """Decode the JSON ``payload`` of the variant named by ``tag``."""
    return _variant_for(tag).from_json(payload)  # type: ignore[return-value]


@dataclass(frozen=True)
class TokenInput:
    token_data: TokenData
    customer: Optional[str] = None


def encode_token_input(token_input: TokenInput) -> PostParams:
    params = flatten({"customer": token_input.customer})
    params.update(encode_token_data(token_input.token_data))
    return params


def decode_token_input(params: Mapping[str, str]) -> TokenInput:
    """
    Rebuild a :class:`TokenInput` from its form parameters.

    The namespace prefix acts as the discriminator; exactly one is allowed.
    """
    top_level, namespaces = split_namespaced(params)
    unexpected = sorted(set(top_level) - {"customer"})
    if unexpected:
        raise ModelDecodeError([(f"/{key}", "unexpected parameter") for key in unexpected])
    if len(namespaces) != 1:
        found = ", ".join(sorted(namespaces)) or "none"
        raise ModelDecodeError([("", f"expected exactly one token data namespace, found {found}")])

    (tag, fields), = namespaces.items()
    variant = _variant_for(tag)
    try:
        token_data = variant.from_params(fields)
    except ModelDecodeError as exc:
        raise ModelDecodeError([(f"/{tag}{path}", reason) for path, reason in exc.errors]) from None
    return TokenInput(token_data=token_data, customer=top_level.get("customer"))  # type: ignore[arg-type]


_PAYLOAD_FIELDS = {
    TokenType.CARD: "card",
    TokenType.BANK_ACCOUNT: "bank_account",
    TokenType.PII: None,
}


@dataclass(frozen=True)
class Token(WireRecord):
    """
    @see https://stripe.com/docs/api#retrieve_token

    ``used`` tells whether the token was already consumed (tokens are single
    use). Exactly the payload named by ``type`` is populated: ``card`` for
    card tokens, ``bank_account`` for bank account tokens, neither for PII.
    """

    object_name = "token"

    id: str = wire_field(STRING)
    created: dt.datetime = wire_field(TIMESTAMP)
    livemode: bool = wire_field(BOOLEAN)
    type: TokenType = wire_field(enum_codec(TokenType))
    used: bool = wire_field(BOOLEAN)
    bank_account: Optional[BankAccount] = wire_field(nested(BankAccount), optional=True)
    card: Optional[Card] = wire_field(nested(Card), optional=True)
    client_ip: Optional[str] = wire_field(STRING, optional=True)

    def __post_init__(self) -> None:
        expected = _PAYLOAD_FIELDS[self.type]
        for payload_field in ("card", "bank_account"):
            if payload_field != expected and getattr(self, payload_field) is not None:
                raise ValueError(f"{self.type.value} token must not carry a {payload_field} payload")
        if expected is not None and getattr(self, expected) is None:
            raise ValueError(f"{self.type.value} token is missing its {expected} payload")
