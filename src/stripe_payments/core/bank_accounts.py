"""
Bank account objects as returned by Stripe.

@see https://stripe.com/docs/api#customer_bank_account_object
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .codecs import COUNTRY, CURRENCY, STRING, Currency, enum_codec
from .decoding import WireRecord, wire_field

__all__ = ["AccountHolderType", "BankAccount"]


class AccountHolderType(str, Enum):
    INDIVIDUAL = "individual"
    COMPANY = "company"


@dataclass(frozen=True)
class BankAccount(WireRecord):
    object_name = "bank_account"

    id: str = wire_field(STRING)
    country: str = wire_field(COUNTRY)
    currency: Currency = wire_field(CURRENCY)
    last4: str = wire_field(STRING)
    account_holder_name: Optional[str] = wire_field(STRING, optional=True)
    account_holder_type: Optional[AccountHolderType] = wire_field(
        enum_codec(AccountHolderType), optional=True
    )
    bank_name: Optional[str] = wire_field(STRING, optional=True)
    customer: Optional[str] = wire_field(STRING, optional=True)
    fingerprint: Optional[str] = wire_field(STRING, optional=True)
    routing_number: Optional[str] = wire_field(STRING, optional=True)
    status: Optional[str] = wire_field(STRING, optional=True)
