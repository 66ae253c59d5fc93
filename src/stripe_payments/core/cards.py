"""
Card objects as returned by Stripe.

@see https://stripe.com/docs/api#card_object
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .codecs import COUNTRY, CURRENCY, INTEGER, STRING, Currency
from .decoding import WireRecord, wire_field

__all__ = ["Card"]


@dataclass(frozen=True)
class Card(WireRecord):
    """
    A card attached to a token, customer or account.

    ``brand``, ``funding`` and the ``*_check`` fields are kept as the raw
    strings Stripe sends; their value sets grow without notice.
    """

    object_name = "card"

    id: str = wire_field(STRING)
    brand: str = wire_field(STRING)
    exp_month: int = wire_field(INTEGER)
    exp_year: int = wire_field(INTEGER)
    last4: str = wire_field(STRING)
    funding: Optional[str] = wire_field(STRING, optional=True)
    country: Optional[str] = wire_field(COUNTRY, optional=True)
    name: Optional[str] = wire_field(STRING, optional=True)
    address_city: Optional[str] = wire_field(STRING, optional=True)
    address_country: Optional[str] = wire_field(STRING, optional=True)
    address_line1: Optional[str] = wire_field(STRING, optional=True)
    address_line1_check: Optional[str] = wire_field(STRING, optional=True)
    address_line2: Optional[str] = wire_field(STRING, optional=True)
    address_state: Optional[str] = wire_field(STRING, optional=True)
    address_zip: Optional[str] = wire_field(STRING, optional=True)
    address_zip_check: Optional[str] = wire_field(STRING, optional=True)
    cvc_check: Optional[str] = wire_field(STRING, optional=True)
    currency: Optional[Currency] = wire_field(CURRENCY, optional=True)
    customer: Optional[str] = wire_field(STRING, optional=True)
    dynamic_last4: Optional[str] = wire_field(STRING, optional=True)
    fingerprint: Optional[str] = wire_field(STRING, optional=True)
    tokenization_method: Optional[str] = wire_field(STRING, optional=True)
