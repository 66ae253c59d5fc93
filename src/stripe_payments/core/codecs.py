"""
Wire codecs for the scalar values shared by the Stripe models.

Every codec knows how to read a value from decoded JSON, from a form
parameter string, and how to write it back to JSON. Form rendering of
outgoing parameters goes through :func:`to_wire_string`.
"""

from __future__ import annotations

import datetime as dt
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Type, TypeVar

__all__ = [
    "BOOLEAN",
    "COUNTRY",
    "CURRENCY",
    "INTEGER",
    "STRING",
    "TIMESTAMP",
    "Currency",
    "ScalarCodec",
    "decode_country",
    "decode_timestamp",
    "encode_timestamp",
    "enum_codec",
    "json_kind",
    "to_wire_string",
]

E = TypeVar("E", bound=Enum)

_COUNTRY_PATTERN = re.compile(r"^[A-Za-z]{2}$")


class Currency(str, Enum):
    """ISO 4217 currencies accepted by Stripe, valued by their wire (lower-case) code."""

    AED = "aed"
    AFN = "afn"
    ALL = "all"
    AMD = "amd"
    ANG = "ang"
    AOA = "aoa"
    ARS = "ars"
    AUD = "aud"
    AWG = "awg"
    AZN = "azn"
    BAM = "bam"
    BBD = "bbd"
    BDT = "bdt"
    BGN = "bgn"
    BIF = "bif"
    BMD = "bmd"
    BND = "bnd"
    BOB = "bob"
    BRL = "brl"
    BSD = "bsd"
    BWP = "bwp"
    BZD = "bzd"
    CAD = "cad"
    CDF = "cdf"
    CHF = "chf"
    CLP = "clp"
    CNY = "cny"
    COP = "cop"
    CRC = "crc"
    CVE = "cve"
    CZK = "czk"
    DJF = "djf"
    DKK = "dkk"
    DOP = "dop"
    DZD = "dzd"
    EGP = "egp"
    ETB = "etb"
    EUR = "eur"
    FJD = "fjd"
    FKP = "fkp"
    GBP = "gbp"
    GEL = "gel"
    GIP = "gip"
    GMD = "gmd"
    GNF = "gnf"
    GTQ = "gtq"
    GYD = "gyd"
    HKD = "hkd"
    HNL = "hnl"
    HRK = "hrk"
    HTG = "htg"
    HUF = "huf"
    IDR = "idr"
    ILS = "ils"
    INR = "inr"
    ISK = "isk"
    JMD = "jmd"
    JPY = "jpy"
    KES = "kes"
    KGS = "kgs"
    KHR = "khr"
    KMF = "kmf"
    KRW = "krw"
    KYD = "kyd"
    KZT = "kzt"
    LAK = "lak"
    LBP = "lbp"
    LKR = "lkr"
    LRD = "lrd"
    LSL = "lsl"
    MAD = "mad"
    MDL = "mdl"
    MGA = "mga"
    MKD = "mkd"
    MMK = "mmk"
    MNT = "mnt"
    MOP = "mop"
    MUR = "mur"
    MVR = "mvr"
    MWK = "mwk"
    MXN = "mxn"
    MYR = "myr"
    MZN = "mzn"
    NAD = "nad"
    NGN = "ngn"
    NIO = "nio"
    NOK = "nok"
    NPR = "npr"
    NZD = "nzd"
    PAB = "pab"
    PEN = "pen"
    PGK = "pgk"
    PHP = "php"
    PKR = "pkr"
    PLN = "pln"
    PYG = "pyg"
    QAR = "qar"
    RON = "ron"
    RSD = "rsd"
    RUB = "rub"
    RWF = "rwf"
    SAR = "sar"
    SBD = "sbd"
    SCR = "scr"
    SEK = "sek"
    SGD = "sgd"
    SHP = "shp"
    SLL = "sll"
    SOS = "sos"
    SRD = "srd"
    SZL = "szl"
    THB = "thb"
    TJS = "tjs"
    TOP = "top"
    TRY = "try"
    TTD = "ttd"
    TWD = "twd"
    TZS = "tzs"
    UAH = "uah"
    UGX = "ugx"
    USD = "usd"
    UYU = "uyu"
    UZS = "uzs"
    VND = "vnd"
    VUV = "vuv"
    WST = "wst"
    XAF = "xaf"
    XCD = "xcd"
    XOF = "xof"
    XPF = "xpf"
    YER = "yer"
    ZAR = "zar"
    ZMW = "zmw"

    @property
    def iso(self) -> str:
        return self.value.upper()

    @classmethod
    def from_code(cls, code: str) -> "Currency":
        try:
            return cls(code.strip().lower())
        except ValueError:
            raise ValueError(f"unknown currency code '{code}'") from None


def json_kind(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _expect_string(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected string, got {json_kind(value)}")
    return value


def _expect_integer(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected integer, got {json_kind(value)}")
    return value


def _expect_boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected boolean, got {json_kind(value)}")
    return value


def _parse_integer(raw: str) -> int:
    if not re.fullmatch(r"-?\d+", raw):
        raise ValueError(f"expected integer, got '{raw}'")
    return int(raw)


def _parse_boolean(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise ValueError(f"expected 'true' or 'false', got '{raw}'")


def decode_country(value: str) -> str:
    """Validate an ISO 3166-1 alpha-2 code and return it upper-cased."""
    if not _COUNTRY_PATTERN.match(value):
        raise ValueError(f"expected two letter country code, got '{value}'")
    return value.upper()


def encode_timestamp(value: dt.datetime) -> int:
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    return int(value.timestamp())


def decode_timestamp(value: int) -> dt.datetime:
    try:
        return dt.datetime.fromtimestamp(value, tz=dt.timezone.utc)
    except (OverflowError, OSError, ValueError):
        raise ValueError(f"timestamp out of range, got {value}") from None


@dataclass(frozen=True)
class ScalarCodec:
    """Reads and writes a single scalar value on the wire."""

    name: str
    from_json: Callable[[Any], Any]
    from_wire: Callable[[str], Any]
    to_json: Callable[[Any], Any]


def _identity(value: Any) -> Any:
    return value


STRING = ScalarCodec("string", _expect_string, _identity, _identity)
INTEGER = ScalarCodec("integer", _expect_integer, _parse_integer, _identity)
BOOLEAN = ScalarCodec("boolean", _expect_boolean, _parse_boolean, _identity)
COUNTRY = ScalarCodec(
    "country",
    lambda value: decode_country(_expect_string(value)),
    decode_country,
    _identity,
)
CURRENCY = ScalarCodec(
    "currency",
    lambda value: Currency.from_code(_expect_string(value)),
    Currency.from_code,
    lambda value: value.value,
)
TIMESTAMP = ScalarCodec(
    "timestamp",
    lambda value: decode_timestamp(_expect_integer(value)),
    lambda raw: decode_timestamp(_parse_integer(raw)),
    encode_timestamp,
)


def enum_codec(enum_cls: Type[E]) -> ScalarCodec:
    """
    Build a codec for a string-valued enumeration.

    ``enum_cls`` may provide a ``from_wire`` classmethod to raise its own
    error type for unknown values; otherwise a ``ValueError`` is raised.
    """
    lookup: Callable[[str], E] = getattr(enum_cls, "from_wire", None) or enum_cls

    def _from_wire(raw: str) -> E:
        try:
            return lookup(raw)
        except ValueError as exc:
            if type(exc) is not ValueError:
                raise
            raise ValueError(f"unknown {enum_cls.__name__} '{raw}'") from None

    return ScalarCodec(
        enum_cls.__name__,
        lambda value: _from_wire(_expect_string(value)),
        _from_wire,
        lambda value: value.value,
    )


def to_wire_string(value: Any) -> str:
    """Render a present value as a form parameter string."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, dt.datetime):
        return str(encode_timestamp(value))
    if isinstance(value, str):
        return value
    raise TypeError(f"cannot render {type(value).__name__} as a form parameter")
