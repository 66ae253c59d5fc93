import datetime as dt

import pytest

from stripe_payments.core.bank_accounts import AccountHolderType, BankAccount
from stripe_payments.core.cards import Card
from stripe_payments.core.codecs import Currency
from stripe_payments.core.errors import ModelDecodeError, UnrecognizedVariant
from stripe_payments.core.tokens import (
    BankAccountTokenData,
    CardTokenData,
    PIITokenData,
    Token,
    TokenInput,
    TokenType,
    decode_token_data,
    decode_token_input,
    encode_token_data,
    encode_token_input,
)

from .payloads import BANK_ACCOUNT_TOKEN, CARD_TOKEN, PII_TOKEN

VARIANTS = [
    CardTokenData(exp_month=12, exp_year=2025, number="4242424242424242", cvc="123"),
    CardTokenData(
        exp_month=1,
        exp_year=30,
        number="5555555555554444",
        address_city="Berlin",
        address_country="DE",
        address_line1="Unter den Linden 1",
        address_line2="Hinterhaus",
        address_state="BE",
        address_zip="10117",
        currency=Currency.EUR,
        cvc="999",
        name="Ada Lovelace",
    ),
    BankAccountTokenData(account_number="000123456789", country="US", currency=Currency.USD),
    BankAccountTokenData(
        account_number="DE89370400440532013000",
        country="DE",
        currency=Currency.EUR,
        account_holder_name="Jane Austen",
        account_holder_type=AccountHolderType.COMPANY,
    ),
    PIITokenData(personal_id_number="000000000"),
    PIITokenData(personal_id_number="123456789", pii="opaque"),
]


def test_card_token_data_encodes_only_present_fields():
    data = CardTokenData(exp_month=12, exp_year=2025, number="4242424242424242", cvc="123")

    assert encode_token_data(data) == {
        "card[exp_month]": "12",
        "card[exp_year]": "2025",
        "card[number]": "4242424242424242",
        "card[cvc]": "123",
    }


def test_bank_account_token_data_lower_cases_currency():
    data = BankAccountTokenData(
        account_number="000123456789",
        country="US",
        currency=Currency.USD,
        routing_number="110000000",
        account_holder_type=AccountHolderType.INDIVIDUAL,
    )

    assert encode_token_data(data) == {
        "bank_account[account_number]": "000123456789",
        "bank_account[country]": "US",
        "bank_account[currency]": "usd",
        "bank_account[routing_number]": "110000000",
        "bank_account[account_holder_type]": "individual",
    }


def test_token_input_adds_top_level_customer():
    token_input = TokenInput(token_data=PIITokenData(personal_id_number="000000000"), customer="cus_42")

    assert encode_token_input(token_input) == {
        "customer": "cus_42",
        "pii[personal_id_number]": "000000000",
    }
    assert "customer" not in encode_token_input(TokenInput(token_data=VARIANTS[0]))


def test_encode_token_data_rejects_non_variants():
    with pytest.raises(TypeError):
        encode_token_data("card")  # type: ignore[arg-type]


@pytest.mark.parametrize("data", VARIANTS, ids=lambda data: type(data).__name__)
def test_token_data_round_trips_through_form_parameters(data):
    token_input = TokenInput(token_data=data, customer="cus_1")

    assert decode_token_input(encode_token_input(token_input)) == token_input


@pytest.mark.parametrize("data", VARIANTS, ids=lambda data: type(data).__name__)
def test_token_data_round_trips_through_json(data):
    assert decode_token_data(data.to_json(), data.token_type.value) == data


def test_decode_token_data_rejects_unknown_tag():
    with pytest.raises(UnrecognizedVariant) as excinfo:
        decode_token_data({"number": "4242"}, "apple_pay")

    assert excinfo.value.tag == "apple_pay"


def test_decode_token_input_rejects_unknown_namespace():
    with pytest.raises(UnrecognizedVariant) as excinfo:
        decode_token_input({"source[number]": "4242"})

    assert excinfo.value.tag == "source"


def test_decode_token_input_requires_exactly_one_namespace():
    params = {**encode_token_data(VARIANTS[0]), **encode_token_data(VARIANTS[4])}

    with pytest.raises(ModelDecodeError):
        decode_token_input(params)
    with pytest.raises(ModelDecodeError):
        decode_token_input({"customer": "cus_1"})


def test_decode_token_input_reports_bad_fields_under_namespace():
    with pytest.raises(ModelDecodeError) as excinfo:
        decode_token_input(
            {"card[exp_month]": "twelve", "card[number]": "4242", "card[colour]": "blue"}
        )

    assert sorted(excinfo.value.errors) == [
        ("/card/colour", "unexpected parameter"),
        ("/card/exp_month", "expected integer, got 'twelve'"),
        ("/card/exp_year", "missing required field"),
    ]


def test_decode_card_token():
    token = Token.from_json(CARD_TOKEN)

    assert token.id == "tok_1AbCdEfGhIjKlMnO"
    assert token.type is TokenType.CARD
    assert token.created == dt.datetime(2016, 9, 23, 17, 42, 25, tzinfo=dt.timezone.utc)
    assert token.livemode is False
    assert token.client_ip == "203.0.113.7"
    assert token.bank_account is None
    assert isinstance(token.card, Card)
    assert token.card.last4 == "4242"
    assert token.card.country == "US"
    assert token.card.address_city is None
    assert token.card.address_zip_check == "unchecked"


def test_decode_bank_account_token():
    token = Token.from_json(BANK_ACCOUNT_TOKEN)

    assert token.type is TokenType.BANK_ACCOUNT
    assert token.card is None
    assert isinstance(token.bank_account, BankAccount)
    assert token.bank_account.currency is Currency.USD
    assert token.bank_account.account_holder_type is AccountHolderType.INDIVIDUAL


def test_decode_pii_token_has_no_payload():
    token = Token.from_json(PII_TOKEN)

    assert token.type is TokenType.PII
    assert token.used is True
    assert token.card is None and token.bank_account is None


def test_card_tag_with_bank_account_payload_is_rejected():
    payload = dict(CARD_TOKEN)
    del payload["card"]
    payload["bank_account"] = BANK_ACCOUNT_TOKEN["bank_account"]

    with pytest.raises(ModelDecodeError) as excinfo:
        Token.from_json(payload)

    (path, reason), = excinfo.value.errors
    assert path == ""
    assert "bank_account" in reason


def test_bank_account_tag_without_payload_is_rejected():
    payload = {key: value for key, value in BANK_ACCOUNT_TOKEN.items() if key != "bank_account"}

    with pytest.raises(ModelDecodeError):
        Token.from_json(payload)


def test_token_constructor_enforces_payload_invariant():
    card = Token.from_json(CARD_TOKEN).card

    with pytest.raises(ValueError):
        Token(
            id="pii_1",
            created=dt.datetime(2020, 1, 1, tzinfo=dt.timezone.utc),
            livemode=False,
            type=TokenType.PII,
            used=False,
            card=card,
        )


@pytest.mark.parametrize("payload", [CARD_TOKEN, BANK_ACCOUNT_TOKEN, PII_TOKEN])
def test_token_json_round_trip(payload):
    token = Token.from_json(payload)
    encoded = token.to_json()

    assert encoded["object"] == "token"
    assert "client_ip" not in encoded or encoded["client_ip"] is not None
    assert Token.from_json(encoded) == token


def test_unknown_token_type_is_a_decode_error():
    payload = dict(PII_TOKEN, type="apple_pay")

    with pytest.raises(ModelDecodeError) as excinfo:
        Token.from_json(payload)

    assert excinfo.value.errors == [("/type", "Unrecognized token type 'apple_pay'")]


def test_bank_account_country_is_normalised_on_construction():
    data = BankAccountTokenData(account_number="000123456789", country="us", currency=Currency.USD)

    assert data.country == "US"
    assert encode_token_data(data)["bank_account[country]"] == "US"
    assert decode_token_input(encode_token_input(TokenInput(token_data=data))).token_data == data


@pytest.mark.parametrize("country", ["USA", "U", "1A"])
def test_bank_account_rejects_malformed_country(country):
    with pytest.raises(ValueError):
        BankAccountTokenData(account_number="000123456789", country=country, currency=Currency.USD)


def test_bank_account_country_error_is_reported_on_decode():
    with pytest.raises(ModelDecodeError) as excinfo:
        decode_token_data(
            {"account_number": "000123456789", "country": "USA", "currency": "usd"}, "bank_account"
        )

    assert excinfo.value.errors == [("/country", "expected two letter country code, got 'USA'")]
