import pytest

from stripe_payments.core.bank_accounts import BankAccount
from stripe_payments.core.cards import Card
from stripe_payments.core.codecs import INTEGER, STRING
from stripe_payments.core.decoding import FieldReader, loads_object
from stripe_payments.core.errors import ModelDecodeError
from stripe_payments.core.tokens import Token

from .payloads import BANK_ACCOUNT_TOKEN, CARD_TOKEN


def test_reader_collects_every_mismatch_in_one_pass():
    reader = FieldReader({"id": 7, "exp_month": "8", "name": None})

    assert reader.required("id", STRING) is None
    assert reader.required("exp_month", INTEGER) is None
    assert reader.required("last4", STRING) is None
    assert reader.optional("name", STRING) is None

    with pytest.raises(ModelDecodeError) as excinfo:
        reader.finish()

    assert excinfo.value.errors == [
        ("/id", "expected string, got number"),
        ("/exp_month", "expected integer, got string"),
        ("/last4", "missing required field"),
    ]


def test_optional_fields_default_to_none():
    card = Card.from_json(
        {"id": "card_1", "brand": "Visa", "exp_month": 1, "exp_year": 2031, "last4": "4242"}
    )

    assert card.name is None
    assert card.currency is None
    assert card.fingerprint is None


def test_mistyped_optional_field_is_reported():
    with pytest.raises(ModelDecodeError) as excinfo:
        Card.from_json(
            {
                "id": "card_1",
                "brand": "Visa",
                "exp_month": 1,
                "exp_year": 2031,
                "last4": "4242",
                "name": ["Ada"],
            }
        )

    assert excinfo.value.errors == [("/name", "expected string, got array")]


def test_nested_errors_carry_their_full_path():
    payload = dict(CARD_TOKEN, card=dict(CARD_TOKEN["card"], exp_year="2030", last4=None), used="no")

    with pytest.raises(ModelDecodeError) as excinfo:
        Token.from_json(payload)

    assert excinfo.value.errors == [
        ("/used", "expected boolean, got string"),
        ("/card/exp_year", "expected integer, got string"),
        ("/card/last4", "missing required field"),
    ]


def test_nested_payload_of_wrong_shape():
    payload = dict(BANK_ACCOUNT_TOKEN, bank_account="ba_123")

    with pytest.raises(ModelDecodeError) as excinfo:
        Token.from_json(payload)

    assert excinfo.value.errors == [("/bank_account", "expected object, got string")]


def test_unknown_currency_is_reported_against_its_field():
    payload = dict(BANK_ACCOUNT_TOKEN["bank_account"], currency="zzz")

    with pytest.raises(ModelDecodeError) as excinfo:
        BankAccount.from_json(payload)

    assert excinfo.value.errors == [("/currency", "unknown currency code 'zzz'")]


def test_top_level_must_be_an_object():
    with pytest.raises(ModelDecodeError) as excinfo:
        Token.from_json([CARD_TOKEN])

    assert ("", "expected object, got array") in excinfo.value.errors


@pytest.mark.parametrize("body", [b"", b"<html></html>", b"\xff\xfe", b"[1, 2]"])
def test_loads_object_rejects_non_objects(body):
    with pytest.raises(ModelDecodeError):
        loads_object(body)


def test_loads_object_parses_bytes():
    assert loads_object(b'{"id": "tok_1"}') == {"id": "tok_1"}


def test_with_context_keeps_errors():
    error = ModelDecodeError([("/id", "missing required field")])

    enriched = error.with_context(status_code=200, url="https://api.stripe.com/v1/tokens")

    assert enriched.errors == error.errors
    assert enriched.status_code == 200
    assert enriched.url.endswith("/v1/tokens")
    assert enriched.post_parameters is None


def test_loads_object_rejects_deeply_nested_bodies():
    with pytest.raises(ModelDecodeError) as excinfo:
        loads_object(b"[" * 200000 + b"]" * 200000)

    assert excinfo.value.errors == [("", "body is too deeply nested")]
