"""
Command-line interface for creating and retrieving Stripe tokens.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Iterable, Sequence, Tuple

import requests

from .api import create_token_client
from .core.bank_accounts import AccountHolderType
from .core.codecs import Currency, decode_country
from .core.config import ConfigError, load_client_config
from .core.errors import StripeApiError, StripeError
from .core.tokens import (
    BankAccountTokenData,
    CardTokenData,
    PIITokenData,
    TokenData,
    TokenInput,
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _currency(value: str) -> Currency:
    try:
        return Currency.from_code(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _country(value: str) -> str:
    try:
        return decode_country(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stripe-payments",
        description="Create or retrieve Stripe single-use tokens",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing STRIPE_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    get = commands.add_parser("get", help="Retrieve a token by id")
    get.add_argument("token_id")

    def add_create(name: str, help_text: str) -> argparse.ArgumentParser:
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("--customer", help="Customer the token is created for")
        sub.add_argument(
            "--idempotency-key",
            help="Let Stripe deduplicate retries of this request",
        )
        return sub

    card = add_create("card", "Create a card token")
    card.add_argument("--number", required=True)
    card.add_argument("--exp-month", type=int, required=True)
    card.add_argument("--exp-year", type=int, required=True)
    card.add_argument("--cvc")
    card.add_argument("--name")
    card.add_argument("--currency", type=_currency)
    card.add_argument("--address-line1")
    card.add_argument("--address-line2")
    card.add_argument("--address-city")
    card.add_argument("--address-state")
    card.add_argument("--address-zip")
    card.add_argument("--address-country")

    bank = add_create("bank-account", "Create a bank account token")
    bank.add_argument("--account-number", required=True)
    bank.add_argument("--country", type=_country, required=True)
    bank.add_argument("--currency", type=_currency, required=True)
    bank.add_argument("--routing-number")
    bank.add_argument("--account-holder-name")
    bank.add_argument(
        "--account-holder-type",
        choices=[member.value for member in AccountHolderType],
    )

    pii = add_create("pii", "Create a PII token")
    pii.add_argument("--personal-id-number", required=True)
    pii.add_argument("--pii")
    return parser


def _token_data(args: argparse.Namespace) -> TokenData:
    if args.command == "card":
        return CardTokenData(
            exp_month=args.exp_month,
            exp_year=args.exp_year,
            number=args.number,
            address_city=args.address_city,
            address_country=args.address_country,
            address_line1=args.address_line1,
            address_line2=args.address_line2,
            address_state=args.address_state,
            address_zip=args.address_zip,
            currency=args.currency,
            cvc=args.cvc,
            name=args.name,
        )
    if args.command == "bank-account":
        holder_type = args.account_holder_type
        return BankAccountTokenData(
            account_number=args.account_number,
            country=args.country,
            currency=args.currency,
            routing_number=args.routing_number,
            account_holder_name=args.account_holder_name,
            account_holder_type=AccountHolderType(holder_type) if holder_type else None,
        )
    return PIITokenData(personal_id_number=args.personal_id_number, pii=args.pii)


def run_cli(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_client_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_token_client(config=config, session=requests.Session())

    try:
        if args.command == "get":
            token = client.get(args.token_id)
        else:
            token_input = TokenInput(token_data=_token_data(args), customer=args.customer)
            token = client.create(token_input, idempotency_key=args.idempotency_key)
    except StripeApiError as exc:
        logging.error("Stripe rejected the request (%s): %s", exc.status_code, exc.to_json())
        return 1
    except StripeError as exc:
        logging.error("Token request failed: %s", exc)
        return 1

    logging.info("Token %s (%s) ready", token.id, token.type.value)
    json.dump(token.to_json(), sys.stdout, indent=2, sort_keys=True)
    sys.stdout.write("\n")
    return 0


def main() -> None:
    sys.exit(run_cli())
