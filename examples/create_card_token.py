"""
Minimal script that uses the public API to create and read back a card token.
"""

from __future__ import annotations

import argparse
import logging
import sys

from stripe_payments import (
    CardTokenData,
    ConfigError,
    StripeError,
    TokenInput,
    create_token_client,
    load_client_config,
)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a Stripe card token using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing STRIPE_* settings",
    )
    parser.add_argument(
        "--api-key",
        help="Provide the secret key without relying on environment data",
    )
    parser.add_argument("--number", default="4242424242424242")
    parser.add_argument("--exp-month", type=int, default=12)
    parser.add_argument("--exp-year", type=int, default=2030)
    parser.add_argument("--cvc", default="123")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    try:
        config = load_client_config(env_file=args.env_file, api_key=args.api_key)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_token_client(config=config)
    card = CardTokenData(
        exp_month=args.exp_month,
        exp_year=args.exp_year,
        number=args.number,
        cvc=args.cvc,
    )

    try:
        token = client.create(TokenInput(token_data=card))
        fetched = client.get(token.id)
    except StripeError as exc:
        logging.error("Token request failed: %s", exc)
        return 1

    logging.info(
        "Created token %s for card ending %s (used=%s)",
        fetched.id,
        fetched.card.last4 if fetched.card else "?",
        fetched.used,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
