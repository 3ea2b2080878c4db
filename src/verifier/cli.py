"""CLI entry point: verify an order, or mint/check access tokens locally."""

import argparse
import json
import logging
import sys

from dotenv import load_dotenv

from verifier.config import Settings
from verifier.tokens import sign_token, verify_token
from verifier.verification import verify_order

load_dotenv()  # reads .env file from project root


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Lemon Squeezy order verification")
    sub = parser.add_subparsers(dest="command", required=True)

    p_verify = sub.add_parser(
        "verify",
        help="Look up an order and print the endpoint's JSON response (requires LS_API_KEY)",
    )
    p_verify.add_argument("order_id")

    p_sign = sub.add_parser("sign", help="Print the access token for an order id")
    p_sign.add_argument("order_id")

    p_check = sub.add_parser("check", help="Exit 0 if TOKEN is valid for the order id")
    p_check.add_argument("order_id")
    p_check.add_argument("token")

    for p in (p_sign, p_check):
        p.add_argument(
            "--at", type=float, default=None, metavar="UNIX_SECONDS",
            help="Use this timestamp instead of the current time",
        )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    log = logging.getLogger(__name__)

    try:
        settings = Settings.from_env()
    except ValueError as exc:
        log.error("Invalid configuration: %s", exc)
        return 2

    if args.command == "verify":
        result = verify_order(args.order_id, settings)
        print(json.dumps(result.to_dict(), indent=2))
        return 0 if result.ok else 1

    if args.command == "sign":
        print(sign_token(args.order_id, settings.token_secret, args.at))
        return 0

    if verify_token(args.order_id, args.token, settings.token_secret, args.at):
        log.info("Token valid for order %s", args.order_id)
        return 0
    log.error("Token invalid or expired for order %s", args.order_id)
    return 1


if __name__ == "__main__":
    sys.exit(main())
