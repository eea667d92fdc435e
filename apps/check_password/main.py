"""check-password debug command: compare a plaintext password with a stored bcrypt hash."""

from __future__ import annotations

import argparse
import getpass
import logging
import sys
from collections.abc import Sequence

from patient_management.domain.auth.hash_record import MalformedHashError
from patient_management.infrastructure.logging import configure_logging
from patient_management.infrastructure.security.password_hasher import (
    DEFAULT_COST,
    BcryptPasswordHasher,
)

EXIT_MALFORMED_HASH = 2

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build CLI parser with `verify` and `hash` subcommands."""

    parser = argparse.ArgumentParser(prog="check-password")
    parser.add_argument("--log-level", default="WARNING")
    subcommands = parser.add_subparsers(dest="command", required=True)

    verify = subcommands.add_parser("verify", help="check a password against a stored hash")
    verify.add_argument("stored_hash")
    verify.add_argument(
        "--password",
        default=None,
        help="plaintext to check; prompted for when omitted",
    )

    hash_command = subcommands.add_parser("hash", help="print a fresh hash for a password")
    hash_command.add_argument("--password", default=None)
    hash_command.add_argument("--cost", type=int, default=DEFAULT_COST)
    return parser


def _read_password(value: str | None) -> str:
    if value is not None:
        return value
    return getpass.getpass("Password: ")


def run(argv: Sequence[str] | None = None) -> int:
    """Execute one CLI invocation and return its process exit code."""

    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level)

    if args.command == "hash":
        try:
            hasher = BcryptPasswordHasher(cost=args.cost)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_MALFORMED_HASH
        print(hasher.hash_password(_read_password(args.password)))
        return 0

    hasher = BcryptPasswordHasher()
    try:
        matched = hasher.verify_password(
            password=_read_password(args.password),
            password_hash=args.stored_hash,
        )
    except MalformedHashError as exc:
        logger.error("stored_hash_malformed reason=%s", exc.reason)
        print(f"error: malformed hash ({exc.reason})", file=sys.stderr)
        return EXIT_MALFORMED_HASH

    print("true" if matched else "false")
    return 0


def main() -> None:
    """Run check-password process."""

    raise SystemExit(run())


if __name__ == "__main__":
    main()
