"""Command line entry point: prints the current TOTP for a Base32 secret."""

import argparse
import logging
import os
import sys
import time
from typing import List, Optional

from .otp import DEFAULT_DIGITS
from .totp import DEFAULT_PERIOD, generate_totp
from .utils import decode_base32

logger = logging.getLogger(__name__)

USAGE = """\
Usage: otpkit <key> [period]
  <key>       The Base32 secret key for TOTP generation.
  [period]    The time step in seconds (default: 30).
"""


def configure_logging(verbose: bool = False) -> None:
    requested = os.getenv("OTPKIT_LOG_LEVEL", "WARNING").strip().upper()
    # getLevelName maps a known name to its number, anything else to a string
    known = isinstance(logging.getLevelName(requested), int)
    level = logging.getLevelName(requested) if known else logging.WARNING
    if verbose:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(filename)s:%(lineno)s  - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    if not known:
        logger.warning("unknown OTPKIT_LOG_LEVEL %r, using WARNING", requested)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="otpkit",
        description="Print the current time-based one-time password (RFC 6238).",
    )
    parser.add_argument("key", help="The Base32 secret key for TOTP generation.")
    parser.add_argument(
        "period",
        nargs="?",
        type=int,
        default=DEFAULT_PERIOD,
        help="The time step in seconds (default: %(default)s).",
    )
    parser.add_argument(
        "-d",
        "--digits",
        type=int,
        default=DEFAULT_DIGITS,
        help="Length of the one-time password (default: %(default)s).",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output to stderr.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if not argv:
        print(USAGE)
        return 0

    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.period <= 0:
        parser.error("period must be a positive number of seconds")
    try:
        key = decode_base32(args.key)
        totp = generate_totp(key, args.period, int(time.time()), args.digits)
    except ValueError as exc:
        parser.error(str(exc))
    logger.debug("generated %d digit code for period %ds", args.digits, args.period)
    print(totp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
