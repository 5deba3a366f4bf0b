#!/usr/bin/env python3
"""
otp_cli.py — command-line front end for totp_core.

Subcommands:
- secret : generate a new Base32 secret (optionally with scratch codes)
- code   : TOTP code for a secret at "now" or a given timestamp
- hotp   : HOTP code for a specific counter
- verify : check a code against the current time window
- uri    : print the otpauth:// URI (and QR chart URL)
- watch  : show the TOTP code in real time

eg..:
    totp-cli secret --bytes 20 --scratch
    totp-cli code --secret JBSWY3DPEHPK3PXP --digits 8 --algorithm SHA256
    totp-cli verify --secret JBSWY3DPEHPK3PXP --code 123456 --window 1
    totp-cli uri --secret JBSWY3DPEHPK3PXP --account alice@example --issuer MyService --qr
"""

import argparse
import logging
import sys
import time

from . import base32, otp_core
from .config import DEFAULT_DIGITS, SECRET_BYTES, configure_logging
from .errors import OTPError
from .hotp import HashAlgorithm, hotp

logger = logging.getLogger(__name__)

ALGORITHM_CHOICES = [a.name for a in HashAlgorithm]


# --- CLI command handlers ---
def cmd_secret(args) -> int:
    secret = otp_core.generate_secret(args.bytes)
    print(secret)
    if args.scratch:
        print("Scratch codes:")
        for code in otp_core.generate_scratch_codes():
            print("   ", code)
    return 0


def cmd_code(args) -> int:
    timestamp = args.time if args.time is not None else time.time()
    code, remaining = otp_core.generate_now(
        args.secret, digits=args.digits, algorithm=args.algorithm, timestamp=timestamp
    )
    logger.debug("time=%d counter=%d", int(timestamp), otp_core.time_counter(timestamp))
    print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
    return 0


def cmd_hotp(args) -> int:
    code = hotp(base32.decode(args.secret), args.counter, args.digits, args.algorithm)
    print(f"HOTP(counter={args.counter}): {code}")
    return 0


def cmd_verify(args) -> int:
    if otp_core.verify(args.secret, args.code, args.window):
        print("[+] TOTP code is VALID")
        return 0
    print("[-] TOTP code is INVALID")
    return 1


def cmd_uri(args) -> int:
    print("TOTP URI:")
    print(otp_core.build_provisioning_url(args.issuer, args.account, args.secret))
    if args.qr:
        print("\nQR code URL:")
        print(otp_core.build_qr_code_url(args.issuer, args.account, args.secret))
    return 0


def cmd_watch(args) -> int:
    key = base32.decode(args.secret)
    print("Press Ctrl+C to quit. Generating TOTP in real time...\n")
    last_code = None
    try:
        while True:
            now = time.time()
            code = otp_core.generate(key, now, args.digits, args.algorithm)
            remaining = otp_core.seconds_remaining(now)
            if code != last_code:
                print(f"TOTP: {code}  (valid ~{remaining:2d}s)")
                last_code = code
            else:
                print(f".. {remaining:2d}s left", end="\r", flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return 0


# --- Argparse builder ---
def _add_code_options(p: argparse.ArgumentParser) -> None:
    p.add_argument("--digits", type=int, default=DEFAULT_DIGITS, help="Number of OTP digits (1-8)")
    p.add_argument("--algorithm", default="SHA1", choices=ALGORITHM_CHOICES, help="HMAC hash function")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="totp-cli", description="TOTP/HOTP generator and verifier (RFC 6238 / RFC 4226)")
    p.add_argument("--verbose", action="store_true", help="Verbose (DEBUG) logging")
    sub = p.add_subparsers(dest="cmd")

    ps = sub.add_parser("secret", help="Generate a new Base32 secret")
    ps.add_argument("--bytes", type=int, default=SECRET_BYTES, help="Raw secret size in bytes")
    ps.add_argument("--scratch", action="store_true", help="Also print recovery scratch codes")
    ps.set_defaults(func=cmd_secret)

    pc = sub.add_parser("code", help="Print the TOTP code for a secret")
    pc.add_argument("--secret", required=True, help="Base32 secret")
    pc.add_argument("--time", type=int, help="Unix timestamp (default: now)")
    _add_code_options(pc)
    pc.set_defaults(func=cmd_code)

    ph = sub.add_parser("hotp", help="Print the HOTP code for a specific counter")
    ph.add_argument("--secret", required=True, help="Base32 secret")
    ph.add_argument("--counter", type=int, required=True)
    _add_code_options(ph)
    ph.set_defaults(func=cmd_hotp)

    pv = sub.add_parser("verify", help="Verify a 6-digit TOTP code")
    pv.add_argument("--secret", required=True, help="Base32 secret")
    pv.add_argument("--code", required=True, help="OTP code to verify")
    pv.add_argument("--window", type=int, default=1, help="Allowed +/- step window")
    pv.set_defaults(func=cmd_verify)

    pu = sub.add_parser("uri", help="Print the otpauth:// URI for a secret")
    pu.add_argument("--secret", required=True, help="Base32 secret")
    pu.add_argument("--account", default="user@example", help="Account label")
    pu.add_argument("--issuer", default="otp-tool", help="Issuer label")
    pu.add_argument("--qr", action="store_true", help="Also print the QR chart URL")
    pu.set_defaults(func=cmd_uri)

    pw = sub.add_parser("watch", help="Show the TOTP code in real time")
    pw.add_argument("--secret", required=True, help="Base32 secret")
    _add_code_options(pw)
    pw.set_defaults(func=cmd_watch)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging("DEBUG" if args.verbose else "WARNING")

    if not hasattr(args, "func"):
        parser.print_help()
        return 0
    try:
        return args.func(args)
    except OTPError as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
