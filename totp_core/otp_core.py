"""
otp_core.py — TOTP orchestrator (RFC 6238) on top of the HOTP engine.

Goals:
- Pure functions usable directly by the CLI and the Flask backend.
- No storage, no user model: every call gets the secret it works on.
- Only ambient inputs are the wall clock (verify / generate_now) and the
  OS CSPRNG (generate_secret / generate_scratch_codes).

Security notes:
- Secrets come from `secrets` (CSPRNG), never from `random`.
- Candidate codes are compared with hmac.compare_digest.
- Nothing here logs secret material or codes.
"""

import hmac
import logging
import math
import secrets
import time
import urllib.parse
from typing import List, Optional, Tuple

from . import base32
from .config import (
    DEFAULT_DIGITS,
    QR_CHART_URL,
    SCRATCH_CODE_BYTES,
    SCRATCH_CODE_DIGITS,
    SCRATCH_CODES,
    SECRET_BYTES,
    T0,
    TIME_STEP,
)
from .errors import InvalidSecretLength
from .hotp import HashAlgorithm, counter_to_bytes, generate_code

logger = logging.getLogger(__name__)

VERIFY_DIGITS = 6
VERIFY_ALGORITHM = HashAlgorithm.SHA1


# --- Time / counter --------------------------------------------------------
def time_counter(unix_time: float, step: int = TIME_STEP, t0: int = T0) -> int:
    """
    Map a Unix timestamp to the TOTP moving factor.

        counter = floor((unix_time - T0) / step)
    """
    return (math.floor(unix_time) - t0) // step


def seconds_remaining(unix_time: float, step: int = TIME_STEP, t0: int = T0) -> int:
    """Seconds until the counter for unix_time rolls over (1..step)."""
    return step - ((math.floor(unix_time) - t0) % step)


def candidate_counters(current: int, window_offset: int) -> List[int]:
    """
    Counters tested by verify(), in order.

    current first, then symmetric pairs moving outward:
        current, current-1, current+1, current-2, current+2, ...

    Counters below zero cannot exist and are left out.

    Raises:
        ValueError: window_offset is negative
    """
    if window_offset < 0:
        raise ValueError(f"Verification window must be >= 0, got {window_offset}")

    counters = [current]
    for i in range(1, window_offset + 1):
        counters.append(current - i)
        counters.append(current + i)
    return [c for c in counters if c >= 0]


# --- Generation ------------------------------------------------------------
def generate(
    secret_bytes: bytes,
    unix_time: float,
    digits: int = DEFAULT_DIGITS,
    algorithm="SHA1",
) -> str:
    """
    TOTP code for a raw secret at a given time.

    Arguments:
        secret_bytes: raw key (already Base32-decoded)
        unix_time: seconds since the epoch
        digits: code length, 1..8
        algorithm: "SHA1" (default), "SHA256", "SHA512" or a HashAlgorithm

    Returns:
        str: zero-padded code
    """
    counter = time_counter(unix_time)
    return generate_code(secret_bytes, counter_to_bytes(counter), algorithm, digits)


def generate_now(
    secret_b32: str,
    digits: int = DEFAULT_DIGITS,
    algorithm="SHA1",
    timestamp: Optional[float] = None,
) -> Tuple[str, int]:
    """
    Current TOTP code for a Base32 secret.

    Returns:
        (code, remaining_seconds)
    """
    if timestamp is None:
        timestamp = time.time()
    code = generate(base32.decode(secret_b32), timestamp, digits, algorithm)
    return code, seconds_remaining(timestamp)


# --- Verification ----------------------------------------------------------
def verify(
    encoded_secret: str,
    submitted_code: str,
    window_offset: int = 1,
    now: Optional[float] = None,
) -> bool:
    """
    Check a submitted 6-digit SHA1 code against the current time window.

    Tests 2 * window_offset + 1 counters around the verifier's clock (see
    candidate_counters) and stops at the first match.

    Arguments:
        encoded_secret: Base32 secret
        submitted_code: code typed by the user
        window_offset: accepted steps before/after the current one
        now: override for the wall clock (seconds since epoch)

    Returns:
        bool: True on match, False otherwise (never raises for a wrong code)

    Raises:
        InvalidEncoding: encoded_secret is not valid Base32
        InvalidSecretLength: encoded_secret decodes to zero bytes
        ValueError: window_offset is negative
    """
    key = base32.decode(encoded_secret)
    if not key:
        raise InvalidSecretLength("Secret decodes to zero bytes")

    if now is None:
        now = time.time()
    current = time_counter(now)
    counters = candidate_counters(current, window_offset)
    logger.debug("Verifying against counter %d (%d candidates)", current, len(counters))

    submitted = str(submitted_code).encode("ascii", "replace")
    for counter in counters:
        expected = generate_code(key, counter_to_bytes(counter), VERIFY_ALGORITHM, VERIFY_DIGITS)
        if hmac.compare_digest(expected.encode("ascii"), submitted):
            logger.debug("Code matched at counter offset %+d", counter - current)
            return True
    return False


# --- Secrets ---------------------------------------------------------------
def generate_secret(byte_length: int = SECRET_BYTES) -> str:
    """
    New random secret, Base32-encoded (unpadded).

    Arguments:
        byte_length: raw secret size in bytes (20 = 160 bits by default)

    Raises:
        InvalidSecretLength: byte_length < 1
    """
    if isinstance(byte_length, bool) or not isinstance(byte_length, int) or byte_length < 1:
        raise InvalidSecretLength(f"Secret length must be a positive integer, got {byte_length!r}")
    return base32.encode(secrets.token_bytes(byte_length))


def generate_scratch_codes(count: int = SCRATCH_CODES, size: int = SCRATCH_CODE_BYTES) -> List[str]:
    """
    One-shot recovery codes drawn from the same CSPRNG as the secrets.

    Each code is `size` random bytes reduced to an 8-digit decimal string.
    verify() does not know about them; the caller decides how to use them.
    """
    if count < 0 or size < 1:
        raise InvalidSecretLength(f"Invalid scratch code request: count={count}, size={size}")
    modulus = 10 ** SCRATCH_CODE_DIGITS
    return [
        str(int.from_bytes(secrets.token_bytes(size), "big") % modulus).zfill(SCRATCH_CODE_DIGITS)
        for _ in range(count)
    ]


# --- Provisioning ----------------------------------------------------------
def build_provisioning_url(issuer: str, account: str, secret_text: str) -> str:
    """
    otpauth:// URI for authenticator apps.

    account / issuer are inserted verbatim: percent-encoding them is the
    caller's job.
    """
    return f"otpauth://totp/{account}?secret={secret_text}&issuer={issuer}"


def build_qr_code_url(issuer: str, account: str, secret_text: str) -> str:
    """
    Chart-service URL rendering the provisioning URI as a QR code.

    Only builds the string; nothing is fetched.
    """
    uri = build_provisioning_url(issuer, account, secret_text)
    return QR_CHART_URL + urllib.parse.quote(uri, safe=":/@")
