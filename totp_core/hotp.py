"""
hotp.py — HMAC truncation engine (RFC 4226 §5.3).

    HOTP(K, C) = Truncate(HMAC-H(K, C)) mod 10^Digit

The engine only knows about bytes: a raw key, an 8-byte counter and a hash
algorithm. Base32 and wall-clock handling live in otp_core.py.
"""

import enum
import hashlib
import hmac
import logging
import struct

from .config import DEFAULT_DIGITS, DIGITS_POWER, MAX_DIGITS, MIN_DIGITS
from .errors import InvalidCounter, InvalidDigitCount, InvalidSecretLength, UnsupportedAlgorithm

logger = logging.getLogger(__name__)

MAX_COUNTER = 2 ** 64 - 1


class HashAlgorithm(enum.Enum):
    """HMAC hash functions allowed by RFC 6238 (value = hashlib name)."""

    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @property
    def digest_size(self) -> int:
        return hashlib.new(self.value).digest_size

    @classmethod
    def parse(cls, name) -> "HashAlgorithm":
        """
        Resolve an algorithm from an enum member or a loose name.

        Accepts "SHA1", "sha-256", "HmacSHA512", "sha512" ...

        Raises:
            UnsupportedAlgorithm: for anything else
        """
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise UnsupportedAlgorithm(f"Unsupported hash algorithm: {name!r}")

        key = name.strip().upper().replace("-", "").replace("_", "")
        if key.startswith("HMAC"):
            key = key[len("HMAC"):]
        try:
            return cls[key]
        except KeyError:
            raise UnsupportedAlgorithm(f"Unsupported hash algorithm: {name!r}") from None


def counter_to_bytes(counter: int) -> bytes:
    """
    Pack the moving factor as 8-byte big-endian, as RFC 4226 requires.

    e.g. counter_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'

    Raises:
        InvalidCounter: counter is negative or wider than 64 bits
    """
    if counter < 0 or counter > MAX_COUNTER:
        raise InvalidCounter(f"Counter out of range: {counter}")
    return struct.pack(">Q", counter)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    - offset = low nibble of the last digest byte (0..15)
    - take 4 bytes from offset, clear the top bit of the first one
    - return the resulting 31-bit unsigned integer

    offset + 3 <= 18 stays inside every supported digest (>= 20 bytes).
    """
    offset = hmac_digest[-1] & 0x0F
    return (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )


def check_digits(digits: int) -> int:
    """Return digits unchanged, or raise InvalidDigitCount outside [1, 8]."""
    if isinstance(digits, bool) or not isinstance(digits, int):
        raise InvalidDigitCount(f"Digit count must be an integer, got {digits!r}")
    if not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidDigitCount(
            f"Digit count must be between {MIN_DIGITS} and {MAX_DIGITS}, got {digits}"
        )
    return digits


def generate_code(
    key: bytes,
    counter_bytes: bytes,
    algorithm=HashAlgorithm.SHA1,
    digits: int = DEFAULT_DIGITS,
) -> str:
    """
    Compute one zero-padded decimal code.

    Steps:
    1. HMAC-<algorithm>(key, counter_bytes)
    2. Dynamic truncate -> 31-bit integer
    3. integer mod 10^digits
    4. zero-pad to exactly `digits` characters

    Arguments:
        key: raw secret bytes (non-empty)
        counter_bytes: 8-byte big-endian moving factor
        algorithm: HashAlgorithm or a name accepted by HashAlgorithm.parse
        digits: code length, 1..8

    Returns:
        str: the code, e.g. "000042"

    Raises:
        InvalidSecretLength, UnsupportedAlgorithm, InvalidDigitCount
    """
    algo = HashAlgorithm.parse(algorithm)
    check_digits(digits)
    if not key:
        raise InvalidSecretLength("Secret key must not be empty")

    digest = hmac.new(bytes(key), bytes(counter_bytes), algo.value).digest()
    binary = dynamic_truncate(digest)
    return str(binary % DIGITS_POWER[digits]).zfill(digits)


def hotp(key: bytes, counter: int, digits: int = DEFAULT_DIGITS, algorithm=HashAlgorithm.SHA1) -> str:
    """Counter-based code (RFC 4226) from raw key bytes and an integer counter."""
    return generate_code(key, counter_to_bytes(counter), algorithm, digits)
