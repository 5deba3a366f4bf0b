"""
base32.py — RFC 4648 Base32 codec for OTP secrets.

Secrets are shown to users (and packed into QR codes) as Base32 text.
Authenticator apps emit them unpadded and sometimes in lower case or in
space-separated groups, so decode() normalizes before validating.

Rules:
- encode() always returns unpadded upper-case text.
- decode() is case-insensitive, ignores spaces / dashes and trailing '='.
- decode() rejects foreign characters, lengths no byte count can produce,
  and non-zero leftover bits, so decode(encode(b)) == b and every accepted
  string has exactly one byte value.
"""

import base64
import binascii
import logging

from .errors import InvalidEncoding

logger = logging.getLogger(__name__)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_ALPHABET_SET = frozenset(ALPHABET)
# str.upper() would fold some non-ASCII letters into A-Z ("ſ" -> "S", "ı" -> "I", "ß" -> "SS")
_ASCII_UPPER = str.maketrans("abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ")

# unpadded length % 8 -> legal? (0 -> whole blocks, 2/4/5/7 -> 1..4 trailing bytes)
_VALID_TAIL_LENGTHS = frozenset((0, 2, 4, 5, 7))


def encode(data: bytes) -> str:
    """
    Encode raw bytes as unpadded Base32 text.

    Arguments:
        data: raw secret bytes (may be empty)

    Returns:
        str: upper-case Base32 without '=' padding, e.g. b"Hello!" -> "JBSWY3DPEE"
    """
    return base64.b32encode(bytes(data)).decode("ascii").rstrip("=")


def normalize(text: str) -> str:
    """Upper-case, drop whitespace / '-' separators and trailing '=' padding."""
    cleaned = "".join(text.split()).replace("-", "").translate(_ASCII_UPPER)
    return cleaned.rstrip("=")


def decode(text: str) -> bytes:
    """
    Decode Base32 text back to raw bytes.

    Arguments:
        text: Base32 secret, padded or unpadded, any case

    Returns:
        bytes: the raw secret

    Raises:
        InvalidEncoding: foreign character, impossible length, or non-canonical
            trailing bits
    """
    if not isinstance(text, str):
        raise InvalidEncoding(f"Base32 secret must be text, got {type(text).__name__}")

    cleaned = normalize(text)

    bad = sorted(set(cleaned) - _ALPHABET_SET)
    if bad:
        raise InvalidEncoding(f"Invalid Base32 character(s): {''.join(bad)!r}")

    if len(cleaned) % 8 not in _VALID_TAIL_LENGTHS:
        raise InvalidEncoding(f"Invalid Base32 length: {len(cleaned)} characters")

    padded = cleaned + "=" * (-len(cleaned) % 8)
    try:
        raw = base64.b32decode(padded)
    except binascii.Error as e:
        raise InvalidEncoding("Invalid Base32 secret") from e

    # The stdlib silently drops leftover bits; a second spelling of the same
    # bytes is not a valid encoding.
    if encode(raw) != cleaned:
        raise InvalidEncoding("Non-canonical Base32 secret (unused bits are set)")

    logger.debug("Decoded Base32 secret: %d chars -> %d bytes", len(cleaned), len(raw))
    return raw
