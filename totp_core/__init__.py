"""
totp_core package
=================

HOTP / TOTP one-time passwords (RFC 4226 & RFC 6238) with a Base32 codec
and CSPRNG secret generation.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP: code = Truncate(HMAC-H(key=secret, msg=counter)) mod 10^digits
- TOTP: HOTP with counter = floor((timestamp - T0) / 30)
- Dynamic truncation: 4 bytes at offset (last byte & 0x0F), top bit cleared.

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from totp_core import generate_secret, generate_now, verify
>>> secret = generate_secret()
>>> code, remaining = generate_now(secret)
>>> verify(secret, code, window_offset=1)
True
"""

from .base32 import decode as base32_decode, encode as base32_encode
from .errors import (
    InvalidCounter,
    InvalidDigitCount,
    InvalidEncoding,
    InvalidSecretLength,
    OTPError,
    UnsupportedAlgorithm,
)
from .hotp import HashAlgorithm, dynamic_truncate, generate_code
from .otp_core import (
    build_provisioning_url,
    build_qr_code_url,
    candidate_counters,
    generate,
    generate_now,
    generate_scratch_codes,
    generate_secret,
    time_counter,
    verify,
)

__version__ = "0.1.0"

__all__ = [
    "base32_decode",
    "base32_encode",
    "build_provisioning_url",
    "build_qr_code_url",
    "candidate_counters",
    "dynamic_truncate",
    "generate",
    "generate_code",
    "generate_now",
    "generate_scratch_codes",
    "generate_secret",
    "time_counter",
    "verify",
    "HashAlgorithm",
    "InvalidCounter",
    "InvalidDigitCount",
    "InvalidEncoding",
    "InvalidSecretLength",
    "OTPError",
    "UnsupportedAlgorithm",
]
