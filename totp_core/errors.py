"""
errors.py — Exception types raised by the OTP core.

All of them are local precondition failures: the caller passed something
malformed or unsupported. There is nothing to retry; reject the request
upstream. A code that simply does not match is NOT an error (verify()
returns False).
"""


class OTPError(ValueError):
    """Base class for every error raised by totp_core."""


class InvalidEncoding(OTPError):
    """Base32 text contains a foreign character or has an impossible length."""


class UnsupportedAlgorithm(OTPError):
    """Hash algorithm name is not one of SHA1 / SHA256 / SHA512."""


class InvalidDigitCount(OTPError):
    """Requested code length is outside [MIN_DIGITS, MAX_DIGITS]."""


class InvalidSecretLength(OTPError):
    """Secret is empty, or a non-positive secret size was requested."""


class InvalidCounter(OTPError):
    """Moving factor does not fit an unsigned 64-bit integer."""
