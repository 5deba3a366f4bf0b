"""
config.py — Constants and runtime settings shared by core, CLI and backend.

The RFC parameters (T0, time step, digit range) are fixed module constants.
Server-side knobs come from environment variables so the Flask app can be
tuned without code changes.
"""

import logging
import os

# --- RFC 6238 / RFC 4226 constants ----------------------------------------
T0 = 0                      # Unix epoch as the counter origin
TIME_STEP = 30              # seconds per counter step
DEFAULT_DIGITS = 6
MIN_DIGITS = 1
MAX_DIGITS = 8
#              0  1   2    3     4      5       6        7         8
DIGITS_POWER = (1, 10, 100, 1000, 10000, 100000, 1000000, 10000000, 100000000)

# --- Secrets ---------------------------------------------------------------
SECRET_BYTES = 20                   # 160-bit secret, RFC 4226 recommendation
REGISTRATION_SECRET_BYTES = 50      # size handed out by the /register endpoint
SCRATCH_CODES = 5
SCRATCH_CODE_BYTES = 5
SCRATCH_CODE_DIGITS = 8

# --- Provisioning ----------------------------------------------------------
QR_CHART_URL = "https://chart.googleapis.com/chart?cht=qr&chs=200x200&chld=L&choe=UTF-8&chl="

# --- Server settings (environment) -----------------------------------------
def _env_int(name: str, default: int) -> int:
    """Integer from the environment; malformed values fall back to default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("Ignoring %s=%r (not an integer), using %d", name, raw, default)
        return default


HOST = os.getenv("TOTP_HOST", "0.0.0.0")
PORT = _env_int("TOTP_PORT", 5000)
DEBUG = os.getenv("TOTP_DEBUG", "").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("TOTP_LOG_LEVEL", "INFO").upper()
VERIFY_WINDOW = _env_int("TOTP_VERIFY_WINDOW", 3)

LOG_FORMAT = "%(levelname)s [%(filename)s:%(lineno)d]: %(message)s"


def configure_logging(level=LOG_LEVEL) -> None:
    """
    Install a single console handler on the root logger.

    Existing handlers are removed first so calling this twice (CLI + app
    factory in the same process, or tests) does not duplicate output.

    Arguments:
        level: logging level name ("DEBUG", "INFO", ...) or numeric level
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)
    root_logger.setLevel(level)
