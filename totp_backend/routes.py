"""
OTP BACKEND ROUTES - FLASK BLUEPRINT

Two endpoints, both answering JSON and accepting GET or POST:

- /register : hand out a new secret + provisioning URI + QR chart URL
- /verify   : check a token against a secret

Parameters can come from the query string, a form body or a JSON body.
Nothing is stored: the client keeps the key it was given and sends it back.

EXAMPLES:
curl "http://localhost:5000/register?app=MyApp&user=alice@example.com"
curl "http://localhost:5000/verify?key=JBSWY3DPEHPK3PXP&token=123456"
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from totp_core import otp_core
from totp_core.config import REGISTRATION_SECRET_BYTES
from totp_core.errors import OTPError

logger = logging.getLogger(__name__)

otp_bp = Blueprint('otp', __name__)


def _param(name: str):
    """Look a parameter up in query string, form, then JSON body."""
    value = request.values.get(name)
    if value is None:
        data = request.get_json(silent=True) or {}
        if isinstance(data, dict):
            value = data.get(name)
    return value


@otp_bp.route('/register', methods=['GET', 'POST'])
def register():
    """
    NEW SECRET

      curl "http://localhost:5000/register?app=MyApp&user=alice@example.com"

    Output:
      {"app": "...", "user": "...", "key": "<base32>", "uri": "otpauth://...", "url": "<qr chart url>"}
    """
    app_name = _param('app') or ""
    user = _param('user') or ""

    key = otp_core.generate_secret(REGISTRATION_SECRET_BYTES)
    logger.info("Issued new secret for app=%r user=%r", app_name, user)

    return jsonify({
        "app": app_name,
        "user": user,
        "key": key,
        "uri": otp_core.build_provisioning_url(app_name, user, key),
        "url": otp_core.build_qr_code_url(app_name, user, key),
    })


@otp_bp.route('/verify', methods=['GET', 'POST'])
def verify():
    """
    VERIFY A TOKEN

      curl "http://localhost:5000/verify?key=JBSWY3DPEHPK3PXP&token=123456"

    Output:
      {"key": "...", "token": "...", "valid": true|false}
      400 + "error" when the key is not valid Base32
    """
    key = _param('key')
    token = _param('token')

    if key is None or token is None:
        logger.warning("Verification request without key or token")
        return jsonify({"key": key, "token": token, "valid": False})

    window = current_app.config.get("VERIFY_WINDOW", 3)
    try:
        valid = otp_core.verify(str(key), str(token), window)
    except OTPError as e:
        logger.warning("Rejected verification request: %s", e)
        return jsonify({"key": key, "token": token, "valid": False, "error": str(e)}), 400

    logger.info("Verification %s", "succeeded" if valid else "failed")
    return jsonify({"key": key, "token": token, "valid": valid})
