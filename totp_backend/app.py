"""
FLASK APP ENTRY POINT - OTP BACKEND SERVER

Builds the Flask app, enables CORS and registers the OTP blueprint.

Run:
    python -m totp_backend.app
    TOTP_PORT=8080 TOTP_VERIFY_WINDOW=1 python -m totp_backend.app
"""

import logging

from flask import Flask, jsonify
from flask_cors import CORS

from totp_core import __version__, config
from totp_backend.routes import otp_bp

logger = logging.getLogger(__name__)


def create_app(overrides=None) -> Flask:
    """
    App factory.

    Arguments:
        overrides: optional dict merged into app.config (tests use it to set
            TESTING / VERIFY_WINDOW)
    """
    app = Flask(__name__)
    app.config["VERIFY_WINDOW"] = config.VERIFY_WINDOW
    if overrides:
        app.config.update(overrides)

    # any origin may call the API
    CORS(app)

    app.register_blueprint(otp_bp)

    @app.route('/', methods=['GET'])
    def index():
        return jsonify({
            "service": "totp",
            "version": __version__,
            "endpoints": {
                "/register": "GET|POST app, user -> new secret, otpauth URI, QR URL",
                "/verify": "GET|POST key, token -> valid",
            },
        })

    logger.info("OTP backend ready (verify window=%d)", app.config["VERIFY_WINDOW"])
    return app


def main():
    config.configure_logging(config.LOG_LEVEL)
    app = create_app()
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == '__main__':
    main()
