"""
Backend package: thin Flask layer exposing totp_core over HTTP.
"""

from .app import create_app

__all__ = ['create_app']
