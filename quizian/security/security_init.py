"""
Security initialization module.
"""

from flask import Flask
from .security_headers import SecurityHeaders
from .account_lockout import get_account_lockout


def init_security(app: Flask):
    """
    Initialize all security features for the Flask app.

    Args:
        app: Flask application instance
    """
    SecurityHeaders.init_app(app)

    get_account_lockout().configure(
        max_attempts=app.config.get("LOGIN_MAX_ATTEMPTS", 5),
        lockout_duration_minutes=app.config.get("LOGIN_LOCKOUT_MINUTES", 30),
    )

    app.logger.info("Security features initialized")
