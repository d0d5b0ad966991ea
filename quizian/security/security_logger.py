"""
Security logging module.

Writes login, lockout, rate limit and access events to the app logger.
"""

from flask import request, current_app
from datetime import datetime


class SecurityLogger:
    """
    Security event logger.

    Logs security-related events for monitoring and auditing.
    """

    @staticmethod
    def log_failed_login(username: str, reason: str = "Invalid credentials"):
        current_app.logger.warning(
            f"SECURITY: Failed login attempt - Username: {username}, "
            f"IP: {request.remote_addr}, Reason: {reason}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_successful_login(user_id: int, username: str):
        current_app.logger.info(
            f"SECURITY: Successful login - User ID: {user_id}, "
            f"Username: {username}, IP: {request.remote_addr}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_account_locked(identifier: str, reason: str = "Too many failed attempts"):
        current_app.logger.warning(
            f"SECURITY: Account locked - Identifier: {identifier}, "
            f"IP: {request.remote_addr}, Reason: {reason}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_rate_limit_exceeded(identifier: str, endpoint: str):
        current_app.logger.warning(
            f"SECURITY: Rate limit exceeded - Identifier: {identifier}, "
            f"Endpoint: {endpoint}, IP: {request.remote_addr}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )

    @staticmethod
    def log_unauthorized_access(resource: str, user_id: int = None):
        """
        Log unauthorized access attempt.

        Args:
            resource: Resource that was accessed
            user_id: User ID if authenticated
        """
        user_info = f"User ID: {user_id}" if user_id else "Unauthenticated"
        current_app.logger.warning(
            f"SECURITY: Unauthorized access - {user_info}, "
            f"Resource: {resource}, IP: {request.remote_addr}, "
            f"Time: {datetime.utcnow().isoformat()}"
        )
