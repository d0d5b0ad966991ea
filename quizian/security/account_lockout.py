"""
Account lockout module.

Locks a username after repeated failed logins.
"""

from datetime import datetime, timedelta
from collections import defaultdict
import threading
from flask import current_app


class AccountLockout:
    """
    Account lockout manager.

    Tracks failed login attempts and locks accounts after threshold.
    """

    def __init__(self, max_attempts: int = 5, lockout_duration_minutes: int = 30):
        self.max_attempts = max_attempts
        self.lockout_duration = timedelta(minutes=lockout_duration_minutes)
        self._failed_attempts = defaultdict(int)  # identifier -> count
        self._lockout_until = {}  # identifier -> datetime
        self._lock = threading.Lock()

    def configure(self, max_attempts: int, lockout_duration_minutes: int):
        with self._lock:
            self.max_attempts = max_attempts
            self.lockout_duration = timedelta(minutes=lockout_duration_minutes)

    def record_failed_attempt(self, identifier: str):
        """Record a failed login attempt, locking the identifier at the threshold."""
        with self._lock:
            current_time = datetime.utcnow()

            if identifier in self._lockout_until and current_time > self._lockout_until[identifier]:
                del self._lockout_until[identifier]
                self._failed_attempts[identifier] = 0

            self._failed_attempts[identifier] += 1
            current_attempts = self._failed_attempts[identifier]
            current_app.logger.warning(
                f"Failed login attempt {current_attempts}/{self.max_attempts} for: {identifier}"
            )

            if current_attempts >= self.max_attempts:
                self._lockout_until[identifier] = current_time + self.lockout_duration
                from quizian.security.security_logger import SecurityLogger
                SecurityLogger.log_account_locked(identifier)

    def record_successful_attempt(self, identifier: str):
        """Record a successful login attempt and reset counter."""
        self.reset(identifier)

    def is_locked(self, identifier: str) -> tuple[bool, datetime | None]:
        """
        Check if account is currently locked.

        Returns:
            Tuple of (is_locked, lockout_until_datetime)
        """
        with self._lock:
            if identifier not in self._lockout_until:
                return False, None

            lockout_until = self._lockout_until[identifier]
            if datetime.utcnow() > lockout_until:
                current_app.logger.info(f"Account lockout expired for: {identifier}")
                del self._lockout_until[identifier]
                self._failed_attempts[identifier] = 0
                return False, None

            return True, lockout_until

    def get_remaining_attempts(self, identifier: str) -> int:
        """Get remaining login attempts before lockout."""
        with self._lock:
            attempts = self._failed_attempts.get(identifier, 0)
            return max(0, self.max_attempts - attempts)

    def reset(self, identifier: str = None):
        """Reset one identifier, or every identifier when none is given."""
        with self._lock:
            if identifier is None:
                self._failed_attempts.clear()
                self._lockout_until.clear()
                return
            self._failed_attempts.pop(identifier, None)
            self._lockout_until.pop(identifier, None)


# Global account lockout instance
_account_lockout = AccountLockout()


def get_account_lockout() -> AccountLockout:
    """Get the global account lockout instance."""
    return _account_lockout
