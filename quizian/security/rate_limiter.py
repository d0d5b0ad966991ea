"""
Rate limiting module to slow down brute force attempts.

Request timestamps are kept in memory per client IP address or user.
"""

from functools import wraps
from flask import request, jsonify, current_app, make_response
from collections import defaultdict
import threading
import time


class RateLimiter:
    """
    Rate limiter that tracks requests per IP address or user.

    Uses a sliding window algorithm to track requests within a time period.
    """

    def __init__(self):
        self._storage = defaultdict(list)
        self._lock = threading.Lock()
        self._cleanup_interval = 3600
        self._last_cleanup = time.time()

    def _cleanup_old_entries(self):
        """Remove identifiers with no request in the last hour."""
        current_time = time.time()
        if current_time - self._last_cleanup < self._cleanup_interval:
            return

        with self._lock:
            cutoff = current_time - 3600
            for key in list(self._storage):
                self._storage[key] = [ts for ts in self._storage[key] if ts > cutoff]
                if not self._storage[key]:
                    del self._storage[key]
            self._last_cleanup = current_time

    def is_allowed(self, identifier: str, max_requests: int, window_seconds: int) -> tuple[bool, int]:
        """
        Check if a request is allowed based on rate limit.

        Args:
            identifier: Unique identifier (IP address or user ID)
            max_requests: Maximum number of requests allowed
            window_seconds: Time window in seconds

        Returns:
            Tuple of (is_allowed, remaining_requests)
        """
        self._cleanup_old_entries()

        current_time = time.time()
        cutoff = current_time - window_seconds

        with self._lock:
            timestamps = self._storage[identifier]
            timestamps[:] = [ts for ts in timestamps if ts > cutoff]

            if len(timestamps) >= max_requests:
                return False, 0

            timestamps.append(current_time)
            return True, max_requests - len(timestamps)

    def reset(self, identifier: str = None):
        """Reset one identifier, or everything when no identifier is given."""
        with self._lock:
            if identifier is None:
                self._storage.clear()
            else:
                self._storage.pop(identifier, None)


# Global rate limiter instance
_rate_limiter = RateLimiter()


def get_rate_limiter() -> RateLimiter:
    """Get the global rate limiter instance."""
    return _rate_limiter


def _client_identifier(per: str) -> str:
    if per == 'user':
        from flask_login import current_user
        if current_user.is_authenticated:
            return f"user:{current_user.id}"
    ip = request.remote_addr or request.environ.get('REMOTE_ADDR', 'unknown')
    return f"ip:{ip}"


def rate_limit(max_requests: int = 10, window_seconds: int = 60, per: str = 'ip',
               error_message: str = "Rate limit exceeded. Please try again later."):
    """
    Decorator to rate limit a route.

    Limits are tracked per view function, so two decorated routes never
    share a budget.

    Example:
        @auth_bp.route('/login', methods=['POST'])
        @rate_limit(max_requests=5, window_seconds=60)
        def login():
            ...
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            identifier = f"{f.__name__}:{_client_identifier(per)}"
            is_allowed, remaining = _rate_limiter.is_allowed(
                identifier, max_requests, window_seconds
            )
            reset_at = str(int(time.time()) + window_seconds)

            if not is_allowed:
                from quizian.security.security_logger import SecurityLogger
                SecurityLogger.log_rate_limit_exceeded(identifier, request.path)
                response = make_response(jsonify({
                    'success': False,
                    'error': error_message,
                    'retry_after': window_seconds
                }), 429)
                response.headers['X-RateLimit-Limit'] = str(max_requests)
                response.headers['X-RateLimit-Remaining'] = '0'
                response.headers['X-RateLimit-Reset'] = reset_at
                return response

            response = make_response(f(*args, **kwargs))
            response.headers['X-RateLimit-Limit'] = str(max_requests)
            response.headers['X-RateLimit-Remaining'] = str(remaining)
            response.headers['X-RateLimit-Reset'] = reset_at
            return response

        return decorated_function
    return decorator
