"""
Security module for the application.

This module provides:
- Rate limiting
- Account lockout after failed logins
- Security headers
- Security logging
"""

from .rate_limiter import RateLimiter, rate_limit, get_rate_limiter
from .security_headers import SecurityHeaders
from .account_lockout import AccountLockout, get_account_lockout
from .security_logger import SecurityLogger
from .security_init import init_security

__all__ = [
    'RateLimiter',
    'rate_limit',
    'get_rate_limiter',
    'SecurityHeaders',
    'AccountLockout',
    'get_account_lockout',
    'SecurityLogger',
    'init_security',
]
