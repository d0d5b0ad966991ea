"""
Security headers module.

Adds security headers to every response. The API only serves JSON,
plain text exports and uploaded images.
"""

from flask import current_app


class SecurityHeaders:
    """Security headers middleware."""

    CONTENT_SECURITY_POLICY = "default-src 'none'; img-src 'self'; frame-ancestors 'none'"

    @staticmethod
    def init_app(app):
        @app.after_request
        def add_security_headers(response):
            response.headers['Content-Security-Policy'] = SecurityHeaders.CONTENT_SECURITY_POLICY
            response.headers['X-Content-Type-Options'] = 'nosniff'
            response.headers['X-Frame-Options'] = 'DENY'
            response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

            # Only over HTTPS deployments
            if current_app.config.get('SESSION_COOKIE_SECURE', False):
                response.headers['Strict-Transport-Security'] = (
                    'max-age=31536000; includeSubDomains'
                )

            return response
