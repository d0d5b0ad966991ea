"""
Test cases for security features and API error handling.
"""
from quizian.security import AccountLockout, RateLimiter


class TestSecurityHeaders:
    """Headers added to every response."""

    def test_headers_present(self, client):
        response = client.get('/')
        assert response.status_code == 200
        assert response.get_data(as_text=True) == 'Quizian API is running'
        assert response.headers['X-Content-Type-Options'] == 'nosniff'
        assert response.headers['X-Frame-Options'] == 'DENY'
        assert 'Content-Security-Policy' in response.headers
        assert 'Strict-Transport-Security' not in response.headers


class TestRateLimiter:
    """Sliding window rate limiter."""

    def test_allows_up_to_limit(self):
        limiter = RateLimiter()
        results = [limiter.is_allowed('ip:1', 3, 60) for _ in range(4)]
        assert results == [(True, 2), (True, 1), (True, 0), (False, 0)]

    def test_identifiers_are_independent(self):
        limiter = RateLimiter()
        limiter.is_allowed('ip:1', 1, 60)
        assert limiter.is_allowed('ip:1', 1, 60)[0] is False
        assert limiter.is_allowed('ip:2', 1, 60)[0] is True

    def test_reset(self):
        limiter = RateLimiter()
        limiter.is_allowed('ip:1', 1, 60)
        limiter.reset('ip:1')
        assert limiter.is_allowed('ip:1', 1, 60)[0] is True

    def test_login_is_rate_limited(self, client):
        for n in range(10):
            response = client.post('/api/auth/login', json={'username': f'user{n}', 'password': 'whatever1'})
            assert response.status_code == 401
            assert 'X-RateLimit-Remaining' in response.headers

        response = client.post('/api/auth/login', json={'username': 'user10', 'password': 'whatever1'})
        assert response.status_code == 429
        assert response.get_json()['success'] is False
        assert response.headers['X-RateLimit-Remaining'] == '0'


class TestAccountLockout:
    """Lockout after repeated failed logins."""

    def test_locks_at_threshold(self, app):
        lockout = AccountLockout(max_attempts=3, lockout_duration_minutes=1)
        with app.test_request_context():
            for _ in range(2):
                lockout.record_failed_attempt('alice')
            assert lockout.is_locked('alice') == (False, None)
            assert lockout.get_remaining_attempts('alice') == 1

            lockout.record_failed_attempt('alice')
            locked, until = lockout.is_locked('alice')
            assert locked is True
            assert until is not None
            assert lockout.get_remaining_attempts('alice') == 0

    def test_success_clears_failures(self, app):
        lockout = AccountLockout(max_attempts=3)
        with app.test_request_context():
            lockout.record_failed_attempt('alice')
            lockout.record_successful_attempt('alice')
            assert lockout.get_remaining_attempts('alice') == 3


class TestErrorHandlers:
    """JSON errors for API routes."""

    def test_unknown_api_route(self, client):
        response = client.get('/api/unknown')
        assert response.status_code == 404
        data = response.get_json()
        assert data['success'] is False
        assert data['path'] == '/api/unknown'

    def test_method_not_allowed(self, client):
        response = client.delete('/api/auth/me')
        assert response.status_code == 405
        assert response.get_json()['method'] == 'DELETE'

    def test_unknown_page_is_text(self, client):
        response = client.get('/nowhere')
        assert response.status_code == 404
        assert response.get_json(silent=True) is None
