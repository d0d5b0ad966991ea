"""
Pytest configuration and fixtures for testing.
Each test gets a fresh application backed by in-memory SQLite.
"""
import os

import pytest

# Set test environment variables BEFORE importing the app package
os.environ['FLASK_ENV'] = 'testing'
os.environ['SECRET_KEY'] = 'sfndsfojoriwew09rjfjndsknfkj'
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['MIN_PASSWORD_LENGTH'] = '6'
os.environ['LOGIN_MAX_ATTEMPTS'] = '5'

from quizian import create_app, db  # noqa: E402
from quizian.security import get_account_lockout, get_rate_limiter  # noqa: E402


SAMPLE_QUIZ_TEXT = """1. What is 1+1?
*2
3
4

2. What is 2+2?
3
*4
5
"""


@pytest.fixture
def app(tmp_path):
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'UPLOAD_DIR': str(tmp_path / 'uploads'),
    })

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture(autouse=True)
def reset_security_state():
    """Rate limits and lockouts are process-wide; start every test clean."""
    get_rate_limiter().reset()
    get_account_lockout().reset()
    yield
    get_rate_limiter().reset()
    get_account_lockout().reset()


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


def register(client, username='alice', password='secret123', full_name='Alice Nguyen'):
    return client.post('/api/auth/register', json={
        'username': username,
        'password': password,
        'full_name': full_name,
    })


@pytest.fixture
def auth_client(app):
    """A test client logged in as 'alice'."""
    client = app.test_client()
    response = register(client)
    assert response.status_code == 201
    return client


@pytest.fixture
def other_client(app):
    """A second, independent client logged in as 'bob'."""
    client = app.test_client()
    response = register(client, username='bob', full_name='Bob Tran')
    assert response.status_code == 201
    return client


def manual_questions():
    return [
        {
            'question_text': 'Capital of France?',
            'answers': [
                {'text': 'Paris', 'is_correct': True},
                {'text': 'Rome', 'is_correct': False},
            ],
        },
        {
            'question_text': '2 + 2?',
            'answers': [
                {'text': '3', 'is_correct': False},
                {'text': '4', 'is_correct': True},
                {'text': '5', 'is_correct': False},
            ],
        },
    ]


@pytest.fixture
def created_quiz(auth_client):
    """A public quiz owned by 'alice', created from pasted text."""
    response = auth_client.post('/api/quizzes', json={
        'title': 'Arithmetic',
        'description': 'Simple sums',
        'tags': ['math'],
        'paste_mode': True,
        'paste_text': SAMPLE_QUIZ_TEXT,
    })
    assert response.status_code == 201
    return response.get_json()['quiz']
