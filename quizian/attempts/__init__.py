"""
Attempt history: results of finished quiz runs, stored per user.
"""
from flask import Blueprint

attempts_bp = Blueprint('attempts', __name__, url_prefix='/api/attempts')

from quizian.attempts import routes  # noqa: E402,F401
