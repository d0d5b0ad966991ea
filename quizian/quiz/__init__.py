"""
Quiz module for authoring, sharing and taking quizzes.

Quizzes are written question by question or pasted as bulk text
(see quizian.quiz.parser) and shared through short codes.
"""
from flask import Blueprint

quiz_bp = Blueprint('quiz', __name__, url_prefix='/api/quizzes')

from quizian.quiz import routes  # noqa: E402,F401
