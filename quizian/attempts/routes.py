"""
Attempt routes.

Users can:
- Save the result of a finished quiz
- List their most recent attempts
"""
from flask import current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError

from quizian import db
from quizian.attempts import attempts_bp
from quizian.attempts.models import QuizAttempt
from quizian.quiz.models import Quiz


@attempts_bp.route('', methods=['GET'])
@attempts_bp.route('/', methods=['GET'])
@login_required
def list_attempts():
    """Most recent attempts of the current user, newest first."""
    limit = current_app.config["ATTEMPT_HISTORY_LIMIT"]
    try:
        attempts = (
            QuizAttempt.query
            .filter_by(user_id=current_user.id)
            .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
            .limit(limit)
            .all()
        )
        return jsonify({
            'success': True,
            'attempts': [attempt.to_dict() for attempt in attempts]
        }), 200

    except SQLAlchemyError:
        current_app.logger.exception("Error fetching attempts")
        return jsonify({'success': False, 'error': 'Error fetching attempts'}), 500


@attempts_bp.route('', methods=['POST'])
@attempts_bp.route('/', methods=['POST'])
@login_required
def create_attempt():
    """
    Save a finished attempt.

    Request body:
    {
        "quiz_id": 1,
        "score": 3,
        "total_questions": 4,
        "question_results": [{"question_index": 0, "user_answer": 1, "correct_answer": 1, "is_correct": true}],
        "shuffle_questions": false,
        "shuffle_answers": true
    }
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return jsonify({'success': False, 'error': 'Request body must be a JSON object'}), 400

    try:
        quiz_id = int(data.get('quiz_id'))
        score = int(data.get('score', 0))
        total_questions = int(data.get('total_questions', 0))
    except (ValueError, TypeError):
        return jsonify({'success': False, 'error': 'quiz_id, score and total_questions must be integers'}), 400

    if total_questions < 0 or score < 0 or score > total_questions:
        return jsonify({'success': False, 'error': 'Score must be between 0 and total_questions'}), 400

    question_results = data.get('question_results') or []
    if not isinstance(question_results, list):
        return jsonify({'success': False, 'error': 'question_results must be a list'}), 400

    try:
        quiz = db.session.get(Quiz, quiz_id)
        if not quiz:
            return jsonify({'success': False, 'error': 'Quiz not found'}), 404

        attempt = QuizAttempt(
            user_id=current_user.id,
            quiz_id=quiz.id,
            quiz_title=quiz.title,
            score=score,
            total_questions=total_questions,
            question_results=question_results,
            shuffle_questions=bool(data.get('shuffle_questions')),
            shuffle_answers=bool(data.get('shuffle_answers')),
        )
        db.session.add(attempt)
        db.session.commit()

        return jsonify({'success': True, 'attempt': attempt.to_dict()}), 201

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception("Error saving attempt")
        return jsonify({'success': False, 'error': 'Error saving attempt'}), 500
