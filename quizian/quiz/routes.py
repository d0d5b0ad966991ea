"""
Quiz routes.

Authors can:
- Create quizzes manually or from pasted text
- Preview how pasted text is parsed before saving
- Edit, delete and export their quizzes

Anyone with a share code can load a quiz to take it.
"""
from flask import Response, current_app, jsonify, request
from flask_login import current_user, login_required
from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.utils import secure_filename

from quizian import db
from quizian.quiz import quiz_bp
from quizian.quiz.models import Quiz
from quizian.quiz.parser import QuizTextTooLargeError, format_quiz_text, parse_quiz_text
from quizian.quiz.utils import (
    QUIZ_TEXT_FORMAT_EXAMPLE,
    QUIZ_TEXT_FORMAT_HELP,
    generate_share_code,
    shuffle_questions,
    validate_questions,
)
from quizian.security import SecurityLogger


MAX_TAGS = 20
SHARE_CODE_ATTEMPTS = 5


def _error(message: str, status: int):
    return jsonify({'success': False, 'error': message}), status


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _string_field(data: dict, key: str):
    """
    Read an optional string field, stripped.
    Returns (value, error_response); a missing field gives ''.
    """
    value = data.get(key)
    if value is None:
        return '', None
    if not isinstance(value, str):
        return None, _error(f'"{key}" must be a string', 400)
    return value.strip(), None


def _parse_pasted_text(text: str):
    """
    Run the bulk parser with the configured size cap.
    Returns (questions, error_response).
    """
    try:
        questions = parse_quiz_text(text, max_length=current_app.config["MAX_QUIZ_TEXT_LENGTH"])
    except QuizTextTooLargeError as e:
        current_app.logger.warning(f"Rejected pasted quiz text: {e}")
        return None, _error(str(e), 413)
    return questions, None


def _questions_from_request(data: dict):
    """
    Extract questions from a create/update body, either pasted or manual.
    Returns (questions, error_response).
    """
    if data.get('paste_mode'):
        paste_text, error = _string_field(data, 'paste_text')
        if error:
            return None, error
        if not paste_text:
            return None, _error('Quiz text is required in paste mode', 400)
        questions, error = _parse_pasted_text(paste_text)
        if error:
            return None, error
        if not questions:
            return None, _error('No valid questions found in the pasted text', 400)
    else:
        questions = data.get('questions')

    ok, message = validate_questions(questions)
    if not ok:
        return None, _error(message, 400)
    return questions, None


def _clean_tags(tags) -> list[str]:
    if not isinstance(tags, list):
        return []
    cleaned = [str(tag).strip() for tag in tags if str(tag).strip()]
    return cleaned[:MAX_TAGS]


def _new_share_code() -> str:
    length = current_app.config["SHARE_CODE_LENGTH"]
    for _ in range(SHARE_CODE_ATTEMPTS):
        code = generate_share_code(length)
        if not Quiz.query.filter_by(share_code=code).first():
            return code
    raise RuntimeError("Could not generate a unique share code")


def _get_owned_quiz(quiz_id: int):
    """
    Load a quiz the current user owns.
    Returns (quiz, error_response).
    """
    quiz = db.session.get(Quiz, quiz_id)
    if not quiz:
        return None, _error('Quiz not found', 404)
    if quiz.user_id != current_user.id:
        SecurityLogger.log_unauthorized_access(request.path, current_user.id)
        return None, _error('You do not have permission to modify this quiz', 403)
    return quiz, None


@quiz_bp.route('', methods=['GET'])
@quiz_bp.route('/', methods=['GET'])
def list_quizzes():
    """
    List public quizzes, or the caller's own with ?my=true.
    ?search= matches title or description.
    """
    search = (request.args.get('search') or '').strip()
    mine = request.args.get('my') == 'true' and current_user.is_authenticated

    try:
        query = Quiz.query
        if mine:
            query = query.filter(Quiz.user_id == current_user.id)
        else:
            query = query.filter(Quiz.is_public.is_(True))

        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Quiz.title.ilike(pattern), Quiz.description.ilike(pattern)))

        quizzes = query.order_by(Quiz.created_at.desc(), Quiz.id.desc()).all()
        return jsonify({
            'success': True,
            'quizzes': [quiz.to_dict() for quiz in quizzes]
        }), 200

    except SQLAlchemyError:
        current_app.logger.exception("Error fetching quizzes")
        return _error('Error fetching quizzes', 500)


@quiz_bp.route('', methods=['POST'])
@quiz_bp.route('/', methods=['POST'])
@login_required
def create_quiz():
    """
    Create a quiz.

    Request body:
    {
        "title": "Quiz Title",
        "description": "Optional description",
        "tags": ["math"],
        "is_public": true,
        "paste_mode": false,
        "questions": [
            {"question_text": "2 + 2?", "image_url": null,
             "answers": [{"text": "4", "is_correct": true}, {"text": "5", "is_correct": false}]}
        ]
    }

    In paste mode "paste_text" replaces "questions".
    """
    data = _json_body()

    title, error = _string_field(data, 'title')
    if error:
        return error
    if not title:
        return _error('Quiz title is required', 400)
    description, error = _string_field(data, 'description')
    if error:
        return error

    questions, error = _questions_from_request(data)
    if error:
        return error

    try:
        quiz = Quiz(
            user_id=current_user.id,
            title=title,
            description=description or None,
            share_code=_new_share_code(),
            is_public=bool(data.get('is_public', True)),
            tags=_clean_tags(data.get('tags')),
        )
        db.session.add(quiz)
        quiz.replace_questions(questions)
        db.session.commit()

        current_app.logger.info(
            f"Quiz created: id={quiz.id}, user_id={current_user.id}, questions={len(questions)}"
        )
        return jsonify({
            'success': True,
            'message': 'Quiz created successfully',
            'question_count': len(questions),
            'quiz': quiz.to_dict(),
        }), 201

    except (SQLAlchemyError, RuntimeError):
        db.session.rollback()
        current_app.logger.exception("Error creating quiz")
        return _error('Error creating quiz', 500)


@quiz_bp.route('/parse', methods=['POST'])
@login_required
def preview_parse():
    """Parse pasted text without saving so the author can check the question count."""
    paste_text, error = _string_field(_json_body(), 'paste_text')
    if error:
        return error
    questions, error = _parse_pasted_text(paste_text)
    if error:
        return error

    ok, message = validate_questions(questions)
    return jsonify({
        'success': True,
        'question_count': len(questions),
        'questions': questions,
        'is_valid': ok,
        'validation_error': message,
    }), 200


@quiz_bp.route('/format', methods=['GET'])
def quiz_text_format():
    """Help text and example for the bulk paste format."""
    return jsonify({
        'success': True,
        'help': QUIZ_TEXT_FORMAT_HELP,
        'example': QUIZ_TEXT_FORMAT_EXAMPLE,
    }), 200


@quiz_bp.route('/<int:quiz_id>', methods=['GET'])
@login_required
def get_quiz(quiz_id):
    """Full quiz, with answers, for its author to edit."""
    quiz, error = _get_owned_quiz(quiz_id)
    if error:
        return error
    return jsonify({'success': True, 'quiz': quiz.to_dict(include_questions=True)}), 200


@quiz_bp.route('/<int:quiz_id>', methods=['PUT', 'PATCH'])
@login_required
def update_quiz(quiz_id):
    """
    Update quiz details. Questions are replaced only when the body
    carries "questions" or paste mode.
    """
    quiz, error = _get_owned_quiz(quiz_id)
    if error:
        return error

    data = _json_body()

    title, error = _string_field(data, 'title')
    if error:
        return error
    description, error = _string_field(data, 'description')
    if error:
        return error

    if 'title' in data:
        if not title:
            return _error('Quiz title is required', 400)
        quiz.title = title
    if 'description' in data:
        quiz.description = description or None
    if 'is_public' in data:
        quiz.is_public = bool(data['is_public'])
    if 'tags' in data:
        quiz.tags = _clean_tags(data['tags'])

    try:
        if data.get('paste_mode') or 'questions' in data:
            questions, error = _questions_from_request(data)
            if error:
                db.session.rollback()
                return error
            quiz.replace_questions(questions)

        db.session.commit()
        current_app.logger.info(f"Quiz updated: id={quiz.id}, user_id={current_user.id}")
        return jsonify({
            'success': True,
            'message': 'Quiz updated successfully',
            'quiz': quiz.to_dict(include_questions=True),
        }), 200

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"Error updating quiz {quiz_id}")
        return _error('Error updating quiz', 500)


@quiz_bp.route('/<int:quiz_id>', methods=['DELETE'])
@login_required
def delete_quiz(quiz_id):
    quiz, error = _get_owned_quiz(quiz_id)
    if error:
        return error

    try:
        db.session.delete(quiz)
        db.session.commit()
        current_app.logger.info(f"Quiz deleted: id={quiz_id}, user_id={current_user.id}")
        return jsonify({'success': True, 'message': 'Quiz deleted successfully'}), 200

    except SQLAlchemyError:
        db.session.rollback()
        current_app.logger.exception(f"Error deleting quiz {quiz_id}")
        return _error('Error deleting quiz', 500)


@quiz_bp.route('/share/<code>', methods=['GET'])
def get_shared_quiz(code):
    """
    Load a quiz by share code for taking it.
    ?shuffle_questions=true and ?shuffle_answers=true shuffle the copy returned.
    """
    quiz = Quiz.query.filter_by(share_code=code).first()
    if not quiz:
        return _error('Quiz not found', 404)

    data = quiz.to_dict(include_questions=True)
    data['questions'] = shuffle_questions(
        data['questions'],
        reorder_questions=request.args.get('shuffle_questions') == 'true',
        reorder_answers=request.args.get('shuffle_answers') == 'true',
    )
    return jsonify({'success': True, 'quiz': data}), 200


@quiz_bp.route('/<int:quiz_id>/export', methods=['GET'])
def export_quiz(quiz_id):
    """Download a quiz as text in the bulk paste format."""
    quiz = db.session.get(Quiz, quiz_id)
    if not quiz:
        return _error('Quiz not found', 404)

    is_owner = current_user.is_authenticated and quiz.user_id == current_user.id
    if not quiz.is_public and not is_owner:
        SecurityLogger.log_unauthorized_access(request.path, getattr(current_user, 'id', None))
        return _error('Quiz not found', 404)

    body = format_quiz_text([question.to_dict() for question in quiz.questions.all()])
    filename = f"{secure_filename(quiz.title) or f'quiz-{quiz.id}'}.txt"
    return Response(
        body,
        mimetype='text/plain',
        headers={'Content-Disposition': f'attachment; filename="{filename}"'},
    )
