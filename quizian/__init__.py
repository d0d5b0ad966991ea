from flask import Flask, jsonify, request, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from dotenv import load_dotenv
from flask_migrate import Migrate
from flask_compress import Compress

# Load environment variables early so config is available for blueprint creation
load_dotenv()

db = SQLAlchemy()
migrate = Migrate()
login_manager = LoginManager()
compress = Compress()


def _engine_options(db_uri: str) -> dict:
    """Connection pool settings; only the MySQL driver understands these."""
    if not db_uri.startswith("mysql"):
        return {}
    return {
        "pool_size": 10,
        "pool_recycle": 3600,
        "pool_pre_ping": True,
        "max_overflow": 20,
        "connect_args": {
            "connect_timeout": 5,
            "charset": "utf8mb4",
        },
    }


def create_app(overrides: dict | None = None) -> Flask:
    """
    Application factory for the Flask app.
    Loads environment variables, configures the database,
    and registers blueprints.

    Args:
        overrides: Optional Flask config values applied last (used by tests)
    """
    # Built here so values loaded by load_dotenv() are picked up
    from quizian.config import Config
    config = Config()
    config.validate()

    app = Flask(__name__)

    app.config["SECRET_KEY"] = config.SECRET_KEY
    db_uri = config.SQLALCHEMY_DATABASE_URI
    if db_uri.startswith("mysql") and "?" not in db_uri:
        db_uri += "?charset=utf8mb4"
    app.config["SQLALCHEMY_DATABASE_URI"] = db_uri
    app.config["SQLALCHEMY_TRACK_MODIFICATIONS"] = config.SQLALCHEMY_TRACK_MODIFICATIONS
    app.config["SQLALCHEMY_ECHO"] = config.SQLALCHEMY_ECHO
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = _engine_options(db_uri)

    app.config["COMPRESS_MIMETYPES"] = ["application/json", "text/plain"]
    app.config["COMPRESS_LEVEL"] = 6
    app.config["COMPRESS_MIN_SIZE"] = 500
    app.config["SESSION_COOKIE_SECURE"] = config.SESSION_COOKIE_SECURE
    app.config["SESSION_COOKIE_HTTPONLY"] = config.SESSION_COOKIE_HTTPONLY
    app.config["SESSION_COOKIE_SAMESITE"] = config.SESSION_COOKIE_SAMESITE

    # Domain settings read by the blueprints through current_app.config
    app.config["MIN_PASSWORD_LENGTH"] = config.MIN_PASSWORD_LENGTH
    app.config["LOGIN_MAX_ATTEMPTS"] = config.LOGIN_MAX_ATTEMPTS
    app.config["LOGIN_LOCKOUT_MINUTES"] = config.LOGIN_LOCKOUT_MINUTES
    app.config["MAX_QUIZ_TEXT_LENGTH"] = config.MAX_QUIZ_TEXT_LENGTH
    app.config["SHARE_CODE_LENGTH"] = config.SHARE_CODE_LENGTH
    app.config["ATTEMPT_HISTORY_LIMIT"] = config.ATTEMPT_HISTORY_LIMIT
    app.config["UPLOAD_DIR"] = config.UPLOAD_DIR
    app.config["MAX_IMAGE_SIZE"] = config.MAX_IMAGE_SIZE
    app.config["ALLOWED_IMAGE_EXTENSIONS"] = config.ALLOWED_IMAGE_EXTENSIONS
    # Request bodies carry pasted text or one image; leave headroom for multipart framing
    app.config["MAX_CONTENT_LENGTH"] = config.MAX_IMAGE_SIZE + 1024 * 1024

    if overrides:
        app.config.update(overrides)

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    compress.init_app(app)

    # Initialize security features
    from quizian.security import init_security
    init_security(app)

    @login_manager.user_loader
    def load_user(user_id):
        from quizian.auth.models import User
        try:
            return db.session.get(User, int(user_id))
        except (ValueError, TypeError):
            return None

    @login_manager.unauthorized_handler
    def unauthorized():
        from quizian.security import SecurityLogger
        SecurityLogger.log_unauthorized_access(request.path)
        return jsonify({"success": False, "error": "Authentication required"}), 401

    @app.route("/")
    def index():
        return "Quizian API is running", 200

    # Register blueprints
    from quizian.auth import auth_bp
    app.register_blueprint(auth_bp)

    from quizian.quiz import quiz_bp
    app.register_blueprint(quiz_bp)

    from quizian.attempts import attempts_bp
    app.register_blueprint(attempts_bp)

    from quizian.uploads import upload_bp
    app.register_blueprint(upload_bp)

    @app.errorhandler(404)
    def handle_404(e):
        """Handle 404 errors - return JSON for API routes, text for others."""
        path = request.path
        method = request.method
        current_app.logger.warning(f"404 error: {method} {path}")
        if path.startswith("/api/"):
            return jsonify({
                "success": False,
                "error": f"Route not found: {method} {path}",
                "path": path,
                "method": method
            }), 404
        return f"Page not found: {path}", 404

    @app.errorhandler(405)
    def handle_405(e):
        """Handle 405 Method Not Allowed - return JSON for API routes."""
        path = request.path
        method = request.method
        current_app.logger.warning(f"405 error: {method} {path}")
        if path.startswith("/api/"):
            return jsonify({
                "success": False,
                "error": f"Method not allowed: {method} {path}",
                "path": path,
                "method": method
            }), 405
        return e

    @app.errorhandler(413)
    def handle_413(e):
        return jsonify({"success": False, "error": "Request body too large"}), 413

    # Create tables if they do not exist
    with app.app_context():
        from quizian.auth.models import User  # noqa: F401
        from quizian.quiz.models import Quiz, Question, Answer  # noqa: F401
        from quizian.attempts.models import QuizAttempt  # noqa: F401
        db.create_all()

    return app
