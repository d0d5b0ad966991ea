"""
Configuration module for the application.
All configuration values are read from environment variables,
usually loaded from a .env file by python-dotenv.
"""
import os
import secrets
import warnings


def _env_bool(name: str, default: str = "") -> bool:
    return os.getenv(name, default).lower() == "true"


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "")
    return int(value) if value else default


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Flask Configuration
        self.SECRET_KEY: str = os.getenv("SECRET_KEY", "")
        self.FLASK_ENV: str = os.getenv("FLASK_ENV", "")
        self.FLASK_DEBUG: bool = _env_bool("FLASK_DEBUG")

        # Generate a development SECRET_KEY if not set and in development mode
        if not self.SECRET_KEY and self.FLASK_ENV != "production":
            self.SECRET_KEY = secrets.token_urlsafe(32)
            warnings.warn(
                "SECRET_KEY not set. Generated a temporary key for development. "
                "Set SECRET_KEY in your .env file for production!",
                UserWarning
            )

        # Database Configuration
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "")
        self.DB_USER: str = os.getenv("DB_USER", "")
        self.DB_PASSWORD: str = os.getenv("DB_PASSWORD", "")
        self.DB_HOST: str = os.getenv("DB_HOST", "localhost")
        self.DB_PORT: str = os.getenv("DB_PORT", "3306")
        self.DB_NAME: str = os.getenv("DB_NAME", "quizian")

        # Session Configuration
        self.SESSION_COOKIE_SECURE: bool = _env_bool("SESSION_COOKIE_SECURE")
        self.SESSION_COOKIE_HTTPONLY: bool = _env_bool("SESSION_COOKIE_HTTPONLY", "true")
        self.SESSION_COOKIE_SAMESITE: str = os.getenv("SESSION_COOKIE_SAMESITE", "Lax")

        # SQLAlchemy Configuration
        self.SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
        self.SQLALCHEMY_ECHO: bool = _env_bool("SQLALCHEMY_ECHO")

        # Password Validation
        self.MIN_PASSWORD_LENGTH: int = _env_int("MIN_PASSWORD_LENGTH", 6)

        # Login protection
        self.LOGIN_MAX_ATTEMPTS: int = _env_int("LOGIN_MAX_ATTEMPTS", 5)
        self.LOGIN_LOCKOUT_MINUTES: int = _env_int("LOGIN_LOCKOUT_MINUTES", 30)

        # Quiz Configuration
        self.MAX_QUIZ_TEXT_LENGTH: int = _env_int("MAX_QUIZ_TEXT_LENGTH", 100_000)
        self.SHARE_CODE_LENGTH: int = _env_int("SHARE_CODE_LENGTH", 10)
        self.ATTEMPT_HISTORY_LIMIT: int = _env_int("ATTEMPT_HISTORY_LIMIT", 50)

        # Image Upload Configuration
        self.UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", os.path.join(os.getcwd(), "uploads"))
        self.MAX_IMAGE_SIZE: int = _env_int("MAX_IMAGE_SIZE", 5 * 1024 * 1024)
        allowed_exts_str = os.getenv("ALLOWED_IMAGE_EXTENSIONS", "jpeg,jpg,png,gif,webp")
        self.ALLOWED_IMAGE_EXTENSIONS: set = set(ext.strip().lower() for ext in allowed_exts_str.split(","))

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """DATABASE_URL wins; otherwise build a MySQL URI from the DB_* variables."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"

    def validate(self) -> None:
        """
        Validate required configuration values.
        Only enforces SECRET_KEY in production environment.
        """
        if not self.SECRET_KEY and self.FLASK_ENV == "production":
            raise ValueError(
                "SECRET_KEY environment variable is required in production. "
                "Set it in your .env file or environment variables."
            )
        if self.MAX_QUIZ_TEXT_LENGTH <= 0:
            raise ValueError("MAX_QUIZ_TEXT_LENGTH must be a positive integer")
        if self.SHARE_CODE_LENGTH < 4:
            raise ValueError("SHARE_CODE_LENGTH must be at least 4")

