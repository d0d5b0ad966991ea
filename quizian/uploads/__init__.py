"""
Question image uploads, stored on local disk under UPLOAD_DIR.
"""
from flask import Blueprint

upload_bp = Blueprint('uploads', __name__)

from quizian.uploads import routes  # noqa: E402,F401
