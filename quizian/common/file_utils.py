"""File upload utilities for question images."""
import os
import uuid
from werkzeug.utils import secure_filename
from flask import current_app


IMAGE_MIME_PREFIX = "image/"


def get_file_extension(filename: str) -> str:
    """Get file extension from filename."""
    if '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[1].lower()


def allowed_image(filename: str, mimetype: str | None = None) -> bool:
    """Check the extension against ALLOWED_IMAGE_EXTENSIONS and, when given, the MIME type."""
    ext = get_file_extension(filename)
    if ext not in current_app.config["ALLOWED_IMAGE_EXTENSIONS"]:
        return False
    if mimetype and not mimetype.startswith(IMAGE_MIME_PREFIX):
        return False
    return True


def generate_unique_filename(original_filename: str) -> str:
    """Generate a unique filename for an uploaded image."""
    ext = get_file_extension(original_filename)
    unique_id = uuid.uuid4().hex[:12]
    secure_name = secure_filename(original_filename.rsplit('.', 1)[0]) or "image"
    return f"{secure_name}_{unique_id}.{ext}"


def get_upload_path(filename: str) -> tuple:
    """
    Get the full upload path and relative path for an image.
    Returns: (full_path, relative_path)
    """
    images_dir = os.path.join(current_app.config["UPLOAD_DIR"], "images")
    os.makedirs(images_dir, exist_ok=True)

    full_path = os.path.join(images_dir, filename)
    # Relative path for URLs (relative to the uploads directory)
    relative_path = f"images/{filename}"
    return full_path, relative_path


def get_file_size(file) -> int:
    file.seek(0, os.SEEK_END)
    file_size = file.tell()
    file.seek(0)
    return file_size


def save_uploaded_image(file) -> str:
    """
    Save an uploaded image and return its path relative to UPLOAD_DIR.

    Raises:
        ValueError: If the file is missing, not an allowed image or too large
        OSError: If the file cannot be written
    """
    if not file or not file.filename:
        raise ValueError("No file uploaded")

    if not allowed_image(file.filename, file.mimetype):
        allowed = ", ".join(sorted(current_app.config["ALLOWED_IMAGE_EXTENSIONS"]))
        raise ValueError(f"Only images are allowed ({allowed})")

    max_size = current_app.config["MAX_IMAGE_SIZE"]
    if get_file_size(file) > max_size:
        raise ValueError(f"Image is larger than {max_size // (1024 * 1024)}MB")

    full_path, relative_path = get_upload_path(generate_unique_filename(file.filename))
    file.save(full_path)
    return relative_path


def resolve_upload_path(file_path: str) -> str | None:
    """Map a relative upload path to a file on disk, or None if it escapes UPLOAD_DIR."""
    upload_dir = os.path.realpath(current_app.config["UPLOAD_DIR"])
    full_path = os.path.realpath(os.path.join(upload_dir, file_path.replace("\\", "/")))
    if os.path.commonpath([upload_dir, full_path]) != upload_dir:
        return None
    return full_path


def get_file_url(file_path: str) -> str:
    """Get URL for accessing a file."""
    return f"/uploads/{file_path}"
