import os

from flask import current_app, jsonify, request, send_file
from flask_login import current_user, login_required

from quizian.common.file_utils import get_file_url, resolve_upload_path, save_uploaded_image
from quizian.security import rate_limit
from quizian.uploads import upload_bp


@upload_bp.route('/api/upload', methods=['POST'])
@login_required
@rate_limit(max_requests=30, window_seconds=60, per='user')
def upload_image():
    """Store an image sent as multipart field "image" and return its URL."""
    file = request.files.get('image')
    if not file or not file.filename:
        return jsonify({'success': False, 'error': 'No file uploaded'}), 400

    try:
        relative_path = save_uploaded_image(file)
    except ValueError as e:
        return jsonify({'success': False, 'error': str(e)}), 400
    except OSError:
        current_app.logger.exception("Error saving uploaded image")
        return jsonify({'success': False, 'error': 'Error uploading file'}), 500

    current_app.logger.info(f"Image uploaded by user {current_user.id}: {relative_path}")
    return jsonify({'success': True, 'url': get_file_url(relative_path)}), 201


@upload_bp.route('/uploads/<path:file_path>', methods=['GET'])
def serve_upload(file_path):
    """Serve uploaded images; paths outside UPLOAD_DIR are refused."""
    full_path = resolve_upload_path(file_path)
    if full_path is None:
        current_app.logger.warning(f"Directory traversal attempt: {file_path}")
        return "Forbidden", 403

    if not os.path.isfile(full_path):
        return "File not found", 404

    response = send_file(full_path, conditional=True)
    response.cache_control.max_age = 86400
    response.cache_control.public = True
    return response
