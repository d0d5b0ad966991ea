"""
Test cases for question image uploads.
"""
import io

from quizian.common.file_utils import get_file_extension, resolve_upload_path

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 64


def upload(client, data=PNG_BYTES, filename='pic.png'):
    return client.post(
        '/api/upload',
        data={'image': (io.BytesIO(data), filename)},
        content_type='multipart/form-data',
    )


class TestUploadImage:
    """Uploading and serving images."""

    def test_upload_and_serve(self, auth_client, client):
        response = upload(auth_client)
        assert response.status_code == 201
        url = response.get_json()['url']
        assert url.startswith('/uploads/images/pic_')
        assert url.endswith('.png')

        served = client.get(url)
        assert served.status_code == 200
        assert served.data == PNG_BYTES

    def test_requires_login(self, client):
        assert upload(client).status_code == 401

    def test_rejects_non_image(self, auth_client):
        response = upload(auth_client, data=b'hello', filename='notes.txt')
        assert response.status_code == 400
        assert 'Only images' in response.get_json()['error']

    def test_rejects_missing_file(self, auth_client):
        response = auth_client.post('/api/upload', data={}, content_type='multipart/form-data')
        assert response.status_code == 400

    def test_rejects_large_image(self, app, auth_client):
        app.config['MAX_IMAGE_SIZE'] = 16
        assert upload(auth_client).status_code == 400

    def test_missing_upload(self, client):
        assert client.get('/uploads/images/nothing.png').status_code == 404


class TestUploadPaths:
    """Path helpers used when serving uploads."""

    def test_resolve_inside_upload_dir(self, app):
        with app.app_context():
            assert resolve_upload_path('images/a.png').endswith('images/a.png')

    def test_resolve_rejects_traversal(self, app):
        with app.app_context():
            assert resolve_upload_path('../secret.txt') is None
            assert resolve_upload_path('images/../../secret.txt') is None

    def test_file_extension(self):
        assert get_file_extension('photo.JPG') == 'jpg'
        assert get_file_extension('archive.tar.gz') == 'gz'
        assert get_file_extension('README') == ''
