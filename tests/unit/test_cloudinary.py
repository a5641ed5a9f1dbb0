"""Tests for the Cloudinary client with a mocked HTTP session."""

import hashlib
from unittest.mock import MagicMock

import pytest
import requests

from eimusic.config.settings import MediaConfig
from eimusic.domain.errors import MediaUploadError
from eimusic.infrastructure.media.cloudinary import (
    CloudinaryClient,
    extract_public_id,
    fill_transformation,
    sign_params,
)

IMAGE_URL = "https://res.cloudinary.com/demo/image/upload/v1712/eimusic/capa.jpg"


@pytest.fixture
def config():
    return MediaConfig(cloud_name="demo", api_key="key", api_secret="secret")


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session, headers={})


def _response(status_code=200, payload=None):
    response = MagicMock(status_code=status_code)
    response.json.return_value = payload or {}
    return response


class TestHelpers:
    def test_signature_skips_unsigned_and_empty_params(self):
        params = {
            "timestamp": 1712,
            "folder": "eimusic",
            "api_key": "key",
            "file": "data:...",
            "tags": "",
        }
        expected = hashlib.sha1(b"folder=eimusic&timestamp=1712secret").hexdigest()
        assert sign_params(params, "secret") == expected

    def test_public_id_from_url(self):
        assert extract_public_id(IMAGE_URL) == "eimusic/capa"
        assert extract_public_id("https://example.com/capa.jpg") is None

    def test_square_fill(self):
        assert fill_transformation(800) == "c_fill,h_800,q_auto,w_800"


class TestUpload:
    def test_not_configured(self, session):
        client = CloudinaryClient(MediaConfig(), session)
        with pytest.raises(MediaUploadError, match="não configurado"):
            client.upload_bytes(b"img", "image/png")
        session.post.assert_not_called()

    def test_rejects_non_images(self, config, session):
        client = CloudinaryClient(config, session)
        with pytest.raises(MediaUploadError, match="Arquivo deve ser uma imagem"):
            client.upload_bytes(b"%PDF", "application/pdf")

    def test_rejects_files_over_ten_megabytes(self, config, session):
        client = CloudinaryClient(config, session)
        with pytest.raises(MediaUploadError, match="Arquivo muito grande"):
            client.upload_bytes(b"0" * (10 * 1024 * 1024 + 1), "image/jpeg")

    def test_successful_upload(self, config, session):
        session.post.return_value = _response(
            payload={
                "secure_url": IMAGE_URL,
                "public_id": "eimusic/capa",
                "width": 800,
                "height": 800,
            }
        )
        client = CloudinaryClient(config, session)

        image = client.upload_bytes(b"img", "image/jpeg", folder="capas")

        assert image.url == IMAGE_URL
        assert image.public_id == "eimusic/capa"
        assert image.width == 800

        url = session.post.call_args.args[0]
        data = session.post.call_args.kwargs["data"]
        assert url == "https://api.cloudinary.com/v1_1/demo/image/upload"
        assert data["folder"] == "capas"
        assert data["api_key"] == "key"
        assert data["transformation"] == "c_fill,h_800,q_auto,w_800"
        assert data["file"].startswith("data:image/jpeg;base64,")
        assert "signature" in data

    def test_http_error_becomes_upload_error(self, config, session):
        session.post.return_value = _response(
            400, {"error": {"message": "Invalid image file"}}
        )
        client = CloudinaryClient(config, session)

        with pytest.raises(MediaUploadError, match="400: Invalid image file"):
            client.upload_bytes(b"img", "image/png")

    def test_upload_file_guesses_mime_type(self, config, session, tmp_path):
        notes = tmp_path / "notas.txt"
        notes.write_text("não é imagem")
        client = CloudinaryClient(config, session)

        with pytest.raises(MediaUploadError, match="imagem"):
            client.upload_file(notes)

    def test_missing_file(self, config, session, tmp_path):
        client = CloudinaryClient(config, session)
        with pytest.raises(MediaUploadError, match="não encontrado"):
            client.upload_file(tmp_path / "capa.jpg")


class TestDelete:
    def test_not_configured_returns_false(self, session):
        assert CloudinaryClient(MediaConfig(), session).delete("eimusic/capa") is False
        session.post.assert_not_called()

    def test_ok_result(self, config, session):
        session.post.return_value = _response(payload={"result": "ok"})
        client = CloudinaryClient(config, session)

        assert client.delete_by_url(IMAGE_URL) is True
        assert session.post.call_args.kwargs["data"]["public_id"] == "eimusic/capa"

    def test_errors_are_not_raised(self, config, session):
        session.post.return_value = _response(500, {"error": {"message": "boom"}})
        assert CloudinaryClient(config, session).delete("eimusic/capa") is False

    def test_foreign_url_is_skipped(self, config, session):
        client = CloudinaryClient(config, session)
        assert client.delete_by_url("https://example.com/capa.jpg") is False
        session.post.assert_not_called()

    async def test_async_delete_dispatches_on_url(self, config, session):
        session.post.return_value = _response(payload={"result": "not found"})
        client = CloudinaryClient(config, session)

        assert await client.delete_image("eimusic/capa") is False
        assert session.post.call_count == 1
