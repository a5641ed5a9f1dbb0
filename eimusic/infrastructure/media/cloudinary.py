"""Cloudinary image hosting through its signed REST upload API.

Uploads are signed with the account secret (SHA-1 over the sorted request
parameters), stored under a folder and normalized to a square fill crop.
Deletes are best-effort: failures are logged and never raised, so removing
a record is not blocked by the media service.
"""

import asyncio
import base64
import hashlib
import mimetypes
from pathlib import Path
import re
import time
from typing import Any

from attrs import define
import backoff
import requests

from eimusic.config import get_config, get_logger, resilient_operation, settings
from eimusic.config.settings import MediaConfig
from eimusic.domain.errors import MediaUploadError

logger = get_logger(__name__)

API_BASE_URL = "https://api.cloudinary.com/v1_1"
MAX_UPLOAD_BYTES = 10 * 1024 * 1024

# Parameters Cloudinary leaves out of the signature
_UNSIGNED_PARAMS = frozenset({"file", "api_key", "resource_type", "cloud_name"})

_PUBLIC_ID_PATTERN = re.compile(
    r"/([^/]+)/([^/]+)/v\d+/(.+)\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE
)

_RETRYABLE = (requests.ConnectionError, requests.Timeout)


def sign_params(params: dict[str, Any], api_secret: str) -> str:
    """Cloudinary request signature for the given parameters."""
    payload = "&".join(
        f"{key}={value}"
        for key, value in sorted(params.items())
        if key not in _UNSIGNED_PARAMS and value not in (None, "")
    )
    return hashlib.sha1(f"{payload}{api_secret}".encode()).hexdigest()


def extract_public_id(url: str) -> str | None:
    """Public id of a Cloudinary image URL, or None for other URLs.

    Example:
        >>> extract_public_id(
        ...     "https://res.cloudinary.com/demo/image/upload/v1712/eimusic/capa.jpg"
        ... )
        'eimusic/capa'
    """
    match = _PUBLIC_ID_PATTERN.search(url)
    return match.group(3) if match else None


def fill_transformation(size: int) -> str:
    return f"c_fill,h_{size},q_auto,w_{size}"


@define(frozen=True, slots=True)
class UploadedImage:
    url: str
    public_id: str
    width: int | None = None
    height: int | None = None
    bytes: int | None = None


class CloudinaryClient:
    """Signed uploads and deletes against one Cloudinary account."""

    def __init__(
        self,
        config: MediaConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or settings.media
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": "eimusic-admin"})

    @property
    def is_configured(self) -> bool:
        return self.config.is_configured

    def _require_configuration(self) -> None:
        if not self.is_configured:
            raise MediaUploadError(
                "Cloudinary não configurado: defina CLOUDINARY_CLOUD_NAME, "
                "CLOUDINARY_API_KEY e CLOUDINARY_API_SECRET"
            )

    def _endpoint(self, action: str) -> str:
        return f"{API_BASE_URL}/{self.config.cloud_name}/image/{action}"

    def _signed(self, params: dict[str, Any]) -> dict[str, Any]:
        signed = {**params, "timestamp": int(time.time())}
        signed["signature"] = sign_params(signed, self.config.api_secret)
        signed["api_key"] = self.config.api_key
        return signed

    @backoff.on_exception(
        backoff.expo,
        _RETRYABLE,
        max_tries=get_config("MEDIA_RETRY_COUNT"),
        max_value=get_config("MEDIA_RETRY_MAX_DELAY"),
        jitter=backoff.full_jitter,
    )
    def _post(self, action: str, data: dict[str, Any]) -> dict[str, Any]:
        response = self.session.post(
            self._endpoint(action), data=data, timeout=self.config.timeout_seconds
        )
        if response.status_code >= 400:
            try:
                detail = response.json().get("error", {}).get("message", "")
            except ValueError:
                detail = response.text
            raise MediaUploadError(
                f"Cloudinary respondeu {response.status_code}: {detail}".rstrip(": ")
            )
        return response.json()

    def upload_bytes(
        self,
        content: bytes,
        mime_type: str,
        folder: str | None = None,
        filename: str | None = None,
    ) -> UploadedImage:
        """Upload raw image bytes and return the hosted image.

        Raises:
            MediaUploadError: When not configured, the file is not an image,
                it exceeds 10MB, or Cloudinary rejects it
        """
        self._require_configuration()
        if not mime_type.startswith("image/"):
            raise MediaUploadError("Arquivo deve ser uma imagem")
        if len(content) > MAX_UPLOAD_BYTES:
            raise MediaUploadError("Arquivo muito grande. Máximo 10MB.")

        target = folder or self.config.default_folder
        logger.info(
            "Uploading image to Cloudinary",
            filename=filename,
            folder=target,
            size_bytes=len(content),
        )

        data_uri = f"data:{mime_type};base64,{base64.b64encode(content).decode()}"
        params = self._signed({
            "folder": target,
            "transformation": fill_transformation(self.config.image_size),
        })
        try:
            payload = self._post("upload", {**params, "file": data_uri})
        except requests.RequestException as e:
            raise MediaUploadError("Falha no upload da imagem") from e

        image = UploadedImage(
            url=payload["secure_url"],
            public_id=payload["public_id"],
            width=payload.get("width"),
            height=payload.get("height"),
            bytes=payload.get("bytes"),
        )
        logger.info("Image uploaded", url=image.url, public_id=image.public_id)
        return image

    def upload_file(self, path: Path, folder: str | None = None) -> UploadedImage:
        path = Path(path)
        if not path.is_file():
            raise MediaUploadError(f"Arquivo não encontrado: {path}")
        mime_type, _ = mimetypes.guess_type(path.name)
        return self.upload_bytes(
            path.read_bytes(), mime_type or "", folder=folder, filename=path.name
        )

    def delete(self, public_id: str) -> bool:
        """Delete an image by public id; returns False instead of raising."""
        if not self.is_configured:
            logger.warning("Cloudinary not configured, skipping delete", public_id=public_id)
            return False
        try:
            payload = self._post("destroy", self._signed({"public_id": public_id}))
        except (requests.RequestException, MediaUploadError) as e:
            logger.error("Failed to delete image", public_id=public_id, error=str(e))
            return False

        deleted = payload.get("result") == "ok"
        logger.info("Image delete finished", public_id=public_id, result=payload.get("result"))
        return deleted

    def delete_by_url(self, url: str) -> bool:
        public_id = extract_public_id(url)
        if public_id is None:
            logger.warning("Not a Cloudinary image URL, nothing to delete", url=url)
            return False
        return self.delete(public_id)

    # Async wrappers keep the blocking HTTP calls off the event loop

    @resilient_operation("cloudinary_upload")
    async def upload_image(self, path: Path, folder: str | None = None) -> UploadedImage:
        return await asyncio.to_thread(self.upload_file, path, folder)

    async def delete_image(self, url_or_public_id: str) -> bool:
        if url_or_public_id.startswith(("http://", "https://")):
            return await asyncio.to_thread(self.delete_by_url, url_or_public_id)
        return await asyncio.to_thread(self.delete, url_or_public_id)
