from __future__ import annotations

import hashlib
import logging
import time
from typing import Optional, Protocol

import httpx

from ..core.constants import DEFAULT_HTTP_TIMEOUT_SECONDS
from ..core.exceptions import UpstreamError

logger = logging.getLogger(__name__)


class MediaStore(Protocol):
    def upload(self, data: bytes) -> str:
        """Persist image bytes and return a stable URL. Raises UpstreamError."""

        raise NotImplementedError


class CloudinaryMediaStore(MediaStore):
    """Signed uploads to Cloudinary's REST upload endpoint."""

    BASE_URL = "https://api.cloudinary.com/v1_1"

    def __init__(
        self,
        *,
        cloud_name: str,
        api_key: str,
        api_secret: str,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        client: Optional[httpx.Client] = None,
    ):
        self._cloud_name = cloud_name
        self._api_key = api_key
        self._api_secret = api_secret
        self._client = client or httpx.Client(timeout=timeout)

    def _signature(self, params: dict) -> str:
        to_sign = "&".join(f"{k}={params[k]}" for k in sorted(params))
        return hashlib.sha1(f"{to_sign}{self._api_secret}".encode("utf-8")).hexdigest()

    def upload(self, data: bytes) -> str:
        params = {"timestamp": str(int(time.time()))}
        form = dict(params, api_key=self._api_key, signature=self._signature(params))
        url = f"{self.BASE_URL}/{self._cloud_name}/image/upload"

        try:
            response = self._client.post(url, data=form, files={"file": ("evidence.jpg", data, "image/jpeg")})
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Media upload failed: %s", exc)
            raise UpstreamError("Image upload failed") from exc

        secure_url = payload.get("secure_url") if isinstance(payload, dict) else None
        if not secure_url:
            logger.error("Media upload returned no URL")
            raise UpstreamError("Image upload failed")
        return str(secure_url)
