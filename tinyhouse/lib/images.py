"""Cloudinary upload client: base64 image payload to hosted HTTPS URL."""

import hashlib
import logging
import time

import httpx

from tinyhouse.config import settings
from tinyhouse.errors import UpstreamError

logger = logging.getLogger(__name__)


def sign_params(params: dict[str, str], api_secret: str) -> str:
    """Cloudinary request signature: SHA-1 of sorted ``key=value`` pairs followed by the secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode("utf-8")).hexdigest()


async def upload_image(image: str) -> str:
    """Upload ``image`` (a data URI or remote URL) and return its ``secure_url``."""
    params = {
        "folder": settings.cloudinary_folder,
        "timestamp": str(int(time.time())),
    }
    data = {
        **params,
        "file": image,
        "api_key": settings.cloudinary_api_key,
        "signature": sign_params(params, settings.cloudinary_api_secret),
    }
    url = f"https://api.cloudinary.com/v1_1/{settings.cloudinary_cloud_name}/image/upload"

    async with httpx.AsyncClient() as client:
        try:
            response = await client.post(url, data=data)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise UpstreamError(f"failed to upload image: {exc}") from exc

    secure_url = response.json()["secure_url"]
    logger.info("Uploaded image to %s", secure_url)
    return secure_url
