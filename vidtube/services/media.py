import hashlib
import logging
import time

import requests
from fastapi import UploadFile

from vidtube.config import get_settings
from vidtube.http_client import get_session
from vidtube.models.media import UploadResult

logger = logging.getLogger(__name__)

CLOUDINARY_API_BASE = "https://api.cloudinary.com/v1_1"


def _sign(params: dict, api_secret: str) -> str:
    """Cloudinary signature: SHA-1 of the sorted params joined with '&', then the secret."""
    to_sign = "&".join(f"{key}={params[key]}" for key in sorted(params))
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()


def _parse_upload(data: dict) -> UploadResult:
    return UploadResult(
        url=data.get("secure_url") or data["url"],
        public_id=data.get("public_id"),
        resource_type=data.get("resource_type"),
        duration=data.get("duration") or 0,
    )


def upload_file(upload: UploadFile | None) -> UploadResult | None:
    """Upload a file to object storage. Returns None when the upload did not succeed."""
    if upload is None:
        return None
    settings = get_settings()
    if not (settings.cloudinary_cloud_name and settings.cloudinary_api_key and settings.cloudinary_api_secret):
        logger.error("Media storage credentials are not configured; cannot upload %s", upload.filename)
        return None

    params = {"timestamp": int(time.time())}
    form = {
        **params,
        "api_key": settings.cloudinary_api_key,
        "signature": _sign(params, settings.cloudinary_api_secret),
    }
    url = f"{CLOUDINARY_API_BASE}/{settings.cloudinary_cloud_name}/auto/upload"
    try:
        resp = get_session().post(
            url,
            data=form,
            files={"file": (upload.filename or "upload", upload.file, upload.content_type)},
            timeout=settings.upload_timeout,
        )
    except requests.RequestException:
        logger.exception("Upload of %s failed", upload.filename)
        return None
    if not resp.ok:
        logger.error("Upload of %s rejected with status %s: %s", upload.filename, resp.status_code, resp.text[:200])
        return None
    result = _parse_upload(resp.json())
    logger.info("Uploaded %s to %s", upload.filename, result.url)
    return result
