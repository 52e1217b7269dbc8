"""Upload collaborator: send a receipt photo to the OCR service, get raw text back."""
import logging

import requests

from cashsplit.core.config import settings
from cashsplit.core.errors import UploadError

logger = logging.getLogger(__name__)


def upload_receipt_image(image_bytes: bytes, filename: str = "image.jpg", mime_type: str = "image/jpeg") -> str:
    """
    POST the image as multipart form data and return the response body.

    The body is expected to be the JSON receipt array understood by
    ``cashsplit.services.decoder.decode``; it is returned undecoded.
    No retries are attempted.
    """
    if not image_bytes:
        raise UploadError("No image data to upload")

    files = {settings.OCR_UPLOAD_FIELD: (filename, image_bytes, mime_type)}
    try:
        response = requests.post(
            settings.OCR_UPLOAD_URL,
            files=files,
            timeout=settings.OCR_UPLOAD_TIMEOUT
        )
    except requests.RequestException as e:
        logger.error("OCR upload failed: %s", e)
        raise UploadError(f"OCR upload failed: {e}") from e

    if response.status_code != 200:
        logger.error("OCR service returned %s", response.status_code)
        raise UploadError(f"OCR service returned {response.status_code}: {response.text}")

    response.encoding = "utf-8"
    return response.text
