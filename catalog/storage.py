import base64
import logging
import os

from django.conf import settings
from django.core.files.storage import default_storage
from django.utils import timezone
from rest_framework import status
from rest_framework.exceptions import APIException

logger = logging.getLogger(__name__)


class ImageUploadError(APIException):
    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = 'Could not upload the image.'
    default_code = 'image_upload_failed'


def image_path(owner_id, purpose, filename):
    """<owner id>/<purpose>/<timestamp in ms>.<ext>"""
    ext = os.path.splitext(filename)[1].lstrip('.').lower() or 'jpg'
    stamp = int(timezone.now().timestamp() * 1000)
    return f"{owner_id}/{purpose}/{stamp}.{ext}"


def store_image(upload, owner_id, purpose, request=None):
    """
    Save an uploaded image and return its public URL.

    Inline base64 data URLs are only produced when ALLOW_INLINE_IMAGE_FALLBACK
    is on; they end up stored in the row itself.
    """
    path = image_path(owner_id, purpose, upload.name)
    try:
        name = default_storage.save(path, upload)
        url = default_storage.url(name)
    except OSError as exc:
        if not settings.PEDINU['ALLOW_INLINE_IMAGE_FALLBACK']:
            logger.error("Image upload failed for %s: %s", path, exc)
            raise ImageUploadError() from exc

        logger.warning(
            "Storage upload failed, storing %s inline as a data URL (%d bytes)",
            path, upload.size, extra={'owner_id': str(owner_id)}
        )
        upload.seek(0)
        encoded = base64.b64encode(upload.read()).decode('ascii')
        return f"data:{upload.content_type};base64,{encoded}"

    if request is not None and url.startswith('/'):
        url = request.build_absolute_uri(url)
    return url
