"""
Media resolver backed by Lark drive.
"""

import logging
import mimetypes
from typing import Optional

from ..client import LarkClient
from ..errors import LarkAPIError, MediaResolutionError
from .base import BaseMediaResolver, MediaFile

DEFAULT_MEDIA_EXTENSION = ".jpg"


def media_extension(content_type: Optional[str]) -> str:
    """Guess a file extension from a Content-Type header, defaulting to .jpg."""
    if not content_type:
        return DEFAULT_MEDIA_EXTENSION
    mime = content_type.split(";", 1)[0].strip().lower()
    # mimetypes prefers ".jpe" on some platforms
    if mime == "image/jpeg":
        return ".jpg"
    return mimetypes.guess_extension(mime) or DEFAULT_MEDIA_EXTENSION


class LarkMediaResolver(BaseMediaResolver):
    """
    Resolves image tokens through the Lark drive media endpoints.
    """

    def __init__(self, client: LarkClient):
        self.client = client

    def get_download_url(self, token: str) -> str:
        try:
            return self.client.get_tmp_download_url(token)
        except LarkAPIError as e:
            raise MediaResolutionError(f"no download URL for image {token!r}: {e}") from e

    def download(self, token: str) -> MediaFile:
        try:
            content, content_type = self.client.download_media(token)
        except LarkAPIError as e:
            raise MediaResolutionError(f"downloading image {token!r} failed: {e}") from e

        filename = token + media_extension(content_type)
        logging.debug(f"Downloaded image {token} ({len(content)} bytes) as {filename}")
        return MediaFile(content=content, filename=filename)
