"""
Local persistence of mirrored media.
"""

import logging
from pathlib import Path

from ..errors import MediaResolutionError
from .base import MediaFile


def save_media(media: MediaFile, media_dir: str) -> Path:
    """
    Write a downloaded media file into the media directory.

    Args:
        media: The downloaded media
        media_dir: Destination directory, created if missing

    Returns:
        Path of the written file

    Raises:
        MediaResolutionError: If the file cannot be written
    """
    # Only the final path component is trusted
    filename = Path(media.filename).name
    if not filename:
        raise MediaResolutionError(f"refusing to save media without a filename into {media_dir}")

    file_path = Path(media_dir) / filename
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_bytes(media.content)
    except OSError as e:
        raise MediaResolutionError(f"failed to write media file {file_path}: {e}") from e

    logging.info(f"Saved media file: {file_path}")
    return file_path


def media_reference(filename: str, url_prefix: str) -> str:
    """Build the path written into Markdown for a mirrored file."""
    if not url_prefix:
        return filename
    return f"{url_prefix.rstrip('/')}/{filename}"
