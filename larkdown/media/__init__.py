"""Media resolution for larkdown."""

from .base import BaseMediaResolver, MediaFile
from .lark import LarkMediaResolver
from .store import media_reference, save_media

__all__ = [
    "BaseMediaResolver",
    "MediaFile",
    "LarkMediaResolver",
    "media_reference",
    "save_media"
]
