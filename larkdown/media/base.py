"""
Base media resolver interface for larkdown.

A media resolver turns the token of an image block into something a Markdown
document can reference: either a remote URL or the bytes of the file.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class MediaFile:
    """
    Downloaded media content.
    """
    content: bytes
    filename: str


class BaseMediaResolver(ABC):
    """
    Abstract base class for all media resolvers.

    Implementations raise MediaResolutionError when a token cannot be resolved.
    """

    @abstractmethod
    def get_download_url(self, token: str) -> str:
        """
        Get a remote, typically time-limited, URL for the media.

        Args:
            token: The image token from the block payload

        Returns:
            The download URL
        """
        pass

    @abstractmethod
    def download(self, token: str) -> MediaFile:
        """
        Download the media so it can be mirrored locally.

        Args:
            token: The image token from the block payload

        Returns:
            The file content and a suggested filename
        """
        pass
