"""Block sources for larkdown."""

from .base import BaseBlockSource
from .json_file import JsonFileSource
from .lark_api import LarkDocumentSource
from .mock import MockBlockSource

__all__ = [
    "BaseBlockSource",
    "JsonFileSource",
    "LarkDocumentSource",
    "MockBlockSource"
]
