"""Data models for larkdown."""

from .blocks import (
    Block,
    BlockType,
    CalloutPayload,
    ImagePayload,
    TablePayload,
    TextPayload,
    TextRun,
    TextStyle,
)
from .node import Node
from .options import RenderOptions

__all__ = [
    "Block",
    "BlockType",
    "CalloutPayload",
    "ImagePayload",
    "TablePayload",
    "TextPayload",
    "TextRun",
    "TextStyle",
    "Node",
    "RenderOptions"
]
