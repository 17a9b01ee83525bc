"""Tree reconstruction and Markdown rendering for larkdown."""

from .blocks import BlockRenderer
from .document import ATTRIBUTION_FOOTER, DocumentAssembler, render_document
from .inline import render_inline, render_plain
from .tree import build_tree

__all__ = [
    "BlockRenderer",
    "ATTRIBUTION_FOOTER",
    "DocumentAssembler",
    "render_document",
    "render_inline",
    "render_plain",
    "build_tree"
]
