"""
larkdown: Lark/Feishu docx to Markdown converter.

Rebuilds a document's block tree from the flat block list served by the Lark
Open API and renders it as GitHub-flavoured Markdown.
"""

__version__ = "0.1.0"
__author__ = "larkdown Project"

# Import main components
from .cancellation import CancelToken
from .client import LarkClient
from .errors import Diagnostics, FetchError, LarkdownError, RenderCancelled
from .media import BaseMediaResolver, LarkMediaResolver
from .models import Block, Node, RenderOptions
from .rendering import DocumentAssembler, render_document
from .sources import BaseBlockSource, JsonFileSource, LarkDocumentSource, MockBlockSource

__all__ = [
    "CancelToken",
    "LarkClient",
    "Diagnostics",
    "FetchError",
    "LarkdownError",
    "RenderCancelled",
    "BaseMediaResolver",
    "LarkMediaResolver",
    "Block",
    "Node",
    "RenderOptions",
    "DocumentAssembler",
    "render_document",
    "BaseBlockSource",
    "JsonFileSource",
    "LarkDocumentSource",
    "MockBlockSource"
]
