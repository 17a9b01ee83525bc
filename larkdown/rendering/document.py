"""
Document assembly for larkdown.

Pulls the flat block list from a source, rebuilds the tree, renders it and
appends the attribution footer.
"""

import logging
from typing import List, Optional

from ..cancellation import CancelToken
from ..errors import Diagnostics, FetchError, RenderCancelled
from ..media.base import BaseMediaResolver
from ..models import Block, RenderOptions
from ..sources.base import BaseBlockSource
from .blocks import BlockRenderer, join_fragments
from .tree import build_tree

ATTRIBUTION_FOOTER = "*Generated by larkdown*"


class DocumentAssembler:
    """
    Renders whole documents with one resolver, option set and diagnostics
    collector.
    """

    def __init__(self, media_resolver: Optional[BaseMediaResolver] = None,
                 options: Optional[RenderOptions] = None,
                 diagnostics: Optional[Diagnostics] = None):
        """
        Initialize the assembler.

        Args:
            media_resolver: Resolver for image tokens (images render empty without one)
            options: Render options (defaults apply when omitted)
            diagnostics: Collector for non-fatal anomalies
        """
        self.media_resolver = media_resolver
        self.options = options or RenderOptions()
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()

    def collect_blocks(self, source: BaseBlockSource, cancel: Optional[CancelToken] = None) -> List[Block]:
        """
        Read every block of the source.

        Args:
            source: The block source
            cancel: Token checked before each block is pulled

        Returns:
            The blocks in source order

        Raises:
            FetchError: If the source fails; blocks already read are discarded
            RenderCancelled: If the token is cancelled
        """
        blocks: List[Block] = []
        try:
            iterator = iter(source.iter_blocks())
            while True:
                if cancel is not None:
                    cancel.check()
                try:
                    block = next(iterator)
                except StopIteration:
                    break
                blocks.append(block)
        except (FetchError, RenderCancelled):
            raise
        except Exception as e:
            raise FetchError(f"block source {type(source).__name__} failed: {e}") from e
        return blocks

    def render(self, source: BaseBlockSource, cancel: Optional[CancelToken] = None) -> str:
        """
        Render the document delivered by a source to Markdown.

        Args:
            source: The block source
            cancel: Optional cancellation token

        Returns:
            The Markdown document, ending in a single newline

        Raises:
            FetchError: If the source fails or delivers no blocks
            RenderCancelled: If the render is cancelled
        """
        blocks = self.collect_blocks(source, cancel)
        if not blocks:
            raise FetchError("the block source returned no blocks")
        if len(blocks) > 1 and blocks[0].is_sentinel:
            blocks = blocks[1:]

        root = build_tree(blocks, self.diagnostics)
        renderer = BlockRenderer(self.options, self.media_resolver, self.diagnostics, cancel)
        body = renderer.render_tree(root).rstrip("\n")

        logging.info(f"Rendered document {root.block_id!r} from {len(blocks)} blocks "
                     f"with {len(self.diagnostics)} diagnostics")
        return join_fragments([body, ATTRIBUTION_FOOTER]) + "\n"


def render_document(source: BaseBlockSource, media_resolver: Optional[BaseMediaResolver] = None,
                    options: Optional[RenderOptions] = None, cancel: Optional[CancelToken] = None,
                    diagnostics: Optional[Diagnostics] = None) -> str:
    """
    Render the document delivered by a source to Markdown.

    See DocumentAssembler.render.
    """
    assembler = DocumentAssembler(media_resolver, options, diagnostics)
    return assembler.render(source, cancel)
