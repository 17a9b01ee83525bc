"""
Per-block-type Markdown rendering for larkdown.

Rendering is post-order: a block's rule runs after all of its children have
been rendered. Leaf rules produce the block's own fragment, which is then
followed by the children's fragments separated by blank lines. Container rules
(table, table cell, callout, quote container) consume the rendered children
themselves.
"""

import logging
from typing import Callable, Dict, List, Optional

from ..cancellation import CancelToken
from ..errors import (
    Diagnostics,
    MediaResolutionError,
    MissingPayload,
    NestingTooDeep,
    RenderCancelled,
    TableShapeError,
    UnknownBlockType,
)
from ..media.base import BaseMediaResolver
from ..media.store import media_reference, save_media
from ..models import BlockType, Node, RenderOptions, TextPayload
from ..models.blocks import heading_level
from .inline import render_inline, render_plain
from .lookups import (
    ADMONITION_KINDS,
    ALIGN_LEFT,
    ALIGN_MARKERS,
    CALLOUT_EMOJIS,
    CODE_LANGUAGES,
    DEFAULT_ADMONITION_KIND,
    DEFAULT_CODE_LANGUAGE,
)

BLOCK_SEPARATOR = "\n\n"
MAX_HEADING_DEPTH = 6


def placeholder(block_type: int, reason: Optional[str] = None) -> str:
    """Return the HTML comment emitted in place of a block that cannot be rendered."""
    if reason:
        # "--" is not allowed inside an HTML comment
        reason = reason.replace("--", "- -")
        return f"<!-- unsupported block type: {block_type} ({reason}) -->"
    return f"<!-- unsupported block type: {block_type} -->"


def join_fragments(fragments: List[str]) -> str:
    """Join rendered fragments with blank lines, dropping empty ones."""
    return BLOCK_SEPARATOR.join(fragment for fragment in fragments if fragment)


def quote_block(text: str) -> List[str]:
    """
    Block-quote one rendered fragment.

    Every line gets a "> " prefix (blank lines become a bare ">") and the
    fragment is closed by a lone ">" continuation line.
    """
    lines = [f"> {line}" if line else ">" for line in text.split("\n")]
    lines.append(">")
    return lines


def escape_table_cell(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("|", "\\|")
    return text.replace("\n", "<br>")


class BlockRenderer:
    """
    Renders a block tree to Markdown.
    """

    def __init__(self, options: Optional[RenderOptions] = None,
                 media_resolver: Optional[BaseMediaResolver] = None,
                 diagnostics: Optional[Diagnostics] = None,
                 cancel: Optional[CancelToken] = None):
        """
        Initialize the renderer.

        Args:
            options: Render options (defaults apply when omitted)
            media_resolver: Collaborator resolving image tokens; images render
                as empty strings without one
            diagnostics: Collector for non-fatal anomalies
            cancel: Token checked before every media resolution
        """
        self.options = options or RenderOptions()
        self.media_resolver = media_resolver
        self.diagnostics = diagnostics if diagnostics is not None else Diagnostics()
        self.cancel = cancel

        self._leaf_rules: Dict[int, Callable[[Node], str]] = {
            BlockType.PAGE: self.render_page,
            BlockType.TEXT: self.render_text,
            BlockType.BULLET: self.render_bullet,
            BlockType.ORDERED: self.render_ordered,
            BlockType.CODE: self.render_code,
            BlockType.QUOTE: self.render_quote,
            BlockType.TODO: self.render_todo,
            BlockType.DIVIDER: self.render_divider,
            BlockType.IMAGE: self.render_image,
        }
        for block_type in range(BlockType.HEADING1, BlockType.HEADING9 + 1):
            self._leaf_rules[block_type] = self.render_heading

        self._container_rules: Dict[int, Callable[[Node, List[str]], str]] = {
            BlockType.TABLE: self.render_table,
            BlockType.TABLE_CELL: self.render_table_cell,
            BlockType.CALLOUT: self.render_callout,
            BlockType.QUOTE_CONTAINER: self.render_quote_container,
        }

    def render_tree(self, root: Node) -> str:
        """
        Render a whole tree, children before parents.

        Args:
            root: The root node

        Returns:
            The Markdown text of the tree
        """
        return self._render_node(root, depth=1)

    def _render_node(self, node: Node, depth: int) -> str:
        if depth > self.options.max_depth:
            self.diagnostics.record(NestingTooDeep(
                f"block {node.block_id!r} is nested deeper than {self.options.max_depth} levels",
                node.block_id,
            ))
            return placeholder(node.block_type, "nested too deep")

        rendered_children = [self._render_node(child, depth + 1) for child in node.children]
        return self.render(node, rendered_children)

    def render(self, node: Node, rendered_children: List[str]) -> str:
        """
        Render one node given the already rendered fragments of its children.

        Args:
            node: The node to render
            rendered_children: Fragments of node.children, in order

        Returns:
            The Markdown fragment for the node and its subtree
        """
        block_type = node.block_type
        try:
            container_rule = self._container_rules.get(block_type)
            if container_rule is not None:
                return container_rule(node, rendered_children)

            leaf_rule = self._leaf_rules.get(block_type)
            if leaf_rule is None:
                self.diagnostics.record(UnknownBlockType(block_type, node.block_id))
                own = placeholder(block_type)
            else:
                own = leaf_rule(node)
        except (MissingPayload, TableShapeError) as anomaly:
            self.diagnostics.record(anomaly)
            return placeholder(block_type, str(anomaly))

        return join_fragments([own] + rendered_children)

    # Leaf rules

    def _text(self, node: Node) -> TextPayload:
        if node.block.text is None:
            raise MissingPayload(f"block {node.block_id!r} has no text payload", node.block_id)
        return node.block.text

    def _inline(self, node: Node) -> str:
        return render_inline(self._text(node).runs)

    def render_page(self, node: Node) -> str:
        return "# " + self._inline(node)

    def render_text(self, node: Node) -> str:
        return self._inline(node)

    def render_heading(self, node: Node) -> str:
        level = heading_level(node.block_type) or 1
        return "#" * min(level, MAX_HEADING_DEPTH) + " " + self._inline(node)

    def render_bullet(self, node: Node) -> str:
        return "- " + self._inline(node)

    def render_ordered(self, node: Node) -> str:
        # Markdown renderers number the items themselves
        return "1. " + self._inline(node)

    def render_code(self, node: Node) -> str:
        text = self._text(node)
        language = CODE_LANGUAGES.get(text.language or 0, DEFAULT_CODE_LANGUAGE)
        lines = render_plain(text.runs).replace("\r\n", "\n").split("\n")
        return "\n".join([f"```{language}", *lines, "```"])

    def render_quote(self, node: Node) -> str:
        return "> " + self._inline(node)

    def render_todo(self, node: Node) -> str:
        text = self._text(node)
        marker = "- [x] " if text.done else "- [ ] "
        return marker + render_inline(text.runs)

    def render_divider(self, node: Node) -> str:
        return "---"

    def render_image(self, node: Node) -> str:
        """
        Render an image through the media resolver.

        Resolver failures are recorded and the image renders as an empty
        string; only cancellation propagates.
        """
        image = node.block.image
        if image is None:
            raise MissingPayload(f"image block {node.block_id!r} has no token", node.block_id)

        if self.cancel is not None:
            self.cancel.check()

        if self.media_resolver is None:
            self.diagnostics.record(MediaResolutionError(
                f"no media resolver configured for image {image.token!r}", node.block_id))
            return ""

        try:
            if self.options.downloads_media:
                media = self.media_resolver.download(image.token)
                file_path = save_media(media, self.options.media_dir)
                alt = file_path.name
                ref = media_reference(file_path.name, self.options.media_url_prefix)
            else:
                alt = image.token
                ref = self.media_resolver.get_download_url(image.token)
        except RenderCancelled:
            raise
        except MediaResolutionError as e:
            if e.block_id is None:
                e.block_id = node.block_id
            self.diagnostics.record(e)
            return ""
        except Exception as e:
            self.diagnostics.record(MediaResolutionError(
                f"resolving image {image.token!r} failed: {e}", node.block_id))
            return ""

        if self.options.image_html_tag:
            return f'<img src="{ref}" width="{image.width}" height="{image.height}"/>'
        return f"![{alt}]({ref})"

    # Container rules

    def render_table_cell(self, node: Node, rendered_children: List[str]) -> str:
        return "".join(rendered_children)

    def render_table(self, node: Node, rendered_children: List[str]) -> str:
        """
        Lay out the table's cells row-major as a pipe table.

        The first row is the header; the alignment row follows it, each
        column's marker taken from the alignment of its header cell.
        """
        table = node.block.table
        if table is None or not table.row_size or not table.column_size:
            raise MissingPayload(f"table block {node.block_id!r} has no row/column counts", node.block_id)

        rows, columns = table.row_size, table.column_size
        if len(rendered_children) != rows * columns:
            raise TableShapeError(
                f"table block {node.block_id!r} declares {rows}x{columns} cells "
                f"but has {len(rendered_children)}",
                node.block_id,
            )

        cells = [escape_table_cell(text) for text in rendered_children]
        grid = [cells[row * columns:(row + 1) * columns] for row in range(rows)]
        markers = [self._column_marker(node.children[col]) for col in range(columns)]

        lines = ["|" + "|".join(grid[0]) + "|", "|" + "|".join(markers) + "|"]
        for row in grid[1:]:
            lines.append("|" + "|".join(row) + "|")
        return "\n".join(lines)

    @staticmethod
    def _column_marker(cell: Node) -> str:
        for child in cell.children:
            if child.block.text is not None and child.block.text.align:
                return ALIGN_MARKERS.get(child.block.text.align, ALIGN_MARKERS[ALIGN_LEFT])
        return ALIGN_MARKERS[ALIGN_LEFT]

    def render_callout(self, node: Node, rendered_children: List[str]) -> str:
        """
        Render a callout: its emoji leads the first content block.

        Without a background colour the content stays plain paragraphs;
        with one it is block-quoted, optionally under a GitHub admonition
        header chosen by the colour.
        """
        callout = node.block.callout
        if callout is None:
            raise MissingPayload(f"callout block {node.block_id!r} has no callout payload", node.block_id)

        content = [text for text in rendered_children if text]
        emoji = CALLOUT_EMOJIS.get(callout.emoji_id or "", "")
        if callout.emoji_id and not emoji:
            logging.debug(f"No emoji known for callout emoji id {callout.emoji_id!r}")
        if emoji:
            if content:
                content[0] = f"{emoji} {content[0]}"
            else:
                content = [emoji]

        if not callout.background_color:
            return join_fragments(content)

        lines: List[str] = []
        if self.options.use_admonition_style:
            kind = ADMONITION_KINDS.get(callout.background_color, DEFAULT_ADMONITION_KIND)
            lines.extend([f"> [!{kind}]", ">"])
        for text in content:
            lines.extend(quote_block(text))
        return "\n".join(lines)

    def render_quote_container(self, node: Node, rendered_children: List[str]) -> str:
        lines: List[str] = []
        for text in rendered_children:
            if text:
                lines.extend(quote_block(text))
            else:
                # An empty paragraph still occupies a quoted line
                lines.extend(["> ", ">"])
        return "\n".join(lines)


__all__ = ["BlockRenderer", "join_fragments", "placeholder", "quote_block"]
