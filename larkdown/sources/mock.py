"""
Mock block source for larkdown.

This module provides a data source with a hardcoded sample document for
exercising the rendering pipeline without access to Lark.
"""

from typing import Iterator, List, Optional

from ..errors import FetchError
from ..models import (
    Block,
    BlockType,
    CalloutPayload,
    ImagePayload,
    TablePayload,
    TextPayload,
    TextRun,
    TextStyle,
)
from .base import BaseBlockSource


def text_block(block_id: str, block_type: int, *runs: TextRun, parent_id: str = "",
               children: Optional[List[str]] = None, **text_fields) -> Block:
    """Build a text-bearing block from runs."""
    return Block(
        block_id=block_id,
        block_type=block_type,
        parent_id=parent_id,
        children=children or [],
        text=TextPayload(runs=list(runs), **text_fields),
    )


def run(content: str, **style) -> TextRun:
    """Build a text run; keyword arguments are TextStyle fields."""
    return TextRun(content=content, style=TextStyle(**style))


class MockBlockSource(BaseBlockSource):
    """
    Mock source that yields a hardcoded sample document.

    Used for trying out the renderer and in tests. A custom block list may be
    supplied instead, and a fetch failure can be simulated after a number of
    blocks.
    """

    def __init__(self, blocks: Optional[List[Block]] = None, fail_after: Optional[int] = None):
        """
        Initialize the mock source.

        Args:
            blocks: Blocks to yield (the sample document when omitted)
            fail_after: Raise FetchError after yielding this many blocks
        """
        self._blocks = blocks if blocks is not None else self._create_sample_blocks()
        self.fail_after = fail_after

    def iter_blocks(self) -> Iterator[Block]:
        for index, block in enumerate(self._blocks):
            if self.fail_after is not None and index >= self.fail_after:
                raise FetchError(f"simulated fetch failure after {index} blocks")
            yield block
        if self.fail_after is not None and self.fail_after >= len(self._blocks):
            raise FetchError(f"simulated fetch failure after {len(self._blocks)} blocks")

    def _create_sample_blocks(self) -> List[Block]:
        """
        Create a sample document covering every supported block type.

        Returns:
            The flat block list, page block first
        """
        blocks = [
            text_block("page", BlockType.PAGE, run("Weekly Sync"), children=[
                "intro", "agenda", "item1", "item2", "step1", "todo1", "todo2",
                "snippet", "tip", "quotes", "table", "rule", "outro",
            ]),
            text_block("intro", BlockType.TEXT,
                       run("Notes from the "), run("weekly", bold=True), run(" sync, see "),
                       run("the roadmap", link="https%3A%2F%2Fexample.com%2Froadmap"),
                       run("."), parent_id="page"),
            text_block("agenda", BlockType.HEADING2, run("Agenda"), parent_id="page"),
            text_block("item1", BlockType.BULLET, run("Release status"), parent_id="page"),
            text_block("item2", BlockType.BULLET, run("Hiring "), run("update", italic=True),
                       parent_id="page"),
            text_block("step1", BlockType.ORDERED, run("Review open issues"), parent_id="page"),
            text_block("todo1", BlockType.TODO, run("Publish release notes"),
                       parent_id="page", done=True),
            text_block("todo2", BlockType.TODO, run("Book the retro room"), parent_id="page"),
            text_block("snippet", BlockType.CODE, run("def greet():\n    print(\"hello\")"),
                       parent_id="page", language=49),
            Block(block_id="tip", block_type=BlockType.CALLOUT, parent_id="page",
                  children=["tip_text"],
                  callout=CalloutPayload(emoji_id="bulb", background_color=5)),
            text_block("tip_text", BlockType.TEXT, run("Demo day is on Friday."), parent_id="tip"),
            Block(block_id="quotes", block_type=BlockType.QUOTE_CONTAINER, parent_id="page",
                  children=["quote1", "quote2"]),
            text_block("quote1", BlockType.TEXT, run("Ship small, ship often."), parent_id="quotes"),
            text_block("quote2", BlockType.TEXT, run("Measure twice."), parent_id="quotes"),
            Block(block_id="table", block_type=BlockType.TABLE, parent_id="page",
                  children=["cell1", "cell2", "cell3", "cell4"],
                  table=TablePayload(row_size=2, column_size=2)),
        ]

        cells = [("Owner", 2), ("Task", 1), ("Alice", None), ("Deploy", None)]
        for index, (content, align) in enumerate(cells, 1):
            blocks.append(Block(block_id=f"cell{index}", block_type=BlockType.TABLE_CELL,
                                parent_id="table", children=[f"cell{index}_text"]))
            blocks.append(text_block(f"cell{index}_text", BlockType.TEXT, run(content),
                                     parent_id=f"cell{index}", align=align))

        blocks.extend([
            Block(block_id="rule", block_type=BlockType.DIVIDER, parent_id="page"),
            Block(block_id="outro", block_type=BlockType.IMAGE, parent_id="page",
                  image=ImagePayload(token="boxcnSampleImage", width=640, height=480)),
        ])
        return blocks
