"""
Tree model for larkdown.

A Node owns a block and the ordered nodes of its children. Nodes are built
fresh for each render pass by the tree builder.
"""

from typing import Iterator, List

from pydantic import BaseModel, Field

from .blocks import Block


class Node(BaseModel):
    """
    A block together with the nodes of its resolved children.
    """

    block: Block = Field(
        ...,
        description="The block snapshot this node wraps"
    )

    children: List['Node'] = Field(
        default_factory=list,
        description="Owned child nodes, in the block's child-id order"
    )

    @property
    def block_id(self) -> str:
        return self.block.block_id

    @property
    def block_type(self) -> int:
        return self.block.block_type

    def walk(self) -> Iterator['Node']:
        """Yield this node and all descendants in document (pre-)order."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


# Enable forward references for self-referencing model
Node.model_rebuild()
