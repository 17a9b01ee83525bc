"""
Reconstruction of the block tree from the flat block list.
"""

import logging
from typing import Dict, List, Optional, Sequence, Set

from ..errors import (
    DanglingReference,
    Diagnostics,
    DuplicateBlockId,
    RepeatedReference,
    UnreachableBlock,
)
from ..models import Block, Node


def index_blocks(blocks: Sequence[Block], diagnostics: Diagnostics) -> Dict[str, Block]:
    """
    Build the id -> block lookup.

    The first occurrence of an id wins; later occurrences are reported.

    Args:
        blocks: The flat block list
        diagnostics: Collector for duplicate-id anomalies

    Returns:
        Mapping of block id to block
    """
    lookup: Dict[str, Block] = {}
    for block in blocks:
        existing = lookup.get(block.block_id)
        if existing is None:
            lookup[block.block_id] = block
            continue
        if existing == block:
            detail = "identical content"
        else:
            detail = "different content, keeping the first occurrence"
        diagnostics.record(DuplicateBlockId(
            f"block id {block.block_id!r} appears more than once ({detail})",
            block.block_id,
        ))
    return lookup


def build_tree(blocks: Sequence[Block], diagnostics: Optional[Diagnostics] = None) -> Node:
    """
    Rebuild the document tree rooted at the first block.

    Children are expanded with an explicit stack, so arbitrarily deep documents
    do not exhaust the interpreter's recursion limit. Every block yields at most
    one node: a child id that cannot be resolved, or that was already placed
    under another parent, is skipped and reported.

    Args:
        blocks: The flat block list in source order; element 0 is the root
        diagnostics: Collector for non-fatal anomalies (a private one is used
            when omitted)

    Returns:
        The root node

    Raises:
        ValueError: If blocks is empty
    """
    if not blocks:
        raise ValueError("cannot build a tree from an empty block list")
    if diagnostics is None:
        diagnostics = Diagnostics()

    lookup = index_blocks(blocks, diagnostics)
    root_block = lookup[blocks[0].block_id]
    root = Node(block=root_block)

    placed: Set[str] = {root_block.block_id}
    pending: List[Node] = [root]
    while pending:
        node = pending.pop()
        for child_id in node.block.children:
            child_block = lookup.get(child_id)
            if child_block is None:
                diagnostics.record(DanglingReference(child_id, node.block_id))
                continue
            if child_id in placed:
                diagnostics.record(RepeatedReference(
                    f"block {child_id!r} referenced again by {node.block_id!r}, skipped",
                    child_id,
                ))
                continue
            placed.add(child_id)
            node.children.append(Node(block=child_block))
        # Reversed so subtrees are expanded in document order
        pending.extend(reversed(node.children))

    unreachable = [block_id for block_id in lookup if block_id not in placed]
    for block_id in unreachable:
        diagnostics.record(UnreachableBlock(
            f"block {block_id!r} is not reachable from root {root_block.block_id!r}",
            block_id,
        ))

    logging.debug(f"Built tree of {len(placed)} nodes from {len(blocks)} blocks")
    return root
