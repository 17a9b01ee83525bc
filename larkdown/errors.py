"""
Error types and diagnostics for larkdown.

Only FetchError and RenderCancelled abort a render. Every RenderAnomaly is
contained to the subtree it occurred in and recorded in a Diagnostics
collector owned by the caller.
"""

import logging
from typing import Iterator, List, Optional, Type, TypeVar


class LarkdownError(Exception):
    """Base class for all larkdown errors."""


class FetchError(LarkdownError):
    """The block source failed before the block list was exhausted."""


class RenderCancelled(LarkdownError):
    """The caller cancelled the render or its deadline passed."""


class LarkAPIError(LarkdownError):
    """
    A Lark Open API call failed.

    Attributes:
        code: Lark business error code, or the HTTP status code when the
            failure happened at the transport level (None if no response)
    """

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class RenderAnomaly(LarkdownError):
    """
    A non-fatal problem found while building or rendering the tree.

    Attributes:
        block_id: Id of the block the anomaly concerns, if known
    """

    def __init__(self, message: str, block_id: Optional[str] = None):
        super().__init__(message)
        self.block_id = block_id


class UnknownBlockType(RenderAnomaly):
    def __init__(self, block_type: int, block_id: Optional[str] = None):
        super().__init__(f"unsupported block type {block_type}", block_id)
        self.block_type = block_type


class DanglingReference(RenderAnomaly):
    def __init__(self, child_id: str, parent_id: str):
        super().__init__(f"child {child_id!r} of block {parent_id!r} not found", parent_id)
        self.child_id = child_id


class DuplicateBlockId(RenderAnomaly):
    """The same block id appears more than once in the flat list."""


class RepeatedReference(RenderAnomaly):
    """A block is referenced as a child more than once (shared or cyclic)."""


class UnreachableBlock(RenderAnomaly):
    """A block is not reachable from the root and will not be rendered."""


class MissingPayload(RenderAnomaly):
    """A block lacks the payload its type requires."""


class TableShapeError(RenderAnomaly):
    """A table's cells do not match its declared row and column counts."""


class MediaResolutionError(RenderAnomaly):
    """The media resolver could not provide an image."""


class NestingTooDeep(RenderAnomaly):
    """A subtree is nested deeper than the configured render depth."""


AnomalyT = TypeVar("AnomalyT", bound=RenderAnomaly)


class Diagnostics:
    """
    Side channel collecting the non-fatal anomalies of a render.
    """

    def __init__(self):
        self.records: List[RenderAnomaly] = []

    def record(self, anomaly: RenderAnomaly) -> None:
        """
        Log an anomaly and keep it for the caller.

        Args:
            anomaly: The anomaly to record
        """
        logging.warning(f"{type(anomaly).__name__}: {anomaly}")
        self.records.append(anomaly)

    def of_type(self, anomaly_type: Type[AnomalyT]) -> List[AnomalyT]:
        """Return the recorded anomalies that are instances of anomaly_type."""
        return [record for record in self.records if isinstance(record, anomaly_type)]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[RenderAnomaly]:
        return iter(self.records)
