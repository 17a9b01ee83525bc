"""
Base block source interface for larkdown.

This module defines the abstract interface that every provider of a document's
flat block list must implement.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List

from ..models import Block


class BaseBlockSource(ABC):
    """
    Abstract base class for all block sources.

    A source yields the blocks of one document in document order. Paging,
    transport and authentication stay inside the source; a failure is reported
    by raising FetchError from the iterator.
    """

    @abstractmethod
    def iter_blocks(self) -> Iterator[Block]:
        """
        Yield the document's blocks in order.

        Raises:
            FetchError: If the blocks cannot be retrieved
        """
        pass

    def get_all_blocks(self) -> List[Block]:
        """
        Retrieve all blocks at once.

        Returns:
            List of Block objects in document order
        """
        return list(self.iter_blocks())
