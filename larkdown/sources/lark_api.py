"""
Lark Open API block source for larkdown.
"""

import logging
from typing import Iterator

from pydantic import ValidationError

from ..client import LarkClient
from ..errors import FetchError, LarkAPIError
from ..models import Block
from .base import BaseBlockSource


class LarkDocumentSource(BaseBlockSource):
    """
    Streams the blocks of a Lark docx document through the Open API.
    """

    def __init__(self, client: LarkClient, document_id: str, page_size: int = 500):
        """
        Initialize the source.

        Args:
            client: An authenticated-capable LarkClient
            document_id: The docx document token
            page_size: Blocks requested per page
        """
        self.client = client
        self.document_id = document_id
        self.page_size = page_size

    def iter_blocks(self) -> Iterator[Block]:
        logging.info(f"Loading blocks of Lark document {self.document_id}...")
        count = 0
        try:
            for item in self.client.list_document_blocks(self.document_id, self.page_size):
                yield Block.from_lark(item)
                count += 1
        except LarkAPIError as e:
            raise FetchError(f"Fetching blocks of document {self.document_id} failed: {e}") from e
        except ValidationError as e:
            raise FetchError(f"Document {self.document_id} returned a malformed block: {e}") from e
        logging.info(f"Loaded {count} blocks from Lark document {self.document_id}")
