"""
JSON dump block source for larkdown.

Reads blocks saved from the Lark docx API, either as a bare list of block
items, as ``{"items": [...]}``, or as a complete API response with
``{"data": {"items": [...]}}``.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterator, List

from pydantic import ValidationError

from ..errors import FetchError
from ..models import Block
from .base import BaseBlockSource


class JsonFileSource(BaseBlockSource):
    """
    Block source backed by a JSON file on disk.
    """

    def __init__(self, path: str):
        self.path = Path(path)

    def iter_blocks(self) -> Iterator[Block]:
        items = self._load_items()
        logging.info(f"Loaded {len(items)} blocks from {self.path}")
        for index, item in enumerate(items):
            try:
                yield Block.from_lark(item)
            except (ValidationError, TypeError, ValueError, AttributeError) as e:
                raise FetchError(f"Block {index} in {self.path} is malformed: {e}") from e

    def _load_items(self) -> List[Any]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise FetchError(f"Could not read blocks from {self.path}: {e}") from e

        if isinstance(data, dict):
            inner = data.get("data")
            data = (inner if isinstance(inner, dict) else data).get("items")
        if not isinstance(data, list):
            raise FetchError(f"{self.path} does not contain a list of blocks")
        return data
