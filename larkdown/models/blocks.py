"""
Block data models for larkdown.

This module defines the immutable snapshots of a Lark document's blocks as they
are delivered by a block source, and the parsing of the Lark Open API JSON shape
into those snapshots.
"""

from enum import IntEnum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class BlockType(IntEnum):
    """Block type codes used by the Lark docx API."""

    PAGE = 1
    TEXT = 2
    HEADING1 = 3
    HEADING2 = 4
    HEADING3 = 5
    HEADING4 = 6
    HEADING5 = 7
    HEADING6 = 8
    HEADING7 = 9
    HEADING8 = 10
    HEADING9 = 11
    BULLET = 12
    ORDERED = 13
    CODE = 14
    QUOTE = 15
    TODO = 17
    CALLOUT = 19
    DIVIDER = 22
    IMAGE = 27
    TABLE = 31
    TABLE_CELL = 32
    QUOTE_CONTAINER = 34


# Key of the text container inside a Lark block item, per block type
TEXT_PAYLOAD_KEYS: Dict[int, str] = {
    BlockType.PAGE: "page",
    BlockType.TEXT: "text",
    BlockType.BULLET: "bullet",
    BlockType.ORDERED: "ordered",
    BlockType.CODE: "code",
    BlockType.QUOTE: "quote",
    BlockType.TODO: "todo",
}
TEXT_PAYLOAD_KEYS.update({BlockType.HEADING1 + n: f"heading{n + 1}" for n in range(9)})


def heading_level(block_type: int) -> Optional[int]:
    """Return the heading level (1-9) for a heading block type, else None."""
    if BlockType.HEADING1 <= block_type <= BlockType.HEADING9:
        return block_type - BlockType.HEADING1 + 1
    return None


class TextStyle(BaseModel):
    """
    Inline style flags of a single text run.
    """

    model_config = ConfigDict(frozen=True)

    bold: bool = False
    italic: bool = False
    inline_code: bool = False
    strikethrough: bool = False
    underline: bool = False
    link: Optional[str] = Field(
        default=None,
        description="Target URL of the run, still percent-encoded as delivered by the API"
    )

    @classmethod
    def from_lark(cls, data: Optional[Dict[str, Any]]) -> "TextStyle":
        """Parse a Lark ``text_element_style`` object."""
        data = data or {}
        link = data.get("link") or {}
        return cls(
            bold=bool(data.get("bold")),
            italic=bool(data.get("italic")),
            inline_code=bool(data.get("inline_code")),
            strikethrough=bool(data.get("strikethrough")),
            underline=bool(data.get("underline")),
            link=link.get("url") or None,
        )


class TextRun(BaseModel):
    """
    The atomic inline unit: literal content with one style combination.
    """

    model_config = ConfigDict(frozen=True)

    content: str = Field(
        default="",
        description="Literal text of the run"
    )

    style: TextStyle = Field(
        default_factory=TextStyle,
        description="Style flags applied to the whole run"
    )

    @classmethod
    def from_lark_element(cls, element: Dict[str, Any]) -> Optional["TextRun"]:
        """
        Convert one Lark inline element into a run.

        Mentions become runs linking to their target; element kinds without a
        textual meaning are dropped.

        Args:
            element: One entry of a Lark text container's ``elements`` list

        Returns:
            The equivalent TextRun, or None if the element carries no text
        """
        text_run = element.get("text_run")
        if text_run is not None:
            return cls(
                content=text_run.get("content") or "",
                style=TextStyle.from_lark(text_run.get("text_element_style")),
            )

        mention_doc = element.get("mention_doc")
        if mention_doc is not None:
            style = TextStyle.from_lark(mention_doc.get("text_element_style"))
            url = mention_doc.get("url")
            if url:
                style = style.model_copy(update={"link": url})
            title = mention_doc.get("title") or mention_doc.get("token") or ""
            return cls(content=title, style=style)

        mention_user = element.get("mention_user")
        if mention_user is not None:
            user_id = mention_user.get("user_id") or "unknown"
            return cls(
                content=f"@{user_id}",
                style=TextStyle.from_lark(mention_user.get("text_element_style")),
            )

        equation = element.get("equation")
        if equation is not None:
            latex = (equation.get("content") or "").strip()
            if not latex:
                return None
            return cls(
                content=f"${latex}$",
                style=TextStyle.from_lark(equation.get("text_element_style")),
            )

        return None


class TextPayload(BaseModel):
    """
    Payload of every text-bearing block type.
    """

    model_config = ConfigDict(frozen=True)

    runs: List[TextRun] = Field(default_factory=list)
    align: Optional[int] = Field(
        default=None,
        description="Paragraph alignment: 1 left, 2 center, 3 right"
    )
    done: bool = Field(
        default=False,
        description="Completion flag of a Todo block"
    )
    language: Optional[int] = Field(
        default=None,
        description="Language id of a Code block"
    )

    @classmethod
    def from_lark(cls, data: Dict[str, Any]) -> "TextPayload":
        runs = []
        for element in data.get("elements") or []:
            run = TextRun.from_lark_element(element)
            if run is not None:
                runs.append(run)
        style = data.get("style") or {}
        return cls(
            runs=runs,
            align=style.get("align"),
            done=bool(style.get("done")),
            language=style.get("language"),
        )


class ImagePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    token: str
    width: int = 0
    height: int = 0


class TablePayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    row_size: Optional[int] = None
    column_size: Optional[int] = None
    cells: List[str] = Field(
        default_factory=list,
        description="Cell block ids in row-major order, when the API provides them"
    )


class CalloutPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    emoji_id: Optional[str] = None
    background_color: Optional[int] = None


class Block(BaseModel):
    """
    One structural unit of a Lark document, as delivered in the flat block list.

    Parent/child structure is expressed only through ids; the tree is rebuilt
    by ``larkdown.rendering.tree.build_tree``.
    """

    model_config = ConfigDict(frozen=True)

    block_id: str = Field(
        ...,
        description="Identifier of the block, unique within the document"
    )

    block_type: int = Field(
        ...,
        description="Lark block type code (see BlockType); unknown codes are kept as-is"
    )

    parent_id: str = Field(
        default="",
        description="Identifier of the structural parent, empty for the root"
    )

    children: List[str] = Field(
        default_factory=list,
        description="Ordered identifiers of child blocks"
    )

    text: Optional[TextPayload] = None
    image: Optional[ImagePayload] = None
    table: Optional[TablePayload] = None
    callout: Optional[CalloutPayload] = None

    @property
    def is_sentinel(self) -> bool:
        """True for the content-less placeholder that may lead a block list."""
        return not self.block_id and self.block_type == 0

    @classmethod
    def sentinel(cls) -> "Block":
        return cls(block_id="", block_type=0)

    @classmethod
    def from_lark(cls, item: Dict[str, Any]) -> "Block":
        """
        Parse one item of the Lark ``documents/{id}/blocks`` listing.

        Args:
            item: The raw block dictionary

        Returns:
            The parsed Block
        """
        block_type = int(item.get("block_type") or 0)
        children = list(item.get("children") or [])

        text = None
        text_key = TEXT_PAYLOAD_KEYS.get(block_type)
        if text_key and isinstance(item.get(text_key), dict):
            text = TextPayload.from_lark(item[text_key])

        image = None
        image_data = item.get("image")
        if isinstance(image_data, dict) and image_data.get("token"):
            image = ImagePayload(
                token=image_data["token"],
                width=int(image_data.get("width") or 0),
                height=int(image_data.get("height") or 0),
            )

        table = None
        table_data = item.get("table")
        if isinstance(table_data, dict):
            prop = table_data.get("property") or {}
            cells = [cell for cell in table_data.get("cells") or [] if isinstance(cell, str)]
            table = TablePayload(
                row_size=prop.get("row_size"),
                column_size=prop.get("column_size"),
                cells=cells,
            )
            if not children:
                children = list(cells)

        callout = None
        callout_data = item.get("callout")
        if isinstance(callout_data, dict):
            callout = CalloutPayload(
                emoji_id=callout_data.get("emoji_id"),
                background_color=callout_data.get("background_color"),
            )

        return cls(
            block_id=item.get("block_id") or "",
            block_type=block_type,
            parent_id=item.get("parent_id") or "",
            children=children,
            text=text,
            image=image,
            table=table,
            callout=callout,
        )
