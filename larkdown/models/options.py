"""
Render options for larkdown.
"""

from pydantic import BaseModel, Field

# Rendering recurses once per nesting level; deeper limits would reach the
# interpreter recursion limit
MAX_RENDER_DEPTH = 256


class RenderOptions(BaseModel):
    """
    Caller-supplied configuration of one document render.
    """

    media_dir: str = Field(
        default="",
        description="Directory mirrored media is written to; empty means media is not downloaded"
    )

    media_url_prefix: str = Field(
        default="",
        description="Path prefix written into Markdown references to mirrored media"
    )

    resolve_media_as_remote_url: bool = Field(
        default=True,
        description="Embed a temporary remote URL instead of downloading media"
    )

    use_admonition_style: bool = Field(
        default=False,
        description="Render coloured callouts as GitHub '> [!NOTE]' admonitions"
    )

    image_html_tag: bool = Field(
        default=False,
        description="Emit <img> tags carrying width and height instead of ![alt](ref)"
    )

    max_depth: int = Field(
        default=MAX_RENDER_DEPTH,
        ge=1,
        le=MAX_RENDER_DEPTH,
        description="Deepest block nesting that is rendered before giving up on a subtree"
    )

    @property
    def downloads_media(self) -> bool:
        """True when images are mirrored locally rather than linked remotely."""
        return not self.resolve_media_as_remote_url and bool(self.media_dir)
