"""
Inline rendering of text runs.

Adjacent runs sharing a style are merged into a single delimited span, so
``[bold "a", bold "b"]`` renders as ``**ab**`` rather than ``**a****b**``.
Links are resolved to literal ``[text](url)`` content before merging and are
therefore never tracked as open/close delimiters.
"""

from typing import Iterable, List, Tuple
from urllib.parse import unquote

from ..models import TextRun, TextStyle

# (style flag, opening delimiter, closing delimiter), in opening order
DELIMITERS: Tuple[Tuple[str, str, str], ...] = (
    ("bold", "**", "**"),
    ("inline_code", "`", "`"),
    ("italic", "*", "*"),
    ("strikethrough", "~~", "~~"),
    ("underline", "<u>", "</u>"),
)

_PLAIN = TextStyle()


def unescape_url(url: str) -> str:
    """Percent-decode a link URL as delivered by the Lark API."""
    return unquote(url)


def link_content(run: TextRun) -> str:
    """Return the run's literal content, wrapped as a Markdown link if it has one."""
    if run.style.link:
        return f"[{run.content}]({unescape_url(run.style.link)})"
    return run.content


class StyleMerger:
    """
    Tracks which delimiters are open while runs are appended.
    """

    def __init__(self):
        self._parts: List[str] = []
        self._open: List[Tuple[str, str, str]] = []
        self._current = _PLAIN

    def append(self, run: TextRun) -> None:
        style = run.style.model_copy(update={"link": None})
        if style != self._current:
            self._close_all()
            self._open_for(style)
            self._current = style
        self._parts.append(link_content(run))

    def finish(self) -> str:
        self._close_all()
        self._current = _PLAIN
        return "".join(self._parts)

    def _open_for(self, style: TextStyle) -> None:
        for delimiter in DELIMITERS:
            if getattr(style, delimiter[0]):
                self._parts.append(delimiter[1])
                self._open.append(delimiter)

    def _close_all(self) -> None:
        # Innermost first so nested spans stay balanced
        while self._open:
            self._parts.append(self._open.pop()[2])


def render_inline(runs: Iterable[TextRun]) -> str:
    """
    Render a run sequence to a Markdown inline string with merged styles.

    Args:
        runs: The runs of one text container, in order

    Returns:
        The Markdown text; empty for an empty sequence
    """
    merger = StyleMerger()
    for run in runs:
        merger.append(run)
    return merger.finish()


def render_plain(runs: Iterable[TextRun]) -> str:
    """Concatenate run contents literally, ignoring every style flag."""
    return "".join(run.content for run in runs)
