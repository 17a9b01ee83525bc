"""
Cancellation support for larkdown renders.
"""

import threading
import time
from typing import Optional

from .errors import RenderCancelled


class CancelToken:
    """
    Cancellation signal checked before every external call of a render.

    A token is cancelled either explicitly, from any thread, via cancel(), or
    implicitly once its deadline has passed.
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize the token.

        Args:
            timeout: Seconds from now after which the token counts as
                cancelled (None for no deadline)
        """
        self._event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        """True once cancel() was called or the deadline passed."""
        return self._event.is_set() or self._expired()

    def _expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self) -> None:
        """
        Raise RenderCancelled if the token has been cancelled.

        Raises:
            RenderCancelled: If cancel() was called or the deadline passed
        """
        if not self.cancelled:
            return
        if self._event.is_set():
            raise RenderCancelled("render cancelled")
        raise RenderCancelled("render deadline exceeded")
