# -*- coding: utf-8 -*-

"""
Scroll-until-stable loading of comment threads.

YouTube only renders more threads as the page is scrolled. The loader keeps
scrolling to the bottom until enough threads exist or the count has stopped
growing for `stable_scroll_limit` consecutive scrolls.
"""

import threading
from dataclasses import dataclass
from typing import Callable, List, Optional

from ytexport_core.config import (
    LOG_PREFIX,
    MAX_STABLE_SCROLLS,
    SCROLL_DELAY_MS,
    SETTLE_DELAY_MS,
)
from ytexport_core.errors import ContainerNotFoundError, ExtractionCancelled


class Delay:
    """Sleep in milliseconds that another thread can cut short with cancel()."""

    def __init__(self):
        self._cancelled = threading.Event()

    def __call__(self, ms: int) -> None:
        if self._cancelled.wait(max(ms, 0) / 1000.0):
            raise ExtractionCancelled("Extraction stopped.")

    def cancel(self) -> None:
        self._cancelled.set()

    def reset(self) -> None:
        self._cancelled.clear()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()


@dataclass
class ExtractionSession:
    target_count: int
    scroll_delay_ms: int
    stable_scroll_limit: int
    current_item_count: int = 0
    consecutive_stable_scrolls: int = 0
    cycles: int = 0

    @property
    def stalled(self) -> bool:
        return self.consecutive_stable_scrolls >= self.stable_scroll_limit

    @property
    def reached_target(self) -> bool:
        return self.current_item_count >= self.target_count


def _check_positive(name: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


class StabilizingLoader:
    def __init__(
        self,
        document,
        delay: Optional[Callable[[int], None]] = None,
        log_callback: Optional[Callable[[str], None]] = None,
        settle_delay_ms: int = SETTLE_DELAY_MS,
    ):
        self.document = document
        self.delay = delay or Delay()
        self.log_callback = log_callback
        self.settle_delay_ms = settle_delay_ms
        self.last_session: Optional[ExtractionSession] = None

    def _log(self, msg: str) -> None:
        if self.log_callback:
            self.log_callback(f"{LOG_PREFIX} {msg}")

    def reveal(self) -> None:
        """Bring the comments section into view so YouTube starts loading it."""
        if not self.document.reveal_container():
            raise ContainerNotFoundError("Could not find the comments section (#comments).")
        self.delay(self.settle_delay_ms)

    def load(
        self,
        target_count: int,
        scroll_delay_ms: int = SCROLL_DELAY_MS,
        stable_scroll_limit: int = MAX_STABLE_SCROLLS,
    ) -> List:
        """
        Scroll until `target_count` threads are rendered or growth stalls.

        Returns every rendered thread handle, which may be more or fewer than
        requested. Call reveal() first.
        """
        _check_positive("target_count", target_count)
        _check_positive("stable_scroll_limit", stable_scroll_limit)
        if isinstance(scroll_delay_ms, bool) or not isinstance(scroll_delay_ms, int) or scroll_delay_ms < 0:
            raise ValueError(f"scroll_delay_ms must be >= 0, got {scroll_delay_ms!r}")

        session = ExtractionSession(target_count, scroll_delay_ms, stable_scroll_limit)
        self.last_session = session
        session.current_item_count = self.document.current_item_count()

        while not session.reached_target:
            last_count = session.current_item_count
            self.document.scroll_to_bottom()
            self._log("Scrolling down...")
            self.delay(scroll_delay_ms)
            session.cycles += 1

            session.current_item_count = self.document.current_item_count()
            self._log(f"Found {session.current_item_count} comments so far.")

            if session.current_item_count == last_count:
                session.consecutive_stable_scrolls += 1
                self._log(
                    "No new comments loaded. Attempt "
                    f"{session.consecutive_stable_scrolls}/{stable_scroll_limit}"
                )
            else:
                session.consecutive_stable_scrolls = 0

            if session.stalled:
                self._log("Stopping scroll. No new comments loaded after several attempts.")
                break

        return self.document.items()
