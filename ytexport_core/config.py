"""
Defaults and host-side validation for a comment extraction run.
"""

import os
from dataclasses import dataclass

# Page structure
CONTAINER_SELECTOR = "#comments"
ITEM_SELECTOR = "ytd-comment-thread-renderer"
WATCH_URL_MARKER = "youtube.com/watch"

# Timing
SCROLL_DELAY_MS = 2000
SETTLE_DELAY_MS = 2000      # after bringing #comments into view
MAX_STABLE_SCROLLS = 5      # stop after this many scrolls with no new comments
CONTAINER_WAIT_S = 12

DEFAULT_TARGET_COUNT = 100
LOG_PREFIX = "YT Comment Exporter:"

# under the directory the app is launched from
EXPORT_DIR = os.path.abspath("output")


@dataclass
class ExtractionSettings:
    scroll_delay_ms: int = SCROLL_DELAY_MS
    settle_delay_ms: int = SETTLE_DELAY_MS
    stable_scroll_limit: int = MAX_STABLE_SCROLLS
    container_wait_s: float = CONTAINER_WAIT_S
    output_dir: str = EXPORT_DIR
    headless: bool = False

    def validate(self) -> "ExtractionSettings":
        if self.scroll_delay_ms < 0 or self.settle_delay_ms < 0:
            raise ValueError("Delays must be zero or more milliseconds.")
        if self.stable_scroll_limit < 1:
            raise ValueError("Stable scroll limit must be at least 1.")
        if self.container_wait_s < 0:
            raise ValueError("Container wait must be zero or more seconds.")
        return self


def parse_target_count(raw) -> int:
    """Turn the count typed by the user into a positive int, or raise ValueError."""
    if isinstance(raw, bool):
        raise ValueError("Please enter a valid number.")
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw if raw is not None else "").strip()
        try:
            value = int(text, 10)
        except ValueError:
            raise ValueError("Please enter a valid number.") from None
    if value <= 0:
        raise ValueError("Please enter a valid number.")
    return value


def is_watch_page(url) -> bool:
    return bool(url) and WATCH_URL_MARKER in url
