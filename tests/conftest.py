import pytest

from ytexport_core.extractor import (
    AUTHOR_SELECTOR,
    CONTENT_SELECTOR,
    LIKES_SELECTOR,
    PUBLISHED_TIME_SELECTOR,
)


class FakeItem:
    """A comment thread; each field is its raw textContent or None when the node is missing."""

    def __init__(self, author="user", content="hello", published="1 day ago", likes="3"):
        self.texts = {
            AUTHOR_SELECTOR: author,
            CONTENT_SELECTOR: content,
            PUBLISHED_TIME_SELECTOR: published,
            LIKES_SELECTOR: likes,
        }

    def text_of(self, selector):
        return self.texts.get(selector)


class FakeDocument:
    """
    Page with `items` available in total, `initial` of them rendered up front and
    `per_scroll` more rendered after every scroll.
    """

    def __init__(self, items, initial=None, per_scroll=0, has_container=True, title="Some Video - YouTube"):
        self.all_items = list(items)
        self.visible = len(self.all_items) if initial is None else min(initial, len(self.all_items))
        self.per_scroll = per_scroll
        self.has_container = has_container
        self._title = title
        self.scrolls = 0
        self.reveals = 0
        self.count_reads = 0

    def title(self):
        return self._title

    def reveal_container(self):
        self.reveals += 1
        return self.has_container

    def current_item_count(self):
        self.count_reads += 1
        return self.visible

    def item_at(self, index):
        return self.items()[index]

    def items(self):
        return self.all_items[: self.visible]

    def scroll_to_bottom(self):
        self.scrolls += 1
        self.visible = min(len(self.all_items), self.visible + self.per_scroll)


class RecordingDelay:
    def __init__(self):
        self.calls = []

    def __call__(self, ms):
        self.calls.append(ms)


def make_items(n, **overrides):
    return [FakeItem(**{"author": f"@user{i}", "content": f"comment {i}", **overrides}) for i in range(n)]


@pytest.fixture
def delay():
    return RecordingDelay()


@pytest.fixture
def log():
    return []
