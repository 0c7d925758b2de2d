import threading

import pytest

from ytexport_core.errors import ContainerNotFoundError, ExtractionCancelled
from ytexport_core.loader import Delay, StabilizingLoader

from conftest import FakeDocument, make_items


def test_no_scroll_when_target_already_loaded(delay):
    doc = FakeDocument(make_items(10))
    items = StabilizingLoader(doc, delay=delay).load(10, scroll_delay_ms=50, stable_scroll_limit=3)
    assert len(items) == 10
    assert doc.scrolls == 0
    assert delay.calls == []


def test_scrolls_until_target_reached(delay):
    doc = FakeDocument(make_items(30), initial=4, per_scroll=4)
    loader = StabilizingLoader(doc, delay=delay)
    items = loader.load(12, scroll_delay_ms=50, stable_scroll_limit=3)
    assert len(items) == 12
    assert doc.scrolls == 2
    assert delay.calls == [50, 50]
    assert loader.last_session.current_item_count == 12
    assert loader.last_session.consecutive_stable_scrolls == 0


def test_overshoot_returns_everything_loaded(delay):
    doc = FakeDocument(make_items(30), initial=0, per_scroll=20)
    assert len(StabilizingLoader(doc, delay=delay).load(5, 0, 2)) == 20


@pytest.mark.parametrize("limit", [1, 2, 5])
def test_stall_limit_bounds_the_loop(delay, limit):
    # three threads appear one per scroll, then nothing more ever loads
    doc = FakeDocument(make_items(3), initial=0, per_scroll=1)
    loader = StabilizingLoader(doc, delay=delay)
    items = loader.load(5, scroll_delay_ms=0, stable_scroll_limit=limit)
    assert len(items) == 3
    assert doc.scrolls == 3 + limit
    assert loader.last_session.stalled


def test_growth_resets_the_stall_counter(delay):
    class Bursty(FakeDocument):
        # grows on scrolls 2 and 4 only
        def scroll_to_bottom(self):
            self.scrolls += 1
            if self.scrolls in (2, 4):
                self.visible += 2

    doc = Bursty(make_items(10), initial=2)
    loader = StabilizingLoader(doc, delay=delay)
    items = loader.load(10, 0, 2)
    # 1 stall, grow, 1 stall, grow, 2 stalls -> stop
    assert doc.scrolls == 6
    assert len(items) == 6


def test_log_lines(delay, log):
    doc = FakeDocument(make_items(1), initial=1)
    StabilizingLoader(doc, delay=delay, log_callback=log.append).load(2, 0, 2)
    assert "YT Comment Exporter: Found 1 comments so far." in log
    assert "YT Comment Exporter: No new comments loaded. Attempt 2/2" in log
    assert log[-1] == "YT Comment Exporter: Stopping scroll. No new comments loaded after several attempts."


def test_reveal_waits_settle_delay(delay):
    doc = FakeDocument(make_items(1))
    StabilizingLoader(doc, delay=delay, settle_delay_ms=1500).reveal()
    assert doc.reveals == 1
    assert delay.calls == [1500]


def test_reveal_without_container_raises(delay):
    doc = FakeDocument(make_items(1), has_container=False)
    with pytest.raises(ContainerNotFoundError):
        StabilizingLoader(doc, delay=delay).reveal()
    assert delay.calls == []


@pytest.mark.parametrize("args", [(0, 0, 1), (-3, 0, 1), (5, -1, 1), (5, 0, 0), (True, 0, 1), ("5", 0, 1)])
def test_invalid_arguments(delay, args):
    doc = FakeDocument(make_items(1))
    with pytest.raises(ValueError):
        StabilizingLoader(doc, delay=delay).load(*args)
    assert doc.scrolls == 0


def test_delay_cancel_interrupts_wait():
    d = Delay()
    threading.Timer(0.05, d.cancel).start()
    with pytest.raises(ExtractionCancelled):
        d(10_000)
    assert d.cancelled
    d.reset()
    d(0)


def test_cancelled_delay_stops_the_loop():
    d = Delay()
    d.cancel()
    doc = FakeDocument(make_items(5), initial=1, per_scroll=1)
    with pytest.raises(ExtractionCancelled):
        StabilizingLoader(doc, delay=d).load(5, 10, 3)
    assert doc.scrolls == 1
