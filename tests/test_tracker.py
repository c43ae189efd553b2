"""
Debounce rules for turning editor activity into heartbeats
"""

from hackerlog_agent.constants import DEBOUNCE_MS
from hackerlog_agent.tracker import ActivityFilter


def test_first_event_always_emits() -> None:
    f = ActivityFilter()
    assert f.should_emit("/src/a.py", False, 5.0)


def test_same_file_within_window_is_suppressed() -> None:
    f = ActivityFilter()
    assert f.should_emit("/src/a.py", False, 1_000_000)
    for elapsed in (1, 500, 60_000, DEBOUNCE_MS - 1):
        assert not f.should_emit("/src/a.py", False, 1_000_000 + elapsed)


def test_suppressed_events_do_not_move_watermark() -> None:
    f = ActivityFilter()
    f.should_emit("/src/a.py", False, 1_000_000)
    f.should_emit("/src/a.py", False, 1_050_000)
    assert f.last_event_ms == 1_000_000
    assert f.should_emit("/src/a.py", False, 1_000_000 + DEBOUNCE_MS)


def test_window_elapsed_emits_again() -> None:
    f = ActivityFilter()
    f.should_emit("/src/a.py", False, 1_000_000)
    assert f.should_emit("/src/a.py", False, 1_000_000 + DEBOUNCE_MS)


def test_save_is_never_suppressed() -> None:
    f = ActivityFilter()
    f.should_emit("/src/a.py", False, 1_000_000)
    assert f.should_emit("/src/a.py", True, 1_000_001)
    assert f.should_emit("/src/a.py", True, 1_000_002)


def test_file_switch_emits_once_per_switch() -> None:
    f = ActivityFilter()
    now = 1_000_000
    assert f.should_emit("/src/a.py", False, now)
    assert f.should_emit("/src/b.py", False, now + 10)
    assert not f.should_emit("/src/b.py", False, now + 20)
    assert f.should_emit("/src/a.py", False, now + 30)
    assert f.last_file == "/src/a.py"
    assert f.last_event_ms == now + 30
