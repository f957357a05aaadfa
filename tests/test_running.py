import logging

from nvframe.running import RunningTracker


def test_starts_running():
    tracker = RunningTracker()
    assert tracker.is_running() is True


def test_quit_stops_running():
    tracker = RunningTracker()
    tracker.quit("window closed")
    assert tracker.is_running() is False


def test_quit_is_idempotent():
    tracker = RunningTracker()
    tracker.quit("first")
    tracker.quit("second")
    assert tracker.is_running() is False


def test_quit_logs_reason(caplog):
    tracker = RunningTracker()
    with caplog.at_level(logging.INFO, logger="nvframe.running"):
        tracker.quit("window closed")
    assert "Quit window closed" in caplog.text


def test_trackers_are_independent():
    first = RunningTracker()
    second = RunningTracker()
    first.quit("done")
    assert second.is_running() is True