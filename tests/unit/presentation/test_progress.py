"""
Tests for the progress observers.
"""

import datetime
import logging

from zendeskapi.presentation.progress import LoggingProgressObserver, TqdmProgressObserver
from zendeskapi.core.types import SearchProgress


def snapshot(current, total, processed):
    return SearchProgress(
        total_pages=total,
        current_page=current,
        processed_count=processed,
        estimated_total=processed,
        start_time=datetime.datetime(2024, 1, 1),
        elapsed_ms=1500,
    )


def test_logging_observer(caplog):
    observer = LoggingProgressObserver("tickets")
    with caplog.at_level(logging.INFO, logger="zendeskapi.presentation.progress"):
        observer(snapshot(2, 3, 200))

    assert observer.last.current_page == 2
    assert "tickets: page 2/3, 200 results" in caplog.text


def test_tqdm_observer_tracks_growing_total():
    with TqdmProgressObserver(disable=True) as observer:
        observer(snapshot(1, 2, 100))
        assert observer.bar.total == 2
        observer(snapshot(2, 3, 200))
        assert observer.bar.total == 3
        assert observer.bar.n == 2
