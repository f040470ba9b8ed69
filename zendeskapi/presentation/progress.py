"""
Progress observers for long running searches.

Both observers are plain callables accepting a SearchProgress, so either
can be passed wherever a progress observer is expected.
"""

from typing import Optional

from tqdm import tqdm

from ..core.logging import get_logger
from ..core.types import SearchProgress


logger = get_logger(__name__)


class LoggingProgressObserver:
    """Logs every progress snapshot at INFO."""

    def __init__(self, label: str = "search"):
        self.label = label
        self.last: Optional[SearchProgress] = None

    def __call__(self, progress: SearchProgress) -> None:
        self.last = progress
        logger.info(
            f"{self.label}: page {progress.current_page}/{progress.total_pages}, "
            f"{progress.processed_count} results in {progress.elapsed_ms / 1000:.1f}s"
        )


class TqdmProgressObserver:
    """
    Drives a tqdm bar from progress snapshots.

    The bar total follows the estimated page (or partition) count, which
    can grow while a paged search runs.
    """

    def __init__(self, desc: str = "Searching", unit: str = "page", disable: bool = False):
        self.bar = tqdm(
            total=0,
            desc=desc,
            unit=unit,
            bar_format="{desc} {percentage:3.0f}% |{bar:30}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]",
            ncols=100,
            disable=disable,
        )

    def __call__(self, progress: SearchProgress) -> None:
        if progress.total_pages != self.bar.total:
            self.bar.total = progress.total_pages
        self.bar.n = progress.current_page
        self.bar.set_postfix_str(f"{progress.processed_count} results")
        self.bar.refresh()

    def close(self) -> None:
        self.bar.close()

    def __enter__(self) -> "TqdmProgressObserver":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
