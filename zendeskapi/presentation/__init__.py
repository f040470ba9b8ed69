"""Console presentation helpers."""

from .progress import LoggingProgressObserver, TqdmProgressObserver


__all__ = ["LoggingProgressObserver", "TqdmProgressObserver"]
