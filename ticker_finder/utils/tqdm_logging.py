"""
Tqdm-compatible logging utilities.

Log messages written while a progress bar is on screen would break the bar
across lines. Routing them through tqdm.write() keeps the bar intact.
"""

import logging
import sys
from typing import TextIO

from tqdm import tqdm


class TqdmLoggingHandler(logging.Handler):
    """
    Logging handler that writes through tqdm.write() to avoid progress bar interference.

    Usage:
        handler = TqdmLoggingHandler(level=logging.INFO)
        logger.addHandler(handler)
    """

    def __init__(self, level: int = logging.NOTSET, stream: TextIO | None = None):
        """
        Initialize the handler.

        Args:
            level: Minimum logging level to handle
            stream: Output stream (default: sys.stderr for tqdm compatibility)
        """
        super().__init__(level)
        self.stream = stream or sys.stderr

    def emit(self, record: logging.LogRecord) -> None:
        """Emit a log record through tqdm.write()."""
        try:
            msg = self.format(record)
            tqdm.write(msg, file=self.stream)
        except RecursionError:
            raise
        except Exception:
            self.handleError(record)


class TqdmProgressReporter:
    """
    Progress callback that drives a tqdm bar from pipeline status messages.

    Each "Searching i/n: name" message advances the bar to i-1 completed
    lookups and shows the message as the bar description.

    Args:
        total: Number of queries in the batch
        disable: Turn the bar off (messages are still kept)
        stream: Output stream for the bar (default: sys.stderr)
    """

    def __init__(self, total: int, disable: bool = False, stream: TextIO | None = None):
        self.last_message = ""
        self._bar = tqdm(
            total=total,
            unit="company",
            file=stream or sys.stderr,
            disable=disable,
            dynamic_ncols=True,
        )

    def __call__(self, message: str) -> None:
        self.last_message = message
        completed = _completed_from_message(message)
        if completed is not None and completed > self._bar.n:
            self._bar.update(completed - self._bar.n)
        self._bar.set_description_str(message)

    def finish(self, message: str | None = None) -> None:
        """Mark every lookup as done."""
        if self._bar.n < self._bar.total:
            self._bar.update(self._bar.total - self._bar.n)
        if message:
            self.last_message = message
            self._bar.set_description_str(message)

    def close(self) -> None:
        self._bar.close()

    def __enter__(self) -> "TqdmProgressReporter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def _completed_from_message(message: str) -> int | None:
    # "Searching 3/10: Foo" -> 2 lookups already done
    if not message.startswith("Searching "):
        return None
    position = message[len("Searching ") :].split("/", 1)[0]
    if not position.isdigit():
        return None
    return int(position) - 1
