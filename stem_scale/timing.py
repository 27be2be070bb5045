"""Simple stop watch to time the successive tasks of a computation."""

import logging
import time

logger = logging.getLogger(__name__)


class StopWatch:
    """Measures the duration of a sequence of named tasks.

    Starting a task stops the current one, if any.

    Example:
        >>> watch = StopWatch("Stem scaler for page-1")
        >>> watch.start("erase")
        >>> watch.start("histogram")
        >>> watch.stop()
        >>> watch.print()
    """

    def __init__(self, name: str):
        self.name = name
        self.tasks: list[tuple[str, float]] = []
        self._task: str | None = None
        self._started = 0.0

    def start(self, task: str) -> None:
        self.stop()
        self._task = task
        self._started = time.perf_counter()

    def stop(self) -> None:
        if self._task is not None:
            self.tasks.append((self._task, time.perf_counter() - self._started))
            self._task = None

    @property
    def total(self) -> float:
        return sum(duration for _, duration in self.tasks)

    def summary(self) -> str:
        """Render the durations of all completed tasks as a text table."""
        self.stop()
        total = self.total
        lines = [f"{self.name}: {total * 1000:.1f} ms"]
        for task, duration in self.tasks:
            share = duration / total * 100 if total > 0 else 0.0
            lines.append(f"  {duration * 1000:9.2f} ms {share:5.1f}% {task}")
        return "\n".join(lines)

    def print(self) -> None:
        """Log the summary at INFO level."""
        logger.info(self.summary())
