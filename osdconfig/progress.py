"""A text progress bar."""

from __future__ import annotations

import threading

BLOCK = "\u2588"


class ProgressBar:
    """Tracks progress towards a maximum and renders it as rows of characters."""

    def __init__(
        self,
        maximum: int = 100,
        *,
        filled_char: str = BLOCK,
        empty_char: str = BLOCK,
        vertical: bool = False,
    ) -> None:
        self._lock = threading.RLock()
        self._max = maximum
        self._progress = 0
        self.filled_char = filled_char
        self.empty_char = empty_char
        self.vertical = vertical

    def _clamp(self, value: int) -> int:
        return max(0, min(value, self._max))

    @property
    def maximum(self) -> int:
        """Progress required to fill the bar."""
        with self._lock:
            return self._max

    @maximum.setter
    def maximum(self, value: int) -> None:
        with self._lock:
            self._max = value

    @property
    def progress(self) -> int:
        """Current progress, kept between 0 and the maximum."""
        with self._lock:
            return self._progress

    @progress.setter
    def progress(self, value: int) -> None:
        with self._lock:
            self._progress = self._clamp(value)

    def add_progress(self, amount: int) -> None:
        """Add ``amount`` to the current progress, clamping to the valid range."""
        with self._lock:
            self._progress = self._clamp(self._progress + amount)

    @property
    def complete(self) -> bool:
        """Whether the bar has been filled."""
        with self._lock:
            return self._progress >= self._max

    def render(self, width: int, height: int) -> list[str]:
        """Return ``height`` rows of ``width`` characters drawing the bar.

        Horizontal bars fill from the left, vertical ones from the bottom.
        """
        width = max(width, 0)
        height = max(height, 0)
        with self._lock:
            length = height if self.vertical else width
            if self._max <= 0:
                filled = length
            else:
                filled = round(length * (self._progress / self._max))
            filled = min(filled, length)

            if self.vertical:
                return [
                    (self.filled_char if height - 1 - row < filled else self.empty_char) * width
                    for row in range(height)
                ]
            row = self.filled_char * filled + self.empty_char * (width - filled)
            return [row] * height