"""Cancellation and inter-sentence pacing primitives.

Responsibilities:
- Expose a cancellation token checked at per-sentence iteration boundaries.
- Provide an injectable, cancellable pause between narrated sentences.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import threading
from typing import Callable


class CancellationToken:
    """Thread-safe cancellation flag that also interrupts pending waits."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Block up to `seconds`; return `True` when cancelled meanwhile."""

        return self._event.wait(seconds)


@dataclass(slots=True)
class Pacer:
    """Pause strategy used between sentences.

    Without a `sleeper` the pause waits on the cancellation token, so cancelling
    a run ends the current pause immediately. Tests inject a recording sleeper
    or a zero `pause_seconds`.
    """

    pause_seconds: float = 0.3
    sleeper: Callable[[float], object] | None = None
    cancellation: CancellationToken = field(default_factory=CancellationToken)

    def pause(self) -> None:
        """Suspend for the configured pause unless cancelled or disabled."""

        if self.pause_seconds <= 0.0 or self.cancellation.cancelled:
            return
        if self.sleeper is not None:
            self.sleeper(self.pause_seconds)
            return
        self.cancellation.wait(self.pause_seconds)
