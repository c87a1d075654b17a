import time
from collections.abc import Callable, Sequence
from enum import Enum

DEFAULT_TRANSITION_WINDOW = 0.4  # seconds


class TransitionState(str, Enum):
    STEADY = "steady"
    TRANSITIONING = "transitioning"


class TransitionAnimator:
    """Flags a short transition window whenever the visible sequence changes.

    The animator remembers the last ordered sequence of record ids it was
    shown. A different sequence (compared by value) opens a window of
    ``window`` seconds; a further change inside the window restarts it from
    that moment rather than extending it. The very first sequence never opens
    a window.
    """

    def __init__(
        self,
        window: float = DEFAULT_TRANSITION_WINDOW,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if window < 0:
            raise ValueError("Transition window cannot be negative")
        self._window = window
        self._clock = clock
        self._previous: tuple[str, ...] | None = None
        self._deadline: float | None = None

    @property
    def window(self) -> float:
        return self._window

    def observe(self, ids: Sequence[str]) -> TransitionState:
        """Record a freshly computed sequence and return the resulting state."""
        current = tuple(ids)
        if self._previous is not None and current != self._previous:
            self._deadline = self._clock() + self._window
        self._previous = current
        return self.state

    @property
    def state(self) -> TransitionState:
        if self._deadline is None:
            return TransitionState.STEADY
        if self._clock() >= self._deadline:
            self._deadline = None
            return TransitionState.STEADY
        return TransitionState.TRANSITIONING

    @property
    def remaining(self) -> float:
        """Seconds left in the current window, 0.0 when steady."""
        if self.state is TransitionState.STEADY:
            return 0.0
        return max(0.0, self._deadline - self._clock())

    @property
    def is_transitioning(self) -> bool:
        return self.state is TransitionState.TRANSITIONING
