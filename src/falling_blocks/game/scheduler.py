from __future__ import annotations

from typing import Callable, List, Optional, Protocol


TickCallback = Callable[[], None]


class TickScheduler(Protocol):
    """Timer capability the game drives.

    Implementations keep at most one pending timer: ``reschedule`` replaces
    the previous one and ``cancel`` removes it.
    """

    def bind(self, callback: TickCallback) -> None: ...

    def reschedule(self, period_ms: int) -> None: ...

    def cancel(self) -> None: ...


class ManualTickScheduler:
    """Deterministic scheduler driven by explicit ``advance`` calls.

    Used for headless play and tests; time only moves when the caller says so.
    """

    def __init__(self) -> None:
        self.period_ms: Optional[int] = None
        self.history: List[int] = []
        self._elapsed = 0
        self._callback: Optional[TickCallback] = None

    @property
    def active(self) -> bool:
        return self.period_ms is not None

    def bind(self, callback: TickCallback) -> None:
        self._callback = callback

    def reschedule(self, period_ms: int) -> None:
        if period_ms <= 0:
            raise ValueError(f"tick period must be positive, got {period_ms}")
        self.period_ms = int(period_ms)
        self.history.append(self.period_ms)
        self._elapsed = 0

    def cancel(self) -> None:
        self.period_ms = None
        self._elapsed = 0

    def advance(self, ms: int) -> int:
        """Let ``ms`` milliseconds pass, firing the callback once per elapsed period."""
        fired = 0
        while self.period_ms is not None and self._elapsed + ms >= self.period_ms:
            ms -= self.period_ms - self._elapsed
            self._elapsed = 0
            fired += 1
            if self._callback is not None:
                # may reschedule or cancel
                self._callback()
        if self.period_ms is not None:
            self._elapsed += ms
        return fired
