from __future__ import annotations

from typing import Optional

import pygame

from falling_blocks.game.scheduler import TickCallback


TICK_EVENT = pygame.USEREVENT + 1


class PygameTickScheduler:
    """Tick scheduler backed by ``pygame.time.set_timer``.

    Timer firings arrive as events on the pygame queue, so ticks are
    serialized with key presses by the single event loop. Setting a timer for
    the same event type replaces the previous one. Each timer stamps its
    events with a generation number; ticks from an older generation are
    ignored even when the event loop already pulled them off the queue.
    """

    def __init__(self, event_type: int = TICK_EVENT) -> None:
        self.event_type = event_type
        self.period_ms: Optional[int] = None
        self.generation = 0
        self._callback: Optional[TickCallback] = None

    def bind(self, callback: TickCallback) -> None:
        self._callback = callback

    def reschedule(self, period_ms: int) -> None:
        if period_ms <= 0:
            raise ValueError(f"tick period must be positive, got {period_ms}")
        self.generation += 1
        tick = pygame.event.Event(self.event_type, generation=self.generation)
        pygame.time.set_timer(tick, int(period_ms))
        pygame.event.clear(self.event_type)
        self.period_ms = int(period_ms)

    def cancel(self) -> None:
        self.generation += 1
        pygame.time.set_timer(self.event_type, 0)
        pygame.event.clear(self.event_type)
        self.period_ms = None

    def dispatch(self, event: pygame.event.Event) -> bool:
        """Run the bound callback for a current tick event; return whether it was a tick."""
        if event.type != self.event_type:
            return False
        if getattr(event, "generation", None) != self.generation:
            return True
        if self.period_ms is not None and self._callback is not None:
            self._callback()
        return True
