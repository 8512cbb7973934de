from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Protocol, Tuple

import numpy as np

from .grid import Board
from .pieces import CATALOG, ActivePiece, Cell, PieceKind
from .rules import ScoringRules
from .scheduler import ManualTickScheduler, TickScheduler


logger = logging.getLogger(__name__)


class Action(IntEnum):
    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    SOFT_DROP = 2
    ROTATE = 3
    TOGGLE_PAUSE = 4
    NEW_GAME = 5


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


@dataclass
class GameConfig:
    random_seed: Optional[int] = None
    spawn_row: int = 0


@dataclass(frozen=True, eq=False)
class GameSnapshot:
    """Read-only view of the game handed to renderers."""

    board: np.ndarray
    active_cells: Tuple[Cell, ...]
    active_kind: PieceKind
    next_kind: PieceKind
    score: int
    level: int
    tick_period_ms: int
    paused: bool
    game_over: bool

    @property
    def status_text(self) -> str:
        return f"Score: {self.score}  Level: {self.level}"

    def overlay(self) -> np.ndarray:
        # Falling piece drawn with negative values, locked cells stay positive
        state = self.board.copy()
        h, w = state.shape
        for row, col in self.active_cells:
            if 0 <= row < h and 0 <= col < w:
                state[row, col] = -(int(self.active_kind) + 1)
        return state


RedrawListener = Callable[[GameSnapshot], None]


class FallingBlocksGame:
    """The game state machine.

    Every operation runs to completion without yielding; callers must never
    invoke two of them concurrently on one instance.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        scheduler: Optional[TickScheduler] = None,
        rng: Optional[RandomSource] = None,
        on_redraw: Optional[RedrawListener] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.scheduler: TickScheduler = scheduler if scheduler is not None else ManualTickScheduler()
        self.rng: RandomSource = rng if rng is not None else random.Random(self.config.random_seed)
        self.on_redraw = on_redraw
        self.board = Board()
        self.current_piece: Optional[ActivePiece] = None
        self.next_kind = PieceKind.SQUARE
        self.score = 0
        self.level = 1
        self.tick_period_ms = self.rules.base_period_ms
        self.paused = False
        self.game_over = False
        self.scheduler.bind(self.tick)
        self.new_game()

    def new_game(self) -> None:
        self.scheduler.cancel()
        self.board.reset()
        self.score = 0
        self.level = 1
        self.tick_period_ms = self.rules.period_for_level(self.level)
        self.paused = False
        self.game_over = False
        self.next_kind = self._random_kind()
        self._spawn_next()
        self.scheduler.reschedule(self.tick_period_ms)
        logger.info(f"New game started, first piece {self._require_piece().kind.name}")
        self._redraw()

    def _random_kind(self) -> PieceKind:
        return PieceKind(int(self.rng.randrange(len(CATALOG))))

    def _spawn_next(self) -> None:
        kind = self.next_kind
        self.next_kind = self._random_kind()
        self.current_piece = ActivePiece.spawn(kind, self.config.spawn_row)

    def _require_piece(self) -> ActivePiece:
        assert self.current_piece is not None, "no active piece"
        return self.current_piece

    def can_move(self, dx: int, dy: int) -> bool:
        piece = self._require_piece()
        return self.board.can_place(piece.cells_at(dy, dx))

    def move(self, dx: int, dy: int) -> bool:
        if self.paused or self.game_over:
            return False
        piece = self._require_piece()
        if not self.can_move(dx, dy):
            return False
        piece.origin_row += dy
        piece.origin_col += dx
        self._redraw()
        return True

    def soft_drop(self) -> bool:
        return self.move(0, 1)

    def rotate(self) -> bool:
        if self.paused or self.game_over:
            return False
        candidate = self._require_piece().rotated()
        if not self.board.can_place(candidate.cells_at()):
            return False
        self.current_piece = candidate
        self._redraw()
        return True

    def toggle_pause(self) -> None:
        if self.game_over:
            return
        self.paused = not self.paused
        logger.debug(f"Paused: {self.paused}")
        self._redraw()

    def tick(self) -> None:
        if self.paused or self.game_over:
            return
        piece = self._require_piece()
        if self.can_move(0, 1):
            piece.origin_row += 1
        else:
            self._lock_piece()
        self._redraw()

    def _lock_piece(self) -> None:
        piece = self._require_piece()
        self.board.lock(piece.cells_at(), int(piece.kind))
        lines = self.board.clear_and_compact(self.board.find_full_rows())
        self.score = self.rules.add_score(self.score, lines, self.level)
        if lines:
            logger.debug(f"Cleared {lines} line(s), score {self.score}")
        self._update_level()
        self._spawn_next()
        if not self.can_move(0, 0):
            self.game_over = True
            self.scheduler.cancel()
            logger.info(f"Game over, final score {self.score} at level {self.level}")

    def _update_level(self) -> None:
        new_level = self.rules.level_for_score(self.score, self.level)
        if new_level == self.level:
            return
        self.level = new_level
        self.tick_period_ms = self.rules.period_for_level(new_level)
        self.scheduler.reschedule(self.tick_period_ms)
        logger.info(f"Level up to {self.level}, tick period {self.tick_period_ms} ms")

    def handle(self, action: Action) -> None:
        action = Action(action)
        if action == Action.MOVE_LEFT:
            self.move(-1, 0)
        elif action == Action.MOVE_RIGHT:
            self.move(1, 0)
        elif action == Action.SOFT_DROP:
            self.soft_drop()
        elif action == Action.ROTATE:
            self.rotate()
        elif action == Action.TOGGLE_PAUSE:
            self.toggle_pause()
        elif action == Action.NEW_GAME:
            self.new_game()

    def snapshot(self) -> GameSnapshot:
        piece = self._require_piece()
        return GameSnapshot(
            board=self.board.clone_state(),
            active_cells=tuple(piece.cells_at()),
            active_kind=piece.kind,
            next_kind=self.next_kind,
            score=self.score,
            level=self.level,
            tick_period_ms=self.tick_period_ms,
            paused=self.paused,
            game_over=self.game_over,
        )

    def _redraw(self) -> None:
        if self.on_redraw is not None:
            self.on_redraw(self.snapshot())
