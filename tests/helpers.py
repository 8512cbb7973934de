from __future__ import annotations

from typing import Iterable, List, Sequence

from falling_blocks.game import Board, FallingBlocksGame, ManualTickScheduler, PieceKind


class ScriptedRandom:
    """Random source that replays a fixed sequence of variant indices, then repeats the last one."""

    def __init__(self, values: Sequence[int]) -> None:
        self.values = list(values)
        self.calls: List[int] = []

    def randrange(self, stop: int) -> int:
        self.calls.append(stop)
        index = min(len(self.calls) - 1, len(self.values) - 1)
        value = self.values[index]
        assert 0 <= value < stop
        return value


def make_game(kinds: Sequence[int] = (PieceKind.SQUARE,), **kwargs) -> FallingBlocksGame:
    """Build a headless game whose pieces come out in the given order."""

    scheduler = kwargs.pop("scheduler", None) or ManualTickScheduler()
    return FallingBlocksGame(scheduler=scheduler, rng=ScriptedRandom([int(k) for k in kinds]), **kwargs)


def fill_row(board: Board, row: int, skip: Iterable[int] = (), kind: int = PieceKind.LINE) -> None:
    skipped = set(skip)
    for col in range(board.width):
        if col not in skipped:
            board.occupy(row, col, int(kind))
