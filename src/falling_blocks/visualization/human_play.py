from __future__ import annotations

import argparse
import logging
from typing import Dict, Optional

import pygame

from falling_blocks.game import Action, FallingBlocksGame, GameConfig, GameSnapshot
from .renderer import Renderer
from .timer import PygameTickScheduler


logger = logging.getLogger(__name__)


KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_LEFT: Action.MOVE_LEFT,
    pygame.K_RIGHT: Action.MOVE_RIGHT,
    pygame.K_DOWN: Action.SOFT_DROP,
    pygame.K_UP: Action.ROTATE,
    pygame.K_p: Action.TOGGLE_PAUSE,
    pygame.K_n: Action.NEW_GAME,
}

EXPOSE_EVENTS = (pygame.VIDEOEXPOSE, pygame.WINDOWEXPOSED)


class _RedrawRequest:
    """Keeps the latest snapshot the game asked to have drawn."""

    def __init__(self) -> None:
        self.snapshot: Optional[GameSnapshot] = None
        self.last: Optional[GameSnapshot] = None

    def __call__(self, snapshot: GameSnapshot) -> None:
        self.snapshot = snapshot
        self.last = snapshot

    def repaint(self) -> None:
        # window was uncovered, draw the last frame again
        if self.snapshot is None:
            self.snapshot = self.last

    def take(self) -> Optional[GameSnapshot]:
        snapshot, self.snapshot = self.snapshot, None
        return snapshot


def run(seed: Optional[int] = None, cell_size: int = 30, fps: int = 60) -> None:
    scheduler = PygameTickScheduler()
    pygame.init()
    try:
        clock = pygame.time.Clock()
        redraw = _RedrawRequest()
        game = FallingBlocksGame(GameConfig(random_seed=seed), scheduler=scheduler, on_redraw=redraw)
        renderer = Renderer(cell_size=cell_size)

        screen = pygame.display.set_mode(renderer.window_size(game.snapshot()))
        pygame.display.set_caption("Falling Blocks")

        running = True
        while running:
            # Timer ticks and key presses share this queue, one at a time
            for event in pygame.event.get():
                if scheduler.dispatch(event):
                    continue
                if event.type == pygame.QUIT:
                    running = False
                elif event.type in EXPOSE_EVENTS:
                    redraw.repaint()
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                        continue
                    action = KEY_TO_ACTION.get(event.key)
                    if action is not None:
                        game.handle(action)

            snapshot = redraw.take()
            if snapshot is not None:
                renderer.draw(screen, snapshot)

            clock.tick(fps)
        logger.info(f"Session ended with score {game.score} at level {game.level}")
    finally:
        scheduler.cancel()
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play the falling-block puzzle game.")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=30)
    p.add_argument("--fps", type=int, default=60)
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p


def main() -> None:
    args = build_parser().parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level), format="[FALLING_BLOCKS] %(asctime)s - %(message)s")
    run(seed=args.seed, cell_size=args.cell_size, fps=args.fps)


if __name__ == "__main__":  # pragma: no cover
    main()
