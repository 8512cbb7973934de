from __future__ import annotations

from typing import Optional, Tuple

import pygame

from falling_blocks.game import CATALOG, GameSnapshot, variant


BACKGROUND = (10, 10, 14)
WELL = (26, 26, 26)
PANEL = (51, 51, 51)
FRAME = (128, 128, 128)
TEXT = (230, 230, 230)

PREVIEW_SIZE = 5


def _color_for_value(v: int) -> Tuple[int, int, int]:
    # 0 empty, +k locked variant k-1, -k falling variant k-1
    index = abs(int(v)) - 1
    if 0 <= index < len(CATALOG):
        return CATALOG[index].color
    return WELL


class Renderer:
    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    @property
    def preview_px(self) -> int:
        return PREVIEW_SIZE * self.cell_size // 2

    def window_size(self, snapshot: GameSnapshot) -> Tuple[int, int]:
        h, w = snapshot.board.shape
        width = self.margin * 3 + w * self.cell_size + max(self.preview_px, 8 * self.cell_size)
        height = self.margin * 2 + h * self.cell_size
        return width, height

    def _fonts(self) -> Tuple[pygame.font.Font, pygame.font.Font]:
        if self._font is None or self._big_font is None:
            self._font = pygame.font.SysFont(None, 24)
            self._big_font = pygame.font.SysFont("sans", 40, bold=True)
        return self._font, self._big_font

    def _grid_surface(self, state) -> pygame.Surface:
        h, w = state.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill(WELL)
        for y in range(h):
            for x in range(w):
                v = int(state[y, x])
                if v == 0:
                    continue
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(v), rect)
        return surf

    def _preview_surface(self, snapshot: GameSnapshot) -> pygame.Surface:
        size = self.preview_px
        half = self.cell_size // 2
        surf = pygame.Surface((size, size))
        surf.fill(PANEL)
        pygame.draw.rect(surf, FRAME, pygame.Rect(5, 5, size - 10, size - 10), 1)
        piece = variant(snapshot.next_kind)
        for row, col in piece.offsets:
            rect = pygame.Rect((col + 1) * half, (row + 1) * half, half - 1, half - 1)
            pygame.draw.rect(surf, piece.color, rect)
        return surf

    def _draw_game_over(self, screen: pygame.Surface, board_rect: pygame.Rect) -> None:
        _, big = self._fonts()
        box = pygame.Rect(0, 0, 200, 80)
        box.center = board_rect.center
        shade = pygame.Surface(box.size, pygame.SRCALPHA)
        shade.fill((0, 0, 0, 230))
        screen.blit(shade, box.topleft)
        pygame.draw.rect(screen, FRAME, box, 1)
        text = big.render("GAME OVER", True, (255, 255, 255))
        screen.blit(text, text.get_rect(center=box.center))

    def render(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        font, _ = self._fonts()
        screen.fill(BACKGROUND)

        grid_surf = self._grid_surface(snapshot.overlay())
        board_rect = grid_surf.get_rect(topleft=(self.margin, self.margin))
        screen.blit(grid_surf, board_rect)

        panel_x = board_rect.right + self.margin
        screen.blit(self._preview_surface(snapshot), (panel_x, self.margin))

        y = self.margin * 2 + self.preview_px
        lines = [snapshot.status_text, "N: New Game", "P: Resume" if snapshot.paused else "P: Pause"]
        for line in lines:
            screen.blit(font.render(line, True, TEXT), (panel_x, y))
            y += 28

        if snapshot.game_over:
            self._draw_game_over(screen, board_rect)

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot) -> None:
        self.render(screen, snapshot)
        pygame.display.flip()
