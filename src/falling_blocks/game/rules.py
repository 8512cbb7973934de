from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ScoringRules:
    line_points: int = 100
    level_threshold: int = 5000
    max_level: int = 10
    base_period_ms: int = 500
    max_score: int = 2**31 - 1

    def score_for_lines(self, lines: int, level: int) -> int:
        if lines <= 0:
            return 0
        return lines * self.line_points * level

    def add_score(self, score: int, lines: int, level: int) -> int:
        # Saturates instead of wrapping
        return min(score + self.score_for_lines(lines, level), self.max_score)

    def level_for_score(self, score: int, level: int) -> int:
        while score >= level * self.level_threshold and level < self.max_level:
            level += 1
        return level

    def period_for_level(self, level: int) -> int:
        return self.base_period_ms // level
