"""Line-clear, combo and perfect-clear scoring"""
from dataclasses import dataclass

from tetris_board import Board, is_empty

LINES_PER_LEVEL = 10
LINE_SCORES = {1: 100, 2: 300, 3: 500, 4: 800}
PERFECT_CLEAR_BONUS = 2000
SOFT_DROP_PER_CELL = 1
HARD_DROP_PER_CELL = 2

# (lowest combo in band, bonus), highest band first
COMBO_BANDS = [
    (10, 200),
    (7, 150),
    (4, 100),
    (2, 50),
]


@dataclass(frozen=True)
class ClearResult:
    lines: int = 0
    combo: int = 0
    perfect_clear: bool = False
    points: int = 0


def combo_bonus(combo: int) -> int:
    for lowest, bonus in COMBO_BANDS:
        if combo >= lowest:
            return bonus
    return 0


def level_for(lines: int) -> int:
    return lines // LINES_PER_LEVEL + 1


def score_lock(board: Board, lines: int, combo: int) -> ClearResult:
    """Score one lock given the cleared board, rows removed and the combo before it."""
    if lines == 0:
        return ClearResult()
    combo += 1
    perfect = is_empty(board)
    points = LINE_SCORES[lines] + combo_bonus(combo)
    if perfect:
        points += PERFECT_CLEAR_BONUS
    return ClearResult(lines, combo, perfect, points)
