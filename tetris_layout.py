# tetris_layout.py
from dataclasses import dataclass


@dataclass
class Dims:
    cell: int
    cols: int
    rows: int
    margin: int
    panel_w: int
    board_w: int
    board_h: int
    total_w: int
    total_h: int
    hold_x: int
    board_x: int
    board_y: int
    panel_x: int
    panel_y: int


def compute_dims(cell: int, cols: int, rows: int) -> Dims:
    """Hold panel | board | stats + next panel; `rows` is the visible height."""
    margin = 16
    panel_w = 180

    board_w = cols * cell
    board_h = rows * cell

    total_w = margin + panel_w + margin + board_w + margin + panel_w + margin
    total_h = margin + board_h + margin

    hold_x = margin
    board_x = hold_x + panel_w + margin
    board_y = margin
    panel_x = board_x + board_w + margin
    panel_y = margin

    return Dims(
        cell=cell, cols=cols, rows=rows, margin=margin, panel_w=panel_w,
        board_w=board_w, board_h=board_h,
        total_w=total_w, total_h=total_h,
        hold_x=hold_x, board_x=board_x, board_y=board_y,
        panel_x=panel_x, panel_y=panel_y
    )
