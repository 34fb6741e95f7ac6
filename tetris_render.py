"""
pygame renderer for a Session.

- Pre-render block cell Surfaces per color (normal + ghost outline) and blit them.
- Pre-render static background (grid + side panels) once per Dims.
- Cache HUD text surfaces; re-render only when values change.
- Cache a BOARD SURFACE with all *locked* blocks; rebuild it only when the board snapshot changes (lock or restart).
"""
from __future__ import annotations
import pygame
from dataclasses import dataclass
from typing import Dict, Tuple, List, Optional

from tetris_layout import Dims
from tetris_piece import Piece
from tetris_session import Session, ghost_piece, visible_board
from tetris_shapes import SHAPES

# Colors per piece type
COLORS: Dict[str, Tuple[int,int,int]] = {
    "I": (102,224,255),
    "J": (106,119,255),
    "L": (255,158,94),
    "O": (255,224,102),
    "S": (94,224,142),
    "T": (200,119,255),
    "Z": (255,102,119),
}
TEXT = (200,210,240)
DIM_TEXT = (120,130,170)


@dataclass
class HudCache:
    values: Optional[tuple] = None
    lines: Optional[List[pygame.Surface]] = None
    controls: Optional[List[pygame.Surface]] = None


def format_time(seconds: int) -> str:
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


class BoardWatch:
    """Remembers which locked-board snapshot the cached surface was drawn from.

    Boards are replaced, never edited, on lock and restart, so identity is
    enough; holding the reference keeps a new board from reusing its id.
    """
    def __init__(self):
        self.board = None

    def changed(self, board) -> bool:
        if board is self.board:
            return False
        self.board = board
        return True


class RenderAssets:
    """Holds all pre-rendered assets for fast blitting."""
    def __init__(self, dims: Dims, font: pygame.font.Font, big_font: pygame.font.Font):
        self.dims = dims
        self.font = font
        self.big_font = big_font
        self._make_static()
        self._make_cells()
        self.hud = HudCache()
        self.board_surface = pygame.Surface((dims.board_w, dims.board_h), pygame.SRCALPHA)
        self.board_watch = BoardWatch()
        self._previews: Dict[Tuple[str, int], pygame.Surface] = {}

    # ---------- Static background (grid + panels) ----------
    def _make_static(self):
        d = self.dims
        self.bg = pygame.Surface((d.total_w, d.total_h))
        self.bg.fill((10,13,34))
        grid_col = (40,50,90)
        for x in range(d.cols+1):
            X = d.board_x + x*d.cell
            pygame.draw.line(self.bg, grid_col, (X, d.board_y), (X, d.board_y + d.board_h))
        for y in range(d.rows+1):
            Y = d.board_y + y*d.cell
            pygame.draw.line(self.bg, grid_col, (d.board_x, Y), (d.board_x + d.board_w, Y))
        for px in (d.hold_x, d.panel_x):
            panel_rect = pygame.Rect(px, d.panel_y, d.panel_w, d.board_h)
            pygame.draw.rect(self.bg, (21,25,53), panel_rect)
            pygame.draw.rect(self.bg, (50,60,100), panel_rect, 1)
        self.pv_cell = max(10, int(d.cell*0.6))

    # ---------- Small cell sprites (solid + ghost outline) ----------
    def _make_cells(self):
        self.cell_surf: Dict[str, pygame.Surface] = {}
        self.ghost_surf: Dict[str, pygame.Surface] = {}
        c = self.dims.cell
        for t, col in COLORS.items():
            s = pygame.Surface((c-2, c-2))
            s.fill(col)
            self.cell_surf[t] = s
            g = pygame.Surface((c-8, c-8), pygame.SRCALPHA)
            pygame.draw.rect(g, col, (0,0,c-8,c-8), 2)
            self.ghost_surf[t] = g

    # ---------- Board surface cache ----------
    def rebuild_board_surface(self, board):
        """Rebuilds the "locked blocks" surface from visible board contents."""
        self.board_surface.fill((0,0,0,0))
        c = self.dims.cell
        for y, row in enumerate(board):
            for x, t in enumerate(row):
                if t:
                    self.board_surface.blit(self.cell_surf[t], (x*c + 1, y*c + 1))

    # ---------- Per-cell helpers for moving/ghost piece ----------
    def _draw_piece(self, screen: pygame.Surface, piece: Piece, hidden: int, ghost: bool):
        d = self.dims
        inset = 4 if ghost else 1
        sprite = (self.ghost_surf if ghost else self.cell_surf)[piece.t]
        for by, bx in piece.cells():
            vy = by - hidden
            if vy < 0:
                continue
            screen.blit(sprite, (d.board_x + bx*d.cell + inset, d.board_y + vy*d.cell + inset))

    def _preview(self, t: str, dim: bool) -> pygame.Surface:
        key = (t, int(dim))
        if key not in self._previews:
            pc = self.pv_cell
            s = pygame.Surface((pc*4, pc*2), pygame.SRCALPHA)
            shape = [row for row in SHAPES[t][0] if any(row)]
            offx = (4 - len(shape[0])) * pc // 2
            col = tuple(v // 2 for v in COLORS[t]) if dim else COLORS[t]
            for y, row in enumerate(shape):
                for x, v in enumerate(row):
                    if v:
                        block = pygame.Surface((pc-2, pc-2))
                        block.fill(col)
                        s.blit(block, (offx + x*pc + 1, y*pc + 1))
            self._previews[key] = s
        return self._previews[key]

    # ---------- HUD / Panels ----------
    def _draw_hud(self, screen: pygame.Surface, s: Session):
        d = self.dims
        f = self.font
        values = (s.score, s.level, s.lines, s.combo, s.remaining_time)
        if values != self.hud.values:
            self.hud.values = values
            time_col = (255,120,120) if s.remaining_time <= 30 else TEXT
            self.hud.lines = [
                f.render(f"Score: {s.score}", True, TEXT),
                f.render(f"Level: {s.level}", True, TEXT),
                f.render(f"Lines: {s.lines}", True, TEXT),
                f.render(f"Combo: {s.combo}", True, TEXT),
                f.render(f"Time: {format_time(s.remaining_time)}", True, time_col),
            ]
        y = d.panel_y + 12
        for surf in self.hud.lines:
            screen.blit(surf, (d.panel_x + 12, y)); y += 24

        screen.blit(f.render("Next:", True, TEXT), (d.panel_x + 12, y + 8))
        y += 36
        for p in s.next_queue:
            screen.blit(self._preview(p.t, False), (d.panel_x + 24, y))
            y += self.pv_cell*2 + 10

        screen.blit(f.render("Hold:", True, TEXT), (d.hold_x + 12, d.panel_y + 12))
        if s.hold:
            screen.blit(self._preview(s.hold, not s.can_hold), (d.hold_x + 24, d.panel_y + 44))

        if not self.hud.controls:
            self.hud.controls = [
                f.render(txt, True, DIM_TEXT) for txt in (
                    "←/→ Move", "↓ Soft drop", "↑/X Rot CW", "Z Rot CCW",
                    "Space Hard", "C Hold", "P Pause", "R Restart",
                )
            ]
        y = d.panel_y + 140
        for surf in self.hud.controls:
            screen.blit(surf, (d.hold_x + 12, y)); y += 20

    def _banner(self, screen: pygame.Surface, text: str, color, dy: int = 0):
        d = self.dims
        msg = self.big_font.render(text, True, color)
        rect = msg.get_rect(center=(d.board_x + d.board_w // 2, d.board_y + d.board_h // 2 + dy))
        screen.blit(msg, rect)

    def draw(self, screen: pygame.Surface, s: Session):
        if self.board_watch.changed(s.board):
            self.rebuild_board_surface(visible_board(s))
        screen.blit(self.bg, (0,0))
        screen.blit(self.board_surface, (self.dims.board_x, self.dims.board_y))
        hidden = s.config.buffer_rows
        if s.current is not None:
            self._draw_piece(screen, ghost_piece(s), hidden, ghost=True)
            self._draw_piece(screen, s.current, hidden, ghost=False)
        self._draw_hud(screen, s)
        if s.game_over:
            self._banner(screen, "GAME OVER", (255,220,220))
            if s.remaining_time == 0:
                self._banner(screen, "Time's up!  (R to Restart)", TEXT, 36)
            else:
                self._banner(screen, "R to Restart", TEXT, 36)
        elif s.paused:
            self._banner(screen, "PAUSED", (220,240,255))
