"""Key map and DAS/ARR horizontal repeat"""
from typing import Optional

import pygame

# One-shot keys -> session command names
KEYMAP = {
    pygame.K_UP: "rotate_clockwise",
    pygame.K_x: "rotate_clockwise",
    pygame.K_z: "rotate_counter_clockwise",
    pygame.K_SPACE: "hard_drop",
    pygame.K_c: "hold",
    pygame.K_LSHIFT: "hold",
    pygame.K_p: "toggle_pause",
    pygame.K_ESCAPE: "toggle_pause",
}

RESTART_KEY = pygame.K_r


# (left held, right held) -> horizontal command; both or neither held => none
SHIFT_COMMANDS = {
    (True, False): "move_left",
    (False, True): "move_right",
}


class ShiftRepeat:
    """
    Turns held arrow keys into move_left / move_right commands.

    A new direction fires once immediately. Holding it charges for das_ms,
    then the command repeats every arr_ms (0 => every frame). Releasing or
    switching direction discards the charge.
    """

    def __init__(self, das_ms: int, arr_ms: int):
        self.das_ms = das_ms
        self.arr_ms = arr_ms
        self.held: Optional[str] = None
        self.charge_ms = 0
        self.since_step_ms = 0

    def update(self, dt: int, left: bool, right: bool) -> Optional[str]:
        """Return the command name to issue this frame, if any."""
        held = SHIFT_COMMANDS.get((bool(left), bool(right)))
        if held != self.held:
            self.held = held
            self.charge_ms = 0
            self.since_step_ms = 0
            return held
        if held is None:
            return None
        self.charge_ms += dt
        if self.charge_ms < self.das_ms:
            return None
        self.since_step_ms += dt
        if self.arr_ms == 0 or self.since_step_ms >= self.arr_ms:
            self.since_step_ms = 0
            return held
        return None
