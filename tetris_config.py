"""Gameplay tunables and the validated per-session config."""
from dataclasses import dataclass, fields
from typing import Any, Mapping, Optional

CONFIG = {
    # Board geometry
    "COLS": 10,
    "VISIBLE_ROWS": 20,
    "BUFFER_ROWS": 2,       # hidden rows above the visible field
    "NEXT_DEPTH": 5,

    # Locking
    "LOCK_DELAY_MS": 500,
    "MAX_LOCK_RESETS": 15,

    # Session countdown
    "TIME_LIMIT_S": 180,

    # Randomizer, None => OS entropy
    "SEED": None,

    # Driver feel
    "CELL_SIZE": 28,
    "DAS_MS": 170,
    "ARR_MS": 30,
}


@dataclass(frozen=True)
class SessionConfig:
    cols: int = CONFIG["COLS"]
    visible_rows: int = CONFIG["VISIBLE_ROWS"]
    buffer_rows: int = CONFIG["BUFFER_ROWS"]
    next_depth: int = CONFIG["NEXT_DEPTH"]
    lock_delay_ms: int = CONFIG["LOCK_DELAY_MS"]
    max_lock_resets: int = CONFIG["MAX_LOCK_RESETS"]
    time_limit_s: int = CONFIG["TIME_LIMIT_S"]
    seed: Optional[int] = CONFIG["SEED"]

    def __post_init__(self):
        # I is 4 wide and spawns in row 0 of the buffer
        if self.cols < 4:
            raise ValueError(f"cols must be >= 4, got {self.cols}")
        if self.visible_rows < 4:
            raise ValueError(f"visible_rows must be >= 4, got {self.visible_rows}")
        if self.buffer_rows < 0:
            raise ValueError(f"buffer_rows must be >= 0, got {self.buffer_rows}")
        if self.next_depth < 1:
            raise ValueError(f"next_depth must be >= 1, got {self.next_depth}")
        if self.lock_delay_ms <= 0:
            raise ValueError(f"lock_delay_ms must be > 0, got {self.lock_delay_ms}")
        if self.max_lock_resets < 0:
            raise ValueError(f"max_lock_resets must be >= 0, got {self.max_lock_resets}")
        if self.time_limit_s <= 0:
            raise ValueError(f"time_limit_s must be > 0, got {self.time_limit_s}")

    @property
    def rows(self) -> int:
        return self.visible_rows + self.buffer_rows

    @classmethod
    def from_dict(cls, cfg: Mapping[str, Any]) -> "SessionConfig":
        """Build from a CONFIG-style mapping (upper-case keys); unknown keys are ignored."""
        kwargs = {}
        for f in fields(cls):
            key = f.name.upper()
            if key in cfg:
                kwargs[f.name] = cfg[key]
        return cls(**kwargs)
