from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

TAPE_SIZE = 30000


@dataclass
class LoopFrame:
    start: int
    end: int = 0

    @property
    def closed(self) -> bool:
        return self.end != 0


def _zeroed_tape() -> np.ndarray:
    return np.zeros(TAPE_SIZE, dtype=np.uint8)


@dataclass
class TapeState:
    tape: np.ndarray = field(default_factory=_zeroed_tape)
    pointer: int = 0
    source: str = ""
    loops: List[LoopFrame] = field(default_factory=list)
    loops_opened: int = 0
    open_frames: List[LoopFrame] = field(default_factory=list)

    def reset(self, *, source: Optional[str] = None) -> None:
        self.tape[:] = 0
        self.pointer = 0
        self.loops.clear()
        self.loops_opened = 0
        self.open_frames.clear()
        self.source = "" if source is None else source

    @property
    def cell(self) -> int:
        return int(self.tape[self.pointer])

    @cell.setter
    def cell(self, value: int) -> None:
        self.tape[self.pointer] = np.uint8(value)
