from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import BinaryIO, List, Optional, TextIO

from .errors import (
    INVALID_OUTPUT,
    InputStreamFailure,
    SourceNotFound,
    SourceUnreadable,
    format_stray_close,
    make_unmatched_open_error,
)
from .state import TAPE_SIZE, LoopFrame, TapeState

logger = logging.getLogger(__name__)

OPERATORS = set("+-<>.,")


class Interpreter:
    """Tape interpreter that re-scans loop bodies from the source text.

    Loop bodies are not pre-resolved: every ``[`` pushes a frame, every ``]``
    closes the innermost open one, and once the outermost bracket of a
    construct closes, the text between its brackets is interpreted again for
    as long as the current cell is non-zero.
    """

    def __init__(self, stdin: Optional[BinaryIO] = None, stdout: Optional[TextIO] = None):
        self.state = TapeState()
        self._stdin = stdin
        self._stdout = stdout

    @property
    def stdin(self) -> BinaryIO:
        return self._stdin if self._stdin is not None else sys.stdin.buffer

    @property
    def stdout(self) -> TextIO:
        return self._stdout if self._stdout is not None else sys.stdout

    # ---------------- loading ----------------

    def load_file(self, filename: str | Path, *, encoding: str = "utf-8") -> None:
        path = Path(filename)
        if not path.exists():
            raise SourceNotFound(message=f"File '{filename}' does not exist", path=str(filename))
        try:
            text = path.read_text(encoding=encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise SourceUnreadable(message=f"Could not read file '{filename}': {exc}", path=str(filename)) from exc
        self.load_string(text)
        logger.info("Loaded %s (%d characters)", filename, len(text))

    def load_string(self, source: str) -> None:
        self.state.reset(source=source)
        logger.debug("Loaded %d characters of source", len(source))

    # ---------------- dispatch ----------------

    def run(self) -> None:
        state = self.state
        self.run_span(0, len(state.source))
        if state.loops_opened:
            first_open = state.open_frames[0]
            raise make_unmatched_open_error(source=state.source, position=first_open.start)

    def run_span(self, start: int, end: int) -> None:
        """Interpret ``source[start:end]``, reporting positions in the full source.

        Loop bodies being executed are kept on an explicit stack of spans
        rather than the call stack, so nesting depth is bounded by memory only.
        Each entry is ``[next index, stop index, frame]``; ``frame`` is None for
        the outer span.
        """
        state = self.state
        active: List[list] = [[start, end, None]]
        while active:
            span = active[-1]
            index, stop, frame = span
            if index >= stop:
                if frame is not None and state.cell != 0:
                    span[0] = frame.start + 1
                    continue
                active.pop()
                if frame is not None:
                    state.loops.clear()
                continue
            span[0] = index + 1

            construct = self.dispatch(index)
            if construct is not None and state.cell != 0:
                active.append([construct.start + 1, construct.end, construct])

    def dispatch(self, index: int) -> Optional[LoopFrame]:
        """Run the character at ``index``; return a loop construct ready to execute."""
        state = self.state
        char = state.source[index]
        if char == '[':
            self.open_loop(index)
        elif char == ']':
            return self.close_loop(index)
        elif char not in OPERATORS:
            logger.debug("Passed other char %r at %d, treating as comment", char, index)
        elif state.loops_opened:
            # Body of a construct still being matched; it runs once the
            # outermost ']' is seen.
            pass
        elif char == '+':
            self.increment()
        elif char == '-':
            self.decrement()
        elif char == '>':
            self.goto_next_cell()
        elif char == '<':
            self.goto_previous_cell()
        elif char == '.':
            self.print()
        elif char == ',':
            self.input()
        return None

    def enter_loop_context(self) -> LoopFrame:
        state = self.state
        frame = state.loops[0]
        if not frame.closed:
            raise make_unmatched_open_error(source=state.source, position=frame.start)
        state.loops.clear()
        logger.debug("Executing loop %d..%d", frame.start, frame.end)
        return frame

    # ---------------- language operations ----------------

    def increment(self) -> None:
        state = self.state
        if state.cell == 255:
            state.cell = 0
        else:
            state.cell = 255

    def decrement(self) -> None:
        state = self.state
        if state.cell == 0:
            state.cell = 255
        else:
            state.cell = state.cell - 1

    def goto_next_cell(self) -> None:
        state = self.state
        if state.pointer == TAPE_SIZE - 1:
            state.pointer = 0
        else:
            state.pointer += 1

    def goto_previous_cell(self) -> None:
        state = self.state
        if state.pointer == 0:
            state.pointer = TAPE_SIZE - 1
        else:
            state.pointer -= 1

    def open_loop(self, position: int) -> None:
        state = self.state
        frame = LoopFrame(start=position)
        state.loops.append(frame)
        state.open_frames.append(frame)
        state.loops_opened += 1
        logger.debug("Opened loop at %d, %d open", position, state.loops_opened)

    def close_loop(self, position: int) -> Optional[LoopFrame]:
        state = self.state
        if state.loops_opened == 0:
            logger.warning(format_stray_close(source=state.source, position=position))
            return None

        frame = state.open_frames.pop()
        frame.end = position
        state.loops_opened -= 1
        logger.debug("Closed loop %d..%d, %d open", frame.start, position, state.loops_opened)

        if state.loops_opened == 0:
            return self.enter_loop_context()
        return None

    def print(self) -> None:
        value = self.state.cell
        out = self.stdout
        # Only single-byte UTF-8 sequences are printable on their own.
        if value < 0x80:
            out.write(chr(value))
        else:
            logger.debug("Cell value %d is not a single-byte character", value)
            out.write(INVALID_OUTPUT + "\n")
        out.flush()

    def input(self) -> None:
        try:
            data = self.stdin.read(1)
        except (OSError, ValueError) as exc:
            raise InputStreamFailure(message=f"Could not read from input stream: {exc}") from exc
        self.state.cell = data[0] if data else 0
