from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .interpreter import Interpreter


@dataclass(frozen=True)
class RunOptions:
    encoding: str = "utf-8"


@dataclass(frozen=True)
class RunResult:
    output: str
    pointer: int
    cells: bytes


def _run(interpreter: Interpreter, stdout: io.StringIO) -> RunResult:
    interpreter.run()
    state = interpreter.state
    return RunResult(output=stdout.getvalue(), pointer=state.pointer, cells=state.tape.tobytes())


def run_string(source: str, *, stdin: bytes = b"") -> RunResult:
    stdout = io.StringIO()
    interpreter = Interpreter(stdin=io.BytesIO(stdin), stdout=stdout)
    interpreter.load_string(source)
    return _run(interpreter, stdout)


def run_file(path: str | Path, *, stdin: bytes = b"", options: Optional[RunOptions] = None) -> RunResult:
    encoding = "utf-8" if options is None else options.encoding
    stdout = io.StringIO()
    interpreter = Interpreter(stdin=io.BytesIO(stdin), stdout=stdout)
    interpreter.load_file(path, encoding=encoding)
    return _run(interpreter, stdout)
