from .api import RunOptions, RunResult, run_file, run_string
from .errors import (
    InputStreamFailure,
    SourceError,
    SourceNotFound,
    SourceUnreadable,
    TapeError,
    TapeSyntaxError,
    UnmatchedOpenLoop,
)
from .interpreter import Interpreter
from .state import TAPE_SIZE, LoopFrame, TapeState

__all__ = [
    'Interpreter',
    'TapeState',
    'LoopFrame',
    'TAPE_SIZE',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
    'TapeError',
    'SourceError',
    'SourceNotFound',
    'SourceUnreadable',
    'TapeSyntaxError',
    'UnmatchedOpenLoop',
    'InputStreamFailure',
]
