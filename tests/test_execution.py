#!/usr/bin/env python3
"""
End-to-end execution of small programs through in-memory streams.
"""

import io
import logging

import pytest

from tapebf import Interpreter, InputStreamFailure, UnmatchedOpenLoop


def execute(source, input_data=b""):
    stdout = io.StringIO()
    interpreter = Interpreter(stdin=io.BytesIO(input_data), stdout=stdout)
    interpreter.load_string(source)
    interpreter.run()
    return interpreter, stdout.getvalue()


def test_comment_only_program_is_a_no_op():
    interpreter, output = execute("hello world\nthis has no operators\n")

    assert output == ""
    assert not interpreter.state.tape.any()
    assert interpreter.state.pointer == 0


def test_comment_characters_are_logged_at_debug(caplog):
    with caplog.at_level(logging.DEBUG, logger="tapebf"):
        execute("x")

    assert "treating as comment" in caplog.text


def test_comments_in_skipped_loop_body_are_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="tapebf"):
        execute("[ note ]")

    assert "'n' at 2, treating as comment" in caplog.text


def test_four_increments_output_byte_zero():
    """The first '+' saturates to 255, later ones toggle back and forth."""
    interpreter, output = execute("++++.")

    assert interpreter.state.cell == 0
    assert output == "\x00"


def test_non_ascii_byte_prints_diagnostic():
    _, output = execute("+.")

    assert output == "Invalid utf8 char\n"


def print_cell(value):
    stdout = io.StringIO()
    interpreter = Interpreter(stdout=stdout)
    interpreter.state.cell = value
    interpreter.print()
    return stdout.getvalue()


def test_byte_127_is_the_last_printable_value():
    assert print_cell(127) == "\x7f"


def test_byte_128_prints_diagnostic():
    assert print_cell(128) == "Invalid utf8 char\n"


def test_input_then_output_echoes_byte():
    interpreter, output = execute(",.", b"A")

    assert interpreter.state.cell == 65
    assert output == "A"


def test_input_reads_one_byte_per_instruction():
    interpreter, output = execute(",>,>,<<.>.>.", b"abcdef")

    assert output == "abc"
    assert interpreter.state.pointer == 2


def test_input_at_end_of_stream_stores_zero():
    interpreter, _ = execute(",", b"")

    assert interpreter.state.cell == 0


def test_input_stream_failure_is_fatal():
    stdin = io.BytesIO(b"A")
    stdin.close()
    interpreter = Interpreter(stdin=stdin, stdout=io.StringIO())
    interpreter.load_string(",")

    with pytest.raises(InputStreamFailure):
        interpreter.run()


def test_stray_close_is_reported_and_execution_continues(caplog):
    with caplog.at_level(logging.WARNING, logger="tapebf"):
        interpreter, output = execute("],.", b"A")

    assert output == "A"
    assert "no opened loop" in caplog.text
    assert interpreter.state.loops == []
    assert interpreter.state.loops_opened == 0


def test_unmatched_open_is_fatal():
    with pytest.raises(UnmatchedOpenLoop) as excinfo:
        execute("+\n[-\n")

    assert excinfo.value.line == 2
    assert excinfo.value.column == 1
    assert excinfo.value.position == 2
    assert "Missing enclosing ']'" in str(excinfo.value)


def test_unmatched_open_skips_pending_body():
    """Nothing after an unmatched '[' runs before the error is raised."""
    stdout = io.StringIO()
    interpreter = Interpreter(stdin=io.BytesIO(b"A"), stdout=stdout)
    interpreter.load_string(",.[,.")

    with pytest.raises(UnmatchedOpenLoop):
        interpreter.run()
    assert stdout.getvalue() == "A"
