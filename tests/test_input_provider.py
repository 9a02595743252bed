# tests/test_input_provider.py

"""
Tests for admin credential input (environment and interactive prompts).
"""

import io

import pytest
from unittest.mock import Mock, patch

from services.input_provider import (
    ConfiguredInput,
    InteractiveInput,
    raw_terminal,
    read_masked,
    select_input_provider,
)


def _feed(text):
    chars = iter(text)
    return lambda: next(chars, "")


def test_masked_backspace_and_enter():
    out = []
    value = read_masked("Password: ", _feed("ab\x7fc\r"), out.append)

    assert value == "ac"
    written = "".join(out)
    assert written == "Password: **\b \b*\n"
    assert written.count("*") == 3
    assert written.count("\b \b") == 1


def test_masked_backspace_on_empty_buffer_erases_nothing():
    out = []
    value = read_masked("", _feed("\x7f\x7fx\n"), out.append)

    assert value == "x"
    assert "".join(out) == "*\n"


def test_masked_end_of_input_returns_buffer():
    assert read_masked("", _feed("secret"), lambda s: None) == "secret"
    assert read_masked("", _feed("pw\x04ignored"), lambda s: None) == "pw"


def test_masked_ctrl_c_interrupts():
    with pytest.raises(KeyboardInterrupt):
        read_masked("", _feed("ab\x03cd"), lambda s: None)


def test_masked_ignores_arrow_keys():
    out = []
    value = read_masked("", _feed("a\x1b[Ab\x1b[1;5C\x1bOPc\r"), out.append)

    assert value == "abc"
    assert "".join(out).count("*") == 3


def test_masked_ignores_stray_control_characters():
    assert read_masked("", _feed("a\tb\x00\x1bc\n"), lambda s: None) == "abc"


def test_raw_terminal_skips_non_tty():
    pytest.importorskip("termios")
    with patch("termios.tcsetattr") as tcsetattr:
        with raw_terminal(io.StringIO()):
            pass
    tcsetattr.assert_not_called()


def test_raw_terminal_restores_mode_on_interrupt():
    termios = pytest.importorskip("termios")
    stream = Mock()
    stream.isatty.return_value = True
    stream.fileno.return_value = 7
    saved = [0, 0, 0, 0xFFFF, 0, 0, [0] * 32]

    with patch("termios.tcgetattr", side_effect=lambda fd: [list(x) if isinstance(x, list) else x for x in saved]):
        with patch("termios.tcsetattr") as tcsetattr:
            with pytest.raises(KeyboardInterrupt):
                with raw_terminal(stream):
                    raise KeyboardInterrupt

    first, last = tcsetattr.call_args_list
    raw_mode = first.args[2]
    assert raw_mode[3] & termios.ECHO == 0
    assert raw_mode[3] & termios.ICANON == 0
    # Entering raw mode must not discard type-ahead
    assert first.args[1] == termios.TCSADRAIN
    assert last.args == (7, termios.TCSADRAIN, saved)


def test_configured_input_uses_placeholder_names(configured_settings):
    first, second = ConfiguredInput(configured_settings).credentials()

    assert (first.email, first.password, first.display_name) == ("a@x.com", "Pw12345!", "Admin User 1")
    assert (second.email, second.password, second.display_name) == ("b@x.com", "Pw12345!", "Admin User 2")


def test_interactive_input_prompts_for_both_admins():
    stdin = io.StringIO(
        "one@example.com\n"
        "pa\x7fass1\n"
        "Jane Doe\n"
        "two@example.com\n"
        "secret2\n"
        "John Roe\n"
    )
    stdout = io.StringIO()

    first, second = InteractiveInput(stdin=stdin, stdout=stdout).credentials()

    assert (first.email, first.password, first.display_name) == ("one@example.com", "pass1", "Jane Doe")
    assert (second.email, second.password, second.display_name) == ("two@example.com", "secret2", "John Roe")

    shown = stdout.getvalue()
    assert "First Admin User" in shown
    assert "Second Admin User" in shown
    assert "pass1" not in shown and "secret2" not in shown
    assert shown.count("Display Name: ") == 2


def test_interactive_input_runs_out_of_input():
    with pytest.raises(EOFError):
        InteractiveInput(stdin=io.StringIO(""), stdout=io.StringIO()).credentials()


def test_select_configured_when_all_four_present(configured_settings):
    assert isinstance(select_input_provider(configured_settings), ConfiguredInput)


def test_select_interactive_when_any_missing(configured_settings):
    partial = configured_settings.model_copy(update={"ADMIN2_PASSWORD": ""})

    assert isinstance(select_input_provider(partial), InteractiveInput)


def test_select_interactive_when_forced(configured_settings):
    assert isinstance(select_input_provider(configured_settings, force_interactive=True), InteractiveInput)
