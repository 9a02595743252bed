# services/input_provider.py

import sys
from contextlib import contextmanager
from typing import Callable, List, Optional, TextIO

from core.config import Settings, settings as default_settings
from core.config_validator import missing_admin_credentials
from models.admin_user import AdminCredentialInput


# -----------------------------------------------------
# Control characters seen while reading a password
# -----------------------------------------------------
SUBMIT_CHARS = ("\r", "\n", "\x04")   # Enter, Ctrl-D
BACKSPACE_CHARS = ("\x7f", "\x08")
INTERRUPT_CHAR = "\x03"               # Ctrl-C
ESCAPE_CHAR = "\x1b"
MASK_CHAR = "*"

DEFAULT_DISPLAY_NAMES = ("Admin User 1", "Admin User 2")
ADMIN_HEADERS = ("👤 First Admin User:", "👤 Second Admin User:")


# ============================================================
# Masked password entry
# ============================================================

def _skip_escape(read_char: Callable[[], str]) -> str:
    """
    Consume the rest of an escape sequence (arrow keys, Home, F-keys...).
    Returns the first character that was not part of it, or "".
    """
    char = read_char()
    if char == "O":
        read_char()
        return ""
    if char != "[":
        return char

    # CSI: parameter bytes until a final byte in "@".."~"
    while True:
        char = read_char()
        if char == "" or "@" <= char <= "~":
            return ""


def read_masked(
    prompt: str,
    read_char: Callable[[], str],
    write: Callable[[str], None],
    mask: str = MASK_CHAR,
) -> str:
    """
    Read a secret one character at a time, echoing `mask` per keystroke.

    - backspace drops the last buffered character and erases one mask
    - Enter, Ctrl-D or end of input return the buffer
    - Ctrl-C raises KeyboardInterrupt
    - escape sequences and other control characters are ignored

    "ab<backspace>c<enter>" → "ac", output "**\\b \\b*"
    """
    write(prompt)
    buffer: List[str] = []
    pending = ""

    while True:
        char, pending = (pending or read_char()), ""

        if char == "" or char in SUBMIT_CHARS:
            write("\n")
            return "".join(buffer)

        if char == INTERRUPT_CHAR:
            write("\n")
            raise KeyboardInterrupt

        if char in BACKSPACE_CHARS:
            if buffer:
                buffer.pop()
                write("\b \b")
            continue

        if char == ESCAPE_CHAR:
            pending = _skip_escape(read_char)
            continue

        if char < " ":
            continue

        buffer.append(char)
        write(mask)


@contextmanager
def raw_terminal(stream: TextIO):
    """
    Switch the terminal behind `stream` to unbuffered, no-echo input with
    signal keys delivered as characters. The previous mode is restored on
    every exit path. Non-terminal streams are left alone.
    """
    if not stream.isatty():
        yield
        return

    import termios

    fd = stream.fileno()
    saved = termios.tcgetattr(fd)

    mode = termios.tcgetattr(fd)
    mode[3] &= ~(termios.ECHO | termios.ICANON | termios.ISIG)
    mode[6][termios.VMIN] = 1
    mode[6][termios.VTIME] = 0

    try:
        termios.tcsetattr(fd, termios.TCSADRAIN, mode)
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


# ============================================================
# Input providers
# ============================================================

class ConfiguredInput:
    """Admin credentials taken from ADMIN{1,2}_EMAIL / ADMIN{1,2}_PASSWORD."""

    interactive = False

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or default_settings

    def credentials(self) -> List[AdminCredentialInput]:
        s = self.settings
        return [
            AdminCredentialInput(
                email=s.ADMIN1_EMAIL,
                password=s.ADMIN1_PASSWORD,
                display_name=DEFAULT_DISPLAY_NAMES[0],
            ),
            AdminCredentialInput(
                email=s.ADMIN2_EMAIL,
                password=s.ADMIN2_PASSWORD,
                display_name=DEFAULT_DISPLAY_NAMES[1],
            ),
        ]


class InteractiveInput:
    """
    Prompts for both admins before anything is created.
    Only the password prompt touches the terminal mode.
    """

    interactive = True

    def __init__(self, stdin: Optional[TextIO] = None, stdout: Optional[TextIO] = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        self.stdout.flush()

    def ask(self, prompt: str) -> str:
        self._write(prompt)
        line = self.stdin.readline()
        if not line:
            raise EOFError(f"No input for prompt {prompt.strip()!r}")
        return line.rstrip("\r\n").strip()

    def ask_password(self, prompt: str) -> str:
        with raw_terminal(self.stdin):
            return read_masked(prompt, lambda: self.stdin.read(1), self._write)

    def credentials(self) -> List[AdminCredentialInput]:
        collected = []
        for index, header in enumerate(ADMIN_HEADERS):
            self._write(("\n" if index else "") + header + "\n")
            email = self.ask("Email: ")
            password = self.ask_password("Password: ")
            display_name = self.ask("Display Name: ")
            collected.append(
                AdminCredentialInput(email=email, password=password, display_name=display_name)
            )
        return collected


def select_input_provider(settings: Optional[Settings] = None, force_interactive: bool = False):
    """
    All four admin variables present → ConfiguredInput, otherwise prompt.
    """
    settings = settings or default_settings
    if force_interactive or missing_admin_credentials(settings):
        return InteractiveInput()
    return ConfiguredInput(settings)
