# workspacelib/display.py
import os
import sys


class ColorMode:
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


class Verbosity:
    QUIET = 0
    NORMAL = 1
    VERBOSE = 2


# ANSI codes
BLUE = "\033[34m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
DIM = "\033[2m"
RESET = "\033[0m"


def color_enabled(color_mode, stream=None):
    """Decide color enablement (stream TTY + NO_COLOR)."""
    if color_mode == ColorMode.ALWAYS:
        return True
    if color_mode == ColorMode.NEVER:
        return False
    stream = stream if stream is not None else sys.stderr
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty()) and os.environ.get("NO_COLOR") is None


class Reporter:
    """Leveled message sink handed to every operation.

    Human-readable output goes to stderr so stdout stays free for lines a
    shell wrapper can evaluate (``cd <path>``).

    Quiet mode keeps warnings, errors and the final summary; verbose mode
    adds debug lines.
    """

    def __init__(self, verbosity=Verbosity.NORMAL, color_mode=ColorMode.AUTO, stream=None, out=None):
        self.verbosity = verbosity
        self._stream = stream
        self._out = out
        self.enable_color = color_enabled(color_mode, self.stream)

    @property
    def stream(self):
        return self._stream if self._stream is not None else sys.stderr

    @property
    def out(self):
        return self._out if self._out is not None else sys.stdout

    def _paint(self, code, text):
        if not self.enable_color:
            return text
        return f"{code}{text}{RESET}"

    def _emit(self, symbol, code, message):
        print(f"{self._paint(code, symbol)} {message}", file=self.stream)

    def debug(self, message):
        if self.verbosity >= Verbosity.VERBOSE:
            print(self._paint(DIM, f"  {message}"), file=self.stream)

    def info(self, message):
        if self.verbosity >= Verbosity.NORMAL:
            self._emit("ℹ", BLUE, message)

    def success(self, message):
        if self.verbosity >= Verbosity.NORMAL:
            self._emit("✓", GREEN, message)

    def detail(self, message):
        if self.verbosity >= Verbosity.NORMAL:
            print(f"  {message}", file=self.stream)

    def warning(self, message):
        self._emit("⚠", YELLOW, message)

    def error(self, message):
        self._emit("✗", RED, message)

    def blank(self):
        if self.verbosity >= Verbosity.NORMAL:
            print("", file=self.stream)

    def summary(self, headline, lines=()):
        """Final result block, shown at every verbosity."""
        print("", file=self.stream)
        self._emit("✓", GREEN, headline)
        for ln in lines:
            print(f"  {ln}", file=self.stream)

    def emit_shell(self, line):
        """Write a line meant for a shell wrapper to stdout."""
        print(line, file=self.out)


def report_error(reporter, err):
    """Print a WorkspaceError's message followed by its detail lines."""
    reporter.error(err.message)
    for ln in err.details:
        print(ln, file=reporter.stream)
