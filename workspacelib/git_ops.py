# workspacelib/git_ops.py
import subprocess
from dataclasses import dataclass
from enum import Enum

from workspacelib.errors import CommandFailedError


class ProbeState(Enum):
    FOUND = "found"
    NOT_FOUND = "not-found"
    ERROR = "error"  # git itself could not be run


@dataclass(frozen=True)
class ProbeResult:
    state: ProbeState
    output: str = ""

    @property
    def found(self) -> bool:
        return self.state is ProbeState.FOUND


def run_git_command(cmd_args, cwd=None):
    """Run a git command that must succeed and return its trimmed stdout.

    Raises CommandFailedError with git's exit status and stderr otherwise.
    """
    cmd = ["git"] + list(cmd_args)
    try:
        result = subprocess.run(
            cmd, cwd=cwd, check=True, capture_output=True, text=True
        )
    except subprocess.CalledProcessError as e:
        raise CommandFailedError(cmd, e.returncode, e.stderr or "") from e
    except OSError as e:
        raise CommandFailedError(cmd, 1, str(e)) from e
    return (result.stdout or "").strip()


def probe_git(cmd_args, cwd=None) -> ProbeResult:
    """Best-effort git call; never raises.

    A non-zero exit or empty output is NOT_FOUND; failing to start git at all
    is ERROR.
    """
    try:
        result = subprocess.run(
            ["git"] + list(cmd_args),
            cwd=cwd,
            check=True,
            capture_output=True,
            text=True,
        )
    except subprocess.CalledProcessError:
        return ProbeResult(ProbeState.NOT_FOUND)
    except OSError:
        return ProbeResult(ProbeState.ERROR)
    out = (result.stdout or "").strip()
    if not out:
        return ProbeResult(ProbeState.NOT_FOUND)
    return ProbeResult(ProbeState.FOUND, out)


def run_git_interactive(cmd_args, cwd=None):
    """Run git attached to the terminal; raise CommandFailedError on failure."""
    cmd = ["git"] + list(cmd_args)
    try:
        subprocess.run(cmd, cwd=cwd, check=True)
    except subprocess.CalledProcessError as e:
        raise CommandFailedError(cmd, e.returncode) from e
    except OSError as e:
        raise CommandFailedError(cmd, 1, str(e)) from e
