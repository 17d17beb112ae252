# workspacelib/errors.py
"""Errors raised by workspace operations.

Only the CLI entry point turns these into an exit status; library code raises
and lets them propagate.
"""

from typing import List, Optional, Sequence


class WorkspaceError(Exception):
    """Base exception for all workspace errors."""

    exit_code = 1

    def __init__(self, message: str, details: Optional[Sequence[str]] = None):
        self.message = message
        self.details: List[str] = list(details or [])
        super().__init__(message)


class NotARepositoryError(WorkspaceError):
    def __init__(self, message: str = "Not a git repository"):
        super().__init__(message)


class CommandFailedError(WorkspaceError):
    """A git command that had to succeed exited non-zero."""

    def __init__(self, cmd: Sequence[str], returncode: Optional[int], stderr: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        self.exit_code = returncode if returncode else 1
        details = [self.stderr] if self.stderr else []
        super().__init__(f"Command failed: {' '.join(self.cmd)}", details)


class BaseBranchMissingError(WorkspaceError):
    def __init__(self, base_branch: str, available: Optional[Sequence[str]] = None):
        self.base_branch = base_branch
        details = ["Available branches:"] + list(available) if available else []
        super().__init__(f"Base branch not found: {base_branch}", details)


class SetupScriptFailedError(WorkspaceError):
    """Setup failed after the worktree was created; the worktree is kept."""

    def __init__(self, worktree_path: str):
        self.worktree_path = worktree_path
        super().__init__(f"Worktree created but setup failed: {worktree_path}")


class WorktreeNotFoundError(WorkspaceError):
    def __init__(self, name: str, worktrees: Optional[Sequence[str]] = None):
        self.name = name
        details = ["Available worktrees:"] + list(worktrees) if worktrees else []
        super().__init__(f"Worktree not found: {name}", details)


class InvalidBranchNameError(WorkspaceError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"Invalid branch name: {token!r}")
