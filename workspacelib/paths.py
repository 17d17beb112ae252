# workspacelib/paths.py
import os
import re
from dataclasses import dataclass

from workspacelib.branches import strip_remote_prefix
from workspacelib.errors import InvalidBranchNameError, NotARepositoryError
from workspacelib.git_ops import ProbeState, probe_git, run_git_command

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]")


@dataclass(frozen=True)
class WorktreePaths:
    project_root: str
    dir_name: str
    worktree_path: str


def worktree_name(token: str) -> str:
    """Filesystem-safe directory name for a branch token.

    One leading ``origin/`` is dropped and every character outside
    ``[A-Za-z0-9_-]`` becomes ``-``. Distinct tokens may map to the same name
    (``a/b`` and ``a-b``); no disambiguation is attempted.
    """
    name = _UNSAFE.sub("-", strip_remote_prefix(token))
    if not name:
        raise InvalidBranchNameError(token)
    return name


def worktree_path(root: str, token: str) -> str:
    return os.path.join(root, worktree_name(token))


def prepare_worktree_paths(project_root: str, token: str, worktree_dir: str) -> WorktreePaths:
    dir_name = worktree_name(token)
    path = worktree_path(os.path.join(project_root, worktree_dir), token)
    return WorktreePaths(project_root=project_root, dir_name=dir_name, worktree_path=path)


def find_project_root(cwd=None) -> str:
    """Return the repository top-level directory, or raise NotARepositoryError."""
    if cwd is not None and not os.path.isdir(cwd):
        raise NotARepositoryError(f"Directory not found: {cwd}")
    probe = probe_git(["rev-parse", "--git-dir"], cwd=cwd)
    if probe.state is ProbeState.ERROR:
        raise NotARepositoryError("git executable not found")
    if not probe.found:
        raise NotARepositoryError()
    return run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)


def ensure_gitignore(project_root: str, worktree_dir: str, reporter=None) -> bool:
    """Make sure .gitignore ignores the worktree directory.

    Returns True when the file was created or appended to.
    """
    gitignore_path = os.path.join(project_root, ".gitignore")
    pattern = f"{worktree_dir}/"

    if not os.path.exists(gitignore_path):
        if reporter:
            reporter.warning(".gitignore not found, creating one")
        with open(gitignore_path, "w") as f:
            f.write(f"{pattern}\n")
        if reporter:
            reporter.success(f"Added {pattern} to .gitignore")
        return True

    with open(gitignore_path) as f:
        content = f.read()
    if re.search(rf"^{re.escape(worktree_dir)}/?$", content, re.MULTILINE):
        return False

    if reporter:
        reporter.warning(f"{pattern} not found in .gitignore")
    with open(gitignore_path, "a") as f:
        f.write(f"\n# git worktrees\n{pattern}\n")
    if reporter:
        reporter.success(f"Added {pattern} to .gitignore")
    return True


def ensure_worktree_root(project_root: str, worktree_dir: str, reporter=None) -> str:
    root = os.path.join(project_root, worktree_dir)
    if not os.path.exists(root):
        if reporter:
            reporter.info(f"Creating {worktree_dir}/ directory")
        os.makedirs(root, exist_ok=True)
        if reporter:
            reporter.success(f"Created {worktree_dir}/ directory")
    return root


def is_path_current_worktree(path: str) -> bool:
    """Check if the current directory is inside the given worktree path."""
    try:
        cur = os.path.abspath(os.getcwd())
        p = os.path.abspath(path)
        return cur == p or cur.startswith(p + os.sep)
    except OSError:
        return False
