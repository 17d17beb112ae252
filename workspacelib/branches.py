# workspacelib/branches.py
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from workspacelib.errors import CommandFailedError
from workspacelib.git_ops import probe_git, run_git_command

REMOTE_NAME = "origin"
DETACHED_HEAD = "HEAD"

_REMOTE_PREFIX = f"{REMOTE_NAME}/"
_REMOTES_PREFIX = f"remotes/{REMOTE_NAME}/"


class BranchKind(Enum):
    REMOTE = "remote"
    LOCAL = "local"
    NEW = "new"


@dataclass(frozen=True)
class BranchResolution:
    kind: BranchKind
    found_ref: str
    clean_name: str


@dataclass(frozen=True)
class BranchInfo:
    branch: str
    tracking: Optional[str] = None

    def describe(self) -> str:
        if self.tracking:
            return f"{self.branch} → {self.tracking}"
        return self.branch


def strip_remote_prefix(ref: str) -> str:
    if ref.startswith(_REMOTE_PREFIX):
        return ref[len(_REMOTE_PREFIX) :]
    return ref


def split_branch_token(token: str):
    """Return (remote_candidate, clean_name) for a user-supplied token."""
    if token.startswith(_REMOTE_PREFIX):
        return token, token[len(_REMOTE_PREFIX) :]
    if token.startswith(_REMOTES_PREFIX):
        return token[len("remotes/") :], token[len(_REMOTES_PREFIX) :]
    return _REMOTE_PREFIX + token, token


def branch_exists(ref, cwd=None) -> bool:
    """Check if a ref resolves via git rev-parse --verify."""
    return probe_git(["rev-parse", "--verify", "--quiet", ref], cwd=cwd).found


def get_branch_ref(ref, cwd=None) -> str:
    """Commit id the ref currently points at, or "" if it does not resolve."""
    return probe_git(["rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}"], cwd=cwd).output


def resolve_branch(token, cwd=None, reporter=None) -> BranchResolution:
    """Decide whether a token names a remote branch, a local one, or a new one.

    The remote candidate is checked before the local name, so a branch that
    exists in both places resolves as REMOTE and gets tracking configured.
    """
    remote_candidate, clean_name = split_branch_token(token)

    if branch_exists(remote_candidate, cwd):
        if reporter:
            reporter.info(f"Found remote branch: {remote_candidate}")
        return BranchResolution(BranchKind.REMOTE, remote_candidate, clean_name)

    if branch_exists(clean_name, cwd):
        if reporter:
            reporter.info(f"Found local branch: {clean_name}")
        return BranchResolution(BranchKind.LOCAL, clean_name, clean_name)

    if reporter:
        reporter.info(f"Branch '{clean_name}' not found on remote or locally")
        reporter.info("Will create new branch from base")
    return BranchResolution(BranchKind.NEW, "", clean_name)


def get_branch_name(worktree_path) -> str:
    """Branch checked out in a worktree; DETACHED_HEAD when detached."""
    return probe_git(["rev-parse", "--abbrev-ref", "HEAD"], cwd=worktree_path).output


def get_upstream(worktree_path) -> Optional[str]:
    res = probe_git(
        ["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"], cwd=worktree_path
    )
    if not res.found or res.output == "@{u}":
        return None
    return res.output


def get_branch_info(worktree_path) -> BranchInfo:
    upstream = get_upstream(worktree_path)
    tracking = strip_remote_prefix(upstream) if upstream else None
    return BranchInfo(branch=get_branch_name(worktree_path), tracking=tracking or None)


def list_available_branches(cwd=None, limit=20):
    """First lines of `git branch -a`, for diagnostics only."""
    res = probe_git(["branch", "-a"], cwd=cwd)
    return res.output.splitlines()[:limit]


def fetch_remote(cwd=None) -> bool:
    """Quiet fetch from origin. Returns False instead of raising on failure."""
    try:
        run_git_command(["fetch", "--quiet", REMOTE_NAME], cwd=cwd)
    except CommandFailedError:
        return False
    return True
