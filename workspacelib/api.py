# workspacelib/api.py
from workspacelib.branches import (
    BranchInfo,
    BranchKind,
    BranchResolution,
    branch_exists,
    get_branch_info,
    resolve_branch,
    split_branch_token,
)
from workspacelib.config import Settings, load_settings
from workspacelib.display import ColorMode, Reporter, Verbosity
from workspacelib.errors import WorkspaceError
from workspacelib.paths import (
    WorktreePaths,
    ensure_gitignore,
    ensure_worktree_root,
    find_project_root,
    prepare_worktree_paths,
    worktree_name,
    worktree_path,
)
from workspacelib.setup_scripts import SetupMode, choose_setup_mode, run_setup
from workspacelib.worktrees import (
    CreateOptions,
    create_worktree,
    list_worktrees,
    prune_worktrees,
    remove_worktree,
)

__all__ = [
    # branches
    "BranchKind",
    "BranchResolution",
    "BranchInfo",
    "split_branch_token",
    "resolve_branch",
    "branch_exists",
    "get_branch_info",
    # paths
    "WorktreePaths",
    "worktree_name",
    "worktree_path",
    "prepare_worktree_paths",
    "find_project_root",
    "ensure_gitignore",
    "ensure_worktree_root",
    # worktrees
    "CreateOptions",
    "create_worktree",
    "remove_worktree",
    "list_worktrees",
    "prune_worktrees",
    # setup
    "SetupMode",
    "choose_setup_mode",
    "run_setup",
    # config
    "Settings",
    "load_settings",
    # display
    "ColorMode",
    "Reporter",
    "Verbosity",
    # errors
    "WorkspaceError",
]
