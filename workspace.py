#!/usr/bin/env -S uv run --script
# /// script
# requires-python = ">=3.9"
# dependencies = [
#   "tomli>=2.0.0; python_version < '3.11'",
#   "tomli-w>=1.0.0",
# ]
# ///

# Thin compatibility shim: delegates to workspacelib and re-exports public API

import sys

from workspacelib.api import (
    BranchInfo,
    BranchKind,
    BranchResolution,
    ColorMode,
    CreateOptions,
    Reporter,
    SetupMode,
    Settings,
    Verbosity,
    WorkspaceError,
    WorktreePaths,
    branch_exists,
    choose_setup_mode,
    create_worktree,
    ensure_gitignore,
    ensure_worktree_root,
    find_project_root,
    get_branch_info,
    list_worktrees,
    load_settings,
    prepare_worktree_paths,
    prune_worktrees,
    remove_worktree,
    resolve_branch,
    run_setup,
    split_branch_token,
    worktree_name,
    worktree_path,
)
from workspacelib.cli import main  # CLI entrypoint

__all__ = [
    "main",
    "BranchKind",
    "BranchResolution",
    "BranchInfo",
    "split_branch_token",
    "resolve_branch",
    "branch_exists",
    "get_branch_info",
    "WorktreePaths",
    "worktree_name",
    "worktree_path",
    "prepare_worktree_paths",
    "find_project_root",
    "ensure_gitignore",
    "ensure_worktree_root",
    "CreateOptions",
    "create_worktree",
    "remove_worktree",
    "list_worktrees",
    "prune_worktrees",
    "SetupMode",
    "choose_setup_mode",
    "run_setup",
    "Settings",
    "load_settings",
    "ColorMode",
    "Reporter",
    "Verbosity",
    "WorkspaceError",
]

if __name__ == "__main__":
    sys.exit(main())
