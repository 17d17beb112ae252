# workspacelib/worktrees.py
import os
from dataclasses import dataclass
from typing import Optional

from workspacelib.branches import (
    DETACHED_HEAD,
    BranchInfo,
    BranchKind,
    branch_exists,
    fetch_remote,
    get_branch_info,
    get_branch_name,
    get_branch_ref,
    get_upstream,
    list_available_branches,
    resolve_branch,
    split_branch_token,
    strip_remote_prefix,
)
from workspacelib.errors import (
    BaseBranchMissingError,
    CommandFailedError,
    SetupScriptFailedError,
    WorktreeNotFoundError,
)
from workspacelib.git_ops import probe_git, run_git_command, run_git_interactive
from workspacelib.paths import (
    WorktreePaths,
    ensure_gitignore,
    ensure_worktree_root,
    is_path_current_worktree,
    prepare_worktree_paths,
    worktree_name,
)
from workspacelib.setup_scripts import choose_setup_mode, run_setup


@dataclass(frozen=True)
class CreateOptions:
    skip_setup: bool = False
    setup_script: Optional[str] = None
    base_branch: Optional[str] = None


@dataclass(frozen=True)
class WorktreeReport:
    paths: WorktreePaths
    branch_info: BranchInfo
    reused: bool


@dataclass(frozen=True)
class RemoveReport:
    path: str
    branch: str
    branch_deleted: bool
    left_cwd: bool


def setup_prerequisites(project_root, worktree_dir, reporter):
    """Repository hygiene before the first worktree add, strictly in order."""
    ensure_gitignore(project_root, worktree_dir, reporter)
    ensure_worktree_root(project_root, worktree_dir, reporter)
    if not fetch_remote(project_root):
        reporter.debug("git fetch origin failed; continuing with local refs")


def ensure_tracking(worktree_path, branch_name, remote_ref, reporter):
    """Set the upstream only when none is configured yet."""
    if get_upstream(worktree_path) is None:
        reporter.info(f"Setting up tracking: {branch_name} -> {remote_ref}")
        run_git_command(["branch", f"--set-upstream-to={remote_ref}"], cwd=worktree_path)


def create_from_remote_branch(paths, resolution, reporter):
    local_name = strip_remote_prefix(resolution.found_ref)
    root = paths.project_root

    if branch_exists(local_name, root):
        reporter.info(f"Using existing local branch: {local_name}")
        run_git_command(["worktree", "add", paths.worktree_path, local_name], cwd=root)
        ensure_tracking(paths.worktree_path, local_name, resolution.found_ref, reporter)
    else:
        reporter.info(f"Creating local tracking branch: {local_name} -> {resolution.found_ref}")
        run_git_command(
            ["worktree", "add", "-b", local_name, paths.worktree_path, resolution.found_ref],
            cwd=root,
        )
        run_git_command(
            ["branch", f"--set-upstream-to={resolution.found_ref}"], cwd=paths.worktree_path
        )
    reporter.success("Worktree created!")
    reporter.detail(f"Branch: {local_name} (tracking {resolution.found_ref})")


def create_from_local_branch(paths, resolution, reporter):
    reporter.info(f"Using existing local branch: {resolution.found_ref}")
    run_git_command(
        ["worktree", "add", paths.worktree_path, resolution.found_ref], cwd=paths.project_root
    )
    reporter.success("Worktree created!")
    reporter.detail(f"Branch: {resolution.found_ref}")


def create_new_branch(paths, resolution, base_branch, reporter):
    """Fork a new branch at the base branch's current commit."""
    root = paths.project_root
    if not branch_exists(base_branch, root):
        raise BaseBranchMissingError(base_branch, list_available_branches(root))

    commit = get_branch_ref(base_branch, root)
    reporter.info(f"Creating new branch '{resolution.clean_name}' from: {base_branch}")
    run_git_command(
        ["worktree", "add", "-b", resolution.clean_name, paths.worktree_path, commit or base_branch],
        cwd=root,
    )
    reporter.success("Worktree created!")
    reporter.detail(f"Branch: {resolution.clean_name} (new from {base_branch})")


def warn_if_other_branch(paths, token, reporter):
    """An existing directory may belong to a different branch with the same sanitized name."""
    _, clean_name = split_branch_token(token)
    current = get_branch_name(paths.worktree_path)
    if current and current != DETACHED_HEAD and current != clean_name:
        reporter.warning(
            f"{paths.dir_name} is checked out on '{current}', not '{clean_name}'"
        )


def create_worktree(token, project_root, settings, options, reporter) -> WorktreeReport:
    """Create (or reuse) the worktree for a branch token and run setup.

    An existing worktree directory skips branch resolution and git entirely;
    only setup and the summary run again. A failing setup leaves the new
    worktree in place and raises SetupScriptFailedError.
    """
    paths = prepare_worktree_paths(project_root, token, settings.worktree_dir)
    reused = os.path.exists(paths.worktree_path)

    if reused:
        reporter.info(f"Worktree already exists: {settings.worktree_dir}/{paths.dir_name}")
        warn_if_other_branch(paths, token, reporter)
    else:
        setup_prerequisites(project_root, settings.worktree_dir, reporter)
        resolution = resolve_branch(token, project_root, reporter)
        if resolution.kind is BranchKind.REMOTE:
            create_from_remote_branch(paths, resolution, reporter)
        elif resolution.kind is BranchKind.LOCAL:
            create_from_local_branch(paths, resolution, reporter)
        else:
            base_branch = options.base_branch or settings.base_branch
            create_new_branch(paths, resolution, base_branch, reporter)

    mode = choose_setup_mode(options.skip_setup, options.setup_script or settings.setup_script)
    if not run_setup(paths.worktree_path, mode, reporter):
        raise SetupScriptFailedError(paths.worktree_path)

    branch_info = get_branch_info(paths.worktree_path)
    rel = f"{settings.worktree_dir}/{paths.dir_name}"
    reporter.summary(
        f"Worktree ready: {rel}",
        [f"Branch: {branch_info.describe()}", f"Path: {paths.worktree_path}"],
    )
    reporter.blank()
    reporter.info("Next steps:")
    reporter.detail(f"cd {rel}")
    return WorktreeReport(paths=paths, branch_info=branch_info, reused=reused)


def current_worktree_lines(project_root):
    return probe_git(["worktree", "list"], cwd=project_root).output.splitlines()


def find_worktree_dir(name, project_root, worktree_dir) -> Optional[str]:
    """Path of an existing worktree by directory name, or by branch token."""
    root = os.path.join(project_root, worktree_dir)
    candidates = [name]
    sanitized = worktree_name(name)
    if sanitized != name:
        candidates.append(sanitized)
    for candidate in candidates:
        path = os.path.normpath(os.path.join(root, candidate))
        # Only direct children of the worktree root.
        if os.path.dirname(path) != os.path.normpath(root):
            continue
        if os.path.exists(path):
            return path
    return None


def delete_branch(branch, project_root) -> bool:
    try:
        run_git_command(["branch", "-D", branch], cwd=project_root)
    except CommandFailedError:
        return False
    return True


def remove_worktree(name, project_root, settings, reporter) -> RemoveReport:
    """Force-remove a worktree (discarding local changes) and delete its branch."""
    path = find_worktree_dir(name, project_root, settings.worktree_dir)
    if path is None:
        raise WorktreeNotFoundError(
            f"{settings.worktree_dir}/{name}", current_worktree_lines(project_root)
        )

    left_cwd = is_path_current_worktree(path)
    branch = get_branch_name(path)
    run_git_command(["worktree", "remove", path, "--force"], cwd=project_root)

    deleted = False
    if branch and branch != DETACHED_HEAD:
        deleted = delete_branch(branch, project_root)

    lines = []
    if deleted:
        lines.append(f"Deleted branch: {branch}")
    elif branch and branch != DETACHED_HEAD:
        lines.append(f"Branch not deleted: {branch}")
    reporter.summary(f"Removed: {settings.worktree_dir}/{os.path.basename(path)}", lines)
    reporter.blank()
    for ln in current_worktree_lines(project_root):
        reporter.detail(ln)
    return RemoveReport(path=path, branch=branch, branch_deleted=deleted, left_cwd=left_cwd)


def list_worktrees(project_root, reporter):
    """Show `git worktree list` as git prints it."""
    reporter.info("Git worktrees:")
    reporter.blank()
    run_git_interactive(["worktree", "list"], cwd=project_root)


def prune_worktrees(project_root, reporter):
    reporter.info("Pruning stale worktrees")
    run_git_interactive(["worktree", "prune", "-v"], cwd=project_root)
    reporter.success("Stale worktrees pruned")
    reporter.blank()
    list_worktrees(project_root, reporter)
