# workspacelib/setup_scripts.py
"""Detect and run a project's setup script inside a fresh worktree."""

import os
import re
import subprocess
import time
from typing import List, Optional

SETUP_ENV_VAR = "WORKSPACE_DIR"

# Checked in order; the first executable match wins.
SETUP_CANDIDATES = (
    "script/setup",
    "script/bootstrap",
    "bin/setup",
    "setup.sh",
    "bootstrap.sh",
    "scripts/setup.sh",
    "scripts/bootstrap.sh",
)
MAKE_TARGETS = ("setup", "bootstrap")


class SetupMode:
    NONE = "none"
    DEFAULT = "default"


def choose_setup_mode(skip_setup=False, setup_script=None) -> str:
    """Skipping wins over an explicit script; no script means auto-detect."""
    if skip_setup:
        return SetupMode.NONE
    if setup_script:
        return setup_script
    return SetupMode.DEFAULT


def is_executable(path) -> bool:
    return os.path.isfile(path) and os.access(path, os.X_OK)


def find_make_target(makefile_path, targets=MAKE_TARGETS) -> Optional[str]:
    """First of `targets` defined as a rule in the Makefile, if any."""
    if not os.path.isfile(makefile_path):
        return None
    try:
        with open(makefile_path, encoding="utf-8") as f:
            content = f.read()
    except (OSError, UnicodeDecodeError):
        return None
    for target in targets:
        if re.search(rf"^{re.escape(target)}:", content, re.MULTILINE):
            return target
    return None


def detect_setup_script(worktree_path) -> Optional[List[str]]:
    """Return the command to bootstrap a worktree, or None if nothing is found."""
    for candidate in SETUP_CANDIDATES:
        full_path = os.path.join(worktree_path, candidate)
        if is_executable(full_path):
            return [full_path]

    target = find_make_target(os.path.join(worktree_path, "Makefile"))
    if target:
        return ["make", target]
    return None


def resolve_script_path(worktree_path, script) -> str:
    """Absolute path for an explicit script; relative paths prefer the worktree."""
    if os.path.isabs(script):
        return script
    in_worktree = os.path.join(worktree_path, script)
    if os.path.exists(in_worktree):
        return in_worktree
    return os.path.abspath(script)


def run_setup(worktree_path, mode, reporter) -> bool:
    """Run setup for a worktree. False means the script ran and failed."""
    if mode == SetupMode.NONE:
        reporter.info("Skipping setup (--no-setup flag set)")
        return True

    reporter.blank()

    if mode == SetupMode.DEFAULT:
        command = detect_setup_script(worktree_path)
        if not command:
            reporter.info(
                "No setup script found (checked: script/setup, script/bootstrap, bin/setup, setup.sh, etc.)"
            )
            reporter.info("To use a custom script, run: workspace <branch> -s /path/to/script.sh")
            return True
        reporter.success(f"Found setup script: {' '.join(command)}")
    else:
        script = resolve_script_path(worktree_path, mode)
        if not os.path.exists(script):
            reporter.warning(f"Setup script not found: {script}")
            return True
        if not os.access(script, os.X_OK):
            reporter.warning(f"Setup script is not executable: {script}")
            reporter.info(f"Run: chmod +x {script}")
            return True
        command = [script]

    reporter.blank()
    reporter.info(f"Running setup script: {' '.join(command)}")
    env = os.environ.copy()
    env[SETUP_ENV_VAR] = os.path.abspath(worktree_path)
    start = time.monotonic()
    try:
        result = subprocess.run(command, cwd=worktree_path, env=env)
    except OSError as e:
        reporter.error(f"Could not start setup script: {e}")
        reporter.warning("Worktree created but setup failed")
        return False

    if result.returncode != 0:
        reporter.error("Setup script exited with error")
        reporter.warning("Worktree created but setup failed")
        return False

    reporter.success(f"Setup complete! ({int(time.monotonic() - start)}s)")
    return True
