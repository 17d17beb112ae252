# workspacelib/config.py
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

if sys.version_info >= (3, 11):
    import tomllib as tomli
else:
    import tomli
import tomli_w

DEFAULT_WORKTREE_DIR = ".worktrees"
DEFAULT_BASE_BRANCH = "main"

ENV_WORKTREE_DIR = "WORKSPACE_WORKTREE_DIR"
ENV_BASE_BRANCH = "WORKSPACE_BASE_BRANCH"


@dataclass(frozen=True)
class Settings:
    worktree_dir: str = DEFAULT_WORKTREE_DIR
    base_branch: str = DEFAULT_BASE_BRANCH
    setup_script: Optional[str] = None


def get_config_path():
    """Get the path to the config file following XDG Base Directory spec."""
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        config_dir = Path(xdg_config_home) / "workspace"
    else:
        config_dir = Path.home() / ".config" / "workspace"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir / "config.toml"


def default_config():
    return {
        "worktree_dir": DEFAULT_WORKTREE_DIR,
        "base_branch": DEFAULT_BASE_BRANCH,
        "repos": {},
    }


def load_config():
    """Load configuration from file with fallback to defaults."""
    try:
        config_path = get_config_path()
    except OSError as e:
        print(f"Error creating config directory: {e}", file=sys.stderr)
        return default_config()
    if not config_path.exists():
        try:
            with open(config_path, "wb") as f:
                tomli_w.dump(default_config(), f)
        except OSError as e:
            print(f"Error creating config file: {e}", file=sys.stderr)
        return default_config()
    try:
        with open(config_path, "rb") as f:
            return tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        print(f"Error loading config file: {e}", file=sys.stderr)
        return default_config()


def get_repo_config(config, project_root):
    """Get the repository-specific section, or an empty dict."""
    repos = config.get("repos")
    if isinstance(repos, dict):
        section = repos.get(str(project_root))
        if isinstance(section, dict):
            return section
    return {}


def valid_worktree_dir(name) -> bool:
    """A worktree dir must be a single relative path component."""
    if not isinstance(name, str) or not name.strip():
        return False
    if os.path.isabs(name) or name in (".", ".."):
        return False
    return "/" not in name and os.sep not in name


def load_settings(project_root=None) -> Settings:
    """Resolve settings: env > repo section > global config > defaults."""
    config = load_config()
    repo = get_repo_config(config, project_root) if project_root else {}

    def pick(key, env_var, default):
        for value in (os.environ.get(env_var), repo.get(key), config.get(key)):
            if value:
                return value
        return default

    worktree_dir = pick("worktree_dir", ENV_WORKTREE_DIR, DEFAULT_WORKTREE_DIR)
    if not valid_worktree_dir(worktree_dir):
        print(
            f"Warning: ignoring invalid worktree_dir {worktree_dir!r}, using {DEFAULT_WORKTREE_DIR}",
            file=sys.stderr,
        )
        worktree_dir = DEFAULT_WORKTREE_DIR

    setup_script = repo.get("setup_script") or None
    return Settings(
        worktree_dir=worktree_dir,
        base_branch=str(pick("base_branch", ENV_BASE_BRANCH, DEFAULT_BASE_BRANCH)),
        setup_script=str(setup_script) if setup_script else None,
    )
