# workspacelib/cli.py
import argparse
import sys

from workspacelib.__version__ import __version__
from workspacelib.config import load_settings
from workspacelib.display import ColorMode, Reporter, Verbosity, report_error
from workspacelib.errors import WorkspaceError
from workspacelib.paths import find_project_root
from workspacelib.worktrees import (
    CreateOptions,
    create_worktree,
    list_worktrees,
    prune_worktrees,
    remove_worktree,
)

CREATE_COMMAND = "create"
LIST_COMMANDS = ["list", "ls"]
REMOVE_COMMANDS = ["remove", "rm", "delete"]
PRUNE_COMMANDS = ["prune", "clean"]
SUBCOMMANDS = {CREATE_COMMAND, *LIST_COMMANDS, *REMOVE_COMMANDS, *PRUNE_COMMANDS}

# Global options that consume the following argument.
_OPTIONS_WITH_VALUE = {"-C", "--directory", "--color"}

# Create options accepted ahead of the branch name.
_CREATE_FLAGS = {"-n", "--no-setup"}
_CREATE_OPTIONS_WITH_VALUE = {"-s", "--setup", "-b", "--base"}


def build_parser():
    parser = argparse.ArgumentParser(
        prog="workspace",
        description=(
            "Create isolated git worktrees for branches, with automatic "
            "setup-script detection."
        ),
        epilog="Run `workspace <branch>` to create or reuse a worktree for <branch>.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-C",
        "--directory",
        default=None,
        help="Run as if started in this directory",
    )
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument(
        "-q", "--quiet", action="store_true", help="Only show warnings, errors and the summary"
    )
    verbosity.add_argument(
        "-v", "--verbose", action="store_true", help="Show extra diagnostic output"
    )
    parser.add_argument(
        "--color",
        choices=[ColorMode.AUTO, ColorMode.ALWAYS, ColorMode.NEVER],
        default=ColorMode.AUTO,
        help="Colorize output: auto (default), always, or never",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # `workspace <branch>` is rewritten to `workspace create <branch>`
    create_parser = subparsers.add_parser(
        CREATE_COMMAND, help="Create or reuse the worktree for a branch (default)"
    )
    create_parser.add_argument("branch", help="Branch name to create worktree for")
    setup_group = create_parser.add_mutually_exclusive_group()
    setup_group.add_argument(
        "-n",
        "--no-setup",
        dest="skip_setup",
        action="store_true",
        help="Skip setup script (fastest, git operations only)",
    )
    setup_group.add_argument(
        "-s", "--setup", dest="setup_script", metavar="PATH", help="Use custom setup script"
    )
    create_parser.add_argument(
        "-b",
        "--base",
        dest="base_branch",
        metavar="BRANCH",
        help="Create new branch from custom base (default: main)",
    )

    subparsers.add_parser(LIST_COMMANDS[0], aliases=LIST_COMMANDS[1:], help="List all worktrees")

    remove_parser = subparsers.add_parser(
        REMOVE_COMMANDS[0],
        aliases=REMOVE_COMMANDS[1:],
        help="Remove a worktree (discards uncommitted changes) and delete its branch",
    )
    remove_parser.add_argument("name", help="Worktree directory name (or branch name)")

    subparsers.add_parser(
        PRUNE_COMMANDS[0], aliases=PRUNE_COMMANDS[1:], help="Clean up stale worktrees"
    )
    return parser


def insert_default_command(argv):
    """Prefix the first positional with `create` unless it is a subcommand.

    Create options given before the branch are moved after `create`, so
    `workspace -n topic` parses like `workspace topic -n`.
    """
    args = list(argv)
    global_args = []
    create_args = []
    i = 0
    while i < len(args):
        arg = args[i]
        if arg == "--":
            return global_args + [CREATE_COMMAND] + create_args + args[i + 1 :]
        if arg.startswith("-"):
            option = arg.split("=", 1)[0]
            takes_value = "=" not in arg
            if option in _CREATE_FLAGS:
                create_args.append(arg)
            elif option in _CREATE_OPTIONS_WITH_VALUE:
                create_args.extend(args[i : i + 2] if takes_value else [arg])
                i += 1 if takes_value else 0
            else:
                global_args.append(arg)
                if arg in _OPTIONS_WITH_VALUE and i + 1 < len(args):
                    global_args.append(args[i + 1])
                    i += 1
            i += 1
            continue
        if arg == CREATE_COMMAND:
            return global_args + [arg] + create_args + args[i + 1 :]
        if arg in SUBCOMMANDS:
            return args
        return global_args + [CREATE_COMMAND] + create_args + args[i:]
    return global_args + create_args


def make_reporter(args):
    if args.quiet:
        verbosity = Verbosity.QUIET
    elif args.verbose:
        verbosity = Verbosity.VERBOSE
    else:
        verbosity = Verbosity.NORMAL
    return Reporter(verbosity=verbosity, color_mode=args.color)


def run_command(args, reporter):
    project_root = find_project_root(args.directory)

    if args.command == CREATE_COMMAND:
        settings = load_settings(project_root)
        options = CreateOptions(
            skip_setup=args.skip_setup,
            setup_script=args.setup_script,
            base_branch=args.base_branch,
        )
        report = create_worktree(args.branch, project_root, settings, options, reporter)
        reporter.emit_shell(f"cd {report.paths.worktree_path}")
    elif args.command in REMOVE_COMMANDS:
        settings = load_settings(project_root)
        report = remove_worktree(args.name, project_root, settings, reporter)
        if report.left_cwd:
            reporter.warning("You were inside the removed worktree.")
            reporter.emit_shell(f"cd {project_root}")
    elif args.command in LIST_COMMANDS:
        list_worktrees(project_root, reporter)
    elif args.command in PRUNE_COMMANDS:
        prune_worktrees(project_root, reporter)


def main(argv=None) -> int:
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)
    args = parser.parse_args(insert_default_command(argv))

    if args.command is None:
        parser.print_help()
        return 0

    reporter = make_reporter(args)
    try:
        run_command(args, reporter)
    except WorkspaceError as e:
        report_error(reporter, e)
        return e.exit_code
    return 0
