# tmuxproj/cli/interface.py
import shlex
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import click
from click_option_group import optgroup
from rich.console import Console as RichConsole
import structlog
import logging as stdlib_logging

from tmuxproj import __version__ as app_version
from tmuxproj.config.settings import AppConfig, DEFAULT_IGNORE_DIRS, IGNORE_DIRS_ENV_VAR
from tmuxproj.config.loader import load_app_config
from tmuxproj.logging_setup import configure_logging
from tmuxproj.core.dependencies import check_dependencies
from tmuxproj.core.discovery import resolve_base_dir
from tmuxproj.core.launcher import ProjectSessionLauncher, SessionSwitcher
from tmuxproj.core.picker import project_presenter, session_presenter
from tmuxproj.core.tmux import TmuxSessionStore
from tmuxproj.exceptions import TmuxProjError, MissingDependencyError

log = structlog.get_logger(__name__)


def _wrap_names(names, per_line: int = 8) -> str:
    rows = [", ".join(names[i:i + per_line]) for i in range(0, len(names), per_line)]
    return ",\n  ".join(rows)


PROJECT_SESSION_EPILOG = f"""\b
Environment Variables:
  {IGNORE_DIRS_ENV_VAR}  Newline-separated list of directory names to ignore
                       (overrides the default ignore list)

\b
Default ignored directories:
  {_wrap_names(list(DEFAULT_IGNORE_DIRS))}

\b
Examples:
  project-session                         # prompt for a name, use the current directory
  project-session myproject               # session 'myproject' in the current directory
  project-session -d ~/code               # pick a project under ~/code, name it after the folder
  project-session -d ~/code myproject     # pick a project under ~/code, session 'myproject'
  {IGNORE_DIRS_ENV_VAR}=$'node_modules\\ntarget' project-session -d ~/code
"""


def _log_level_from_verbosity(verbosity_level: int) -> str:
    if verbosity_level == 1:
        return "info"
    if verbosity_level >= 2:
        return "debug"
    return "warning"


def _editor_executable(editor: str) -> str:
    parts = shlex.split(editor)
    return parts[0] if parts else editor


def _apply_cli_overrides(ctx: click.Context, config: AppConfig, cli_params: Dict[str, Any]) -> AppConfig:
    # only flags the user actually passed override the file/environment values.
    if ctx.get_parameter_source("follow_symlinks") == click.core.ParameterSource.COMMANDLINE:
        config.discovery.follow_symlinks = cli_params["follow_symlinks"]
    if ctx.get_parameter_source("hidden") == click.core.ParameterSource.COMMANDLINE:
        config.discovery.include_hidden = cli_params["hidden"]
    return config


@contextmanager
def _cli_error_handling() -> Iterator[None]:
    try:
        yield
    except (click.exceptions.Exit, click.exceptions.Abort):
        # let click handle its own exit and abort exceptions.
        raise
    except (click.ClickException, TmuxProjError) as e:
        log.error(
            "cli_execution_error",
            error_type=type(e).__name__,
            message=str(e),
            is_debug=(log.getEffectiveLevel() <= stdlib_logging.DEBUG),
        )
        if isinstance(e, click.ClickException):
            e.show()
        else:
            click.secho(f"Error: {e}", fg="red", err=True)
            if isinstance(e, MissingDependencyError):
                click.echo("Please install the missing dependencies and try again.", err=True)
        sys.exit(1)
    except Exception as e:
        log.critical("cli_unexpected_critical_error", message=str(e), exc_info=True)
        click.secho(f"Unexpected critical error: {e}. Please report this.", fg="red", err=True)
        sys.exit(1)


@click.command(
    context_settings=dict(help_option_names=["-h", "--help"]),
    epilog=PROJECT_SESSION_EPILOG,
)
@click.argument("session_name", required=False)
@optgroup.group("Project Selection", help="Pick the project directory interactively.")
@optgroup.option("-d", "--dir", "base_dir", type=click.Path(path_type=Path), default=None, metavar="BASE_DIR", help="Use fzf to select a project from directories in BASE_DIR.")
@optgroup.option("-L", "--follow-symlinks/--no-follow-symlinks", "follow_symlinks", default=False, help="Follow symbolic links while scanning BASE_DIR.")
@optgroup.option("--hidden/--no-hidden", "hidden", default=False, help="Report package manifests found inside hidden directories.")
@optgroup.group("Application Behavior", help="Logging and version information.")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="tmuxproj", prog_name="project-session")
@click.pass_context
def project_session_cli(ctx: click.Context, session_name: Optional[str], **cli_params: Any):
    """Create a new tmux project session with nvim and terminal panes.

    SESSION_NAME is the name of the tmux session. It is prompted for when
    omitted, unless --dir is given, in which case it defaults to the name
    of the selected directory.
    """
    configure_logging(
        log_level_str=_log_level_from_verbosity(cli_params.get("verbosity_level", 0)),
        force_json_logs=cli_params.get("force_json_logs_cli", False),
    )
    log.debug("cli_invocation", session_name=session_name, params=cli_params)

    with _cli_error_handling():
        config = _apply_cli_overrides(ctx, load_app_config(), cli_params)
        check_dependencies(["tmux", _editor_executable(config.editor), "fzf"])

        base_dir: Optional[Path] = cli_params.get("base_dir")
        if base_dir is not None:
            base_dir = resolve_base_dir(base_dir)
        elif session_name is None:
            session_name = click.prompt("Enter session name", default="", show_default=False, err=True)

        store = TmuxSessionStore(editor=config.editor, right_pane_width=config.right_pane_width)
        presenter = project_presenter(base_dir or Path.cwd(), preview_width=config.preview_width)
        status_console = RichConsole(stderr=True)
        launcher = ProjectSessionLauncher(config, presenter, store, scan_status=status_console.status)

        if not launcher.launch(session_name=session_name, base_dir=base_dir):
            click.secho("No directory selected", fg="yellow", err=True)


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@optgroup.group("Application Behavior", help="Logging and version information.")
@optgroup.option("--verbose", "-v", "verbosity_level", count=True, help="Verbosity: -v info, -vv debug.")
@optgroup.option("--force-json-logs", "force_json_logs_cli", is_flag=True, default=False, help="Force JSON logs.")
@click.version_option(version=app_version, package_name="tmuxproj", prog_name="session-switcher")
def session_switcher_cli(**cli_params: Any):
    """Switch to an existing tmux session, create a new one, or delete one with Ctrl-D.

    The preview width is read from the PREVIEW_WIDTH environment variable
    (percent, default 50).
    """
    configure_logging(
        log_level_str=_log_level_from_verbosity(cli_params.get("verbosity_level", 0)),
        force_json_logs=cli_params.get("force_json_logs_cli", False),
    )
    log.debug("cli_invocation", params=cli_params)

    with _cli_error_handling():
        config = load_app_config()
        check_dependencies(["fzf", "tmux"])

        store = TmuxSessionStore(editor=config.editor, right_pane_width=config.right_pane_width)
        switcher = SessionSwitcher(
            session_presenter(preview_width=config.preview_width),
            store,
            prompt=lambda: click.prompt("Enter new session name", default="", show_default=False, err=True),
        )
        if not switcher.run():
            click.secho("No selection made", fg="yellow", err=True)
