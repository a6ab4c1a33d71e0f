# tmuxproj/cli/preview.py
"""
Preview commands run by fzf for the highlighted line.

Invoked as ``python -m tmuxproj.cli.preview ...`` so the preview does not
depend on the console scripts being on PATH.
"""
from pathlib import Path

import click

from tmuxproj.core.preview import render_directory_preview, render_session_preview
from tmuxproj.core.tmux import TmuxSessionStore


@click.group(context_settings=dict(help_option_names=["-h", "--help"]))
def preview_cli_group():
    """Render picker previews."""


@preview_cli_group.command("directory")
@click.argument("base_dir", type=click.Path(path_type=Path))
@click.argument("display_path")
def directory_preview(base_dir: Path, display_path: str):
    """Show whether DISPLAY_PATH (relative to BASE_DIR) is a project root, and its contents."""
    click.echo(render_directory_preview(display_path, base_dir), color=True)


@preview_cli_group.command("session")
@click.argument("name")
def session_preview(name: str):
    """Show the windows of tmux session NAME."""
    click.echo(render_session_preview(name, TmuxSessionStore()), color=True)


if __name__ == "__main__":
    preview_cli_group(prog_name="tmuxproj-preview")
