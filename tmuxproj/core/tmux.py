# tmuxproj/core/tmux.py
"""
tmux session management through subprocess.

Wraps the handful of tmux commands needed to list, create, kill and
switch sessions, and to build the editor + shell project layout.
"""
import os
import re
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional, Tuple
import click
import structlog

from tmuxproj.config.settings import DEFAULT_EDITOR, DEFAULT_RIGHT_PANE_WIDTH
from tmuxproj.exceptions import InvalidInputError, SessionError

log = structlog.get_logger(__name__)

# tmux rewrites these characters in session names, which breaks later lookups.
_FORBIDDEN_NAME_CHARS = re.compile(r"[.:]")

WINDOW_FORMAT = "#{window_index}: #{window_name} #{window_flags}"


def sanitize_session_name(name: str) -> str:
    return _FORBIDDEN_NAME_CHARS.sub("_", name.strip())


def session_name_for(project_dir: Path) -> str:
    # derives a session name from the final path segment.
    return sanitize_session_name(project_dir.name)


class TmuxSessionStore:
    """Creates, inspects and switches tmux sessions."""

    def __init__(
        self,
        editor: str = DEFAULT_EDITOR,
        right_pane_width: int = DEFAULT_RIGHT_PANE_WIDTH,
        env: Optional[Mapping[str, str]] = None,
    ):
        self.editor = editor
        self.right_pane_width = right_pane_width
        self.env = os.environ if env is None else env

    @property
    def inside_tmux(self) -> bool:
        return bool(self.env.get("TMUX"))

    def _run(self, args: List[str], check_exit_code: bool = True) -> Tuple[bool, str, str]:
        """
        runs a tmux command and captures its output.
        returns (success_flag, stdout_str, stderr_str).
        raises SessionError on a non-zero exit when `check_exit_code` is true.
        """
        command_parts = ["tmux"] + [str(arg) for arg in args]
        log.debug("executing_tmux_command", command=" ".join(command_parts))
        try:
            process = subprocess.run(
                command_parts,
                capture_output=True,
                text=True,
                check=False,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError:
            log.error("tmux_executable_not_found")
            raise SessionError("tmux command not found. is tmux installed and in PATH?") from None

        was_successful = process.returncode == 0
        stdout_content = (process.stdout or "").strip()
        stderr_content = (process.stderr or "").strip()
        if not was_successful:
            log.debug(
                "tmux_command_failed",
                command=" ".join(command_parts),
                exit_code=process.returncode,
                stderr=stderr_content or "(empty)",
            )
            if check_exit_code:
                raise SessionError(
                    f"tmux {args[0]} failed (exit {process.returncode}): {stderr_content or 'no error output'}"
                )
        return was_successful, stdout_content, stderr_content

    def _run_interactive(self, args: List[str]) -> None:
        # attach/switch need the real terminal, so output is not captured.
        command_parts = ["tmux"] + [str(arg) for arg in args]
        log.debug("executing_interactive_tmux_command", command=" ".join(command_parts))
        try:
            process = subprocess.run(command_parts, check=False)
        except FileNotFoundError:
            raise SessionError("tmux command not found. is tmux installed and in PATH?") from None
        if process.returncode != 0:
            raise SessionError(f"tmux {args[0]} failed (exit {process.returncode})")

    def has_session(self, name: str) -> bool:
        # the "=" prefix asks tmux for an exact match instead of a prefix match.
        success, _, _ = self._run(["has-session", "-t", f"={name}"], check_exit_code=False)
        return success

    def list_sessions(self) -> List[str]:
        success, stdout, stderr = self._run(
            ["list-sessions", "-F", "#{session_name}"], check_exit_code=False
        )
        if not success:
            # no server running means no sessions.
            log.debug("tmux_list_sessions_empty", stderr=stderr)
            return []
        return [line for line in stdout.splitlines() if line.strip()]

    def list_windows(self, name: str) -> List[str]:
        success, stdout, _ = self._run(
            ["list-windows", "-t", f"={name}", "-F", WINDOW_FORMAT], check_exit_code=False
        )
        if not success:
            return []
        return [line for line in stdout.splitlines() if line.strip()]

    def kill_session(self, name: str) -> None:
        log.info("killing_tmux_session", session=name)
        self._run(["kill-session", "-t", f"={name}"])

    def create_session(self, name: str, working_dir: Optional[Path] = None) -> None:
        # plain detached session without the project layout.
        args = ["new-session", "-d", "-s", name]
        if working_dir is not None:
            args += ["-c", str(working_dir)]
        log.info("creating_tmux_session", session=name, working_dir=str(working_dir) if working_dir else None)
        self._run(args)

    def switch_to(self, name: str) -> None:
        if self.inside_tmux:
            log.info("switching_tmux_client", session=name)
            self._run(["switch-client", "-t", f"={name}"])
        else:
            log.info("attaching_tmux_session", session=name)
            self._run_interactive(["attach-session", "-t", f"={name}"])

    def create_project_session(self, name: str, working_dir: Path) -> None:
        """Creates a detached session with the editor on the left and a shell on the right."""
        _, editor_pane, _ = self._run(
            ["new-session", "-d", "-s", name, "-c", str(working_dir), "-P", "-F", "#{pane_id}"]
        )
        try:
            _, shell_pane, _ = self._run(
                ["split-window", "-h", "-t", editor_pane, "-c", str(working_dir), "-P", "-F", "#{pane_id}"]
            )
            self._run(["resize-pane", "-t", shell_pane, "-x", f"{self.right_pane_width}%"])
            self._run(["send-keys", "-t", editor_pane, f"{self.editor} .", "Enter"])
            self._run(["select-pane", "-t", editor_pane])
        except SessionError:
            # a half-built session would be reused as-is by the next ensure().
            log.warning("tmux_layout_failed_removing_session", session=name)
            self._run(["kill-session", "-t", f"={name}"], check_exit_code=False)
            raise
        log.info(
            "tmux_project_session_created",
            session=name,
            working_dir=str(working_dir),
            editor_pane=editor_pane,
            shell_pane=shell_pane,
        )

    def ensure(self, name: str, working_dir: Path) -> None:
        """Switches to session `name`, creating it in `working_dir` first if it does not exist."""
        if self.has_session(name):
            log.info("tmux_session_exists_switching", session=name)
            click.secho(f"Session '{name}' already exists, switching to it", fg="yellow", err=True)
            self.switch_to(name)
            return

        if not working_dir.is_dir():
            raise InvalidInputError(f"Directory '{working_dir}' does not exist")

        click.secho(f"Creating project session: {name}", fg="green", err=True)
        click.echo(f"Working directory: {working_dir}", err=True)
        self.create_project_session(name, working_dir)
        self.switch_to(name)
