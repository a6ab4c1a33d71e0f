# tmuxproj/core/picker.py
"""fzf-backed pickers for project directories and tmux sessions."""
import shlex
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Sequence
import structlog

from tmuxproj.config.settings import DEFAULT_PREVIEW_WIDTH
from tmuxproj.exceptions import MissingDependencyError, PresenterError

log = structlog.get_logger(__name__)

# fzf exits 1 when nothing matched and 130 on Esc / Ctrl-C.
FZF_CANCEL_EXIT_CODES = (1, 130)

CREATE_SESSION_ENTRY = "➕ Create new session"

PREVIEW_MODULE = "tmuxproj.cli.preview"


def _preview_command(*args: str) -> str:
    # fzf substitutes and quotes {} itself, so it must stay unquoted here.
    parts = [shlex.quote(sys.executable), "-m", PREVIEW_MODULE]
    parts += [arg if arg == "{}" else shlex.quote(arg) for arg in args]
    return " ".join(parts)


def directory_preview_command(base_dir: Path) -> str:
    return _preview_command("directory", str(base_dir), "{}")


def session_preview_command() -> str:
    return _preview_command("session", "{}")


def session_list_command() -> str:
    # shell snippet used by fzf's reload() after a session is deleted.
    return (
        f"echo {shlex.quote(CREATE_SESSION_ENTRY)}; "
        "tmux list-sessions -F '#{session_name}' 2>/dev/null || true"
    )


class FzfPresenter:
    """Lets the user pick one line out of `candidates` with fzf."""

    def __init__(
        self,
        prompt: str,
        header: str,
        preview_command: Optional[str] = None,
        preview_width: int = DEFAULT_PREVIEW_WIDTH,
        extra_args: Sequence[str] = (),
        height: str = "70%",
    ):
        self.prompt = prompt
        self.header = header
        self.preview_command = preview_command
        self.preview_width = preview_width
        self.extra_args = list(extra_args)
        self.height = height

    def build_command(self) -> List[str]:
        command = [
            "fzf",
            "--ansi",
            f"--prompt={self.prompt}",
            f"--header={self.header}",
            f"--height={self.height}",
        ]
        if self.preview_command:
            command += [
                f"--preview={self.preview_command}",
                f"--preview-window=right:{self.preview_width}%",
            ]
        command += self.extra_args
        return command

    def choose(self, candidates: Sequence[str]) -> Optional[str]:
        command = self.build_command()
        log.debug("launching_fzf", candidate_count=len(candidates), prompt=self.prompt)
        try:
            # fzf draws its UI on the tty; only stdout (the selection) is captured.
            process = subprocess.run(
                command,
                input="\n".join(candidates) + ("\n" if candidates else ""),
                stdout=subprocess.PIPE,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            raise MissingDependencyError(["fzf"]) from None

        if process.returncode in FZF_CANCEL_EXIT_CODES:
            log.info("fzf_selection_cancelled", exit_code=process.returncode)
            return None
        if process.returncode != 0:
            raise PresenterError(f"fzf exited with status {process.returncode}")

        selection = (process.stdout or "").strip()
        if not selection:
            return None
        log.info("fzf_selection_made", selection=selection)
        return selection


def project_presenter(base_dir: Path, preview_width: int = DEFAULT_PREVIEW_WIDTH) -> FzfPresenter:
    return FzfPresenter(
        prompt="Select project directory: ",
        header="↑/↓: navigate, Enter: select, Esc: cancel",
        preview_command=directory_preview_command(base_dir),
        preview_width=preview_width,
    )


def session_presenter(preview_width: int = DEFAULT_PREVIEW_WIDTH) -> FzfPresenter:
    delete_binding = (
        "ctrl-d:execute(tmux kill-session -t ={} 2>/dev/null && echo 'Session {} deleted' "
        "|| echo 'Could not delete {}')"
        f"+reload({session_list_command()})"
    )
    return FzfPresenter(
        prompt="Select session: ",
        header="Enter: select, Ctrl-D: delete session, Esc: cancel",
        preview_command=session_preview_command(),
        preview_width=preview_width,
        extra_args=[f"--bind={delete_binding}"],
    )
