# tmuxproj/core/launcher.py
"""
Orchestrates the two interactive flows: opening a project as a tmux
session, and switching between existing sessions.
"""
from contextlib import nullcontext
from pathlib import Path
from typing import Callable, ContextManager, Optional
import click
import structlog

from tmuxproj.config.settings import AppConfig
from tmuxproj.core.discovery import discover, resolve_base_dir, to_display_path, from_display_path
from tmuxproj.core.discovery.path_resolution import expand_user_path
from tmuxproj.core.interfaces import Presenter, SessionManager, SessionStore
from tmuxproj.core.picker import CREATE_SESSION_ENTRY
from tmuxproj.core.tmux import sanitize_session_name, session_name_for
from tmuxproj.exceptions import InvalidInputError

log = structlog.get_logger(__name__)


class ProjectSessionLauncher:
    """Discovers projects, lets the user pick one and ensures its tmux session."""

    def __init__(
        self,
        config: AppConfig,
        presenter: Presenter,
        store: SessionStore,
        scan_status: Callable[[str], ContextManager] = nullcontext,
    ):
        self.config = config
        self.presenter = presenter
        self.store = store
        self.scan_status = scan_status
        self.log = log.bind(component=self.__class__.__name__)

    def select_project(self, base_dir: Path) -> Optional[Path]:
        base = resolve_base_dir(base_dir)
        with self.scan_status(f"Searching for project directories in: {base}"):
            roots = discover(base, self.config.discovery)
        if not roots:
            self.log.info("no_project_roots_found", base_dir=str(base))
            click.secho(f"No project directories found in: {base}", fg="yellow", err=True)
            return None

        display_paths = sorted(to_display_path(root, base) for root in roots)
        selection = self.presenter.choose(display_paths)
        if selection is None:
            return None
        selected = from_display_path(selection, base)
        self.log.info("project_selected", path=str(selected))
        return selected

    def launch(
        self,
        session_name: Optional[str] = None,
        base_dir: Optional[Path] = None,
        project_dir: Optional[Path] = None,
    ) -> bool:
        """Runs the whole flow. Returns False when the user cancelled the picker."""
        session_name = (session_name or "").strip()

        if base_dir is not None:
            selected = self.select_project(base_dir)
            if selected is None:
                return False
            project_dir = selected
            if not session_name:
                session_name = session_name_for(project_dir)
        else:
            project_dir = expand_user_path(project_dir) if project_dir is not None else Path.cwd()

        session_name = sanitize_session_name(session_name)
        if not session_name:
            raise InvalidInputError("Session name cannot be empty")

        self.log.info("ensuring_session", session=session_name, project_dir=str(project_dir))
        self.store.ensure(session_name, project_dir)
        return True


class SessionSwitcher:
    """Picks an existing tmux session, or creates a bare new one, and switches to it."""

    def __init__(
        self,
        presenter: Presenter,
        store: SessionManager,
        prompt: Callable[[], str],
    ):
        self.presenter = presenter
        self.store = store
        self.prompt = prompt
        self.log = log.bind(component=self.__class__.__name__)

    def run(self) -> bool:
        """Returns False when nothing was selected or created."""
        options = [CREATE_SESSION_ENTRY] + self.store.list_sessions()
        selection = self.presenter.choose(options)
        if selection is None:
            return False
        if selection == CREATE_SESSION_ENTRY:
            return self._create_new_session()

        click.secho(f"Switching to session: {selection}", fg="green", err=True)
        self.store.switch_to(selection)
        return True

    def _create_new_session(self) -> bool:
        name = sanitize_session_name(self.prompt() or "")
        if not name:
            raise InvalidInputError("No session name provided")
        if self.store.has_session(name):
            raise InvalidInputError(f"Session '{name}' already exists")

        click.secho(f"Creating new session: {name}", fg="green", err=True)
        self.store.create_session(name)
        self.store.switch_to(name)
        return True
