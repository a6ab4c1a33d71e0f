# tmuxproj/core/interfaces.py
"""
Seams between the launcher and the external tools it drives.

The launcher only talks to these protocols, so tests can swap in fakes
for fzf and tmux.
"""
from pathlib import Path
from typing import List, Optional, Protocol, Sequence


class Presenter(Protocol):
    def choose(self, candidates: Sequence[str]) -> Optional[str]:
        """Returns the chosen entry, or None when the user cancels."""
        ...


class SessionStore(Protocol):
    def ensure(self, name: str, working_dir: Path) -> None:
        """Creates the session with the project layout, or switches to it if it exists."""
        ...


class SessionManager(SessionStore, Protocol):
    def has_session(self, name: str) -> bool:
        ...

    def list_sessions(self) -> List[str]:
        ...

    def create_session(self, name: str, working_dir: Optional[Path] = None) -> None:
        ...

    def switch_to(self, name: str) -> None:
        ...

    def list_windows(self, name: str) -> List[str]:
        ...

    def kill_session(self, name: str) -> None:
        ...
