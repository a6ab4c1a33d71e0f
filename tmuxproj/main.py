# tmuxproj/main.py
"""Entry points for the tmuxproj console scripts."""

from tmuxproj.cli.interface import project_session_cli, session_switcher_cli


def project_session_entrypoint():
    """Function to be called by the `project-session` script defined in pyproject.toml."""
    project_session_cli(prog_name="project-session")


def session_switcher_entrypoint():
    """Function to be called by the `session-switcher` script defined in pyproject.toml."""
    session_switcher_cli(prog_name="session-switcher")


if __name__ == '__main__':
    project_session_entrypoint()
