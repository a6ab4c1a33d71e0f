# tmuxproj/__init__.py
"""Discover project directories and open them as tmux sessions."""

__version__ = "0.1.0"
