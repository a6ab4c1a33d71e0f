from typing import List, Optional


class TmuxProjError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(TmuxProjError):
    # errors related to configuration.
    pass

class DiscoveryError(TmuxProjError):
    # errors during project discovery.
    pass

class BaseDirectoryNotFoundError(DiscoveryError):
    # the base directory to scan does not exist or cannot be read.
    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        message = f"Base directory '{path}' does not exist"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)

class MissingDependencyError(TmuxProjError):
    # one or more required executables are not on PATH.
    def __init__(self, missing: List[str]):
        self.missing = list(missing)
        super().__init__(f"Missing required dependencies: {' '.join(self.missing)}")

class InvalidInputError(TmuxProjError):
    # bad user input, e.g. an empty session name.
    pass

class PresenterError(TmuxProjError):
    # errors from the interactive picker.
    pass

class SessionError(TmuxProjError):
    # errors from tmux commands.
    pass
