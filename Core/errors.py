class ShellError(Exception):
    """Base class for failures the shell reports and survives."""


class RedirectionError(ShellError):
    """Malformed redirection, or a redirection target that cannot be opened."""

    def __init__(self, message, path=None):
        super().__init__(message)
        self.path = path


class SpawnError(ShellError):
    """The child process could not be created."""

    def __init__(self, command, reason):
        super().__init__(f"failed to execute '{command}': {reason}")
        self.command = command
        self.reason = reason
