from collections import namedtuple

from Core.registry import ProcessRegistry

EXITED = "exited"
SIGNALED = "signaled"


class ExitStatus(namedtuple("ExitStatus", ["kind", "value"])):
    """How the last foreground command ended: an exit code or a signal."""

    __slots__ = ()

    @classmethod
    def exited(cls, code):
        return cls(EXITED, code)

    @classmethod
    def signaled(cls, signum):
        return cls(SIGNALED, signum)

    @classmethod
    def from_returncode(cls, returncode):
        """Popen reports death by signal N as returncode -N."""
        if returncode < 0:
            return cls.signaled(-returncode)
        return cls.exited(returncode)

    def describe(self):
        if self.kind == SIGNALED:
            return f"terminated by signal {self.value}"
        return f"exit value {self.value}"


class ShellState:
    """
    Process-wide shell state shared by the dispatcher and the signal handlers.

    background_admission is only flipped by the SIGTSTP handler.
    last_exit_status stays None until the first foreground command finishes.
    """

    def __init__(self):
        self.background_admission = True
        self.last_exit_status = None
        self.registry = ProcessRegistry()

    def toggle_background_admission(self):
        self.background_admission = not self.background_admission
        return self.background_admission
