import signal
import time

import pytest

from Core.job_control import handle_sigchld, kill_all
from Core.state import ShellState


@pytest.fixture
def state():
    st = ShellState()
    yield st
    kill_all(st)


@pytest.fixture
def sigint_ignored():
    """Mimic the running shell: SIGINT ignored in the parent."""
    previous = signal.signal(signal.SIGINT, signal.SIG_IGN)
    yield
    signal.signal(signal.SIGINT, previous)


def reap_until_gone(state, pid, timeout=10.0):
    """Drive the SIGCHLD handler by hand until pid has been reaped."""
    deadline = time.monotonic() + timeout
    while pid in state.registry:
        if time.monotonic() > deadline:
            raise AssertionError(f"pid {pid} was never reaped")
        handle_sigchld(state, signal.SIGCHLD, None)
        time.sleep(0.02)
