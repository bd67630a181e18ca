import os
import signal
import functools
import contextlib
import logging

import psutil

from config import PROMPT
from Core.state import ExitStatus

log = logging.getLogger(__name__)

STDOUT_FD = 1

FOREGROUND_ONLY_ON = "Entering foreground-only mode (& is now ignored)"
FOREGROUND_ONLY_OFF = "Exiting foreground-only mode"


def announce(message, prompt=""):
    """
    Write one line straight to fd 1, followed by prompt.
    Safe inside signal handlers: no print(), no logging, no buffered stream.
    """
    data = (message + "\n" + prompt).encode()
    while data:
        try:
            written = os.write(STDOUT_FD, data)
        except BlockingIOError:
            continue
        data = data[written:]


@contextlib.contextmanager
def blocked_signals(*signums):
    """Hold delivery of the given signals for the duration of the block."""
    old_mask = signal.pthread_sigmask(signal.SIG_BLOCK, signums)
    try:
        yield
    finally:
        signal.pthread_sigmask(signal.SIG_SETMASK, old_mask)


def handle_sigtstp(state, signum, frame):
    """Ctrl+Z: flip foreground-only mode instead of stopping the shell."""
    if state.toggle_background_admission():
        announce(FOREGROUND_ONLY_OFF, PROMPT)
    else:
        announce(FOREGROUND_ONLY_ON, PROMPT)


def handle_sigchld(state, signum, frame):
    """Reap every tracked child that has finished, without blocking."""
    for pid in state.registry:
        proc = state.registry.get(pid)
        if proc is None:
            continue
        returncode = proc.poll()
        if returncode is None:
            continue
        state.registry.remove(pid)
        status = ExitStatus.from_returncode(returncode)
        announce(f"background pid {pid} is done: {status.describe()}", PROMPT)


def init_signal_handlers(state):
    """Install the shell's handlers for SIGINT, SIGTSTP and SIGCHLD."""
    signal.signal(signal.SIGINT, signal.SIG_IGN)
    signal.signal(signal.SIGTSTP, functools.partial(handle_sigtstp, state))
    signal.signal(signal.SIGCHLD, functools.partial(handle_sigchld, state))
    log.debug("signal handlers installed")


def restore_default_handlers():
    for signum in (signal.SIGINT, signal.SIGTSTP, signal.SIGCHLD):
        signal.signal(signum, signal.SIG_DFL)


def child_preexec(foreground):
    """
    Runs in the child between fork and exec.
    Returns the callable handed to Popen(preexec_fn=...).
    """
    def preexec():
        signal.pthread_sigmask(signal.SIG_UNBLOCK, [signal.SIGCHLD])
        signal.signal(signal.SIGTSTP, signal.SIG_IGN)
        if foreground:
            signal.signal(signal.SIGINT, signal.SIG_DFL)
    return preexec


def kill_all(state):
    """SIGKILL and reap every tracked child, leaving the registry empty."""
    with blocked_signals(signal.SIGCHLD):
        procs = []
        for pid in state.registry:
            try:
                p = psutil.Process(pid)
                p.kill()
                procs.append(p)
            except psutil.NoSuchProcess:
                pass
            except psutil.AccessDenied as e:
                log.warning("could not kill child %d: %s", pid, e)

        psutil.wait_procs(procs, timeout=3)

        for pid in state.registry:
            proc = state.registry.remove(pid)
            if proc is not None:
                # psutil already reaped it; lets Popen record the exit too
                proc.poll()
            log.debug("killed child %d", pid)
