import os
import logging

import psutil

from Core.job_control import kill_all
from Core.state import ExitStatus

log = logging.getLogger(__name__)


def builtin_exit(state, args):
    """Kill every tracked child, then tell the loop to stop"""
    kill_all(state)
    return False


def builtin_cd(state, args):
    """Change directory (home when no argument is given)"""
    path = args[0] if args else os.path.expanduser("~")
    try:
        os.chdir(os.path.expanduser(path))
    except OSError as e:
        print(f"cd: {path}: {e.strerror}", flush=True)
    return True


def builtin_status(state, args):
    """Print how the last foreground command ended"""
    status = state.last_exit_status or ExitStatus.exited(0)
    print(status.describe(), flush=True)
    return True


def builtin_jobs(state, args):
    """List the children the shell is still tracking"""
    pids = state.registry.pids()
    if not pids:
        print("No background jobs.", flush=True)
        return True

    for pid in pids:
        try:
            status = psutil.Process(pid).status()
        except psutil.NoSuchProcess:
            status = "terminated"
        except psutil.AccessDenied:
            status = "unknown"
        print(f"child {pid} [{status}]", flush=True)
    return True


BUILTINS = {
    "exit": builtin_exit,
    "cd": builtin_cd,
    "status": builtin_status,
    "jobs": builtin_jobs,
}
