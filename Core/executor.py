import sys
import signal
import subprocess
import logging

from config import FAILURE_STATUS
from Core.builtin import BUILTINS
from Core.errors import ShellError, RedirectionError, SpawnError
from Core.job_control import blocked_signals, child_preexec
from Core.parser import strip_background, build_request
from Core.state import ExitStatus

log = logging.getLogger(__name__)


def report(message):
    """Main-path error line on stderr."""
    print(f"smallsh: {message}", file=sys.stderr, flush=True)


def open_redirections(redirection):
    """
    Open the redirection targets.
    Returns: (stdin_f, stdout_f), None for a stream that is not redirected
    """
    stdin_f = stdout_f = None
    if redirection.input is not None:
        try:
            stdin_f = open(redirection.input, "rb")
        except OSError as e:
            raise RedirectionError(
                f"cannot open {redirection.input} for input: {e.strerror}",
                path=redirection.input,
            )
    if redirection.output is not None:
        try:
            stdout_f = open(redirection.output, "wb")
        except OSError as e:
            if stdin_f is not None:
                stdin_f.close()
            raise RedirectionError(
                f"cannot open {redirection.output} for output: {e.strerror}",
                path=redirection.output,
            )
    return stdin_f, stdout_f


def run_external(args, stdin=None, stdout=None, foreground=True):
    """
    Start one external command.
    Returns: Popen object
    Raises FileNotFoundError/PermissionError when the command cannot be
    executed, SpawnError when the process cannot be created at all.
    """
    try:
        return subprocess.Popen(
            args,
            stdin=stdin,
            stdout=stdout,
            preexec_fn=child_preexec(foreground),
        )
    except (FileNotFoundError, PermissionError, NotADirectoryError):
        raise
    except (OSError, subprocess.SubprocessError) as e:
        raise SpawnError(args[0], e)


def wait_foreground(state, proc):
    """Block until the foreground child ends and record how it ended."""
    proc.wait()
    status = ExitStatus.from_returncode(proc.returncode)
    state.last_exit_status = status
    state.registry.remove(proc.pid)
    log.debug("foreground pid %d: %s", proc.pid, status.describe())

    if status == ExitStatus.signaled(signal.SIGINT):
        print(status.describe(), flush=True)
    return status


def execute_request(state, request):
    """Spawn and supervise an external command."""
    stdin_f, stdout_f = open_redirections(request.redirection)
    opened_files = [f for f in (stdin_f, stdout_f) if f is not None]

    stdin, stdout = stdin_f, stdout_f
    if request.background:
        stdin = stdin if stdin is not None else subprocess.DEVNULL
        stdout = stdout if stdout is not None else subprocess.DEVNULL

    try:
        # SIGCHLD held from spawn until the pid is registered and, for a
        # foreground child, until it has been reaped here.
        with blocked_signals(signal.SIGCHLD):
            try:
                proc = run_external(
                    request.args, stdin=stdin, stdout=stdout,
                    foreground=not request.background,
                )
            except (FileNotFoundError, PermissionError, NotADirectoryError) as e:
                print(f"{request.args[0]}: {e.strerror}", file=sys.stderr, flush=True)
                if not request.background:
                    state.last_exit_status = ExitStatus.exited(FAILURE_STATUS)
                return

            state.registry.add(proc)
            log.debug("spawned pid %d: %s", proc.pid, request.args)

            if request.background:
                print(f"background pid is {proc.pid}", flush=True)
                return

            wait_foreground(state, proc)
    finally:
        for f in opened_files:
            f.close()


def execute(state, tokens):
    """
    Run one tokenized command line.
    Returns: False when the shell should stop, True otherwise
    """
    if not tokens:
        return True

    tokens, background = strip_background(tokens)
    background = background and state.background_admission
    if not tokens:
        return True

    builtin = BUILTINS.get(tokens[0])
    if builtin is not None:
        return builtin(state, tokens[1:])

    try:
        request = build_request(tokens, background)
        if not request.args:
            raise RedirectionError("missing command before redirection")
        execute_request(state, request)
    except RedirectionError as e:
        report(e)
        if e.path is not None:
            state.last_exit_status = ExitStatus.exited(FAILURE_STATUS)
    except ShellError as e:
        report(e)
    return True
