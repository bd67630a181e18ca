import os
import sys
import logging

from config import PROMPT
from Core.executor import execute
from Core.history import init_readline, load_history, save_history, remember
from Core.job_control import init_signal_handlers, restore_default_handlers, kill_all
from Core.parser import expand_pid, split_line
from Core.state import ShellState

log = logging.getLogger(__name__)


def read_line(prompt=PROMPT):
    """
    Prompting state: read one line.
    Returns: the line, or None at end of input
    """
    try:
        return input(prompt)
    except EOFError:
        print()
        return None


def run_line(state, line, pid=None):
    """
    Dispatching state: expand $$, tokenize and execute one line.
    Returns: False when the shell should stop
    """
    line = expand_pid(line, os.getpid() if pid is None else pid)
    return execute(state, split_line(line))


def main_loop(state=None):
    """Main shell loop. Returns the shell's exit code."""
    state = state or ShellState()

    init_signal_handlers(state)
    init_readline()
    load_history()

    try:
        while True:
            try:
                line = read_line()
            except KeyboardInterrupt:
                print()
                continue

            if line is None:
                kill_all(state)
                break
            remember(line)
            if not run_line(state, line):
                break
    finally:
        save_history()
        restore_default_handlers()
        sys.stdout.flush()

    return 0
