import os
import sys
import logging
import readline

from config import HISTORY_FILE, MAX_HISTORY, COMMENT_MARKER

log = logging.getLogger(__name__)


def init_readline():
    """Arrow keys walk the history when the shell sits on a terminal"""
    if not sys.stdin.isatty():
        log.debug("stdin is not a terminal, skipping readline key bindings")
        return

    readline.parse_and_bind("set editing-mode emacs")
    readline.parse_and_bind("\\e[A: previous-history")
    readline.parse_and_bind("\\e[B: next-history")


def remember(line, interactive=None):
    """
    Record a dispatched line in the history.
    input() already records lines typed at a terminal; blank lines, comments
    and an immediate repeat of the previous entry are skipped.
    """
    if interactive is None:
        interactive = sys.stdin.isatty()
    line = line.strip()
    if interactive or not line or line.startswith(COMMENT_MARKER):
        return

    last = readline.get_current_history_length()
    if last and readline.get_history_item(last) == line:
        return
    readline.add_history(line)


def save_history(path=HISTORY_FILE, length=MAX_HISTORY):
    readline.set_history_length(length)
    try:
        readline.write_history_file(path)
    except OSError as e:
        log.warning("could not save history to %s: %s", path, e)


def load_history(path=HISTORY_FILE, length=MAX_HISTORY):
    if not os.path.exists(path):
        return
    try:
        readline.read_history_file(path)
    except OSError as e:
        log.warning("could not load history from %s: %s", path, e)
    readline.set_history_length(length)
