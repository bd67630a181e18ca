import shlex
from collections import namedtuple

from config import (
    SELF_PID_MARKER, BACKGROUND_MARKER, COMMENT_MARKER,
    INPUT_REDIRECT, OUTPUT_REDIRECT,
)
from Core.errors import RedirectionError

RedirectionSpec = namedtuple("RedirectionSpec", ["input", "output"])
CommandRequest = namedtuple("CommandRequest", ["args", "background", "redirection"])


def expand_pid(line, pid):
    """Replace every $$ in the raw line with the shell's pid."""
    return line.replace(SELF_PID_MARKER, str(pid))


def split_line(line):
    """
    Tokenize one input line.
    Returns: list of tokens ([] for blank lines and comments)
    """
    if line.startswith(COMMENT_MARKER):
        return []

    # Plain whitespace-separated words: quotes and backslashes are ordinary
    # characters, so `echo don't` is two words.
    lex = shlex.shlex(line, posix=True)
    lex.whitespace_split = True
    lex.whitespace += "\a"
    lex.commenters = ""
    lex.quotes = ""
    lex.escape = ""
    return list(lex)


def strip_background(tokens):
    """
    Drop a trailing & marker.
    Returns: (tokens, background_requested)
    """
    if tokens and tokens[-1] == BACKGROUND_MARKER:
        return tokens[:-1], True
    return list(tokens), False


def resolve_redirection(tokens):
    """
    Pull `< path` and `> path` pairs out of the argument list.
    Scans left to right; a later operator of the same kind wins.
    Returns: (args, RedirectionSpec)
    """
    args, stdin_path, stdout_path = [], None, None
    i = 0

    while i < len(tokens):
        tok = tokens[i]
        if tok in (INPUT_REDIRECT, OUTPUT_REDIRECT):
            if i + 1 >= len(tokens):
                raise RedirectionError(f"missing file name after '{tok}'")
            if tok == INPUT_REDIRECT:
                stdin_path = tokens[i + 1]
            else:
                stdout_path = tokens[i + 1]
            i += 2
        else:
            args.append(tok)
            i += 1

    return args, RedirectionSpec(stdin_path, stdout_path)


def build_request(tokens, background=False):
    """Turn the tokens of an external command into a CommandRequest."""
    args, redirection = resolve_redirection(tokens)
    return CommandRequest(args, background, redirection)
