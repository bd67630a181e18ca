import os

# Prompt & history
PROMPT = os.getenv("SMALLSH_PROMPT", ": ")
HISTORY_FILE = os.path.expanduser(os.getenv("SMALLSH_HISTORY", "~/.smallsh_history"))
MAX_HISTORY = 1000

# Logging (diagnostics only, user notices are printed)
LOG_LEVEL = os.getenv("SMALLSH_LOG_LEVEL", "WARNING").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Exit code recorded when a command never got to run
FAILURE_STATUS = 1

# Command line markers
SELF_PID_MARKER = "$$"
BACKGROUND_MARKER = "&"
COMMENT_MARKER = "#"
INPUT_REDIRECT = "<"
OUTPUT_REDIRECT = ">"
