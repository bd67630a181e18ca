import sys
import logging

from config import LOG_LEVEL, LOG_FORMAT
from Core.shell import main_loop


def main():
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT, stream=sys.stderr)
    sys.exit(main_loop())


if __name__ == "__main__":
    main()
