"""Entry: run the skill tools from the command line."""
import sys

from skillwright.config import LOG_LEVEL, validate_for_loader
from skillwright.logging_utils import configure_logging

USAGE = (
    "Usage: python main.py match \"task\"  |  conflicts --name N --description D [--tag T]  |  "
    "analyze \"description\"  |  validate PATH  |  tokens PATH  |  "
    "create --name N --description D [--step S]  |  list [--search Q]  |  get (--id ID | --name N)"
)


def main() -> None:
    configure_logging(LOG_LEVEL)
    if len(sys.argv) < 2:
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    from skillwright.triggers.cli import LOADER_COMMANDS, run_cli

    if sys.argv[1].lower() in LOADER_COMMANDS:
        # These read the skills on disk
        validate_for_loader()
    sys.exit(run_cli(sys.argv[1:]))


if __name__ == "__main__":
    main()
