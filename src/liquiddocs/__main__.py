"""Main entry point for the liquiddocs CLI."""

import sys

from liquiddocs.cli.commands import main as cli_main


def main() -> int:
    """Execute the liquiddocs CLI application.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    cli_main()
    return 0


if __name__ == "__main__":
    sys.exit(main())
