"""Run gridplace as ``python -m gridplace``."""

import sys

from gridplace.cli import app


def main(argv: list[str] | None = None) -> int:
    """Run the CLI with ``argv`` (defaults to ``sys.argv[1:]``).

    Returns:
        The command's exit code; 130 when interrupted
    """
    try:
        app(args=argv, prog_name="gridplace")
    except SystemExit as e:
        if e.code is None:
            return 0
        return e.code if isinstance(e.code, int) else 1
    except KeyboardInterrupt:
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
