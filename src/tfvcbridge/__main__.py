"""CLI entry point for tfvc-bridge.

Usage:
    python -m tfvcbridge status
    python -m tfvcbridge --location ~/tools/tee/tf get -r .
"""

import sys


def main() -> int:
    """Main entry point for the tfvc-bridge CLI."""
    from tfvcbridge.cli import run_cli

    return run_cli(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(main())
