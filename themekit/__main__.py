"""Entry point for `python -m themekit`."""

import sys


def main():
    from themekit.cli import run_cli
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
