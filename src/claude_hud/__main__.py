"""Entry point for `python -m claude_hud`."""

import sys


def main():
    from claude_hud.app import run
    sys.exit(run())


if __name__ == "__main__":
    main()
