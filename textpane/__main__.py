"""Textpane CLI entry point.

Allows running via `python -m textpane` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import sys

from . import __version__


def main() -> None:
    # Very small arg parsing: version flag and optional filename
    args = sys.argv[1:]
    if args and args[0] in ("--version", "-V"):
        print(f"textpane {__version__}")
        return

    # Lazy import to avoid importing UI deps for --version
    from .app import App
    app = App()
    if args:
        app.load_file(args[0])
    app.run()


if __name__ == "__main__":  # pragma: no cover
    main()
