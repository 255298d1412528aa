"""Command-line entry point: ``gomin PATH``.

Reads one Go source file, writes its minified form to stdout. Any failure
prints ``gomin: <diagnostic>`` to stderr and exits with status 1; a wrong
argument count is an argparse usage error (status 2).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from gomin import minify
from gomin.errors import GominError


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv: Optional list of command line arguments (defaults to sys.argv).

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = argparse.ArgumentParser(prog="gomin", description="Minify a Go source file")
    parser.add_argument("path", type=Path, help="Go source file")
    args = parser.parse_args(argv)

    try:
        source = args.path.read_text(encoding="utf-8")
        sys.stdout.write(minify(source, source_file=str(args.path)))
        sys.stdout.flush()
    except (GominError, OSError, UnicodeDecodeError) as e:
        print(f"gomin: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
