"""Command-line argument parsing for code2md.

This module defines the command-line interface for code2md,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, Optional, Sequence, Union

from code2md import __version__
from code2md.cli.safe_writer import STDOUT_MARKER
from code2md.exclusion_rules.loader import RuleSource
from code2md.sizes import DEFAULT_MAX_SIZE, parse_file_size

DEFAULT_OUTPUT = "project.md"


class RuleSourceAction(argparse.Action):
    """Record -e/--exclude files and -i/--ignore patterns in command-line order.

    Both options append to the shared ``rule_sources`` list so that files and single
    patterns interleave exactly as typed, which matters for negated patterns.
    """

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Union[str, Sequence[Any], None],
        option_string: Optional[str] = None,
    ) -> None:
        if values is None:
            return

        kind = "file" if option_string in ("-e", "--exclude") else "pattern"
        sources = list(getattr(namespace, "rule_sources", None) or [])
        sources.append(RuleSource(kind, values))
        namespace.rule_sources = sources


def _size(value: str) -> int:
    try:
        return parse_file_size(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Returns:
        An ArgumentParser instance configured with code2md's options.
    """
    description = """
    code2md: snapshot a directory tree into a single Markdown document.

    The document starts with a tree of every file that is kept, followed by one
    section per file holding its content in a fenced code block with a language tag.
    Binary files and files above --max-size are listed with their size only.

    Files are left out when they match:
    - the built-in list of well-known noise (.git, node_modules, build, dist, ...)
    - the default patterns (*.log, *.pyc, *.swp, ...)
    - .gitignore and .code2mdignore at the root of the source directory
    - any -e/--exclude file or -i/--ignore pattern given here
    Patterns are gitignore-style: *, ?, **, leading / anchors, trailing / matches
    directories only, and a leading ! re-includes. Later patterns win.
    """

    epilog = """
    Examples:
      # Snapshot the current directory into project.md
      code2md

      # Snapshot another directory into a chosen file
      code2md -s ~/src/app -o app.md

      # Write to standard output
      code2md -o - | less

      # Raise the content size threshold
      code2md --max-size 5MB

      # Extra patterns and ignore files, applied in the order given
      code2md -i "*.csv" -i "!fixtures/small.csv" -e .dockerignore

      # Only the tree
      code2md -C -o tree.md
    """

    parser = argparse.ArgumentParser(
        prog="code2md",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"code2md {__version__}", help="Show the version and exit"
    )
    parser.add_argument(
        "-s",
        "--source",
        type=Path,
        default=Path("."),
        metavar="DIR",
        help="Directory to snapshot (default: current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        metavar="FILE",
        help=f"Output Markdown file, or '{STDOUT_MARKER}' for standard output (default: {DEFAULT_OUTPUT}).",
    )
    parser.add_argument(
        "--max-size",
        type=_size,
        default=DEFAULT_MAX_SIZE,
        metavar="SIZE",
        help=f"Files larger than this are listed without content, e.g. 500KB, 2MB (default: {DEFAULT_MAX_SIZE}).",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        metavar="FILE",
        dest="rule_sources",
        action=RuleSourceAction,
        help="Additional ignore file, read after the ones found in the source directory (repeatable).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        metavar="PATTERN",
        dest="rule_sources",
        action=RuleSourceAction,
        help="Additional ignore pattern, e.g. '*.csv' or '!keep.csv' (repeatable).",
    )
    parser.add_argument(
        "--no-default-ignores",
        action="store_true",
        help="Do not apply the built-in exclusion list and default patterns.",
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Descend into symbolically linked directories. By default links are listed as files.",
    )
    parser.add_argument(
        "-T",
        "--no-tree",
        action="store_true",
        help="Leave the directory tree out of the document.",
    )
    parser.add_argument(
        "-C",
        "--no-contents",
        action="store_true",
        help="Leave the file contents out of the document.",
    )
    parser.set_defaults(rule_sources=[])

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.output != STDOUT_MARKER and Path(args.output).is_dir():
        raise ValueError(f"Output path is a directory: {args.output}")
