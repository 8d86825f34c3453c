"""Command-line interface for code2md.

This module provides the command-line interface for code2md, which writes a Markdown
snapshot of a directory: a tree of the files that survive the ignore rules followed by
their contents. It handles argument parsing, rule loading, output writing and signal
management for graceful interruption handling.

Exit Codes:
    0: Successful completion
    1: Runtime error during execution (including a failed directory walk)
    2: Command-line syntax error
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    # Snapshot the current directory into project.md
    $ code2md

    # Snapshot a project into a chosen file with an extra pattern
    $ code2md -s /path/to/project -o snapshot.md -i "*.csv"
"""

import argparse
import os
import sys
from pathlib import Path
from typing import List, Optional

from humanfriendly.text import pluralize

from code2md.cli.argparser import create_parser, validate_args
from code2md.cli.safe_writer import STDOUT_MARKER, SafeWriter
from code2md.cli.signal_handler import setup_signal_handling, signal_handler
from code2md.code2md import StreamingCode2Md
from code2md.exceptions import ContentReadError
from code2md.exclusion_rules.loader import RuleSource, build_evaluator


def report_content_error(error: ContentReadError) -> None:
    """Print a per-file warning; the snapshot carries on without that file."""
    print(f"Warning: Error processing {error.relative_path}: {error.reason}", file=sys.stderr)


def format_counts(file_count: int, directory_count: int) -> str:
    """Summarize what went into the document.

    Example:
        >>> format_counts(3, 1)
        '3 files, 1 directory'
    """
    return f"{pluralize(file_count, 'file')}, {pluralize(directory_count, 'directory', 'directories')}"


def self_exclusion_source(source: Path, output: str) -> Optional[RuleSource]:
    """Anchored rule that keeps the output file out of its own snapshot.

    Returns None when writing to stdout or when the output lies outside the source.

    Example:
        >>> self_exclusion_source(Path("/work"), "/work/docs/project.md")
        RuleSource(kind='pattern', value='/docs/project.md')
        >>> self_exclusion_source(Path("/work"), "/tmp/project.md") is None
        True
    """
    if output == STDOUT_MARKER:
        return None
    source_dir = os.path.abspath(source)
    output_path = os.path.abspath(output)
    try:
        relative = os.path.relpath(output_path, source_dir)
    except ValueError:
        # Different drives on Windows
        return None
    if relative == os.curdir or relative == os.pardir or relative.startswith(os.pardir + os.sep):
        return None
    return RuleSource("pattern", "/" + Path(relative).as_posix())


def collect_rule_sources(args: argparse.Namespace) -> List[RuleSource]:
    sources = list(args.rule_sources)
    own_output = self_exclusion_source(args.source, args.output)
    if own_output is not None:
        sources.append(own_output)
    return sources


def main() -> None:
    """Main entry point for the code2md command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    parser = create_parser()
    args = parser.parse_args()

    try:
        validate_args(args)

        evaluator = build_evaluator(
            args.source,
            collect_rule_sources(args),
            use_defaults=not args.no_default_ignores,
        )

        # Walks the tree; any traversal failure aborts here before output is touched
        snapshot = StreamingCode2Md(
            args.source,
            exclusion_rules=evaluator,
            max_size=args.max_size,
            follow_symlinks=args.follow_symlinks,
            on_error=report_content_error,
        )

        if args.no_tree and args.no_contents:
            print("Warning: Both tree and contents were disabled. The document will be empty.", file=sys.stderr)

        with SafeWriter(args.output) as writer:
            try:
                for chunk in snapshot.stream_document(
                    include_tree=not args.no_tree,
                    include_contents=not args.no_contents,
                ):
                    writer.write(chunk)
            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

            if not signal_handler.interrupted:
                counts = format_counts(snapshot.file_count, snapshot.directory_count)
                message = f"Successfully generated {writer.display_name} ({counts})"
                print(message, file=sys.stderr if writer.is_stdout else sys.stdout)

    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
