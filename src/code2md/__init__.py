"""Directory snapshot utilities.

This package turns a directory tree into a single Markdown document made of a
directory tree diagram followed by the contents of every file that survives
the ignore rules.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("code2md")
except PackageNotFoundError:
    __version__ = "unknown"
