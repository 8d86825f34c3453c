"""Compilation of ignore-file globs into regular expressions.

Glob syntax is gitignore's wildmatch as implemented by pathspec: ``*`` and ``?`` never
cross a ``/``, ``[...]`` is a character class, ``\\`` escapes the next character, and a
``**`` component spans any number of directories. Every glob is compiled as if anchored
at the root, so the caller decides which path or path segments it is compared with.
"""

import re
from functools import lru_cache
from typing import Optional, Pattern

from pathspec.patterns import GitWildMatchPattern  # type: ignore
from pathspec.patterns.gitwildmatch import GitWildMatchPatternError  # type: ignore


@lru_cache(maxsize=None)
def compile_glob(glob: str) -> Optional[Pattern[str]]:
    """Compile a glob into a regex matching a relative path and everything beneath it.

    Args:
        glob: Pattern body, without the ``!`` or trailing ``/`` markers of an ignore line.

    Returns:
        The compiled pattern, or None when the glob cannot match anything (it is
        empty or malformed, such as a trailing lone backslash).

    Example:
        >>> bool(compile_glob("*.py[cod]").match("module.pyc"))
        True
        >>> pattern = compile_glob("a/**/b")
        >>> bool(pattern.match("a/b")), bool(pattern.match("a/x/y/b"))
        (True, True)
        >>> bool(compile_glob("docs/*.md").match("docs/x/a.md"))
        False
    """
    try:
        regex, _include = GitWildMatchPattern.pattern_to_regex("/" + glob)
    except GitWildMatchPatternError:
        return None
    if regex is None:
        return None
    return re.compile(regex)
