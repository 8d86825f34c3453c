"""Filesystem traversal producing the list of accepted file paths.

This module walks a directory tree depth-first, asks the exclusion rules about every
entry, prunes ignored directories instead of filtering their contents afterwards, and
collects the relative paths of the files that survive.
"""

import os
from pathlib import Path
from typing import List, NamedTuple, Optional, Set

from code2md.exceptions import TraversalError
from code2md.exclusion_rules.base_rules import BaseExclusionRules
from code2md.types import PathType


class DirectoryIdentity(NamedTuple):
    """Device and inode pair used to spot symlink loops."""

    device_id: int
    inode_number: int


class TreeWalker:
    """Depth-first walk of a directory with pruning of ignored directories.

    Entries of each directory are visited in lexical order, so the same tree and the
    same rules always give the same list. The walk is all-or-nothing: any directory
    that cannot be read aborts it with TraversalError and no partial list is kept.

    The result is computed on first access and cached for the lifetime of the walker.

    Symbolic Link Behavior:
        By default symbolic links are never descended. A link is evaluated like a
        file and, if accepted, listed as one. With follow_symlinks=True links to
        directories are walked, and a directory already being walked higher up the
        same branch is skipped so that link cycles terminate.

    Attributes:
        root_path (Path): The directory being walked.
        exclusion_rules (Optional[BaseExclusionRules]): Rules deciding what to skip.
        follow_symlinks (bool): Whether to descend into symlinked directories.

    Example:
        >>> walker = TreeWalker(".")  # doctest: +SKIP
        >>> walker.walk()  # doctest: +SKIP
        ['README.md', 'src/code2md/__init__.py']
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        follow_symlinks: bool = False,
    ) -> None:
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self.follow_symlinks = follow_symlinks
        self._files: Optional[List[str]] = None

    def walk(self) -> List[str]:
        """Return the accepted file paths, relative to the root, in walk order.

        Returns:
            A new list of '/'-separated relative paths. Directories are not included.

        Raises:
            TraversalError: If the root is missing, is not a directory, or any directory
                beneath it cannot be read.
        """
        if self._files is None:
            self._files = self._collect()
        return list(self._files)

    def _collect(self) -> List[str]:
        if not self.root_path.exists():
            raise TraversalError(str(self.root_path), "root path does not exist")
        if not self.root_path.is_dir():
            raise TraversalError(str(self.root_path), "root path is not a directory")

        files: List[str] = []
        self._visit(self.root_path, "", files, set())
        return files

    def _visit(self, directory: Path, relative_dir: str, files: List[str], active: Set[DirectoryIdentity]) -> None:
        """Recursively collect accepted files beneath one directory."""
        identity = self._identity(directory) if self.follow_symlinks else None
        if identity is not None:
            active.add(identity)

        try:
            names = sorted(os.listdir(directory))
        except OSError as e:
            raise TraversalError(str(directory), e.strerror or str(e)) from e

        for name in names:
            path = directory / name
            relative_path = f"{relative_dir}/{name}" if relative_dir else name
            is_dir = self._is_directory(path)

            if self.exclusion_rules is not None and self.exclusion_rules.exclude(relative_path, is_dir):
                continue

            if not is_dir:
                files.append(relative_path)
                continue

            if identity is not None and self._identity(path) in active:
                # Already being walked further up this branch
                continue
            self._visit(path, relative_path, files, active)

        if identity is not None:
            active.discard(identity)

    def _is_directory(self, path: Path) -> bool:
        try:
            if path.is_symlink() and not self.follow_symlinks:
                return False
            return path.is_dir()
        except OSError as e:
            raise TraversalError(str(path), e.strerror or str(e)) from e

    @staticmethod
    def _identity(path: Path) -> DirectoryIdentity:
        try:
            stat_info = path.stat()
        except OSError as e:
            raise TraversalError(str(path), e.strerror or str(e)) from e
        return DirectoryIdentity(stat_info.st_dev, stat_info.st_ino)

    def get_file_count(self) -> int:
        """Number of accepted files."""
        return len(self.walk())

    def get_directory_count(self) -> int:
        """Number of directories holding at least one accepted file, excluding the root."""
        directories = set()
        for relative_path in self.walk():
            parts = relative_path.split("/")[:-1]
            for depth in range(1, len(parts) + 1):
                directories.add("/".join(parts[:depth]))
        return len(directories)


def walk(
    root: PathType,
    exclusion_rules: Optional[BaseExclusionRules] = None,
    follow_symlinks: bool = False,
) -> List[str]:
    """Walk root and return the accepted file paths.

    Shorthand for ``TreeWalker(root, exclusion_rules, follow_symlinks).walk()``.
    """
    return TreeWalker(root, exclusion_rules, follow_symlinks=follow_symlinks).walk()
