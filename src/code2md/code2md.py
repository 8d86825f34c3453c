"""Directory to Markdown snapshot with streaming support.

This module ties the pieces together: the tree walker produces the accepted paths
once, then the tree renderer and the content printer both consume that list to build
the document.
"""

from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from code2md.content_printer import FileContentPrinter
from code2md.exceptions import ContentReadError
from code2md.exclusion_rules.base_rules import BaseExclusionRules
from code2md.sizes import DEFAULT_MAX_SIZE
from code2md.tree_renderer import stream_tree
from code2md.tree_walker import TreeWalker
from code2md.types import PathType

TREE_HEADING = "# Project Structure\n\n"
FILES_HEADING = "# Files\n\n"


class StreamingCode2Md:
    """Streaming snapshot of a directory as a Markdown document.

    The directory is walked once, during construction, so a traversal failure surfaces
    immediately and nothing is produced from a partial walk. The tree and the file
    contents are then streamed piece by piece; each can be streamed only once.

    Attributes:
        directory (Path): Directory being snapshotted.
        paths (List[str]): Accepted relative file paths in walk order.

    Example:
        >>> snapshot = StreamingCode2Md("src")  # doctest: +SKIP
        >>> for chunk in snapshot.stream_tree():  # doctest: +SKIP
        ...     print(chunk, end="")
        # Project Structure
        <BLANKLINE>
        ```
        .
        └── main.py
        ```
        <BLANKLINE>

    Raises:
        TraversalError: If the directory cannot be walked.
        ValueError: If max_size cannot be parsed.
    """

    def __init__(
        self,
        directory: PathType,
        *,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        max_size: Union[str, int] = DEFAULT_MAX_SIZE,
        follow_symlinks: bool = False,
        on_error: Optional[Callable[[ContentReadError], None]] = None,
    ):
        """Walk the directory and prepare the document.

        Args:
            directory: Directory to snapshot. Can be any path-like object.
            exclusion_rules: Rules deciding which entries are skipped. If None, nothing
                is excluded.
            max_size: Files above this size are reported by size only. Defaults to 1MB.
            follow_symlinks: Whether to descend into symlinked directories.
            on_error: Called for every file whose content cannot be read.

        Raises:
            TraversalError: If the directory cannot be walked.
            ValueError: If max_size cannot be parsed.
        """
        self.directory = Path(directory)
        self.follow_symlinks = follow_symlinks

        self._walker = TreeWalker(self.directory, exclusion_rules, follow_symlinks=follow_symlinks)
        self.paths: List[str] = self._walker.walk()

        self._content_printer = FileContentPrinter(self.directory, self.paths, max_size=max_size, on_error=on_error)

        self._file_count = self._walker.get_file_count()
        self._directory_count = self._walker.get_directory_count()

        self._tree_complete = False
        self._contents_complete = False

    @property
    def file_count(self) -> int:
        """Number of accepted files."""
        return self._file_count

    @property
    def directory_count(self) -> int:
        """Number of directories shown in the tree, excluding the root."""
        return self._directory_count

    @property
    def errors(self) -> List[ContentReadError]:
        """Files skipped so far because their content could not be read."""
        return list(self._content_printer.errors)

    def stream_tree(self) -> Iterator[str]:
        """Stream the tree block: heading, fenced diagram and a trailing blank line.

        Raises:
            RuntimeError: If the tree has already been streamed.
        """
        if self._tree_complete:
            raise RuntimeError("Tree has already been streamed")

        yield TREE_HEADING
        yield "```\n"
        for line in stream_tree(self.paths):
            yield line + "\n"
        yield "```\n\n"
        self._tree_complete = True

    def stream_contents(self) -> Iterator[str]:
        """Stream the files block: heading, then one section per readable file.

        Raises:
            RuntimeError: If the contents have already been streamed.
        """
        if self._contents_complete:
            raise RuntimeError("Contents have already been streamed")

        yield FILES_HEADING
        for _file_path, _relative_path, section in self._content_printer.yield_file_contents():
            yield section
        self._contents_complete = True

    def stream_document(self, include_tree: bool = True, include_contents: bool = True) -> Iterator[str]:
        """Stream the requested parts of the document in order."""
        if include_tree:
            yield from self.stream_tree()
        if include_contents:
            yield from self.stream_contents()


class Code2Md(StreamingCode2Md):
    """Snapshot that renders the whole document during initialization.

    Memory Usage Note:
        The complete document, file contents included, is held in memory. For large
        trees use StreamingCode2Md instead.

    Example:
        >>> snapshot = Code2Md("src")  # doctest: +SKIP
        >>> print(snapshot.tree_string)  # doctest: +SKIP
    """

    def __init__(
        self,
        directory: PathType,
        *,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        max_size: Union[str, int] = DEFAULT_MAX_SIZE,
        follow_symlinks: bool = False,
        on_error: Optional[Callable[[ContentReadError], None]] = None,
    ):
        super().__init__(
            directory,
            exclusion_rules=exclusion_rules,
            max_size=max_size,
            follow_symlinks=follow_symlinks,
            on_error=on_error,
        )

        self._tree_string = "".join(self.stream_tree())
        self._content_string = "".join(self.stream_contents())

    @property
    def tree_string(self) -> str:
        return self._tree_string

    @property
    def content_string(self) -> str:
        return self._content_string

    @property
    def document(self) -> str:
        """The full Markdown document."""
        return self._tree_string + self._content_string
