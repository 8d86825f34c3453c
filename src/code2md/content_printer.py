"""Markdown sections for the contents of accepted files.

Each accepted path becomes one section: a heading with the path followed by a fenced
code block, a binary-file notice, or a file-too-large notice. Reading is best-effort:
a file that cannot be read is reported and skipped while the remaining sections are
still produced.
"""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Tuple, Union

from .exceptions import ContentReadError
from .file_classifier import is_binary_file, language_for
from .sizes import DEFAULT_MAX_SIZE, format_file_size, parse_file_size
from .types import PathType

_BACKTICK_RUN = re.compile(r"`{3,}")


@dataclass(frozen=True)
class FileInfo:
    """Metadata gathered about one file before its section is written.

    Attributes:
        path: Absolute path to the file.
        relative_path: Path relative to the scanned root, used as the heading.
        size: Size in bytes.
        is_binary: Result of binary detection.
    """

    path: Path
    relative_path: str
    size: int
    is_binary: bool


def _fence_for(content: str) -> str:
    longest = max((len(run) for run in _BACKTICK_RUN.findall(content)), default=0)
    return "`" * max(3, longest + 1)


class FileContentPrinter:
    """Produces the Markdown section for each accepted file, in the order given.

    File contents are passed through byte for byte: bytes that are not valid UTF-8 are
    carried as surrogate escapes and restored when the output is encoded.

    Attributes:
        root_path (Path): Directory the relative paths are resolved against.
        paths (List[str]): Accepted relative paths, in output order.
        max_size (int): Files larger than this many bytes are reported by size only.
        errors (List[ContentReadError]): Problems met so far, one per skipped file.

    Example:
        >>> printer = FileContentPrinter("src", ["main.py"])  # doctest: +SKIP
        >>> for abs_path, rel_path, section in printer.yield_file_contents():  # doctest: +SKIP
        ...     print(section, end="")
        ## main.py
        ```python
        print("hello")
        ```
    """

    def __init__(
        self,
        root_path: PathType,
        paths: Iterable[str],
        max_size: Union[str, int] = DEFAULT_MAX_SIZE,
        on_error: Optional[Callable[[ContentReadError], None]] = None,
    ) -> None:
        """Initialize the FileContentPrinter.

        Args:
            root_path: Directory the relative paths are resolved against.
            paths: Accepted relative paths, as produced by the tree walker.
            max_size: Content size threshold, as bytes or a human-readable size.
                Defaults to 1MB.
            on_error: Called with a ContentReadError for every file that could not be
                read. The file is skipped either way.

        Raises:
            ValueError: If max_size cannot be parsed.
        """
        self.root_path = Path(root_path)
        self.paths: List[str] = list(paths)
        self.max_size = parse_file_size(max_size)
        self.on_error = on_error
        self.errors: List[ContentReadError] = []

    def _create_file_info(self, relative_path: str) -> FileInfo:
        path = self.root_path / relative_path
        size = path.stat().st_size
        return FileInfo(path=path, relative_path=relative_path, size=size, is_binary=is_binary_file(path))

    def format_section(self, relative_path: str) -> str:
        """Build the Markdown section for one file.

        Args:
            relative_path: Path of the file relative to root_path.

        Returns:
            The complete section, ending with a blank line.

        Raises:
            ContentReadError: If the file cannot be inspected or read.
        """
        try:
            info = self._create_file_info(relative_path)
            heading = f"## {info.relative_path}\n"

            if info.is_binary:
                return f"{heading}*Binary file ({format_file_size(info.size)})*\n\n"

            if info.size > self.max_size:
                return f"{heading}*File too large ({format_file_size(info.size)}) - content omitted*\n\n"

            with open(info.path, "rb") as f:
                content = f.read().decode("utf-8", errors="surrogateescape")
        except OSError as e:
            raise ContentReadError(relative_path, e.strerror or str(e)) from e

        if not content.endswith("\n"):
            content += "\n"
        fence = _fence_for(content)
        return f"{heading}{fence}{language_for(relative_path)}\n{content}{fence}\n\n"

    def yield_file_contents(self) -> Iterator[Tuple[str, str, str]]:
        """Yield (absolute_path, relative_path, section) for every readable file.

        Files that fail are recorded in errors, passed to on_error, and skipped.
        """
        for relative_path in self.paths:
            try:
                section = self.format_section(relative_path)
            except ContentReadError as e:
                self.errors.append(e)
                if self.on_error is not None:
                    self.on_error(e)
                continue
            yield (str(self.root_path / relative_path), relative_path, section)
