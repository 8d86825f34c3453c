"""Output writing for the code2md CLI.

The document goes either to a file or to an already open file descriptor (stdout).
Writes stop as soon as an interruption signal has been recorded.
"""

import errno
import os
import types
from pathlib import Path
from typing import BinaryIO, Optional, Type, Union

from code2md.cli.signal_handler import signal_handler

STDOUT_MARKER = "-"


class SafeWriter:
    """Signal-aware writer for the generated document.

    Text is encoded as UTF-8 with surrogate escapes, so file contents that were read
    with surrogate escapes come out byte for byte as they went in.

    Attributes:
        target: The file path or file descriptor written to.
        fd (int): The descriptor actually used.
        bytes_written (int): Total number of bytes written so far.
    """

    def __init__(self, target: Union[int, str, os.PathLike]):
        """Open the writer.

        Args:
            target: A file descriptor, the marker '-' for standard output, or a file path.
                Paths are created or truncated.

        Raises:
            TypeError: If target is of an unsupported type.
            OSError: If the output file cannot be opened.
        """
        self.target = target
        self.bytes_written = 0
        self._closed = False
        self._file_obj: Optional[BinaryIO] = None

        if isinstance(target, int):
            self.fd = target
        elif target == STDOUT_MARKER:
            self.fd = 1
        elif isinstance(target, (str, os.PathLike)):
            self._file_obj = Path(target).open("wb")
            self.fd = self._file_obj.fileno()
        else:
            raise TypeError(f"Expected int, str, or PathLike, got {type(target).__name__}")

    @property
    def is_stdout(self) -> bool:
        return self._file_obj is None and self.fd == 1

    @property
    def display_name(self) -> str:
        """How the destination is named in messages."""
        if self._file_obj is None:
            return "<stdout>" if self.fd == 1 else f"<fd {self.fd}>"
        return str(self.target)

    def write(self, data: str) -> None:
        """Write text, stopping early on interruption.

        Raises:
            BrokenPipeError: If SIGPIPE or SIGINT was received, or the pipe is closed.
            OSError: If another I/O error occurs.
            ValueError: If the writer is closed.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if signal_handler.interrupted:
            raise BrokenPipeError()

        payload = data.encode("utf-8", errors="surrogateescape")
        view = memoryview(payload)
        try:
            while view:
                written = os.write(self.fd, view)
                self.bytes_written += written
                view = view[written:]
        except OSError as e:
            if e.errno == errno.EPIPE:
                raise BrokenPipeError()
            raise

    def close(self) -> None:
        """Close the output file if this writer opened it.

        Descriptors handed in by the caller are left open. Broken pipe errors during
        close are swallowed; the writer is marked closed either way.
        """
        if self._closed:
            return

        if self._file_obj is not None:
            try:
                self._file_obj.close()
            except OSError as e:
                if e.errno != errno.EPIPE:
                    raise

        self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        try:
            self.close()
        except OSError:
            # An exception from the with block takes precedence over one from close
            if exc_type is None:
                raise
