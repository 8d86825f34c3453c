class TraversalError(Exception):
    """
    Exception raised when the directory walk cannot be completed.

    The walk is all-or-nothing: a missing root, a root that is not a directory, or a
    directory that cannot be listed aborts the whole traversal. The underlying ``OSError``
    is kept as ``__cause__`` so callers can still inspect errno and friends.

    Attributes:
        path (str): The filesystem path that could not be traversed.

    Example:
        >>> error = TraversalError("/missing", "No such file or directory")
        >>> str(error)
        'Cannot traverse /missing: No such file or directory'
        >>> error.path
        '/missing'
    """

    def __init__(self, path: str, reason: str) -> None:
        """
        Initialize the exception with the offending path.

        Args:
            path (str): Path that could not be traversed.
            reason (str): Short description of what went wrong.
        """
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot traverse {path}: {reason}")


class ContentReadError(Exception):
    """
    Exception raised when one accepted file cannot be read while dumping contents.

    Unlike TraversalError this is a per-file problem. The content printer reports it and
    moves on to the next file.

    Attributes:
        relative_path (str): Path of the file relative to the scanned root.

    Example:
        >>> error = ContentReadError("src/app.py", "Permission denied")
        >>> str(error)
        'src/app.py: Permission denied'
    """

    def __init__(self, relative_path: str, reason: str) -> None:
        self.relative_path = relative_path
        self.reason = reason
        super().__init__(f"{relative_path}: {reason}")
