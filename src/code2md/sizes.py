"""Human-readable file size parsing and formatting."""

from typing import Union

from humanfriendly import InvalidSize, parse_size

DEFAULT_MAX_SIZE = "1MB"

_UNIT = 1024
_PREFIXES = "KMGTPE"


def parse_file_size(size: Union[str, int]) -> int:
    """Parse a human-readable size into bytes.

    Units are binary, so '1KB' is 1024 bytes and '1MB' is 1048576 bytes. A bare number
    is a byte count.

    Args:
        size: Size string like '1MB', '500KB', '2.5K' or '1024', or an int.

    Returns:
        Size in bytes.

    Raises:
        ValueError: If the size is negative or cannot be parsed.

    Example:
        >>> parse_file_size("1MB")
        1048576
        >>> parse_file_size("512")
        512
    """
    if isinstance(size, int):
        if size < 0:
            raise ValueError("Size cannot be negative")
        return size

    try:
        size_bytes = int(parse_size(size, binary=True))
    except InvalidSize as e:
        raise ValueError(f"Invalid size format '{size}': {e}")
    if size_bytes < 0:
        raise ValueError("Size cannot be negative")
    return size_bytes


def format_file_size(size_bytes: int) -> str:
    """Format a byte count for the binary and too-large notices.

    Counts below 1024 are shown in bytes; larger ones with one decimal and a binary
    KB/MB/GB/... unit.

    Example:
        >>> format_file_size(512)
        '512 B'
        >>> format_file_size(1536)
        '1.5 KB'
        >>> format_file_size(3 * 1024 * 1024)
        '3.0 MB'
    """
    if size_bytes < _UNIT:
        return f"{size_bytes} B"
    divisor, exponent = _UNIT, 0
    quotient = size_bytes // _UNIT
    while quotient >= _UNIT and exponent < len(_PREFIXES) - 1:
        divisor *= _UNIT
        exponent += 1
        quotient //= _UNIT
    return f"{size_bytes / divisor:.1f} {_PREFIXES[exponent]}B"
