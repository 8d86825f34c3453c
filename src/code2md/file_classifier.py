"""Binary detection and syntax-highlight language lookup for accepted files."""

from pathlib import Path

from code2md.types import PathType

# Extensions treated as binary without looking at the content
BINARY_EXTENSIONS = frozenset(
    {
        # Images
        ".jpg",
        ".jpeg",
        ".png",
        ".gif",
        ".bmp",
        ".ico",
        ".tiff",
        ".webp",
        ".svg",
        # Audio / video
        ".mp3",
        ".mp4",
        ".avi",
        ".mov",
        ".wmv",
        ".flv",
        ".webm",
        ".wav",
        ".flac",
        # Archives
        ".zip",
        ".rar",
        ".7z",
        ".tar",
        ".gz",
        # Documents
        ".pdf",
        ".doc",
        ".docx",
        ".xls",
        ".xlsx",
        ".ppt",
        ".pptx",
        # Executables and libraries
        ".exe",
        ".dll",
        ".so",
        ".dylib",
        ".jar",
        ".class",
        ".o",
        ".a",
        ".lib",
        # Fonts
        ".ttf",
        ".otf",
        ".woff",
        ".woff2",
        # Databases
        ".db",
        ".sqlite",
    }
)

# Fence language tags keyed by lower-cased extension
LANGUAGES = {
    ".go": "go",
    ".py": "python",
    ".js": "javascript",
    ".ts": "typescript",
    ".jsx": "jsx",
    ".tsx": "tsx",
    ".java": "java",
    ".c": "c",
    ".cpp": "cpp",
    ".cc": "cpp",
    ".cxx": "cpp",
    ".h": "c",
    ".hpp": "cpp",
    ".cs": "csharp",
    ".php": "php",
    ".rb": "ruby",
    ".swift": "swift",
    ".kt": "kotlin",
    ".rs": "rust",
    ".r": "r",
    ".scala": "scala",
    ".sh": "bash",
    ".bash": "bash",
    ".zsh": "zsh",
    ".fish": "fish",
    ".ps1": "powershell",
    ".sql": "sql",
    ".html": "html",
    ".htm": "html",
    ".xml": "xml",
    ".css": "css",
    ".scss": "scss",
    ".sass": "sass",
    ".less": "less",
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".toml": "toml",
    ".ini": "ini",
    ".cfg": "ini",
    ".conf": "conf",
    ".md": "markdown",
    ".rst": "rst",
    ".tex": "latex",
}

SNIFF_SIZE = 8192
# Fraction of non-text bytes above which a sniffed file counts as binary
BINARY_THRESHOLD = 0.3
_TEXT_CONTROL_BYTES = frozenset({9, 10, 13})


def has_binary_extension(file_path: PathType) -> bool:
    """Check the extension alone.

    Example:
        >>> has_binary_extension("logo.PNG")
        True
        >>> has_binary_extension("main.py")
        False
    """
    return Path(file_path).suffix.lower() in BINARY_EXTENSIONS


def is_binary_file(file_path: PathType, chunk_size: int = SNIFF_SIZE) -> bool:
    """Detect if a file is binary using its extension, then its first bytes.

    Files with a known binary extension are binary. Otherwise the first chunk is read:
    a NUL byte, or more than 30% of bytes that are neither printable ASCII nor tab,
    newline or carriage return, marks the file as binary. Empty files are text.

    Args:
        file_path: Path to the file to analyze. Can be any path-like object.
        chunk_size: Number of bytes to inspect. Defaults to 8192.

    Returns:
        True if the file appears to be binary.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    if has_binary_extension(file_path):
        return True

    with open(file_path, "rb") as file:
        chunk = file.read(chunk_size)

    if not chunk:
        return False

    if b"\0" in chunk:
        return True

    non_text = sum(1 for byte in chunk if byte > 127 or (byte < 32 and byte not in _TEXT_CONTROL_BYTES))
    return non_text / len(chunk) > BINARY_THRESHOLD


def language_for(file_path: PathType) -> str:
    """Return the fence language tag for a file, or an empty string when unknown.

    Example:
        >>> language_for("src/app.tsx")
        'tsx'
        >>> language_for("Makefile")
        ''
    """
    return LANGUAGES.get(Path(file_path).suffix.lower(), "")
