"""Default exclusions applied to every snapshot unless disabled."""

# Matched by substring containment against the whole relative path
BUILTIN_EXCLUSIONS = (
    ".git",
    ".svn",
    ".hg",
    ".DS_Store",
    "Thumbs.db",
    ".idea",
    ".vscode",
    "__pycache__",
    "node_modules",
    ".env",
    ".env.local",
    "dist",
    "build",
    "target",
)

# Glob rules placed ahead of any ignore file, so "!pattern" lines can override them
DEFAULT_IGNORE_PATTERNS = (
    "*.swp",
    "*.swo",
    "*~",
    "*.pyc",
    "*.log",
    "*.exe",
    "*.dll",
    "*.so",
    "*.dylib",
)

# Ignore files picked up from the root of the scanned directory, in evaluation order
IGNORE_FILE_NAMES = (".gitignore", ".code2mdignore")
