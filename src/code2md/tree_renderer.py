"""Directory tree rendering from a flat list of accepted paths.

The tree is rebuilt from path strings alone, so it shows exactly the accepted files and
the directories above them. The filesystem is never consulted.
"""

from typing import Any, Dict, Iterable, Iterator, Optional, Set, Tuple

from anytree import Node

ROOT_LABEL = "."


class TreeNode(Node):  # type: ignore
    """Node representing a file or directory in the rendered tree.

    Extends anytree.Node with a directory flag.

    Attributes:
        name (str): The bare file or directory name.
        is_dir (bool): True for directories.

    Example:
        >>> root = TreeNode(".", is_dir=True)
        >>> src = TreeNode("src", parent=root, is_dir=True)
        >>> src.label
        'src/'
        >>> TreeNode("main.py", parent=src).label
        'main.py'
    """

    def __init__(self, name: str, parent: Optional["TreeNode"] = None, is_dir: bool = False, **kwargs: Any) -> None:
        super().__init__(name, parent, **kwargs)
        self.is_dir = is_dir

    @property
    def label(self) -> str:
        """Name as printed: directories carry a trailing slash."""
        return f"{self.name}/" if self.is_dir else self.name


def _sort_key(node: TreeNode) -> Tuple[bool, str, str]:
    # Directories first, then files, alphabetically; raw name breaks case ties
    return (not node.is_dir, node.name.lower(), node.name)


def build_tree(paths: Iterable[str]) -> TreeNode:
    """Group accepted paths by parent directory into a tree.

    Args:
        paths: Relative file paths using forward slashes.

    Returns:
        The root node. Every directory node has at least one file beneath it.

    Example:
        >>> root = build_tree(["a.txt", "dir/b.txt", "dir/sub/c.txt"])
        >>> sorted(node.label for node in root.children)
        ['a.txt', 'dir/']
        >>> len(root.leaves)
        3
    """
    root = TreeNode(ROOT_LABEL, is_dir=True)
    directories: Dict[str, TreeNode] = {"": root}
    seen: Set[str] = set()

    for path in paths:
        parts = [part for part in path.split("/") if part]
        if not parts:
            continue
        normalized = "/".join(parts)
        if normalized in seen:
            continue
        seen.add(normalized)

        parent = root
        parent_key = ""
        for part in parts[:-1]:
            key = f"{parent_key}/{part}" if parent_key else part
            node = directories.get(key)
            if node is None:
                node = TreeNode(part, parent=parent, is_dir=True)
                directories[key] = node
            parent, parent_key = node, key

        TreeNode(parts[-1], parent=parent)

    return root


def stream_tree(paths: Iterable[str]) -> Iterator[str]:
    """Generate the tree diagram one line at a time, without line terminators.

    Output resembles the Unix 'tree' command. The first line is the root marker.

    Yields:
        Lines of the diagram.

    Example:
        >>> for line in stream_tree(["a.txt", "dir/b.txt", "dir/sub/c.txt"]):
        ...     print(line)
        .
        ├── dir/
        │   ├── sub/
        │   │   └── c.txt
        │   └── b.txt
        └── a.txt
    """
    root = build_tree(paths)

    def write_children(node: TreeNode, prefix: str) -> Iterator[str]:
        children = sorted(node.children, key=_sort_key)
        for i, child in enumerate(children):
            is_last = i == len(children) - 1
            connector = "└── " if is_last else "├── "
            yield f"{prefix}{connector}{child.label}"
            if child.is_dir:
                yield from write_children(child, prefix + ("    " if is_last else "│   "))

    yield root.name
    yield from write_children(root, "")


def render_tree(paths: Iterable[str]) -> str:
    """Return the complete tree diagram as a single string.

    Example:
        >>> print(render_tree(["docs/readme.md"]))
        .
        └── docs/
            └── readme.md
    """
    return "\n".join(stream_tree(paths))
