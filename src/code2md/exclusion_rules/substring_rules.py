"""Built-in exclusions matched by plain substring containment."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple

from .base_rules import BaseExclusionRules


@dataclass(frozen=True)
class SubstringRule:
    """A single built-in token.

    The token is searched for anywhere in the relative path. It is not a glob and it is
    not limited to whole segments, so ``build`` also hits ``rebuild-notes.txt``.
    """

    token: str

    def matches(self, path: str) -> bool:
        return bool(self.token) and self.token in path


class SubstringRules(BaseExclusionRules):
    """The static safety-net list of well-known noise names.

    These rules cannot be negated and do not care whether the path is a directory.
    They are deliberately coarser than GlobRule matching.

    Example:
        >>> builtins = SubstringRules([".git", "node_modules"])
        >>> builtins.exclude("frontend/node_modules", is_dir=True)
        True
        >>> builtins.exclude(".gitignore")
        True
        >>> builtins.exclude("src/main.py")
        False
    """

    def __init__(self, tokens: Iterable[str] = ()) -> None:
        self._rules: Tuple[SubstringRule, ...] = tuple(SubstringRule(token) for token in tokens)

    @property
    def tokens(self) -> Tuple[str, ...]:
        return tuple(rule.token for rule in self._rules)

    def __iter__(self) -> Iterator[SubstringRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def exclude(self, path: str, is_dir: bool = False) -> bool:
        return any(rule.matches(path) for rule in self._rules)

    def has_rules(self) -> bool:
        return bool(self._rules)
