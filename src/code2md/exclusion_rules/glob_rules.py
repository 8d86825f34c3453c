"""Ordered gitignore-style rules: parsing, matching and layered evaluation."""

from dataclasses import dataclass
from os import PathLike
from pathlib import Path
from typing import Iterable, Iterator, Optional, Sequence, Tuple, Union

from code2md.types import PathType

from .base_rules import BaseExclusionRules
from .glob_pattern import compile_glob


@dataclass(frozen=True)
class GlobRule:
    """One parsed ignore-file line.

    Attributes:
        text: Pattern body with the ``!``, leading ``/`` and trailing ``/`` markers removed.
        negated: A match re-includes the path instead of excluding it.
        anchored: The pattern only matches from the root of the scanned tree.
        directory_only: The pattern only applies to directories.

    Example:
        >>> rule = GlobRule.parse("!/build/")
        >>> rule
        GlobRule(text='build', negated=True, anchored=True, directory_only=True)
        >>> GlobRule.parse("# a comment") is None
        True
    """

    text: str
    negated: bool = False
    anchored: bool = False
    directory_only: bool = False

    @classmethod
    def parse(cls, line: str) -> Optional["GlobRule"]:
        """Parse a single ignore-file line.

        Blank lines and comments yield None. Nothing here ever raises: a line that
        strips down to nothing becomes a rule that matches no path.

        Args:
            line: Raw line, with or without its trailing newline.

        Returns:
            The parsed rule, or None for blank and comment lines.
        """
        text = line.strip()
        if not text or text.startswith("#"):
            return None

        negated = text.startswith("!")
        if negated:
            text = text[1:]

        anchored = text.startswith("/")
        if anchored:
            text = text[1:]

        directory_only = text.endswith("/")
        if directory_only:
            text = text[:-1]

        return cls(text, negated=negated, anchored=anchored, directory_only=directory_only)

    def matches(self, path: str, is_dir: bool = False) -> bool:
        """Check whether this rule matches a path relative to the scanned root.

        A pattern without ``/`` is compared with every segment of the path (only the
        first one when anchored). A pattern containing ``/`` is compared with the whole
        path when anchored, and with the whole path and each of its trailing sub-paths
        otherwise. A path also matches when it sits beneath a matching path.

        Args:
            path: Candidate path using forward slashes.
            is_dir: Whether the candidate is a directory.

        Returns:
            True if the rule applies to the path. The negation flag is not consulted here.

        Example:
            >>> GlobRule.parse("*.log").matches("deep/nested/a.log")
            True
            >>> GlobRule.parse("*.py[cod]").matches("pkg/mod.pyo")
            True
            >>> GlobRule.parse("/build").matches("src/build", is_dir=True)
            False
            >>> GlobRule.parse("dist/").matches("dist")
            False
        """
        if self.directory_only and not is_dir:
            return False
        if not self.text:
            return False

        pattern = compile_glob(self.text)
        if pattern is None:
            return False

        segments = path.split("/")

        if "/" not in self.text:
            if self.anchored:
                segments = segments[:1]
            return any(pattern.match(segment) for segment in segments)

        if self.anchored:
            return bool(pattern.match(path))
        return any(pattern.match("/".join(segments[start:])) for start in range(len(segments)))


class RuleSet(BaseExclusionRules):
    """An immutable, ordered sequence of GlobRule objects.

    Rules are evaluated in order and every matching rule overwrites the running
    decision with its own polarity, so a later rule always wins over an earlier one.
    This is how ``!pattern`` lines re-include something a previous line excluded.

    Rule sets are built once (from lines, from files, or by concatenating other rule
    sets with ``+``) and never change afterwards.

    Example:
        >>> rules = RuleSet.from_lines(["*.log", "!keep.log"])
        >>> rules.exclude("other.log")
        True
        >>> rules.exclude("keep.log")
        False
        >>> len(rules + RuleSet.from_lines(["build/"]))
        3
    """

    def __init__(self, rules: Iterable[GlobRule] = ()) -> None:
        self._rules: Tuple[GlobRule, ...] = tuple(rules)

    @classmethod
    def from_lines(cls, lines: Iterable[str]) -> "RuleSet":
        """Build a rule set from ignore-file lines, skipping blanks and comments.

        Args:
            lines: Raw lines in evaluation order.

        Returns:
            A new RuleSet.
        """
        parsed = (GlobRule.parse(line) for line in lines)
        return cls(rule for rule in parsed if rule is not None)

    @classmethod
    def from_files(cls, rules_files: Union[PathType, Sequence[PathType]], missing_ok: bool = False) -> "RuleSet":
        """Build a rule set from one or more ignore files, in the order given.

        Args:
            rules_files: Path or sequence of paths of ignore files.
            missing_ok: Silently skip files that do not exist instead of raising.

        Returns:
            A new RuleSet holding the rules of every file read.

        Raises:
            FileNotFoundError: If a file does not exist and missing_ok is False.

        Example:
            >>> import os
            >>> import tempfile
            >>> with tempfile.NamedTemporaryFile(mode="w", delete=False) as f:
            ...     _ = f.write("*.txt\\n!important.txt\\n")
            >>> rules = RuleSet.from_files(f.name)
            >>> rules.exclude("notes.txt"), rules.exclude("important.txt")
            (True, False)
            >>> os.unlink(f.name)
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        rules = []
        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.is_file():
                if missing_ok:
                    continue
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r", encoding="utf-8", errors="replace") as f:
                rules.extend(cls.from_lines(f.read().splitlines()))

        return cls(rules)

    @property
    def rules(self) -> Tuple[GlobRule, ...]:
        return self._rules

    def __iter__(self) -> Iterator[GlobRule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __add__(self, other: "RuleSet") -> "RuleSet":
        if not isinstance(other, RuleSet):
            return NotImplemented
        return RuleSet(self._rules + other._rules)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return self._rules == other._rules

    def __hash__(self) -> int:
        return hash(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._rules)!r})"

    def exclude(self, path: str, is_dir: bool = False) -> bool:
        """Return the decision of the last matching rule, or False when none match.

        Every rule is visited; there is no early exit.
        """
        decision = False
        for rule in self._rules:
            if rule.matches(path, is_dir):
                decision = not rule.negated
        return decision

    def has_rules(self) -> bool:
        return bool(self._rules)
