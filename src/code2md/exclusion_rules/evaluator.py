"""Layered evaluation of ordered glob rules and substring built-ins."""

from typing import Iterable, Optional, Union

from .base_rules import BaseExclusionRules
from .glob_rules import RuleSet
from .substring_rules import SubstringRules


class IgnoreEvaluator(BaseExclusionRules):
    """Combine an ordered RuleSet with the substring built-in list.

    The rule set is evaluated first, with later rules overriding earlier ones. Only when
    the rule set leaves the path included are the built-ins consulted; any built-in token
    contained in the path then excludes it. A negated glob rule can therefore re-include
    a path excluded by an earlier glob rule, but never one hit by a built-in token.

    Both inputs are fixed at construction time and the evaluator holds no other state,
    so the same instance can be reused for every entry of a walk and always gives the
    same answer for the same path.

    Attributes:
        rule_set (RuleSet): Ordered glob rules.
        builtins (SubstringRules): Substring-matched safety net.

    Example:
        >>> evaluator = IgnoreEvaluator(
        ...     RuleSet.from_lines(["*.log", "!keep.log"]),
        ...     ["node_modules"],
        ... )
        >>> evaluator.should_ignore("keep.log")
        False
        >>> evaluator.should_ignore("other.log")
        True
        >>> evaluator.should_ignore("frontend/node_modules", is_dir=True)
        True
    """

    def __init__(
        self,
        rule_set: Optional[RuleSet] = None,
        builtins: Optional[Union[SubstringRules, Iterable[str]]] = None,
    ) -> None:
        """Initialize the evaluator.

        Args:
            rule_set: Ordered glob rules. Defaults to an empty rule set.
            builtins: Substring rules, or the raw tokens to build them from. Defaults to
                no built-ins.

        Raises:
            TypeError: If rule_set is not a RuleSet.
        """
        if rule_set is None:
            rule_set = RuleSet()
        if not isinstance(rule_set, RuleSet):
            raise TypeError(f"rule_set must be a RuleSet, got {type(rule_set)}")
        if builtins is None:
            builtins = SubstringRules()
        elif not isinstance(builtins, SubstringRules):
            builtins = SubstringRules(builtins)

        self._rule_set = rule_set
        self._builtins = builtins

    @property
    def rule_set(self) -> RuleSet:
        return self._rule_set

    @property
    def builtins(self) -> SubstringRules:
        return self._builtins

    def should_ignore(self, path: str, is_dir: bool = False) -> bool:
        """Decide whether a path relative to the scanned root is ignored.

        Args:
            path: Candidate path using forward slashes.
            is_dir: Whether the candidate is a directory.

        Returns:
            True if the path is to be left out of the snapshot.
        """
        if self._rule_set.exclude(path, is_dir):
            return True
        return self._builtins.exclude(path, is_dir)

    def exclude(self, path: str, is_dir: bool = False) -> bool:
        return self.should_ignore(path, is_dir)

    def has_rules(self) -> bool:
        return self._rule_set.has_rules() or self._builtins.has_rules()
