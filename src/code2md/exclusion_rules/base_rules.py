from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for path exclusion rules.

    Every exclusion source in code2md (ordered glob rule sets, the substring built-in
    list, and the evaluator that layers the two) answers the same question: given a
    path relative to the scanned root and whether that path is a directory, should the
    path be left out of the snapshot?

    Implementations are expected to be immutable once constructed so that a single
    instance can be consulted for every entry of a walk.

    Example:
        >>> from code2md.exclusion_rules.glob_rules import RuleSet
        >>> rules = RuleSet.from_lines(["*.pyc"])
        >>> rules.exclude("test.pyc")
        True
        >>> rules.exclude("test.py")
        False
        >>>
        >>> from code2md.exclusion_rules.substring_rules import SubstringRules
        >>> builtins = SubstringRules(["node_modules"])
        >>> builtins.exclude("web/node_modules", is_dir=True)
        True
    """

    @abstractmethod
    def exclude(self, path: str, is_dir: bool = False) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): The path to check, relative to the root of the directory being
                processed and using forward slashes.
            is_dir (bool): Whether the path names a directory. Defaults to False.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def has_rules(self) -> bool:
        """
        Check whether this source holds any rules at all.

        Returns:
            bool: True unless the implementation knows it is empty.
        """
        return True
