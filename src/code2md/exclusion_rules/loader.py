"""Assemble the evaluator for a scan root from every rule source."""

from collections import namedtuple
from pathlib import Path
from typing import Iterable

from code2md.types import PathType

from .defaults import BUILTIN_EXCLUSIONS, DEFAULT_IGNORE_PATTERNS, IGNORE_FILE_NAMES
from .evaluator import IgnoreEvaluator
from .glob_rules import RuleSet

# kind is "file" (value is a path to an ignore file) or "pattern" (value is one rule line)
RuleSource = namedtuple("RuleSource", ["kind", "value"])


def load_rule_set(
    root: PathType,
    extra_sources: Iterable[RuleSource] = (),
    use_defaults: bool = True,
) -> RuleSet:
    """Collect the ordered glob rules that apply to a scan root.

    The order is: default patterns, then each of IGNORE_FILE_NAMES found at the root,
    then the extra sources in the order given. Ignore files at the root are optional;
    extra ignore files are not.

    Args:
        root: Directory about to be scanned.
        extra_sources: Additional ignore files and patterns, typically from the CLI.
        use_defaults: Include DEFAULT_IGNORE_PATTERNS.

    Returns:
        The combined rule set.

    Raises:
        FileNotFoundError: If an extra ignore file does not exist.
        ValueError: If a source has an unknown kind.

    Example:
        >>> import tempfile
        >>> with tempfile.TemporaryDirectory() as tmpdir:
        ...     rules = load_rule_set(tmpdir, [RuleSource("pattern", "!keep.log")])
        >>> rules.exclude("keep.log"), rules.exclude("other.log")
        (False, True)
    """
    root_path = Path(root)

    rule_set = RuleSet.from_lines(DEFAULT_IGNORE_PATTERNS) if use_defaults else RuleSet()
    rule_set += RuleSet.from_files([root_path / name for name in IGNORE_FILE_NAMES], missing_ok=True)

    for source in extra_sources:
        if source.kind == "file":
            rule_set += RuleSet.from_files(source.value)
        elif source.kind == "pattern":
            rule_set += RuleSet.from_lines([source.value])
        else:
            raise ValueError(f"Unknown rule source kind: {source.kind}")

    return rule_set


def build_evaluator(
    root: PathType,
    extra_sources: Iterable[RuleSource] = (),
    use_defaults: bool = True,
) -> IgnoreEvaluator:
    """Build the IgnoreEvaluator for a scan root.

    Args:
        root: Directory about to be scanned.
        extra_sources: Additional ignore files and patterns, typically from the CLI.
        use_defaults: Include the built-in substring list and the default patterns.

    Returns:
        An evaluator ready to be handed to the tree walker.
    """
    rule_set = load_rule_set(root, extra_sources, use_defaults=use_defaults)
    builtins = BUILTIN_EXCLUSIONS if use_defaults else ()
    return IgnoreEvaluator(rule_set, builtins)
