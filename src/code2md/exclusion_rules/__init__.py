"""Exclusion rules for filtering files and directories."""

from .base_rules import BaseExclusionRules
from .evaluator import IgnoreEvaluator
from .glob_rules import GlobRule, RuleSet
from .loader import RuleSource, build_evaluator, load_rule_set
from .substring_rules import SubstringRule, SubstringRules

__all__ = [
    "BaseExclusionRules",
    "GlobRule",
    "IgnoreEvaluator",
    "RuleSet",
    "RuleSource",
    "SubstringRule",
    "SubstringRules",
    "build_evaluator",
    "load_rule_set",
]
