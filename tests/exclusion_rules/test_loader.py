import pytest

from code2md.exclusion_rules.defaults import BUILTIN_EXCLUSIONS, DEFAULT_IGNORE_PATTERNS, IGNORE_FILE_NAMES
from code2md.exclusion_rules.evaluator import IgnoreEvaluator
from code2md.exclusion_rules.glob_rules import RuleSet
from code2md.exclusion_rules.loader import RuleSource, build_evaluator, load_rule_set


def test_ignore_file_names():
    assert IGNORE_FILE_NAMES == (".gitignore", ".code2mdignore")


def test_defaults_only(tmp_path):
    rules = load_rule_set(tmp_path)
    assert rules == RuleSet.from_lines(DEFAULT_IGNORE_PATTERNS)
    assert rules.exclude("server.log")
    assert rules.exclude("pkg/module.pyc")
    assert rules.exclude("notes.txt~")


def test_no_defaults(tmp_path):
    rules = load_rule_set(tmp_path, use_defaults=False)
    assert not rules.has_rules()


def test_root_ignore_files_in_order(tmp_path):
    (tmp_path / ".gitignore").write_text("*.csv\n")
    (tmp_path / ".code2mdignore").write_text("!keep.csv\n")

    rules = load_rule_set(tmp_path, use_defaults=False)
    assert [rule.text for rule in rules] == ["*.csv", "keep.csv"]
    assert rules.exclude("data.csv")
    assert not rules.exclude("keep.csv")


def test_missing_root_ignore_files_are_fine(tmp_path):
    (tmp_path / ".code2mdignore").write_text("secret.txt\n")
    rules = load_rule_set(tmp_path, use_defaults=False)
    assert rules.exclude("secret.txt")


def test_file_rules_can_override_default_patterns(tmp_path):
    (tmp_path / ".gitignore").write_text("!keep.log\n")
    rules = load_rule_set(tmp_path)
    assert not rules.exclude("keep.log")
    assert rules.exclude("other.log")


def test_extra_sources_follow_root_files(tmp_path):
    (tmp_path / ".gitignore").write_text("*.csv\n")
    extra = tmp_path / "extra.ignore"
    extra.write_text("!a.csv\n")

    sources = [RuleSource("file", str(extra)), RuleSource("pattern", "a.csv"), RuleSource("pattern", "!b.csv")]
    rules = load_rule_set(tmp_path, sources, use_defaults=False)

    assert [rule.text for rule in rules] == ["*.csv", "a.csv", "a.csv", "b.csv"]
    assert rules.exclude("a.csv")
    assert not rules.exclude("b.csv")
    assert rules.exclude("c.csv")


def test_extra_file_must_exist(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_rule_set(tmp_path, [RuleSource("file", str(tmp_path / "missing.ignore"))])


def test_unknown_source_kind(tmp_path):
    with pytest.raises(ValueError):
        load_rule_set(tmp_path, [RuleSource("regex", ".*")])


def test_build_evaluator(tmp_path):
    (tmp_path / ".gitignore").write_text("*.tmp\n")
    evaluator = build_evaluator(tmp_path)

    assert isinstance(evaluator, IgnoreEvaluator)
    assert evaluator.builtins.tokens == BUILTIN_EXCLUSIONS
    assert evaluator.should_ignore("scratch.tmp")
    assert evaluator.should_ignore("frontend/node_modules", is_dir=True)
    assert not evaluator.should_ignore("src/main.py")


def test_build_evaluator_without_defaults(tmp_path):
    evaluator = build_evaluator(tmp_path, use_defaults=False)
    assert not evaluator.should_ignore("node_modules", is_dir=True)
    assert not evaluator.should_ignore("app.log")
