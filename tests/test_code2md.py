"""Tests for the StreamingCode2Md and Code2Md classes."""

import pytest

from code2md.code2md import FILES_HEADING, TREE_HEADING, Code2Md, StreamingCode2Md
from code2md.exceptions import TraversalError
from code2md.exclusion_rules.loader import RuleSource, build_evaluator


@pytest.fixture
def project(make_tree):
    return make_tree(
        {
            "main.go": "package main\n",
            "lib/util.go": "package lib\n",
            "node_modules/pkg/index.js": "module.exports = 1\n",
            "debug.log": "noise\n",
            ".gitignore": "*.tmp\n",
            "scratch.tmp": "temp\n",
        }
    )


def test_full_document(project):
    snapshot = Code2Md(project, exclusion_rules=build_evaluator(project))

    # ".gitignore" contains the built-in ".git" token, so it is read but not listed
    assert snapshot.document == (
        "# Project Structure\n"
        "\n"
        "```\n"
        ".\n"
        "├── lib/\n"
        "│   └── util.go\n"
        "└── main.go\n"
        "```\n"
        "\n"
        "# Files\n"
        "\n"
        "## lib/util.go\n"
        "```go\n"
        "package lib\n"
        "```\n"
        "\n"
        "## main.go\n"
        "```go\n"
        "package main\n"
        "```\n"
        "\n"
    )


def test_counts(project):
    snapshot = StreamingCode2Md(project, exclusion_rules=build_evaluator(project))
    assert snapshot.file_count == 2
    assert snapshot.directory_count == 1
    assert snapshot.paths == ["lib/util.go", "main.go"]


def test_without_rules_everything_is_kept(project):
    snapshot = StreamingCode2Md(project)
    assert "node_modules/pkg/index.js" in snapshot.paths
    assert "debug.log" in snapshot.paths


def test_tree_and_contents_share_one_walk(project):
    snapshot = Code2Md(project, exclusion_rules=build_evaluator(project))
    for path in snapshot.paths:
        assert f"## {path}\n" in snapshot.content_string
        assert path.rsplit("/", 1)[-1] in snapshot.tree_string


def test_headings(project):
    snapshot = Code2Md(project)
    assert snapshot.tree_string.startswith(TREE_HEADING + "```\n.\n")
    assert snapshot.tree_string.endswith("```\n\n")
    assert snapshot.content_string.startswith(FILES_HEADING)


def test_empty_directory(tmp_path):
    snapshot = Code2Md(tmp_path)
    assert snapshot.document == "# Project Structure\n\n```\n.\n```\n\n# Files\n\n"
    assert snapshot.file_count == 0


def test_stream_document_parts(project):
    tree_only = "".join(StreamingCode2Md(project).stream_document(include_contents=False))
    contents_only = "".join(StreamingCode2Md(project).stream_document(include_tree=False))
    neither = "".join(StreamingCode2Md(project).stream_document(include_tree=False, include_contents=False))

    assert tree_only.startswith(TREE_HEADING)
    assert FILES_HEADING not in tree_only
    assert contents_only.startswith(FILES_HEADING)
    assert TREE_HEADING not in contents_only
    assert neither == ""


def test_streaming_only_once(project):
    snapshot = StreamingCode2Md(project)

    list(snapshot.stream_tree())
    with pytest.raises(RuntimeError):
        list(snapshot.stream_tree())

    list(snapshot.stream_contents())
    with pytest.raises(RuntimeError):
        list(snapshot.stream_contents())


def test_missing_directory_fails_in_constructor(tmp_path):
    with pytest.raises(TraversalError):
        StreamingCode2Md(tmp_path / "missing")


def test_unreadable_file_is_reported_and_skipped(project):
    reported = []
    snapshot = StreamingCode2Md(project, exclusion_rules=build_evaluator(project), on_error=reported.append)
    (project / "main.go").unlink()

    document = "".join(snapshot.stream_document())

    assert "## main.go" not in document
    assert "## lib/util.go" in document
    # The tree was built before the file disappeared
    assert "└── main.go" in document
    assert [error.relative_path for error in reported] == ["main.go"]
    assert [error.relative_path for error in snapshot.errors] == ["main.go"]


def test_max_size(project):
    snapshot = Code2Md(project, exclusion_rules=build_evaluator(project), max_size=5)
    assert "## main.go\n*File too large (13 B) - content omitted*\n\n" in snapshot.content_string


def test_negated_pattern_from_command_line(project):
    rules = build_evaluator(project, [RuleSource("pattern", "!debug.log")])
    snapshot = StreamingCode2Md(project, exclusion_rules=rules)
    assert "debug.log" in snapshot.paths
    assert "scratch.tmp" not in snapshot.paths
