"""Unit tests for the CLI entry point."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from code2md.cli.argparser import create_parser
from code2md.cli.main import collect_rule_sources, format_counts, main, self_exclusion_source
from code2md.cli.signal_handler import signal_handler
from code2md.exclusion_rules.loader import RuleSource
from code2md.file_classifier import is_binary_file


@pytest.fixture(autouse=True)
def no_signal_handlers():
    """Keep main() from replacing the test process's signal handlers."""
    signal_handler.reset()
    with patch("code2md.cli.main.setup_signal_handling"):
        yield
    signal_handler.reset()


@pytest.fixture
def project(make_tree, monkeypatch):
    root = make_tree(
        {
            "src/app.py": "print('app')\n",
            "README.md": "# Demo\n",
            "server.log": "started\n",
            "node_modules/dep/index.js": "exports.x = 1\n",
        }
    )
    monkeypatch.chdir(root)
    return root


def run_main(*argv):
    with patch("sys.argv", ["code2md", *argv]):
        main()


def test_writes_default_output(project, capsys):
    run_main()

    document = (project / "project.md").read_text()
    assert document.startswith("# Project Structure\n\n```\n.\n")
    assert "## src/app.py\n```python\nprint('app')\n```\n" in document
    assert "server.log" not in document
    assert "node_modules" not in document
    assert capsys.readouterr().out == "Successfully generated project.md (2 files, 1 directory)\n"


def test_output_file_is_not_part_of_its_own_snapshot(project):
    run_main()
    run_main()
    assert "project.md" not in (project / "project.md").read_text()


def test_output_to_stdout(project, capfd):
    run_main("-o", "-")

    captured = capfd.readouterr()
    assert captured.out.startswith("# Project Structure\n")
    assert "## README.md\n" in captured.out
    assert "Successfully generated <stdout>" in captured.err
    assert not (project / "project.md").exists()


def test_source_option(project, tmp_path_factory):
    output = tmp_path_factory.mktemp("out") / "src.md"
    run_main("-s", "src", "-o", str(output))

    document = output.read_text()
    assert "## app.py\n" in document
    assert "README.md" not in document


def test_ignore_patterns_in_order(project):
    run_main("-i", "!server.log", "-i", "*.md")

    document = (project / "project.md").read_text()
    assert "## server.log\n" in document
    assert "README.md" not in document


def test_exclude_file(project):
    (project / "extra.ignore").write_text("src/\n")
    run_main("-e", "extra.ignore")
    assert "app.py" not in (project / "project.md").read_text()


def test_no_default_ignores(project):
    run_main("--no-default-ignores")

    document = (project / "project.md").read_text()
    assert "## server.log\n" in document
    assert "## node_modules/dep/index.js\n" in document


def test_tree_only_and_contents_only(project, tmp_path_factory):
    out_dir = tmp_path_factory.mktemp("out")
    run_main("-C", "-o", str(out_dir / "tree.md"))
    run_main("-T", "-o", str(out_dir / "contents.md"))

    tree = (out_dir / "tree.md").read_text()
    contents = (out_dir / "contents.md").read_text()
    assert tree.startswith("# Project Structure\n")
    assert "# Files" not in tree
    assert contents.startswith("# Files\n")
    assert "# Project Structure" not in contents


def test_both_parts_disabled_warns(project, capsys):
    run_main("-T", "-C")

    assert "Warning: Both tree and contents were disabled" in capsys.readouterr().err
    assert (project / "project.md").read_text() == ""


def test_missing_source_is_fatal(project, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run_main("-s", "does-not-exist")

    assert exc_info.value.code == 1
    assert capsys.readouterr().err.startswith("Error: Cannot traverse does-not-exist")
    assert not (project / "project.md").exists()


def test_missing_exclude_file_is_fatal(project, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run_main("-e", "nowhere.ignore")

    assert exc_info.value.code == 1
    assert "Error: Rules file not found" in capsys.readouterr().err


def test_output_directory_is_rejected(project, capsys):
    with pytest.raises(SystemExit) as exc_info:
        run_main("-o", "src")

    assert exc_info.value.code == 1
    assert "Error: Output path is a directory: src" in capsys.readouterr().err


def test_unreadable_file_warns_and_continues(project, capsys):
    def flaky(path, *args, **kwargs):
        if Path(path).name == "README.md":
            raise PermissionError(13, "Permission denied")
        return is_binary_file(path, *args, **kwargs)

    with patch("code2md.content_printer.is_binary_file", side_effect=flaky):
        run_main()

    captured = capsys.readouterr()
    assert "Warning: Error processing README.md: Permission denied" in captured.err
    assert "Successfully generated project.md" in captured.out
    document = (project / "project.md").read_text()
    assert "## README.md" not in document
    assert "└── README.md" in document or "├── README.md" in document
    assert "## src/app.py" in document


def test_interrupted_run_exits_with_signal_status(project, capsys):
    signal_handler.sigint_received.set()

    with pytest.raises(SystemExit) as exc_info:
        run_main()

    assert exc_info.value.code == 130
    assert "Successfully generated" not in capsys.readouterr().out
    assert (project / "project.md").read_text() == ""


@pytest.mark.parametrize(
    "source,output,expected",
    [
        ("/work", "/work/project.md", RuleSource("pattern", "/project.md")),
        ("/work", "/work/docs/out.md", RuleSource("pattern", "/docs/out.md")),
        ("/work", "/elsewhere/out.md", None),
        ("/work", "/work-copy/out.md", None),
        ("/work", "-", None),
    ],
)
def test_self_exclusion_source(source, output, expected):
    assert self_exclusion_source(Path(source), output) == expected


def test_self_exclusion_with_relative_paths(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert self_exclusion_source(Path("."), "project.md") == RuleSource("pattern", "/project.md")
    assert self_exclusion_source(Path("sub"), "project.md") is None
    assert self_exclusion_source(Path("."), os.path.join("out", "snap.md")) == RuleSource("pattern", "/out/snap.md")


def test_collect_rule_sources_appends_self_exclusion(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    args = create_parser().parse_args(["-i", "*.csv"])

    assert collect_rule_sources(args) == [RuleSource("pattern", "*.csv"), RuleSource("pattern", "/project.md")]
    assert args.rule_sources == [RuleSource("pattern", "*.csv")]


@pytest.mark.parametrize(
    "files,directories,expected",
    [
        (0, 0, "0 files, 0 directories"),
        (1, 1, "1 file, 1 directory"),
        (12, 3, "12 files, 3 directories"),
    ],
)
def test_format_counts(files, directories, expected):
    assert format_counts(files, directories) == expected


def test_success_line_reports_counts(make_tree, monkeypatch, capsys):
    root = make_tree({"a.py": "", "pkg/b.py": "", "pkg/sub/c.py": "", "docs/d.md": ""})
    monkeypatch.chdir(root)

    run_main("-o", "snapshot.md")

    assert capsys.readouterr().out == "Successfully generated snapshot.md (4 files, 3 directories)\n"
