"""Test configuration and fixtures for code2md."""

import pytest


def pytest_addoption(parser):
    """Add custom command-line options for tests."""
    parser.addoption("--run-cli-tests", action="store_true", default=False, help="Run CLI integration tests (slow)")


@pytest.fixture
def make_tree(tmp_path):
    """Return a helper that materializes {relative_path: content} under tmp_path.

    Paths ending in '/' become empty directories. Content may be str or bytes.
    """

    def _make(files):
        for relative_path, content in files.items():
            target = tmp_path / relative_path
            if relative_path.endswith("/"):
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                target.write_bytes(content)
            else:
                target.write_text(content)
        return tmp_path

    return _make
