"""Shared test fixtures for fnarity."""

from pathlib import Path

import pytest


@pytest.fixture
def rust_tree(tmp_path):
    """Build a source tree under tmp_path from a {relative_path: source} dict."""

    def _build(files: dict[str, str]) -> Path:
        for rel, content in files.items():
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return tmp_path

    return _build


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep user/project config files and FNARITY_* variables out of tests."""
    home = tmp_path / "_home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(home)
    for key in ("FNARITY_WORKERS", "FNARITY_FOLLOW_SYMLINKS", "FNARITY_ON_PARSE_ERROR"):
        monkeypatch.delenv(key, raising=False)
