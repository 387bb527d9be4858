"""Shared test fixtures for mdbake."""

from pathlib import Path

import pytest

from mdbake.render.options import ConversionOptions, Profile


def write_tree(root: Path, files: dict[str, str | bytes]) -> Path:
    """Create ``files`` (relative path -> content) under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path, monkeypatch):
    """Keep ./mdbake.yaml and ~/.mdbake out of every test."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def sample_tree(tmp_path):
    """a.md links to b.md; b.md is a bare heading."""
    return write_tree(
        tmp_path / "src",
        {
            "a.md": "# Title\n\n[link](b.md)\n",
            "b.md": "# Other\n",
        },
    )


@pytest.fixture
def nested_tree(tmp_path):
    return write_tree(
        tmp_path / "src",
        {
            "index.md": "# Home\n\nSee [guide](guide/intro.md).\n",
            "guide/intro.md": "# Intro\n\nBack to [home](../index.md).\n",
            "guide/deep/notes.md": "# Notes\n",
            "guide/image.png": b"\x89PNG\r\n",
            "assets/site.css": "body {}\n",
            "README.txt": "not markdown\n",
        },
    )


@pytest.fixture
def full_options():
    return ConversionOptions.for_profile(Profile.full)


@pytest.fixture
def plain_options():
    return ConversionOptions.for_profile(Profile.plain)
