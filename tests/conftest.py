"""Shared test fixtures for sockit."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.support import Owner, Repository


@pytest.fixture
def owner() -> Owner:
    return Owner(login="jverkoey", followers=120)


@pytest.fixture
def repository(owner: Owner) -> Repository:
    return Repository(owner=owner, name="sockit", stars=42, language="objc")


@pytest.fixture
def repositories(owner: Owner) -> list[Repository]:
    return [
        Repository(owner=owner, name="sockit", stars=40, language="objc"),
        Repository(owner=owner, name="nimbus", stars=60, language="objc"),
        Repository(owner=owner, name="tools", stars=5, language="python"),
    ]


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Write a sockit.yaml with a non-default marker and return its path."""
    path = tmp_path / "sockit.yaml"
    path.write_text(
        "argument_marker: '='\n"
        "construction_prefix: make\n"
        "strict_delimiters: true\n"
        "cache_size: 4\n"
        "log_level: INFO\n"
    )
    return path
