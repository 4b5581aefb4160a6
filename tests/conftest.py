"""Shared pytest fixtures for ktoolhu tests."""

from __future__ import annotations

import copy
import os
from collections.abc import Callable
from typing import Any

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    # Clear any KTOOLHU_ prefixed environment variables
    for key in list(os.environ.keys()):
        if key.startswith("KTOOLHU_"):
            monkeypatch.delenv(key, raising=False)


def _apply_merge_patch(document: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    result = copy.deepcopy(document)
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        elif isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _apply_merge_patch(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


@pytest.fixture
def apply_merge_patch() -> Callable[[dict[str, Any], dict[str, Any]], dict[str, Any]]:
    """Apply a merge patch the way the API server does, returning a new document.

    ``None`` values delete keys and nested maps merge recursively.
    """
    return _apply_merge_patch
