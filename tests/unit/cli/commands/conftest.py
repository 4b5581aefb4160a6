"""Shared fixtures for command tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import typer


@pytest.fixture
def mock_manager() -> MagicMock:
    """Create a mock workflow manager."""
    return MagicMock()


@pytest.fixture
def get_manager(mock_manager: MagicMock) -> MagicMock:
    """Factory returning the mock manager; records the config it was built with."""
    return MagicMock(return_value=mock_manager)


@pytest.fixture
def base_app() -> typer.Typer:
    """Empty app with a root callback so commands are addressed by name."""
    app = typer.Typer()

    @app.callback()
    def _root() -> None:
        pass

    return app
