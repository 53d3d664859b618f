# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpage.cli.bootstrap import create_initial_state
from taskpage.core.editor import EditorSession
from taskpage.core.state import AppState


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="taskpage-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        parse_cache_size=16,
        display_date_format="YYYY-MM-DD",
        extra_bullets=["+"],
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    return create_initial_state(settings=settings)


@pytest.fixture()
def session() -> EditorSession:
    return EditorSession()
