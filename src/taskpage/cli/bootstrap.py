# src/taskpage/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists (logs live there),
- wires a configured EditorSession into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.editor import EditorSession
from ..core.state import AppState
from ..items.parser import ParseCache
from ..text.lists import continue_list_rules

logger = logging.getLogger(__name__)


def create_session(settings) -> EditorSession:
    extra_bullets = list(getattr(settings, "extra_bullets", []) or [])
    cache_size = int(getattr(settings, "parse_cache_size", 512))
    return EditorSession(
        rules=continue_list_rules(extra_bullets=extra_bullets),
        cache=ParseCache(cache_size),
    )


def create_initial_state(*, settings=None, text: str = "") -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    session = create_session(settings)
    if text:
        session.insert_text(text)

    logger.debug(
        "Session ready cache_size=%s rules=%s",
        getattr(settings, "parse_cache_size", None),
        len(session.rules),
    )
    return AppState(settings=settings, session=session)
