# src/taskpage/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .editor import EditorSession


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    session: EditorSession
