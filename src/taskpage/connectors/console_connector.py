# src/taskpage/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import render_page
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def handle_input(state: AppState, user_input: str, emit=None) -> str:
    """
    One console turn.

    Slash commands go to the registry. Anything else is typed at the cursor
    and followed by Enter; an empty input is a bare Enter, which is how a list
    is ended.
    """
    cmd_response = command_registry.handle(state, user_input, emit=emit)
    if cmd_response is not None:
        return cmd_response

    if user_input:
        state.session.insert_text(user_input)
    state.session.press_enter()
    return render_page(state)


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "taskpage"))
    print(f"[{_ts_local()}] [{app_name}] Type lines to add them. Use /help for commands, /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = input(">>> ").rstrip("\n")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if user_input.strip().lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = handle_input(state, user_input, emit=emit)
        except ValueError as e:
            # Bad arguments (line out of range, unknown status, ...).
            logger.debug("Command rejected: %s", e)
            print(f"[!] {e}")
            continue
        except Exception:
            logger.exception("Command failed: %r", user_input)
            print("[!] Something went wrong; the page was not changed. See the log for details.")
            continue

        print(reply)
