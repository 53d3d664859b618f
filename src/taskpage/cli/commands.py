# src/taskpage/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..dates import format_date, resolve_keyword
from ..items.models import ItemType, TaskStatus
from ..items.mutation import WritableItem
from ..text.indentation import IndentMode
from ..text.lines import cursor_in_line

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

CURSOR_MARK = "|"


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /show, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._raw: set[str] = set()
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        *,
        raw_args: bool = False,
    ) -> None:
        """
        `raw_args` hands the handler everything after the command name as a
        single, unsplit argument (whitespace preserved).
        """
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler
        if raw_args:
            self._raw.update(n.lower() for n in (name, *aliases))

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        head, _, rest = line[1:].partition(" ")
        if not head.strip():
            return "Empty command. Use /help to list available commands."

        name = head.strip().lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        args = [rest] if name in self._raw else rest.split()

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _int_arg(value: str, what: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{what} must be a number, got {value!r}") from None


def render_page(state: AppState) -> str:
    """Numbered page listing; selected lines get '>', the cursor shows as '|'."""
    session = state.session
    if not session.text:
        return "(empty page)"

    first, last = session.selected_lines()
    collapsed = session.selection_end is None
    cursor_line = session.current_line()
    column = cursor_in_line(session.text, session.cursor)

    out: list[str] = []
    for i, line in enumerate(session.lines()):
        shown = line.replace("\t", "    ")
        if collapsed and i == cursor_line:
            before = line[:column].replace("\t", "    ")
            shown = before + CURSOR_MARK + line[column:].replace("\t", "    ")
        mark = ">" if first <= i <= last else " "
        out.append(f"{mark}{i:>3} {shown}")
    return "\n".join(out)


def _status_from_arg(arg: str) -> TaskStatus:
    key = arg.strip()
    by_char = TaskStatus.from_char(key)
    if by_char is not None:
        return by_char
    aliases = {
        "done": TaskStatus.COMPLETED,
        "progress": TaskStatus.IN_PROGRESS,
        "inprogress": TaskStatus.IN_PROGRESS,
        "open": TaskStatus.INCOMPLETE,
        "todo": TaskStatus.INCOMPLETE,
    }
    lowered = key.lower().replace("_", "").replace("-", "")
    if lowered in aliases:
        return aliases[lowered]
    for status in TaskStatus:
        if status.value.lower() == lowered:
            return status
    raise ValueError(f"Unknown status: {arg!r}")


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_show(state: AppState, args: list[str]) -> str:
    return render_page(state)


def cmd_items(state: AppState, args: list[str]) -> str:
    """Parsed view of every line: type, status and due date."""
    pattern = str(getattr(state.settings, "display_date_format", "YYYY-MM-DD"))
    out: list[str] = []
    for i, item in enumerate(state.session.items()):
        parts = [f"{i:>3}", item.type.value]
        if item.status is not None:
            parts.append(item.status.value)
        if item.due_date is not None:
            parts.append(f"due {format_date(item.due_date, pattern)}")
        out.append("  ".join(parts))
    return "\n".join(out) if out else "(empty page)"


def cmd_goto(state: AppState, args: list[str]) -> str:
    """
    /goto LINE         -> cursor at end of LINE
    /goto LINE COLUMN  -> cursor at COLUMN on LINE
    """
    if not args:
        return "Usage: /goto LINE [COLUMN]"
    line = _int_arg(args[0], "LINE")
    column = _int_arg(args[1], "COLUMN") if len(args) > 1 else None
    state.session.move_cursor(line, column)
    return render_page(state)


def cmd_select(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /select FIRST [LAST]"
    first = _int_arg(args[0], "FIRST")
    last = _int_arg(args[1], "LAST") if len(args) > 1 else first
    state.session.select_lines(first, last)
    return render_page(state)


def cmd_type(state: AppState, args: list[str]) -> str:
    """Insert text at the cursor without pressing Enter. '\\t' inserts a tab."""
    text = args[0] if args else ""
    state.session.insert_text(text.replace("\\t", "\t"))
    return render_page(state)


def cmd_enter(state: AppState, args: list[str]) -> str:
    state.session.press_enter()
    return render_page(state)


def cmd_status(state: AppState, args: list[str]) -> str:
    """
    /status NAME -> set the status of the selected tasks
    NAME is a status name (completed, inProgress, ...) or its marker character.
    """
    if not args:
        names = ", ".join(s.value for s in TaskStatus)
        return f"Usage: /status NAME ({names})"
    status = _status_from_arg(args[0])

    def apply(item: WritableItem) -> None:
        item.status = status

    changed = state.session.mutate_selected(apply)
    return f"Updated {changed} line(s).\n{render_page(state)}"


def cmd_due(state: AppState, args: list[str]) -> str:
    """
    /due DATE  -> set the due date of the selected tasks
    DATE is YYYY-MM-DD, today, tomorrow, nextweek or none.
    """
    if not args:
        return "Usage: /due YYYY-MM-DD | today | tomorrow | nextweek | none"
    new_date = None if args[0].lower() == "none" else resolve_keyword(args[0])

    def apply(item: WritableItem) -> None:
        item.due_date = new_date

    changed = state.session.mutate_selected(apply)
    return f"Updated {changed} line(s).\n{render_page(state)}"


def cmd_kind(state: AppState, args: list[str]) -> str:
    """/kind note | heading | task"""
    if not args:
        return "Usage: /kind note | heading | task"
    try:
        kind = ItemType(args[0].lower())
    except ValueError:
        return "Usage: /kind note | heading | task"

    def apply(item: WritableItem) -> None:
        item.type = kind

    changed = state.session.mutate_selected(apply)
    return f"Updated {changed} line(s).\n{render_page(state)}"


def cmd_indent(state: AppState, args: list[str]) -> str:
    state.session.indent_selection(IndentMode.INDENT)
    return render_page(state)


def cmd_outdent(state: AppState, args: list[str]) -> str:
    state.session.indent_selection(IndentMode.OUTDENT)
    return render_page(state)


def cmd_sort(state: AppState, args: list[str]) -> str:
    if not state.session.sort():
        return "Already sorted."
    return render_page(state)


def cmd_clear(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if emit:
        emit("Clearing page...")
    state.session.clear()
    logger.debug("Page cleared")
    return "(empty page)"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("show", cmd_show, help_text="Show the page with line numbers and cursor.")
registry.register("items", cmd_items, help_text="Show how each line is parsed.")
registry.register("goto", cmd_goto, help_text="Move the cursor: /goto LINE [COLUMN].")
registry.register("select", cmd_select, help_text="Select whole lines: /select FIRST [LAST].")
registry.register("type", cmd_type, help_text="Insert text at the cursor: /type TEXT.", raw_args=True)
registry.register("enter", cmd_enter, help_text="Press Enter (continues lists).")
registry.register("status", cmd_status, help_text="Set task status on selected lines.")
registry.register("due", cmd_due, help_text="Set or clear due date on selected tasks.")
registry.register("kind", cmd_kind, help_text="Change line type: /kind note | heading | task.")
registry.register("indent", cmd_indent, help_text="Indent selected lines by one tab.")
registry.register("outdent", cmd_outdent, help_text="Outdent selected lines by one tab.")
registry.register("sort", cmd_sort, help_text="Sort tasks by due date and status.")
registry.register("clear", cmd_clear, help_text="Start over with an empty page.")
