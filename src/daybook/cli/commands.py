# src/daybook/cli/commands.py

from __future__ import annotations

from collections.abc import Callable

from ..core.state import AppState
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

CommandHandler = Callable[[AppState, list[str]], str]


class CommandRegistry:
    """Simple slash-command registry used by front-ends (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def format_task_line(position: int, task: Task) -> str:
    suffix = "  (editing)" if task.is_editing else ""
    return f"{position:>3}. [{task.complete_marker}] {task.date:>10}  {task.text}{suffix}"


def render_tasks(store: TaskStore) -> str:
    if not len(store):
        return "No tasks yet. Type some text to add one."
    lines = [format_task_line(i, t) for i, t in enumerate(store.tasks, start=1)]
    left = store.incomplete_count
    lines.append(f"{left} item{'' if left == 1 else 's'} left")
    if not store.persisted:
        lines.append("(not saved: storage unavailable)")
    return "\n".join(lines)


def _task_at(state: AppState, args: list[str]) -> Task | str:
    """Resolve a 1-based list position; returns an error message on failure."""
    if not args:
        return "Missing task number."
    try:
        pos = int(args[0])
    except ValueError:
        return f"Not a task number: {args[0]}"
    tasks = state.task_store.tasks
    if pos < 1 or pos > len(tasks):
        return f"No task #{pos}."
    return tasks[pos - 1]


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_tasks(state.task_store)


def cmd_add(state: AppState, args: list[str]) -> str:
    task = state.task_store.add_task(" ".join(args))
    if task is None:
        return "Nothing to add."
    return f'Added "{task.text}" for {task.date}.'


def cmd_done(state: AppState, args: list[str]) -> str:
    task = _task_at(state, args)
    if isinstance(task, str):
        return task
    state.task_store.toggle_completion(task)
    return f'"{task.text}" marked {"done" if task.completed else "not done"}.'


def cmd_remove(state: AppState, args: list[str]) -> str:
    task = _task_at(state, args)
    if isinstance(task, str):
        return task
    if not state.task_store.remove_task(task):
        return "Task is already gone."
    return f'Removed "{task.text}".'


def cmd_edit(state: AppState, args: list[str]) -> str:
    task = _task_at(state, args)
    if isinstance(task, str):
        return task
    state.task_store.edit_task(task)
    return f'Editing "{task.text}". Use /save {args[0]} <new text> or /cancel {args[0]}.'


def cmd_save(state: AppState, args: list[str]) -> str:
    """
    /save <n>             -> commit current text
    /save <n> <new text>  -> replace text, then commit (blank text keeps the old one)
    """
    task = _task_at(state, args)
    if isinstance(task, str):
        return task
    store = state.task_store
    if not task.is_editing:
        store.edit_task(task)
    if len(args) > 1:
        task.text = " ".join(args[1:])
    store.save_editing(task)
    return f'Saved "{task.text}".'


def cmd_cancel(state: AppState, args: list[str]) -> str:
    task = _task_at(state, args)
    if isinstance(task, str):
        return task
    if not task.is_editing:
        return f'"{task.text}" is not being edited.'
    state.task_store.cancel_editing(task)
    return f'Edit cancelled, kept "{task.text}".'


def cmd_date(state: AppState, args: list[str]) -> str:
    """
    /date <n> <M/D/YYYY>      -> move a task to another day
    /date <n> /Date(<ms>)/    -> same, legacy epoch form
    """
    task = _task_at(state, args)
    if isinstance(task, str):
        return task
    if len(args) < 2:
        return "Usage: /date <n> <M/D/YYYY>"
    if not state.task_store.set_task_date(task, args[1]):
        return f"Unrecognized date: {args[1]}"
    return f'"{task.text}" moved to {task.date}.'


def cmd_left(state: AppState, args: list[str]) -> str:
    left = state.task_store.incomplete_count
    return f"{left} item{'' if left == 1 else 's'} left"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks sorted by date.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task for today: /add <text>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["x"])
registry.register("rm", cmd_remove, help_text="Remove a task: /rm <n>.", aliases=["del"])
registry.register("edit", cmd_edit, help_text="Start editing a task: /edit <n>.")
registry.register("save", cmd_save, help_text="Commit an edit: /save <n> [new text].")
registry.register("cancel", cmd_cancel, help_text="Cancel an edit: /cancel <n>.")
registry.register("date", cmd_date, help_text="Change a task date: /date <n> <M/D/YYYY>.")
registry.register("left", cmd_left, help_text="Count tasks not yet done.")
