"""Embeddable interactive command shell.

A :class:`Shell` reads lines from a line source, turns each one into a
:class:`Context` and dispatches it to the first registered :class:`Command`
whose name matches the first argument, or to the default handler.
"""

from __future__ import annotations

import dataclasses
import logging
import sys
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional

from shella.line_source import (
    LineReader,
    LineSource,
    LineSourceConfig,
    LineSourceError,
    ReadSignal,
)
from shella.paths import home_history_path

LOGGER = logging.getLogger("shella.shell")

Handler = Callable[["Context"], None]
InterruptHandler = Callable[[], None]
LineSourceFactory = Callable[[LineSourceConfig], LineSource]

_LINE_TERMINATORS = str.maketrans("", "", "\r\n")


class StopShell(Exception):
    """Raised by :meth:`Shell.stop` to leave :meth:`Shell.run` without exiting."""


# ---------------------------------------------------------------------------
# Context and commands
# ---------------------------------------------------------------------------


@dataclass
class Context:
    input: str
    args: List[str]
    shell: Optional["Shell"] = field(default=None, repr=False, compare=False)

    @classmethod
    def from_line(cls, line: str, shell: Optional["Shell"] = None) -> "Context":
        cleaned = line.translate(_LINE_TERMINATORS)
        return cls(input=cleaned, args=cleaned.split(" "), shell=shell)


@dataclass
class Command:
    name: str
    help: str
    handler: Handler


class CommandRegistry:
    """Commands in registration order; lookups return the first match."""

    def __init__(self) -> None:
        self._commands: List[Command] = []

    def add(self, command: Command) -> None:
        self._commands.append(command)

    def find(self, name: str) -> Optional[Command]:
        for command in self._commands:
            if command.name == name:
                return command
        return None

    def names(self) -> List[str]:
        return [command.name for command in self._commands]

    def __iter__(self) -> Iterator[Command]:
        return iter(self._commands)

    def __len__(self) -> int:
        return len(self._commands)


# ---------------------------------------------------------------------------
# Built-in defaults
# ---------------------------------------------------------------------------


def default_handler(ctx: Context) -> None:
    print("Default handler must be replaced!")


def default_interrupt() -> None:
    print("\rBye!")
    sys.exit(0)


# ---------------------------------------------------------------------------
# Shell
# ---------------------------------------------------------------------------


class Shell:
    def __init__(self, *, line_source_factory: Optional[LineSourceFactory] = None) -> None:
        self.commands = CommandRegistry()
        self.line_config = LineSourceConfig()
        self.reader: Optional[LineSource] = None
        self._handler: Handler = default_handler
        self._interrupt: InterruptHandler = default_interrupt
        self._line_source_factory = line_source_factory

    # -------------------- registration -----------------------
    def add_cmd(self, command: Command) -> None:
        self.commands.add(command)

    def add_command(self, name: str, help: str, handler: Handler) -> Command:
        command = Command(name=name, help=help, handler=handler)
        self.add_cmd(command)
        return command

    def command(self, name: str, help: str = "") -> Callable[[Handler], Handler]:
        """Register the decorated function as the handler for *name*."""

        def decorator(func: Handler) -> Handler:
            self.add_command(name, help, func)
            return func

        return decorator

    def help_lines(self) -> List[str]:
        return [f"{command.name:15s} - {command.help}" for command in self.commands]

    # -------------------- configuration ----------------------
    def set_handler(self, handler: Handler) -> None:
        self._handler = handler

    def set_interrupt_handler(self, handler: InterruptHandler) -> None:
        self._interrupt = handler

    def set_home_history_file(self, relative: str) -> None:
        self.set_history_file(home_history_path(relative))

    def set_history_file(self, path: str) -> None:
        self.line_config.history_file = path

    def set_prompt(self, prompt: str) -> None:
        self.line_config.prompt = prompt

    # -------------------- dispatch ---------------------------
    def handle(self, ctx: Context) -> None:
        command = self.commands.find(ctx.args[0])
        if command is not None:
            LOGGER.debug("Dispatching %r to command %r", ctx.input, command.name)
            command.handler(ctx)
            return
        LOGGER.debug("No command matches %r; using default handler", ctx.args[0])
        self._handler(ctx)

    def execute(self, line: str) -> None:
        """Dispatch *line* as if it had been typed at the prompt."""

        self.handle(Context.from_line(line, self))

    def process(self, *args: str) -> None:
        """Hand *args* straight to the default handler, bypassing the registry."""

        self._handler(Context(input=" ".join(args), args=list(args), shell=self))

    def interrupt(self) -> None:
        self._interrupt()

    def stop(self) -> None:
        raise StopShell()

    # -------------------- REPL loop --------------------------
    def _open_reader(self) -> LineSource:
        config = dataclasses.replace(self.line_config)
        try:
            return (self._line_source_factory or LineReader)(config)
        except LineSourceError as exc:
            LOGGER.critical("Failed to initialise line source: %s", exc)
            sys.exit(1)

    def _read_context(self) -> Context:
        result = self.reader.read_line()
        if result.signal is ReadSignal.INTERRUPT:
            self.interrupt()
            return Context.from_line(result.text, self)
        if result.signal is ReadSignal.EOF:
            LOGGER.critical("End of input reached")
            sys.exit(1)
        if result.signal is ReadSignal.ERROR:
            LOGGER.critical("Failed to read input: %s", result.error)
            sys.exit(1)
        return Context.from_line(result.text, self)

    def run(self) -> None:
        """Read and dispatch lines until the process exits or :meth:`stop` is called."""

        if self.reader is None:
            self.reader = self._open_reader()
        LOGGER.debug("Shell loop started with %d command(s)", len(self.commands))
        try:
            while True:
                self.handle(self._read_context())
        except StopShell:
            LOGGER.debug("Shell loop stopped")


__all__ = [
    "Command",
    "CommandRegistry",
    "Context",
    "Handler",
    "InterruptHandler",
    "Shell",
    "StopShell",
    "default_handler",
    "default_interrupt",
]
