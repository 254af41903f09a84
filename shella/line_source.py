"""Terminal line source backed by the standard library ``readline`` module."""

from __future__ import annotations

import enum
import logging
import re
import readline
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional, Protocol, TextIO

LOGGER = logging.getLogger("shella.line_source")

DEFAULT_PROMPT = "\033[31m→ \033[0m"

_ANSI_ESCAPE = re.compile(r"(\x1b\[[0-9;]*[A-Za-z])")


class LineSourceError(RuntimeError):
    """Raised when the line source cannot be initialised."""


class ReadSignal(enum.Enum):
    OK = "ok"
    INTERRUPT = "interrupt"
    EOF = "eof"
    ERROR = "error"


@dataclass
class ReadResult:
    """Outcome of a single :meth:`LineSource.read_line` call."""

    text: str
    signal: ReadSignal = ReadSignal.OK
    error: Optional[BaseException] = None


@dataclass
class LineSourceConfig:
    """Options a line source is built from.

    ``history_file`` may be empty, in which case nothing is persisted.
    """

    prompt: str = DEFAULT_PROMPT
    history_file: str = ""
    interrupt_prompt: str = "^C"
    eof_prompt: str = "exit"
    history_search_fold: bool = True


class LineSource(Protocol):
    def read_line(self) -> ReadResult:
        ...


def _supports_search_fold() -> bool:
    # search-ignore-case first shipped in GNU readline 8.3; libedit lacks it.
    if "libedit" in (readline.__doc__ or ""):
        return False
    return getattr(readline, "_READLINE_VERSION", 0) >= 0x0803


def readline_prompt(prompt: str) -> str:
    """Mark ANSI escapes as zero-width so readline measures *prompt* correctly."""

    return _ANSI_ESCAPE.sub("\001\\1\002", prompt)


class LineReader:
    """Read one logical line per call from the terminal."""

    def __init__(
        self,
        config: LineSourceConfig,
        *,
        input_func: Callable[[str], str] = input,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.config = config
        self._input = input_func
        self._stream = stream
        self._prompt = readline_prompt(config.prompt)
        self._history_path: Optional[Path] = None

        # History is managed explicitly so it can be persisted line by line.
        if hasattr(readline, "set_auto_history"):
            readline.set_auto_history(False)
        if config.history_search_fold and _supports_search_fold():
            readline.parse_and_bind("set search-ignore-case on")
        if config.history_file:
            self._history_path = Path(config.history_file)
            try:
                self._history_path.parent.mkdir(parents=True, exist_ok=True)
                self._history_path.touch(exist_ok=True)
                readline.clear_history()
                readline.read_history_file(str(self._history_path))
            except (OSError, ValueError) as exc:
                raise LineSourceError(
                    f"Cannot load history file {self._history_path}: {exc}"
                ) from exc
            LOGGER.debug("Loaded history from %s", self._history_path)

    @property
    def history_path(self) -> Optional[Path]:
        return self._history_path

    def _echo(self, text: str) -> None:
        print(text, file=self._stream or sys.stdout)

    def read_line(self) -> ReadResult:
        try:
            text = self._input(self._prompt)
        except KeyboardInterrupt:
            self._echo(self.config.interrupt_prompt)
            return ReadResult("", ReadSignal.INTERRUPT)
        except EOFError:
            self._echo(self.config.eof_prompt)
            return ReadResult("", ReadSignal.EOF)
        except (OSError, ValueError) as exc:
            return ReadResult("", ReadSignal.ERROR, exc)
        self._remember(text)
        return ReadResult(text)

    def _remember(self, text: str) -> None:
        if not text.strip():
            return
        readline.add_history(text)
        if self._history_path is None:
            return
        try:
            readline.append_history_file(1, str(self._history_path))
        except OSError as exc:
            LOGGER.warning("Failed to append to history file %s: %s", self._history_path, exc)


__all__ = [
    "DEFAULT_PROMPT",
    "LineReader",
    "LineSource",
    "LineSourceConfig",
    "LineSourceError",
    "ReadResult",
    "ReadSignal",
    "readline_prompt",
]
