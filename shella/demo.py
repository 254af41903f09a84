#!/usr/bin/env python3
"""Small demonstration shell built on :mod:`shella.shell`."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from shella.shell import Context, Shell, StopShell

DEFAULT_HOME_HISTORY = ".shella_history"


def build_shell() -> Shell:
    shell = Shell()

    @shell.command("echo", "Print the arguments separated by spaces")
    def echo(ctx: Context) -> None:
        print(" ".join(ctx.args[1:]))

    @shell.command("help", "List available commands")
    def help_command(ctx: Context) -> None:
        for line in ctx.shell.help_lines():
            print(line)

    @shell.command("exit", "Leave the shell")
    def exit_command(ctx: Context) -> None:
        ctx.shell.stop()

    def unknown(ctx: Context) -> None:
        if ctx.args[0]:
            print(f"Unknown command: {ctx.args[0]}")

    shell.set_handler(unknown)
    return shell


def _log_level(value: Optional[str]) -> int:
    level = logging.getLevelName((value or "WARNING").upper())
    return level if isinstance(level, int) else logging.WARNING


def main(argv: Optional[Sequence[str]] = None) -> int:
    args_list = list(sys.argv[1:] if argv is None else argv)
    parser = argparse.ArgumentParser(prog="shella-demo", add_help=True)
    parser.add_argument("--prompt", default=os.environ.get("SHELLA_PROMPT"), help="Prompt shown before each line")
    parser.add_argument(
        "--history-file",
        default=os.environ.get("SHELLA_HISTORY_FILE"),
        metavar="PATH",
        help=f"History file (default: ~/{DEFAULT_HOME_HISTORY})",
    )
    parser.add_argument("--log-level", default=os.environ.get("SHELLA_LOG_LEVEL"), help="Logging level")
    parser.add_argument("command", nargs=argparse.REMAINDER, help="Command to execute non-interactively")
    parsed = parser.parse_args(args_list)

    logging.basicConfig(level=_log_level(parsed.log_level), format="[%(asctime)s] %(levelname)s: %(message)s")

    shell = build_shell()
    if parsed.command:
        try:
            shell.execute(" ".join(parsed.command))
        except StopShell:
            pass
        return 0

    if parsed.prompt:
        shell.set_prompt(parsed.prompt)
    if parsed.history_file:
        shell.set_history_file(parsed.history_file)
    else:
        shell.set_home_history_file(DEFAULT_HOME_HISTORY)
    shell.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
