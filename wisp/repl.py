"""Command-line driver for Wisp: an interactive REPL and a batch runner.

    wisp                 start the REPL
    wisp -i              start the REPL
    wisp -f FILE [ARGS]  run a file
    wisp -c CODE [ARGS]  run a string of code

Remaining arguments are bound to `args` as a list of strings.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Optional, TextIO

from wisp.config import get_prompt, get_recursion_limit
from wisp.errors import WispError
from wisp.interpreter import Interpreter
from wisp.types.value import debug, render_scope

QUIT_COMMANDS = ("!quit", "!q")
ENV_COMMANDS = ("!env", "!e")
EXPORT_COMMANDS = ("!export", "!x")


class Repl:
    """Reads one line at a time and evaluates it as a complete program."""

    def __init__(
        self,
        interp: Interpreter,
        read_line: Callable[[str], str] = input,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ):
        self._logger = logging.getLogger("Repl")
        self.interp = interp
        self.read_line = read_line
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        # Lines that evaluated without error, for !export
        self.history: list[str] = []

    def eval_line(self, line: str) -> None:
        try:
            result = self.interp.eval(line)
        except WispError as e:
            self._logger.debug("evaluation failed: %s", e.message)
            print(e.description(), file=self.err)
            return
        except RecursionError:
            print("error: maximum recursion depth exceeded", file=self.err)
            return
        print(f" => {debug(result)}", file=self.out)
        self.history.append(line)

    def export(self) -> None:
        filename = self.read_line("File to export to: ")
        with open(filename, "w", encoding="utf-8") as f:
            f.write("".join(line + "\n" for line in self.history))

    def loop(self) -> None:
        try:
            import readline as _  # noqa: F401  (line editing when available)
        except ImportError:
            pass

        prompt = get_prompt()
        while True:
            try:
                line = self.read_line(prompt)
            except (EOFError, KeyboardInterrupt):
                print(file=self.out)
                break
            if line in QUIT_COMMANDS:
                break
            elif line in ENV_COMMANDS:
                print(render_scope(self.interp.env.vars), file=self.out)
            elif line in EXPORT_COMMANDS:
                self.export()
            elif line.strip():
                self.eval_line(line)


def run_batch(interp: Interpreter, code: str, err: Optional[TextIO] = None) -> int:
    """Evaluate a whole program; report the first error and return a status code."""
    err = err or sys.stderr
    try:
        interp.eval(code)
    except WispError as e:
        print(e.description(), file=err)
        return 1
    except RecursionError:
        print("error: maximum recursion depth exceeded", file=err)
        return 1
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="wisp", description="Run Wisp programs.")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("-i", "--interactive", action="store_true", help="start the REPL (default)")
    mode.add_argument("-f", "--file", help="run the program in FILE")
    mode.add_argument("-c", "--code", help="run the program given as a string")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    parser.add_argument("args", nargs="*", help="arguments bound to `args`")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    options = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=options.log_level.upper())

    limit = get_recursion_limit()
    if limit is not None:
        sys.setrecursionlimit(limit)

    interp = Interpreter(argv=options.args)
    if options.file is not None:
        try:
            with open(options.file, "r", encoding="utf-8") as f:
                code = f.read()
        except OSError as e:
            print(f"error: could not open file {options.file}: {e.strerror}", file=sys.stderr)
            return 1
        return run_batch(interp, code)
    if options.code is not None:
        return run_batch(interp, options.code)

    Repl(interp).loop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
