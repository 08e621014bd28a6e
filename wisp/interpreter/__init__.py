from __future__ import annotations

import logging
from typing import Iterable, Optional

from wisp import LispValue
from wisp.evaluation.evaluator import evaluate_all
from wisp.reader.parser import parse
from wisp.types.environment import Environment

# Reserved variable holding the process's command-line arguments.
ARGS_NAME = "args"


def run(source: str, env: Environment) -> LispValue:
    """Parse `source` and evaluate every top-level form in `env`.

    All but the last form are evaluated for their effects; the last form's
    value is returned (Unit for an empty program). Raises the same errors as
    evaluation, plus MalformedProgram from the reader.
    """
    return evaluate_all(parse(source), env)


class Interpreter:
    """
    Orchestrates reading and evaluating Wisp code.
    Maintains one root Environment across calls.
    """

    def __init__(self, argv: Optional[Iterable[str]] = None):
        self._logger = logging.getLogger("Interpreter")
        self.env: Environment = Environment()
        self.env.set(ARGS_NAME, [str(a) for a in (argv or [])])

    def eval(self, code: str) -> LispValue:
        self._logger.debug("evaluating %d characters", len(code))
        return run(code, self.env)

    def eval_file(self, path: str) -> LispValue:
        with open(path, "r", encoding="utf-8") as f:
            code = f.read()
        self._logger.debug("running file %s", path)
        return self.eval(code)
