from __future__ import annotations

import logging

from monkey import ast
from monkey.errors import MonkeyParseError
from monkey.evaluation.evaluator import evaluate
from monkey.reader.parser import parse
from monkey.types.environment import Environment
from monkey.types.objects import Object

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Parses and evaluates Monkey source against one long-lived Environment,
    so `let` bindings made by one call are visible to the next.
    """

    def __init__(self, env: Environment | None = None):
        self.env: Environment = env if env is not None else Environment()

    def parse(self, code: str) -> ast.Program:
        """Parse `code`, raising MonkeyParseError if there were any diagnostics."""
        program, errors = parse(code)
        if errors:
            logger.debug("rejecting input with %d parse error(s)", len(errors))
            raise MonkeyParseError(errors)
        return program

    def eval(self, code: str) -> Object:
        return self.eval_program(self.parse(code))

    def eval_program(self, program: ast.Program) -> Object:
        result = evaluate(program, self.env)
        logger.debug("evaluated %d statement(s) -> %s", len(program.statements), result.type)
        return result
