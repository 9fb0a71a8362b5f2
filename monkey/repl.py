"""Line-oriented read-eval-print loop for Monkey.

Each input line is parsed and evaluated against one Interpreter, so bindings
persist between lines. Lines with parse errors are reported and skipped.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

from monkey import ast
from monkey.config import get_log_level, get_prompt, get_recursion_limit
from monkey.interpreter import Interpreter
from monkey.reader.parser import parse
from monkey.types.objects import NULL

logger = logging.getLogger(__name__)

BANNER = """\
           __,__
  .--.  .-"     "-.  .--.
 / .. \\/  .-. .-.  \\/ .. \\
| |  '|  /   Y   \\  |'  | |
| \\   \\  \\ 0 | 0 /  /   / |
 \\ '- ,\\.-\"\"\"\"\"\"\"-./, -' /
  ''-' /_   ^ ^   _\\ '-''
       |  \\._   _./  |
       \\   \\ '~' /   /
        '._ '-=-' _.'
           '-----'
"""


def print_parser_errors(out: TextIO, errors: list[str]) -> None:
    out.write("Woops! We ran into some monkey business here!\n")
    out.write(" parser errors:\n")
    for msg in errors:
        out.write(f"\t{msg}\n")


def start(stdin: TextIO, stdout: TextIO, prompt: str | None = None) -> None:
    prompt = get_prompt() if prompt is None else prompt
    interp = Interpreter()
    while True:
        stdout.write(prompt)
        stdout.flush()
        line = stdin.readline()
        if not line:
            return

        program, errors = parse(line)
        if errors:
            print_parser_errors(stdout, errors)
            continue

        result = interp.eval_program(program)
        # a successful `let` line produces no output
        if (
            result is NULL
            and program.statements
            and isinstance(program.statements[-1], ast.LetStatement)
        ):
            continue
        stdout.write(result.inspect())
        stdout.write("\n")


def main() -> None:
    logging.basicConfig(level=get_log_level())
    limit = get_recursion_limit()
    if limit is not None:
        logger.info("setting recursion limit to %d", limit)
        sys.setrecursionlimit(limit)
    sys.stdout.write(BANNER)
    sys.stdout.write("Feel free to type in commands\n")
    start(sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()
