# Monkey: a small dynamically-typed scripting language.
#
# Pipeline: source -> Lexer -> tokens -> Parser -> Program (+ diagnostics)
#           -> evaluate(Program, Environment) -> Object
#
# Drivers call `parse` and must not `evaluate` a program whose diagnostic
# list is non-empty. `Interpreter` wraps both steps around a persistent
# Environment.

from monkey.reader.parser import parse
from monkey.evaluation.evaluator import evaluate
from monkey.types.environment import Environment
from monkey.interpreter import Interpreter

__version__ = "0.1.0"

__all__ = ["parse", "evaluate", "Environment", "Interpreter"]
