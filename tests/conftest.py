import pytest

from monkey.evaluation.evaluator import evaluate
from monkey.reader.parser import parse
from monkey.types.environment import Environment

# Shared fixtures: a fresh root Environment per test, and `run`, which parses
# a snippet (failing the test on any parse diagnostic) and evaluates it.


@pytest.fixture
def env():
    return Environment()


@pytest.fixture
def run(env):
    def _run(source: str):
        program, errors = parse(source)
        assert errors == [], f"parse errors for {source!r}: {errors}"
        return evaluate(program, env)

    return _run
