class MonkeyError(Exception):
    """ Base class for all host-level Monkey errors"""
    pass

class MonkeyParseError(MonkeyError):
    """ Raised when source with parse diagnostics is handed to the interpreter"""

    def __init__(self, errors: list[str]):
        super().__init__("\n".join(errors))
        self.errors = list(errors)

class MonkeyTypeError(MonkeyError):
    """ Raised when the evaluator is given something that is not an AST node"""

# Language-level failures (type mismatch, unknown identifier, ...) are not
# exceptions: they are monkey.types.objects.Error values returned by evaluate().
