"""Runtime environment for Monkey.

An Environment maps names to runtime values in one frame and links to the
enclosing frame through `outer`. The root frame belongs to one top-level
execution context; every function call gets a fresh frame whose `outer` is
the environment the function closed over, not the caller's.

Frames are shared: several closures and child frames may reference the same
Environment, and a function bound by name in its own defining frame forms a
reference cycle with it. Both are left to Python's reference counting and
cycle collector.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from monkey.types.objects import Object


class Environment:
    """Chained mapping from names to Monkey values."""

    __slots__ = ("store", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.store: dict[str, Object] = {}
        self.outer: Environment | None = outer

    @classmethod
    def enclosed(cls, outer: Environment) -> Environment:
        """Create a new frame whose lookups fall back to `outer`."""
        return cls(outer=outer)

    def get(self, name: str) -> Optional[Object]:
        """Look up `name` locally, then along the outer chain; None if unbound."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Object) -> Object:
        """Bind `name` in this frame only; outer bindings are shadowed, never changed."""
        self.store[name] = value
        return value

    def __contains__(self, name: str) -> bool:
        return self.get(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v.inspect()}" for k, v in self.store.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env: Optional[Environment] = self
            first = True
            while env is not None:
                if not first:
                    buffer.write(" -> ")
                env._write_vars(buffer)
                first = False
                env = env.outer
            buffer.write(">")
            return buffer.getvalue()
