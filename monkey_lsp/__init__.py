"""Monkey Language Server package.

This package provides:
- A pygls-based Language Server for Monkey source files.
- An indexer that parses documents (without evaluating them) to collect
  parse diagnostics and top-level `let` bindings.
"""

__all__ = [
    "server",
    "indexer",
]
