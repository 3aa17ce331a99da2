"""SAPF Language Server and REPL integration package.

This package provides:
- A pygls-based Language Server for SAPF (diagnostics, hover, completion,
  formatting and evaluation commands).
- A REPL manager that owns the sapf process evaluated code is sent to.
- The Session object tying configuration, REPL and function catalog together.

Note: the text algorithms themselves live in the `sapf` package and never
depend on a session.
"""

__all__ = [
    "server",
    "session",
    "repl",
]
