"""Nox session management for the Madness Index quality pipeline.

Running ``nox`` executes Ruff (lint/format) -> Mypy (type check) -> Pytest (tests).
Individual sessions can be invoked with ``nox -s <session>``.
"""

from __future__ import annotations

import nox

nox.options.sessions = ["lint", "typecheck", "tests"]


@nox.session(python=False)
def lint(session: nox.Session) -> None:
    """Run Ruff linting with auto-fix and format checking."""
    session.run("ruff", "check", ".", "--fix")
    session.run("ruff", "format", "--check", ".")


@nox.session(python=False)
def typecheck(session: nox.Session) -> None:
    """Run mypy strict type checking on the package and its tests."""
    session.run("mypy", "--strict", "--show-error-codes", "src/madness_index", "tests")


@nox.session(python=False)
def tests(session: nox.Session) -> None:
    """Run the pytest suite; extra arguments go straight to pytest (e.g. ``-m smoke``)."""
    session.run("pytest", "--tb=short", *session.posargs)
