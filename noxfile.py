import os
from pathlib import Path
import nox

# Reuse existing virtualenvs for faster runs
nox.options.reuse_existing_virtualenvs = True
nox.options.sessions = ["lint", "tests"]

# Environment variables to propagate
PASSED_ENV_VARS = [
    "DATABASE_URL",
    "SECRET_KEY",
    "ENVIRONMENT",
    "LOG_LEVEL",
    "INTAKE_CAPACITY_CHECK",
]


def _set_env(session):
    """
    Propagate database and test-related environment variables into the session.
    Also ensure the project root is on PYTHONPATH.
    """
    session.env["PYTHONPATH"] = str(Path.cwd())
    for var in PASSED_ENV_VARS:
        if var in os.environ:
            session.env[var] = os.environ[var]


@nox.session(name="lint")
def lint(session):
    """
    Code formatting, linting, and type-checks:
      - isort
      - black
      - flake8
      - mypy
    """
    _set_env(session)
    session.install("isort", "black", "flake8", "mypy")
    session.run("isort", "meetup/", "tests/")
    session.run("black", "meetup/", "tests/")
    session.run("flake8", "meetup/", "tests/")
    session.run("mypy", "meetup/")


@nox.session(name="tests")
def tests(session):
    """
    Run unit and integration tests against in-memory SQLite.
    Pass positional args to target specific tests.
    Usage:
      nox -s tests
      nox -s tests -- tests/unit/test_services/test_participation.py
    """
    _set_env(session)
    session.install("-e", ".[test]")
    tests = session.posargs or ["tests/unit", "tests/integration"]
    session.run(
        "pytest",
        *tests,
        "-vv",
        "--tb=short",
        "--cov=meetup",
        "--cov-report=term-missing",
        "--cov-fail-under=80",
    )


@nox.session(name="postgres")
def postgres(session):
    """
    Run the concurrency tests against a throwaway PostgreSQL container.
    Requires Docker.
    """
    _set_env(session)
    session.install("-e", ".[test]")
    session.run("pytest", "tests/postgres", "-vv", "--tb=short", "-m", "postgres")
