"""Config file for NOX."""

import nox


@nox.session
def run_tests(session: nox.Session):
    """Run tests using pytest."""
    session.install(".[test]")
    session.run("pytest", "tests")
