"""Shared test fixtures for all test modules."""

import pytest
import structlog

from surface_formatter.expression import PythonExpressionCanonicalizer


class StubCanonicalizer:
    """Canonicalizer that records its input and returns a fixed result.

    With no result configured, the input is returned unchanged.
    """

    def __init__(self, result: str | None = None):
        self.result = result
        self.calls: list[str] = []

    def canonicalize(self, code: str) -> str:
        self.calls.append(code)
        return code if self.result is None else self.result


@pytest.fixture
def canonicalizer():
    """Default Python expression canonicalizer."""
    return PythonExpressionCanonicalizer()


@pytest.fixture
def stub_canonicalizer():
    """Factory for StubCanonicalizer instances."""
    return StubCanonicalizer


@pytest.fixture(autouse=True)
def isolated_logging(tmp_path, monkeypatch):
    """
    Keep log files out of the user's cache directory.

    CLI tests call configure_logging(); point it at a per-test directory and
    restore structlog's defaults afterwards.
    """
    monkeypatch.setenv("SURFACE_FORMATTER_LOG_DIR", str(tmp_path / "logs"))
    yield
    structlog.reset_defaults()
