import pytest

from rocket.interpreter import Interpreter
from rocket.modules.loaders import MemoryLoader


@pytest.fixture(autouse=True)
def _clean_rocket_env(monkeypatch):
    # Keep tests independent of the developer's shell configuration
    for var in ("ROCKET_MAX_DEPTH", "ROCKET_VERSION", "ROCKET_INCLUDE_PATH"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def itp():
    """Interpreter with an empty in-memory loader and a fixed version."""
    return Interpreter(loader=MemoryLoader({}), version=lambda: "3.4.0")


@pytest.fixture
def project():
    """Build an Interpreter over an in-memory set of documents."""

    def _make(files, **kwargs):
        kwargs.setdefault("version", lambda: "3.4.0")
        return Interpreter(loader=MemoryLoader(files), **kwargs)

    return _make
