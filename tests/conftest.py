import pytest

from warpgen.environment.store import VariableStore


@pytest.fixture(autouse=True)
def warp_home(tmp_path, monkeypatch):
    """Keep settings and log files inside the test's temporary directory."""
    home = tmp_path / "warp-home"
    monkeypatch.setenv("WARP_HOME", str(home))
    monkeypatch.delenv("WARP_TEMPLATES_DIR", raising=False)
    monkeypatch.delenv("WARP_LOG_LEVEL", raising=False)
    monkeypatch.delenv("WARP_DEBUG", raising=False)
    monkeypatch.delenv("WARP_FILE_MODE", raising=False)
    return home


@pytest.fixture
def store():
    return VariableStore.load("PROJECT_NAME=demo\nPROJECT_TYPE=python\nUSE_DOCKER=true\n")
