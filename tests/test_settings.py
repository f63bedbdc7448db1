import pytest
from pydantic import ValidationError

from warpgen.core.settings import BUNDLED_TEMPLATES, WarpSettings


def test_defaults(warp_home):
    settings = WarpSettings()
    assert settings.file_mode == 0o644
    assert settings.templates_dir == BUNDLED_TEMPLATES
    assert settings.log_dir == warp_home / "logs"


def test_file_mode_from_env_is_octal(monkeypatch):
    monkeypatch.setenv("WARP_FILE_MODE", "755")
    assert WarpSettings().file_mode == 0o755


def test_invalid_file_mode_rejected(monkeypatch):
    monkeypatch.setenv("WARP_FILE_MODE", "9")
    with pytest.raises(ValidationError):
        WarpSettings()
