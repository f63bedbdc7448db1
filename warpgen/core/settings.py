from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_TEMPLATES = Path(__file__).resolve().parent.parent / "templates_data"


class WarpSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="WARP_", case_sensitive=False)

    home: Path = Path.home() / ".warp"
    log_level: str = "info"
    debug: bool = False
    templates_dir: Path = BUNDLED_TEMPLATES
    template_suffix: str = ".template"
    file_mode: int = 0o644

    @field_validator("file_mode", mode="before")
    @classmethod
    def parse_octal_mode(cls, value: Any) -> Any:
        """Read string modes such as ``WARP_FILE_MODE=755`` as octal."""
        if isinstance(value, str):
            return int(value, 8)
        return value

    @property
    def log_dir(self) -> Path:
        return self.home / "logs"
