"""Read-only variable store loaded from ``KEY=VALUE`` text."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from pathlib import Path

from ..core.exceptions import ParseError

logger = logging.getLogger(__name__)


class VariableStore(Mapping[str, str]):
    """Ordered, immutable mapping of variable names to string values.

    Iteration order is first-insertion order; a later duplicate key replaces
    the value but keeps the original position.
    """

    def __init__(self, pairs: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(pairs or {})

    @classmethod
    def load(cls, text: str) -> VariableStore:
        """Parse line-oriented ``KEY=VALUE`` pairs.

        Comment lines, blank lines and lines without ``=`` are skipped. The
        value is everything after the first ``=``, kept verbatim.

        Args:
            text: Variables text

        Returns:
            Populated store
        """
        data: dict[str, str] = {}
        skipped = 0
        for line in text.split("\n"):
            stripped = line.lstrip()
            if not stripped or stripped.startswith("#"):
                continue
            if "=" not in line:
                skipped += 1
                continue
            key, value = line.split("=", 1)
            if not key:
                skipped += 1
                continue
            data[key] = value

        if skipped:
            logger.debug(f"Skipped {skipped} malformed variable line(s)")
        return cls(data)

    @classmethod
    def load_file(cls, path: Path) -> VariableStore:
        """Load a store from a UTF-8 variables file.

        Raises:
            ParseError: If the file cannot be read
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Cannot read variables file {path}: {e}") from e
        return cls.load(text)

    def get(self, key: str, default: str = "") -> str:  # type: ignore[override]
        return self._data.get(key, default)

    def merged(self, overrides: Mapping[str, str]) -> VariableStore:
        """Return a new store with ``overrides`` applied on top."""
        data = dict(self._data)
        data.update(overrides)
        return VariableStore(data)

    def dumps(self) -> str:
        return "".join(f"{key}={value}\n" for key, value in self._data.items())

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"VariableStore({self._data!r})"
