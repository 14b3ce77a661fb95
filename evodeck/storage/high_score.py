"""
High Score Store - A single persisted integer.
"""

from __future__ import annotations
from pathlib import Path
from typing import Annotated
import logging

from pydantic import Field, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

_HIGH_SCORE = TypeAdapter(Annotated[int, Field(ge=0)])


class HighScoreStore:
    """
    Loads and saves the best score.

    Absent or corrupt data reads as 0. With no path the value is kept
    in memory only.
    """

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path).expanduser() if path is not None else None
        self._value = 0

    def load(self) -> int:
        if self.path is None or not self.path.exists():
            return self._value
        try:
            self._value = _HIGH_SCORE.validate_json(self.path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.warning("Ignoring unreadable high score file %s: %s", self.path, e)
            self._value = 0
        return self._value

    def save(self, value: int):
        self._value = max(int(value), 0)
        if self.path is None:
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(str(self._value), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save high score to %s: %s", self.path, e)
