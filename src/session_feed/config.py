"""Paths, defaults, and environment detection."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

_LOGGER = logging.getLogger(__name__)


def _xdg_data_home() -> Path:
    return Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def _default_state_dir() -> Path:
    override = os.environ.get("SESSION_FEED_HOME")
    if override:
        return Path(override)
    return _xdg_data_home() / "session-feed"


def _default_poll_interval() -> float:
    raw = os.environ.get("SESSION_FEED_POLL_INTERVAL", "")
    try:
        return float(raw) if raw else 2.0
    except ValueError:
        _LOGGER.warning("Ignoring invalid SESSION_FEED_POLL_INTERVAL=%r", raw)
        return 2.0


@dataclass
class Config:
    """Runtime configuration, resolved from env vars and defaults."""

    # Follow-mode offsets live here
    state_dir: Path = field(default_factory=_default_state_dir)

    # Claude Code paths
    claude_projects_dir: Path = field(default_factory=lambda: Path.home() / ".claude" / "projects")

    # Polling
    poll_interval: float = field(default_factory=_default_poll_interval)  # seconds

    # Session discovery
    max_age_hours: int = 24

    @property
    def cursor_path(self) -> Path:
        return self.state_dir / ".cursor.json"

    def ensure_state_dir(self) -> None:
        self.state_dir.mkdir(parents=True, exist_ok=True)

    # --- Cursor (byte offset) management ---

    def load_cursor(self) -> dict:
        """Load the bookmark file mapping transcript paths to byte offsets."""
        if not self.cursor_path.exists():
            return {}
        try:
            cursor = json.loads(self.cursor_path.read_text())
        except (OSError, json.JSONDecodeError) as exc:
            _LOGGER.warning("Ignoring unreadable cursor file %s: %s", self.cursor_path, exc)
            return {}
        return cursor if isinstance(cursor, dict) else {}

    def save_cursor(self, cursor: dict) -> None:
        self.ensure_state_dir()
        self.cursor_path.write_text(json.dumps(cursor, indent=2) + "\n")

    def get_offset(self, transcript: Path) -> int:
        offset = self.load_cursor().get(str(transcript), 0)
        return offset if isinstance(offset, int) and offset > 0 else 0

    def set_offset(self, transcript: Path, offset: int) -> None:
        cursor = self.load_cursor()
        cursor[str(transcript)] = offset
        self.save_cursor(cursor)
