"""Incremental reading of append-only JSONL transcripts."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from pathlib import Path

_LOGGER = logging.getLogger(__name__)


def read_from_offset(path: Path, from_byte: int = 0) -> tuple[str, int] | None:
    """Read everything appended to ``path`` since ``from_byte``.

    Args:
        path: Path to the transcript .jsonl file.
        from_byte: Offset returned by the previous call (0 for a full read).

    Returns:
        ``(content, bytes_read)`` where ``bytes_read`` is the file size seen
        before reading, or None if the file is missing or unreadable.
    """
    from_byte = max(from_byte, 0)
    try:
        size = path.stat().st_size
        if size <= from_byte:
            return "", from_byte

        with path.open("rb") as fh:
            if from_byte == 0:
                raw = fh.read()
            else:
                fh.seek(from_byte)
                # The file may grow after stat(); stop at the size we reported.
                raw = fh.read(size - from_byte)
    except FileNotFoundError:
        return None
    except (OSError, ValueError) as exc:
        _LOGGER.warning("Failed to read transcript %s: %s", path, exc)
        return None

    return raw.decode("utf-8", errors="replace"), size


def safe_lines(content: str, from_byte: int = 0) -> Iterator[str]:
    """Yield the non-blank lines of ``content`` that are safe to parse.

    When resuming mid-file the first line may be the tail of a line that
    started before ``from_byte``, so everything up to the first newline is
    dropped.
    """
    if from_byte > 0:
        first_newline = content.find("\n")
        if first_newline >= 0:
            content = content[first_newline + 1:]

    for line in content.split("\n"):
        line = line.strip()
        if line:
            yield line


def parse_entries(lines: Iterator[str]) -> Iterator[dict]:
    """Decode each line as a JSON object, skipping anything else."""
    for line in lines:
        try:
            entry = json.loads(line)
        except json.JSONDecodeError as exc:
            _LOGGER.debug("Skipping malformed transcript line: %s", exc)
            continue
        if not isinstance(entry, dict):
            _LOGGER.debug("Skipping non-object transcript line: %s", type(entry).__name__)
            continue
        yield entry
