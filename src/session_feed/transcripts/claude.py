"""Parse Claude Code transcript JSONL files into a normalized message feed."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from enum import Enum
from pathlib import Path

from . import MessageType, ParsedMessage, ParseResult
from .reader import parse_entries, read_from_offset, safe_lines
from .tools import summarize_tool_use, tool_metadata

_LOGGER = logging.getLogger(__name__)

INTERRUPT_PREFIX = "[Request interrupted"
PERMISSION_FALLBACK = "Permission requested"
INPUT_FALLBACK = "Waiting for input"
UNKNOWN_TOOL = "unknown"


class EntryKind(Enum):
    PERMISSION_REQUEST = "permission_request"
    INPUT_REQUEST = "input_request"
    TOOL_USE = "tool_use"
    ASSISTANT = "assistant"
    USER = "user"


# --- Content blocks ---


def _message(entry: dict) -> dict:
    msg = entry.get("message")
    return msg if isinstance(msg, dict) else {}


def _blocks(content: object) -> list[dict]:
    if not isinstance(content, list):
        return []
    return [block for block in content if isinstance(block, dict)]


def _has_block(content: object, block_type: str) -> bool:
    return any(block.get("type") == block_type for block in _blocks(content))


def extract_text(content: object) -> str | None:
    """Extract text from message content.

    A plain string is returned as-is. For a list of blocks, text blocks are
    joined with newlines; None means the list held no text blocks at all.
    """
    if isinstance(content, str):
        return content

    parts = [
        block["text"]
        for block in _blocks(content)
        if block.get("type") == "text" and isinstance(block.get("text"), str)
    ]
    return "\n".join(parts) if parts else None


def extract_tool_uses(content: object) -> list[tuple[str, dict]]:
    """Collect ``(name, input)`` for each tool_use block, in block order."""
    tools = []
    for block in _blocks(content):
        if block.get("type") != "tool_use" or not isinstance(block.get("name"), str):
            continue
        inp = block.get("input")
        tools.append((block["name"], inp if isinstance(inp, dict) else {}))
    return tools


# --- User message filtering ---


def is_internal_user_entry(entry: dict) -> bool:
    """True for user entries that are plumbing rather than human input.

    Covers meta bookkeeping, tool results fed back to the model, and the
    interrupt notices injected when the operator stops a turn.
    """
    if entry.get("isMeta"):
        return True

    content = _message(entry).get("content")
    if _has_block(content, "tool_result"):
        return True

    text = extract_text(content)
    return bool(text) and text.startswith(INTERRUPT_PREFIX)


# --- Classification ---


def _is_permission_request(entry: dict) -> bool:
    return entry.get("type") == "permission_request" or entry.get("subtype") == "permission_request"


def _is_input_request(entry: dict) -> bool:
    return entry.get("subtype") == "input_request"


def _is_tool_use(entry: dict) -> bool:
    return entry.get("type") == "tool_use"


def _is_assistant(entry: dict) -> bool:
    return entry.get("type") == "assistant" and _message(entry).get("role") == "assistant"


def _is_user(entry: dict) -> bool:
    return entry.get("type") == "user" and _message(entry).get("role") == "user"


# First match wins.
CLASSIFIERS: list[tuple[Callable[[dict], bool], EntryKind]] = [
    (_is_permission_request, EntryKind.PERMISSION_REQUEST),
    (_is_input_request, EntryKind.INPUT_REQUEST),
    (_is_tool_use, EntryKind.TOOL_USE),
    (_is_assistant, EntryKind.ASSISTANT),
    (_is_user, EntryKind.USER),
]


def classify_entry(entry: dict) -> EntryKind | None:
    """Return the kind of the first matching classifier, or None to drop the entry."""
    for predicate, kind in CLASSIFIERS:
        if predicate(entry):
            return kind
    return None


# --- Handlers: each returns the (possibly empty) messages for one entry ---


def _tool_summary(tool: str, inp: dict, timestamp: str) -> ParsedMessage:
    return ParsedMessage(
        type=MessageType.TOOL_SUMMARY,
        content=summarize_tool_use(tool, inp),
        timestamp=timestamp,
        metadata=tool_metadata(tool, inp),
    )


def _permission_messages(entry: dict, timestamp: str) -> list[ParsedMessage]:
    prompt = entry.get("permission_prompt")
    if not isinstance(prompt, str) or not prompt:
        prompt = extract_text(_message(entry).get("content")) or PERMISSION_FALLBACK
    return [ParsedMessage(type=MessageType.PERMISSION_REQUEST, content=prompt, timestamp=timestamp)]


def _input_messages(entry: dict, timestamp: str) -> list[ParsedMessage]:
    question = extract_text(_message(entry).get("content")) or INPUT_FALLBACK
    return [ParsedMessage(type=MessageType.INPUT_REQUEST, content=question, timestamp=timestamp)]


def _tool_use_messages(entry: dict, timestamp: str) -> list[ParsedMessage]:
    tool = entry.get("tool_name")
    if not isinstance(tool, str) or not tool:
        tool = UNKNOWN_TOOL
    inp = entry.get("tool_input")
    return [_tool_summary(tool, inp if isinstance(inp, dict) else {}, timestamp)]


def _assistant_messages(entry: dict, timestamp: str) -> list[ParsedMessage]:
    content = _message(entry).get("content")

    # Tool summaries always precede the narrating text of the same entry.
    messages = [_tool_summary(tool, inp, timestamp) for tool, inp in extract_tool_uses(content)]

    text = extract_text(content)
    if text:
        messages.append(ParsedMessage(type=MessageType.TEXT_RESPONSE, content=text, timestamp=timestamp))
    return messages


def _user_messages(entry: dict, timestamp: str) -> list[ParsedMessage]:
    if is_internal_user_entry(entry):
        return []

    content = _message(entry).get("content")
    text = extract_text(content)
    if not text:
        return []

    metadata = {"hasImages": True} if _has_block(content, "image") else {}
    return [ParsedMessage(type=MessageType.USER_MESSAGE, content=text, timestamp=timestamp, metadata=metadata)]


_HANDLERS: dict[EntryKind, Callable[[dict, str], list[ParsedMessage]]] = {
    EntryKind.PERMISSION_REQUEST: _permission_messages,
    EntryKind.INPUT_REQUEST: _input_messages,
    EntryKind.TOOL_USE: _tool_use_messages,
    EntryKind.ASSISTANT: _assistant_messages,
    EntryKind.USER: _user_messages,
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def entry_messages(entry: dict) -> list[ParsedMessage]:
    """Convert one decoded transcript entry into zero or more feed messages."""
    kind = classify_entry(entry)
    if kind is None:
        return []

    timestamp = entry.get("timestamp")
    if not isinstance(timestamp, str) or not timestamp:
        # Wall-clock time: ordering is only guaranteed for timestamped entries.
        timestamp = _now_iso()

    return _HANDLERS[kind](entry, timestamp)


# --- Public API ---


def parse_transcript(path: Path, from_byte: int = 0) -> ParseResult:
    """Parse a Claude Code .jsonl transcript into feed messages.

    Never raises for missing files, malformed lines or unfamiliar entries;
    those degrade to an empty or partial result.

    Args:
        path: Path to the transcript .jsonl file.
        from_byte: Resume offset, normally the ``bytes_read`` of the previous call.

    Returns:
        ParseResult with messages in source order and the offset for the next call.
    """
    read = read_from_offset(Path(path), from_byte)
    if read is None:
        return ParseResult(messages=[], bytes_read=0)

    content, bytes_read = read
    if not content:
        return ParseResult(messages=[], bytes_read=bytes_read)

    messages: list[ParsedMessage] = []
    for entry in parse_entries(safe_lines(content, from_byte)):
        messages.extend(entry_messages(entry))

    _LOGGER.debug("Parsed %d message(s) from %s up to byte %d", len(messages), path, bytes_read)
    return ParseResult(messages=messages, bytes_read=bytes_read)


def find_recent_transcripts(projects_dir: Path, max_age_hours: int = 24) -> list[Path]:
    """Find Claude Code transcript files modified within max_age_hours, newest first."""
    cutoff = datetime.now(timezone.utc) - timedelta(hours=max_age_hours)
    transcripts = []

    for jsonl in find_all_transcripts(projects_dir):
        mtime = datetime.fromtimestamp(jsonl.stat().st_mtime, tz=timezone.utc)
        if mtime > cutoff:
            transcripts.append(jsonl)

    return sorted(transcripts, key=lambda p: p.stat().st_mtime, reverse=True)


def find_all_transcripts(projects_dir: Path) -> list[Path]:
    """Every session log one directory below ``projects_dir``, oldest first."""
    if not projects_dir.is_dir():
        return []
    sessions = [p for p in projects_dir.glob("*/*.jsonl") if p.is_file()]
    return sorted(sessions, key=lambda p: p.stat().st_mtime)
