"""One-line summaries of agent tool calls."""

from __future__ import annotations

BASH_PREVIEW_CHARS = 50


def _basename(value: str) -> str:
    return value.rsplit("/", 1)[-1]


def _str_field(inp: dict, *keys: str) -> str:
    """Return the first of ``keys`` holding a string, or ''."""
    for key in keys:
        value = inp.get(key)
        if isinstance(value, str):
            return value
    return ""


def _filename(inp: dict) -> str:
    return _basename(_str_field(inp, "file_path", "path")) or "file"


def _line_count(text: str) -> int:
    return text.count("\n") + 1 if text else 0


def _edit_delta(inp: dict) -> tuple[int, int]:
    """Crude (added, removed) line counts from old/new string lengths."""
    old_lines = _line_count(_str_field(inp, "old_string"))
    new_lines = _line_count(_str_field(inp, "new_string"))
    return max(0, new_lines - old_lines), max(0, old_lines - new_lines)


def _bash_preview(command: str) -> str:
    if len(command) > BASH_PREVIEW_CHARS:
        return command[:BASH_PREVIEW_CHARS] + "..."
    return command


def summarize_tool_use(tool: str, inp: dict) -> str:
    """Create a one-line summary of a tool call."""
    if tool == "Read":
        return f"Read {_filename(inp)}"
    elif tool == "Edit":
        added, removed = _edit_delta(inp)
        return f"Edited {_filename(inp)} +{added}/-{removed} lines"
    elif tool == "Write":
        return f"Created {_filename(inp)}"
    elif tool == "Bash":
        return f"Ran {_bash_preview(_str_field(inp, 'command')) or 'command'}"
    elif tool in ("Glob", "Grep"):
        return f"{tool} {_str_field(inp, 'pattern') or 'pattern'}"
    else:
        target = _basename(_str_field(inp, "file_path", "path", "pattern"))
        return f"{tool} on {target}" if target else tool


def tool_metadata(tool: str, inp: dict) -> dict:
    return {"toolName": tool, "toolInput": inp}
