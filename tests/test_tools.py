"""Tests for tool-call summaries."""

from session_feed.transcripts.tools import BASH_PREVIEW_CHARS, summarize_tool_use, tool_metadata


class TestFileTools:
    def test_read(self):
        assert summarize_tool_use("Read", {"file_path": "src/auth.ts"}) == "Read auth.ts"

    def test_read_uses_path_key(self):
        assert summarize_tool_use("Read", {"path": "/abs/dir/notes.md"}) == "Read notes.md"

    def test_read_without_path(self):
        assert summarize_tool_use("Read", {}) == "Read file"

    def test_read_trailing_slash(self):
        assert summarize_tool_use("Read", {"file_path": "src/"}) == "Read file"

    def test_write(self):
        assert summarize_tool_use("Write", {"file_path": "src/new-middleware.ts"}) == "Created new-middleware.ts"

    def test_write_without_path(self):
        assert summarize_tool_use("Write", {"content": "x"}) == "Created file"


class TestEdit:
    def test_added_lines(self):
        inp = {"file_path": "x.ts", "old_string": "a\nb", "new_string": "a\nb\nc"}
        assert summarize_tool_use("Edit", inp) == "Edited x.ts +1/-0 lines"

    def test_removed_lines(self):
        inp = {"file_path": "x.ts", "old_string": "a\nb\nc\nd", "new_string": "a"}
        assert summarize_tool_use("Edit", inp) == "Edited x.ts +0/-3 lines"

    def test_equal_length_replacement(self):
        inp = {"file_path": "src/app.ts", "old_string": "foo", "new_string": "bar"}
        assert summarize_tool_use("Edit", inp) == "Edited app.ts +0/-0 lines"

    def test_empty_old_string(self):
        inp = {"file_path": "x.ts", "old_string": "", "new_string": "one\ntwo"}
        assert summarize_tool_use("Edit", inp) == "Edited x.ts +2/-0 lines"

    def test_reordered_lines_report_no_change(self):
        inp = {"file_path": "x.ts", "old_string": "a\nb", "new_string": "b\na"}
        assert summarize_tool_use("Edit", inp) == "Edited x.ts +0/-0 lines"

    def test_missing_strings(self):
        assert summarize_tool_use("Edit", {}) == "Edited file +0/-0 lines"


class TestBash:
    def test_short_command(self):
        assert summarize_tool_use("Bash", {"command": "npm test"}) == "Ran npm test"

    def test_exactly_limit(self):
        command = "b" * BASH_PREVIEW_CHARS
        assert summarize_tool_use("Bash", {"command": command}) == f"Ran {command}"

    def test_long_command_truncated(self):
        summary = summarize_tool_use("Bash", {"command": "a" * 60})
        assert summary == f"Ran {'a' * 50}..."

    def test_truncation_shape(self):
        for length in (51, 80, 500):
            summary = summarize_tool_use("Bash", {"command": "x" * length})
            assert summary.startswith("Ran ")
            assert summary.endswith("...")
            assert len(summary) == len("Ran ") + 50 + len("...")

    def test_empty_command(self):
        assert summarize_tool_use("Bash", {"command": ""}) == "Ran command"
        assert summarize_tool_use("Bash", {}) == "Ran command"


class TestSearchTools:
    def test_glob(self):
        assert summarize_tool_use("Glob", {"pattern": "src/**/*.test.ts"}) == "Glob src/**/*.test.ts"

    def test_grep(self):
        assert summarize_tool_use("Grep", {"pattern": "validateToken"}) == "Grep validateToken"

    def test_missing_pattern(self):
        assert summarize_tool_use("Glob", {}) == "Glob pattern"
        assert summarize_tool_use("Grep", {}) == "Grep pattern"


class TestFallback:
    def test_bare_tool_name(self):
        assert summarize_tool_use("Agent", {"description": "Explore"}) == "Agent"

    def test_target_from_file_path(self):
        assert summarize_tool_use("NotebookEdit", {"file_path": "nb/analysis.ipynb"}) == "NotebookEdit on analysis.ipynb"

    def test_target_from_pattern(self):
        assert summarize_tool_use("LS", {"pattern": "*.py"}) == "LS on *.py"

    def test_file_path_preferred(self):
        inp = {"pattern": "p", "path": "dir/b", "file_path": "dir/a"}
        assert summarize_tool_use("Custom", inp) == "Custom on a"

    def test_non_string_target_skipped(self):
        assert summarize_tool_use("Custom", {"file_path": 3, "path": "x/y"}) == "Custom on y"


class TestMetadata:
    def test_verbatim(self):
        inp = {"file_path": "a", "extra": [1, 2]}
        assert tool_metadata("Read", inp) == {"toolName": "Read", "toolInput": inp}
