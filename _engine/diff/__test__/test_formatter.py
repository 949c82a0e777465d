from _engine.diff.formatter import (
    ContentLine,
    FileHeader,
    HunkHeader,
    OtherLine,
    classify_line,
    format_diff_as_markdown,
    has_code_changes,
    parse_file_heading,
)

RAW_DIFF = """diff --git a/src/app.py b/src/app.py
index 1111111..2222222 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,4 @@ def main():
 import os
-import sys
+import json
+import logging
@@ -10,2 +11,2 @@ class App:
-    x = 1
+    x = 2
diff --git a/README.md b/README.md
index 3333333..4444444 100644
--- a/README.md
+++ b/README.md
@@ -1 +1 @@
-old
+new
\\ No newline at end of file
"""


def fence_counts(formatted: str):
    lines = formatted.split("\n")
    return lines.count("```diff"), lines.count("```")


class TestClassifyLine:
    def test_file_header(self):
        assert classify_line("diff --git a/src/app.py b/src/app.py") == FileHeader("src/app.py")

    def test_hunk_header_keeps_context_separately(self):
        assert classify_line("@@ -1,3 +1,4 @@ def main():") == HunkHeader("def main():")

    def test_content_lines(self):
        assert classify_line("+added") == ContentLine("+added")
        assert classify_line("-removed") == ContentLine("-removed")
        assert classify_line(" context") == ContentLine(" context")

    def test_metadata_is_other(self):
        assert isinstance(classify_line("index 1111111..2222222 100644"), OtherLine)
        assert isinstance(classify_line("new file mode 100644"), OtherLine)
        assert isinstance(classify_line(""), OtherLine)


class TestFormatDiffAsMarkdown:
    def test_exact_output_for_single_hunk(self):
        raw = "diff --git a/a.py b/a.py\nindex 1..2 100644\n@@ -1 +1 @@\n-x\n+y\n"
        assert format_diff_as_markdown(raw) == "### File: a.py\n\n```diff\n-x\n+y\n```\n\n"

    def test_one_heading_per_file(self):
        formatted = format_diff_as_markdown(RAW_DIFF)
        assert formatted.count("### File: src/app.py\n") == 1
        assert formatted.count("### File: README.md\n") == 1
        assert formatted.index("### File: src/app.py") < formatted.index("### File: README.md")

    def test_hunk_boundary_closes_and_reopens_block(self):
        formatted = format_diff_as_markdown(RAW_DIFF)
        app_section = formatted.split("### File: README.md")[0]
        # ---/+++ lines, first hunk, second hunk
        assert app_section.count("```diff") == 3
        assert "+import logging\n```\n\n\n```diff\n-    x = 1\n" in app_section

    def test_hunk_context_and_metadata_are_dropped(self):
        formatted = format_diff_as_markdown(RAW_DIFF)
        assert "def main():" not in formatted
        assert "class App:" not in formatted
        assert "@@" not in formatted
        assert "index 1111111" not in formatted
        assert "No newline at end of file" not in formatted

    def test_content_lines_are_verbatim(self):
        formatted = format_diff_as_markdown(RAW_DIFF)
        for line in (" import os", "-import sys", "+import json", "-    x = 1", "+    x = 2", "-old", "+new"):
            assert f"\n{line}\n" in formatted

    def test_fences_are_balanced(self):
        for raw in (RAW_DIFF, "+dangling", "@@ -1 +1 @@\n+a", RAW_DIFF + "+trailing"):
            opened, closed = fence_counts(format_diff_as_markdown(raw))
            assert opened == closed

    def test_block_closed_at_end_of_input(self):
        formatted = format_diff_as_markdown("diff --git a/a.py b/a.py\n+only")
        assert formatted.endswith("+only\n```\n\n")

    def test_repeated_header_for_same_file_emits_no_new_heading(self):
        raw = (
            "diff --git a/a.py b/a.py\n@@ -1 +1 @@\n+one\n"
            "diff --git a/a.py b/a.py\n@@ -5 +5 @@\n+two\n"
        )
        formatted = format_diff_as_markdown(raw)
        assert formatted.count("### File: a.py") == 1
        assert fence_counts(formatted) == (2, 2)

    def test_path_revisited_after_another_file_gets_new_heading(self):
        raw = (
            "diff --git a/a.py b/a.py\n+one\n"
            "diff --git a/b.py b/b.py\n+two\n"
            "diff --git a/a.py b/a.py\n+three\n"
        )
        formatted = format_diff_as_markdown(raw)
        assert formatted.count("### File: a.py") == 2
        assert formatted.count("### File: b.py") == 1

    def test_empty_and_unparseable_input(self):
        assert format_diff_as_markdown("") == ""
        assert format_diff_as_markdown("not a diff\nat all\n") == ""

    def test_crlf_line_endings(self):
        formatted = format_diff_as_markdown("diff --git a/a.py b/a.py\r\n+x\r\n")
        assert formatted == "### File: a.py\n\n```diff\n+x\n```\n\n"


class TestHelpers:
    def test_parse_file_heading(self):
        assert parse_file_heading("### File: src/app.py\n") == "src/app.py"
        assert parse_file_heading("### File: ") is None
        assert parse_file_heading("+### File: nope") is None

    def test_has_code_changes(self):
        assert has_code_changes(RAW_DIFF)
        assert not has_code_changes("diff --git a/x b/x\nold mode 100644\nnew mode 100755\n")
        assert not has_code_changes("")
