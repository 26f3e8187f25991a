"""ContentBuffer access and file loader tests.

Covers bounds-checked line access, line splitting on real terminators only,
encoding fallbacks with BOM handling, and loader error reporting.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from termview.content import ContentBuffer, load_content, read_text, split_lines
from termview.errors import FileOpenError


class ContentBufferTests(unittest.TestCase):
    def test_line_access_is_bounds_checked(self) -> None:
        buffer = ContentBuffer(["a", "bc"])
        self.assertEqual(buffer.line_count, 2)
        self.assertEqual(len(buffer), 2)
        self.assertEqual(buffer.line(1), "bc")
        self.assertIsNone(buffer.line(2))
        self.assertIsNone(buffer.line(-1))
        self.assertEqual(buffer.line_length(5), 0)
        self.assertEqual(list(buffer), ["a", "bc"])

    def test_buffer_is_detached_from_source_list(self) -> None:
        lines = ["a"]
        buffer = ContentBuffer(lines)
        lines.append("b")
        self.assertEqual(buffer.line_count, 1)


class LoadContentTests(unittest.TestCase):
    def test_lines_are_split_without_terminators(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "notes.txt"
            path.write_bytes(b"first\r\nsecond\n\nlast")
            buffer = load_content(path)

        self.assertEqual(list(buffer), ["first", "second", "", "last"])

    def test_only_line_terminators_split_lines(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "source.c"
            path.write_bytes(b"int a;\n\x0c\nint b; /* x\x0by */\nend \xe2\x80\xa8 here\n")
            buffer = load_content(path)

        self.assertEqual(buffer.line_count, 4)
        self.assertEqual(
            list(buffer),
            ["int a;", "\x0c", "int b; /* x\x0by */", "end \u2028 here"],
        )

    def test_split_lines_handles_each_terminator_once(self) -> None:
        self.assertEqual(split_lines("a\r\nb\rc\nd"), ["a", "b", "c", "d"])
        self.assertEqual(split_lines("a\n"), ["a"])
        self.assertEqual(split_lines("a\n\n"), ["a", ""])
        self.assertEqual(split_lines("\x1c\x1d\x1e\x85"), ["\x1c\x1d\x1e\x85"])
        self.assertEqual(split_lines(""), [])

    def test_utf8_bom_is_dropped_from_first_line(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "bom.txt"
            path.write_bytes(b"\xef\xbb\xbfneedle\nnext\n")
            buffer = load_content(path)

        self.assertEqual(buffer.line(0), "needle")
        self.assertEqual(buffer.line(0).find("needle"), 0)

    def test_empty_file_gives_empty_buffer(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.txt"
            path.write_text("", encoding="utf-8")
            self.assertEqual(load_content(path).line_count, 0)

    def test_non_utf8_bytes_fall_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "latin.txt"
            path.write_bytes(b"caf\xe9")
            self.assertEqual(read_text(path), "café")

    def test_missing_file_and_directory_raise_file_open_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileOpenError) as missing:
                load_content(Path(tmp) / "nope.txt")
            self.assertEqual(missing.exception.reason, "no such file")

            with self.assertRaises(FileOpenError) as directory:
                load_content(Path(tmp))
            self.assertEqual(directory.exception.reason, "is a directory")


if __name__ == "__main__":
    unittest.main()
