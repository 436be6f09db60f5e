"""Unit tests for text, shell-output and platform helpers."""

import pytest

from batchexec.utils import platforms
from batchexec.utils.shell import output_lines, output_tokens
from batchexec.utils.text import ascii_fold, crlf, strip_nul, tokenize, trim, trim_ws, trunc


class TestText:
    def test_crlf(self):
        assert crlf("line\r\n") == "line\n"
        assert crlf("a\n\rb") == "ab"

    def test_ascii_fold(self):
        assert ascii_fold("naïve café") == "naive cafe"
        assert ascii_fold("日本") == ""

    def test_strip_nul(self):
        assert strip_nul("h\x00i\x00") == "hi"

    def test_trim_removes_one_match_each_end(self):
        assert trim("xxhixx", "x") == "xhix"
        assert trim_ws("\t spaced out \n") == "spaced out"

    def test_trunc(self):
        assert trunc("short", 10) == "short"
        assert trunc("abcdefghij", 10) == "abcdefghij"
        assert trunc("abcdefghijk", 10) == "abcdefg..."
        assert trunc("abcdef", 2) == "..."

    def test_tokenize(self):
        assert tokenize(" a\tb\n c ") == ["a", "b", "c"]


class TestShellOutput:
    def test_output_lines(self):
        output = "Café\r\n\r\nend\x00\n"
        assert output_lines(output) == ["Cafe", "", "end"]
        assert output_lines(output, strip_blank=True) == ["Cafe", "end"]

    def test_output_tokens(self):
        assert output_tokens("D\x00e\x00f\x00 x\n") == ["Def", "x"]


class TestPlatforms:
    @pytest.mark.parametrize(
        "name,linux,windows,cygwin,unix",
        [
            ("linux", True, False, False, True),
            ("win32", False, True, False, False),
            ("cygwin", False, False, True, True),
            ("darwin", False, False, False, True),
            ("freebsd13", False, False, False, True),
        ],
    )
    def test_predicates(self, name, linux, windows, cygwin, unix):
        assert platforms.on_linux(name) is linux
        assert platforms.on_windows(name) is windows
        assert platforms.on_cygwin(name) is cygwin
        assert platforms.like_unix(name) is unix

    def test_kernel_mentions_microsoft(self, tmp_path):
        first = tmp_path / "version"
        second = tmp_path / "osrelease"
        assert platforms.kernel_mentions_microsoft(first, second) is None

        second.write_text("5.15.90.1-microsoft-standard-WSL2\n")
        assert platforms.kernel_mentions_microsoft(first, second) is True

        first.write_text("Linux version 6.1.0\n")
        assert platforms.kernel_mentions_microsoft(first, second) is False
