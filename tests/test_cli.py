"""Tests for the jpeg-markers command line."""
import logging
import os
import tempfile

import pytest

from jpeg_markers.cli import build_parser, main


GOOD_JPEG = b"\xFF\xD8\xFF\xDB\x00\x04\x01\x02\xFF\xD9"
TRUNCATED_JPEG = b"\xFF\xD8\xFF\xE0\x00"


@pytest.fixture
def make_file():
    """Write bytes to temporary files, removed after the test."""
    paths = []

    def _make(data: bytes, suffix: str = ".jpg") -> str:
        with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as f:
            f.write(data)
            paths.append(f.name)
        return f.name

    yield _make

    for path in paths:
        os.unlink(path)


class TestParser:
    """Tests for argument parsing."""

    def test_single_dash_flags(self):
        """Test the single dash long flags."""
        args = build_parser().parse_args(["-offset", "-size", "-hex", "a.jpg"])
        assert args.show_offset and args.show_size and args.hex
        assert args.paths == ["a.jpg"]

    def test_double_dash_flags(self):
        """Test the double dash spelling."""
        args = build_parser().parse_args(["--offset", "--describe", "a.jpg", "b.jpg"])
        assert args.show_offset and args.describe
        assert not args.show_size
        assert args.paths == ["a.jpg", "b.jpg"]

    def test_defaults(self):
        """Test every flag defaults to off."""
        args = build_parser().parse_args(["a.jpg"])
        assert not (args.show_offset or args.show_size or args.hex)
        assert not (args.describe or args.strict or args.verbose)

    def test_requires_a_file(self):
        """Test at least one path is needed."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestMain:
    """Tests for main function."""

    def test_scan_with_offset_and_size(self, make_file, capsys):
        """Test a well formed file prints one line per marker."""
        path = make_file(GOOD_JPEG)

        assert main(["-offset", "-size", path]) == 0
        assert capsys.readouterr().out.splitlines() == [
            f"{path}:SOI:0:0",
            f"{path}:DQT:2:4",
            f"{path}:EOI:8:0",
        ]

    def test_scan_hex(self, make_file, capsys):
        """Test -hex renders offset and size in hex."""
        path = make_file(GOOD_JPEG)

        assert main(["-offset", "-size", "-hex", path]) == 0
        assert capsys.readouterr().out.splitlines()[1] == f"{path}:DQT:0x2:0x4"

    def test_describe(self, make_file, capsys):
        """Test -describe appends the long description."""
        path = make_file(GOOD_JPEG)

        assert main(["-describe", path]) == 0
        assert capsys.readouterr().out.splitlines()[0] == f"{path}:SOI:Start Of Image."

    def test_files_scanned_in_order(self, make_file, capsys):
        """Test multiple files are scanned one after another."""
        first = make_file(GOOD_JPEG)
        second = make_file(b"\xFF\xD8\xFF\xD9")

        assert main([first, second]) == 0
        assert capsys.readouterr().out.splitlines() == [
            f"{first}:SOI",
            f"{first}:DQT",
            f"{first}:EOI",
            f"{second}:SOI",
            f"{second}:EOI",
        ]

    def test_unopenable_file_is_skipped(self, make_file, capsys, caplog):
        """Test a missing file is logged and the run continues."""
        missing = os.path.join(tempfile.gettempdir(), "does-not-exist-4f1c.jpg")
        path = make_file(GOOD_JPEG)

        with caplog.at_level(logging.ERROR):
            assert main([missing, path]) == 0

        out = capsys.readouterr().out
        assert missing not in out
        assert f"{path}:EOI" in out
        assert any(r.levelno == logging.ERROR for r in caplog.records)

    def test_read_failure_stops_run(self, make_file, capsys, caplog):
        """Test a truncated file ends the run with status 1."""
        broken = make_file(TRUNCATED_JPEG)
        path = make_file(GOOD_JPEG)

        with caplog.at_level(logging.ERROR):
            assert main([broken, path]) == 1

        # Records found before the failure are flushed, later files are untouched
        assert capsys.readouterr().out.splitlines() == [f"{broken}:SOI"]
        assert any(
            r.levelno == logging.CRITICAL and broken in r.getMessage()
            for r in caplog.records
        )

    def test_strict_skips_non_jpeg(self, make_file, capsys, caplog):
        """Test -strict logs and skips files without the FF D8 magic."""
        not_jpeg = make_file(b"\x89PNG\r\n\x1a\n\xFF\xD9", suffix=".png")
        path = make_file(GOOD_JPEG)

        with caplog.at_level(logging.ERROR):
            assert main(["-strict", not_jpeg, path]) == 0

        out = capsys.readouterr().out
        assert not_jpeg not in out
        assert f"{path}:SOI" in out
        assert "missing jpeg magic" in caplog.text

    def test_without_strict_magic_is_not_checked(self, make_file, capsys):
        """Test a file without the magic is still scanned by default."""
        path = make_file(b"\x00\x00\xFF\xD9")

        assert main([path]) == 0
        assert capsys.readouterr().out == f"{path}:EOI\n"

    def test_sos_detail_lines(self, make_file, capsys):
        """Test SOS details print ahead of the file's marker list."""
        data = (
            b"\xFF\xD8"
            b"\xFF\xDA\x00\x0A\x02\x01\x00\x02\x11\x00\x3F\x00\x00\x00"
            b"\xFF\xD9"
        )
        path = make_file(data)

        assert main([path]) == 0
        assert capsys.readouterr().out.splitlines() == [
            "SOS\tss=0\tse=63\tah=0\tal=0",
            "  #1 td=0 ta=0",
            "  #2 td=1 ta=1",
            f"{path}:SOI",
            f"{path}:SOS",
            f"{path}:EOI",
        ]

    def test_verbose_logs_markers(self, make_file, caplog):
        """Test -verbose emits a debug line per marker found."""
        path = make_file(GOOD_JPEG)

        with caplog.at_level(logging.DEBUG):
            assert main(["-verbose", path]) == 0

        assert "Found SOI at 0 with size 0" in caplog.text
        assert "Found DQT at 2 with size 4" in caplog.text
