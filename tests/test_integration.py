"""Integration tests for setwise running the CLI against real files."""

import io
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from setwise import settings
from setwise.main import EXIT_DIFFERENT, EXIT_ERROR, EXIT_SAME, main


@pytest.fixture
def host_files(write_file):
    """An inventory with FQDNs and a CSV export with short names."""
    inventory = write_file(
        "inventory.txt",
        ["Web01.corp.example.com", "web02.corp.example.com", "", "db01.corp.example.com"],
    )
    export = write_file(
        "export.csv",
        ["web01,10.0.0.1,linux", "WEB02,10.0.0.2,linux", "   ", "mail01,10.0.0.9,linux"],
    )
    return inventory, export


class TestIntegration:
    """End-to-end runs of the CLI."""

    @pytest.mark.integration
    def test_difference_text(self, host_files, capsys):
        inventory, export = host_files

        exit_code = main(["-f", str(inventory), str(export)])

        assert exit_code == EXIT_DIFFERENT
        assert capsys.readouterr().out == (
            f"Difference of {inventory} - {export}:\n"
            "db01\n"
            "\n"
            f"Difference of {export} - {inventory}:\n"
            "mail01\n"
        )

    @pytest.mark.integration
    def test_intersection_pipe(self, host_files, capsys):
        inventory, export = host_files

        exit_code = main(["-f", "-i", "-p", str(inventory), str(export)])

        assert exit_code == EXIT_DIFFERENT
        assert capsys.readouterr().out == "web01\nweb02\n"

    @pytest.mark.integration
    def test_identical_sets(self, write_file, capsys):
        file_a = write_file("a.txt", ["x", "Y", "x"])
        file_b = write_file("b.txt", ["y", "X"])

        assert main(["--count", str(file_a), str(file_b)]) == EXIT_SAME
        assert capsys.readouterr().out == "A-B: 0\nB-A: 0\n"

    @pytest.mark.integration
    def test_stats(self, write_file, capsys):
        file_a = write_file("a.txt", list("abcde"))
        file_b = write_file("b.txt", list("cdef"))

        main(["--stats", str(file_a), str(file_b)])
        output = capsys.readouterr().out

        assert "Common: 3 (60.0% of A, 75.0% of B)" in output
        assert "Only in A: 2" in output
        assert "Only in B: 1" in output

    @pytest.mark.integration
    def test_extract_and_csv_to_file(self, write_file, temp_dir):
        log_a = write_file("a.log", ["ts=1 user=alice ok", "ts=2 user=Bob ok", "garbage"])
        log_b = write_file("b.log", ["user=bob", "user=carol"])
        out = temp_dir / "report.csv"

        exit_code = main([
            "-e", r"user=(\w+)", "--format", "csv", "-o", str(out), "-s",
            str(log_a), str(log_b),
        ])

        assert exit_code == EXIT_DIFFERENT
        assert out.read_text() == "value\nalice\ncarol\n"

    @pytest.mark.integration
    def test_json_with_invalid_utf8(self, write_file, temp_dir):
        file_a = write_file("a.txt", ["tea"])
        file_b = write_file("b.txt", b"caf\xe9\ntea\n")
        out = temp_dir / "report.json"

        exit_code = main(["--format", "json", "-o", str(out), str(file_a), str(file_b)])

        assert exit_code == EXIT_DIFFERENT
        data = json.loads(out.read_bytes())
        assert data["results"] == {"A-B": [], "B-A": ["caf\ufffd"]}

    @pytest.mark.integration
    def test_text_keeps_invalid_utf8(self, write_file, temp_dir):
        file_a = write_file("a.txt", b"caf\xe9\n")
        file_b = write_file("b.txt", ["tea"])
        out = temp_dir / "report.txt"

        main(["-p", "-o", str(out), str(file_a), str(file_b)])

        assert out.read_bytes() == b"caf\xe9\n"

    @pytest.mark.integration
    def test_stdin_source(self, write_file, monkeypatch, capsys):
        file_b = write_file("b.txt", ["b", "c"])
        monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(b"a\nb\n")))

        exit_code = main(["--format", "json", "-u", "-", str(file_b)])

        assert exit_code == EXIT_DIFFERENT
        data = json.loads(capsys.readouterr().out)
        assert data["sources"]["a"] == "<stdin>"
        assert data["results"]["union"] == ["a", "b", "c"]

    @pytest.mark.integration
    def test_empty_file(self, write_file, capsys):
        empty = write_file("empty.txt", b"")
        other = write_file("other.txt", ["z"])

        assert main(["-p", str(empty), str(other)]) == EXIT_SAME
        assert capsys.readouterr().out == ""

    @pytest.mark.integration
    def test_oversized_line(self, write_file, monkeypatch):
        big = write_file("big.txt", b"x" * 100 + b"\n")
        small = write_file("small.txt", ["x"])
        monkeypatch.setenv("SETWISE_MAX_LINE_BYTES", "16")
        settings.get_max_line_bytes.cache_clear()
        try:
            assert main([str(big), str(small)]) == EXIT_ERROR
        finally:
            settings.get_max_line_bytes.cache_clear()

    @pytest.mark.integration
    def test_unwritable_output(self, write_file, temp_dir):
        file_a = write_file("a.txt", ["a"])
        out = temp_dir / "no_such_dir" / "out.txt"

        assert main(["-o", str(out), str(file_a), str(file_a)]) == EXIT_ERROR

    @pytest.mark.integration
    @pytest.mark.slow
    def test_module_invocation(self, write_file):
        file_a = write_file("a.txt", ["a", "b", "c"])
        file_b = write_file("b.txt", ["b", "c", "d"])
        src_dir = Path(__file__).resolve().parent.parent / "src"
        env = {**os.environ, "PYTHONPATH": str(src_dir)}

        result = subprocess.run(
            [sys.executable, "-m", "setwise.main", "--count", str(file_a), str(file_b)],
            capture_output=True,
            text=True,
            timeout=30,
            env=env,
        )

        assert result.returncode == EXIT_DIFFERENT
        assert result.stdout == "A-B: 1\nB-A: 1\n"
