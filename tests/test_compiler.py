"""Unit tests for typst2rsx.compiler.

subprocess.run is mocked throughout; no typst installation is needed.
"""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

import pytest

from typst2rsx.compiler import TypstCompiler
from typst2rsx.exceptions import ExternalCompileError

SVG_OUTPUT = '<svg xmlns="http://www.w3.org/2000/svg"><path d="M 0 0"/></svg>'


def fake_typst(svg: str = SVG_OUTPUT, returncode: int = 0, stderr: str = ""):
    """Build a subprocess.run replacement that writes ``svg`` to the output path."""

    def run(cmd, **kwargs):
        if returncode == 0:
            Path(cmd[-1]).write_text(svg, encoding="utf-8")
        return subprocess.CompletedProcess(cmd, returncode, stdout="", stderr=stderr)

    return run


class TestTypstCompiler:
    """Tests for TypstCompiler."""

    def test_command_line(self, tmp_path: Path) -> None:
        compiler = TypstCompiler(binary="typst", extra_args=["--root", "."])

        cmd = compiler.command(Path("doc.typ"), Path("out.svg"))

        assert cmd == ["typst", "compile", "--format", "svg", "--root", ".", "doc.typ", "out.svg"]

    def test_compile_creates_output_directory(self, tmp_path: Path, typst_source: Path) -> None:
        output = tmp_path / "nested" / "dir" / "out.svg"

        with patch("typst2rsx.compiler.subprocess.run", side_effect=fake_typst()) as mock_run:
            result = TypstCompiler(timeout=5).compile(typst_source, output)

        assert result == output
        assert output.read_text(encoding="utf-8") == SVG_OUTPUT
        assert mock_run.call_args.kwargs["timeout"] == 5
        assert mock_run.call_args.kwargs["capture_output"] is True

    def test_compile_to_string(self, typst_source: Path) -> None:
        with patch("typst2rsx.compiler.subprocess.run", side_effect=fake_typst()):
            svg = TypstCompiler().compile_to_string(typst_source)

        assert svg == SVG_OUTPUT

    def test_missing_binary(self, typst_source: Path, tmp_path: Path) -> None:
        with patch(
            "typst2rsx.compiler.subprocess.run",
            side_effect=FileNotFoundError("typst"),
        ):
            with pytest.raises(ExternalCompileError, match="not found") as exc_info:
                TypstCompiler(binary="typst-missing").compile(typst_source, tmp_path / "o.svg")

        assert exc_info.value.stage == "compile"
        assert exc_info.value.returncode is None

    @pytest.mark.parametrize(
        "error",
        [
            PermissionError(13, "Permission denied"),
            NotADirectoryError(20, "Not a directory"),
            OSError(8, "Exec format error"),
        ],
    )
    def test_binary_that_cannot_be_started(
        self, typst_source: Path, tmp_path: Path, error: OSError
    ) -> None:
        with patch("typst2rsx.compiler.subprocess.run", side_effect=error):
            with pytest.raises(ExternalCompileError, match="cannot run typst") as exc_info:
                TypstCompiler(binary="./typst").compile(typst_source, tmp_path / "o.svg")

        assert exc_info.value.stage == "compile"
        assert error.strerror in str(exc_info.value)

    def test_nonzero_exit_carries_diagnostics(self, typst_source: Path, tmp_path: Path) -> None:
        diagnostics = "error: unknown variable: foo\n  ┌─ doc.typ:1:2"
        with patch(
            "typst2rsx.compiler.subprocess.run",
            side_effect=fake_typst(returncode=1, stderr=diagnostics),
        ):
            with pytest.raises(ExternalCompileError) as exc_info:
                TypstCompiler().compile(typst_source, tmp_path / "o.svg")

        assert exc_info.value.returncode == 1
        assert exc_info.value.stderr == diagnostics
        assert "unknown variable" in str(exc_info.value)

    def test_timeout(self, typst_source: Path, tmp_path: Path) -> None:
        with patch(
            "typst2rsx.compiler.subprocess.run",
            side_effect=subprocess.TimeoutExpired(cmd="typst", timeout=2),
        ):
            with pytest.raises(ExternalCompileError, match="timed out"):
                TypstCompiler(timeout=2).compile(typst_source, tmp_path / "o.svg")

    def test_missing_output_file(self, typst_source: Path, tmp_path: Path) -> None:
        """A zero exit without an output file is still a failure."""
        with patch(
            "typst2rsx.compiler.subprocess.run",
            return_value=subprocess.CompletedProcess([], 0, stdout="", stderr=""),
        ):
            with pytest.raises(ExternalCompileError, match="no output"):
                TypstCompiler().compile(typst_source, tmp_path / "o.svg")
