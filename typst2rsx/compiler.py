"""Wrapper around the external ``typst`` compiler.

Only the SVG export of ``typst compile`` is used. The compiler is treated as
an opaque process: it either leaves an SVG file behind or fails with
diagnostics on stderr.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

from typst2rsx.exceptions import ExternalCompileError, SourceReadError

logger = logging.getLogger(__name__)


class TypstCompiler:
    """Runs ``typst compile`` to turn a Typst document into SVG."""

    def __init__(
        self,
        binary: str = "typst",
        timeout: float | None = None,
        extra_args: Sequence[str] = (),
    ) -> None:
        """Initialize compiler.

        Args:
            binary: Name or path of the typst executable.
            timeout: Seconds to wait for the process, None to wait forever.
            extra_args: Additional arguments passed before the file names,
                e.g. ``["--root", "docs"]``.
        """
        self.binary = binary
        self.timeout = timeout
        self.extra_args = list(extra_args)

    def command(self, source: Path, output: Path) -> list[str]:
        return [
            self.binary,
            "compile",
            "--format",
            "svg",
            *self.extra_args,
            str(source),
            str(output),
        ]

    def compile(self, source: str | Path, output: str | Path) -> Path:
        """Compile ``source`` into the SVG file ``output``.

        The output directory is created if it does not exist.

        Returns:
            Path of the written SVG file.

        Raises:
            ExternalCompileError: If typst is missing, times out or fails.
        """
        source = Path(source)
        output = Path(output)
        output.parent.mkdir(parents=True, exist_ok=True)

        cmd = self.command(source, output)
        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError:
            raise ExternalCompileError(
                f"typst executable not found: {self.binary}"
            ) from None
        except OSError as e:
            raise ExternalCompileError(
                f"cannot run typst executable {self.binary}: {e.strerror or e}"
            ) from e
        except subprocess.TimeoutExpired as e:
            raise ExternalCompileError(
                f"typst compile timed out after {self.timeout} seconds",
                stderr=_as_text(e.stderr),
            ) from None

        if result.returncode != 0:
            raise ExternalCompileError(
                f"typst compile failed for {source}",
                returncode=result.returncode,
                stderr=result.stderr or "",
            )
        if not output.exists():
            raise ExternalCompileError(
                f"typst compile produced no output at {output}",
                returncode=result.returncode,
                stderr=result.stderr or "",
            )

        logger.debug("Compiled %s -> %s", source, output)
        return output

    def compile_to_string(self, source: str | Path) -> str:
        """Compile ``source`` into a temporary SVG and return its text."""
        with tempfile.TemporaryDirectory(prefix="typst2rsx-") as tmp:
            output = self.compile(source, Path(tmp) / f"{Path(source).stem}.svg")
            try:
                return output.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise SourceReadError(str(output), str(e)) from e


def _as_text(data: str | bytes | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data
