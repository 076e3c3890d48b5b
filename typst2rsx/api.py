"""High-level conversion API.

Runs the pipeline ``typst compile`` -> SVG parser -> RSX emitter and reports
the outcome as a :class:`ConversionResult`. The first failure ends the
conversion; no partial output is returned.

Example:
    >>> converter = Typst2RsxConverter()
    >>> result = converter.convert_file("formula.typ")
    >>> if result.success:
    ...     print(result.output)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from typst2rsx.compiler import TypstCompiler
from typst2rsx.config import Config
from typst2rsx.exceptions import OutputWriteError, SourceReadError, Typst2RsxError
from typst2rsx.render.emitter import RsxEmitter
from typst2rsx.svg.parser import parse_svg, parse_svg_string

logger = logging.getLogger(__name__)

TYPST_SUFFIXES = frozenset({".typ", ".typst"})

_UNSET = object()


class Stage(str, Enum):
    """Pipeline stage that produced a failure."""

    READ = "read"
    COMPILE = "compile"
    PARSE = "parse"
    RENDER = "render"
    WRITE = "write"


@dataclass
class ConversionResult:
    """Outcome of one conversion."""

    success: bool
    input_path: Path | None = None
    output_path: Path | None = None
    output: str | None = None
    errors: list[str] = field(default_factory=list)
    stage: Stage | None = None
    error: Typst2RsxError | None = None

    @classmethod
    def failed(
        cls,
        error: Typst2RsxError,
        input_path: Path | None = None,
    ) -> ConversionResult:
        return cls(
            success=False,
            input_path=input_path,
            errors=[str(error)],
            stage=_stage_of(error),
            error=error,
        )


def _stage_of(error: Typst2RsxError) -> Stage | None:
    try:
        return Stage(error.stage)
    except ValueError:
        return None


class Typst2RsxConverter:
    """Converts Typst documents and SVG files to RSX source text."""

    def __init__(
        self,
        config: Config | None = None,
        *,
        indent: int | None | object = _UNSET,
        keep_whitespace: bool | None = None,
        typst_binary: str | None = None,
        timeout: float | None | object = _UNSET,
    ) -> None:
        """Initialize converter.

        Keyword arguments override the matching ``config`` values.

        Args:
            config: Settings; defaults to ``Config()``.
            indent: Spaces per nesting level, None for single-line output.
            keep_whitespace: Keep whitespace-only text nodes.
            typst_binary: typst executable.
            timeout: Compile timeout in seconds, None for no timeout.
        """
        self.config = config or Config()
        self.emitter = RsxEmitter(
            indent=self.config.indent if indent is _UNSET else indent,
            keep_whitespace=(
                self.config.keep_whitespace if keep_whitespace is None else keep_whitespace
            ),
        )
        self.compiler = TypstCompiler(
            binary=typst_binary or self.config.typst_binary,
            timeout=self.config.compile_timeout if timeout is _UNSET else timeout,
            extra_args=self.config.compile_args,
        )

    def svg_to_rsx(self, svg: str | bytes) -> str:
        """Parse SVG markup and render it, raising on failure."""
        return self.emitter.render(parse_svg_string(svg))

    def convert_string(self, svg: str | bytes) -> ConversionResult:
        """Convert SVG markup held in memory."""
        try:
            output = self.svg_to_rsx(svg)
        except Typst2RsxError as e:
            logger.warning("Conversion failed in %s stage: %s", e.stage, e)
            return ConversionResult.failed(e)
        return ConversionResult(success=True, output=output)

    def convert_svg_file(
        self, path: str | Path, output_path: str | Path | None = None
    ) -> ConversionResult:
        """Convert an SVG file, optionally writing the RSX to ``output_path``."""
        path = Path(path)
        try:
            output = self.emitter.render(parse_svg(path))
        except Typst2RsxError as e:
            logger.warning("Converting %s failed in %s stage: %s", path, e.stage, e)
            return ConversionResult.failed(e, input_path=path)
        return self._finish(path, output, output_path)

    def convert_typst_file(
        self, path: str | Path, output_path: str | Path | None = None
    ) -> ConversionResult:
        """Compile a Typst document to SVG, then convert it."""
        path = Path(path)
        if not path.is_file():
            error = SourceReadError(str(path), "no such file")
            return ConversionResult.failed(error, input_path=path)
        try:
            svg = self.compiler.compile_to_string(path)
            output = self.svg_to_rsx(svg)
        except Typst2RsxError as e:
            logger.warning("Converting %s failed in %s stage: %s", path, e.stage, e)
            return ConversionResult.failed(e, input_path=path)
        return self._finish(path, output, output_path)

    def convert_file(
        self, path: str | Path, output_path: str | Path | None = None
    ) -> ConversionResult:
        """Convert ``path``, compiling it first when it is a Typst source."""
        path = Path(path)
        if path.suffix.lower() in TYPST_SUFFIXES:
            return self.convert_typst_file(path, output_path)
        return self.convert_svg_file(path, output_path)

    def _finish(
        self, path: Path, output: str, output_path: str | Path | None
    ) -> ConversionResult:
        written = None
        if output_path is not None:
            written = Path(output_path)
            try:
                written.parent.mkdir(parents=True, exist_ok=True)
                written.write_text(output + "\n", encoding="utf-8")
            except OSError as e:
                error = OutputWriteError(str(written), e.strerror or str(e))
                return ConversionResult.failed(error, input_path=path)
            logger.info("Wrote %s", written)
        return ConversionResult(
            success=True, input_path=path, output_path=written, output=output
        )
