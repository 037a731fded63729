"""
Orchestration Engine for JSX Transformations.

This module provides the `AutoWrapEngine`, the primary driver for transforming
a single JSX/TSX file. The pipeline consists of:

1.  **Parsing**: Source text is parsed into the node model.
2.  **Auto-Wrap**: Boundary components are inserted around observable reads.
3.  **Import Injection**: The wrapper import is added if anything was wrapped.
4.  **Emission**: The tree is printed back to source text.

Every file gets its own `RewriterContext` and `TraceLogger`; nothing is shared
between files, so independent files may be transformed concurrently.
A failing file yields ``success=False`` with its original text; the engine
never raises for bad input.
"""

import logging
import re
from typing import Optional

from jsx_memo.config import AutoWrapConfig
from jsx_memo.core.conversion_result import ConversionResult
from jsx_memo.core.emitter import emit
from jsx_memo.core.errors import JsxSyntaxError
from jsx_memo.core.import_fixer import ImportInjectionPass
from jsx_memo.core.nodes import Program
from jsx_memo.core.parser import JsxParser
from jsx_memo.core.rewriter import AutoWrapPass, RewriterContext, RewriterPipeline
from jsx_memo.core.tracer import TraceLogger

logger = logging.getLogger(__name__)

JSX_FILE_PATTERN = re.compile(r"\.[jt]sx$")


def build_pipeline() -> RewriterPipeline:
  """Returns the standard pass sequence: boundary insertion, then import management."""
  return RewriterPipeline([AutoWrapPass(), ImportInjectionPass()])


class AutoWrapEngine:
  """
  The main compilation unit.

  Holds the configuration; every call to :meth:`run` creates fresh per-file
  state, so one engine may serve many files.
  """

  def __init__(self, config: Optional[AutoWrapConfig] = None) -> None:
    """
    Initializes the Engine.

    Args:
        config (AutoWrapConfig, optional): Transform options. Defaults apply when omitted.
    """
    self.config = config or AutoWrapConfig()

  def parse(self, code: str) -> Program:
    """
    Parses source string into a module tree.

    Raises:
        JsxSyntaxError: If the input is not valid JSX/TSX.
    """
    return JsxParser(code).parse()

  def to_source(self, program: Program) -> str:
    return emit(program)

  def run(self, code: str) -> ConversionResult:
    """
    Executes the full pipeline on one file.

    Any failure, including input nested too deeply for the interpreter, is
    reported in the result rather than raised.

    Args:
        code (str): JSX or TSX source text.

    Returns:
        ConversionResult: Transformed code, or the original code and errors on failure.
    """
    tracer = TraceLogger()
    try:
      with tracer.phase("Transform Pipeline", f"{self.config.component_name} from {self.config.import_source}"):
        with tracer.phase("Parsing", "Source -> Tree"):
          program = self.parse(code)

        context = RewriterContext(self.config, tracer=tracer)
        program = build_pipeline().run(program, context)

        with tracer.phase("Emission", "Tree -> Source"):
          final_code = self.to_source(program)
    except JsxSyntaxError as e:
      return self._failure(code, f"Parse Error: {e}", tracer)
    except Exception as e:
      logger.debug("Transform aborted: %s", e, exc_info=True)
      return self._failure(code, f"Transform Error: {type(e).__name__}: {e}", tracer)

    return ConversionResult(
      code=final_code,
      success=True,
      changed=final_code != code,
      rewrite_count=context.rewrite_count,
      trace_events=tracer.export(),
    )

  def _failure(self, code: str, message: str, tracer: TraceLogger) -> ConversionResult:
    tracer.log_warning(message)
    return ConversionResult(code=code, errors=[message], success=False, trace_events=tracer.export())


def transform_program(program: Program, config: Optional[AutoWrapConfig] = None) -> RewriterContext:
  """
  Runs the pipeline over an already parsed (or hand-built) tree, in place.

  Args:
      program: The module root.
      config: Transform options.

  Returns:
      RewriterContext: The per-file state after the run (``needs_import``, ``rewrite_count``, trace).

  Raises:
      TransformError: If the tree is structurally invalid.
  """
  context = RewriterContext(config)
  build_pipeline().run(program, context)
  return context


def transform_file(code: str, filename: str, config: Optional[AutoWrapConfig] = None) -> Optional[ConversionResult]:
  """
  Build-tool entry point. Only ``.jsx`` and ``.tsx`` files are transformed.

  Args:
      code: The file contents.
      filename: Path or id of the file, used for the extension filter.
      config: Transform options.

  Returns:
      Optional[ConversionResult]: None for files that are not JSX/TSX.
  """
  if not JSX_FILE_PATTERN.search(filename):
    return None
  return AutoWrapEngine(config).run(code)
