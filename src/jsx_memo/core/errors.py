"""
Transformation Error Types.

A failure is always scoped to one file: the engine catches these and reports
them on the file's ``ConversionResult`` without affecting other files.
"""

from typing import Optional


class TransformError(Exception):
  """Base class for failures that abort the transformation of a single file."""


class JsxSyntaxError(TransformError):
  """
  Raised when the source text does not parse as JSX/TSX.

  Attributes:
      line (Optional[int]): 1-based line of the first syntax error.
      column (Optional[int]): 1-based column of the first syntax error.
  """

  def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
    self.line = line
    self.column = column
    if line is not None:
      message = f"{message} (line {line}, column {column})"
    super().__init__(message)


class MalformedTreeError(TransformError):
  """Raised when a tree violates the structural shape the rewriter relies on."""
