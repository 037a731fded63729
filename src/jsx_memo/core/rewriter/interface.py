"""
Interface definition for Rewriter Passes.

This module defines the abstract base class that all transformation passes
must implement to be compatible with the ``RewriterPipeline``.
"""

from abc import ABC, abstractmethod

from jsx_memo.core.nodes import Program
from jsx_memo.core.rewriter.context import RewriterContext


class RewriterPass(ABC):
  """
  Abstract contract for a transformation pass in the rewriting pipeline.

  Passes encapsulate discrete transformation logic (boundary insertion,
  import management) and are executed sequentially by the pipeline.
  """

  name: str = "pass"

  @abstractmethod
  def transform(self, program: Program, context: RewriterContext) -> Program:
    """
    Executes the transformation logic on the given module tree.

    Args:
        program: The input module root. Passes may mutate it in place.
        context: The per-file rewriter context.

    Returns:
        The transformed module root.
    """
    pass
