"""
Orchestration logic for executing sequential rewriter passes.

This module provides the ``RewriterPipeline``, which manages the sequential
execution of multiple ``RewriterPass`` instances over a shared Context.
"""

from typing import List

from jsx_memo.core.nodes import Program
from jsx_memo.core.rewriter.context import RewriterContext
from jsx_memo.core.rewriter.interface import RewriterPass


class RewriterPipeline:
  """
  Manages a sequence of rewriting passes and executes them in order.
  """

  def __init__(self, passes: List[RewriterPass]) -> None:
    """
    Initializes the pipeline with a list of passes.

    Args:
        passes: Sequenced list of passes to execute.
    """
    self.passes = passes

  def run(self, program: Program, context: RewriterContext) -> Program:
    """
    Executes all registered passes sequentially on the module.

    Each pass runs inside its own trace phase.

    Args:
        program: The module tree to transform.
        context: The per-file execution state.

    Returns:
        The fully transformed tree.
    """
    current = program
    for pass_instance in self.passes:
      with context.tracer.phase(pass_instance.name, type(pass_instance).__name__):
        current = pass_instance.transform(current, context)

    return current
