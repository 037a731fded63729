"""
Import Injection.

Adds the wrapper component import once a file has received at least one
boundary. The check-then-insert is idempotent: a module that already imports
the wrapper by name from the configured source is left unchanged, so running
the transform twice never duplicates the import.
"""

import logging

from jsx_memo.core.emitter import emit
from jsx_memo.core.nodes import Program
from jsx_memo.core.import_fixer.utils import create_named_import, get_insertion_index, has_named_import
from jsx_memo.core.rewriter.context import RewriterContext
from jsx_memo.core.rewriter.interface import RewriterPass

logger = logging.getLogger(__name__)


class ImportInjector:
  """
  Inserts a named import into a module root.

  Args:
      name: The binding to import.
      source: The module path.
  """

  def __init__(self, name: str, source: str) -> None:
    self.name = name
    self.source = source

  def is_satisfied(self, program: Program) -> bool:
    return has_named_import(program, self.name, self.source)

  def inject(self, program: Program) -> bool:
    """
    Adds the import after the directive prologue unless it already exists.

    For parsed modules the statement is also spliced into the source layout,
    followed by a line break, so the rest of the file keeps its formatting.

    Returns:
        bool: True if a statement was inserted.
    """
    if self.is_satisfied(program):
      return False

    decl = create_named_import(self.name, self.source)
    index = get_insertion_index(program.body)

    if program.layout is not None:
      if index < len(program.body):
        anchor = _layout_index(program, program.body[index])
        program.layout[anchor:anchor] = [decl, "\n"]
      elif index > 0:
        anchor = _layout_index(program, program.body[index - 1]) + 1
        program.layout[anchor:anchor] = ["\n", decl]
      else:
        program.layout[0:0] = [decl, "\n"]

    program.body.insert(index, decl)
    return True


def _layout_index(program: Program, stmt: object) -> int:
  for i, part in enumerate(program.layout):
    if part is stmt:
      return i
  raise ValueError("Statement missing from module layout")


class ImportInjectionPass(RewriterPass):
  """
  File-exit pass adding the wrapper import when any rewrite occurred.
  """

  name = "Import Injection"

  def transform(self, program: Program, context: RewriterContext) -> Program:
    if not context.needs_import:
      return program

    settings = context.settings
    injector = ImportInjector(settings.component_name, settings.import_source)
    if injector.inject(program):
      statement = emit(create_named_import(settings.component_name, settings.import_source))
      context.tracer.log_import("Injected", statement)
      logger.debug("Injected %s", statement)
    else:
      context.tracer.log_import("Already present", f"{settings.component_name} from {settings.import_source}")
    return program
