"""
Utilities for the Import Fixer.

Static helpers for analyzing top-level statements and creating import nodes.
"""

from typing import List

from jsx_memo.core.nodes import ImportDeclaration, ImportSpecifier, JsNode, Opaque, Program


def is_directive(node: JsNode) -> bool:
  """
  Checks for a directive statement such as ``"use client";``.

  Args:
      node: A top-level statement.

  Returns:
      bool: True for an expression statement made of a lone string literal.
  """
  if not isinstance(node, Opaque) or node.kind != "expression_statement":
    return False
  return len(node.children) == 1 and isinstance(node.children[0], Opaque) and node.children[0].kind == "string"


def is_hash_bang(node: JsNode) -> bool:
  return isinstance(node, Opaque) and node.kind == "hash_bang_line"


def is_comment(node: JsNode) -> bool:
  return isinstance(node, Opaque) and node.kind == "comment"


def has_named_import(program: Program, name: str, source: str) -> bool:
  """
  Checks whether `name` is already imported by name from `source`.

  Only top-level import declarations are considered. Default and namespace
  bindings do not count.

  Args:
      program: The module root.
      name: The exported name, e.g. ``Memo``.
      source: The module path, e.g. ``@legendapp/state/react``.

  Returns:
      bool: True if an equivalent import exists.
  """
  for stmt in program.body:
    if not isinstance(stmt, ImportDeclaration) or stmt.source != source:
      continue
    if any(spec.imported == name for spec in stmt.specifiers):
      return True
  return False


def get_insertion_index(body: List[JsNode]) -> int:
  """
  Finds the first statement slot after the directive prologue.

  A hash-bang line and leading directives stay above the new import. Comments
  are only skipped when a directive follows them.

  Args:
      body: Top-level statements in document order.

  Returns:
      int: Index in `body` where the import belongs.
  """
  index = 0
  for i, stmt in enumerate(body):
    if is_hash_bang(stmt) or is_directive(stmt):
      index = i + 1
    elif is_comment(stmt):
      continue
    else:
      break
  return index


def create_named_import(name: str, source: str) -> ImportDeclaration:
  """Builds ``import { name } from "source";``."""
  return ImportDeclaration(source=source, specifiers=[ImportSpecifier(imported=name, local=name)])
