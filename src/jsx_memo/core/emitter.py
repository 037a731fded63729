"""
Source Emitter.

Regenerates source text from a (possibly rewritten) tree. Parsed nodes are
emitted by joining their layout; rewritten children inside that layout are
expanded in turn, so only synthesized subtrees are printed structurally.
"""

from typing import List

from jsx_memo.core.errors import MalformedTreeError
from jsx_memo.core.nodes import (
  ArrowFunction,
  CallExpression,
  Identifier,
  ImportDeclaration,
  JsNode,
  JSXAttribute,
  JSXClosingElement,
  JSXElement,
  JSXEmptyExpression,
  JSXExpressionContainer,
  JSXFragment,
  JSXOpeningElement,
  JSXSpreadAttribute,
  JSXText,
  LayoutPart,
  MemberExpression,
  Opaque,
  ParenthesizedExpression,
  Program,
)


# Arrow bodies of these kinds must be parenthesized to keep their meaning.
_PAREN_BODY_KINDS = frozenset({"object", "sequence_expression"})


def needs_body_parens(body: JsNode) -> bool:
  """True if `body` must be parenthesized when used as an arrow function body."""
  return isinstance(body, Opaque) and body.kind in _PAREN_BODY_KINDS


def emit(node: JsNode) -> str:
  """
  Converts a node back to source text.

  Nodes are expanded into their parts (text and child nodes) on an explicit
  stack, so arbitrarily deep trees print without recursion.

  Args:
      node: Any tree node.

  Returns:
      str: The generated code.

  Raises:
      MalformedTreeError: If a node can be neither laid out nor printed.
  """
  out: List[str] = []
  stack: List[LayoutPart] = [node]
  while stack:
    part = stack.pop()
    if isinstance(part, str):
      out.append(part)
      continue
    parts = part.layout if part.layout is not None else _structural_parts(part)
    stack.extend(reversed(parts))
  return "".join(out)


def _joined(nodes: List[JsNode], separator: str) -> List[LayoutPart]:
  parts: List[LayoutPart] = []
  for i, n in enumerate(nodes):
    if i:
      parts.append(separator)
    parts.append(n)
  return parts


def _structural_parts(node: JsNode) -> List[LayoutPart]:
  if isinstance(node, Identifier):
    return [node.name]

  if isinstance(node, MemberExpression):
    if node.computed:
      return [node.object, "?.[" if node.optional else "[", node.property, "]"]
    return [node.object, "?." if node.optional else ".", node.property]

  if isinstance(node, CallExpression):
    opener = "?.(" if node.optional else "("
    return [node.callee, opener, *_joined(node.arguments, ", "), ")"]

  if isinstance(node, ArrowFunction):
    params: LayoutPart = node.params if node.params is not None else "()"
    if needs_body_parens(node.body):
      return [params, " => (", node.body, ")"]
    return [params, " => ", node.body]

  if isinstance(node, ParenthesizedExpression):
    return ["(", node.expression, ")"]

  if isinstance(node, JSXText):
    return [node.value]

  if isinstance(node, JSXEmptyExpression):
    return []

  if isinstance(node, JSXExpressionContainer):
    return ["{", node.expression, "}"]

  if isinstance(node, JSXSpreadAttribute):
    return ["{...", node.argument, "}"]

  if isinstance(node, JSXAttribute):
    if node.value is None:
      return [node.name]
    return [node.name, "=", node.value]

  if isinstance(node, JSXOpeningElement):
    parts: List[LayoutPart] = ["<", node.name]
    for attr in node.attributes:
      parts.extend([" ", attr])
    parts.append(" />" if node.self_closing else ">")
    return parts

  if isinstance(node, JSXClosingElement):
    return ["</", node.name, ">"]

  if isinstance(node, JSXElement):
    if node.opening is None:
      raise MalformedTreeError("JSX element without an opening element")
    if node.opening.self_closing:
      return [node.opening]
    closing: List[LayoutPart] = [node.closing] if node.closing is not None else ["</", node.opening.name, ">"]
    return [node.opening, *node.children, *closing]

  if isinstance(node, JSXFragment):
    return ["<>", *node.children, "</>"]

  if isinstance(node, ImportDeclaration):
    return [_emit_import(node)]

  if isinstance(node, Program):
    return _joined(node.body, "\n")

  raise MalformedTreeError(f"Cannot emit synthesized {type(node).__name__} without source layout")


def _emit_import(node: ImportDeclaration) -> str:
  clauses = []
  if node.default:
    clauses.append(node.default)
  if node.namespace:
    clauses.append(f"* as {node.namespace}")
  if node.specifiers:
    names = [s.imported if s.imported == s.local else f"{s.imported} as {s.local}" for s in node.specifiers]
    clauses.append("{ " + ", ".join(names) + " }")

  if not clauses:
    return f'import "{node.source}";'
  return f'import {", ".join(clauses)} from "{node.source}";'
