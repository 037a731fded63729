"""
Boundary Synthesis.

Builds ``<W>{() => E}</W>`` around an expression or element. The wrapper
element itself is synthesized and printed structurally; when the expression
came out of a parsed container, that container's text around the expression
(comments, line breaks) is kept inside the new braces.
"""

from typing import Optional

from jsx_memo.core.emitter import needs_body_parens
from jsx_memo.core.nodes import (
  ArrowFunction,
  Identifier,
  JsNode,
  JSXClosingElement,
  JSXElement,
  JSXExpressionContainer,
  JSXOpeningElement,
)


def make_thunk(body: JsNode, source: Optional[JSXExpressionContainer] = None) -> JSXExpressionContainer:
  """
  Returns the container ``{() => body}``.

  Args:
      body: The deferred expression.
      source: The parsed container `body` was taken from, if any. Its layout is
          reused around the arrow, so ``{a$.get() /* note */}`` becomes
          ``{() => a$.get() /* note */}``.
  """
  if source is None or source.layout is None or not any(part is body for part in source.layout):
    return JSXExpressionContainer(expression=ArrowFunction(body=body))

  arrow_layout = ["() => (", body, ")"] if needs_body_parens(body) else ["() => ", body]
  arrow = ArrowFunction(body=body, layout=arrow_layout)
  layout = [arrow if part is body else part for part in source.layout]
  return JSXExpressionContainer(expression=arrow, layout=layout)


def create_boundary(
  expression: JsNode,
  component_name: str,
  source: Optional[JSXExpressionContainer] = None,
) -> JSXElement:
  """
  Wraps `expression` in a boundary component.

  Args:
      expression: The expression or element to defer.
      component_name: The wrapper tag name.
      source: The parsed container holding `expression`, when there is one.

  Returns:
      JSXElement: ``<component_name>{() => expression}</component_name>``.
  """
  return JSXElement(
    opening=JSXOpeningElement(name=Identifier(name=component_name)),
    children=[make_thunk(expression, source)],
    closing=JSXClosingElement(name=Identifier(name=component_name)),
  )
