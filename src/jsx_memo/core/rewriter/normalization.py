"""
Children Normalization.

Rewrites the children of boundary-style components into a single
zero-argument thunk so the component can re-invoke them on its own::

    <Memo>{count$.get()}</Memo>         ->  <Memo>{() => count$.get()}</Memo>
    <Show if={a}><Row /></Show>         ->  <Show if={a}>{() => <Row />}</Show>
    <Memo><A /><B /></Memo>             ->  <Memo>{() => <><A /><B /></>}</Memo>

Only children that open with an element or a non-function expression are
rewritten. Children that are already deferred or already a reference are left
alone (an arrow or function expression, a bare identifier, or a property
access), and so are children opening with text or a fragment.
"""

from typing import List, Optional

from jsx_memo.core.nodes import (
  FUNCTION_TYPES,
  Identifier,
  JsNode,
  JSXElement,
  JSXEmptyExpression,
  JSXExpressionContainer,
  JSXFragment,
  JSXText,
  LayoutPart,
  MemberExpression,
  unwrap_parens,
)
from jsx_memo.core.rewriter.boundary import make_thunk

ALREADY_FUNCTION_TYPES = (*FUNCTION_TYPES, Identifier, MemberExpression)


def filter_empty_text(children: List[JsNode]) -> List[JsNode]:
  """Drops whitespace-only text (line breaks and indentation between tags)."""
  return [c for c in children if not (isinstance(c, JSXText) and c.is_whitespace)]


def is_already_function(children: List[JsNode]) -> bool:
  """
  Checks whether a filtered child list is a single deferred value or reference.
  """
  if len(children) != 1:
    return False
  child = children[0]
  if not isinstance(child, JSXExpressionContainer):
    return False
  return isinstance(unwrap_parens(child.expression), ALREADY_FUNCTION_TYPES)


def needs_wrapping(children: List[JsNode]) -> bool:
  """
  Checks the first filtered child: an element, or a container whose
  expression is not already a function or reference.
  """
  first = children[0]
  if isinstance(first, JSXElement):
    return True
  if isinstance(first, JSXExpressionContainer):
    return not isinstance(unwrap_parens(first.expression), ALREADY_FUNCTION_TYPES)
  return False


def _children_layout(element: JSXElement) -> Optional[List[LayoutPart]]:
  """The parsed source between the opening and closing tags, if available."""
  if element.layout is None or element.closing is None:
    return None
  start = next((i for i, part in enumerate(element.layout) if part is element.opening), None)
  end = next((i for i, part in enumerate(element.layout) if part is element.closing), None)
  if start is None or end is None:
    return None
  return element.layout[start + 1 : end]


def build_thunk_body(children: List[JsNode], element: Optional[JSXElement] = None) -> Optional[JsNode]:
  """
  Selects the expression the thunk should return.

  For several children the fragment keeps the source text between the
  original tags, so inline spacing such as ``{a} / {b}`` survives.

  Returns:
      Optional[JsNode]: The element for a single element child, the inner
      expression for a single non-empty container, a fragment of all children
      when there are several, and None when a lone child has nothing to defer.
  """
  if len(children) > 1:
    inner = _children_layout(element) if element is not None else None
    if inner is None:
      return JSXFragment(children=list(children))
    return JSXFragment(children=list(children), layout=["<>", *inner, "</>"])

  child = children[0]
  if isinstance(child, JSXElement):
    return child
  if isinstance(child, JSXExpressionContainer) and not isinstance(child.expression, JSXEmptyExpression):
    return child.expression
  return None


def wrap_children_as_function(element: JSXElement) -> Optional[JSXElement]:
  """
  Builds the normalized replacement for a boundary-style element.

  The original opening and closing tags are reused, so attributes keep their
  source formatting.

  Args:
      element: An element whose tag is in the auto-wrap-children set.

  Returns:
      Optional[JSXElement]: The replacement, or None if no change is needed.
  """
  if not isinstance(element.opening.name, Identifier):
    return None
  if element.opening.self_closing:
    return None

  children = filter_empty_text(element.children)
  if not children:
    return None
  if is_already_function(children) or not needs_wrapping(children):
    return None

  body = build_thunk_body(children, element)
  if body is None:
    return None

  source = children[0] if len(children) == 1 and isinstance(children[0], JSXExpressionContainer) else None
  return JSXElement(
    opening=element.opening,
    children=[make_thunk(body, source)],
    closing=element.closing,
  )
