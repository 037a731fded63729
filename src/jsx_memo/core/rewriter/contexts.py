"""
Context Classification.

Ancestor checks deciding whether a node already sits in a region where
fine-grained wrapping is redundant:

1.  **Reactive context**: an enclosing JSX element whose plain tag name is a
    recognized boundary component (``<Memo>``, ``<Show>``, ``<For>``, ...).
2.  **Observer HOC**: an enclosing call whose callee is a plain identifier
    naming an observer wrapper (``observer(() => ...)``).
3.  **Attribute position**: an enclosing attribute or spread attribute.

Ancestors are passed as a tuple ordered from the root down to the direct
parent; the node under test is never part of it.
"""

from typing import AbstractSet, Sequence

from jsx_memo.core.nodes import CallExpression, Identifier, JsNode, JSXAttribute, JSXElement, JSXSpreadAttribute


def is_inside_reactive_context(ancestors: Sequence[JsNode], reactive_components: AbstractSet[str]) -> bool:
  """
  Checks for an enclosing boundary component.

  Args:
      ancestors: Enclosing nodes, outermost first.
      reactive_components: Recognized boundary tag names.

  Returns:
      bool: True if any ancestor element carries one of the names.
  """
  for node in reversed(ancestors):
    if isinstance(node, JSXElement) and node.tag in reactive_components:
      return True
  return False


def is_inside_observer_hoc(ancestors: Sequence[JsNode], observer_names: AbstractSet[str]) -> bool:
  """
  Checks for an enclosing observer higher-order call.

  Member callees such as ``mobx.observer(...)`` do not count.
  """
  for node in reversed(ancestors):
    if isinstance(node, CallExpression) and isinstance(node.callee, Identifier):
      if node.callee.name in observer_names:
        return True
  return False


def is_inside_attribute(ancestors: Sequence[JsNode]) -> bool:
  """True if any ancestor is an attribute or a spread attribute."""
  return any(isinstance(node, (JSXAttribute, JSXSpreadAttribute)) for node in ancestors)
