"""
Auto-Wrap Pass.

Walks a module in pre-order and inserts boundary components around
render-time observable reads:

1.  **Element Rewriter**: normalizes the children of boundary-style components
    into a thunk, then wraps the whole element when one of its attributes
    reads an observable (``<Row title={t$.get()} />``).
2.  **Child Expression Rewriter**: wraps an expression container in children
    position when its expression reads an observable (``<div>{n$.get()}</div>``).

A parent element is always decided before its subtree is visited. When the
whole element has been wrapped the driver does not descend into the
replacement, so the same attribute read is never wrapped twice.
"""

import logging
from typing import List, Optional, Tuple

from jsx_memo.core.emitter import emit
from jsx_memo.core.nodes import (
  JsNode,
  JSXElement,
  JSXEmptyExpression,
  JSXExpressionContainer,
  Program,
  iter_children,
  replace_child,
)
from jsx_memo.core.rewriter.boundary import create_boundary
from jsx_memo.core.rewriter.context import RewriterContext
from jsx_memo.core.rewriter.contexts import is_inside_attribute, is_inside_observer_hoc, is_inside_reactive_context
from jsx_memo.core.rewriter.interface import RewriterPass
from jsx_memo.core.rewriter.normalization import wrap_children_as_function
from jsx_memo.core.scanners import contains_reactive_read, has_reactive_attribute

logger = logging.getLogger(__name__)

Ancestors = Tuple[JsNode, ...]


class AutoWrapPass(RewriterPass):
  """
  Transformation pass inserting boundary components.
  """

  name = "Auto-Wrap"

  def transform(self, program: Program, context: RewriterContext) -> Program:
    """
    Executes the boundary insertion logic in place.

    Args:
        program: The module tree.
        context: Per-file rewriter state.

    Returns:
        The same, mutated tree.
    """
    AutoWrapTransformer(context).visit(program)
    return program


class AutoWrapTransformer:
  """
  Traversal driver for boundary insertion.

  Each visit returns the node that now occupies the slot (the original or a
  replacement) and whether the driver may descend into it.
  """

  def __init__(self, context: RewriterContext) -> None:
    self.context = context
    self.settings = context.settings

  def visit(self, root: JsNode) -> None:
    """
    Pre-order traversal with in-place substitution.

    Uses an explicit stack so deeply nested markup cannot exhaust the
    interpreter's recursion limit.
    """
    stack: List[Tuple[JsNode, Optional[JsNode], Ancestors]] = [(root, None, ())]

    while stack:
      node, parent, ancestors = stack.pop()
      current, descend = self._rewrite(node, ancestors)

      if current is not node:
        if parent is None:
          raise ValueError("The module root cannot be replaced")
        replace_child(parent, node, current)

      if not descend:
        continue

      child_ancestors = ancestors + (current,)
      for child in reversed(list(iter_children(current))):
        stack.append((child, current, child_ancestors))

  def _rewrite(self, node: JsNode, ancestors: Ancestors) -> Tuple[JsNode, bool]:
    if isinstance(node, JSXElement):
      return self.rewrite_element(node, ancestors)
    if isinstance(node, JSXExpressionContainer):
      return self.rewrite_expression_container(node, ancestors), True
    return node, True

  # --- Element Rewriter ---

  def rewrite_element(self, element: JSXElement, ancestors: Ancestors) -> Tuple[JsNode, bool]:
    """
    Per-element procedure.

    1. Normalize children when the tag is a boundary-style component.
    2. Stop if already inside a reactive context or an observer HOC.
    3. Wrap the whole element if a non-exempt attribute reads an observable.

    Returns:
        Tuple[JsNode, bool]: The node now in the slot, and whether to descend into it.
    """
    settings = self.settings
    tracer = self.context.tracer

    if element.tag is not None and element.tag in settings.wrap_children_components:
      normalized = wrap_children_as_function(element)
      if normalized is not None:
        logger.debug("Normalized children of <%s>", element.tag)
        tracer.log_normalization(element.tag, emit(element), emit(normalized))
        element = normalized

    if is_inside_reactive_context(ancestors, settings.reactive_components):
      return element, True
    if is_inside_observer_hoc(ancestors, settings.observer_names):
      return element, True

    if not has_reactive_attribute(element.opening, settings.policy):
      return element, True

    before = emit(element)
    boundary = create_boundary(element, settings.component_name)
    self.context.mark_rewrite()
    tracer.log_boundary("JSXElement", before, emit(boundary))
    logger.debug("Wrapped element <%s>", element.tag or "?")
    return boundary, False

  # --- Child Expression Rewriter ---

  def rewrite_expression_container(self, container: JSXExpressionContainer, ancestors: Ancestors) -> JsNode:
    """
    Wraps a children-position container whose expression reads an observable.

    The container itself is replaced by the boundary element.

    Returns:
        JsNode: The original container, or the boundary replacing it.
    """
    settings = self.settings

    if is_inside_attribute(ancestors):
      return container
    if is_inside_reactive_context(ancestors, settings.reactive_components):
      return container
    if is_inside_observer_hoc(ancestors, settings.observer_names):
      return container

    expression = container.expression
    if isinstance(expression, JSXEmptyExpression):
      return container
    if not contains_reactive_read(expression, settings.policy):
      return container

    boundary = create_boundary(expression, settings.component_name, container)
    self.context.mark_rewrite()
    self.context.tracer.log_boundary("JSXExpressionContainer", emit(container), emit(boundary))
    logger.debug("Wrapped child expression")
    return boundary
