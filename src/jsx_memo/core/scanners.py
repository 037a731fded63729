"""
Observable Read Scanners.

Static detectors deciding whether an expression or an element's attributes
perform a render-time observable read, i.e. a zero-argument call such as
``count$.get()`` or ``user$.profile.name.get()``.

Rules:
1.  The callee must be a (possibly optional) dotted property access whose
    property name is one of the configured method names.
2.  The call must pass zero arguments. ``map.get(key)`` never qualifies.
3.  Unless ``all_reads`` is set, the root identifier of the access chain must
    end with the marker suffix (``$`` by default).
4.  Function literals are opaque: a read inside an event handler or a
    memoized callback runs later, not during render.

All detectors are total. Unknown node kinds simply do not qualify.
"""

from dataclasses import dataclass
from typing import FrozenSet, Optional

from jsx_memo.core.nodes import (
  FUNCTION_TYPES,
  CallExpression,
  Identifier,
  JsNode,
  JSXAttribute,
  JSXEmptyExpression,
  JSXExpressionContainer,
  JSXOpeningElement,
  JSXSpreadAttribute,
  MemberExpression,
  iter_children,
  unwrap_parens,
)

# `key` drives list reconciliation and `ref` is an imperative handle.
EXEMPT_ATTRIBUTES = frozenset({"key", "ref"})


@dataclass(frozen=True)
class ReadPolicy:
  """
  Immutable read-detection options.

  Attributes:
      all_reads (bool): Accept any root, not just marker-suffixed ones.
      method_names (FrozenSet[str]): Property names that count as reads.
      suffix (str): Naming marker required on the root identifier.
  """

  all_reads: bool = False
  method_names: FrozenSet[str] = frozenset({"get"})
  suffix: str = "$"


DEFAULT_POLICY = ReadPolicy()


def get_root_identifier(node: JsNode) -> Optional[Identifier]:
  """
  Unwraps a property-access chain to its base identifier.

  Dotted, optional and computed access are all traversed, as are enclosing
  parentheses; computed keys are never evaluated.

  Examples:
    ``user$.profile.name`` resolves to ``user$``; ``obs$.items[0]`` and
    ``(obs$).items`` resolve to ``obs$``; ``getStore().x`` has no root.

  Args:
      node: The expression to unwrap.

  Returns:
      Optional[Identifier]: The root identifier, or None for any other base.
  """
  current = unwrap_parens(node)
  while isinstance(current, MemberExpression):
    current = unwrap_parens(current.object)
  if isinstance(current, Identifier):
    return current
  return None


def is_reactive_read(node: JsNode, policy: ReadPolicy = DEFAULT_POLICY) -> bool:
  """
  Checks whether `node` itself is a qualifying observable read call.

  Args:
      node: Candidate node.
      policy: Detection options.

  Returns:
      bool: True for a zero-argument configured-method call on a qualifying root.
  """
  if not isinstance(node, CallExpression):
    return False

  callee = unwrap_parens(node.callee)
  if not isinstance(callee, MemberExpression) or callee.computed:
    return False
  if not isinstance(callee.property, Identifier):
    return False
  if callee.property.name not in policy.method_names:
    return False
  if node.arguments:
    return False

  if policy.all_reads:
    return True
  root = get_root_identifier(callee.object)
  return root is not None and root.name.endswith(policy.suffix)


def contains_reactive_read(node: JsNode, policy: ReadPolicy = DEFAULT_POLICY) -> bool:
  """
  Searches a subtree for a qualifying read, skipping function literals.

  The root is checked before its children. A root that is itself a function
  literal never qualifies.

  Args:
      node: Subtree root.
      policy: Detection options.

  Returns:
      bool: True on the first qualifying call found in pre-order.
  """
  stack = [node]
  while stack:
    current = stack.pop()
    if isinstance(current, FUNCTION_TYPES):
      continue
    if is_reactive_read(current, policy):
      return True
    stack.extend(reversed(list(iter_children(current))))
  return False


def has_reactive_attribute(opening: JSXOpeningElement, policy: ReadPolicy = DEFAULT_POLICY) -> bool:
  """
  Checks an opening tag for any non-exempt attribute performing a read.

  Spread attributes are scanned through their argument. Regular attributes
  only count when their value is a non-empty expression container.

  Args:
      opening: The element's opening tag.
      policy: Detection options.

  Returns:
      bool: True if any attribute qualifies.
  """
  for attr in opening.attributes:
    if isinstance(attr, JSXSpreadAttribute):
      if contains_reactive_read(attr.argument, policy):
        return True
      continue

    if not isinstance(attr, JSXAttribute):
      continue
    if attr.name in EXEMPT_ATTRIBUTES:
      continue
    if not isinstance(attr.value, JSXExpressionContainer):
      continue
    if isinstance(attr.value.expression, JSXEmptyExpression):
      continue
    if contains_reactive_read(attr.value.expression, policy):
      return True

  return False
