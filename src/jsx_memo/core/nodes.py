"""
JSX Syntax Tree Nodes.

Defines the closed set of node variants the transformer reasons about.
Every node kind that a detector inspects has its own dataclass; all other
grammar constructs are carried as :class:`Opaque` nodes so that nested JSX
anywhere in a module remains reachable.

Parsed nodes keep a *layout*: the original source text fragments interleaved
with child nodes, in document order. Emitting a parsed node joins its layout,
so code that no rewrite touched is reproduced byte for byte. Nodes created by
the rewriter have ``layout=None`` and are emitted structurally.

Mutation happens exclusively through :func:`replace_child`, which swaps a child
both in the typed field that holds it and in the parent's layout.
"""

from dataclasses import dataclass, field, fields
from typing import Iterator, List, Optional, Union

LayoutPart = Union[str, "JsNode"]


@dataclass(eq=False)
class JsNode:
  """
  Base class for all syntax tree nodes.

  Attributes:
      layout (Optional[List]): Source fragments and child nodes in document order.
          ``None`` for synthesized nodes.
  """

  layout: Optional[List[LayoutPart]] = field(default=None, kw_only=True, repr=False)


# --- Expressions ---


@dataclass(eq=False)
class Identifier(JsNode):
  """A plain name (`count$`, `div`, `observer`)."""

  name: str


@dataclass(eq=False)
class MemberExpression(JsNode):
  """
  Property access: ``a.b``, ``a?.b``, ``a[i]`` or ``a?.[i]``.

  Attributes:
      object (JsNode): The accessed operand.
      property (JsNode): An Identifier for dotted access, any expression when computed.
      computed (bool): True for bracket access.
      optional (bool): True when the access uses ``?.``.
  """

  object: JsNode
  property: JsNode
  computed: bool = False
  optional: bool = False


@dataclass(eq=False)
class CallExpression(JsNode):
  """
  A call ``callee(args)`` or ``callee?.(args)``.

  Attributes:
      callee (JsNode): The invoked expression.
      arguments (List[JsNode]): Positional arguments, spreads included.
      optional (bool): True for ``callee?.()``.
  """

  callee: JsNode
  arguments: List[JsNode] = field(default_factory=list)
  optional: bool = False


@dataclass(eq=False)
class ArrowFunction(JsNode):
  """
  An arrow function. Synthesized thunks have ``params=None`` and emit as ``() => body``.
  """

  body: JsNode
  params: Optional[JsNode] = None


@dataclass(eq=False)
class FunctionNode(JsNode):
  """
  Any non-arrow function literal: function expressions and declarations,
  generators, and method definitions. Only ever parsed, never synthesized.

  Attributes:
      kind (str): The grammar kind, e.g. ``function_declaration``.
      children (List[JsNode]): Named sub-nodes (name, parameters, body).
  """

  kind: str
  children: List[JsNode] = field(default_factory=list)


@dataclass(eq=False)
class ParenthesizedExpression(JsNode):
  expression: JsNode


@dataclass(eq=False)
class Opaque(JsNode):
  """
  Any grammar construct without a dedicated variant.

  The transformer never inspects an Opaque node beyond walking its children,
  so an unknown kind can only ever count as "not reactive".

  Attributes:
      kind (str): The grammar kind (e.g. ``binary_expression``, ``object``).
      children (List[JsNode]): Named sub-nodes in document order.
  """

  kind: str
  children: List[JsNode] = field(default_factory=list)


# --- Modules ---


@dataclass(eq=False)
class ImportSpecifier(JsNode):
  """A named import binding: ``{ imported as local }``."""

  imported: str
  local: str


@dataclass(eq=False)
class ImportDeclaration(JsNode):
  """
  An ``import`` statement.

  Attributes:
      source (str): The module path without quotes.
      specifiers (List[ImportSpecifier]): Named bindings.
      default (Optional[str]): Default binding name, if any.
      namespace (Optional[str]): ``* as ns`` binding name, if any.
  """

  source: str
  specifiers: List[ImportSpecifier] = field(default_factory=list)
  default: Optional[str] = None
  namespace: Optional[str] = None


@dataclass(eq=False)
class Program(JsNode):
  """The module root. ``body`` holds top-level statements and comments."""

  body: List[JsNode] = field(default_factory=list)


# --- JSX ---


@dataclass(eq=False)
class JSXText(JsNode):
  value: str

  @property
  def is_whitespace(self) -> bool:
    return not self.value.strip()


@dataclass(eq=False)
class JSXEmptyExpression(JsNode):
  """The empty slot in ``{}`` or ``{/* comment */}``."""


@dataclass(eq=False)
class JSXExpressionContainer(JsNode):
  """``{expression}`` in child or attribute-value position."""

  expression: JsNode


@dataclass(eq=False)
class JSXAttribute(JsNode):
  """
  ``name`` or ``name=value``.

  Attributes:
      name (str): Attribute name as written (``key``, ``className``, ``xlink:href``).
      value (Optional[JsNode]): String literal, expression container, element, or None.
  """

  name: str
  value: Optional[JsNode] = None


@dataclass(eq=False)
class JSXSpreadAttribute(JsNode):
  """``{...argument}`` in an opening tag."""

  argument: JsNode


@dataclass(eq=False)
class JSXOpeningElement(JsNode):
  """
  ``<name attrs>`` or ``<name attrs />``.

  Attributes:
      name (JsNode): Identifier for plain tags; MemberExpression or Opaque otherwise.
      attributes (List[JsNode]): JSXAttribute and JSXSpreadAttribute nodes.
      self_closing (bool): True for ``<name />``.
  """

  name: JsNode
  attributes: List[JsNode] = field(default_factory=list)
  self_closing: bool = False

  @property
  def tag(self) -> Optional[str]:
    """The plain identifier tag name, or None for member and namespaced tags."""
    if isinstance(self.name, Identifier):
      return self.name.name
    return None


@dataclass(eq=False)
class JSXClosingElement(JsNode):
  name: JsNode


@dataclass(eq=False)
class JSXElement(JsNode):
  """
  A JSX element. Self-closing elements have no children and ``closing=None``.
  """

  opening: JSXOpeningElement
  children: List[JsNode] = field(default_factory=list)
  closing: Optional[JSXClosingElement] = None

  @property
  def tag(self) -> Optional[str]:
    return self.opening.tag


@dataclass(eq=False)
class JSXFragment(JsNode):
  """``<>children</>``."""

  children: List[JsNode] = field(default_factory=list)


FUNCTION_TYPES = (ArrowFunction, FunctionNode)


def unwrap_parens(node: JsNode) -> JsNode:
  """Strips any number of enclosing parentheses: ``((count$))`` -> ``count$``."""
  while isinstance(node, ParenthesizedExpression):
    node = node.expression
  return node


def iter_children(node: JsNode) -> Iterator[JsNode]:
  """
  Yields the direct child nodes of `node` in field declaration order.

  Only typed fields are walked. Layout-only slots (comments kept for
  round-tripping) are not children.

  Args:
      node: Any tree node.

  Yields:
      JsNode: Each child node.
  """
  for f in fields(node):
    if f.name == "layout":
      continue
    value = getattr(node, f.name)
    if isinstance(value, JsNode):
      yield value
    elif isinstance(value, list):
      for item in value:
        if isinstance(item, JsNode):
          yield item


def replace_child(parent: JsNode, old: JsNode, new: JsNode) -> None:
  """
  Atomically substitutes `old` with `new` inside `parent`.

  The swap is applied to the typed field that holds `old` and to the parent's
  layout, so emission reflects the change. Matching is by identity.

  Args:
      parent: The node that directly owns `old`.
      old: The child to remove.
      new: The replacement.

  Raises:
      ValueError: If `old` is not a direct child of `parent`.
  """
  found = False
  for f in fields(parent):
    if f.name == "layout":
      continue
    value = getattr(parent, f.name)
    if value is old:
      setattr(parent, f.name, new)
      found = True
    elif isinstance(value, list):
      for i, item in enumerate(value):
        if item is old:
          value[i] = new
          found = True

  if not found:
    raise ValueError(f"{type(old).__name__} is not a child of {type(parent).__name__}")

  if parent.layout is not None:
    for i, part in enumerate(parent.layout):
      if part is old:
        parent.layout[i] = new
