"""
JSX/TSX Parser Adapter.

Parses source text with the ``tree-sitter`` TSX grammar and converts the
concrete syntax tree into the node model of :mod:`jsx_memo.core.nodes`.

Only the kinds the transformer inspects get dedicated variants; everything
else becomes an :class:`Opaque` node. Each converted node records a layout
built from the byte gaps between its child slots, which keeps punctuation,
whitespace, comments and type annotations verbatim.

Conversion handlers are generators. A handler yields each tree-sitter child
it needs converted and receives the converted node back, and a single loop in
:meth:`JsxParser._convert` drives them. Nesting depth is therefore bounded by
memory rather than by the interpreter's recursion limit.
"""

from typing import Callable, Dict, Generator, List, Optional, Tuple

import tree_sitter
import tree_sitter_typescript

from jsx_memo.core.errors import JsxSyntaxError
from jsx_memo.core.nodes import (
  ArrowFunction,
  CallExpression,
  FunctionNode,
  Identifier,
  ImportDeclaration,
  ImportSpecifier,
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

_TSX_LANGUAGE = tree_sitter.Language(tree_sitter_typescript.language_tsx())

IDENTIFIER_KINDS = frozenset(
  {
    "identifier",
    "property_identifier",
    "shorthand_property_identifier",
    "private_property_identifier",
  }
)

FUNCTION_KINDS = frozenset(
  {
    "function_expression",
    "function",
    "function_declaration",
    "generator_function",
    "generator_function_declaration",
    "method_definition",
  }
)

JSX_TEXT_KINDS = frozenset({"jsx_text", "html_character_reference"})

Slot = Tuple[tree_sitter.Node, JsNode]

# Yields tree-sitter nodes to convert, receives their JsNode, returns the result.
Conversion = Generator[tree_sitter.Node, JsNode, JsNode]


def _named(node: tree_sitter.Node) -> List[tree_sitter.Node]:
  """Named children without comments."""
  return [c for c in node.named_children if c.type != "comment"]


def _same(a: Optional[tree_sitter.Node], b: Optional[tree_sitter.Node]) -> bool:
  if a is None or b is None:
    return False
  return a.type == b.type and a.start_byte == b.start_byte and a.end_byte == b.end_byte


def _is_optional(node: tree_sitter.Node) -> bool:
  return any(c.type in ("optional_chain", "?.") for c in node.children)


class JsxParser:
  """
  Facade turning JSX/TSX source text into a :class:`Program`.

  Usage::

      program = JsxParser("const a = <div>{x$.get()}</div>;").parse()
  """

  def __init__(self, source: str) -> None:
    self.source = source
    self._bytes = source.encode("utf-8")
    self._dispatch: Dict[str, Callable[[tree_sitter.Node], Conversion]] = {
      "member_expression": self._member,
      "subscript_expression": self._subscript,
      "call_expression": self._call,
      "arrow_function": self._arrow,
      "parenthesized_expression": self._parenthesized,
      "jsx_element": self._jsx_element,
      "jsx_fragment": self._jsx_fragment,
      "jsx_self_closing_element": self._self_closing,
    }

  def parse(self) -> Program:
    """
    Parses the source.

    Returns:
        Program: The converted module root.

    Raises:
        JsxSyntaxError: If the grammar reports any ERROR or MISSING node.
    """
    parser = tree_sitter.Parser(_TSX_LANGUAGE)
    tree = parser.parse(self._bytes)
    root = tree.root_node
    if root.has_error:
      raise self._syntax_error(root)

    statements = root.named_children
    body = [self._convert(c) for c in statements]
    return Program(body=body, layout=self._layout(0, len(self._bytes), list(zip(statements, body))))

  # --- Helpers ---

  def _text(self, node: tree_sitter.Node) -> str:
    return self._bytes[node.start_byte : node.end_byte].decode("utf-8")

  def _layout(self, start: int, end: int, slots: List[Slot]) -> List[LayoutPart]:
    """
    Builds a layout covering ``[start, end)`` from ordered child slots.

    Bytes not covered by a slot are kept as raw text fragments.
    """
    parts: List[LayoutPart] = []
    cursor = start
    for ts_node, js_node in sorted(slots, key=lambda s: s[0].start_byte):
      if ts_node.start_byte > cursor:
        parts.append(self._bytes[cursor : ts_node.start_byte].decode("utf-8"))
      parts.append(js_node)
      cursor = ts_node.end_byte
    if end > cursor:
      parts.append(self._bytes[cursor:end].decode("utf-8"))
    return parts

  def _node_layout(self, node: tree_sitter.Node, slots: List[Slot]) -> List[LayoutPart]:
    return self._layout(node.start_byte, node.end_byte, slots)

  def _syntax_error(self, root: tree_sitter.Node) -> JsxSyntaxError:
    stack = [root]
    while stack:
      current = stack.pop()
      if current.type == "ERROR" or current.is_missing:
        row, column = current.start_point[0], current.start_point[1]
        kind = "missing token" if current.is_missing else "unexpected syntax"
        return JsxSyntaxError(f"Failed to parse JSX: {kind}", line=row + 1, column=column + 1)
      stack.extend(reversed(current.children))
    return JsxSyntaxError("Failed to parse JSX")

  # --- Driver ---

  def _convert(self, root: tree_sitter.Node) -> JsNode:
    """
    Converts a subtree with an explicit stack of suspended handlers.

    Leaves are built immediately. Any other node pushes its handler, which
    runs until it asks for a child; a finished handler's result is sent to
    the handler below it.
    """
    stack: List[Conversion] = []
    node = root
    while True:
      value = self._leaf(node)
      if value is None:
        stack.append(self._handler(node))

      while stack:
        try:
          node = stack[-1].send(value)
          break
        except StopIteration as done:
          stack.pop()
          value = done.value
      else:
        return value

  def _leaf(self, node: tree_sitter.Node) -> Optional[JsNode]:
    if node.type in IDENTIFIER_KINDS:
      text = self._text(node)
      return Identifier(name=text, layout=[text])
    if node.type == "import_statement" and node.child_by_field_name("source") is not None:
      return self._import(node)
    return None

  def _handler(self, node: tree_sitter.Node) -> Conversion:
    if node.type in FUNCTION_KINDS:
      return self._function(node)
    handler = self._dispatch.get(node.type)
    if handler:
      return handler(node)
    return self._opaque(node)

  # --- Conversion ---

  def _convert_all(self, nodes: List[tree_sitter.Node]) -> Generator[tree_sitter.Node, JsNode, List[JsNode]]:
    converted = []
    for child in nodes:
      converted.append((yield child))
    return converted

  def _opaque(self, node: tree_sitter.Node) -> Conversion:
    named = node.named_children
    children = yield from self._convert_all(named)
    return Opaque(kind=node.type, children=children, layout=self._node_layout(node, list(zip(named, children))))

  def _function(self, node: tree_sitter.Node) -> Conversion:
    named = node.named_children
    children = yield from self._convert_all(named)
    return FunctionNode(kind=node.type, children=children, layout=self._node_layout(node, list(zip(named, children))))

  def _member(self, node: tree_sitter.Node) -> Conversion:
    obj_ts = node.child_by_field_name("object")
    prop_ts = node.child_by_field_name("property")
    if obj_ts is None or prop_ts is None:
      return (yield from self._opaque(node))
    obj = yield obj_ts
    prop = yield prop_ts
    return MemberExpression(
      object=obj,
      property=prop,
      computed=False,
      optional=_is_optional(node),
      layout=self._node_layout(node, [(obj_ts, obj), (prop_ts, prop)]),
    )

  def _subscript(self, node: tree_sitter.Node) -> Conversion:
    obj_ts = node.child_by_field_name("object")
    index_ts = node.child_by_field_name("index")
    if obj_ts is None or index_ts is None:
      return (yield from self._opaque(node))
    obj = yield obj_ts
    index = yield index_ts
    return MemberExpression(
      object=obj,
      property=index,
      computed=True,
      optional=_is_optional(node),
      layout=self._node_layout(node, [(obj_ts, obj), (index_ts, index)]),
    )

  def _call(self, node: tree_sitter.Node) -> Conversion:
    fn_ts = node.child_by_field_name("function")
    args_ts = node.child_by_field_name("arguments")
    # Tagged templates stay opaque.
    if fn_ts is None or args_ts is None or args_ts.type != "arguments":
      return (yield from self._opaque(node))

    callee = yield fn_ts
    arg_nodes = _named(args_ts)
    arguments = yield from self._convert_all(arg_nodes)
    slots: List[Slot] = [(fn_ts, callee), *zip(arg_nodes, arguments)]
    return CallExpression(
      callee=callee,
      arguments=arguments,
      optional=_is_optional(node),
      layout=self._node_layout(node, slots),
    )

  def _arrow(self, node: tree_sitter.Node) -> Conversion:
    body_ts = node.child_by_field_name("body")
    if body_ts is None:
      return (yield from self._opaque(node))
    params_ts = node.child_by_field_name("parameters")
    if params_ts is None:
      params_ts = node.child_by_field_name("parameter")

    params = None
    slots: List[Slot] = []
    if params_ts is not None:
      params = yield params_ts
      slots.append((params_ts, params))
    body = yield body_ts
    slots.append((body_ts, body))
    return ArrowFunction(body=body, params=params, layout=self._node_layout(node, slots))

  def _parenthesized(self, node: tree_sitter.Node) -> Conversion:
    inner = _named(node)
    if len(inner) != 1:
      return (yield from self._opaque(node))
    expression = yield inner[0]
    return ParenthesizedExpression(expression=expression, layout=self._node_layout(node, [(inner[0], expression)]))

  def _import(self, node: tree_sitter.Node) -> ImportDeclaration:
    source_ts = node.child_by_field_name("source")
    decl = ImportDeclaration(source=self._text(source_ts)[1:-1], layout=[self._text(node)])
    clause = next((c for c in node.named_children if c.type == "import_clause"), None)
    if clause is None:
      return decl

    for part in clause.named_children:
      if part.type == "identifier":
        decl.default = self._text(part)
      elif part.type == "namespace_import":
        names = [c for c in part.named_children if c.type == "identifier"]
        if names:
          decl.namespace = self._text(names[0])
      elif part.type == "named_imports":
        for spec in part.named_children:
          if spec.type != "import_specifier":
            continue
          name_ts = spec.child_by_field_name("name")
          if name_ts is None:
            continue
          imported = self._text(name_ts)
          if name_ts.type == "string":
            imported = imported[1:-1]
          alias_ts = spec.child_by_field_name("alias")
          local = self._text(alias_ts) if alias_ts is not None else imported
          decl.specifiers.append(ImportSpecifier(imported=imported, local=local, layout=[self._text(spec)]))
    return decl

  # --- JSX ---

  def _jsx_element(self, node: tree_sitter.Node) -> Conversion:
    open_ts = node.child_by_field_name("open_tag")
    close_ts = node.child_by_field_name("close_tag")
    if open_ts is None:
      open_ts = next((c for c in node.named_children if c.type == "jsx_opening_element"), None)
    if close_ts is None:
      close_ts = next((c for c in node.named_children if c.type == "jsx_closing_element"), None)
    if open_ts is None:
      return (yield from self._opaque(node))

    content_ts = [
      c for c in node.named_children if not _same(c, open_ts) and not _same(c, close_ts) and c.type != "comment"
    ]

    # Newer grammars model `<>...</>` as an element whose tags carry no name.
    if open_ts.child_by_field_name("name") is None:
      children = yield from self._jsx_children(content_ts)
      return JSXFragment(children=children, layout=self._node_layout(node, list(zip(content_ts, children))))

    opening = yield from self._opening(open_ts, self_closing=False)
    children = yield from self._jsx_children(content_ts)
    slots: List[Slot] = [(open_ts, opening), *zip(content_ts, children)]
    closing = None
    if close_ts is not None:
      closing = yield from self._closing(close_ts)
      slots.append((close_ts, closing))
    return JSXElement(opening=opening, children=children, closing=closing, layout=self._node_layout(node, slots))

  def _jsx_fragment(self, node: tree_sitter.Node) -> Conversion:
    content_ts = [c for c in node.named_children if c.type != "comment"]
    children = yield from self._jsx_children(content_ts)
    return JSXFragment(children=children, layout=self._node_layout(node, list(zip(content_ts, children))))

  def _self_closing(self, node: tree_sitter.Node) -> Conversion:
    opening = yield from self._opening(node, self_closing=True)
    return JSXElement(opening=opening, children=[], closing=None, layout=[opening])

  def _jsx_children(self, nodes: List[tree_sitter.Node]) -> Generator[tree_sitter.Node, JsNode, List[JsNode]]:
    children = []
    for child in nodes:
      children.append((yield from self._jsx_child(child)))
    return children

  def _jsx_child(self, node: tree_sitter.Node) -> Conversion:
    if node.type in JSX_TEXT_KINDS:
      text = self._text(node)
      return JSXText(value=text, layout=[text])
    if node.type == "jsx_expression":
      inner = _named(node)
      if inner and inner[0].type == "spread_element":
        return (yield from self._opaque(node))
      return (yield from self._jsx_expression(node))
    return (yield node)

  def _jsx_expression(self, node: tree_sitter.Node) -> Conversion:
    inner = _named(node)
    if not inner:
      return JSXExpressionContainer(expression=JSXEmptyExpression(layout=[]), layout=[self._text(node)])
    expression = yield inner[0]
    return JSXExpressionContainer(expression=expression, layout=self._node_layout(node, [(inner[0], expression)]))

  def _jsx_name(self, node: tree_sitter.Node) -> Conversion:
    if node.type in ("identifier", "member_expression"):
      return (yield node)
    return (yield from self._opaque(node))

  def _opening(self, node: tree_sitter.Node, self_closing: bool) -> Conversion:
    name_ts = node.child_by_field_name("name")
    name = yield from self._jsx_name(name_ts)
    slots: List[Slot] = [(name_ts, name)]
    attributes: List[JsNode] = []

    for child in node.named_children:
      if _same(child, name_ts):
        continue
      if child.type == "jsx_attribute":
        attr = yield from self._jsx_attribute(child)
      elif child.type == "jsx_expression":
        attr = yield from self._spread_attribute(child)
      else:
        # Type arguments and comments stay in the layout as raw text.
        continue
      attributes.append(attr)
      slots.append((child, attr))

    return JSXOpeningElement(
      name=name,
      attributes=attributes,
      self_closing=self_closing,
      layout=self._node_layout(node, slots),
    )

  def _closing(self, node: tree_sitter.Node) -> Conversion:
    name_ts = node.child_by_field_name("name")
    if name_ts is None:
      return JSXClosingElement(name=Identifier(name=""), layout=[self._text(node)])
    name = yield from self._jsx_name(name_ts)
    return JSXClosingElement(name=name, layout=self._node_layout(node, [(name_ts, name)]))

  def _jsx_attribute(self, node: tree_sitter.Node) -> Conversion:
    parts = _named(node)
    name = self._text(parts[0]) if parts else ""
    if len(parts) < 2:
      return JSXAttribute(name=name, value=None, layout=[self._text(node)])

    value_ts = parts[1]
    if value_ts.type == "jsx_expression":
      value = yield from self._jsx_expression(value_ts)
    else:
      value = yield value_ts
    return JSXAttribute(name=name, value=value, layout=self._node_layout(node, [(value_ts, value)]))

  def _spread_attribute(self, node: tree_sitter.Node) -> Conversion:
    inner = _named(node)
    if not inner or inner[0].type != "spread_element":
      return (yield from self._opaque(node))
    arg_nodes = _named(inner[0])
    if not arg_nodes:
      return (yield from self._opaque(node))
    argument = yield arg_nodes[0]
    return JSXSpreadAttribute(argument=argument, layout=self._node_layout(node, [(arg_nodes[0], argument)]))


def parse_jsx(source: str) -> Program:
  """Convenience wrapper around :class:`JsxParser`."""
  return JsxParser(source).parse()
