"""
Tests for the JSX/TSX Parser Adapter.

Verifies:
1.  Lossless round-tripping of untouched source.
2.  Conversion of the node kinds the detectors inspect.
3.  Syntax errors surface as `JsxSyntaxError` with a position.
"""

import pytest

from jsx_memo.core.emitter import emit
from jsx_memo.core.errors import JsxSyntaxError
from jsx_memo.core.nodes import (
  ArrowFunction,
  CallExpression,
  FunctionNode,
  Identifier,
  ImportDeclaration,
  JSXAttribute,
  JSXElement,
  JSXEmptyExpression,
  JSXExpressionContainer,
  JSXFragment,
  JSXSpreadAttribute,
  JSXText,
  MemberExpression,
  Opaque,
  ParenthesizedExpression,
)
from jsx_memo.core.parser import parse_jsx

ROUND_TRIP_SOURCES = [
  "const App = () => <div>{count$.get()}</div>;\n",
  '"use client";\n\nimport React from "react";\n\nexport function App() {\n  return (\n    <ul>\n      {items$.get().map((item) => (\n        <li key={item.id}>{item.name}</li>\n      ))}\n    </ul>\n  );\n}\n',
  "type Props = { title: string };\n// greet\nexport const Hello = ({ title }: Props) => <h1 className=\"big\">Hello, {title}!</h1>;\n",
  "const A = () => <>\n  {/* comment */}\n  <Row {...rest} data-id='x' />\n</>;\n",
  "const B = () => <UI.Row value={obs$?.items[0].get()} />;\n",
]


@pytest.mark.parametrize("source", ROUND_TRIP_SOURCES)
def test_round_trip_is_lossless(source):
  assert emit(parse_jsx(source)) == source


def test_member_chain_conversion(expr):
  node = expr("user$.profile.name.get()")
  assert isinstance(node, CallExpression)
  assert node.arguments == []

  callee = node.callee
  assert isinstance(callee, MemberExpression)
  assert isinstance(callee.property, Identifier)
  assert callee.property.name == "get"
  assert isinstance(callee.object, MemberExpression)


def test_optional_member_flag(expr):
  node = expr("obs$?.get()")
  assert isinstance(node, CallExpression)
  assert node.callee.optional is True


def test_computed_member_flag(expr):
  node = expr("obs$.items[0]")
  assert isinstance(node, MemberExpression)
  assert node.computed is True
  assert isinstance(node.object, MemberExpression)


def test_call_arguments(expr):
  node = expr("cache.get(key, 1)")
  assert isinstance(node, CallExpression)
  assert len(node.arguments) == 2


def test_function_literals(expr):
  arrow = expr("() => a$.get()")
  assert isinstance(arrow, ArrowFunction)
  assert isinstance(arrow.body, CallExpression)

  paren = expr("(function () { return a$.get(); })")
  assert isinstance(paren, ParenthesizedExpression)
  assert isinstance(paren.expression, FunctionNode)


def test_jsx_element_parts(expr):
  node = expr('<Show when={ok$.get()} label="x">text{value}{}</Show>')
  assert isinstance(node, JSXElement)
  assert node.tag == "Show"
  assert node.closing is not None

  attrs = node.opening.attributes
  assert [a.name for a in attrs] == ["when", "label"]
  assert isinstance(attrs[0].value, JSXExpressionContainer)
  assert isinstance(attrs[1].value, Opaque)

  kinds = [type(c) for c in node.children]
  assert kinds == [JSXText, JSXExpressionContainer, JSXExpressionContainer]
  assert isinstance(node.children[2].expression, JSXEmptyExpression)


def test_self_closing_and_spread(expr):
  node = expr("<Row {...props$.get()} disabled />")
  assert isinstance(node, JSXElement)
  assert node.opening.self_closing
  assert node.children == []

  spread, flag = node.opening.attributes
  assert isinstance(spread, JSXSpreadAttribute)
  assert isinstance(spread.argument, CallExpression)
  assert isinstance(flag, JSXAttribute)
  assert flag.value is None


def test_fragment(expr):
  node = expr("<><A /><B /></>")
  assert isinstance(node, JSXFragment)
  assert len(node.children) == 2


def test_comment_only_container_is_empty(expr):
  node = expr("<div>{/* nothing */}</div>")
  container = node.children[0]
  assert isinstance(container.expression, JSXEmptyExpression)


def test_import_declaration():
  program = parse_jsx('import React, { Memo as M, Show } from "@legendapp/state/react";\n')
  decl = program.body[0]
  assert isinstance(decl, ImportDeclaration)
  assert decl.source == "@legendapp/state/react"
  assert decl.default == "React"
  assert [(s.imported, s.local) for s in decl.specifiers] == [("Memo", "M"), ("Show", "Show")]


def test_namespace_import():
  program = parse_jsx('import * as legend from "@legendapp/state/react";\n')
  decl = program.body[0]
  assert decl.namespace == "legend"
  assert decl.specifiers == []


def test_syntax_error_carries_position():
  with pytest.raises(JsxSyntaxError) as excinfo:
    parse_jsx("const a = 1;\nconst b = );\n")

  err = excinfo.value
  assert err.line == 2
  assert err.column is not None
  assert "line 2" in str(err)


def test_unclosed_element_is_an_error():
  with pytest.raises(JsxSyntaxError):
    parse_jsx("const A = <div>;")
