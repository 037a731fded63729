"""
End-to-end tests for the Auto-Wrap Engine.

Each case feeds a small component through parse, rewrite, import injection
and emission, and compares the exact output text.
"""

import pytest
from pydantic import ValidationError

from jsx_memo import transform
from jsx_memo.config import AutoWrapConfig
from jsx_memo.core.engine import AutoWrapEngine, transform_file, transform_program
from jsx_memo.core.emitter import emit
from jsx_memo.core.parser import parse_jsx

IMPORT = 'import { Memo } from "@legendapp/state/react";\n'


# --- Core Scenarios ---


def test_child_expression_read():
  code = "const App = () => <div>{count$.get()}</div>;\n"
  assert transform(code) == IMPORT + "const App = () => <div><Memo>{() => count$.get()}</Memo></div>;\n"


def test_attribute_read_wraps_element():
  code = "const App = () => <Component value={obs$.get()} />;\n"
  assert transform(code) == IMPORT + "const App = () => <Memo>{() => <Component value={obs$.get()} />}</Memo>;\n"


def test_key_attribute_is_exempt():
  code = "const App = () => <li key={item$.id.get()}>content</li>;\n"
  assert transform(code) == code


def test_event_handler_read_is_ignored():
  code = "const App = () => <button onClick={() => count$.get()}>click</button>;\n"
  assert transform(code) == code


def test_memo_children_are_normalized():
  code = "const App = () => <Memo>{count$.get()}</Memo>;\n"
  assert transform(code) == "const App = () => <Memo>{() => count$.get()}</Memo>;\n"


# --- Component Fixtures ---


def test_show_with_reactive_condition():
  code = "const App = () => <Show when={obs$.get()}>{count$.get()}</Show>;\n"
  expected = IMPORT + "const App = () => <Memo>{() => <Show when={obs$.get()}>{() => count$.get()}</Show>}</Memo>;\n"
  assert transform(code) == expected


def test_map_over_observable_list():
  code = "const List = () => <ul>{items$.get().map((item) => <li key={item.id}>{item.name}</li>)}</ul>;\n"
  expected = (
    IMPORT
    + "const List = () => <ul><Memo>{() => items$.get().map((item) => <li key={item.id}>{item.name}</li>)}</Memo></ul>;\n"
  )
  assert transform(code) == expected


def test_multiline_component():
  code = (
    "export function Counter() {\n"
    "  return (\n"
    "    <div className=\"counter\">\n"
    "      <span>{count$.get()}</span>\n"
    "      <button onClick={() => count$.set((c) => c + 1)}>+</button>\n"
    "    </div>\n"
    "  );\n"
    "}\n"
  )
  expected = IMPORT + code.replace("<span>{count$.get()}</span>", "<span><Memo>{() => count$.get()}</Memo></span>")
  assert transform(code) == expected


def test_fragment_children():
  code = "const App = () => <>{count$.get()}</>;\n"
  assert transform(code) == IMPORT + "const App = () => <><Memo>{() => count$.get()}</Memo></>;\n"


@pytest.mark.parametrize(
  "read",
  [
    "obs$?.get()",
    "obs$.items[0].get()",
    "user$.profile.name.get()",
    "`${a$.get()} items`",
    "(count$).get()",
    "(obs$.get)()",
  ],
)
def test_read_shapes(read):
  code = f"const App = () => <p>{{{read}}}</p>;\n"
  assert transform(code) == IMPORT + f"const App = () => <p><Memo>{{() => {read}}}</Memo></p>;\n"


@pytest.mark.parametrize(
  "code",
  [
    "const App = observer(() => <div>{count$.get()}</div>);\n",
    "const App = () => <div>{useMemo(() => total$.get(), [])}</div>;\n",
    "const App = () => <div>{useCallback(() => total$.get(), [])}</div>;\n",
    "const App = () => <div>{cache.get(key)}</div>;\n",
    "const App = () => <div>{store.get()}</div>;\n",
    "const App = () => <input ref={el$.get()} />;\n",
    "const App = () => <For each={list$}>{(item) => <Row>{item.get()}</Row>}</For>;\n",
    "const App = () => <Memo>{() => count$.get()}</Memo>;\n",
    "const App = () => <div title=\"static\">{/* note */}</div>;\n",
  ],
)
def test_no_rewrite(code):
  assert transform(code) == code


def test_spread_attribute_wraps_element():
  code = "const App = () => <Comp {...props$.get()} />;\n"
  assert transform(code) == IMPORT + "const App = () => <Memo>{() => <Comp {...props$.get()} />}</Memo>;\n"


def test_attribute_reads_nested_in_child_elements():
  code = "const App = () => <div><Avatar src={user$.avatar.get()} /></div>;\n"
  assert transform(code) == IMPORT + "const App = () => <div><Memo>{() => <Avatar src={user$.avatar.get()} />}</Memo></div>;\n"


# --- Options ---


def test_all_get_option():
  code = "const App = () => <div>{store.get()}</div>;\n"
  assert transform(code, allGet=True) == IMPORT + "const App = () => <div><Memo>{() => store.get()}</Memo></div>;\n"


def test_all_get_still_ignores_keyed_lookups():
  code = "const App = () => <div>{cache.get(key)}</div>;\n"
  assert transform(code, all_get=True) == code


def test_component_name_and_import_source():
  code = "const App = () => <div>{count$.get()}</div>;\n"
  expected = 'import { Auto } from "my-lib";\nconst App = () => <div><Auto>{() => count$.get()}</Auto></div>;\n'
  assert transform(code, componentName="Auto", importSource="my-lib") == expected


def test_custom_component_is_reactive_context():
  code = "const App = () => <Auto><div>{count$.get()}</div></Auto>;\n"
  assert transform(code, componentName="Auto") == code


def test_reactive_components_option():
  code = "const App = () => <Reactive><div>{count$.get()}</div></Reactive>;\n"
  assert transform(code, reactiveComponents=["Reactive"]) == code


def test_observer_names_option():
  code = "const App = reactive(() => <div>{count$.get()}</div>);\n"
  assert transform(code, observerNames=["reactive"]) == code


def test_method_names_option():
  code = "const App = () => <div>{count$.peek()}</div>;\n"
  expected = IMPORT + "const App = () => <div><Memo>{() => count$.peek()}</Memo></div>;\n"
  assert transform(code, methodNames=["get", "peek"]) == expected


def test_disable_children_normalization():
  code = "const App = () => <Memo>{count$.get()}</Memo>;\n"
  assert transform(code, wrapReactiveChildren=False) == code


def test_extra_children_normalization_component():
  code = "const App = () => <Box>{count$.get()}</Box>;\n"
  assert transform(code, wrapReactiveChildrenComponents=["Box"]) == "const App = () => <Box>{() => count$.get()}</Box>;\n"


# --- Imports ---


def test_existing_import_not_duplicated():
  code = IMPORT + "const App = () => <div>{count$.get()}</div>;\n"
  out = transform(code)
  assert out.count("import { Memo }") == 1
  assert "<Memo>{() => count$.get()}</Memo>" in out


def test_import_from_other_source_adds_new_one():
  code = 'import { Memo } from "./local";\nconst App = () => <div>{count$.get()}</div>;\n'
  out = transform(code)
  assert out.startswith(IMPORT)
  assert out.count('"@legendapp/state/react"') == 1


def test_use_client_stays_first():
  code = '"use client";\n\nconst App = () => <div>{count$.get()}</div>;\n'
  out = transform(code)
  assert out.startswith('"use client";\n\n' + IMPORT)


def test_single_import_for_many_rewrites():
  code = "const App = () => <div>{a$.get()}{b$.get()}<Row title={c$.get()} /></div>;\n"
  result = AutoWrapEngine().run(code)

  assert result.rewrite_count == 3
  assert result.code.count(IMPORT) == 1


def test_double_run_is_stable():
  code = "const App = () => <section><Show when={ok$.get()}>{a$.get()}</Show><p>{b$.get()}</p></section>;\n"
  once = transform(code)
  assert transform(once) == once


# --- Engine Results ---


def test_result_flags():
  result = AutoWrapEngine().run("const App = () => <div>{count$.get()}</div>;\n")
  assert result.success
  assert result.changed
  assert result.rewrite_count == 1
  assert not result.errors


def test_unchanged_result():
  code = "const a = 1;\n"
  result = AutoWrapEngine().run(code)
  assert result.success
  assert not result.changed
  assert result.code == code


def test_parse_failure_keeps_original_code():
  code = "const App = () => <div>{count$.get()};\n"
  result = AutoWrapEngine().run(code)

  assert not result.success
  assert result.code == code
  assert result.errors[0].startswith("Parse Error")


def test_transform_raises_value_error():
  with pytest.raises(ValueError, match="Transform failed"):
    transform("const App = () => <div>;")


def test_engines_share_no_state():
  engine = AutoWrapEngine()
  first = engine.run("const A = () => <div>{a$.get()}</div>;\n")
  second = engine.run("const B = 1;\n")

  assert first.changed
  assert not second.changed
  assert "import" not in second.code


def test_transform_program_in_place():
  program = parse_jsx("const App = () => <div>{count$.get()}</div>;\n")
  context = transform_program(program, AutoWrapConfig())

  assert context.needs_import
  assert emit(program) == IMPORT + "const App = () => <div><Memo>{() => count$.get()}</Memo></div>;\n"


@pytest.mark.parametrize("filename", ["App.jsx", "src/App.tsx"])
def test_transform_file_accepts_jsx(filename):
  result = transform_file("const App = () => <div>{count$.get()}</div>;\n", filename)
  assert result is not None
  assert result.changed


@pytest.mark.parametrize("filename", ["util.ts", "index.js", "App.jsx.map", "styles.css"])
def test_transform_file_skips_other_files(filename):
  assert transform_file("const a = 1;\n", filename) is None


# --- Robustness ---


def test_deep_markup_is_transformed():
  depth = 1100
  code = "const App = () => " + "<div>" * depth + "{a$.get()}" + "</div>" * depth + ";\n"
  result = AutoWrapEngine().run(code)

  assert result.success
  assert result.code == IMPORT + code.replace("{a$.get()}", "<Memo>{() => a$.get()}</Memo>")


def test_long_expression_chain_is_transformed():
  expression = "a + " * 1200 + "n$.get()"
  code = f"const App = () => <div>{{{expression}}}</div>;\n"
  result = AutoWrapEngine().run(code)

  assert result.success
  assert result.code == IMPORT + f"const App = () => <div><Memo>{{() => {expression}}}</Memo></div>;\n"


def test_unexpected_failure_is_reported(monkeypatch):
  def explode(self, program):
    raise RecursionError("maximum recursion depth exceeded")

  monkeypatch.setattr(AutoWrapEngine, "to_source", explode)
  code = "const App = () => <div>{count$.get()}</div>;\n"
  result = AutoWrapEngine().run(code)

  assert not result.success
  assert result.code == code
  assert result.errors == ["Transform Error: RecursionError: maximum recursion depth exceeded"]


def test_comment_in_wrapped_braces_is_kept():
  code = "const App = () => <div>{count$.get() /* live */}</div>;\n"
  assert transform(code) == IMPORT + "const App = () => <div><Memo>{() => count$.get() /* live */}</Memo></div>;\n"


def test_misspelled_option_rejected():
  with pytest.raises(ValidationError, match="compnentName"):
    transform("const App = () => <div>{count$.get()}</div>;\n", compnentName="Auto")
