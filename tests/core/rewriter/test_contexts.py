"""
Tests for Context Classification and Settings Resolution.
"""

from jsx_memo.config import AutoWrapConfig
from jsx_memo.core.nodes import (
  CallExpression,
  Identifier,
  JSXAttribute,
  JSXElement,
  JSXOpeningElement,
  JSXSpreadAttribute,
  MemberExpression,
)
from jsx_memo.core.rewriter.context import RewriterContext, WrapSettings
from jsx_memo.core.rewriter.contexts import is_inside_attribute, is_inside_observer_hoc, is_inside_reactive_context

REACTIVE = frozenset({"Memo", "Show", "For"})


def _element(name):
  return JSXElement(opening=JSXOpeningElement(name=Identifier(name=name)))


def test_reactive_ancestor_detected():
  ancestors = (_element("Show"), _element("div"))
  assert is_inside_reactive_context(ancestors, REACTIVE)


def test_no_reactive_ancestor():
  assert not is_inside_reactive_context((_element("div"), _element("span")), REACTIVE)
  assert not is_inside_reactive_context((), REACTIVE)


def test_member_tag_never_matches():
  member = JSXElement(
    opening=JSXOpeningElement(name=MemberExpression(object=Identifier(name="UI"), property=Identifier(name="Memo")))
  )
  assert not is_inside_reactive_context((member,), REACTIVE)


def test_observer_call_detected():
  call = CallExpression(callee=Identifier(name="observer"))
  assert is_inside_observer_hoc((call,), frozenset({"observer"}))


def test_observer_member_callee_ignored():
  call = CallExpression(callee=MemberExpression(object=Identifier(name="mobx"), property=Identifier(name="observer")))
  assert not is_inside_observer_hoc((call,), frozenset({"observer"}))


def test_attribute_position():
  attr = JSXAttribute(name="title")
  spread = JSXSpreadAttribute(argument=Identifier(name="props"))

  assert is_inside_attribute((_element("div"), attr))
  assert is_inside_attribute((spread,))
  assert not is_inside_attribute((_element("div"),))


def test_settings_baselines():
  settings = WrapSettings.from_config(AutoWrapConfig())

  assert settings.reactive_components == frozenset({"Memo", "For", "Show", "Computed", "Switch"})
  assert settings.observer_names == frozenset({"observer"})
  assert settings.wrap_children_components == frozenset({"Memo", "Show", "Computed"})
  assert settings.policy.method_names == frozenset({"get"})
  assert settings.policy.all_reads is False


def test_settings_merge_user_names():
  config = AutoWrapConfig(
    componentName="Auto",
    reactiveComponents=["Reactive"],
    observerNames=["reactive"],
    wrapReactiveChildrenComponents=["Box"],
    allGet=True,
  )
  settings = WrapSettings.from_config(config)

  assert {"Auto", "Reactive", "Memo"} <= settings.reactive_components
  assert settings.observer_names == frozenset({"observer", "reactive"})
  assert "Box" in settings.wrap_children_components
  assert settings.policy.all_reads is True


def test_disabling_children_normalization_empties_set():
  config = AutoWrapConfig(wrapReactiveChildren=False, wrapReactiveChildrenComponents=["Box"])
  assert WrapSettings.from_config(config).wrap_children_components == frozenset()


def test_context_tracks_rewrites():
  context = RewriterContext()
  assert context.needs_import is False

  context.mark_rewrite()
  context.mark_rewrite()
  assert context.needs_import is True
  assert context.rewrite_count == 2
