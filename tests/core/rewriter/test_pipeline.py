"""
Tests for RewriterPipeline orchestration.
"""

import pytest

from jsx_memo.core.nodes import Program
from jsx_memo.core.rewriter import RewriterContext, RewriterPass, RewriterPipeline
from jsx_memo.core.tracer import TraceEventType


class RecordingPass(RewriterPass):
  def __init__(self, label, log):
    self.name = label
    self.log = log

  def transform(self, program, context):
    self.log.append(self.name)
    return program


class ReplacingPass(RewriterPass):
  name = "replace"

  def __init__(self, replacement):
    self.replacement = replacement

  def transform(self, program, context):
    return self.replacement


class FailingPass(RewriterPass):
  name = "boom"

  def transform(self, program, context):
    raise ValueError("broken tree")


def test_passes_run_in_order():
  log = []
  pipeline = RewriterPipeline([RecordingPass("first", log), RecordingPass("second", log)])
  pipeline.run(Program(), RewriterContext())

  assert log == ["first", "second"]


def test_output_of_one_pass_feeds_the_next():
  replacement = Program()
  seen = []

  class Capture(RewriterPass):
    def transform(self, program, context):
      seen.append(program)
      return program

  result = RewriterPipeline([ReplacingPass(replacement), Capture()]).run(Program(), RewriterContext())

  assert result is replacement
  assert seen == [replacement]


def test_each_pass_gets_a_trace_phase():
  context = RewriterContext()
  RewriterPipeline([RecordingPass("only", [])]).run(Program(), context)

  events = context.tracer.export()
  assert [e["type"] for e in events] == [TraceEventType.PHASE_START, TraceEventType.PHASE_END]
  assert events[0]["description"] == "only"


def test_phase_closed_when_pass_fails():
  context = RewriterContext()
  with pytest.raises(ValueError):
    RewriterPipeline([FailingPass()]).run(Program(), context)

  types = [e["type"] for e in context.tracer.export()]
  assert types.count(TraceEventType.PHASE_END) == 1
