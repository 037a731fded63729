"""
Transform Trace.

Records what happened to one file, in order:
1. Phases (Parsing, each rewriter pass, Emission), nested.
2. Boundaries inserted, with the source text before and after.
3. Children of boundary-style components turned into a thunk.
4. Import actions (added, or already present).
5. Warnings, such as the reason a run failed.

Events carry a sequence number and the sequence number of the phase that
encloses them, so a consumer can rebuild the nesting without timestamps.
`export` produces plain dictionaries that ``json.dumps`` accepts as is.
"""

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class TraceEventType(str, Enum):
  PHASE_START = "phase_start"
  PHASE_END = "phase_end"
  BOUNDARY_INSERTED = "boundary_inserted"
  CHILDREN_NORMALIZED = "children_normalized"
  IMPORT_ACTION = "import_action"
  WARNING = "warning"


@dataclass
class TraceEvent:
  """
  One recorded step.

  Attributes:
      seq (int): Position in the trace, starting at 0.
      type (TraceEventType): What kind of step this is.
      description (str): Short human-readable summary.
      phase (Optional[int]): ``seq`` of the enclosing phase start, if any.
      elapsed_ms (float): Milliseconds since the trace was created.
      metadata (Dict[str, Any]): Event-specific details.
  """

  seq: int
  type: TraceEventType
  description: str
  phase: Optional[int] = None
  elapsed_ms: float = 0.0
  metadata: Dict[str, Any] = field(default_factory=dict)

  def to_dict(self) -> Dict[str, Any]:
    return {
      "seq": self.seq,
      "type": self.type.value,
      "description": self.description,
      "phase": self.phase,
      "elapsed_ms": round(self.elapsed_ms, 3),
      "metadata": dict(self.metadata),
    }


class TraceLogger:
  """
  Records transform events for a single file run.
  """

  def __init__(self) -> None:
    self._events: List[TraceEvent] = []
    self._open: List[TraceEvent] = []
    self._origin = time.perf_counter()

  def start_phase(self, name: str, detail: str = "") -> int:
    """Opens a phase nested in the current one. Returns its sequence number."""
    event = self._record(TraceEventType.PHASE_START, name, {"detail": detail})
    self._open.append(event)
    return event.seq

  def end_phase(self) -> None:
    """Closes the innermost open phase, recording how long it ran."""
    if not self._open:
      return

    start = self._open.pop()
    event = self._record(TraceEventType.PHASE_END, start.description, {})
    event.phase = start.seq
    event.metadata["duration_ms"] = round(event.elapsed_ms - start.elapsed_ms, 3)

  @contextmanager
  def phase(self, name: str, detail: str = "") -> Iterator[int]:
    """Runs the body inside a phase that is closed even when the body raises."""
    seq = self.start_phase(name, detail)
    try:
      yield seq
    finally:
      self.end_phase()

  def log_boundary(self, node_type: str, before: str, after: str) -> None:
    """Logs a child expression or element replaced by a boundary."""
    self._record(TraceEventType.BOUNDARY_INSERTED, f"Wrapped {node_type}", {"before": before, "after": after})

  def log_normalization(self, tag: str, before: str, after: str) -> None:
    self._record(TraceEventType.CHILDREN_NORMALIZED, f"Deferred children of <{tag}>", {"before": before, "after": after})

  def log_import(self, action: str, statement: str) -> None:
    self._record(TraceEventType.IMPORT_ACTION, action, {"statement": statement})

  def log_warning(self, message: str) -> None:
    self._record(TraceEventType.WARNING, message, {})

  def _record(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any]) -> TraceEvent:
    event = TraceEvent(
      seq=len(self._events),
      type=evt_type,
      description=desc,
      phase=self._open[-1].seq if self._open else None,
      elapsed_ms=(time.perf_counter() - self._origin) * 1000,
      metadata=meta,
    )
    self._events.append(event)
    return event

  def export(self) -> List[Dict[str, Any]]:
    """Returns the events as JSON-ready dictionaries."""
    return [e.to_dict() for e in self._events]
