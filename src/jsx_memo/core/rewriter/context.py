"""
Rewriter Context Module.

This module provides the `RewriterContext` container, which holds the per-file
state for the rewriting pipeline, and `WrapSettings`, the immutable option set
resolved from an `AutoWrapConfig` once at file entry.

Settings are passed by reference into every detector and rewriter; nothing is
captured implicitly and nothing outlives the file being transformed.
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional

from jsx_memo.config import AutoWrapConfig
from jsx_memo.core.scanners import ReadPolicy
from jsx_memo.core.tracer import TraceLogger

BASELINE_REACTIVE_COMPONENTS = frozenset({"For", "Show", "Memo", "Computed", "Switch"})
BASELINE_OBSERVER_NAMES = frozenset({"observer"})
BASELINE_WRAP_CHILDREN_COMPONENTS = frozenset({"Memo", "Show", "Computed"})


@dataclass(frozen=True)
class WrapSettings:
  """
  Resolved, immutable options for one file.

  Attributes:
      component_name (str): Wrapper tag and import binding.
      import_source (str): Module the wrapper is imported from.
      policy (ReadPolicy): Observable read detection options.
      reactive_components (FrozenSet[str]): Tags whose subtree is already reactive.
      observer_names (FrozenSet[str]): Higher-order functions making a component reactive.
      wrap_children_components (FrozenSet[str]): Tags whose children become a thunk.
  """

  component_name: str
  import_source: str
  policy: ReadPolicy
  reactive_components: FrozenSet[str]
  observer_names: FrozenSet[str]
  wrap_children_components: FrozenSet[str]

  @classmethod
  def from_config(cls, config: AutoWrapConfig) -> "WrapSettings":
    """
    Merges user-supplied name lists with the fixed baselines.

    The children-normalization set is empty when the feature is disabled,
    regardless of any configured extra names.
    """
    if config.wrap_reactive_children:
      wrap_children = _merge(BASELINE_WRAP_CHILDREN_COMPONENTS, config.wrap_reactive_children_components)
    else:
      wrap_children = frozenset()

    return cls(
      component_name=config.component_name,
      import_source=config.import_source,
      policy=ReadPolicy(
        all_reads=config.all_get,
        method_names=frozenset(config.method_names),
        suffix=config.marker_suffix,
      ),
      reactive_components=_merge(BASELINE_REACTIVE_COMPONENTS | {config.component_name}, config.reactive_components),
      observer_names=_merge(BASELINE_OBSERVER_NAMES, config.observer_names),
      wrap_children_components=wrap_children,
    )


def _merge(baseline: FrozenSet[str], extra: Iterable[str]) -> FrozenSet[str]:
  return baseline | frozenset(extra)


class RewriterContext:
  """
  Shared state container for the rewriting pipeline.

  One instance exists per transformed file. Passes read `settings` and update
  `needs_import` and `rewrite_count`; the trace logger records their decisions.
  """

  def __init__(
    self,
    config: Optional[AutoWrapConfig] = None,
    tracer: Optional[TraceLogger] = None,
  ):
    """
    Initializes the context.

    Args:
        config: The runtime configuration. Defaults apply when omitted.
        tracer: Event log for this file. A fresh logger is created when omitted.
    """
    self.config = config or AutoWrapConfig()
    self.settings = WrapSettings.from_config(self.config)
    self.tracer = tracer or TraceLogger()

    # -- Core State --
    self.needs_import: bool = False
    self.rewrite_count: int = 0

  def mark_rewrite(self) -> None:
    """Records one boundary insertion and requests the wrapper import."""
    self.needs_import = True
    self.rewrite_count += 1
