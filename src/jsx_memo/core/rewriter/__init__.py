"""
Rewriter Package.

This package provides the boundary insertion pipeline:
- Context: Per-file settings and state.
- Contexts: Reactive-context, observer-HOC and attribute-position checks.
- Boundary: Synthesis of ``<Memo>{() => expr}</Memo>``.
- Normalization: Thunking the children of boundary-style components.
- Passes: The traversal driver.
"""

from jsx_memo.core.rewriter.context import RewriterContext, WrapSettings
from jsx_memo.core.rewriter.interface import RewriterPass
from jsx_memo.core.rewriter.pipeline import RewriterPipeline
from jsx_memo.core.rewriter.passes import AutoWrapPass, AutoWrapTransformer

__all__ = [
  "RewriterContext",
  "WrapSettings",
  "RewriterPass",
  "RewriterPipeline",
  "AutoWrapPass",
  "AutoWrapTransformer",
]
