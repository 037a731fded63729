"""
Transformation Passes Package.
"""

from jsx_memo.core.rewriter.passes.auto_wrap import AutoWrapPass, AutoWrapTransformer

__all__ = [
  "AutoWrapPass",
  "AutoWrapTransformer",
]
