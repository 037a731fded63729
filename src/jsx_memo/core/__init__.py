"""
Core Package.

Contains the transformation logic:
- Node model, parser adapter and emitter
- Observable read scanners
- Rewriter passes and pipeline
- Import management
"""
