"""
jsx-memo Package.

A compile-time JSX transformer that isolates observable reads in fine-grained
boundary components, so that only the smallest subtree touching a value
re-renders when it changes.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import jsx_memo
    code = "const App = () => <div>{count$.get()}</div>;"
    print(jsx_memo.transform(code))
    # import { Memo } from "@legendapp/state/react";
    # const App = () => <div><Memo>{() => count$.get()}</Memo></div>;

Advanced Usage (Engine)
^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from jsx_memo import AutoWrapConfig, AutoWrapEngine

    config = AutoWrapConfig(componentName="Auto", importSource="my-lib", allGet=True)
    res = AutoWrapEngine(config).run(code)

    if res.success:
        print(res.code)
    else:
        print(f"Errors: {res.errors}")
"""

from typing import Any

from jsx_memo.config import AutoWrapConfig
from jsx_memo.core.conversion_result import ConversionResult
from jsx_memo.core.engine import AutoWrapEngine, transform_file, transform_program
from jsx_memo.core.errors import JsxSyntaxError, MalformedTreeError, TransformError

__version__ = "0.1.0"


def transform(code: str, **options: Any) -> str:
  """
  Wraps observable reads in a string of JSX/TSX code.

  This is a convenience wrapper around `AutoWrapEngine`. For files coming
  from a build tool, use `transform_file`, which also filters by extension.

  Args:
      code (str): The source code to transform.
      **options: `AutoWrapConfig` fields, in snake_case or camelCase
          (e.g. ``component_name="Auto"`` or ``allGet=True``).

  Returns:
      str: The transformed source code.

  Raises:
      ValueError: If the code cannot be parsed or the options are invalid.
  """
  config = AutoWrapConfig(**options)
  result = AutoWrapEngine(config).run(code)

  if not result.success:
    error_msg = "\n".join(result.errors)
    raise ValueError(f"Transform failed:\n{error_msg}")

  return result.code


__all__ = [
  "AutoWrapConfig",
  "AutoWrapEngine",
  "ConversionResult",
  "JsxSyntaxError",
  "MalformedTreeError",
  "TransformError",
  "transform",
  "transform_file",
  "transform_program",
  "__version__",
]
