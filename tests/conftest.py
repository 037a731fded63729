"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Parsing helpers shared by the detector and rewriter tests.
"""

import sys
from pathlib import Path

import pytest

# Add src to path so we can import 'jsx_memo' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from jsx_memo.core.parser import parse_jsx  # noqa: E402

IMPORT_LINE = 'import { Memo } from "@legendapp/state/react";'


def parse_expression(code: str):
  """Parses `code` as a single expression statement and returns the expression node."""
  program = parse_jsx(f"{code};")
  statement = program.body[0]
  return statement.children[0]


@pytest.fixture
def expr():
  """Fixture exposing :func:`parse_expression`."""
  return parse_expression


@pytest.fixture(autouse=True)
def reset_rich_console():
  """Keeps console redirection from leaking between tests."""
  yield
  from jsx_memo.utils.console import reset_console

  reset_console()
