"""
Main Entry Point for jsx-memo CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `jsx_memo.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from jsx_memo import __version__
from jsx_memo.cli.handlers import handle_convert
from jsx_memo.utils.console import configure_logging


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="jsx-memo: wrap observable reads in JSX with Memo boundaries")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Transform a JSX/TSX file or directory")
  cmd_conv.add_argument("path", type=Path, help="Input source file or directory")
  cmd_conv.add_argument("--out", type=Path, help="Output destination (file or dir)")
  cmd_conv.add_argument("--component-name", default=None, help="Wrapper component (default: Memo)")
  cmd_conv.add_argument("--import-source", default=None, help="Module to import the wrapper from")
  cmd_conv.add_argument(
    "--all-get",
    action="store_true",
    default=None,
    help="Treat every zero-argument read call as reactive, not just '$'-suffixed roots",
  )
  cmd_conv.add_argument(
    "--method-name", action="append", default=None, help="Read method name added to the configured ones (repeatable)"
  )
  cmd_conv.add_argument(
    "--reactive-component", action="append", default=None, help="Extra reactive boundary component (repeatable)"
  )
  cmd_conv.add_argument("--observer-name", action="append", default=None, help="Extra observer HOC name (repeatable)")
  cmd_conv.add_argument(
    "--no-wrap-reactive-children",
    dest="wrap_reactive_children",
    action="store_false",
    default=None,
    help="Do not turn children of Memo/Show/Computed into thunks",
  )
  cmd_conv.add_argument(
    "--wrap-children-component",
    action="append",
    default=None,
    help="Extra component whose children become a thunk (repeatable)",
  )
  cmd_conv.add_argument(
    "--json-trace", type=Path, default=None, help="Dump full execution trace (events, diffs) to a JSON file."
  )
  cmd_conv.add_argument("-v", "--verbose", action="store_true", help="Log every inserted boundary")

  args = parser.parse_args(argv)

  if args.command == "convert":
    configure_logging(args.verbose)
    overrides = {
      "component_name": args.component_name,
      "import_source": args.import_source,
      "all_get": args.all_get,
      "method_names": args.method_name,
      "reactive_components": args.reactive_component,
      "observer_names": args.observer_name,
      "wrap_reactive_children": args.wrap_reactive_children,
      "wrap_reactive_children_components": args.wrap_children_component,
    }
    return handle_convert(args.path, args.out, overrides, json_trace_path=args.json_trace)

  return 0


if __name__ == "__main__":
  sys.exit(main())
