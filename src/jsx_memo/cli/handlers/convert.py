"""
Convert Command Handler.

This module implements the logic for the `jsx-memo convert` command.
It orchestrates:
1. Configuration loading (pyproject.toml plus command line overrides).
2. Per-file transformation via the Engine.
3. Output writing and trace logging.
4. A batch summary of failed files.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from rich.markup import escape
from rich.table import Table

from jsx_memo.config import AutoWrapConfig
from jsx_memo.core.conversion_result import ConversionResult
from jsx_memo.core.engine import transform_file
from jsx_memo.utils.console import console, log_error, log_info, log_success, log_warning

JSX_SUFFIXES = (".jsx", ".tsx")


def handle_convert(
  input_path: Path,
  output_path: Optional[Path],
  overrides: Dict[str, Any],
  json_trace_path: Optional[Path] = None,
) -> int:
  """
  Handles the 'convert' command execution.

  Args:
      input_path: Path to the source file or directory to convert.
      output_path: Destination file or directory. Single files print to stdout when omitted.
      overrides: Config values from the command line (None entries are ignored).
      json_trace_path: Optional path to dump execution trace JSON.

  Returns:
      int: Exit code (0 for success, 1 for failure).
  """
  if not input_path.exists():
    log_error(f"Input not found: {input_path}")
    return 1

  try:
    config = AutoWrapConfig.load(
      search_path=input_path if input_path.is_dir() else input_path.parent,
      **overrides,
    )
  except ValueError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  batch_results: Dict[str, ConversionResult] = {}

  if input_path.is_file():
    if input_path.suffix not in JSX_SUFFIXES:
      log_error(f"Not a JSX/TSX file: {input_path}")
      return 1
    result = _convert_single_file(input_path, output_path, config, json_trace_path)
    batch_results[input_path.name] = result
    if not result.success:
      _print_batch_summary(batch_results)
      return 1
    return 0

  if not output_path:
    log_error("Directory conversion requires --out destination directory.")
    return 1

  jsx_files = _find_jsx_files(input_path)
  if not jsx_files:
    log_warning(f"No .jsx or .tsx files found in {input_path}")
    return 0

  log_info(f"Processing {len(jsx_files)} files from {input_path}...")

  for src_file in jsx_files:
    rel_path = src_file.relative_to(input_path)
    dest_file = output_path / rel_path

    batch_trace = None
    if json_trace_path:
      batch_trace = dest_file.with_suffix(".trace.json")

    batch_results[str(rel_path)] = _convert_single_file(src_file, dest_file, config, batch_trace)

  _print_batch_summary(batch_results)
  return 1 if any(not r.success for r in batch_results.values()) else 0


def _find_jsx_files(root: Path) -> List[Path]:
  files = [p for p in root.rglob("*") if p.is_file() and p.suffix in JSX_SUFFIXES]
  return sorted(files)


def _convert_single_file(
  input_path: Path,
  output_path: Optional[Path],
  config: AutoWrapConfig,
  json_trace_path: Optional[Path] = None,
) -> ConversionResult:
  """
  Transforms one file and writes the result.

  Args:
      input_path: Source file path.
      output_path: Destination file path; stdout when None.
      config: Resolved configuration.
      json_trace_path: Path to save trace event logs.

  Returns:
      ConversionResult: Result object containing status and code.
  """
  try:
    with open(input_path, "rt", encoding="utf-8") as f:
      code = f.read()
  except OSError as e:
    log_error(f"Failed to read {input_path}: {e}")
    return ConversionResult(success=False, errors=[str(e)])

  result = transform_file(code, input_path.name, config)
  if result is None:
    return ConversionResult(code=code, success=True)

  if json_trace_path and result.trace_events:
    try:
      json_trace_path.parent.mkdir(parents=True, exist_ok=True)
      with open(json_trace_path, "wt", encoding="utf-8") as f:
        json.dump(result.trace_events, f, indent=2)
      log_info(f"Trace saved to [path]{json_trace_path}[/path]")
    except OSError as e:
      log_error(f"Failed to write trace: {e}")

  if not result.success:
    return result

  if output_path:
    try:
      output_path.parent.mkdir(parents=True, exist_ok=True)
      with open(output_path, "wt", encoding="utf-8") as f:
        f.write(result.code)
    except OSError as e:
      log_error(f"Failed to write {output_path}: {e}")
      return ConversionResult(code=result.code, success=False, errors=[str(e)])
    log_success(
      f"Transformed: [path]{input_path}[/path] -> [path]{output_path}[/path] ({result.rewrite_count} boundaries)"
    )
  else:
    print(result.code, end="")

  return result


def _print_batch_summary(results: Dict[str, ConversionResult]) -> None:
  """
  Renders a summary table of conversion results to the console.

  Args:
      results: Dictionary mapping filenames to conversion results.
  """
  total = len(results)
  failures = sum(1 for r in results.values() if not r.success)
  successes = total - failures

  if failures == 0:
    rewrites = sum(r.rewrite_count for r in results.values())
    log_success(f"Batch Complete: {successes}/{total} files transformed, {rewrites} boundaries inserted.")
    return

  table = Table(title="Transform Report")
  table.add_column("File", style="cyan")
  table.add_column("Status", justify="center")
  table.add_column("Issues", style="red")

  for filename, res in results.items():
    if res.success:
      continue
    issues = "; ".join(res.errors) if res.errors else "Unknown Error"
    table.add_row(escape(filename), "Failed", escape(issues))

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {successes} Passed, {failures} Failed.")
