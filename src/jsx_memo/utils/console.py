"""
Console Output and Logging Setup.

Library modules only log through ``logging.getLogger(__name__)``. This module
attaches a `rich` handler to the package logger (``jsx_memo``) for the CLI, so
transform debug lines and the CLI's own status lines share one console.

`set_console` retargets both the report tables and the log lines, which lets
an embedding build tool or a test record everything into a buffer.
`configure_logging` switches the package between status output and the
per-boundary debug lines emitted by the rewriter.

Attributes:
    console (_ConsoleProxy): Stable reference to the active Rich Console.
"""

import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "jsx_memo"

# Between INFO and WARNING
SUCCESS_LEVEL_NUM = 25
logging.addLevelName(SUCCESS_LEVEL_NUM, "SUCCESS")

_THEME = Theme({"logging.level.success": "green", "path": "bold blue", "code": "bold magenta"})

_logger = logging.getLogger(LOGGER_NAME)


class _ConsoleProxy:
  """
  Holds the active Rich Console and the package log handler bound to it.

  Swapping the backend replaces the handler, so ``console.print`` and the
  ``jsx_memo`` loggers always write to the same place.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._handler: Optional[RichHandler] = None
    self._level = logging.INFO
    self._attach()

  @property
  def backend(self) -> Console:
    return self._backend

  def set_backend(self, new_console: Console) -> None:
    self._backend = new_console
    self._attach()

  def set_level(self, level: int) -> None:
    self._level = level
    _logger.setLevel(level)

  def reset(self) -> None:
    """Back to a fresh stdout console at INFO level."""
    self._level = logging.INFO
    self.set_backend(Console(theme=_THEME))

  def _attach(self) -> None:
    if self._handler is not None:
      _logger.removeHandler(self._handler)

    self._handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=False,
      rich_tracebacks=True,
    )
    _logger.addHandler(self._handler)
    _logger.setLevel(self._level)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Sends all CLI output, log lines included, to `new_console`.

  Args:
      new_console (Console): The configured Rich console to use globally.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def get_console() -> Console:
  return console.backend


def configure_logging(verbose: bool = False) -> None:
  """
  Sets the package log level.

  Args:
      verbose (bool): Show the rewriter's debug lines (one per boundary and
          normalized element) in addition to status messages.
  """
  console.set_level(logging.DEBUG if verbose else logging.INFO)


def log_info(msg: str) -> None:
  """
  Logs a status line.

  Args:
      msg (str): The message content. Can include rich markup like [path].
  """
  _logger.info(msg, extra={"markup": True})


def log_success(msg: str) -> None:
  _logger.log(SUCCESS_LEVEL_NUM, f"[green]{msg}[/green]", extra={"markup": True})


def log_warning(msg: str) -> None:
  _logger.warning(msg, extra={"markup": True})


def log_error(msg: str) -> None:
  _logger.error(f"[bold red]{msg}[/bold red]", extra={"markup": True})
