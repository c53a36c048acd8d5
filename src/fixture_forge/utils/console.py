"""
Package Logging and Console Utilities.

All engine modules log through ``logging.getLogger(__name__)``; records propagate
to the ``fixture_forge`` package logger, which this module binds to a Rich
console. The root logger is left untouched so host test frameworks keep full
control of their own handlers.

The console sits behind a proxy so the destination (stderr or a recording
console) can be swapped at runtime via :func:`set_console`,
which is how the test-suite captures diagnostics.

Attributes:
    PACKAGE_LOGGER (str): Name of the package-level logger.
    console (_ConsoleProxy): Stable reference to the active Rich console.
"""

import logging
from typing import Any, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

PACKAGE_LOGGER = "fixture_forge"

_THEME = Theme(
  {
    "info": "dim cyan",
    "warning": "yellow",
    "error": "bold red",
    "type": "bold blue",
    "attr": "bold magenta",
  }
)


class _ConsoleProxy:
  """
  Proxy around a ``rich.console.Console``.

  Swapping the backend re-binds the package logger's ``RichHandler`` to the new
  console so ``logging`` output follows it.

  Attributes:
      _backend (Console): The active Rich Console instance.
      _level (int): Level applied to the package logger.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME, stderr=True)
    self._level: int = logging.WARNING
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and re-binds the logging handler.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    """Restores a fresh stderr console."""
    self._backend = Console(theme=_THEME, stderr=True)
    self._configure_logging()

  def set_level(self, level: Union[int, str]) -> None:
    """
    Changes the threshold of the package logger.

    Args:
        level: A ``logging`` level number or name (e.g. ``"DEBUG"``).
    """
    if isinstance(level, str):
      level = logging.getLevelName(level.upper())
    self._level = int(level)
    logging.getLogger(PACKAGE_LOGGER).setLevel(self._level)

  @property
  def backend(self) -> Console:
    return self._backend

  def _configure_logging(self) -> None:
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
      if isinstance(handler, RichHandler):
        package_logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      show_path=False,
      markup=False,
      rich_tracebacks=True,
    )
    package_logger.setLevel(self._level)
    package_logger.addHandler(rich_handler)

  def print(self, *args: Any, **kwargs: Any) -> None:
    self._backend.print(*args, **kwargs)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Redirects package logging to the given console.

  Args:
      new_console (Console): The configured Rich console to use.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  """Resets package logging to a standard error console."""
  console.reset()


def get_console() -> Console:
  """
  Retrieves the currently active console backend.

  Returns:
      Console: The active Rich Console.
  """
  return console.backend


def set_log_level(level: Union[int, str]) -> None:
  """
  Sets the threshold of the package logger.

  Args:
      level: A ``logging`` level number or name.
  """
  console.set_level(level)


def log_info(msg: str) -> None:
  """
  Logs an informational message on the package logger.

  Args:
      msg (str): The message content. Can include rich markup like [type].
  """
  logging.getLogger(PACKAGE_LOGGER).info(msg, extra={"markup": True})


def log_warning(msg: str) -> None:
  """
  Logs a warning on the package logger.

  Args:
      msg (str): The message content.
  """
  logging.getLogger(PACKAGE_LOGGER).warning(msg, extra={"markup": True})


def log_error(msg: str) -> None:
  """
  Logs an error on the package logger.

  Args:
      msg (str): The message content.
  """
  logging.getLogger(PACKAGE_LOGGER).error(msg, extra={"markup": True})
