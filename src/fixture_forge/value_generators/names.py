"""
Name Value Generators.

Person names drawn from word lists shipped in ``fixture_forge/data``. Each list
is read once per process and shared by every generator that uses it.
"""

import logging
from functools import lru_cache
from importlib import resources
from typing import Tuple

from rich.markup import escape

from fixture_forge.utils.console import log_error
from fixture_forge.value_generators.collections import SetBasedValueGenerator

logger = logging.getLogger(__name__)

DATA_PACKAGE = "fixture_forge.data"
FIRST_NAMES_FILE = "first_names.txt"
LAST_NAMES_FILE = "last_names.txt"


@lru_cache(maxsize=None)
def load_word_list(filename: str) -> Tuple[str, ...]:
  """
  Reads a newline-separated word list from the package data.

  Blank lines and lines starting with ``#`` are ignored.

  Args:
      filename: Name of the file inside ``fixture_forge/data``.

  Returns:
      Tuple[str, ...]: The words, in file order.

  Raises:
      FileNotFoundError: If the list is not shipped with the package.
      ValueError: If the list contains no words.
  """
  try:
    text = resources.files(DATA_PACKAGE).joinpath(filename).read_text(encoding="utf-8")
  except (FileNotFoundError, ModuleNotFoundError) as e:
    log_error(f"Unable to load word list [attr]{escape(filename)}[/attr]: {escape(str(e))}")
    raise

  words = tuple(line.strip() for line in text.splitlines() if line.strip() and not line.lstrip().startswith("#"))
  if not words:
    log_error(f"Word list [attr]{escape(filename)}[/attr] is empty.")
    raise ValueError(f"The word list '{filename}' does not contain any words.")

  logger.debug("Loaded %d words from %s", len(words), filename)
  return words


class FirstNameValueGenerator(SetBasedValueGenerator[str]):
  """Generates random first names."""

  def __init__(self, unique_selections: bool = False):
    super().__init__(str, load_word_list(FIRST_NAMES_FILE), unique_selections)


class LastNameValueGenerator(SetBasedValueGenerator[str]):
  """Generates random last names."""

  def __init__(self, unique_selections: bool = False):
    super().__init__(str, load_word_list(LAST_NAMES_FILE), unique_selections)
