"""
Character and String Value Generators.

Both draw characters uniformly from an alphabet, by default the printable ASCII
range (code points 32 to 126 inclusive).
"""

from typing import Optional, Sequence

from fixture_forge.value_generators.base import RandomValueGenerator
from fixture_forge.value_generators.sampling import sample_integer, validate_range

PRINTABLE_ASCII = "".join(chr(code) for code in range(32, 127))


def _normalize_alphabet(param: str, alphabet: Optional[Sequence[str]]) -> str:
  if alphabet is None:
    return PRINTABLE_ASCII
  chars = "".join(alphabet)
  if not chars:
    raise ValueError(f"The '{param}' parameter must contain at least one character.")
  return chars


class CharacterValueGenerator(RandomValueGenerator):
  """Generates single-character strings."""

  def __init__(
    self,
    alphabet: Optional[Sequence[str]] = None,
    null_chance: float = RandomValueGenerator.DEFAULT_NULL_CHANCE,
  ):
    """
    Args:
        alphabet: Characters to choose from. Defaults to printable ASCII.
        null_chance: Percent chance in [0, 100] of generating None.

    Raises:
        ValueError: If ``alphabet`` is empty.
    """
    super().__init__(null_chance)
    self._alphabet = _normalize_alphabet("alphabet", alphabet)

  @property
  def alphabet(self) -> str:
    return self._alphabet

  @property
  def value_type(self) -> type:
    return str

  def _generate(self) -> str:
    return self._alphabet[sample_integer(self._rng, 0, len(self._alphabet) - 1)]


class StringValueGenerator(RandomValueGenerator):
  """
  Generates strings whose length is drawn uniformly from an inclusive range.

  Attributes:
      DEFAULT_MIN_LENGTH (int): Shortest string produced by default.
      DEFAULT_MAX_LENGTH (int): Longest string produced by default.
  """

  DEFAULT_MIN_LENGTH = 1
  DEFAULT_MAX_LENGTH = 32

  def __init__(
    self,
    min_length: int = DEFAULT_MIN_LENGTH,
    max_length: int = DEFAULT_MAX_LENGTH,
    allowable_chars: Optional[Sequence[str]] = None,
    null_chance: float = RandomValueGenerator.DEFAULT_NULL_CHANCE,
  ):
    """
    Args:
        min_length: Minimum length, at least 0.
        max_length: Maximum length, at least 1.
        allowable_chars: Characters to build strings from. Defaults to printable ASCII.
        null_chance: Percent chance in [0, 100] of generating None.

    Raises:
        ValueError: If a length is out of range or ``allowable_chars`` is empty.
    """
    super().__init__(null_chance)
    if min_length < 0:
      raise ValueError("The 'min_length' parameter must be greater than or equal to 0.")
    if max_length < 1:
      raise ValueError("The 'max_length' parameter must be greater than or equal to 1.")
    validate_range("min_length", min_length, "max_length", max_length)
    self._min_length = int(min_length)
    self._max_length = int(max_length)
    self._allowable_chars = _normalize_alphabet("allowable_chars", allowable_chars)

  @property
  def min_length(self) -> int:
    return self._min_length

  @property
  def max_length(self) -> int:
    return self._max_length

  @property
  def allowable_chars(self) -> str:
    return self._allowable_chars

  @property
  def value_type(self) -> type:
    return str

  def _generate(self) -> str:
    length = sample_integer(self._rng, self._min_length, self._max_length)
    last = len(self._allowable_chars) - 1
    return "".join(self._allowable_chars[sample_integer(self._rng, 0, last)] for _ in range(length))

  def __repr__(self) -> str:
    return (
      f"StringValueGenerator(min_length={self._min_length}, max_length={self._max_length}, "
      f"null_chance={self.null_chance:g})"
    )
