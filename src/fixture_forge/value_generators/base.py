"""
Value Generator Contract.

Defines the capability every producer of pseudo-random values satisfies, and a
shared base for generators gated by an absence chance.
"""

import random
from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

from fixture_forge.value_generators.sampling import derive_rng, roll_chance, validate_chance

V = TypeVar("V")


class ValueGenerator(ABC, Generic[V]):
  """
  Produces values of a declared type, possibly ``None``.

  Implementations may hold mutable sequencing state (e.g. values not yet
  selected). Such generators are not safe for concurrent use; create one
  instance per independent sequence.
  """

  @abstractmethod
  def generate_value(self) -> Optional[V]:
    """
    Produces the next value.

    Returns:
        Optional[V]: A value of :attr:`value_type`, or None.
    """

  @property
  @abstractmethod
  def value_type(self) -> type:
    """The declared type of generated values."""

  @property
  def can_generate_none(self) -> bool:
    """Whether :meth:`generate_value` may return None."""
    return False


class RandomValueGenerator(ValueGenerator[V]):
  """
  Base for generators that roll an absence gate before producing a value.

  Subclasses implement :meth:`_generate`, which is only reached when the gate
  does not fire.

  Attributes:
      DEFAULT_NULL_CHANCE (float): Default percent chance of producing None.
  """

  DEFAULT_NULL_CHANCE = 0.0

  def __init__(self, null_chance: float = DEFAULT_NULL_CHANCE):
    """
    Args:
        null_chance: Percent chance in [0, 100] that None is produced.

    Raises:
        ValueError: If ``null_chance`` is outside [0, 100].
    """
    self._null_chance = validate_chance("null_chance", null_chance)
    self._rng: random.Random = derive_rng()

  @property
  def null_chance(self) -> float:
    return self._null_chance

  @property
  def can_generate_none(self) -> bool:
    return self._null_chance > 0

  def generate_value(self) -> Optional[V]:
    if roll_chance(self._rng, self._null_chance):
      return None
    return self._generate()

  @abstractmethod
  def _generate(self) -> V:
    """Produces a non-None value."""

  def __repr__(self) -> str:
    return f"{type(self).__name__}(null_chance={self._null_chance:g})"
