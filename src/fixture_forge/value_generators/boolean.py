"""
Boolean Value Generator.
"""

from fixture_forge.value_generators.base import RandomValueGenerator
from fixture_forge.value_generators.sampling import roll_chance, validate_chance


class BooleanValueGenerator(RandomValueGenerator):
  """
  Generates ``True`` with a configurable percent chance, ``False`` otherwise.

  Attributes:
      DEFAULT_TRUE_CHANCE (float): Chance used when none is given.
  """

  DEFAULT_TRUE_CHANCE = 50.0

  def __init__(
    self,
    true_chance: float = DEFAULT_TRUE_CHANCE,
    null_chance: float = RandomValueGenerator.DEFAULT_NULL_CHANCE,
  ):
    super().__init__(null_chance)
    self._true_chance = validate_chance("true_chance", true_chance)

  @property
  def true_chance(self) -> float:
    return self._true_chance

  @property
  def value_type(self) -> type:
    return bool

  def _generate(self) -> bool:
    return roll_chance(self._rng, self._true_chance)

  def __repr__(self) -> str:
    return f"BooleanValueGenerator(true_chance={self._true_chance:g}, null_chance={self.null_chance:g})"
