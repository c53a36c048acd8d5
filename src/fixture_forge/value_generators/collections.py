"""
Collection-Backed Value Generators.

Generators that select from a fixed pool of candidate values rather than
sampling a numeric range.
"""

from typing import Iterable, List, Optional, Type

from fixture_forge.value_generators.base import V, ValueGenerator
from fixture_forge.value_generators.sampling import derive_rng, sample_integer


def _validate_values(value_type: Optional[type], values: Optional[Iterable]) -> List:
  if value_type is None:
    raise ValueError("The 'value_type' parameter cannot be None.")
  if values is None:
    raise ValueError("The 'values' parameter cannot be None.")
  values = list(values)
  if not values:
    raise ValueError("The 'values' parameter cannot be empty.")
  for value in values:
    if not isinstance(value, value_type):
      raise ValueError(f"The 'values' parameter contains {value!r}, which is not an instance of '{value_type.__name__}'.")
  return values


class ListBasedValueGenerator(ValueGenerator[V]):
  """
  Generates the values of a list in order.

  With ``repeat_selections`` the list is cycled forever. Without it, each value
  is produced once and every later call returns None.
  """

  def __init__(self, value_type: Type[V], values: Iterable[V], repeat_selections: bool = True):
    self._value_type = value_type
    self._values = _validate_values(value_type, values)
    self._repeat_selections = repeat_selections
    self._index = 0

  @property
  def value_type(self) -> type:
    return self._value_type

  @property
  def values(self) -> List[V]:
    return list(self._values)

  @property
  def repeat_selections(self) -> bool:
    return self._repeat_selections

  @property
  def can_generate_none(self) -> bool:
    return not self._repeat_selections

  def generate_value(self) -> Optional[V]:
    if self._index >= len(self._values):
      if not self._repeat_selections:
        return None
      self._index = 0

    value = self._values[self._index]
    self._index += 1
    return value


class SetBasedValueGenerator(ValueGenerator[V]):
  """
  Generates values chosen at random from a set.

  With ``unique_selections`` every value is produced exactly once per cycle of
  ``len(values)`` calls, after which the pool is refilled. Duplicate input
  values are collapsed, keeping first-seen order.
  """

  def __init__(self, value_type: Type[V], values: Iterable[V], unique_selections: bool = False):
    self._value_type = value_type
    self._values = list(dict.fromkeys(_validate_values(value_type, values)))
    self._unique_selections = unique_selections
    self._remaining: List[V] = []
    self._rng = derive_rng()

  @property
  def value_type(self) -> type:
    return self._value_type

  @property
  def values(self) -> List[V]:
    return list(self._values)

  @property
  def unique_selections(self) -> bool:
    return self._unique_selections

  def generate_value(self) -> V:
    if not self._unique_selections:
      return self._values[sample_integer(self._rng, 0, len(self._values) - 1)]

    if not self._remaining:
      self._remaining = list(self._values)
    # swap-remove keeps each draw O(1)
    index = sample_integer(self._rng, 0, len(self._remaining) - 1)
    self._remaining[index], self._remaining[-1] = self._remaining[-1], self._remaining[index]
    return self._remaining.pop()

  def __repr__(self) -> str:
    return f"{type(self).__name__}({self._value_type.__name__}, {len(self._values)} values, unique_selections={self._unique_selections})"


class EnumValueGenerator(SetBasedValueGenerator[V]):
  """Generates random members of an :class:`enum.Enum` class."""

  def __init__(self, enum_type: Type[V], unique_selections: bool = False):
    if enum_type is None:
      raise ValueError("The 'enum_type' parameter cannot be None.")
    super().__init__(enum_type, list(enum_type), unique_selections)
