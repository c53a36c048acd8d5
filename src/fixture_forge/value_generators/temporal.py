"""
Date Value Generator.
"""

import datetime
from typing import Optional

from fixture_forge.value_generators.base import RandomValueGenerator
from fixture_forge.value_generators.numeric import LongValueGenerator
from fixture_forge.value_generators.sampling import validate_range

# 2040-01-01T00:00:00Z
MAX_EPOCH_SECONDS = 2208988800

# 9999-12-31T23:59:59Z, the last second datetime can represent
LATEST_EPOCH_SECONDS = int(datetime.datetime.max.replace(tzinfo=datetime.timezone.utc).timestamp())


class DateValueGenerator(RandomValueGenerator):
  """
  Generates timezone-aware UTC datetimes from a range of Unix epoch seconds.

  The epoch offset is drawn by a composed :class:`LongValueGenerator`.
  """

  def __init__(
    self,
    min_seconds: int = 0,
    max_seconds: int = MAX_EPOCH_SECONDS,
    null_chance: float = RandomValueGenerator.DEFAULT_NULL_CHANCE,
  ):
    """
    Args:
        min_seconds: Inclusive lower bound, in seconds since the epoch.
        max_seconds: Inclusive upper bound, in seconds since the epoch.
        null_chance: Percent chance in [0, 100] of generating None.

    Raises:
        ValueError: If the range is negative, inverted or past year 9999.
    """
    super().__init__(null_chance)
    if min_seconds < 0:
      raise ValueError("The 'min_seconds' parameter must be greater than or equal to 0.")
    if max_seconds > LATEST_EPOCH_SECONDS:
      raise ValueError(f"The 'max_seconds' parameter must be less than or equal to {LATEST_EPOCH_SECONDS}.")
    validate_range("min_seconds", min_seconds, "max_seconds", max_seconds)
    self._seconds = LongValueGenerator(min_seconds, max_seconds)

  @property
  def min_value(self) -> datetime.datetime:
    return self._to_datetime(self._seconds.min_value)

  @property
  def max_value(self) -> datetime.datetime:
    return self._to_datetime(self._seconds.max_value)

  @property
  def value_type(self) -> type:
    return datetime.datetime

  @staticmethod
  def _to_datetime(seconds: Optional[int]) -> datetime.datetime:
    return datetime.datetime.fromtimestamp(int(seconds), tz=datetime.timezone.utc)

  def _generate(self) -> datetime.datetime:
    return self._to_datetime(self._seconds.generate_value())
