"""
Numeric Value Generators.

Integral and real generators share :func:`sample_integer` / :func:`sample_real`
and differ only in their value type and the bounds that type can represent.
Fixed-width widths are modelled with NumPy scalar types so a generator's
``value_type`` matches exactly the annotation of the slot it fills
(``np.int16`` for a 16-bit field, ``float`` for a double, and so on).
"""

import math
import sys
from typing import Optional

import numpy as np

from fixture_forge.value_generators.base import RandomValueGenerator
from fixture_forge.value_generators.sampling import sample_integer, sample_real, validate_range


class _IntegralValueGenerator(RandomValueGenerator):
  """
  Generates integers uniformly from an inclusive range.

  Attributes:
      VALUE_TYPE (type): Type of generated values.
      TYPE_MIN (Optional[int]): Smallest representable value, None if unbounded.
      TYPE_MAX (Optional[int]): Largest representable value, None if unbounded.
      DEFAULT_MIN (int): Lower bound used when none is given.
      DEFAULT_MAX (int): Upper bound used when none is given.
  """

  VALUE_TYPE: type = int
  TYPE_MIN: Optional[int] = None
  TYPE_MAX: Optional[int] = None
  DEFAULT_MIN: int = 0
  DEFAULT_MAX: int = 0

  def __init__(
    self,
    min_value: Optional[int] = None,
    max_value: Optional[int] = None,
    null_chance: float = RandomValueGenerator.DEFAULT_NULL_CHANCE,
  ):
    """
    Args:
        min_value: Inclusive lower bound. Defaults to :attr:`DEFAULT_MIN`.
        max_value: Inclusive upper bound. Defaults to :attr:`DEFAULT_MAX`.
        null_chance: Percent chance in [0, 100] of generating None.

    Raises:
        ValueError: If a bound is not representable or the range is inverted.
    """
    super().__init__(null_chance)
    self._min = self._check_bound("min_value", self.DEFAULT_MIN if min_value is None else min_value)
    self._max = self._check_bound("max_value", self.DEFAULT_MAX if max_value is None else max_value)
    validate_range("min_value", self._min, "max_value", self._max)

  def _check_bound(self, param: str, value) -> int:
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
      raise ValueError(f"The '{param}' parameter must be an integer.")
    value = int(value)
    if self.TYPE_MIN is not None and value < self.TYPE_MIN:
      raise ValueError(f"The '{param}' parameter must be greater than or equal to {self.TYPE_MIN}.")
    if self.TYPE_MAX is not None and value > self.TYPE_MAX:
      raise ValueError(f"The '{param}' parameter must be less than or equal to {self.TYPE_MAX}.")
    return value

  @property
  def min_value(self) -> int:
    return self._min

  @property
  def max_value(self) -> int:
    return self._max

  @property
  def value_type(self) -> type:
    return self.VALUE_TYPE

  def _generate(self):
    return self.VALUE_TYPE(sample_integer(self._rng, self._min, self._max))

  def __repr__(self) -> str:
    return f"{type(self).__name__}(min_value={self._min}, max_value={self._max}, null_chance={self.null_chance:g})"


class IntegerValueGenerator(_IntegralValueGenerator):
  """Generates ``int`` values, by default across the signed 32-bit range."""

  VALUE_TYPE = int
  DEFAULT_MIN = -(2**31)
  DEFAULT_MAX = 2**31 - 1


class LongValueGenerator(_IntegralValueGenerator):
  """Generates ``numpy.int64`` values."""

  VALUE_TYPE = np.int64
  TYPE_MIN = DEFAULT_MIN = int(np.iinfo(np.int64).min)
  TYPE_MAX = DEFAULT_MAX = int(np.iinfo(np.int64).max)


class ShortValueGenerator(_IntegralValueGenerator):
  """Generates ``numpy.int16`` values."""

  VALUE_TYPE = np.int16
  TYPE_MIN = DEFAULT_MIN = int(np.iinfo(np.int16).min)
  TYPE_MAX = DEFAULT_MAX = int(np.iinfo(np.int16).max)


class ByteValueGenerator(_IntegralValueGenerator):
  """Generates ``numpy.int8`` values."""

  VALUE_TYPE = np.int8
  TYPE_MIN = DEFAULT_MIN = int(np.iinfo(np.int8).min)
  TYPE_MAX = DEFAULT_MAX = int(np.iinfo(np.int8).max)


class _RealValueGenerator(RandomValueGenerator):
  """
  Generates floating point values uniformly from a closed range.

  Bounds are rounded to the value type's precision at construction so that
  every generated value, once converted, still lies within them.
  """

  VALUE_TYPE: type = float
  TYPE_MAX: float = sys.float_info.max

  def __init__(
    self,
    min_value: Optional[float] = None,
    max_value: Optional[float] = None,
    null_chance: float = RandomValueGenerator.DEFAULT_NULL_CHANCE,
  ):
    """
    Args:
        min_value: Lower bound. Defaults to ``-TYPE_MAX``.
        max_value: Upper bound. Defaults to ``TYPE_MAX``.
        null_chance: Percent chance in [0, 100] of generating None.

    Raises:
        ValueError: If a bound is not finite, not representable, or the range is inverted.
    """
    super().__init__(null_chance)
    self._min = self._check_bound("min_value", -self.TYPE_MAX if min_value is None else min_value)
    self._max = self._check_bound("max_value", self.TYPE_MAX if max_value is None else max_value)
    validate_range("min_value", self._min, "max_value", self._max)

  def _check_bound(self, param: str, value) -> float:
    value = float(value)
    if not math.isfinite(value):
      raise ValueError(f"The '{param}' parameter must be a finite number.")
    if abs(value) > self.TYPE_MAX:
      raise ValueError(f"The '{param}' parameter must be within +/-{self.TYPE_MAX}.")
    return float(self.VALUE_TYPE(value))

  @property
  def min_value(self) -> float:
    return self._min

  @property
  def max_value(self) -> float:
    return self._max

  @property
  def value_type(self) -> type:
    return self.VALUE_TYPE

  def _generate(self):
    return self.VALUE_TYPE(sample_real(self._rng, self._min, self._max))

  def __repr__(self) -> str:
    return f"{type(self).__name__}(min_value={self._min!r}, max_value={self._max!r}, null_chance={self.null_chance:g})"


class DoubleValueGenerator(_RealValueGenerator):
  """Generates ``float`` (double precision) values."""

  VALUE_TYPE = float
  TYPE_MAX = sys.float_info.max


class FloatValueGenerator(_RealValueGenerator):
  """Generates ``numpy.float32`` values."""

  VALUE_TYPE = np.float32
  TYPE_MAX = float(np.finfo(np.float32).max)
