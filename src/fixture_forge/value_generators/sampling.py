"""
Range Sampling Primitives.

Shared, bias-free sampling logic reused by every scalar value generator:

1.  **Absence Gate**: :func:`roll_chance` turns a percentage into a yes/no draw.
2.  **Integral Ranges**: :func:`sample_integer` draws uniformly from an inclusive
    interval of arbitrary width by rejection sampling over random bits, so no
    value is favoured the way ``random() % span`` would favour low values.
3.  **Real Ranges**: :func:`sample_real` interpolates between the bounds without
    computing ``maximum - minimum``, which overflows for the full double range.
4.  **Seeding**: every generator owns a private ``random.Random`` obtained from
    :func:`derive_rng`. Calling :func:`reseed` makes all generators created
    afterwards reproducible.

Parameters are validated once, at generator construction, by
:func:`validate_chance` and :func:`validate_range`; sampling itself never fails.
"""

import math
import random
from typing import Optional, Union

Number = Union[int, float]

_SEED_SOURCE = random.Random()


def reseed(seed: Optional[int]) -> None:
  """
  Re-seeds the source that hands out per-generator RNGs.

  Args:
      seed: Integer seed for reproducible runs, or None for OS entropy.
  """
  _SEED_SOURCE.seed(seed)


def derive_rng() -> random.Random:
  """
  Creates an independent RNG for a single generator.

  Returns:
      random.Random: A generator seeded from the shared seed source.
  """
  return random.Random(_SEED_SOURCE.getrandbits(64))


def validate_chance(param: str, value: Number) -> float:
  """
  Checks that a percentage lies in [0, 100].

  Args:
      param: Parameter name used in the error message.
      value: The percentage to validate.

  Returns:
      float: The value as a float.

  Raises:
      ValueError: If the value is NaN or outside [0, 100].
  """
  if value is None:
    raise ValueError(f"The '{param}' parameter cannot be None.")
  if not isinstance(value, int) and math.isnan(value):
    raise ValueError(f"The '{param}' parameter cannot be NaN.")
  if value < 0:
    raise ValueError(f"The '{param}' parameter must be greater than or equal to 0.")
  if value > 100:
    raise ValueError(f"The '{param}' parameter must be less than or equal to 100.")
  return float(value)


def validate_range(min_param: str, minimum: Number, max_param: str, maximum: Number) -> None:
  """
  Checks that an inclusive interval is not inverted.

  Raises:
      ValueError: If ``minimum > maximum``.
  """
  if minimum > maximum:
    raise ValueError(f"The '{min_param}' parameter must be less than or equal to the '{max_param}' parameter.")


def roll_chance(rng: random.Random, chance: float) -> bool:
  """
  Draws uniformly in [0, 100) and reports whether the draw falls below ``chance``.

  A chance of 0 never fires and a chance of 100 always fires.

  Args:
      rng: The generator's RNG.
      chance: Percentage in [0, 100].

  Returns:
      bool: True if the event happens on this draw.
  """
  return rng.random() * 100 < chance


def sample_integer(rng: random.Random, minimum: int, maximum: int) -> int:
  """
  Draws an integer uniformly from ``[minimum, maximum]``.

  Draws ``span.bit_length()`` random bits and rejects results above the span.
  Each draw succeeds with probability above one half, so the expected number of
  iterations is below two.

  Args:
      rng: The generator's RNG.
      minimum: Inclusive lower bound.
      maximum: Inclusive upper bound (``>= minimum``).

  Returns:
      int: The sampled value.
  """
  span = maximum - minimum
  if span == 0:
    return minimum

  bits = span.bit_length()
  while True:
    offset = rng.getrandbits(bits)
    if offset <= span:
      return minimum + offset


def sample_real(rng: random.Random, minimum: float, maximum: float) -> float:
  """
  Draws a float uniformly from ``[minimum, maximum)``.

  The interpolation weight is drawn from ``[0, 1)``, so ``maximum`` is only
  returned when rounding lands on it or the range is degenerate.

  Args:
      rng: The generator's RNG.
      minimum: Lower bound.
      maximum: Upper bound (``>= minimum``).

  Returns:
      float: The sampled value, clamped into the bounds against rounding.
  """
  if minimum == maximum:
    return float(minimum)

  u = rng.random()
  value = minimum * (1.0 - u) + maximum * u
  return float(min(max(value, minimum), maximum))
