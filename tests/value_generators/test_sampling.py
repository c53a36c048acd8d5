"""
Tests for the shared range sampling primitives.

Verifies:
1. Integral and real draws stay within inclusive bounds, including extreme ranges.
2. The absence gate never fires at 0% and always fires at 100%.
3. Percentages and ranges are validated with the parameter name in the message.
4. Re-seeding makes derived generators reproducible.
"""

import math
import random
import sys

import pytest
from hypothesis import given, settings, strategies as st

from fixture_forge.value_generators.sampling import (
  derive_rng,
  reseed,
  roll_chance,
  sample_integer,
  sample_real,
  validate_chance,
  validate_range,
)

from conftest import RANDOM_GENERATION_RUNS

bounds = st.integers(min_value=-(2**70), max_value=2**70)
finite_floats = st.floats(allow_nan=False, allow_infinity=False)


@given(a=bounds, b=bounds, seed=st.integers(min_value=0, max_value=2**32))
@settings(max_examples=200)
def test_sample_integer_within_bounds(a, b, seed):
  minimum, maximum = min(a, b), max(a, b)
  rng = random.Random(seed)
  for _ in range(20):
    assert minimum <= sample_integer(rng, minimum, maximum) <= maximum


@given(a=finite_floats, b=finite_floats, seed=st.integers(min_value=0, max_value=2**32))
@settings(max_examples=200)
def test_sample_real_within_bounds(a, b, seed):
  minimum, maximum = min(a, b), max(a, b)
  rng = random.Random(seed)
  for _ in range(20):
    assert minimum <= sample_real(rng, minimum, maximum) <= maximum


def test_sample_real_full_double_range_does_not_overflow():
  rng = random.Random(7)
  big = sys.float_info.max
  for _ in range(RANDOM_GENERATION_RUNS):
    value = sample_real(rng, -big, big)
    assert -big <= value <= big


def test_sample_integer_degenerate_range():
  rng = random.Random(1)
  assert sample_integer(rng, 5, 5) == 5
  assert sample_real(rng, 2.5, 2.5) == 2.5


def test_sample_integer_hits_every_value_of_small_range():
  """
  Scenario: Draw repeatedly from [0, 3].
  Expectation: Every value appears; none falls outside.
  """
  rng = random.Random(3)
  seen = {sample_integer(rng, 0, 3) for _ in range(RANDOM_GENERATION_RUNS)}
  assert seen == {0, 1, 2, 3}


def test_roll_chance_extremes():
  rng = random.Random(11)
  assert not any(roll_chance(rng, 0) for _ in range(RANDOM_GENERATION_RUNS))
  assert all(roll_chance(rng, 100) for _ in range(RANDOM_GENERATION_RUNS))


@given(chance=st.floats(min_value=0, max_value=100))
def test_validate_chance_accepts_percentages(chance):
  assert validate_chance("null_chance", chance) == chance


@pytest.mark.parametrize(
  "value, message",
  [
    (-0.1, "The 'null_chance' parameter must be greater than or equal to 0."),
    (100.1, "The 'null_chance' parameter must be less than or equal to 100."),
    (None, "The 'null_chance' parameter cannot be None."),
    (math.nan, "The 'null_chance' parameter cannot be NaN."),
  ],
)
def test_validate_chance_rejects(value, message):
  with pytest.raises(ValueError) as excinfo:
    validate_chance("null_chance", value)
  assert str(excinfo.value) == message


def test_validate_range_rejects_inverted():
  with pytest.raises(ValueError, match="'min_value' parameter must be less than or equal to the 'max_value'"):
    validate_range("min_value", 2, "max_value", 1)
  validate_range("min_value", 1, "max_value", 1)


def test_reseed_makes_derived_rngs_reproducible():
  reseed(42)
  first = [derive_rng().random() for _ in range(3)]
  reseed(42)
  second = [derive_rng().random() for _ in range(3)]
  assert first == second


def test_sample_real_largest_draw_stays_below_maximum():
  class _LargestDraw(random.Random):
    def random(self):
      return math.nextafter(1.0, 0.0)

  assert sample_real(_LargestDraw(), 0.0, 2.0) < 2.0
  assert sample_real(random.Random(3), 5.0, 5.0) == 5.0
