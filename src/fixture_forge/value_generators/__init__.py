"""
Value Generators.

Producers of pseudo-random values used to populate attributes and constructor
arguments. Every generator satisfies :class:`ValueGenerator`.
"""

from fixture_forge.value_generators.base import RandomValueGenerator, ValueGenerator
from fixture_forge.value_generators.boolean import BooleanValueGenerator
from fixture_forge.value_generators.collections import (
  EnumValueGenerator,
  ListBasedValueGenerator,
  SetBasedValueGenerator,
)
from fixture_forge.value_generators.names import FirstNameValueGenerator, LastNameValueGenerator
from fixture_forge.value_generators.numeric import (
  ByteValueGenerator,
  DoubleValueGenerator,
  FloatValueGenerator,
  IntegerValueGenerator,
  LongValueGenerator,
  ShortValueGenerator,
)
from fixture_forge.value_generators.temporal import DateValueGenerator
from fixture_forge.value_generators.text import CharacterValueGenerator, StringValueGenerator

__all__ = [
  "ValueGenerator",
  "RandomValueGenerator",
  "BooleanValueGenerator",
  "ByteValueGenerator",
  "ShortValueGenerator",
  "IntegerValueGenerator",
  "LongValueGenerator",
  "FloatValueGenerator",
  "DoubleValueGenerator",
  "CharacterValueGenerator",
  "StringValueGenerator",
  "DateValueGenerator",
  "ListBasedValueGenerator",
  "SetBasedValueGenerator",
  "EnumValueGenerator",
  "FirstNameValueGenerator",
  "LastNameValueGenerator",
]
