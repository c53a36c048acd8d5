"""
fixture-forge Package.

A test-fixture generation engine. Describe what varies about a fixture (which
initializer arguments to pass, which attributes to overwrite with fixed values
or random generators) and let the engine build populated instances.

Usage
-----

.. code-block:: python

    import fixture_forge as ff

    class Person:
      name: str
      age: int

      def __init__(self, name: str):
        self.name = name

    (
      ff.create_object_generator(Person)
      .with_constructor_args(ff.FirstNameValueGenerator())
      .map_attribute("age", ff.IntegerValueGenerator(0, 120))
      .register()
    )

    person = ff.generate(Person)

Registered generators are looked up by class and name. Test suites should call
:func:`clear_registry` between cases.
"""

from fixture_forge.builder import ObjectGeneratorBuilder
from fixture_forge.config import ForgeConfig, get_config, reset_config, set_config
from fixture_forge.core import (
  AttributeDescriptor,
  AttributeMapping,
  AttributeMappingEntry,
  ObjectGenerator,
  TypeDescriptor,
  describe,
  initializer,
)
from fixture_forge.errors import (
  AmbiguousInitializerError,
  AttributeExhaustedError,
  AttributeNotFoundError,
  ConstructionError,
  FixtureForgeError,
  GeneratorNotFoundError,
  IncompatibleMappingError,
  NoMatchingInitializerError,
)
from fixture_forge.registry import (
  clear_registry,
  create_object_generator,
  generate,
  get_object_generator,
  register_object_generator,
  registered_generators,
  require_object_generator,
)
from fixture_forge.value_generators import (
  BooleanValueGenerator,
  ByteValueGenerator,
  CharacterValueGenerator,
  DateValueGenerator,
  DoubleValueGenerator,
  EnumValueGenerator,
  FirstNameValueGenerator,
  FloatValueGenerator,
  IntegerValueGenerator,
  LastNameValueGenerator,
  ListBasedValueGenerator,
  LongValueGenerator,
  SetBasedValueGenerator,
  ShortValueGenerator,
  StringValueGenerator,
  ValueGenerator,
)

__version__ = "0.1.0"

__all__ = [
  "AmbiguousInitializerError",
  "AttributeDescriptor",
  "AttributeExhaustedError",
  "AttributeMapping",
  "AttributeMappingEntry",
  "AttributeNotFoundError",
  "BooleanValueGenerator",
  "ByteValueGenerator",
  "CharacterValueGenerator",
  "ConstructionError",
  "DateValueGenerator",
  "DoubleValueGenerator",
  "EnumValueGenerator",
  "FirstNameValueGenerator",
  "FixtureForgeError",
  "FloatValueGenerator",
  "ForgeConfig",
  "GeneratorNotFoundError",
  "IncompatibleMappingError",
  "IntegerValueGenerator",
  "LastNameValueGenerator",
  "ListBasedValueGenerator",
  "LongValueGenerator",
  "NoMatchingInitializerError",
  "ObjectGenerator",
  "ObjectGeneratorBuilder",
  "SetBasedValueGenerator",
  "ShortValueGenerator",
  "StringValueGenerator",
  "TypeDescriptor",
  "ValueGenerator",
  "clear_registry",
  "create_object_generator",
  "describe",
  "generate",
  "get_config",
  "get_object_generator",
  "initializer",
  "register_object_generator",
  "registered_generators",
  "require_object_generator",
  "reset_config",
  "set_config",
]
