"""
Fluent Object Generator Builder.

Accumulates the configuration of an :class:`ObjectGenerator` and freezes it
once, either standalone (:meth:`ObjectGeneratorBuilder.build`) or straight into
the registry (:meth:`ObjectGeneratorBuilder.register`)::

    generator = (
      create_object_generator(Person)
      .with_constructor_args(StringValueGenerator(1, 1))
      .map_attribute("age", IntegerValueGenerator(0, 120))
      .with_null_chance(10)
      .register()
    )

Attribute mapping requests are resolved immediately, so a misspelt or
incompatible attribute fails at the ``map_attribute`` call.
"""

from typing import Any, Generic, Optional, Tuple, Type, TypeVar

from fixture_forge.config import get_config
from fixture_forge.core.generator import ObjectGenerator
from fixture_forge.core.mapping import AttributeMapping
from fixture_forge.registry import register_object_generator, require_object_generator
from fixture_forge.value_generators.sampling import validate_chance

T = TypeVar("T")


class ObjectGeneratorBuilder(Generic[T]):
  """
  Mutable configuration for one object generator. Every ``with_*`` and
  ``map_*`` method returns the builder itself.
  """

  def __init__(self, value_type: Type[T]):
    config = get_config()
    self._attribute_mapping = AttributeMapping(value_type)
    self._name: str = config.default_generator_name
    self._constructor_args: Tuple[Any, ...] = ()
    self._null_chance: float = config.default_null_chance
    self._parent: Optional[ObjectGenerator] = None

  @property
  def value_type(self) -> type:
    return self._attribute_mapping.target

  @property
  def name(self) -> str:
    return self._name

  @property
  def attribute_mapping(self) -> AttributeMapping:
    return self._attribute_mapping

  @property
  def constructor_args(self) -> Tuple[Any, ...]:
    return self._constructor_args

  @property
  def null_chance(self) -> float:
    return self._null_chance

  @property
  def parent(self) -> Optional[ObjectGenerator]:
    return self._parent

  def with_name(self, name: str) -> "ObjectGeneratorBuilder[T]":
    if not name:
      raise ValueError("The 'name' parameter cannot be empty.")
    self._name = name
    return self

  def map_attribute(self, name: str, value_or_generator: Any) -> "ObjectGeneratorBuilder[T]":
    """
    Maps an attribute to a value generator, or to a fixed value.

    Raises:
        AttributeNotFoundError: If no compatible attribute named ``name`` exists.
        AttributeExhaustedError: If every attribute named ``name`` is already mapped.
    """
    self._attribute_mapping.map(name, value_or_generator)
    return self

  def map_value(self, name: str, value: Any) -> "ObjectGeneratorBuilder[T]":
    """Maps an attribute to a fixed value, even when the value is a generator."""
    self._attribute_mapping.map_value(name, value)
    return self

  def with_constructor_args(self, *args: Any) -> "ObjectGeneratorBuilder[T]":
    """Sets the positional constructor-argument slots (fixed values or generators)."""
    self._constructor_args = args
    return self

  def with_null_chance(self, null_chance: float) -> "ObjectGeneratorBuilder[T]":
    self._null_chance = validate_chance("null_chance", null_chance)
    return self

  def with_parent(self, parent: Optional[ObjectGenerator]) -> "ObjectGeneratorBuilder[T]":
    """
    Sets the generator whose effective mapping is applied beneath this one's.

    Raises:
        ValueError: If ``parent`` generates a class that is not an ancestor of ours.
    """
    if parent is not None and not issubclass(self.value_type, parent.value_type):
      raise ValueError(
        f"The 'parent' parameter must generate '{self.value_type.__qualname__}' or one of its ancestors, "
        f"not '{parent.value_type.__qualname__}'."
      )
    self._parent = parent
    return self

  def with_parent_from_registry(self, value_type: type, name: Optional[str] = None) -> "ObjectGeneratorBuilder[T]":
    """
    Uses a registered generator as the parent.

    Raises:
        GeneratorNotFoundError: If nothing is registered for ``(value_type, name)``.
    """
    return self.with_parent(require_object_generator(value_type, name))

  def build(self) -> ObjectGenerator[T]:
    """Freezes the configuration into a generator without registering it."""
    return ObjectGenerator(
      self._name,
      self._attribute_mapping,
      self._constructor_args,
      self._null_chance,
      self._parent,
      eager_initializer_check=get_config().eager_initializer_check,
    )

  def register(self) -> ObjectGenerator[T]:
    """Freezes the configuration and registers the resulting generator."""
    return register_object_generator(self.build())
