"""
Object Generator.

Produces populated instances of one class. Each call:

1.  Rolls the absence gate and returns None if it fires.
2.  Evaluates the constructor-argument slots and invokes the unique matching
    initializer.
3.  Applies the effective attribute mapping (this generator's own mapping
    merged over its parent's effective mapping) by direct assignment.

Generators are immutable once constructed and may be nested as attribute
values or constructor arguments of other generators.
"""

import logging
from typing import Any, Optional, Sequence, Tuple, Type, TypeVar

from fixture_forge.core.initializers import evaluate_arguments, invoke_initializer, resolve_initializer
from fixture_forge.core.mapping import AttributeMapping
from fixture_forge.value_generators.base import ValueGenerator
from fixture_forge.value_generators.sampling import derive_rng, roll_chance, validate_chance

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ObjectGenerator(ValueGenerator[T]):
  """
  Generates instances of :attr:`value_type`.

  Attributes:
      name: Registry name of this generator.
  """

  def __init__(
    self,
    name: str,
    attribute_mapping: AttributeMapping,
    constructor_args: Sequence[Any] = (),
    null_chance: float = 0.0,
    parent: Optional["ObjectGenerator"] = None,
    eager_initializer_check: bool = True,
  ):
    """
    Args:
        name: Non-empty registry name.
        attribute_mapping: Mapping for the produced class. Copied.
        constructor_args: Fixed values and/or value generators passed positionally. Copied.
        null_chance: Percent chance in [0, 100] of producing None.
        parent: Generator for the produced class or one of its ancestors whose
            effective mapping is applied beneath this generator's own.
        eager_initializer_check: When every constructor argument is a fixed
            value, resolve the initializer now so misconfiguration fails here.

    Raises:
        ValueError: If a parameter is invalid or ``parent`` produces an unrelated class.
        NoMatchingInitializerError: If the eager check finds no initializer.
        AmbiguousInitializerError: If the eager check finds several initializers.
    """
    if not name:
      raise ValueError("The 'name' parameter cannot be empty.")
    if attribute_mapping is None:
      raise ValueError("The 'attribute_mapping' parameter cannot be None.")
    if constructor_args is None:
      raise ValueError("The 'constructor_args' parameter cannot be None.")

    value_type = attribute_mapping.target
    if parent is not None and not issubclass(value_type, parent.value_type):
      raise ValueError(
        f"The 'parent' parameter must generate '{value_type.__qualname__}' or one of its ancestors, "
        f"not '{parent.value_type.__qualname__}'."
      )

    self.name = name
    self._value_type: Type[T] = value_type
    self._attribute_mapping = attribute_mapping.copy()
    self._constructor_args: Tuple[Any, ...] = tuple(constructor_args)
    self._null_chance = validate_chance("null_chance", null_chance)
    self._parent = parent
    self._rng = derive_rng()

    if parent is None:
      self._effective_mapping = self._attribute_mapping
    else:
      self._effective_mapping = AttributeMapping.merge(self._attribute_mapping, parent.effective_mapping)

    if eager_initializer_check and not any(isinstance(arg, ValueGenerator) for arg in self._constructor_args):
      resolve_initializer(self._value_type, self._constructor_args)

    logger.debug("Created %r", self)

  @property
  def value_type(self) -> type:
    return self._value_type

  @property
  def attribute_mapping(self) -> AttributeMapping:
    """This generator's own mapping, without its parent's entries."""
    return self._attribute_mapping.copy()

  @property
  def effective_mapping(self) -> AttributeMapping:
    """The mapping applied to every generated instance."""
    return self._effective_mapping.copy()

  @property
  def constructor_args(self) -> Tuple[Any, ...]:
    return self._constructor_args

  @property
  def null_chance(self) -> float:
    return self._null_chance

  @property
  def parent(self) -> Optional["ObjectGenerator"]:
    return self._parent

  @property
  def can_generate_none(self) -> bool:
    return self._null_chance > 0

  def generate_value(self) -> Optional[T]:
    """
    Produces a new, fully populated instance, or None when the absence gate fires.

    Raises:
        NoMatchingInitializerError: If no initializer accepts the evaluated arguments.
        AmbiguousInitializerError: If several initializers accept them.
        ConstructionError: If the selected initializer fails.
    """
    if roll_chance(self._rng, self._null_chance):
      return None

    arguments = evaluate_arguments(self._constructor_args)
    instance = invoke_initializer(resolve_initializer(self._value_type, arguments), arguments)
    return self._effective_mapping.apply(instance)

  def __repr__(self) -> str:
    parent = f", parent={self._parent.name!r}" if self._parent is not None else ""
    return (
      f"ObjectGenerator({self._value_type.__qualname__}, name={self.name!r}, "
      f"{len(self._effective_mapping)} mapped attributes, null_chance={self._null_chance:g}{parent})"
    )
