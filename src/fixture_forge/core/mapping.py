"""
Attribute Mapping Engine.

Binds mapping requests (attribute name plus a fixed value or a value generator)
to concrete :class:`AttributeDescriptor` slots of a target class, and applies
the resulting mapping to freshly constructed instances.

Resolution walks the target's inheritance chain from the most derived class
upwards. The first same-named attribute that is neither already claimed by
this mapping nor incompatible with the candidate wins, so mapping a shadowed
private name twice binds the child's slot first and the parent's slot second.
"""

import logging
from typing import AbstractSet, Any, Dict, Iterator, Optional, Type

from fixture_forge.core.introspection import AttributeDescriptor, describe
from fixture_forge.errors import AttributeExhaustedError, AttributeNotFoundError, IncompatibleMappingError
from fixture_forge.value_generators.base import ValueGenerator

logger = logging.getLogger(__name__)

_MISSING = object()


def resolve_attribute(
  target: type,
  name: str,
  candidate_type: Optional[type],
  claimed: AbstractSet[AttributeDescriptor],
  allows_none: bool = False,
) -> AttributeDescriptor:
  """
  Finds the attribute a mapping request for ``name`` should bind to.

  Args:
      target: The class whose chain is searched, most derived first.
      name: Requested attribute name (as written, or its mangled storage name).
      candidate_type: Type of the value to store, or None for an absent value.
      claimed: Attributes already bound by earlier requests.
      allows_none: Whether the candidate may be None at generation time.

  Returns:
      AttributeDescriptor: The earliest unclaimed, compatible attribute.

  Raises:
      ValueError: If ``name`` is empty.
      AttributeExhaustedError: If same-named attributes exist but every one is claimed.
      AttributeNotFoundError: If no compatible attribute with that name exists.
  """
  if not name:
    raise ValueError("The 'name' parameter cannot be empty.")

  claimed_slots = {a.storage_name for a in claimed}
  seen_claimed = False
  for level in describe(target).chain():
    for attribute in level.attributes:
      if not attribute.matches(name):
        continue
      # public re-declarations share one instance slot
      if attribute in claimed or attribute.storage_name in claimed_slots:
        seen_claimed = True
        continue
      if attribute.accepts_type(candidate_type, allows_none):
        logger.debug("Resolved '%s' (%s) to %s", name, getattr(candidate_type, "__name__", None), attribute)
        return attribute

  if seen_claimed:
    raise AttributeExhaustedError(name, candidate_type, target)
  raise AttributeNotFoundError(name, candidate_type, target)


class AttributeMappingEntry:
  """
  A fixed value or a value generator bound to one attribute.

  Exactly one of ``value`` and ``generator`` is held. Compatibility with the
  attribute is checked on construction.
  """

  __slots__ = ("_attribute", "_value", "_generator")

  def __init__(self, attribute: AttributeDescriptor, value: Any = _MISSING, generator: Optional[ValueGenerator] = None):
    """
    Args:
        attribute: The target attribute.
        value: A fixed value (may be None for reference attributes).
        generator: A generator invoked on every generation call.

    Raises:
        ValueError: If neither or both of ``value`` and ``generator`` are given.
        IncompatibleMappingError: If the attribute cannot hold the value or the generator's output.
    """
    if (value is _MISSING) == (generator is None):
      raise ValueError("Exactly one of the 'value' and 'generator' parameters must be given.")

    if generator is not None:
      if not attribute.accepts_type(generator.value_type, generator.can_generate_none):
        raise IncompatibleMappingError(
          f"Attribute '{attribute}' cannot hold values of '{generator.value_type.__name__}' "
          f"produced by {generator!r}" + (" (which may produce None)" if generator.can_generate_none else "")
        )
      value = None
    elif not attribute.accepts_value(value):
      raise IncompatibleMappingError(f"Attribute '{attribute}' cannot hold the value {value!r}")

    self._attribute = attribute
    self._value = value
    self._generator = generator

  @property
  def attribute(self) -> AttributeDescriptor:
    return self._attribute

  @property
  def value(self) -> Any:
    return self._value

  @property
  def generator(self) -> Optional[ValueGenerator]:
    return self._generator

  @property
  def is_generated(self) -> bool:
    return self._generator is not None

  def get_or_generate_value(self) -> Any:
    """Returns the fixed value, or invokes the generator now."""
    if self._generator is not None:
      return self._generator.generate_value()
    return self._value

  def __repr__(self) -> str:
    source = repr(self._generator) if self._generator is not None else repr(self._value)
    return f"AttributeMappingEntry({self._attribute} <- {source})"


class AttributeMapping:
  """
  Ordered mapping from attributes of one target class to their entries.

  Iteration yields entries in insertion order. Re-inserting an entry for an
  attribute that is already present replaces it without moving it.
  """

  def __init__(self, target: Type):
    if not isinstance(target, type):
      raise ValueError(f"The 'target' parameter must be a class, got {target!r}.")
    self._target = target
    self._entries: Dict[AttributeDescriptor, AttributeMappingEntry] = {}

  @classmethod
  def merge(cls, primary: "AttributeMapping", secondary: "AttributeMapping") -> "AttributeMapping":
    """
    Combines two mappings; ``primary`` wins for attributes both target.

    Args:
        primary: Mapping for the target class (or a subclass of the secondary's target).
        secondary: Mapping for the same class or one of its ancestors.

    Returns:
        AttributeMapping: A new mapping for ``primary.target``.

    Raises:
        ValueError: If ``primary.target`` is not a subclass of ``secondary.target``.
    """
    if not issubclass(primary.target, secondary.target):
      raise ValueError(
        f"Cannot merge a mapping for '{secondary.target.__qualname__}' into one for "
        f"'{primary.target.__qualname__}': it is not one of its ancestors."
      )

    merged = cls(primary.target)
    primary_slots = {a.storage_name for a in primary._entries}
    merged._entries.update(
      (attribute, entry) for attribute, entry in secondary._entries.items() if attribute.storage_name not in primary_slots
    )
    merged._entries.update(primary._entries)
    logger.debug(
      "Merged %d entries over %d parent entries for %s",
      len(primary),
      len(secondary),
      primary.target.__qualname__,
    )
    return merged

  @property
  def target(self) -> type:
    return self._target

  def find_unmapped_attribute(
    self,
    candidate_type: Optional[type],
    name: str,
    allows_none: bool = False,
  ) -> AttributeDescriptor:
    """
    Resolves ``name`` against the attributes this mapping has not claimed yet.

    Raises:
        AttributeExhaustedError: If every same-named attribute is already mapped.
        AttributeNotFoundError: If no compatible attribute with that name exists.
    """
    return resolve_attribute(self._target, name, candidate_type, self._entries.keys(), allows_none)

  def map(self, name: str, value_or_generator: Any) -> AttributeDescriptor:
    """
    Maps ``name`` to a generator or, for anything else, a fixed value.

    Returns:
        AttributeDescriptor: The attribute the request was bound to.
    """
    if isinstance(value_or_generator, ValueGenerator):
      return self.map_generator(name, value_or_generator)
    return self.map_value(name, value_or_generator)

  def map_generator(self, name: str, generator: ValueGenerator) -> AttributeDescriptor:
    if generator is None:
      raise ValueError("The 'generator' parameter cannot be None.")
    attribute = self.find_unmapped_attribute(generator.value_type, name, generator.can_generate_none)
    self._entries[attribute] = AttributeMappingEntry(attribute, generator=generator)
    return attribute

  def map_value(self, name: str, value: Any) -> AttributeDescriptor:
    """Maps ``name`` to a fixed value, even if the value is itself a generator."""
    attribute = self.find_unmapped_attribute(None if value is None else type(value), name)
    self._entries[attribute] = AttributeMappingEntry(attribute, value=value)
    return attribute

  def entry_for(self, attribute: AttributeDescriptor) -> Optional[AttributeMappingEntry]:
    return self._entries.get(attribute)

  def apply(self, instance: Any) -> Any:
    """
    Assigns every entry's value to ``instance`` in iteration order.

    Raises:
        TypeError: If ``instance`` is not an instance of the target class.
    """
    if not isinstance(instance, self._target):
      raise TypeError(f"Cannot apply a mapping for '{self._target.__qualname__}' to {type(instance).__qualname__!r}.")
    for attribute, entry in self._entries.items():
      attribute.assign(instance, entry.get_or_generate_value())
    return instance

  def copy(self) -> "AttributeMapping":
    clone = type(self)(self._target)
    clone._entries = dict(self._entries)
    return clone

  def __iter__(self) -> Iterator[AttributeMappingEntry]:
    return iter(self._entries.values())

  def __len__(self) -> int:
    return len(self._entries)

  def __contains__(self, attribute: object) -> bool:
    return attribute in self._entries

  def __repr__(self) -> str:
    return f"AttributeMapping({self._target.__qualname__}, {len(self._entries)} entries)"
