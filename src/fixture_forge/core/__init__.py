"""
Core engine: introspection, attribute mapping, initializer resolution and
object generation.
"""

from fixture_forge.core.generator import ObjectGenerator
from fixture_forge.core.initializers import new_instance, resolve_initializer
from fixture_forge.core.introspection import (
  AttributeDescriptor,
  InitializerDescriptor,
  TypeConstraint,
  TypeDescriptor,
  describe,
  initializer,
)
from fixture_forge.core.mapping import AttributeMapping, AttributeMappingEntry, resolve_attribute

__all__ = [
  "AttributeDescriptor",
  "AttributeMapping",
  "AttributeMappingEntry",
  "InitializerDescriptor",
  "ObjectGenerator",
  "TypeConstraint",
  "TypeDescriptor",
  "describe",
  "initializer",
  "new_instance",
  "resolve_attribute",
  "resolve_initializer",
]
