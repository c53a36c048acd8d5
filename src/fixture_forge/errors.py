"""
Exception hierarchy for fixture-forge.

Every failure raised by the engine derives from :class:`FixtureForgeError` and
from the builtin exception that best describes it, so callers may catch either
the library-specific type or the generic one (e.g. ``LookupError``).

Configuration-time failures:

*   :class:`AttributeNotFoundError` / :class:`AttributeExhaustedError` when a
    mapping request cannot be bound to an attribute.
*   :class:`IncompatibleMappingError` when a mapping entry is built for an
    attribute that cannot hold the value.

Generation-time failures:

*   :class:`NoMatchingInitializerError` / :class:`AmbiguousInitializerError`
    when constructor arguments do not select exactly one initializer.
*   :class:`ConstructionError` when the selected initializer itself fails.
"""

from typing import Any, Optional, Sequence


def _type_name(tp: Optional[type]) -> str:
  if tp is None:
    return "None"
  return getattr(tp, "__qualname__", repr(tp))


class FixtureForgeError(Exception):
  """Root of all errors raised by fixture-forge."""


class AttributeNotFoundError(FixtureForgeError, LookupError):
  """
  No attribute with the requested name accepts the candidate type anywhere in
  the target's inheritance chain.
  """

  def __init__(self, attribute_name: str, candidate_type: Optional[type], target_type: type):
    self.attribute_name = attribute_name
    self.candidate_type = candidate_type
    self.target_type = target_type
    super().__init__(
      f"Could not find an attribute named '{attribute_name}' that is assignable from "
      f"'{_type_name(candidate_type)}' on '{_type_name(target_type)}' or any of its parents."
    )


class AttributeExhaustedError(FixtureForgeError, LookupError):
  """
  Every attribute with the requested name has already been claimed by an
  earlier mapping entry.
  """

  def __init__(self, attribute_name: str, candidate_type: Optional[type], target_type: type):
    self.attribute_name = attribute_name
    self.candidate_type = candidate_type
    self.target_type = target_type
    super().__init__(
      f"The '{attribute_name}' attribute assignable from '{_type_name(candidate_type)}' has already been "
      f"mapped as many times as possible for '{_type_name(target_type)}'."
    )


class IncompatibleMappingError(FixtureForgeError, TypeError):
  """A mapping entry was built for an attribute that cannot hold its value."""


class ConstructionError(FixtureForgeError, TypeError):
  """
  An instance of the target type could not be created from the resolved
  constructor arguments.
  """

  def __init__(self, message: str, target_type: type, arguments: Sequence[Any]):
    self.target_type = target_type
    self.arguments = list(arguments)
    super().__init__(message)


class NoMatchingInitializerError(ConstructionError):
  """None of the target's initializers accepts the resolved arguments."""

  def __init__(self, target_type: type, arguments: Sequence[Any]):
    super().__init__(
      f"No initializer of '{_type_name(target_type)}' accepts the resolved constructor arguments: {list(arguments)!r}",
      target_type,
      arguments,
    )


class AmbiguousInitializerError(ConstructionError):
  """More than one initializer accepts the resolved arguments."""

  def __init__(self, target_type: type, arguments: Sequence[Any], candidates: Sequence[Any]):
    self.candidates = list(candidates)
    listing = ", ".join(str(c) for c in self.candidates)
    super().__init__(
      f"Resolved constructor arguments {list(arguments)!r} match {len(self.candidates)} initializers "
      f"of '{_type_name(target_type)}': {listing}",
      target_type,
      arguments,
    )


class GeneratorNotFoundError(FixtureForgeError, LookupError):
  """No object generator is registered for the requested (type, name) pair."""

  def __init__(self, value_type: type, name: str):
    self.value_type = value_type
    self.name = name
    super().__init__(f"Did not find a '{_type_name(value_type)}' object generator registered as '{name}'.")
