"""
Initializer Resolution.

Selects how to construct an instance from a list of constructor-argument
slots. Slots are evaluated first (generators invoked, fixed values passed
through); resolution then reasons only about the run-time types of the
evaluated values.

Exactly one initializer must accept the arguments. When several do, resolution
fails instead of picking the most specific one.
"""

import logging
from typing import Any, List, Sequence

from fixture_forge.core.introspection import InitializerDescriptor, describe
from fixture_forge.errors import AmbiguousInitializerError, ConstructionError, NoMatchingInitializerError
from fixture_forge.value_generators.base import ValueGenerator

logger = logging.getLogger(__name__)


def evaluate_arguments(slots: Sequence[Any]) -> List[Any]:
  """
  Evaluates constructor-argument slots left to right.

  Args:
      slots: Fixed values and/or value generators.

  Returns:
      List[Any]: The concrete argument values (None where a generator produced none).
  """
  return [slot.generate_value() if isinstance(slot, ValueGenerator) else slot for slot in slots]


def matching_initializers(target: type, arguments: Sequence[Any]) -> List[InitializerDescriptor]:
  """Returns every initializer of ``target`` that accepts ``arguments``."""
  return [candidate for candidate in describe(target).initializers if candidate.accepts(arguments)]


def resolve_initializer(target: type, arguments: Sequence[Any]) -> InitializerDescriptor:
  """
  Selects the unique initializer that accepts the evaluated arguments.

  Args:
      target: The class to construct.
      arguments: Already-evaluated argument values.

  Returns:
      InitializerDescriptor: The selected initializer.

  Raises:
      NoMatchingInitializerError: If no initializer accepts the arguments.
      AmbiguousInitializerError: If more than one initializer accepts them.
  """
  matches = matching_initializers(target, arguments)
  if not matches:
    raise NoMatchingInitializerError(target, arguments)
  if len(matches) > 1:
    raise AmbiguousInitializerError(target, arguments, matches)

  logger.debug("Selected initializer %s for %r", matches[0], list(arguments))
  return matches[0]


def invoke_initializer(selected: InitializerDescriptor, arguments: Sequence[Any]) -> Any:
  """
  Calls the selected initializer.

  Raises:
      ConstructionError: If the initializer raises, or a factory returns
          something that is not an instance of the target class.
  """
  target = selected.owner
  try:
    instance = selected.invoke(arguments)
  except Exception as e:
    raise ConstructionError(
      f"Could not construct an instance of '{target.__qualname__}' using the resolved "
      f"constructor arguments {list(arguments)!r}: {e}",
      target,
      arguments,
    ) from e

  if not isinstance(instance, target):
    raise ConstructionError(
      f"Initializer {selected} returned {type(instance).__qualname__!r} instead of an instance of "
      f"'{target.__qualname__}'.",
      target,
      arguments,
    )
  return instance


def new_instance(target: type, slots: Sequence[Any]) -> Any:
  """
  Evaluates ``slots``, resolves an initializer for them and invokes it.

  Args:
      target: The class to construct.
      slots: Constructor-argument slots (fixed values and/or value generators).

  Returns:
      Any: A new instance of ``target``.
  """
  arguments = evaluate_arguments(slots)
  return invoke_initializer(resolve_initializer(target, arguments), arguments)
