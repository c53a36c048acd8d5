"""
Object Generator Registry.

Process-wide index of object generators keyed by produced class and name. A
generator declared as the parent of another can be looked up here, and test
suites call :func:`clear_registry` between cases for isolation.
"""

import logging
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Type

from rich.markup import escape

from fixture_forge.config import get_config
from fixture_forge.core.generator import ObjectGenerator
from fixture_forge.errors import GeneratorNotFoundError
from fixture_forge.utils.console import log_warning

if TYPE_CHECKING:
  from fixture_forge.builder import ObjectGeneratorBuilder

logger = logging.getLogger(__name__)

_GENERATOR_REGISTRY: Dict[type, Dict[str, ObjectGenerator]] = {}


def _resolve_name(name: Optional[str]) -> str:
  return get_config().default_generator_name if name is None else name


def register_object_generator(generator: ObjectGenerator) -> ObjectGenerator:
  """
  Registers ``generator`` under its produced class and name.

  An existing generator with the same key is replaced.

  Returns:
      ObjectGenerator: The registered generator.
  """
  if generator is None:
    raise ValueError("The 'generator' parameter cannot be None.")

  by_name = _GENERATOR_REGISTRY.setdefault(generator.value_type, {})
  if generator.name in by_name:
    log_warning(
      f"Replacing [type]{generator.value_type.__qualname__}[/type] generator [attr]{escape(generator.name)}[/attr]"
    )
  by_name[generator.name] = generator
  logger.debug("Registered %r", generator)
  return generator


def get_object_generator(value_type: Type, name: Optional[str] = None) -> Optional[ObjectGenerator]:
  """
  Looks up a registered generator.

  Args:
      value_type: The produced class.
      name: Registry name. Defaults to the configured default name.

  Returns:
      Optional[ObjectGenerator]: The generator, or None if not registered.
  """
  return _GENERATOR_REGISTRY.get(value_type, {}).get(_resolve_name(name))


def require_object_generator(value_type: Type, name: Optional[str] = None) -> ObjectGenerator:
  """
  Looks up a registered generator that must exist.

  Raises:
      GeneratorNotFoundError: If nothing is registered for ``(value_type, name)``.
  """
  generator = get_object_generator(value_type, name)
  if generator is None:
    raise GeneratorNotFoundError(value_type, _resolve_name(name))
  return generator


def generate(value_type: Type, name: Optional[str] = None) -> Any:
  """
  Generates a value with the registered generator for ``(value_type, name)``.

  Raises:
      GeneratorNotFoundError: If nothing is registered for the key.
  """
  return require_object_generator(value_type, name).generate_value()


def registered_generators() -> List[Tuple[type, str]]:
  """Returns the registered ``(class, name)`` keys in registration order."""
  return [(value_type, name) for value_type, by_name in _GENERATOR_REGISTRY.items() for name in by_name]


def clear_registry() -> None:
  """Removes every registered generator."""
  _GENERATOR_REGISTRY.clear()
  logger.debug("Cleared generator registry")


def create_object_generator(value_type: Type) -> "ObjectGeneratorBuilder":
  """
  Starts configuring a generator for ``value_type``.

  Returns:
      ObjectGeneratorBuilder: A builder; call ``register()`` or ``build()`` to finish.
  """
  from fixture_forge.builder import ObjectGeneratorBuilder

  return ObjectGeneratorBuilder(value_type)
