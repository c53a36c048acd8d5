"""
Tests for the fluent builder and the generator registry.

Verifies:
1. Builder defaults come from the active configuration.
2. register() stores the generator under (class, name); lookups by default name.
3. Parents can be attached by reference or from the registry.
4. clear_registry() isolates test cases.
"""

import pytest

import fixture_forge as ff
from fixture_forge.builder import ObjectGeneratorBuilder
from fixture_forge.config import ForgeConfig, set_config
from fixture_forge.errors import AttributeNotFoundError, GeneratorNotFoundError
from fixture_forge.registry import (
  clear_registry,
  create_object_generator,
  generate,
  get_object_generator,
  register_object_generator,
  registered_generators,
  require_object_generator,
)
from fixture_forge.value_generators import IntegerValueGenerator, StringValueGenerator

from conftest import RANDOM_GENERATION_RUNS
from example_models import ExampleChild, ExampleParent, Shape


def test_builder_defaults():
  builder = create_object_generator(ExampleChild)
  assert isinstance(builder, ObjectGeneratorBuilder)
  assert builder.value_type is ExampleChild
  assert builder.name == "default"
  assert builder.null_chance == 0
  assert builder.constructor_args == ()
  assert builder.parent is None
  assert len(builder.attribute_mapping) == 0


def test_builder_defaults_follow_config():
  set_config(ForgeConfig(default_generator_name="fixtures", default_null_chance=25))
  builder = create_object_generator(ExampleChild)
  assert builder.name == "fixtures"
  assert builder.null_chance == 25


def test_register_and_generate():
  generator = (
    create_object_generator(ExampleChild)
    .with_constructor_args(StringValueGenerator(1, 1))
    .map_attribute("parent_count", IntegerValueGenerator(0, 9))
    .map_value("nickname", "nick")
    .register()
  )

  assert get_object_generator(ExampleChild) is generator
  assert require_object_generator(ExampleChild, "default") is generator
  assert registered_generators() == [(ExampleChild, "default")]

  for _ in range(RANDOM_GENERATION_RUNS):
    instance = generate(ExampleChild)
    assert len(instance.label) == 1
    assert 0 <= instance.parent_count <= 9
    assert instance.nickname == "nick"


def test_build_does_not_register():
  generator = create_object_generator(ExampleParent).with_name("standalone").build()
  assert generator.name == "standalone"
  assert get_object_generator(ExampleParent, "standalone") is None


def test_named_generators_are_independent():
  create_object_generator(Shape).with_constructor_args("circle").register()
  create_object_generator(Shape).with_name("squares").with_constructor_args(2).register()

  assert generate(Shape).kind == "circle"
  assert generate(Shape, "squares").kind == "square"


def test_reregistering_replaces_and_warns(recorded_console):
  create_object_generator(ExampleParent).map_attribute("parent_count", 1).register()
  replacement = create_object_generator(ExampleParent).map_attribute("parent_count", 2).register()

  assert get_object_generator(ExampleParent) is replacement
  assert generate(ExampleParent).parent_count == 2
  assert "Replacing" in recorded_console.export_text()


def test_missing_generator():
  assert get_object_generator(ExampleParent) is None
  with pytest.raises(GeneratorNotFoundError) as excinfo:
    generate(ExampleParent, "nope")
  assert excinfo.value.name == "nope"
  assert isinstance(excinfo.value, LookupError)


def test_parent_from_registry():
  create_object_generator(ExampleParent).map_attribute("parent_name", "from parent").map_attribute(
    "parent_count", 5
  ).register()

  child = (
    create_object_generator(ExampleChild)
    .with_parent_from_registry(ExampleParent)
    .map_attribute("parent_name", "from child")
    .register()
  )

  instance = child.generate_value()
  assert instance.parent_name == "from child"
  assert instance.parent_count == 5


def test_parent_from_registry_missing():
  with pytest.raises(GeneratorNotFoundError):
    create_object_generator(ExampleChild).with_parent_from_registry(ExampleParent, "absent")


def test_parent_must_be_ancestor():
  child_generator = create_object_generator(ExampleChild).build()
  with pytest.raises(ValueError, match="'parent' parameter must generate"):
    create_object_generator(ExampleParent).with_parent(child_generator)


def test_builder_validation():
  builder = create_object_generator(ExampleChild)
  with pytest.raises(ValueError):
    builder.with_name("")
  with pytest.raises(ValueError):
    builder.with_null_chance(150)
  with pytest.raises(AttributeNotFoundError):
    builder.map_attribute("does_not_exist", 1)


def test_register_object_generator_directly():
  generator = ObjectGeneratorBuilder(ExampleParent).with_name("manual").build()
  assert register_object_generator(generator) is generator
  assert require_object_generator(ExampleParent, "manual") is generator


def test_clear_registry():
  create_object_generator(ExampleParent).register()
  clear_registry()
  assert registered_generators() == []


def test_package_level_api():
  ff.create_object_generator(ExampleParent).map_attribute("parent_name", ff.FirstNameValueGenerator()).register()
  assert isinstance(ff.generate(ExampleParent).parent_name, str)
  assert ff.__version__
