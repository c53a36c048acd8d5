"""
Tests for Runtime Type Introspection.

Verifies:
1. Attribute discovery from own annotations, including mangled private names.
2. Scalar vs reference classification and the compatibility predicate.
3. Initializer discovery from ``__init__``, overloads and marked factories.
"""

import datetime
from typing import Any, Annotated, ClassVar, List, Literal, Optional, Union

import numpy as np
import pytest

from fixture_forge.core.introspection import TypeConstraint, clear_descriptor_cache, describe, is_scalar_type
from fixture_forge.enums import AttributeKind, InitializerKind

from example_models import ExampleChild, ExampleParent, FrozenPoint, Grandchild, Holder, Node, Shape


def test_own_attributes_only():
  parent = describe(ExampleParent)
  child = describe(ExampleChild)
  assert [a.name for a in parent.attributes] == ["parent_name", "parent_count", "__shadowed"]
  assert "parent_name" not in [a.name for a in child.attributes]
  assert child.attributes[-1].storage_name == "_ExampleChild__shadowed"


def test_shadowed_attributes_are_distinct():
  child_attr = next(a for a in describe(ExampleChild).attributes if a.name == "__shadowed")
  parent_attr = next(a for a in describe(ExampleParent).attributes if a.name == "__shadowed")
  assert child_attr != parent_attr
  assert child_attr.storage_name == "_ExampleChild__shadowed"
  assert parent_attr.storage_name == "_ExampleParent__shadowed"
  assert child_attr.matches("__shadowed")
  assert child_attr.matches("_ExampleChild__shadowed")
  assert not child_attr.matches("_ExampleParent__shadowed")


def test_chain_excludes_object():
  chain = [d.cls for d in describe(Grandchild).chain()]
  assert chain == [Grandchild, ExampleChild, ExampleParent]
  assert describe(ExampleParent).parent is None
  assert describe(Grandchild).parent is describe(ExampleChild)


def test_describe_is_cached():
  assert describe(ExampleChild) is describe(ExampleChild)


def test_describe_rejects_non_classes():
  with pytest.raises(ValueError, match="must be a class"):
    describe(42)


def test_class_vars_are_skipped():
  class WithClassVar:
    counter: ClassVar[int] = 0
    value: int

  assert [a.name for a in describe(WithClassVar).attributes] == ["value"]


def test_string_annotations_are_resolved():
  child = next(a for a in describe(Node).attributes if a.name == "child")
  assert child.accepts_type(Node)
  assert not child.accepts_type(str)
  assert child.accepts_type(None)


@pytest.mark.parametrize(
  "tp, expected",
  [(bool, True), (int, True), (float, True), (complex, True), (np.int8, True), (np.float32, True), (str, False), (list, False)],
)
def test_is_scalar_type(tp, expected):
  assert is_scalar_type(tp) is expected


def test_scalar_constraint_requires_exact_type():
  constraint = TypeConstraint.from_annotation(int)
  assert constraint.kind is AttributeKind.SCALAR
  assert constraint.accepts_type(int)
  assert not constraint.accepts_type(bool)
  assert not constraint.accepts_type(np.int64)
  assert not constraint.accepts_type(None)
  assert not constraint.accepts_type(int, allows_none=True)


def test_numpy_scalar_constraint():
  constraint = TypeConstraint.from_annotation(np.int16)
  assert constraint.is_scalar
  assert constraint.accepts_type(np.int16)
  assert not constraint.accepts_type(int)


def test_reference_constraint_accepts_subclasses_and_none():
  constraint = TypeConstraint.from_annotation(ExampleParent)
  assert constraint.kind is AttributeKind.REFERENCE
  assert constraint.accepts_type(ExampleChild)
  assert constraint.accepts_type(None)
  assert constraint.accepts_type(ExampleChild, allows_none=True)
  assert not constraint.accepts_type(str)


def test_optional_scalar_is_reference():
  constraint = TypeConstraint.from_annotation(Optional[int])
  assert constraint.kind is AttributeKind.REFERENCE
  assert constraint.accepts_type(int, allows_none=True)
  assert constraint.accepts_value(None)


@pytest.mark.parametrize(
  "annotation, accepted, rejected",
  [
    (Union[int, str], [int, str], [float]),
    (int | str, [int, str], [float]),
    (Annotated[str, "meta"], [str], [int]),
    (List[int], [list], [tuple]),
    (list[str], [list], [dict]),
    (Literal["a", "b"], [str], [int]),
  ],
)
def test_composite_annotations(annotation, accepted, rejected):
  constraint = TypeConstraint.from_annotation(annotation)
  for tp in accepted:
    assert constraint.accepts_type(tp)
  for tp in rejected:
    assert not constraint.accepts_type(tp)


@pytest.mark.parametrize("annotation", [Any, object, "Unresolved"])
def test_unconstrained_annotations(annotation):
  constraint = TypeConstraint.from_annotation(annotation)
  assert constraint.accepts_any
  assert constraint.accepts_type(int)
  assert constraint.accepts_type(datetime.datetime)
  assert constraint.accepts_type(None)


def test_assign_bypasses_frozen_dataclass():
  point = FrozenPoint(1, 2)
  x = next(a for a in describe(FrozenPoint).attributes if a.name == "x")
  x.assign(point, 10)
  assert point.x == 10
  assert x.read(point) == 10


def test_init_initializer_with_defaults():
  (init,) = describe(ExampleChild).initializers
  assert init.kind is InitializerKind.INIT
  assert init.required_count == 0
  assert len(init.parameters) == 1
  assert init.accepts([])
  assert init.accepts(["label"])
  assert not init.accepts([1])
  assert not init.accepts(["a", "b"])


def test_overloads_and_factories():
  initializers = describe(Shape).initializers
  kinds = [i.kind for i in initializers]
  assert kinds == [InitializerKind.OVERLOAD, InitializerKind.OVERLOAD, InitializerKind.FACTORY]
  assert [len(i.parameters) for i in initializers] == [1, 2, 1]
  assert str(initializers[2]) == "Shape.square(int)"


def test_overload_variants_keep_their_defaults():
  _, second = describe(Holder).initializers
  assert second.required_count == 1
  assert second.accepts([5])
  assert second.accepts([5, 2.0])


def test_class_without_init_has_empty_initializer():
  class Bare:
    value: int

  (init,) = describe(Bare).initializers
  assert init.accepts([])
  assert not init.accepts([1])


def test_required_keyword_only_initializer_is_skipped():
  class KeywordOnly:
    def __init__(self, *, value: int):
      self.value = value

  assert describe(KeywordOnly).initializers == ()


def test_variadic_initializer():
  class Variadic:
    def __init__(self, *names: str):
      self.names = names

  (init,) = describe(Variadic).initializers
  assert init.accepts([])
  assert init.accepts(["a", "b", "c"])
  assert not init.accepts(["a", 1])


def test_all_attributes_walks_the_chain():
  names = [(a.owner.__name__, a.name) for a in describe(ExampleChild).all_attributes()]
  assert names[0] == ("ExampleChild", "label")
  assert ("ExampleChild", "__shadowed") in names
  assert ("ExampleParent", "__shadowed") in names
  assert names[-1] == ("ExampleParent", "__shadowed")


def test_attribute_kind_and_annotation():
  attributes = {a.name: a for a in describe(ExampleChild).attributes}
  assert attributes["flag"].kind is AttributeKind.SCALAR
  assert attributes["small"].kind is AttributeKind.SCALAR
  assert attributes["nickname"].kind is AttributeKind.REFERENCE
  assert attributes["created"].annotation is datetime.datetime
  assert str(attributes["flag"]) == "ExampleChild.flag: bool"


def test_clear_descriptor_cache():
  before = describe(ExampleParent)
  clear_descriptor_cache()
  after = describe(ExampleParent)
  assert after is not before
  assert after == before
