"""
Runtime Type Introspection.

Builds the read-only descriptors the engine works with from live Python classes:

1.  **TypeConstraint**: What an annotation accepts. Scalar annotations (exactly
    ``bool``, ``int``, ``float``, ``complex`` or a NumPy scalar type) accept only
    that exact type and never None; every other annotation accepts None and any
    subclass of the annotated class.
2.  **AttributeDescriptor**: One attribute declared directly by one class, read
    from the class's own annotations. Private ``__name`` attributes are stored
    under their mangled name, so a child and a parent declaring the same private
    name own two independent slots.
3.  **InitializerDescriptor**: One way of constructing an instance. Either the
    effective ``__init__`` (or each of its ``typing.overload`` variants), or a
    classmethod/staticmethod marked with :func:`initializer`.
4.  **TypeDescriptor**: A class, its declared attributes and initializers, and
    its inheritance chain (the MRO without ``object``).

Descriptors are cached per class by :func:`describe`.
"""

import dataclasses
import inspect
import logging
import types
import typing
from functools import lru_cache
from typing import Any, Callable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
from rich.markup import escape

from fixture_forge.enums import AttributeKind, InitializerKind
from fixture_forge.utils.console import log_warning

logger = logging.getLogger(__name__)

SCALAR_TYPES: Tuple[type, ...] = (bool, int, float, complex)
INITIALIZER_MARKER = "__fixture_initializer__"

_NONE_TYPE = type(None)


def is_scalar_type(tp: Any) -> bool:
  """Whether ``tp`` is a primitive-like type that can never hold None."""
  if not isinstance(tp, type):
    return False
  return tp in SCALAR_TYPES or issubclass(tp, np.generic)


def _type_label(tp: Any) -> str:
  if tp is inspect.Parameter.empty:
    return "Any"
  if isinstance(tp, type):
    return tp.__qualname__
  return str(tp).replace("typing.", "")


@dataclasses.dataclass(frozen=True)
class TypeConstraint:
  """
  The set of values an annotated slot accepts.

  Attributes:
      annotation: The annotation this constraint was derived from.
      classes: Accepted classes. Empty together with ``accepts_any`` means unconstrained.
      accepts_any: True for ``Any``, ``object``, missing or unresolvable annotations.
      optional: True when the annotation explicitly includes None.
  """

  annotation: Any = dataclasses.field(compare=False)
  classes: Tuple[type, ...] = ()
  accepts_any: bool = False
  optional: bool = False

  @classmethod
  def unconstrained(cls, annotation: Any = inspect.Parameter.empty) -> "TypeConstraint":
    return cls(annotation=annotation, accepts_any=True, optional=True)

  @classmethod
  def from_annotation(cls, annotation: Any) -> "TypeConstraint":
    """
    Interprets a (resolved) annotation.

    Understands plain classes, ``Optional``/``Union`` (both spellings),
    ``Annotated``, ``Literal``, ``NewType``, ``TypeVar`` and parameterised
    generics (``list[int]`` accepts any ``list``). Anything else, including
    forward references that could not be resolved, is unconstrained.
    """
    if annotation is inspect.Parameter.empty or annotation is Any or annotation is object:
      return cls.unconstrained(annotation)
    if isinstance(annotation, str):
      return cls.unconstrained(annotation)
    if annotation is None or annotation is _NONE_TYPE:
      return cls(annotation=annotation, optional=True)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
      return dataclasses.replace(cls.from_annotation(args[0]), annotation=annotation)

    if origin is typing.Union or origin is types.UnionType:
      members = [cls.from_annotation(arg) for arg in args]
      classes: List[type] = []
      for member in members:
        classes.extend(c for c in member.classes if c not in classes)
      return cls(
        annotation=annotation,
        classes=tuple(classes),
        accepts_any=any(m.accepts_any for m in members),
        optional=any(m.optional for m in members),
      )

    if origin is typing.Literal:
      literal_classes: List[type] = []
      for value in args:
        if value is not None and type(value) not in literal_classes:
          literal_classes.append(type(value))
      return cls(annotation=annotation, classes=tuple(literal_classes), optional=None in args)

    if isinstance(annotation, typing.TypeVar):
      if annotation.__bound__ is not None:
        return dataclasses.replace(cls.from_annotation(annotation.__bound__), annotation=annotation)
      if annotation.__constraints__:
        return dataclasses.replace(cls.from_annotation(typing.Union[annotation.__constraints__]), annotation=annotation)
      return cls.unconstrained(annotation)

    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
      return dataclasses.replace(cls.from_annotation(supertype), annotation=annotation)

    if isinstance(origin, type):
      return cls(annotation=annotation, classes=(origin,))
    if isinstance(annotation, type):
      return cls(annotation=annotation, classes=(annotation,))

    logger.debug("Treating unsupported annotation %r as unconstrained", annotation)
    return cls.unconstrained(annotation)

  @property
  def kind(self) -> AttributeKind:
    if not self.accepts_any and not self.optional and len(self.classes) == 1 and is_scalar_type(self.classes[0]):
      return AttributeKind.SCALAR
    return AttributeKind.REFERENCE

  @property
  def is_scalar(self) -> bool:
    return self.kind is AttributeKind.SCALAR

  def accepts_type(self, candidate: Optional[type], allows_none: bool = False) -> bool:
    """
    Compatibility predicate shared by attribute and initializer resolution.

    Args:
        candidate: Type of the value to store, or None for an absent value.
        allows_none: Whether the value may turn out to be None at generation time.

    Returns:
        bool: True if a value of ``candidate`` may be stored in this slot.
    """
    if candidate is None or candidate is _NONE_TYPE:
      return not self.is_scalar
    if self.is_scalar:
      return candidate is self.classes[0] and not allows_none
    if self.accepts_any:
      return True
    if not isinstance(candidate, type):
      return False
    return any(issubclass(candidate, c) for c in self.classes)

  def accepts_value(self, value: Any) -> bool:
    """Whether ``value`` itself may be stored in this slot."""
    return self.accepts_type(None if value is None else type(value))

  def __str__(self) -> str:
    return _type_label(self.annotation)


def _is_class_var(annotation: Any) -> bool:
  if annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar:
    return True
  if isinstance(annotation, str):
    return annotation.startswith(("ClassVar", "typing.ClassVar"))
  return False


def _unmangle(owner: type, key: str) -> str:
  prefix = f"_{owner.__name__.lstrip('_')}__"
  if key.startswith(prefix) and not key.endswith("__"):
    return "__" + key[len(prefix) :]
  return key


@dataclasses.dataclass(frozen=True)
class AttributeDescriptor:
  """
  An attribute declared directly by one class.

  Identity is ``(owner, storage_name)``: two classes declaring the same name are
  two different descriptors.

  Attributes:
      owner: The declaring class.
      name: The attribute name as written in the class body.
      storage_name: The key the value is stored under on instances (mangled for private names).
      constraint: What the attribute accepts.
  """

  owner: type
  storage_name: str
  name: str = dataclasses.field(compare=False)
  constraint: TypeConstraint = dataclasses.field(compare=False)

  @property
  def kind(self) -> AttributeKind:
    return self.constraint.kind

  @property
  def annotation(self) -> Any:
    return self.constraint.annotation

  def matches(self, name: str) -> bool:
    """Whether a mapping request for ``name`` refers to this attribute."""
    return name == self.name or name == self.storage_name

  def accepts_type(self, candidate: Optional[type], allows_none: bool = False) -> bool:
    return self.constraint.accepts_type(candidate, allows_none)

  def accepts_value(self, value: Any) -> bool:
    return self.constraint.accepts_value(value)

  def assign(self, instance: Any, value: Any) -> None:
    """Stores ``value`` directly on ``instance``, bypassing ``__setattr__``."""
    object.__setattr__(instance, self.storage_name, value)

  def read(self, instance: Any) -> Any:
    return object.__getattribute__(instance, self.storage_name)

  def __str__(self) -> str:
    return f"{self.owner.__qualname__}.{self.name}: {self.constraint}"


def initializer(func: Callable) -> Callable:
  """
  Marks a classmethod or staticmethod as an alternative initializer.

  Marked methods are considered alongside ``__init__`` when constructor
  arguments are matched, and must return an instance of their class.

  Example:
      class Point:
        @classmethod
        @initializer
        def polar(cls, radius: float, angle: float) -> "Point": ...
  """
  target = func.__func__ if isinstance(func, (classmethod, staticmethod)) else func
  setattr(target, INITIALIZER_MARKER, True)
  return func


@dataclasses.dataclass(frozen=True)
class InitializerDescriptor:
  """
  One way of constructing an instance from positional arguments.

  Attributes:
      owner: The class being constructed.
      kind: Where the initializer comes from.
      name: ``__init__`` or the factory method name.
      parameters: Constraints of the positional parameters, in order.
      required_count: Number of positional parameters without a default.
      variadic: Constraint of ``*args``, if present.
      function: The underlying callable, used for diagnostics only.
  """

  owner: type
  kind: InitializerKind
  name: str
  parameters: Tuple[TypeConstraint, ...]
  required_count: int
  variadic: Optional[TypeConstraint] = None
  function: Optional[Callable] = dataclasses.field(default=None, compare=False)

  def accepts_arity(self, count: int) -> bool:
    if count < self.required_count:
      return False
    return self.variadic is not None or count <= len(self.parameters)

  def accepts(self, arguments: Sequence[Any]) -> bool:
    """Whether these resolved arguments may be passed to this initializer."""
    if not self.accepts_arity(len(arguments)):
      return False
    for position, value in enumerate(arguments):
      constraint = self.parameters[position] if position < len(self.parameters) else self.variadic
      if not constraint.accepts_value(value):
        return False
    return True

  def invoke(self, arguments: Sequence[Any]) -> Any:
    if self.kind is InitializerKind.FACTORY:
      return getattr(self.owner, self.name)(*arguments)
    return self.owner(*arguments)

  def __str__(self) -> str:
    params = [str(p) for p in self.parameters]
    if self.variadic is not None:
      params.append(f"*{self.variadic}")
    label = self.owner.__qualname__ if self.kind is not InitializerKind.FACTORY else f"{self.owner.__qualname__}.{self.name}"
    return f"{label}({', '.join(params)})"


def _signature(func: Callable, owner: type) -> Optional[inspect.Signature]:
  try:
    return inspect.signature(func, eval_str=True)
  except NameError as e:
    log_warning(f"Unresolved annotation in [type]{owner.__qualname__}[/type] initializer: {escape(str(e))}")
  except (ValueError, TypeError):
    return None
  try:
    return inspect.signature(func)
  except (ValueError, TypeError):
    return None


def _build_initializer(
  owner: type,
  kind: InitializerKind,
  name: str,
  func: Callable,
  skip_first: bool,
) -> Optional[InitializerDescriptor]:
  sig = _signature(func, owner)
  if sig is None:
    logger.debug("No signature available for %s.%s", owner.__qualname__, name)
    return None

  params = list(sig.parameters.values())
  if skip_first and params:
    params = params[1:]

  positional: List[TypeConstraint] = []
  required = 0
  variadic = None
  for param in params:
    if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
      positional.append(TypeConstraint.from_annotation(param.annotation))
      if param.default is inspect.Parameter.empty:
        required += 1
    elif param.kind is inspect.Parameter.VAR_POSITIONAL:
      variadic = TypeConstraint.from_annotation(param.annotation)
    elif param.kind is inspect.Parameter.KEYWORD_ONLY and param.default is inspect.Parameter.empty:
      # cannot be satisfied by positional arguments
      return None

  return InitializerDescriptor(
    owner=owner,
    kind=kind,
    name=name,
    parameters=tuple(positional),
    required_count=required,
    variadic=variadic,
    function=func,
  )


def _collect_initializers(cls: type) -> Tuple[InitializerDescriptor, ...]:
  found: List[InitializerDescriptor] = []

  init = cls.__init__
  overloads = typing.get_overloads(init) if inspect.isfunction(init) else []
  if overloads:
    for variant in overloads:
      descriptor = _build_initializer(cls, InitializerKind.OVERLOAD, "__init__", variant, skip_first=True)
      if descriptor is not None:
        found.append(descriptor)
  elif init is object.__init__ and cls.__new__ is object.__new__:
    found.append(InitializerDescriptor(owner=cls, kind=InitializerKind.INIT, name="__init__", parameters=(), required_count=0))
  else:
    descriptor = _build_initializer(cls, InitializerKind.INIT, "__init__", cls, skip_first=False)
    if descriptor is not None:
      found.append(descriptor)

  for name, member in vars(cls).items():
    if not isinstance(member, (classmethod, staticmethod)):
      continue
    if not getattr(member.__func__, INITIALIZER_MARKER, False):
      continue
    descriptor = _build_initializer(cls, InitializerKind.FACTORY, name, getattr(cls, name), skip_first=False)
    if descriptor is not None:
      found.append(descriptor)

  return tuple(found)


def _collect_attributes(cls: type) -> Tuple[AttributeDescriptor, ...]:
  try:
    annotations = inspect.get_annotations(cls, eval_str=True)
  except NameError as e:
    log_warning(f"Unresolved annotation on [type]{cls.__qualname__}[/type], treating it as unconstrained: {escape(str(e))}")
    annotations = inspect.get_annotations(cls)

  attributes = []
  for key, annotation in annotations.items():
    if _is_class_var(annotation) or isinstance(annotation, dataclasses.InitVar):
      continue
    attributes.append(
      AttributeDescriptor(
        owner=cls,
        storage_name=key,
        name=_unmangle(cls, key),
        constraint=TypeConstraint.from_annotation(annotation),
      )
    )
  return tuple(attributes)


class TypeDescriptor:
  """
  Reflective view of one class.

  Attributes:
      cls: The described class.
      attributes: Attributes declared directly by ``cls``, in declaration order.
  """

  def __init__(self, cls: type):
    if not isinstance(cls, type):
      raise ValueError(f"The 'cls' parameter must be a class, got {cls!r}.")
    self.cls = cls
    self.attributes: Tuple[AttributeDescriptor, ...] = _collect_attributes(cls)
    self._initializers: Optional[Tuple[InitializerDescriptor, ...]] = None

  @property
  def name(self) -> str:
    return self.cls.__qualname__

  @property
  def parent(self) -> Optional["TypeDescriptor"]:
    """The next class in the MRO, or None when only ``object`` remains."""
    mro = self.cls.__mro__
    if len(mro) < 2 or mro[1] is object:
      return None
    return describe(mro[1])

  @property
  def initializers(self) -> Tuple[InitializerDescriptor, ...]:
    if self._initializers is None:
      self._initializers = _collect_initializers(self.cls)
    return self._initializers

  def chain(self) -> Iterator["TypeDescriptor"]:
    """Yields this descriptor, then one per ancestor in MRO order."""
    for klass in self.cls.__mro__:
      if klass is object:
        continue
      yield describe(klass)

  def all_attributes(self) -> Iterator[AttributeDescriptor]:
    for descriptor in self.chain():
      yield from descriptor.attributes

  def __eq__(self, other: object) -> bool:
    return isinstance(other, TypeDescriptor) and other.cls is self.cls

  def __hash__(self) -> int:
    return hash(self.cls)

  def __repr__(self) -> str:
    return f"TypeDescriptor({self.name})"


@lru_cache(maxsize=1024)
def describe(cls: type) -> TypeDescriptor:
  """
  Returns the cached descriptor for ``cls``.

  Raises:
      ValueError: If ``cls`` is not a class.
  """
  return TypeDescriptor(cls)


def clear_descriptor_cache() -> None:
  """Drops every cached descriptor (e.g. after redefining classes in tests)."""
  describe.cache_clear()
