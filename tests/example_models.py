"""
Example classes shared by the test-suite.

``ExampleParent`` and ``ExampleChild`` both declare a private ``__shadowed``
attribute, so a child instance carries two independent ``__shadowed`` slots.
"""

import datetime
import enum
from dataclasses import dataclass
from typing import List, Optional, overload

import numpy as np

from fixture_forge import initializer


class Colour(enum.Enum):
  RED = "red"
  GREEN = "green"
  BLUE = "blue"


class ExampleParent:
  parent_name: str
  parent_count: int
  __shadowed: int

  def __init__(self):
    self.parent_name = "parent"
    self.parent_count = 0
    self.__shadowed = -1

  @property
  def parent_shadowed(self) -> int:
    return self.__shadowed


class ExampleChild(ExampleParent):
  label: str
  flag: bool
  ratio: float
  small: np.int16
  nickname: Optional[str]
  created: datetime.datetime
  colour: Colour
  tags: List[str]
  __shadowed: int

  def __init__(self, label: str = "child"):
    super().__init__()
    self.label = label
    self.flag = False
    self.ratio = 0.0
    self.small = np.int16(0)
    self.nickname = None
    self.created = datetime.datetime(2000, 1, 1, tzinfo=datetime.timezone.utc)
    self.colour = Colour.RED
    self.tags = []
    self.__shadowed = -2

  @property
  def child_shadowed(self) -> int:
    return self.__shadowed


class Grandchild(ExampleChild):
  extra: Optional[int]


class Shape:
  """A class with two overloaded initializers and a factory."""

  kind: str
  size: float

  @overload
  def __init__(self, kind: str) -> None: ...

  @overload
  def __init__(self, kind: str, size: float) -> None: ...

  def __init__(self, kind, size=1.0):
    self.kind = kind
    self.size = size

  @classmethod
  @initializer
  def square(cls, side: int) -> "Shape":
    return cls("square", float(side * side))


class Holder:
  """Two initializers both accept a single None."""

  text: Optional[str]
  number: Optional[int]

  @overload
  def __init__(self, text: Optional[str]) -> None: ...

  @overload
  def __init__(self, number: Optional[int], scale: float = 1.0) -> None: ...

  def __init__(self, value=None, scale=1.0):
    self.text = value if isinstance(value, str) else None
    self.number = value if isinstance(value, int) else None


class Labelled:
  label: str

  def __init__(self):
    self.label = "base"


class Relabelled(Labelled):
  """Re-declares the public ``label`` attribute, which keeps one instance slot."""

  label: str


class Exploding:
  def __init__(self, value: str):
    raise RuntimeError(f"cannot build from {value}")


@dataclass(frozen=True)
class FrozenPoint:
  x: int
  y: int


class Node:
  """Self-referencing class used for nested generators."""

  name: str
  child: "Optional[Node]"

  def __init__(self, name: str):
    self.name = name
    self.child = None
