"""
Enumerations for fixture-forge.

This module defines the categorisations shared by the introspection layer,
the attribute mapping engine and the initializer resolver.
"""

from enum import Enum


class AttributeKind(str, Enum):
  """
  Storage category of a declared attribute or initializer parameter.

  Scalar slots cannot hold ``None`` and only accept their exact declared type.
  Reference slots accept ``None`` and any subclass of their declared type.
  """

  SCALAR = "scalar"
  REFERENCE = "reference"


class InitializerKind(str, Enum):
  """
  Origin of a callable able to produce a new instance of a class.
  """

  INIT = "init"  # The effective __init__ signature
  OVERLOAD = "overload"  # One @typing.overload variant of __init__
  FACTORY = "factory"  # A classmethod marked with @initializer
