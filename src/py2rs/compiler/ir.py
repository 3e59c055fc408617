"""
Intermediate Representation (IR).

This module defines the language-neutral statement and expression model that
sits between the Lowering Engine (source AST -> IR) and the Rendering Engine
(IR -> target text).

Design rules:

1.  Nodes are frozen dataclasses holding only strings, booleans, tuples and
    other IR nodes. No node keeps a reference to the parser's syntax tree.
2.  ``Statement`` and ``Expression`` are closed sum types. Each concrete
    variant registers itself on its base class when defined, which lets the
    renderer verify at import time that it handles every variant.
3.  New constructs are added as new variants; existing variants are never
    widened to carry optional or differently-shaped data.
"""

from dataclasses import dataclass, fields
from typing import ClassVar, Generic, Iterator, List, NewType, Tuple

from py2rs.languages import LanguagePair, S, T

Identifier = NewType("Identifier", str)
"""A source-language name (dotted for attribute chains, e.g. ``sys.exit``)."""


class _VariantBase:
  """
  Mixin that records concrete subclasses as variants of the sum type.

  A class becomes the root of a sum type by defining its own ``_variants``
  list. Subclasses whose name does not start with an underscore are appended
  to the nearest root's list.
  """

  _variants: ClassVar[List[type]]

  def __init_subclass__(cls, **kwargs) -> None:
    super().__init_subclass__(**kwargs)
    if "_variants" in cls.__dict__:
      return
    if not cls.__name__.startswith("_"):
      cls._variants.append(cls)

  @classmethod
  def variants(cls) -> Tuple[type, ...]:
    """
    Returns every concrete variant registered on this sum type, in definition order.
    """
    return tuple(cls._variants)


# --- Expressions ---


class Expression(_VariantBase):
  """
  A value-producing IR node.
  """

  _variants: ClassVar[List[type]] = []


@dataclass(frozen=True)
class StringLiteral(Expression):
  """A text literal. ``value`` is the decoded string, not its source spelling."""

  value: str


@dataclass(frozen=True)
class BooleanLiteral(Expression):
  value: bool


@dataclass(frozen=True)
class VariableReference(Expression):
  """A bare name used as a value."""

  name: Identifier


@dataclass(frozen=True)
class NestedCall(Expression):
  """
  A call appearing in value position (e.g. an argument of another call).

  The callee has already been validated against the idiom table.
  """

  callee: Identifier
  arguments: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class NestedList(Expression):
  """A list literal appearing in value position."""

  elements: Tuple[Expression, ...] = ()


# --- Statements ---


@dataclass(frozen=True)
class Statement(_VariantBase, Generic[S, T]):
  """
  One unit of source-level meaning, tagged with the language pair it belongs to.
  """

  _variants: ClassVar[List[type]] = []

  pair: LanguagePair[S, T]
  """Run-time discriminant mirroring the static ``S``/``T`` parameters."""


@dataclass(frozen=True)
class FunctionCall(Statement[S, T]):
  """
  A call used as a statement, e.g. ``print("hi")``.
  """

  callee: Identifier
  arguments: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class ListLiteral(Statement[S, T]):
  """A list literal used as a statement."""

  elements: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class Assignment(Statement[S, T]):
  """
  Binding of a single plain name, e.g. ``greeting = "hi"``.
  """

  target: Identifier
  value: Expression


def walk(node: object) -> Iterator[Expression]:
  """
  Yields every expression nested (transitively) inside an IR node.

  Traversal is depth-first and follows field order, so call arguments and
  list elements come out in source order.

  Args:
      node: A Statement or Expression.

  Returns:
      Iterator over nested Expression nodes (excluding ``node`` itself).
  """
  for f in fields(node):  # type: ignore[arg-type]
    value = getattr(node, f.name)
    children = value if isinstance(value, tuple) else (value,)
    for child in children:
      if isinstance(child, Expression):
        yield child
        yield from walk(child)

