"""
Tests for IR Data Structures.

Verifies:
1. Variant registration on the Statement / Expression sum types.
2. Immutability and structural equality of nodes.
3. Order-preserving traversal via `walk`.
"""

import dataclasses

import pytest

from py2rs.compiler.ir import (
  Assignment,
  BooleanLiteral,
  Expression,
  FunctionCall,
  Identifier,
  ListLiteral,
  NestedCall,
  NestedList,
  Statement,
  StringLiteral,
  VariableReference,
  walk,
)
from py2rs.languages import PYTHON_TO_RUST


def test_variants_registered_in_definition_order():
  """Concrete variants self-register; the abstract roots do not."""
  assert Statement.variants() == (FunctionCall, ListLiteral, Assignment)
  assert Expression.variants() == (StringLiteral, BooleanLiteral, VariableReference, NestedCall, NestedList)
  assert Statement not in Statement.variants()
  assert Expression not in Expression.variants()


def test_statement_carries_pair():
  stmt = FunctionCall(PYTHON_TO_RUST, Identifier("print"), (StringLiteral("a"),))
  assert stmt.pair is PYTHON_TO_RUST
  assert stmt.pair.key == "python_rust"


def test_nodes_are_frozen():
  lit = StringLiteral("x")
  with pytest.raises(dataclasses.FrozenInstanceError):
    lit.value = "y"  # type: ignore[misc]


def test_structural_equality():
  """Equal data means equal nodes (needed for deterministic comparisons)."""
  a = ListLiteral(PYTHON_TO_RUST, (StringLiteral("a"), BooleanLiteral(True)))
  b = ListLiteral(PYTHON_TO_RUST, (StringLiteral("a"), BooleanLiteral(True)))
  assert a == b
  assert hash(a) == hash(b)
  assert a != ListLiteral(PYTHON_TO_RUST, (BooleanLiteral(True), StringLiteral("a")))


def test_walk_preserves_source_order():
  stmt = FunctionCall(
    PYTHON_TO_RUST,
    Identifier("print"),
    (
      StringLiteral("first"),
      NestedList((StringLiteral("second"), VariableReference(Identifier("third")))),
      NestedCall(Identifier("str"), (StringLiteral("fourth"),)),
    ),
  )
  kinds = [type(e).__name__ for e in walk(stmt)]
  assert kinds == [
    "StringLiteral",
    "NestedList",
    "StringLiteral",
    "VariableReference",
    "NestedCall",
    "StringLiteral",
  ]


def test_walk_assignment_value():
  stmt = Assignment(PYTHON_TO_RUST, Identifier("x"), StringLiteral("v"))
  assert list(walk(stmt)) == [StringLiteral("v")]
