"""
Tests for the Python Lowering Engine.

Verifies:
1.  **Supported constructs**: calls, list literals and assignments become IR.
2.  **Idiom validation**: unknown callees fail during lowering.
3.  **Closed construct set**: everything else is a named error with position info.
"""

import logging

import libcst as cst
import pytest

from py2rs.compiler.frontends.python import PythonFrontend
from py2rs.compiler.ir import (
  Assignment,
  BooleanLiteral,
  FunctionCall,
  ListLiteral,
  NestedCall,
  NestedList,
  StringLiteral,
  VariableReference,
)
from py2rs.compiler.lowering import PythonLowerer
from py2rs.errors import UnsupportedExpression, UnsupportedIdentifier, UnsupportedStatement
from py2rs.languages import PYTHON_TO_RUST


@pytest.fixture
def lowerer(idioms):
  return PythonLowerer(idioms)


def lower_one(lowerer, code):
  parsed = PythonFrontend(code).parse()
  assert len(parsed.statements) == 1
  return lowerer.lower(parsed.statements[0], parsed.positions)


def test_lower_print_call(lowerer):
  stmt = lower_one(lowerer, 'print("Hello world")')
  assert stmt == FunctionCall(PYTHON_TO_RUST, "print", (StringLiteral("Hello world"),))


def test_lower_call_keeps_argument_order(lowerer):
  stmt = lower_one(lowerer, 'print("a", "b", "c")')
  assert [a.value for a in stmt.arguments] == ["a", "b", "c"]


def test_lower_call_without_arguments(lowerer):
  stmt = lower_one(lowerer, "print()")
  assert stmt == FunctionCall(PYTHON_TO_RUST, "print", ())


def test_lower_dotted_callee(lowerer):
  stmt = lower_one(lowerer, "sys.exit(False)")
  assert stmt.callee == "sys.exit"
  assert stmt.arguments == (BooleanLiteral(False),)


def test_lower_list_literal(lowerer):
  stmt = lower_one(lowerer, '["Apple", "Banana", "Dog"]')
  assert isinstance(stmt, ListLiteral)
  assert stmt.elements == (StringLiteral("Apple"), StringLiteral("Banana"), StringLiteral("Dog"))


def test_lower_empty_list(lowerer):
  assert lower_one(lowerer, "[]") == ListLiteral(PYTHON_TO_RUST, ())


def test_lower_assignment(lowerer):
  stmt = lower_one(lowerer, 'greeting = "hi"')
  assert stmt == Assignment(PYTHON_TO_RUST, "greeting", StringLiteral("hi"))


def test_lower_nested_expressions(lowerer):
  stmt = lower_one(lowerer, 'print(str("x"), ["y", name], True)')
  assert stmt.arguments == (
    NestedCall("str", (StringLiteral("x"),)),
    NestedList((StringLiteral("y"), VariableReference("name"))),
    BooleanLiteral(True),
  )


def test_string_value_is_decoded(lowerer):
  """Source escapes and quote styles are normalised to the actual text."""
  stmt = lower_one(lowerer, "print('it\\'s', \"tab\\there\", 'con' 'cat')")
  assert [a.value for a in stmt.arguments] == ["it's", "tab\there", "concat"]


def test_lowering_is_deterministic(lowerer):
  code = 'print("a", ["b"])'
  assert lower_one(lowerer, code) == lower_one(lowerer, code)


def test_ir_holds_no_syntax_nodes(lowerer):
  stmt = lower_one(lowerer, 'print(["a", str("b")])')

  def contains_cst(value):
    if isinstance(value, cst.CSTNode):
      return True
    if isinstance(value, tuple):
      return any(contains_cst(v) for v in value)
    if hasattr(value, "__dataclass_fields__"):
      return any(contains_cst(getattr(value, f)) for f in value.__dataclass_fields__)
    return False

  assert not contains_cst(stmt)


# --- Failures ---


def test_unknown_callee(lowerer):
  with pytest.raises(UnsupportedIdentifier) as excinfo:
    lower_one(lowerer, 'foo("x")')
  assert excinfo.value.name == "foo"
  assert excinfo.value.line == 1
  assert excinfo.value.column == 0


def test_unknown_nested_callee(lowerer):
  with pytest.raises(UnsupportedIdentifier) as excinfo:
    lower_one(lowerer, 'print(bar("x"))')
  assert excinfo.value.name == "bar"
  assert excinfo.value.column == 6


def test_numeric_argument_unsupported(lowerer):
  with pytest.raises(UnsupportedExpression) as excinfo:
    lower_one(lowerer, "print(1)")
  assert "Integer" in excinfo.value.description
  assert (excinfo.value.line, excinfo.value.column) == (1, 6)


def test_keyword_argument_unsupported(lowerer):
  with pytest.raises(UnsupportedExpression, match="keyword argument 'end'"):
    lower_one(lowerer, 'print("a", end="")')


def test_star_argument_unsupported(lowerer):
  with pytest.raises(UnsupportedExpression, match="unpacked"):
    lower_one(lowerer, "print(*items)")


def test_starred_list_element_unsupported(lowerer):
  with pytest.raises(UnsupportedExpression, match="starred"):
    lower_one(lowerer, '["a", *rest]')


def test_bytes_and_fstrings_unsupported(lowerer):
  with pytest.raises(UnsupportedExpression, match="bytes"):
    lower_one(lowerer, 'print(b"raw")')
  with pytest.raises(UnsupportedExpression, match="FormattedString"):
    lower_one(lowerer, 'print(f"{x}")')


def test_none_unsupported(lowerer):
  with pytest.raises(UnsupportedExpression, match="None"):
    lower_one(lowerer, "print(None)")


def test_subscript_callee_unsupported(lowerer):
  with pytest.raises(UnsupportedExpression, match="callee"):
    lower_one(lowerer, 'handlers[0]("x")')


@pytest.mark.parametrize(
  "code, kind",
  [
    ("sys().exit(False)", "Call"),
    ("sys[0].exit(False)", "Subscript"),
    ("sys.modules[0].exit(False)", "Subscript"),
    ("print(sys().exit(False))", "Call"),
    ('"a".exit(False)', "SimpleString"),
  ],
)
def test_callee_chain_must_be_names(lowerer, code, kind):
  with pytest.raises(UnsupportedExpression, match=f"callee of kind {kind}"):
    lower_one(lowerer, code)


def test_lower_logs_nested_expression_count(lowerer, caplog):
  caplog.set_level(logging.DEBUG, logger="py2rs.compiler.lowering")
  lower_one(lowerer, 'print(str("a"), ["b"])')
  assert "Lowered FunctionCall with 4 nested expression(s)" in caplog.text


@pytest.mark.parametrize(
  "code",
  [
    "import os",
    "if x:\n    print('a')\n",
    "def f():\n    pass\n",
    "for x in y:\n    pass\n",
    '"docstring"',
    "a = b = 'c'",
    "a, b = 'c'",
    "x.y = 'z'",
    "x += 'a'",
  ],
)
def test_unsupported_statements(lowerer, code):
  with pytest.raises(UnsupportedStatement):
    lower_one(lowerer, code)


def test_compound_statement_position(lowerer):
  with pytest.raises(UnsupportedStatement) as excinfo:
    lower_one(lowerer, "\n\nwhile True:\n    pass\n")
  assert excinfo.value.description == "While"
  assert excinfo.value.line == 3


def test_lower_without_positions(lowerer):
  """Position info is optional; errors still carry a description."""
  node = cst.parse_statement('foo("x")').body[0]
  with pytest.raises(UnsupportedIdentifier) as excinfo:
    lowerer.lower(node)
  assert excinfo.value.line is None
