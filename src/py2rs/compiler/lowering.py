"""
Lowering Engine.

Converts source syntax trees into IR statements. This is the only component
that understands the shape of the parser's output.

The set of supported constructs is explicit and closed. Anything outside it is
reported as a named ``LoweringError`` (``UnsupportedStatement``,
``UnsupportedExpression`` or ``UnsupportedIdentifier``) rather than being
approximated. Callee names are validated against the idiom table here, so the
renderer can treat a table miss as an internal bug.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, Optional, Sequence, Tuple, Type

import libcst as cst
from libcst.metadata import CodeRange

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
from py2rs.errors import LoweringError, UnsupportedExpression, UnsupportedIdentifier, UnsupportedStatement
from py2rs.languages import PYTHON_TO_RUST, LanguagePair, Python, Rust, S, T
from py2rs.semantics.idioms import IdiomTable

logger = logging.getLogger(__name__)

_BOOLEAN_NAMES = {"True": True, "False": False}

_Positions = Mapping[Any, CodeRange]


class Lowerer(ABC, Generic[S, T]):
  """
  Abstract base for Lowering Engines of one language pair.
  """

  pair: LanguagePair[S, T]

  def __init__(self, idioms: IdiomTable) -> None:
    """
    Args:
        idioms (IdiomTable): Table used to validate callee names.
    """
    self.idioms = idioms

  @abstractmethod
  def lower(self, node: Any, positions: Optional[_Positions] = None) -> Statement[S, T]:
    """
    Lowers one top-level source statement.

    Args:
        node: A statement node produced by the frontend.
        positions: Optional node -> source range map for diagnostics.

    Returns:
        Statement[S, T]: The IR statement.

    Raises:
        LoweringError: If the construct is not supported.
    """


class PythonLowerer(Lowerer[Python, Rust]):
  """
  Lowers LibCST statements into ``Python -> Rust`` IR.
  """

  pair = PYTHON_TO_RUST

  def lower(self, node: Any, positions: Optional[_Positions] = None) -> Statement[Python, Rust]:
    statement = self._lower_statement(node, positions or {})
    if logger.isEnabledFor(logging.DEBUG):
      nested = sum(1 for _ in walk(statement))
      logger.debug("Lowered %s with %d nested expression(s)", type(statement).__name__, nested)
    return statement

  # --- Statements ---

  def _lower_statement(self, node: cst.CSTNode, pos: _Positions) -> Statement[Python, Rust]:
    if isinstance(node, cst.Expr):
      value = node.value
      if isinstance(value, cst.Call):
        callee, args = self._lower_call(value, pos)
        return FunctionCall(self.pair, callee, args)
      if isinstance(value, cst.List):
        return ListLiteral(self.pair, self._lower_elements(value.elements, pos))
      raise self._error(UnsupportedStatement, f"expression statement of kind {_kind(value)}", value, pos)

    if isinstance(node, cst.Assign):
      return self._lower_assignment(node, pos)

    raise self._error(UnsupportedStatement, _kind(node), node, pos)

  def _lower_assignment(self, node: cst.Assign, pos: _Positions) -> Assignment[Python, Rust]:
    if len(node.targets) != 1:
      raise self._error(UnsupportedStatement, "chained assignment", node, pos)

    target = node.targets[0].target
    if not isinstance(target, cst.Name):
      raise self._error(UnsupportedStatement, f"assignment to {_kind(target)}", target, pos)
    if target.value in _BOOLEAN_NAMES or target.value == "None":
      raise self._error(UnsupportedStatement, f"assignment to constant '{target.value}'", target, pos)

    value = self._lower_expression(node.value, pos)
    return Assignment(self.pair, Identifier(target.value), value)

  # --- Expressions ---

  def _lower_expression(self, node: cst.BaseExpression, pos: _Positions) -> Expression:
    if isinstance(node, (cst.SimpleString, cst.ConcatenatedString)):
      value = node.evaluated_value
      if isinstance(value, bytes):
        raise self._error(UnsupportedExpression, "bytes literal", node, pos)
      if not isinstance(value, str):
        raise self._error(UnsupportedExpression, _kind(node), node, pos)
      return StringLiteral(value)

    if isinstance(node, cst.Name):
      if node.value in _BOOLEAN_NAMES:
        return BooleanLiteral(_BOOLEAN_NAMES[node.value])
      if node.value == "None":
        raise self._error(UnsupportedExpression, "None literal", node, pos)
      return VariableReference(Identifier(node.value))

    if isinstance(node, cst.Call):
      callee, args = self._lower_call(node, pos)
      return NestedCall(callee, args)

    if isinstance(node, cst.List):
      return NestedList(self._lower_elements(node.elements, pos))

    raise self._error(UnsupportedExpression, _kind(node), node, pos)

  def _lower_call(self, node: cst.Call, pos: _Positions) -> Tuple[Identifier, Tuple[Expression, ...]]:
    callee = self._resolve_callee(node.func, pos)

    arguments = []
    for arg in node.args:
      if arg.keyword is not None:
        raise self._error(UnsupportedExpression, f"keyword argument '{arg.keyword.value}'", arg, pos)
      if arg.star:
        raise self._error(UnsupportedExpression, f"unpacked argument '{arg.star}'", arg, pos)
      arguments.append(self._lower_expression(arg.value, pos))

    logger.debug("Lowered call to %s with %d argument(s)", callee, len(arguments))
    return callee, tuple(arguments)

  def _resolve_callee(self, func: cst.BaseExpression, pos: _Positions) -> Identifier:
    """
    Extracts the callee name and checks it against the idiom table.

    Plain names (``print``) and dotted attribute chains (``sys.exit``) are
    accepted. Every link of the chain must itself be a name, so subscripts or
    calls anywhere in it (``handlers[0]``, ``sys().exit``) are rejected.
    """
    parts = []
    link = func
    while isinstance(link, cst.Attribute):
      parts.append(link.attr.value)
      link = link.value
    if not isinstance(link, cst.Name):
      raise self._error(UnsupportedExpression, f"callee of kind {_kind(link)}", link, pos)
    parts.append(link.value)
    name = ".".join(reversed(parts))

    if self.idioms.lookup(name) is None:
      raise self._error(UnsupportedIdentifier, name, func, pos)
    return Identifier(name)

  def _lower_elements(self, elements: Sequence[cst.BaseElement], pos: _Positions) -> Tuple[Expression, ...]:
    lowered = []
    for element in elements:
      if not isinstance(element, cst.Element):
        raise self._error(UnsupportedExpression, "starred list element", element, pos)
      lowered.append(self._lower_expression(element.value, pos))
    return tuple(lowered)

  # --- Diagnostics ---

  def _error(
    self, error_cls: Type[LoweringError], description: str, node: cst.CSTNode, pos: _Positions
  ) -> LoweringError:
    code_range = pos.get(node)
    if code_range is None:
      return error_cls(description)
    return error_cls(description, code_range.start.line, code_range.start.column)


def _kind(node: cst.CSTNode) -> str:
  return type(node).__name__
