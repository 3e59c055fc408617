"""
Error Taxonomy.

User-facing failures derive from ``TranspileError`` and are reported to the
caller without any partial output. ``InternalInvariantViolation`` signals a
bug in the transpiler itself and is deliberately *not* a ``TranspileError``,
so that callers handling user errors never swallow it.
"""

from typing import Any, Optional, Tuple


class TranspileError(Exception):
  """
  Base class for every failure a caller can meaningfully report to a user.
  """

  def _payload(self) -> Tuple[Any, ...]:
    return self.args

  def __eq__(self, other: object) -> bool:
    if type(self) is not type(other):
      return NotImplemented
    return self._payload() == other._payload()  # type: ignore[attr-defined]

  def __hash__(self) -> int:
    return hash((type(self), self._payload()))


class ParseFailure(TranspileError):
  """
  The source parser rejected the input text.
  """

  def __init__(self, message: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
    self.message = message
    self.line = line
    self.column = column
    location = f" (line {line}, column {column})" if line is not None else ""
    super().__init__(f"Parse failure{location}: {message}")

  def _payload(self) -> Tuple[Any, ...]:
    return (self.message, self.line, self.column)


class LoweringError(TranspileError):
  """
  A source construct has no representation in the IR.

  Attributes:
      description (str): Human readable shape of the offending construct.
      line (Optional[int]): 1-based source line, if known.
      column (Optional[int]): 0-based source column, if known.
  """

  label = "Unsupported construct"

  def __init__(self, description: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
    self.description = description
    self.line = line
    self.column = column
    super().__init__(self._format())

  def _format(self) -> str:
    location = f" at line {self.line}, column {self.column}" if self.line is not None else ""
    return f"{self.label}{location}: {self.description}"

  def _payload(self) -> Tuple[Any, ...]:
    return (self.description, self.line, self.column)


class UnsupportedStatement(LoweringError):
  """A top-level statement kind has no IR variant."""

  label = "Unsupported statement"


class UnsupportedExpression(LoweringError):
  """A nested value (argument, list element, assigned value) has no IR variant."""

  label = "Unsupported expression"


class UnsupportedIdentifier(LoweringError):
  """
  A callee name has no entry in the idiom table.
  """

  label = "Unsupported identifier"

  def __init__(self, name: str, line: Optional[int] = None, column: Optional[int] = None) -> None:
    self.name = name
    super().__init__(f"'{name}' has no known target equivalent", line, column)


class InternalInvariantViolation(RuntimeError):
  """
  The renderer met an IR shape that lowering should have made impossible.

  This is a defect in the transpiler, not a problem with the input program.
  """


class LanguagePairMismatch(TypeError):
  """
  An IR value was handed to a component registered for a different language pair.
  """
