"""
Rust Backend.

Renders ``Python -> Rust`` IR statements as Rust source text.

Output conventions:

*   Calls: ``println!("a","b")`` (arguments joined with ``,``).
*   Lists: ``vec!["a", "b"]`` (elements joined with ``", "``).
*   Bindings: ``let name = value;``.
*   Strings are double-quoted and escaped for Rust string literals.
*   Names colliding with Rust keywords are emitted as raw identifiers (``r#type``).
"""

from py2rs.compiler.backend import Renderer, renders
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
from py2rs.languages import PYTHON_TO_RUST, Python, Rust

ARGUMENT_SEPARATOR = ","
ELEMENT_SEPARATOR = ", "

# Strict and reserved keywords (2021 edition) that can be written as raw identifiers.
RUST_KEYWORDS = frozenset(
  {
    "abstract",
    "as",
    "async",
    "await",
    "become",
    "box",
    "break",
    "const",
    "continue",
    "do",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "final",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "macro",
    "match",
    "mod",
    "move",
    "mut",
    "override",
    "priv",
    "pub",
    "ref",
    "return",
    "static",
    "struct",
    "trait",
    "true",
    "try",
    "type",
    "typeof",
    "unsafe",
    "unsized",
    "use",
    "virtual",
    "where",
    "while",
    "yield",
  }
)

# Keywords that cannot be raw identifiers; suffixed instead.
_NON_RAW_KEYWORDS = frozenset({"crate", "self", "Self", "super"})

_SIMPLE_ESCAPES = {
  "\\": "\\\\",
  '"': '\\"',
  "\n": "\\n",
  "\r": "\\r",
  "\t": "\\t",
  "\0": "\\0",
}


def escape_string(value: str) -> str:
  """
  Escapes text for use inside a Rust ``"..."`` literal.

  Args:
      value (str): Raw text.

  Returns:
      str: Text with backslashes, quotes and control characters escaped.
  """
  out = []
  for ch in value:
    if ch in _SIMPLE_ESCAPES:
      out.append(_SIMPLE_ESCAPES[ch])
    elif ord(ch) < 0x20 or ord(ch) == 0x7F:
      out.append(f"\\u{{{ord(ch):x}}}")
    else:
      out.append(ch)
  return "".join(out)


def rust_identifier(name: str) -> str:
  """
  Spells a source variable name as a valid Rust identifier.
  """
  if name in _NON_RAW_KEYWORDS:
    return f"{name}_"
  if name in RUST_KEYWORDS:
    return f"r#{name}"
  return name


class RustRenderer(Renderer[Python, Rust]):
  """
  Renders IR into Rust source text.
  """

  pair = PYTHON_TO_RUST

  @renders(FunctionCall)
  def _function_call(self, node: FunctionCall) -> str:
    return self._call(node.callee, node.arguments)

  @renders(ListLiteral)
  def _list_literal(self, node: ListLiteral) -> str:
    return self._vec(node.elements)

  @renders(Assignment)
  def _assignment(self, node: Assignment) -> str:
    return f"let {rust_identifier(node.target)} = {self.render_expression(node.value)};"

  @renders(StringLiteral)
  def _string_literal(self, node: StringLiteral) -> str:
    return f'"{escape_string(node.value)}"'

  @renders(BooleanLiteral)
  def _boolean_literal(self, node: BooleanLiteral) -> str:
    return "true" if node.value else "false"

  @renders(VariableReference)
  def _variable_reference(self, node: VariableReference) -> str:
    return rust_identifier(node.name)

  @renders(NestedCall)
  def _nested_call(self, node: NestedCall) -> str:
    return self._call(node.callee, node.arguments)

  @renders(NestedList)
  def _nested_list(self, node: NestedList) -> str:
    return self._vec(node.elements)

  def _call(self, callee, arguments) -> str:
    args = ARGUMENT_SEPARATOR.join(self.render_expression(arg) for arg in arguments)
    return f"{self.resolve(callee)}({args})"

  def _vec(self, elements) -> str:
    return f"vec![{ELEMENT_SEPARATOR.join(self.render_expression(e) for e in elements)}]"
