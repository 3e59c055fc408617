"""
Python Frontend.

Wraps the LibCST parser to provide the ordered sequence of top-level source
statements consumed by the Lowering Engine, together with a position map used
to attach line/column information to diagnostics.

Semicolon-separated statements on a single line (``a(); b()``) are flattened
into separate entries. Compound statements (``if``, ``def``, ...) are passed
through untouched; deciding whether they are supported is the lowerer's job.
"""

from dataclasses import dataclass, field
from typing import List, Mapping, Union

import libcst as cst
from libcst.metadata import CodeRange, MetadataWrapper, PositionProvider

from py2rs.errors import ParseFailure

SourceStatement = Union[cst.BaseSmallStatement, cst.BaseCompoundStatement]


@dataclass
class ParsedSource:
  """
  Result of parsing one source text.
  """

  statements: List[SourceStatement] = field(default_factory=list)
  """Top-level statements in program order."""

  positions: Mapping[cst.CSTNode, CodeRange] = field(default_factory=dict)
  """Source ranges for every node in ``statements`` (and their children)."""


class PythonFrontend:
  """
  Ingests Python source code into a flat list of LibCST statement nodes.
  """

  def __init__(self, code: str) -> None:
    self.code = code

  def parse(self) -> ParsedSource:
    """
    Parses the code.

    Returns:
        ParsedSource: Statements in source order plus their positions.

    Raises:
        ParseFailure: If LibCST rejects the input.
    """
    try:
      module = cst.parse_module(self.code)
    except cst.ParserSyntaxError as e:
      raise ParseFailure(e.message, e.raw_line, e.raw_column) from e

    wrapper = MetadataWrapper(module)
    positions = wrapper.resolve(PositionProvider)

    statements: List[SourceStatement] = []
    for line in wrapper.module.body:
      if isinstance(line, cst.SimpleStatementLine):
        statements.extend(line.body)
      else:
        statements.append(line)

    return ParsedSource(statements=statements, positions=positions)
