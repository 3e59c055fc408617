"""
Orchestration Engine.

This module provides the ``TranspileEngine``, the driver that sequences one
transpilation:

1.  **Parse**: the pair's frontend turns source text into top-level statements
    (a parser error becomes ``ParseFailure``).
2.  **Lower**: each statement becomes one IR ``Statement``. The first
    ``LoweringError`` aborts the whole run.
3.  **Render**: each IR statement becomes one line of target text.
4.  **Join**: lines are joined with ``"\\n"`` in source program order.

Statements are consumed front to back from the frontend's list, so output
order equals input order without any reversal step.
"""

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from py2rs.compiler.ir import Statement
from py2rs.compiler.registry import PairComponents, get_components
from py2rs.config import RuntimeConfig
from py2rs.errors import TranspileError
from py2rs.semantics.idioms import IdiomTable, load_idiom_table

logger = logging.getLogger(__name__)

LINE_SEPARATOR = "\n"


class TranspileResult(BaseModel):
  """
  Structured result of a single transpilation.
  """

  model_config = ConfigDict(arbitrary_types_allowed=True)

  code: str = Field(default="", description="The generated target source. Empty on failure.")
  errors: List[str] = Field(default_factory=list, description="Error messages (at most one: runs stop at the first).")
  success: bool = Field(default=True, description="True if every statement was lowered and rendered.")
  failure: Optional[TranspileError] = Field(default=None, description="The error that stopped the run, if any.")


class TranspileEngine:
  """
  The main compilation unit.

  An engine is bound to one language pair and one idiom table; both are fixed
  for its lifetime, so a single engine can be reused for many inputs (and from
  several threads, since runs share no mutable state).
  """

  def __init__(self, config: Optional[RuntimeConfig] = None, idioms: Optional[IdiomTable] = None) -> None:
    """
    Initializes the Engine.

    Args:
        config (RuntimeConfig, optional): Runtime configuration. Defaults to Python -> Rust.
        idioms (IdiomTable, optional): Idiom table to use instead of the packaged one.
            ``config.extra_idioms`` are layered over it either way.
    """
    self.config = config or RuntimeConfig()
    components = get_components(self.config.source_language, self.config.target_language)
    if components is None:
      raise ValueError(f"No transpiler registered for {self.config.pair_key}")
    self.components: PairComponents = components

    base = idioms if idioms is not None else load_idiom_table(self.config.pair_key)
    self.idioms = base.extended(self.config.extra_idioms) if self.config.extra_idioms else base

    self.lowerer = components.lowerer(self.idioms)
    self.renderer = components.renderer(self.idioms)

  def transpile(self, source: str) -> str:
    """
    Transpiles source text into target text.

    Args:
        source (str): Source program.

    Returns:
        str: Newline-joined target code, one line per top-level statement.

    Raises:
        ParseFailure: If the source cannot be parsed.
        LoweringError: If a construct, expression or identifier is unsupported.
    """
    parsed = self.components.frontend(source).parse()
    logger.debug("Parsed %d top-level statement(s)", len(parsed.statements))

    lowered: List[Statement] = [self.lowerer.lower(node, parsed.positions) for node in parsed.statements]

    lines = [self.renderer.render(statement) for statement in lowered]
    return LINE_SEPARATOR.join(lines)

  def run(self, source: str) -> TranspileResult:
    """
    Transpiles source text, capturing user-facing errors in the result.

    ``InternalInvariantViolation`` is not captured: it propagates to the caller.

    Args:
        source (str): Source program.

    Returns:
        TranspileResult: Code on success, or the failure with no code.
    """
    try:
      code = self.transpile(source)
    except TranspileError as e:
      logger.debug("Transpilation failed: %s", e)
      return TranspileResult(code="", errors=[str(e)], success=False, failure=e)
    return TranspileResult(code=code)
