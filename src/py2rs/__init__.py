"""
py2rs Package.

A source-to-source transpiler core that lowers a Python syntax tree into a
small language-pair-tagged IR and renders it as Rust.

Usage
-----

Simple String Conversion
^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import py2rs
    print(py2rs.transpile('print("Hello world")'))
    # println!("Hello world")

Inspecting Failures
^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from py2rs import TranspileEngine, UnsupportedIdentifier

    res = TranspileEngine().run('foo("x")')
    if not res.success:
        assert isinstance(res.failure, UnsupportedIdentifier)
        print(res.failure.name)
"""

from typing import Optional

from py2rs.config import RuntimeConfig
from py2rs.core.engine import TranspileEngine, TranspileResult
from py2rs.errors import (
  InternalInvariantViolation,
  LanguagePairMismatch,
  LoweringError,
  ParseFailure,
  TranspileError,
  UnsupportedExpression,
  UnsupportedIdentifier,
  UnsupportedStatement,
)

__version__ = "0.1.0"


def transpile(source: str, config: Optional[RuntimeConfig] = None) -> str:
  """
  Transpiles Python source text into Rust source text.

  This is a convenience wrapper around ``TranspileEngine`` using the packaged
  idiom table.

  Args:
      source (str): Python source code.
      config (RuntimeConfig, optional): Runtime configuration, e.g. extra idioms.

  Returns:
      str: Rust code, one line per top-level statement, in source order.

  Raises:
      ParseFailure: If the source is not valid Python.
      LoweringError: If a construct or identifier is unsupported. No partial output is produced.
  """
  return TranspileEngine(config=config).transpile(source)


def run(source: str, config: Optional[RuntimeConfig] = None) -> TranspileResult:
  """
  Transpiles source text and returns a result object instead of raising.

  Args:
      source (str): Python source code.
      config (RuntimeConfig, optional): Runtime configuration.

  Returns:
      TranspileResult: Generated code or the captured failure.
  """
  return TranspileEngine(config=config).run(source)


__all__ = [
  "InternalInvariantViolation",
  "LanguagePairMismatch",
  "LoweringError",
  "ParseFailure",
  "RuntimeConfig",
  "TranspileEngine",
  "TranspileError",
  "TranspileResult",
  "UnsupportedExpression",
  "UnsupportedIdentifier",
  "UnsupportedStatement",
  "run",
  "transpile",
  "__version__",
]
