"""
Compiler Registry.

Centralizes registration of the components that make up one language pair:
the Frontend (Text -> source AST), the Lowerer (source AST -> IR) and the
Renderer (IR -> Text).

Pairs are keyed by ``LanguagePair.key`` (e.g. ``"python_rust"``), which is
also the name of the idiom definition file.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type

from py2rs.compiler.backend import Renderer
from py2rs.compiler.backends.rust import RustRenderer
from py2rs.compiler.frontends.python import PythonFrontend
from py2rs.compiler.lowering import Lowerer, PythonLowerer
from py2rs.languages import PYTHON_TO_RUST, LanguagePair


@dataclass(frozen=True)
class PairComponents:
  """
  The pipeline stages registered for one language pair.
  """

  pair: LanguagePair
  frontend: Type[Any]
  lowerer: Type[Lowerer]
  renderer: Type[Renderer]


_PAIRS: Dict[str, PairComponents] = {
  PYTHON_TO_RUST.key: PairComponents(
    pair=PYTHON_TO_RUST,
    frontend=PythonFrontend,
    lowerer=PythonLowerer,
    renderer=RustRenderer,
  ),
}


def pair_key(source: str, target: str) -> str:
  return f"{source.lower()}_{target.lower()}"


def get_components(source: str, target: str) -> Optional[PairComponents]:
  """
  Returns the registered components for a (source, target) language pair.

  Args:
      source (str): Source language key (e.g. 'python').
      target (str): Target language key (e.g. 'rust').

  Returns:
      Optional[PairComponents]: The components, or None if the pair is unsupported.
  """
  return _PAIRS.get(pair_key(source, target))


def supported_sources() -> List[str]:
  return sorted({c.pair.source.key for c in _PAIRS.values()})


def supported_targets() -> List[str]:
  return sorted({c.pair.target.key for c in _PAIRS.values()})


def is_supported(source: str, target: str) -> bool:
  """
  Determines if a pipeline exists for the given language pair.
  """
  return pair_key(source, target) in _PAIRS
