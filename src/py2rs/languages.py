"""
Language Markers and Language Pairs.

Every IR statement, lowerer and renderer is parameterised over a
``(Source, Target)`` pair of marker classes. Type checkers see the pair as the
generic parameters ``S`` and ``T``; at run time the pair travels as an explicit
``LanguagePair`` value so that renderers can reject statements produced for a
different pairing.
"""

from dataclasses import dataclass
from typing import ClassVar, Generic, Type, TypeVar


class Language:
  """
  Base marker for a programming language.

  Marker classes are never instantiated; they only exist to be used as type
  parameters and registry keys.
  """

  key: ClassVar[str] = ""
  """Lowercase identifier used in configuration (e.g. 'python')."""

  display_name: ClassVar[str] = ""


class Python(Language):
  key = "python"
  display_name = "Python"


class Rust(Language):
  key = "rust"
  display_name = "Rust"


S = TypeVar("S", bound=Language)
T = TypeVar("T", bound=Language)


@dataclass(frozen=True)
class LanguagePair(Generic[S, T]):
  """
  Identifies the (source, target) pairing an IR value belongs to.
  """

  source: Type[S]
  """Marker class of the language the IR was lowered from."""

  target: Type[T]
  """Marker class of the language the IR renders into."""

  @property
  def key(self) -> str:
    """
    Returns the registry key for this pair (e.g. 'python_rust').
    """
    return f"{self.source.key}_{self.target.key}"

  def __str__(self) -> str:
    return f"{self.source.display_name} -> {self.target.display_name}"


PYTHON_TO_RUST: LanguagePair[Python, Rust] = LanguagePair(Python, Rust)

