"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Idiom cache isolation so tests that point at custom definition files do not leak.
"""

import sys
import pytest
from pathlib import Path

# Add src to path so we can import 'py2rs' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from py2rs.semantics.idioms import IdiomTable, clear_idiom_cache, load_idiom_table  # noqa: E402
from py2rs.core.engine import TranspileEngine  # noqa: E402


@pytest.fixture(autouse=True)
def isolate_idiom_cache():
  """
  Clears the cached idiom tables before and after every test.
  """
  clear_idiom_cache()
  yield
  clear_idiom_cache()


@pytest.fixture
def idioms() -> IdiomTable:
  """The packaged Python -> Rust idiom table."""
  return load_idiom_table("python_rust")


@pytest.fixture
def engine() -> TranspileEngine:
  return TranspileEngine()
