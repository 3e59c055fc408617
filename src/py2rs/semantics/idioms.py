"""
Idiom Table.

Static mapping from source-language identifiers (builtin function names and
dotted module functions) to their literal target-language spelling.

Definitions live in JSON files beside this module, one per language pair
(``python_rust.json``). Files are read once per process via
``functools.lru_cache`` and each entry is validated with Pydantic. The
resulting ``IdiomTable`` is immutable: configuration overrides produce a new
table through ``IdiomTable.extended`` rather than mutating the shared one.
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Optional, Tuple

from pydantic import BaseModel, Field, ValidationError

DEFINITIONS_DIR = Path(__file__).parent

logger = logging.getLogger(__name__)


class IdiomEntry(BaseModel):
  """
  One row of the idiom table as stored on disk.
  """

  target: str = Field(min_length=1, description="Literal spelling emitted in the target language.")
  description: Optional[str] = Field(default=None, description="Short note shown by the `idioms` command.")


class IdiomTable:
  """
  Read-only lookup from source identifier to target spelling.
  """

  def __init__(self, entries: Optional[Mapping[str, IdiomEntry]] = None) -> None:
    self._entries: Mapping[str, IdiomEntry] = MappingProxyType(dict(entries or {}))

  def lookup(self, identifier: str) -> Optional[str]:
    """
    Resolves the target spelling for a source identifier.

    Args:
        identifier (str): Source name, e.g. 'print' or 'sys.exit'.

    Returns:
        Optional[str]: The target spelling, or None if no mapping exists.
    """
    entry = self._entries.get(identifier)
    return entry.target if entry else None

  def entry(self, identifier: str) -> Optional[IdiomEntry]:
    return self._entries.get(identifier)

  def identifiers(self) -> Tuple[str, ...]:
    """
    Returns all mapped source identifiers, sorted.
    """
    return tuple(sorted(self._entries))

  def extended(self, overrides: Mapping[str, str]) -> "IdiomTable":
    """
    Builds a new table with additional or replaced mappings.

    Args:
        overrides (Mapping[str, str]): Source identifier -> target spelling.

    Returns:
        IdiomTable: A new table. ``self`` is left unchanged.
    """
    merged = dict(self._entries)
    for name, target in overrides.items():
      merged[name] = IdiomEntry(target=target)
    return IdiomTable(merged)

  def __contains__(self, identifier: object) -> bool:
    return identifier in self._entries

  def __iter__(self) -> Iterator[str]:
    return iter(self.identifiers())

  def __len__(self) -> int:
    return len(self._entries)

  def __repr__(self) -> str:
    return f"IdiomTable({len(self)} entries)"


def get_definitions_path(pair_key: str) -> Path:
  """
  Returns the path of the JSON definition file for a language pair.

  Args:
      pair_key (str): Pair key such as 'python_rust'.

  Returns:
      Path: Absolute path (the file may not exist).
  """
  return DEFINITIONS_DIR / f"{pair_key}.json"


@lru_cache(maxsize=None)
def load_idiom_table(pair_key: str = "python_rust") -> IdiomTable:
  """
  Loads the packaged idiom table for a language pair.

  Args:
      pair_key (str): Pair key such as 'python_rust'.

  Returns:
      IdiomTable: The validated table. Empty if no definition file exists.

  Raises:
      ValueError: If the file exists but is not valid JSON or fails validation.
  """
  file_path = get_definitions_path(pair_key)

  if not file_path.exists():
    logger.debug("No idiom definitions for %s at %s", pair_key, file_path)
    return IdiomTable()

  try:
    with open(file_path, "r", encoding="utf-8") as f:
      raw_data = json.load(f)
    if not isinstance(raw_data, dict):
      raise ValueError(f"Idiom definitions in {file_path.name} must be a JSON object")
    entries: Dict[str, IdiomEntry] = {name: IdiomEntry.model_validate(spec) for name, spec in raw_data.items()}
  except (json.JSONDecodeError, ValidationError) as e:
    raise ValueError(f"Invalid idiom definitions in {file_path.name}: {e}") from e

  logger.debug("Loaded %d idioms for %s", len(entries), pair_key)
  return IdiomTable(entries)


def clear_idiom_cache() -> None:
  """
  Clears the cached idiom tables.
  Useful for tests that point DEFINITIONS_DIR elsewhere.
  """
  load_idiom_table.cache_clear()
