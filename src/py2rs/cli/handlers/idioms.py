"""CLI handler for listing the active idiom table."""

from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError
from rich.markup import escape
from rich.table import Table

from py2rs.config import RuntimeConfig
from py2rs.semantics.idioms import load_idiom_table
from py2rs.utils.console import console, log_error


def handle_idioms(idioms: Dict[str, str], search_path: Optional[Path] = None) -> int:
  """
  Handles the 'idioms' command.

  Prints the packaged idiom table merged with configured overrides.

  Args:
      idioms (Dict[str, str]): Extra mappings from ``--idiom`` flags.
      search_path (Optional[Path]): Where to look for pyproject.toml.

  Returns:
      int: Exit code (0 success, 1 invalid configuration).
  """
  try:
    config = RuntimeConfig.load(extra_idioms=idioms, search_path=search_path)
  except (ValidationError, ValueError) as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  base = load_idiom_table(config.pair_key)
  table = base.extended(config.extra_idioms)

  grid = Table(title=f"Idioms ({config.source_language} -> {config.target_language})")
  grid.add_column("Source", style="code")
  grid.add_column("Target", style="bold")
  grid.add_column("Notes", style="info")

  for name in table.identifiers():
    entry = table.entry(name)
    origin = "override" if name in config.extra_idioms else (entry.description or "")
    grid.add_row(name, entry.target, origin)

  console.print(grid)
  return 0
