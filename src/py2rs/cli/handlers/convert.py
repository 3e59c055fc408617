"""
Convert Command Handler.

Implements ``py2rs convert``: read a source file, transpile it, and write the
result to a file or standard output. Reading, transpiling and writing each
report their own errors.
"""

from pathlib import Path
from typing import Dict, Optional

from pydantic import ValidationError
from rich.markup import escape

from py2rs.config import RuntimeConfig
from py2rs.core.engine import TranspileEngine
from py2rs.utils.console import console, log_error, log_info, log_success


def handle_convert(
  path: Path,
  out: Optional[Path],
  source: Optional[str],
  target: Optional[str],
  idioms: Dict[str, str],
) -> int:
  """
  Handles the 'convert' command.

  Args:
      path (Path): Input source file.
      out (Optional[Path]): Output file. Prints to the console when omitted.
      source (Optional[str]): Source language override.
      target (Optional[str]): Target language override.
      idioms (Dict[str, str]): Extra idiom mappings from ``--idiom`` flags.

  Returns:
      int: Exit code (0 success, 1 failure).
  """
  try:
    config = RuntimeConfig.load(source=source, target=target, extra_idioms=idioms, search_path=path.parent)
  except (ValidationError, ValueError) as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  try:
    code = path.read_text(encoding="utf-8")
  except OSError as e:
    log_error(f"Cannot read [path]{path}[/path]: {escape(str(e))}")
    return 1

  log_info(f"Transpiling [path]{path}[/path] ({config.source_language} -> {config.target_language})")
  result = TranspileEngine(config=config).run(code)
  if not result.success:
    for message in result.errors:
      log_error(f"{path}: {escape(message)}")
    return 1

  if out is None:
    console.print(result.code, markup=False, highlight=False, soft_wrap=True)
    return 0

  try:
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(result.code + "\n" if result.code else "", encoding="utf-8")
  except OSError as e:
    log_error(f"Cannot write [path]{out}[/path]: {escape(str(e))}")
    return 1

  log_success(f"Wrote [path]{out}[/path]")
  return 0
