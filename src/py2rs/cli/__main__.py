"""
Main Entry Point for the py2rs CLI.

This module handles argument parsing and dispatches to the command handlers
defined in `py2rs.cli.handlers`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from py2rs import __version__
from py2rs.cli.handlers import handle_convert, handle_idioms
from py2rs.config import parse_cli_key_values
from py2rs.utils.console import set_verbose


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  parser = argparse.ArgumentParser(description="py2rs: Python to Rust source transpiler")
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument("-v", "--verbose", action="store_true", help="Show lowering/rendering debug output")

  subparsers = parser.add_subparsers(dest="command", required=True)

  # --- Command: CONVERT ---
  cmd_conv = subparsers.add_parser("convert", help="Transpile a Python file")
  cmd_conv.add_argument("path", type=Path, help="Input source file")
  cmd_conv.add_argument("--out", type=Path, default=None, help="Output file (default: print to stdout)")
  cmd_conv.add_argument("--source", default=None, help="Source language (default: from toml, else python)")
  cmd_conv.add_argument("--target", default=None, help="Target language (default: from toml, else rust)")
  cmd_conv.add_argument(
    "--idiom",
    nargs="*",
    help="Extra identifier mappings in name=spelling format (e.g. len=Vec::len)",
  )

  # --- Command: IDIOMS ---
  cmd_idioms = subparsers.add_parser("idioms", help="Show the active idiom table")
  cmd_idioms.add_argument("--idiom", nargs="*", help="Extra identifier mappings in name=spelling format")

  args = parser.parse_args(argv)
  set_verbose(args.verbose)

  if args.command == "convert":
    return handle_convert(args.path, args.out, args.source, args.target, parse_cli_key_values(args.idiom))

  elif args.command == "idioms":
    return handle_idioms(parse_cli_key_values(args.idiom))

  return 0


if __name__ == "__main__":
  sys.exit(main())
