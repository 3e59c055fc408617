"""
Runtime Configuration Store.

Resolves which language pair to transpile between and which extra idioms to
layer over the packaged idiom table. Values come from the ``[tool.py2rs]``
table of the nearest ``pyproject.toml``, overridden by explicit arguments
(usually from the CLI).
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator
from rich.markup import escape

from py2rs.compiler.registry import is_supported, supported_sources, supported_targets
from py2rs.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

TOOL_SECTION = "py2rs"


class RuntimeConfig(BaseModel):
  """
  Global configuration container for the transpiler.
  """

  source_language: str = Field("python", description="The source language key (e.g. 'python').")
  target_language: str = Field("rust", description="The target language key (e.g. 'rust').")
  extra_idioms: Dict[str, str] = Field(
    default_factory=dict,
    description="Additional identifier mappings layered over the packaged idiom table.",
  )

  @field_validator("source_language")
  @classmethod
  def validate_source(cls, v: str) -> str:
    """
    Ensures the source language has a registered frontend.

    Args:
        v (str): The language key to validate.

    Returns:
        str: The normalized (lowercase) key.

    Raises:
        ValueError: If no pipeline reads this language.
    """
    v_clean = v.lower().strip()
    known = supported_sources()
    if v_clean not in known:
      raise ValueError(f"Unknown source language: '{v_clean}'. Supported: {known}")
    return v_clean

  @field_validator("target_language")
  @classmethod
  def validate_target(cls, v: str) -> str:
    v_clean = v.lower().strip()
    known = supported_targets()
    if v_clean not in known:
      raise ValueError(f"Unknown target language: '{v_clean}'. Supported: {known}")
    return v_clean

  @field_validator("extra_idioms")
  @classmethod
  def validate_idioms(cls, v: Dict[str, str]) -> Dict[str, str]:
    for name, spelling in v.items():
      if not name.strip() or not spelling.strip():
        raise ValueError(f"Idiom overrides need a non-empty name and spelling, got '{name}={spelling}'")
    return v

  @model_validator(mode="after")
  def validate_pair(self) -> "RuntimeConfig":
    """
    Ensures a pipeline is registered for the (source, target) combination.
    """
    if not is_supported(self.source_language, self.target_language):
      raise ValueError(f"No transpiler registered for {self.source_language} -> {self.target_language}")
    return self

  @property
  def pair_key(self) -> str:
    """
    Returns the registry key of the configured pair (e.g. 'python_rust').
    """
    return f"{self.source_language}_{self.target_language}"

  @classmethod
  def load(
    cls,
    source: Optional[str] = None,
    target: Optional[str] = None,
    extra_idioms: Optional[Dict[str, str]] = None,
    search_path: Optional[Path] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from pyproject.toml and overrides with CLI arguments.

    Args:
        source (Optional[str]): Override for the source language.
        target (Optional[str]): Override for the target language.
        extra_idioms (Optional[Dict[str, str]]): Idioms merged over those from TOML.
        search_path (Optional[Path]): Directory to start searching for TOML config.

    Returns:
        RuntimeConfig: The fully resolved configuration object.

    Raises:
        ValueError: If the TOML ``idioms`` entry is not a table.
        ValidationError: If the merged values fail validation.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    final_source = source or toml_config.get("source_language", "python")
    final_target = target or toml_config.get("target_language", "rust")

    toml_idioms = toml_config.get("idioms", {})
    if not isinstance(toml_idioms, dict):
      raise ValueError(f"[tool.{TOOL_SECTION}] idioms must be a table, got {type(toml_idioms).__name__}")
    final_idioms = {**toml_idioms, **(extra_idioms or {})}

    return cls(
      source_language=final_source,
      target_language=final_target,
      extra_idioms=final_idioms,
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Recursively searches parents for 'pyproject.toml' and extracts config.

  Args:
      start_path (Path): Directory to start search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The config dict and the directory it was found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.exists() and toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable {toml_path}: {escape(str(e))}")
        return {}, None

      section = data.get("tool", {}).get(TOOL_SECTION, {})
      if not isinstance(section, dict):
        log_warning(escape(f"Ignoring non-table [tool.{TOOL_SECTION}] in {toml_path}"))
        return {}, None
      return section, parent

  return {}, None


def parse_cli_key_values(items: Optional[List[str]]) -> Dict[str, str]:
  """
  Parses a list of 'key=value' strings into a dictionary.

  Used for ``--idiom`` flags, e.g. ``--idiom len=Vec::len``.

  Args:
      items (Optional[List[str]]): List of raw CLI strings directly from argparse.

  Returns:
      Dict[str, str]: Parsed dictionary.
  """
  if not items:
    return {}

  config = {}
  for item in items:
    if "=" not in item:
      log_warning(f"Ignoring invalid mapping format: '{item}'. Expected 'key=value'.")
      continue

    key, val_str = item.split("=", 1)
    config[key.strip()] = val_str.strip()

  return config
