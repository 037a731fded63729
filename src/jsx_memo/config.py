"""
Runtime Configuration Store.

Holds the user-facing options of the auto-wrap transform. Every field also
accepts the camelCase option name used by JavaScript build tooling
(``componentName``, ``allGet``, ...), so a bundler can pass its option record
through unchanged.
"""

import re
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

_JSX_IDENTIFIER = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")

# Options whose TOML and override values are merged instead of replaced.
_LIST_OPTIONS = (
  "method_names",
  "reactive_components",
  "observer_names",
  "wrap_reactive_children_components",
)


class AutoWrapConfig(BaseModel):
  """
  Configuration for the auto-wrap transform. All fields are optional; unknown
  option names are rejected so a misspelled option cannot silently do nothing.
  """

  model_config = ConfigDict(populate_by_name=True, frozen=True, extra="forbid")

  component_name: str = Field("Memo", alias="componentName", description="Boundary component used for wrapping.")
  import_source: str = Field(
    "@legendapp/state/react", alias="importSource", description="Module the boundary component is imported from."
  )
  all_get: bool = Field(
    False, alias="allGet", description="Treat every zero-argument read call as reactive, regardless of naming."
  )
  method_names: List[str] = Field(
    default_factory=lambda: ["get"], alias="methodNames", description="Method names that count as observable reads."
  )
  marker_suffix: str = Field("$", alias="markerSuffix", description="Suffix marking observable identifiers.")
  reactive_components: List[str] = Field(
    default_factory=list,
    alias="reactiveComponents",
    description="Extra components whose content is already fine-grained reactive.",
  )
  observer_names: List[str] = Field(
    default_factory=list, alias="observerNames", description="Extra observer higher-order function names."
  )
  wrap_reactive_children: bool = Field(
    True, alias="wrapReactiveChildren", description="Normalize children of boundary-style components into thunks."
  )
  wrap_reactive_children_components: List[str] = Field(
    default_factory=list,
    alias="wrapReactiveChildrenComponents",
    description="Extra components whose children are normalized into thunks.",
  )

  @field_validator("component_name")
  @classmethod
  def validate_component_name(cls, v: str) -> str:
    """
    Ensures the wrapper is a plain JSX identifier usable as a tag and import binding.

    Raises:
        ValueError: If the name is empty or contains non-identifier characters.
    """
    v_clean = v.strip()
    if not _JSX_IDENTIFIER.match(v_clean):
      raise ValueError(f"Invalid component name: '{v}'. Expected a plain identifier such as 'Memo'.")
    return v_clean

  @field_validator("import_source", "marker_suffix")
  @classmethod
  def validate_not_empty(cls, v: str) -> str:
    if not v.strip():
      raise ValueError("Value must not be empty.")
    return v.strip()

  @classmethod
  def load(cls, search_path: Optional[Path] = None, **overrides: Any) -> "AutoWrapConfig":
    """
    Loads configuration from ``[tool.jsx_memo]`` in pyproject.toml, then applies overrides.

    Scalar overrides replace TOML values. List overrides extend the TOML list,
    or the field default when the TOML file does not set it, so
    ``method_names=["peek"]`` means "get" and "peek". Overrides set to None are
    ignored.

    Args:
        search_path (Optional[Path]): Directory to start searching for TOML config.
        **overrides: Field values (snake_case or camelCase).

    Returns:
        AutoWrapConfig: The fully resolved configuration object.
    """
    start_dir = search_path or Path.cwd()
    toml_config, _ = _load_toml_settings(start_dir)

    merged: Dict[str, Any] = {}
    for key, value in toml_config.items():
      merged[_field_name(key)] = value

    for key, value in overrides.items():
      if value is None:
        continue
      name = _field_name(key)
      if name in _LIST_OPTIONS:
        base = merged.get(name, cls.model_fields[name].get_default(call_default_factory=True))
        merged[name] = list(dict.fromkeys([*base, *value]))
      else:
        merged[name] = value

    return cls.model_validate(merged)


def _field_name(key: str) -> str:
  """Maps a camelCase alias to its field name; snake_case keys pass through."""
  for name, info in AutoWrapConfig.model_fields.items():
    if info.alias == key:
      return name
  return key


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for 'pyproject.toml' and extracts config.

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
      except tomllib.TOMLDecodeError:
        return {}, None

      tool_section = data.get("tool", {})
      return tool_section.get("jsx_memo", {}), parent

  return {}, None
