"""
Runtime Configuration Store.

Settings come from the ``[tool.fixture_forge]`` table of the nearest
``pyproject.toml`` (searched upwards from the working directory) and can be
overridden explicitly::

    [tool.fixture_forge]
    seed = 1234
    default_null_chance = 0
    log_level = "DEBUG"

The active configuration is process-wide. :func:`set_config` also re-seeds the
sampler and adjusts the package log level.
"""

import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import BaseModel, Field, field_validator
from rich.markup import escape

from fixture_forge.utils.console import log_info, log_warning, set_log_level
from fixture_forge.value_generators import sampling

TOOL_SECTION = "fixture_forge"


class ForgeConfig(BaseModel):
  """
  Global configuration for fixture generation.
  """

  default_generator_name: str = Field("default", description="Registry name used when none is given.")
  default_null_chance: float = Field(0.0, ge=0, le=100, allow_inf_nan=False, description="Absence chance used by builders by default.")
  seed: Optional[int] = Field(None, description="Seed for reproducible sampling. None uses OS entropy.")
  eager_initializer_check: bool = Field(
    True,
    description="Resolve initializers when a generator is built, if every constructor argument is a fixed value.",
  )
  log_level: str = Field("WARNING", description="Threshold of the 'fixture_forge' logger.")

  @field_validator("default_generator_name")
  @classmethod
  def validate_generator_name(cls, v: str) -> str:
    """
    Ensures the default generator name is usable as a registry key.

    Raises:
        ValueError: If the name is empty or blank.
    """
    v_clean = v.strip()
    if not v_clean:
      raise ValueError("The default generator name cannot be empty.")
    return v_clean

  @field_validator("log_level")
  @classmethod
  def validate_log_level(cls, v: str) -> str:
    """
    Normalizes a logging level name.

    Raises:
        ValueError: If the name is not a standard ``logging`` level.
    """
    v_clean = v.upper().strip()
    if not isinstance(logging.getLevelName(v_clean), int):
      raise ValueError(f"Unknown log level: '{v}'.")
    return v_clean

  @classmethod
  def load(
    cls,
    default_generator_name: Optional[str] = None,
    default_null_chance: Optional[float] = None,
    seed: Optional[int] = None,
    eager_initializer_check: Optional[bool] = None,
    log_level: Optional[str] = None,
    search_path: Optional[Path] = None,
  ) -> "ForgeConfig":
    """
    Loads configuration from pyproject.toml and applies explicit overrides.

    Args:
        default_generator_name: Override for the default registry name.
        default_null_chance: Override for the builders' default absence chance.
        seed: Override for the sampling seed.
        eager_initializer_check: Override for eager initializer resolution.
        log_level: Override for the package log level.
        search_path: Directory to start searching for the TOML file.

    Returns:
        ForgeConfig: The resolved configuration.
    """
    toml_config, _ = _load_toml_settings(search_path or Path.cwd())

    overrides = {
      "default_generator_name": default_generator_name,
      "default_null_chance": default_null_chance,
      "seed": seed,
      "eager_initializer_check": eager_initializer_check,
      "log_level": log_level,
    }
    values = {key: value for key, value in toml_config.items() if key in cls.model_fields}
    values.update({key: value for key, value in overrides.items() if value is not None})
    return cls(**values)


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches ``start_path`` and its parents for 'pyproject.toml' and extracts the tool table.

  Args:
      start_path (Path): Directory to start the search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The settings and the directory they were found in.
  """
  current = start_path.resolve()

  for parent in [current, *current.parents]:
    toml_path = parent / "pyproject.toml"
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          data = tomllib.load(f)
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable {escape(str(toml_path))}: {escape(str(e))}")
        return {}, None

      return data.get("tool", {}).get(TOOL_SECTION, {}), parent

  return {}, None


_ACTIVE_CONFIG: Optional[ForgeConfig] = None


def get_config() -> ForgeConfig:
  """
  Returns the active configuration, loading it on first use.

  Returns:
      ForgeConfig: The process-wide configuration.
  """
  global _ACTIVE_CONFIG
  if _ACTIVE_CONFIG is None:
    set_config(ForgeConfig.load())
  return _ACTIVE_CONFIG


def set_config(config: ForgeConfig) -> None:
  """
  Activates ``config``: re-seeds sampling and applies its log level.

  Args:
      config (ForgeConfig): The configuration to activate.
  """
  global _ACTIVE_CONFIG
  _ACTIVE_CONFIG = config
  sampling.reseed(config.seed)
  set_log_level(config.log_level)
  if config.seed is not None:
    log_info(f"Sampling seeded with [attr]{config.seed}[/attr]")


def reset_config() -> None:
  """Forgets the active configuration; the next :func:`get_config` reloads it."""
  global _ACTIVE_CONFIG
  _ACTIVE_CONFIG = None
