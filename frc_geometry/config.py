"""
Tolerance configuration for geometry comparisons.

Provides a validated parameter model plus utilities for loading it from YAML
presets. Every geometry type's ``is_near`` takes a ``ToleranceParams``; the
module-level ``DEFAULT_TOLERANCES`` is used when none is passed.

Usage:
    from frc_geometry.config import load_tolerance_config

    # Base file, then a preset, then explicit overrides
    params = load_tolerance_config(
        "config/tolerances.yaml",
        preset_path="config/presets/loose.yaml",
        overrides={"rotation_tolerance": 1e-6},
    )
    pose_a.is_near(pose_b, params)

YAML layout:
    tolerances:
      translation_tolerance: 1.0e-6
      rotation_tolerance: 1.0e-6
      twist_tolerance: 1.0e-6
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field

from frc_geometry import constants

logger = logging.getLogger(__name__)

TOLERANCE_SECTION = "tolerances"


class ToleranceParams(BaseModel):
    """Absolute tolerances used when comparing geometry values."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    translation_tolerance: float = Field(constants.TRANSLATION_TOLERANCE_DEFAULT, gt=0.0)
    rotation_tolerance: float = Field(constants.ROTATION_TOLERANCE_DEFAULT, gt=0.0)
    twist_tolerance: float = Field(constants.TWIST_TOLERANCE_DEFAULT, gt=0.0)


DEFAULT_TOLERANCES = ToleranceParams()


def load_yaml_config(config_path: str | Path) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        config_path: Path to YAML file

    Returns:
        Dictionary with configuration values

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge multiple configuration dictionaries (later configs override earlier).

    Args:
        configs: Variable number of config dicts to merge

    Returns:
        Merged configuration dictionary
    """
    result: Dict[str, Any] = {}
    for config in configs:
        if config:
            _deep_merge(result, config)
    return result


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    """Deep merge override dict into base dict (mutates base)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = copy.deepcopy(value)


def load_tolerance_config(
    base_path: Optional[str | Path] = None,
    preset_path: Optional[str | Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> ToleranceParams:
    """
    Load and validate tolerance configuration from YAML files.

    Args:
        base_path: Path to base configuration YAML
        preset_path: Optional path to preset override YAML
        overrides: Optional dictionary of parameter overrides

    Returns:
        Validated ToleranceParams model

    Raises:
        ValidationError: If configuration is invalid
    """
    base_config: Dict[str, Any] = {}
    if base_path:
        base_config = load_yaml_config(base_path).get(TOLERANCE_SECTION, {})
        logger.debug("Loaded tolerance base config from %s", base_path)

    preset_config: Dict[str, Any] = {}
    if preset_path:
        preset_config = load_yaml_config(preset_path).get(TOLERANCE_SECTION, {})
        logger.debug("Loaded tolerance preset from %s", preset_path)

    # base <- preset <- overrides
    merged = merge_configs(base_config, preset_config, overrides or {})
    return ToleranceParams(**merged)
