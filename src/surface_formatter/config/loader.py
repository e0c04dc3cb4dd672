"""Configuration loader with YAML and environment variable support.

This module resolves the formatter configuration from, in order:

1. An explicit config file path (``--config``)
2. ``.surface-formatter.yaml`` in the current directory, if present
3. Built-in defaults

and then applies environment variable overrides using the
SURFACE_FORMATTER_* prefix.

Environment variables:
- SURFACE_FORMATTER_TAB_WIDTH: Override tab_width
- SURFACE_FORMATTER_MAX_LINE_LENGTH: Override max_line_length
- SURFACE_FORMATTER_MACRO_CHILD_DEPTH_OFFSET: Override macro_child_depth_offset
- SURFACE_FORMATTER_MACRO_SENTINEL: Override macro_sentinel
- SURFACE_FORMATTER_EXPRESSION_LINE_LENGTH: Override expression_line_length
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from surface_formatter.models.config import FormatterConfig
from surface_formatter.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CONFIG_NAME = ".surface-formatter.yaml"

ENV_PREFIX = "SURFACE_FORMATTER_"


def load_config(config_path: Optional[Path] = None) -> FormatterConfig:
    """Load configuration from YAML file with environment variable overrides.

    Args:
        config_path: Path to config file. If None, uses ./.surface-formatter.yaml
            when it exists and built-in defaults otherwise.

    Returns:
        Validated FormatterConfig object

    Raises:
        FileNotFoundError: If an explicit config file doesn't exist
        ValueError: If the config file or an override is invalid
    """
    if config_path is None:
        candidate = Path.cwd() / DEFAULT_CONFIG_NAME
        config_path = candidate if candidate.exists() else None

    if config_path is not None:
        logger.info("config_loading", path=str(config_path))
        data = FormatterConfig.load(config_path).model_dump()
    else:
        data = {}

    data = _apply_env_overrides(data)

    try:
        config = FormatterConfig(**data)
    except ValidationError as e:
        logger.error("config_validation_error", error=str(e))
        raise ValueError(f"Configuration validation failed: {e}") from e

    logger.info("config_loaded", path=str(config_path) if config_path else None)
    return config


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply environment variable overrides to configuration data.

    Environment variables use the format SURFACE_FORMATTER_<FIELD>; for
    example SURFACE_FORMATTER_MAX_LINE_LENGTH sets data['max_line_length'].
    Values are passed through as strings and validated by the model.

    Args:
        data: Base configuration dictionary

    Returns:
        Configuration dictionary with environment overrides applied
    """
    data = dict(data)
    for field_name in FormatterConfig.model_fields:
        if env_value := os.getenv(ENV_PREFIX + field_name.upper()):
            data[field_name] = env_value
    return data
