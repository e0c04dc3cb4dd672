"""Configuration models for surface-formatter."""

from pydantic import BaseModel, Field, field_validator
from pathlib import Path
import yaml


class FormatterConfig(BaseModel):
    """Formatting constants.

    Every field has a default, so an empty configuration file formats with
    the standard layout.
    """

    tab_width: int = Field(
        default=2,
        ge=1,
        description="Number of spaces per indentation level"
    )

    max_line_length: int = Field(
        default=80,
        ge=1,
        description="Longest single-line opening tag before attributes go on their own lines"
    )

    macro_child_depth_offset: int = Field(
        default=-3,
        description="Depth change applied to the raw body of a macro tag"
    )

    macro_sentinel: str = Field(
        default="#",
        min_length=1,
        max_length=1,
        description="First character of macro tag names"
    )

    expression_line_length: int = Field(
        default=98,
        ge=1,
        description="Longest single-line list expression before its items are split over lines"
    )

    @field_validator('macro_sentinel')
    @classmethod
    def validate_macro_sentinel(cls, v: str) -> str:
        """Macro sentinel must not be a character that can start an ordinary tag name."""
        if v.isalnum() or v.isspace() or v in "<>/=\"'":
            raise ValueError(f"Invalid macro sentinel: {v!r}")
        return v

    @property
    def tab(self) -> str:
        """One indentation level."""
        return " " * self.tab_width

    @classmethod
    def load(cls, path: Path) -> "FormatterConfig":
        """
        Load configuration from YAML file.

        Args:
            path: Path to configuration file

        Returns:
            Validated FormatterConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If YAML is invalid or validation fails
        """
        if not path.exists():
            raise FileNotFoundError(
                f"Configuration file not found at {path}\n\n"
                f"Example configuration:\n\n"
                f"tab_width: 2\n"
                f"max_line_length: 80\n"
                f"expression_line_length: 98\n"
            )

        with open(path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Configuration in {path} must be a mapping")

        return cls(**data)

    model_config = {"frozen": True, "extra": "forbid"}


DEFAULT_CONFIG = FormatterConfig()
