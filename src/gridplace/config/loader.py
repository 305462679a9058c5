"""Configuration loading and validation for gridplace.

This module provides:
- Pydantic models for configuration validation
- YAML config file discovery and loading
- Environment variable expansion in config values
- Merging of config file with defaults
- Clear, user-friendly error messages for config issues
"""

from difflib import get_close_matches
import os
from pathlib import Path
import re
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
import yaml

from gridplace.config.defaults import DEFAULT_CONFIG
from gridplace.layout.grid import GridOptions
from gridplace.layout.policies import DEFAULT_POLICY_NAME, POLICIES, POLICY_ALIASES
from gridplace.models.base import Bounds


class ConfigError(Exception):
    """Base exception for configuration errors.

    Provides user-friendly error messages with context about what went wrong
    and suggestions for how to fix it.

    Attributes:
        message: The main error message
        file_path: Path to the config file (if applicable)
        line_number: Line number where the error occurred (if known)
        suggestion: Helpful suggestion for fixing the error
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        line_number: int | None = None,
        column: int | None = None,
        suggestion: str | None = None,
        context_lines: list[str] | None = None,
    ) -> None:
        self.message = message
        self.file_path = file_path
        self.line_number = line_number
        self.column = column
        self.suggestion = suggestion
        self.context_lines = context_lines
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = []

        if self.file_path:
            location = f"Error in {self.file_path}"
            if self.line_number:
                location += f" line {self.line_number}"
            parts.append(location + ":")
        else:
            parts.append("Configuration error:")

        parts.append(f"  {self.message}")

        if self.context_lines and self.column:
            parts.append("")
            for line in self.context_lines:
                parts.append(f"    {line}")
            pointer = " " * (self.column + 3) + "^"
            parts.append(pointer)

        if self.suggestion:
            parts.append("")
            parts.append(f"  Suggestion: {self.suggestion}")

        return "\n".join(parts)


class ConfigSyntaxError(ConfigError):
    """Error for YAML syntax issues."""

    pass


class ConfigValidationError(ConfigError):
    """Error for configuration value validation failures."""

    pass


class ConfigKeyError(ConfigValidationError):
    """Error for unknown or invalid configuration keys."""

    pass


# Known valid configuration keys at each level for suggestions
VALID_KEYS: dict[tuple[str, ...], set[str]] = {
    (): {"grid", "bounds", "preview", "logging"},
    ("grid",): {"columns", "rows", "x_padding", "y_padding", "layout", "axis"},
    ("bounds",): {"x", "y", "width", "height"},
    ("preview",): {
        "items",
        "item_width",
        "item_height",
        "canvas_width",
        "canvas_height",
        "show_bounds",
    },
    ("logging",): {"enabled", "level", "file"},
}

# Environment variable pattern: ${VAR} or ${VAR:-default}
ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)(?::-([^}]*))?\}")


def _suggest_key(unknown_key: str, valid_keys: set[str]) -> str | None:
    """Suggest a similar valid key for an unknown key.

    Args:
        unknown_key: The key that was not recognized
        valid_keys: Set of valid key names

    Returns:
        A suggestion message, or None if no good match found
    """
    matches = get_close_matches(unknown_key, sorted(valid_keys), n=1, cutoff=0.6)
    if matches:
        return f"Did you mean '{matches[0]}'?"
    return None


def _get_type_description(value: Any) -> str:
    """Get a human-readable type description for a value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return f'string "{value}"'
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _format_pydantic_error(
    error: ValidationError,
    config_data: dict[str, Any],
    file_path: str | None = None,
) -> ConfigValidationError:
    """Convert a Pydantic ValidationError to a user-friendly ConfigValidationError.

    Args:
        error: The Pydantic validation error
        config_data: The original config data for context
        file_path: Path to the config file

    Returns:
        A ConfigValidationError with helpful message and suggestions
    """
    errors = error.errors()
    if not errors:
        return ConfigValidationError("Configuration validation failed", file_path=file_path)

    first_error = errors[0]
    loc = first_error.get("loc", ())
    msg = first_error.get("msg", "Invalid value")
    error_type = first_error.get("type", "")
    ctx = first_error.get("ctx", {}) or {}

    path = ".".join(str(part) for part in loc)

    # Walk the raw data to find the offending value
    actual_value: Any = config_data
    for key in loc:
        if isinstance(actual_value, dict):
            actual_value = actual_value.get(key)
        else:
            break

    suggestion = None

    if error_type == "literal_error":
        expected = ctx.get("expected", "")
        message = f"Invalid value for '{path}': got {_get_type_description(actual_value)}"
        suggestion = f"Expected one of: {expected}"

    elif error_type in ("greater_than_equal", "greater_than", "less_than_equal"):
        limit = ctx.get("ge", ctx.get("gt", ctx.get("le")))
        message = f"Value for '{path}' is out of range: {actual_value}"
        if error_type == "less_than_equal":
            suggestion = f"Value must be at most {limit}"
        elif error_type == "greater_than":
            suggestion = f"Value must be greater than {limit}"
        else:
            suggestion = f"Value must be at least {limit}"

    elif error_type in ("int_parsing", "float_parsing", "int_from_float"):
        message = f"Invalid number for '{path}': got {_get_type_description(actual_value)}"
        suggestion = "Please provide a valid number"

    elif error_type == "string_type":
        message = f"Expected string for '{path}': got {_get_type_description(actual_value)}"
        suggestion = "Please provide a text value"

    elif error_type in ("bool_type", "bool_parsing"):
        message = f"Expected boolean for '{path}': got {_get_type_description(actual_value)}"
        suggestion = "Use 'true' or 'false'"

    elif error_type == "extra_forbidden":
        unknown_key = str(loc[-1]) if loc else "unknown"
        message = f"Unknown configuration key '{path}'"
        parent_path = tuple(str(part) for part in loc[:-1])
        valid_keys = VALID_KEYS.get(parent_path)
        if valid_keys:
            suggestion = _suggest_key(unknown_key, valid_keys)
        if not suggestion:
            suggestion = "Check the documentation for valid configuration options"
        return ConfigKeyError(message, file_path=file_path, suggestion=suggestion)

    else:
        message = f"Invalid value for '{path}': {msg}"

    return ConfigValidationError(message, file_path=file_path, suggestion=suggestion)


def _format_yaml_error(
    error: yaml.YAMLError,
    file_path: str | None = None,
    content: str | None = None,
) -> ConfigSyntaxError:
    """Convert a YAML error to a user-friendly ConfigSyntaxError.

    Args:
        error: The YAML error
        file_path: Path to the config file
        content: The file content for context

    Returns:
        A ConfigSyntaxError with helpful message and context
    """
    line_number = None
    column = None
    context_lines = None
    suggestion = None

    mark = getattr(error, "problem_mark", None)
    if mark is not None:
        line_number = mark.line + 1
        column = mark.column + 1
        if content:
            lines = content.splitlines()
            if 0 <= mark.line < len(lines):
                context_lines = [lines[mark.line]]

    error_str = str(error).lower()

    if "could not find expected ':'" in error_str:
        suggestion = "Check for missing colons after keys (e.g., 'key: value')"
    elif "found character" in error_str and "tab" in error_str:
        suggestion = "Use spaces instead of tabs for indentation"
    elif "mapping values are not allowed" in error_str:
        suggestion = "Check your indentation - make sure nested keys are properly indented"
    elif "found undefined alias" in error_str:
        suggestion = "Check that all YAML anchors (&name) are defined before aliases (*name)"

    message = "Invalid YAML syntax"
    problem = getattr(error, "problem", None)
    if problem:
        message = f"YAML syntax error: {problem}"

    return ConfigSyntaxError(
        message,
        file_path=file_path,
        line_number=line_number,
        column=column,
        context_lines=context_lines,
        suggestion=suggestion,
    )


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in config values.

    Supports ${VAR} and ${VAR:-default} syntax.

    Args:
        value: The value to expand (string, dict, list, or other)

    Returns:
        The value with environment variables expanded
    """
    if isinstance(value, str):

        def replace_env_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            default_value = match.group(2)
            env_value = os.environ.get(var_name)
            if env_value is not None:
                return env_value
            if default_value is not None:
                return default_value
            return match.group(0)  # Keep original if not found and no default

        return ENV_VAR_PATTERN.sub(replace_env_var, value)
    if isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    return value


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence.

    Args:
        base: Base dictionary with defaults
        override: Dictionary with overriding values

    Returns:
        Merged dictionary
    """
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value
    return result


# Pydantic Configuration Models


class GridConfig(BaseModel):
    """Grid structure: dimensions, gutters, default policy and traversal axis."""

    model_config = ConfigDict(extra="forbid")

    columns: int = Field(default=1, ge=1)
    rows: int = Field(default=1, ge=1)
    x_padding: float = Field(default=0.0, ge=0)
    y_padding: float = Field(default=0.0, ge=0)
    layout: str = DEFAULT_POLICY_NAME
    axis: Literal["x", "y"] = "x"

    @field_validator("layout")
    @classmethod
    def validate_layout(cls, v: str) -> str:
        """Check the policy name is registered."""
        if v not in POLICIES and v not in POLICY_ALIASES:
            raise ValueError(f"unknown placement policy '{v}' (available: {', '.join(POLICIES)})")
        return v


class BoundsConfig(BaseModel):
    """Region subdivided by the grid."""

    model_config = ConfigDict(extra="forbid")

    x: float = 0.0
    y: float = 0.0
    width: float = Field(default=300.0, ge=0)
    height: float = Field(default=200.0, ge=0)


class PreviewConfig(BaseModel):
    """Demo items and canvas size for the preview commands."""

    model_config = ConfigDict(extra="forbid")

    items: int = Field(default=6, ge=0, le=1000)
    item_width: float = Field(default=40.0, gt=0)
    item_height: float = Field(default=30.0, gt=0)
    canvas_width: int = Field(default=60, ge=4, le=500)
    canvas_height: int = Field(default=20, ge=2, le=200)
    show_bounds: bool = False


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: str | None = None


class Config(BaseModel):
    """Main configuration model for gridplace.

    This model validates and holds all configuration for the application.
    Configuration is loaded from YAML files and can be overridden by CLI flags.
    """

    model_config = ConfigDict(extra="forbid")

    grid: GridConfig = Field(default_factory=GridConfig)
    bounds: BoundsConfig = Field(default_factory=BoundsConfig)
    preview: PreviewConfig = Field(default_factory=PreviewConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    def grid_options(self) -> GridOptions:
        """Build validated GridOptions from the grid section."""
        return GridOptions.build(
            num_columns=self.grid.columns,
            num_rows=self.grid.rows,
            x_padding=self.grid.x_padding,
            y_padding=self.grid.y_padding,
            layout=self.grid.layout,
        )

    def make_bounds(self) -> Bounds:
        """Build a fresh Bounds from the bounds section."""
        return Bounds(
            x=self.bounds.x,
            y=self.bounds.y,
            width=self.bounds.width,
            height=self.bounds.height,
        )


def get_config_path(custom_path: str | None = None) -> Path | None:
    """Determine the configuration file path.

    Checks locations in this order:
    1. Custom path (if provided via --config flag)
    2. GRIDPLACE_CONFIG_PATH environment variable
    3. ~/.config/gridplace/config.yaml (XDG standard)
    4. ~/.gridplace/config.yaml (legacy location)

    Args:
        custom_path: Optional custom config path from CLI

    Returns:
        Path to config file if found, None otherwise

    Raises:
        FileNotFoundError: If a custom path was given but does not exist
    """
    if custom_path:
        path = Path(custom_path).expanduser()
        if path.exists():
            return path
        raise FileNotFoundError(f"Config file not found: {custom_path}")

    env_path = os.environ.get("GRIDPLACE_CONFIG_PATH")
    if env_path:
        path = Path(env_path).expanduser()
        if path.exists():
            return path
        return None

    xdg_path = Path.home() / ".config" / "gridplace" / "config.yaml"
    if xdg_path.exists():
        return xdg_path

    legacy_path = Path.home() / ".gridplace" / "config.yaml"
    if legacy_path.exists():
        return legacy_path

    return None


def load_config(
    config_path: str | None = None,
    cli_overrides: dict[str, Any] | None = None,
    raise_on_error: bool = True,
) -> Config:
    """Load and validate configuration.

    Configuration is merged in this order (later overrides earlier):
    1. Default configuration
    2. Config file (if found)
    3. CLI overrides (if provided)

    Environment variables in config values are expanded using ${VAR} syntax.

    Args:
        config_path: Optional custom config file path
        cli_overrides: Optional dict of CLI argument overrides
        raise_on_error: If True, raise ConfigError on issues; if False, return
            defaults

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If custom config path doesn't exist
        ConfigSyntaxError: If config file has invalid YAML syntax
        ConfigValidationError: If config values are invalid
    """
    config_data = DEFAULT_CONFIG.copy()
    resolved_path: Path | None = None

    path = get_config_path(config_path)
    if path:
        resolved_path = path
        file_content = path.read_text()
        try:
            file_config = yaml.safe_load(file_content) or {}
        except yaml.YAMLError as e:
            if raise_on_error:
                raise _format_yaml_error(e, str(path), file_content) from e
            file_config = {}

        if not isinstance(file_config, dict):
            if raise_on_error:
                raise ConfigSyntaxError(
                    f"Expected a mapping at the top level, got {_get_type_description(file_config)}",
                    file_path=str(path),
                    suggestion="Start the file with a section such as 'grid:'",
                )
            file_config = {}

        config_data = deep_merge(config_data, file_config)

    if cli_overrides:
        config_data = deep_merge(config_data, cli_overrides)

    config_data = expand_env_vars(config_data)

    try:
        return Config(**config_data)
    except ValidationError as e:
        if raise_on_error:
            raise _format_pydantic_error(
                e,
                config_data,
                str(resolved_path) if resolved_path else None,
            ) from e
        return Config(**DEFAULT_CONFIG)
