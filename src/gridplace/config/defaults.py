"""Default configuration values for gridplace.

This module defines the default configuration used when no config file exists
or when config values are not specified.

Environment Variables:
    GRIDPLACE_CONFIG_PATH: Override default config file path
    Any config value can reference environment variables using ${VAR} syntax

Config File Locations (in order of precedence):
    1. Path specified via --config CLI flag
    2. Path specified via GRIDPLACE_CONFIG_PATH environment variable
    3. ~/.config/gridplace/config.yaml (XDG default)
    4. ~/.gridplace/config.yaml (legacy location)
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    # Grid structure
    "grid": {
        "columns": 1,
        "rows": 1,
        "x_padding": 0.0,  # Horizontal gutter between cells
        "y_padding": 0.0,  # Vertical gutter between cells
        "layout": "xy",  # xy, center, center_x, center_y, center_and_scale_to_fit
        "axis": "x",  # "x" fills rows first, "y" fills columns first
    },
    # Region subdivided by the grid
    "bounds": {
        "x": 0.0,
        "y": 0.0,
        "width": 300.0,
        "height": 200.0,
    },
    # Demo items used by `gridplace plan`, `preview` and `tui`
    "preview": {
        "items": 6,
        "item_width": 40.0,
        "item_height": 30.0,
        "canvas_width": 60,  # Characters
        "canvas_height": 20,  # Lines
        "show_bounds": False,
    },
    # Logging configuration (for debugging)
    "logging": {
        "enabled": False,
        "level": "WARNING",  # DEBUG, INFO, WARNING, ERROR
        "file": None,  # None logs to stderr
    },
}
