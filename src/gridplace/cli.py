"""Command-line interface for gridplace.

This module provides:
- Typer-based CLI application
- Config file loading with CLI overrides
- Logging setup from the logging config section
- Layout plans as a rich table or JSON
- Character-canvas and interactive previews

Usage:
    gridplace plan                  # Table of cell assignments
    gridplace plan --json           # Same, as JSON
    gridplace preview               # Draw the layout in the terminal
    gridplace tui                   # Interactive preview

Examples:
    # Lay out 7 items in a 3x2 grid, filling columns first
    gridplace plan --items 7 --columns 3 --rows 2 --axis y

    # Preview a centered layout with gutters and the bounds rectangle
    gridplace preview -C 4 -R 3 --x-padding 10 --layout center --show-bounds

    # Use a custom configuration file
    gridplace plan --config ~/.config/gridplace/custom.yaml
"""

from enum import Enum
import json
import logging
from pathlib import Path
from typing import Annotated, Any

from rich.console import Console
from rich.table import Table
import typer

from gridplace import __version__
from gridplace.config import Config, ConfigError, LoggingConfig, load_config
from gridplace.layout.errors import GridplaceError
from gridplace.layout.grid import OverflowEvent
from gridplace.layout.policies import policy_names

app = typer.Typer(
    name="gridplace",
    help="Position rectangular items into the cells of a grid",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

console = Console()
err_console = Console(stderr=True)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class AxisChoice(str, Enum):
    """Traversal axis options."""

    X = "x"
    Y = "y"


def version_callback(value: bool) -> None:
    """Display version and exit."""
    if value:
        console.print(f"gridplace version {__version__}")
        raise typer.Exit()


def configure_logging(config: LoggingConfig) -> None:
    """Install a log handler on the gridplace logger.

    Logging is off unless enabled in config; then records at or above the
    configured level go to the configured file, or to stderr.

    Args:
        config: The logging section of the configuration
    """
    logger = logging.getLogger("gridplace")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    if not config.enabled:
        logger.addHandler(logging.NullHandler())
        logger.propagate = True
        return

    handler: logging.Handler
    if config.file:
        path = Path(config.file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path)
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.setLevel(config.level)
    logger.propagate = False


def parse_bounds_option(value: str | None) -> dict[str, float] | None:
    """Parse ``X,Y,WIDTH,HEIGHT`` into a bounds override.

    Raises:
        typer.BadParameter: If the value does not have four numbers
    """
    if value is None:
        return None
    parts = [p.strip() for p in value.split(",")]
    if len(parts) != 4:
        raise typer.BadParameter("Bounds must be four comma-separated numbers: X,Y,WIDTH,HEIGHT")
    try:
        x, y, width, height = (float(p) for p in parts)
    except ValueError as e:
        raise typer.BadParameter(f"Bounds must be numbers, got '{value}'") from e
    return {"x": x, "y": y, "width": width, "height": height}


def build_cli_overrides(
    columns: int | None = None,
    rows: int | None = None,
    x_padding: float | None = None,
    y_padding: float | None = None,
    axis: AxisChoice | None = None,
    layout: str | None = None,
    bounds: str | None = None,
    items: int | None = None,
    show_bounds: bool | None = None,
    verbose: bool = False,
) -> dict[str, Any]:
    """Build config override dict from CLI flags.

    Returns:
        Dictionary of config overrides (only for flags that were given)
    """
    overrides: dict[str, Any] = {}

    grid: dict[str, Any] = {}
    if columns is not None:
        grid["columns"] = columns
    if rows is not None:
        grid["rows"] = rows
    if x_padding is not None:
        grid["x_padding"] = x_padding
    if y_padding is not None:
        grid["y_padding"] = y_padding
    if axis is not None:
        grid["axis"] = axis.value
    if layout is not None:
        grid["layout"] = layout
    if grid:
        overrides["grid"] = grid

    parsed_bounds = parse_bounds_option(bounds)
    if parsed_bounds is not None:
        overrides["bounds"] = parsed_bounds

    preview: dict[str, Any] = {}
    if items is not None:
        preview["items"] = items
    if show_bounds is not None:
        preview["show_bounds"] = show_bounds
    if preview:
        overrides["preview"] = preview

    if verbose:
        overrides["logging"] = {"enabled": True, "level": "DEBUG"}

    return overrides


# Common options
ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to custom config file",
        envvar="GRIDPLACE_CONFIG_PATH",
        exists=False,  # We handle existence check ourselves
    ),
]

ColumnsOption = Annotated[int | None, typer.Option("--columns", "-C", help="Number of columns", min=1)]

RowsOption = Annotated[int | None, typer.Option("--rows", "-R", help="Number of rows", min=1)]

XPaddingOption = Annotated[
    float | None, typer.Option("--x-padding", help="Horizontal gutter between cells", min=0)
]

YPaddingOption = Annotated[
    float | None, typer.Option("--y-padding", help="Vertical gutter between cells", min=0)
]

AxisOption = Annotated[
    AxisChoice | None,
    typer.Option("--axis", "-a", help="Traversal axis: x fills rows first, y fills columns first"),
]

LayoutOption = Annotated[
    str | None,
    typer.Option("--layout", "-l", help=f"Placement policy ({', '.join(policy_names())})"),
]

BoundsOption = Annotated[
    str | None,
    typer.Option("--bounds", "-b", help="Grid bounds as X,Y,WIDTH,HEIGHT"),
]

ItemsOption = Annotated[
    int | None, typer.Option("--items", "-n", help="Number of demo items to lay out", min=0)
]

ShowBoundsOption = Annotated[
    bool | None,
    typer.Option("--show-bounds/--hide-bounds", help="Draw the bounds rectangle"),
]

JsonOption = Annotated[bool, typer.Option("--json", "-j", help="Output in JSON format")]

VerboseOption = Annotated[bool, typer.Option("--verbose", "-v", help="Log debug output to stderr")]

VersionOption = Annotated[
    bool | None,
    typer.Option(
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
]


def _load(config: Path | None, overrides: dict[str, Any]) -> Config:
    """Load configuration, exiting with a readable message on failure."""
    try:
        config_path = str(config) if config else None
        cfg = load_config(config_path=config_path, cli_overrides=overrides)
    except FileNotFoundError as e:
        err_console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    except ConfigError as e:
        err_console.print(f"[red]Configuration error:[/red] {e}")
        raise typer.Exit(1) from e
    configure_logging(cfg.logging)
    return cfg


def build_plan_rows(cfg: Config) -> tuple[list[dict[str, Any]], list[OverflowEvent]]:
    """Lay out the configured demo items and describe each placement.

    Args:
        cfg: Loaded configuration

    Returns:
        Tuple of (one dict per item, overflow events from the update)
    """
    from gridplace.demo import build_demo_grid

    overflows: list[OverflowEvent] = []
    grid, sprites = build_demo_grid(cfg, on_overflow=overflows.append)
    plan = grid.plan(cfg.grid.axis)
    grid.update(cfg.grid.axis)

    rows = []
    for assignment in plan:
        sprite = sprites[assignment.index]
        rows.append(
            {
                "index": assignment.index,
                "column": assignment.cell.column,
                "row": assignment.cell.row,
                "cell": assignment.cell.model_dump(exclude={"column", "row"}),
                "item": sprite.to_dict(),
            }
        )
    return rows, overflows


def _num(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")


def render_plan_table(cfg: Config, rows: list[dict[str, Any]]) -> Table:
    """Render plan rows as a rich table."""
    g = cfg.grid
    table = Table(
        title=f"{g.columns}x{g.rows} grid, axis '{g.axis}', layout '{g.layout}'",
        header_style="bold",
    )
    for heading in ("#", "col", "row", "cell x", "cell y", "cell w", "cell h", "item x", "item y", "item w", "item h"):
        table.add_column(heading, justify="right")
    for r in rows:
        cell, item = r["cell"], r["item"]
        table.add_row(
            str(r["index"]),
            str(r["column"]),
            str(r["row"]),
            _num(cell["x"]),
            _num(cell["y"]),
            _num(cell["width"]),
            _num(cell["height"]),
            _num(item["x"]),
            _num(item["y"]),
            _num(item["width"]),
            _num(item["height"]),
        )
    return table


@app.callback()
def main(version: VersionOption = None) -> None:
    """gridplace - position rectangular items into the cells of a grid."""


@app.command("plan")
def plan_command(
    config: ConfigOption = None,
    columns: ColumnsOption = None,
    rows: RowsOption = None,
    x_padding: XPaddingOption = None,
    y_padding: YPaddingOption = None,
    axis: AxisOption = None,
    layout: LayoutOption = None,
    bounds: BoundsOption = None,
    items: ItemsOption = None,
    json_format: JsonOption = False,
    verbose: VerboseOption = False,
) -> None:
    """Lay out demo items and print where each one was placed."""
    overrides = build_cli_overrides(
        columns=columns,
        rows=rows,
        x_padding=x_padding,
        y_padding=y_padding,
        axis=axis,
        layout=layout,
        bounds=bounds,
        items=items,
        verbose=verbose,
    )
    cfg = _load(config, overrides)

    try:
        plan_rows, overflows = build_plan_rows(cfg)
    except GridplaceError as e:
        err_console.print(f"[red]Layout error:[/red] {e}")
        raise typer.Exit(1) from e

    if json_format:
        payload = {
            "grid": cfg.grid.model_dump(),
            "bounds": cfg.bounds.model_dump(),
            "placements": plan_rows,
            "overflows": [
                {"item_index": e.item_index, "wrap_count": e.wrap_count, "capacity": e.capacity}
                for e in overflows
            ],
        }
        console.print_json(json.dumps(payload))
        return

    console.print(render_plan_table(cfg, plan_rows))
    for event in overflows:
        console.print(f"[yellow]Warning:[/yellow] {event.message}")


@app.command("preview")
def preview_command(
    config: ConfigOption = None,
    columns: ColumnsOption = None,
    rows: RowsOption = None,
    x_padding: XPaddingOption = None,
    y_padding: YPaddingOption = None,
    axis: AxisOption = None,
    layout: LayoutOption = None,
    bounds: BoundsOption = None,
    items: ItemsOption = None,
    show_bounds: ShowBoundsOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Draw the layout on a character canvas."""
    from gridplace.render.canvas import CharCanvas, render_layout
    from gridplace.demo import build_demo_grid

    overrides = build_cli_overrides(
        columns=columns,
        rows=rows,
        x_padding=x_padding,
        y_padding=y_padding,
        axis=axis,
        layout=layout,
        bounds=bounds,
        items=items,
        show_bounds=show_bounds,
        verbose=verbose,
    )
    cfg = _load(config, overrides)

    overflows: list[OverflowEvent] = []
    try:
        grid, sprites = build_demo_grid(cfg, on_overflow=overflows.append)
        grid.update(cfg.grid.axis)
        canvas = CharCanvas.fit(
            grid.bounds.right,
            grid.bounds.bottom,
            cfg.preview.canvas_width,
            cfg.preview.canvas_height,
        )
        text = render_layout(grid, canvas, sprites, show_bounds=cfg.preview.show_bounds)
    except GridplaceError as e:
        err_console.print(f"[red]Layout error:[/red] {e}")
        raise typer.Exit(1) from e

    console.print(text)
    for event in overflows:
        console.print(f"[yellow]Warning:[/yellow] {event.message}")


@app.command("tui")
def tui_command(
    config: ConfigOption = None,
    columns: ColumnsOption = None,
    rows: RowsOption = None,
    x_padding: XPaddingOption = None,
    y_padding: YPaddingOption = None,
    axis: AxisOption = None,
    layout: LayoutOption = None,
    bounds: BoundsOption = None,
    items: ItemsOption = None,
    show_bounds: ShowBoundsOption = None,
) -> None:
    """Open the interactive layout preview."""
    overrides = build_cli_overrides(
        columns=columns,
        rows=rows,
        x_padding=x_padding,
        y_padding=y_padding,
        axis=axis,
        layout=layout,
        bounds=bounds,
        items=items,
        show_bounds=show_bounds,
    )
    cfg = _load(config, overrides)

    # Import here to avoid loading Textual when not needed
    from gridplace.tui import run_app

    run_app(cfg)


def cli_main() -> None:
    """Entry point for the CLI application."""
    app()
