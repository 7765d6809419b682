from __future__ import annotations

from .refresh import RefreshResult

"""Summary line rendering for the CLI SUMMARY output."""


def _format_seconds(value: float) -> str:
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        # Format very small numbers to avoid scientific notation
        return f"{value:.6f}".rstrip('0').rstrip('.')
    return f"{value:.3f}".rstrip('0').rstrip('.')


def render_summary_line(result: RefreshResult) -> str:
    """Render the SUMMARY line for one refresh.

    Format:
    SUMMARY rows={rows} records={records} grid={W}x{H} occupied={n}
    shadowed={n} elapsed_sec={elapsed}

    Examples:
        >>> from matrix_grid.projection.grid_projector import project_records
        >>> render_summary_line(RefreshResult(projection=project_records([])))
        'SUMMARY rows=0 records=0 grid=1x1 occupied=0 shadowed=0 elapsed_sec=0'
    """
    projection = result.projection
    width, height = projection.shape
    return (
        f"SUMMARY rows={result.total_rows} "
        f"records={len(projection.records)} "
        f"grid={width}x{height} "
        f"occupied={result.occupied_cells} "
        f"shadowed={projection.shadowed_records} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
