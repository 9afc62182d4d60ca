"""
Tabular interoperability module for pylinejoin.

Line data is often stored as a point table: one row per vertex, with a column
telling which line the vertex belongs to. This module joins such tables
directly, for both pandas and polars DataFrames, and returns the same kind of
DataFrame it was given.
"""

import warnings

import numpy as np
import pandas as pd
import polars as pl

from pylinejoin.joining.join import join_line_groups


def _group_lines(line_ids, xs: np.ndarray, ys: np.ndarray):
    # dict keeps groups in order of first appearance
    groups = {}
    for row, line_id in enumerate(line_ids):
        groups.setdefault(line_id, []).append((float(xs[row]), float(ys[row])))
    return groups


def join_dataframe(
    df: pd.DataFrame | pl.DataFrame,
    line_col: str = 'line_id',
    x_col: str = 'x',
    y_col: str = 'y',
    preserve_directions: bool = False,
    tolerance: float = 0.0,
    geographic: bool = False,
    drop_single_points: bool = False
) -> pd.DataFrame | pl.DataFrame:
    """
    Join the lines stored in a point table.

    Parameters
    ----------
    df : pd.DataFrame or pl.DataFrame
        One row per vertex. Rows sharing a `line_col` value form one line, in
        the row order they appear in. Lines are taken in order of first
        appearance of their id.
    line_col : str, default='line_id'
        Column identifying the line each vertex belongs to.
    x_col : str, default='x'
        Column with the x coordinate (longitude when `geographic` is True).
    y_col : str, default='y'
        Column with the y coordinate (latitude when `geographic` is True).
    preserve_directions : bool, default=False
        Never flip a line; only end -> start joins are made.
    tolerance : float, default=0.0
        Maximum distance between endpoints that still counts as touching.
    geographic : bool, default=False
        Interpret coordinates as (lon, lat) degrees and `tolerance` as metres.
    drop_single_points : bool, default=False
        Drop lines made of a single vertex instead of passing them through.

    Returns
    -------
    pd.DataFrame or pl.DataFrame
        Same library as the input, with columns:
        - `line_col`: new 0-based id of the output line
        - `x_col`, `y_col`: vertex coordinates
        - 'source_lines': the original line ids merged into the output line,
          in the order they appear along it (a tuple for pandas, a list for
          polars)

    Raises
    ------
    ValueError
        If any of the required columns is missing, or `df` is neither a
        pandas nor a polars DataFrame.

    Examples
    --------
    >>> import pandas as pd
    >>> from pylinejoin.utilities.dataframes import join_dataframe
    >>>
    >>> points = pd.DataFrame({
    ...     'line_id': ['a', 'a', 'b', 'b'],
    ...     'x': [0.0, 1.0, 1.0, 2.0],
    ...     'y': [0.0, 0.0, 0.0, 0.0],
    ... })
    >>> joined = join_dataframe(points, preserve_directions=True)
    >>> joined['x'].tolist()
    [0.0, 1.0, 2.0]

    Notes
    -----
    Any column other than the three named ones is not carried over: after a
    join, one output vertex can stand for vertices of several input rows.
    Use 'source_lines' to map attributes of the original lines onto the
    joined ones.
    """
    if not isinstance(df, (pd.DataFrame, pl.DataFrame)):
        raise ValueError("df must be either a pandas DataFrame or a polars DataFrame.")

    missing = [col for col in (line_col, x_col, y_col) if col not in df.columns]
    if missing:
        raise ValueError(f"Column(s) {missing} not found in DataFrame.")

    # ========== Group Vertices Into Lines ==========
    grouped = _group_lines(
        df[line_col].to_list(),
        df[x_col].to_numpy().astype(float),
        df[y_col].to_numpy().astype(float),
    )

    single_point_ids = [line_id for line_id, coords in grouped.items() if len(coords) == 1]
    if single_point_ids and not drop_single_points:
        warnings.warn(
            f"{len(single_point_ids)} line(s) have a single point and are joined as "
            f"degenerate lines: {single_point_ids[:5]}",
            UserWarning,
        )

    line_ids = []
    lines = []
    for line_id, coords in grouped.items():
        if drop_single_points and len(coords) == 1:
            continue
        line_ids.append(line_id)
        lines.append(coords)

    # ========== Join ==========
    groups = join_line_groups(
        lines,
        preserve_directions=preserve_directions,
        tolerance=tolerance,
        geographic=geographic,
    )

    # ========== Build Output Table ==========
    out_ids = []
    xs = []
    ys = []
    sources = []
    for output_id, group in enumerate(groups):
        members = tuple(line_ids[line_index] for line_index in group.line_indices)
        for x, y in group.coords:
            out_ids.append(output_id)
            xs.append(x)
            ys.append(y)
            sources.append(members)

    if isinstance(df, pl.DataFrame):
        # polars has no tuple dtype; member ids are stored as lists
        return pl.DataFrame({
            line_col: pl.Series(out_ids, dtype=pl.Int64),
            x_col: pl.Series(xs, dtype=pl.Float64),
            y_col: pl.Series(ys, dtype=pl.Float64),
            'source_lines': pl.Series([list(members) for members in sources]),
        })

    return pd.DataFrame({
        line_col: pd.Series(out_ids, dtype='int64'),
        x_col: pd.Series(xs, dtype='float64'),
        y_col: pd.Series(ys, dtype='float64'),
        'source_lines': pd.Series(sources, dtype='object'),
    })
