"""Mesh builder: allocate the tile grid and wire site/corner/edge indices.

Pure function of the grid dimensions. Sites are indexed row-major
(``row * num_x + col``), corners likewise over the ``(num_x + 1) x
(num_y + 1)`` vertex lattice. Vertical edges come first
(``row * (num_x + 1) + col``), followed by horizontal edges
(``(num_x + 1) * num_y + row * num_x + col``).
"""

import logging

import numpy as np
from numpy.typing import NDArray

from ..biome_types import BiomeType
from ..exceptions import InvalidGridDimensionsError
from ..mesh import (
    NO_NEIGHBOR,
    SITE_NEIGHBOR_OFFSETS,
    CornerArrays,
    EdgeArrays,
    SiteArrays,
    TileMesh,
)

logger = logging.getLogger(__name__)


def build_mesh(width: int, height: int, num_x: int, num_y: int) -> TileMesh:
    """Build a fully wired tile mesh.

    Args:
        width: Map width in map units.
        height: Map height in map units.
        num_x: Number of tiles along x.
        num_y: Number of tiles along y.

    Returns:
        TileMesh with positions, border flags and neighbor indices set and
        all attribute fields at their initial values.

    Raises:
        InvalidGridDimensionsError: If any dimension is not positive or the
            map size is not evenly divisible by the tile counts.
    """
    if min(width, height, num_x, num_y) <= 0:
        raise InvalidGridDimensionsError(width, height, num_x, num_y)
    if width % num_x != 0 or height % num_y != 0:
        raise InvalidGridDimensionsError(width, height, num_x, num_y)

    tile_width = width // num_x
    tile_height = height // num_y

    sites = _build_sites(num_x, num_y, tile_width, tile_height)
    corners = _build_corners(num_x, num_y, tile_width, tile_height)
    edges = _build_edges(num_x, num_y, tile_width, tile_height)

    mesh = TileMesh(width, height, num_x, num_y, sites, corners, edges)
    logger.debug(f"Built {mesh!r} with {tile_width}x{tile_height} tiles")
    return mesh


def _grid_index(
    rows: NDArray[np.intp],
    cols: NDArray[np.intp],
    num_rows: int,
    num_cols: int,
) -> NDArray[np.intp]:
    """Row-major index into a num_rows x num_cols grid, -1 outside it."""
    valid = (rows >= 0) & (rows < num_rows) & (cols >= 0) & (cols < num_cols)
    return np.where(valid, rows * num_cols + cols, NO_NEIGHBOR).astype(np.intp)


def _build_sites(
    num_x: int, num_y: int, tile_width: int, tile_height: int
) -> SiteArrays:
    n = num_x * num_y
    rows, cols = np.divmod(np.arange(n, dtype=np.intp), num_x)

    point = np.stack([cols * tile_width, rows * tile_height], axis=1).astype(np.float64)
    border = (cols == 0) | (cols == num_x - 1) | (rows == 0) | (rows == num_y - 1)

    neighbors = np.stack(
        [_grid_index(rows + dy, cols + dx, num_y, num_x) for dx, dy in SITE_NEIGHBOR_OFFSETS],
        axis=1,
    )

    horizontal_base = (num_x + 1) * num_y
    edges = np.stack(
        [
            rows * (num_x + 1) + cols,
            rows * (num_x + 1) + cols + 1,
            horizontal_base + rows * num_x + cols,
            horizontal_base + (rows + 1) * num_x + cols,
        ],
        axis=1,
    ).astype(np.intp)

    top_left = rows * (num_x + 1) + cols
    corners = np.stack(
        [top_left, top_left + 1, top_left + num_x + 1, top_left + num_x + 2],
        axis=1,
    ).astype(np.intp)

    return SiteArrays(
        point=point,
        water=np.zeros(n, dtype=bool),
        island=np.zeros(n, dtype=bool),
        coast=np.zeros(n, dtype=bool),
        border=border,
        biome=np.full(n, BiomeType.CLIFF, dtype=np.int8),
        neighbors=neighbors,
        edges=edges,
        corners=corners,
        elevation=np.zeros(n, dtype=np.float64),
        moisture=np.zeros(n, dtype=np.float64),
        flux=np.zeros(n, dtype=np.float64),
    )


def _build_corners(
    num_x: int, num_y: int, tile_width: int, tile_height: int
) -> CornerArrays:
    stride = num_x + 1
    n = stride * (num_y + 1)
    rows, cols = np.divmod(np.arange(n, dtype=np.intp), stride)

    point = np.stack(
        [cols * tile_width - 0.5 * tile_width, rows * tile_height - 0.5 * tile_height],
        axis=1,
    ).astype(np.float64)
    border = (cols == 0) | (cols == num_x) | (rows == 0) | (rows == num_y)

    # Left, right, up, down
    neighbors = np.stack(
        [
            _grid_index(rows, cols - 1, num_y + 1, stride),
            _grid_index(rows, cols + 1, num_y + 1, stride),
            _grid_index(rows - 1, cols, num_y + 1, stride),
            _grid_index(rows + 1, cols, num_y + 1, stride),
        ],
        axis=1,
    )

    # Up-left, up-right, down-left, down-right
    sites = np.stack(
        [
            _grid_index(rows - 1, cols - 1, num_y, num_x),
            _grid_index(rows - 1, cols, num_y, num_x),
            _grid_index(rows, cols - 1, num_y, num_x),
            _grid_index(rows, cols, num_y, num_x),
        ],
        axis=1,
    )

    # Edge slots follow the neighbor slots: the edge in slot k joins the
    # corner to its neighbor in slot k.
    horizontal_base = stride * num_y
    horizontal = _grid_index(rows, cols - 1, num_y + 1, num_x)
    left_edge = np.where(horizontal >= 0, horizontal + horizontal_base, NO_NEIGHBOR)
    horizontal = _grid_index(rows, cols, num_y + 1, num_x)
    right_edge = np.where(horizontal >= 0, horizontal + horizontal_base, NO_NEIGHBOR)
    up_edge = _grid_index(rows - 1, cols, num_y, stride)
    down_edge = _grid_index(rows, cols, num_y, stride)
    edges = np.stack([left_edge, right_edge, up_edge, down_edge], axis=1).astype(np.intp)

    return CornerArrays(
        point=point,
        water=np.zeros(n, dtype=bool),
        coast=np.zeros(n, dtype=bool),
        border=border,
        biome=np.full(n, BiomeType.CLIFF, dtype=np.int8),
        neighbors=neighbors,
        sites=sites,
        edges=edges,
        elevation=np.zeros(n, dtype=np.float64),
        moisture=np.zeros(n, dtype=np.float64),
        flux=np.zeros(n, dtype=np.float64),
        downslope=np.full(n, NO_NEIGHBOR, dtype=np.intp),
        watershed=np.full(n, NO_NEIGHBOR, dtype=np.intp),
        watershed_size=np.zeros(n, dtype=np.intp),
        river=np.zeros(n, dtype=np.intp),
    )


def _build_edges(
    num_x: int, num_y: int, tile_width: int, tile_height: int
) -> EdgeArrays:
    stride = num_x + 1

    # Vertical edges: c0 above c1, s0 left of s1
    n_vertical = stride * num_y
    v_rows, v_cols = np.divmod(np.arange(n_vertical, dtype=np.intp), stride)
    v_midpoint = np.stack(
        [v_cols * tile_width - 0.5 * tile_width, v_rows * tile_height], axis=1
    )
    v_border = (v_cols == 0) | (v_cols == num_x)
    v_corners = np.stack(
        [v_rows * stride + v_cols, (v_rows + 1) * stride + v_cols], axis=1
    )
    v_sites = np.stack(
        [
            _grid_index(v_rows, v_cols - 1, num_y, num_x),
            _grid_index(v_rows, v_cols, num_y, num_x),
        ],
        axis=1,
    )

    # Horizontal edges: c0 left of c1, s0 above s1
    n_horizontal = num_x * (num_y + 1)
    h_rows, h_cols = np.divmod(np.arange(n_horizontal, dtype=np.intp), num_x)
    h_midpoint = np.stack(
        [h_cols * tile_width, h_rows * tile_height - 0.5 * tile_height], axis=1
    )
    h_border = (h_rows == 0) | (h_rows == num_y)
    h_corners = np.stack(
        [h_rows * stride + h_cols, h_rows * stride + h_cols + 1], axis=1
    )
    h_sites = np.stack(
        [
            _grid_index(h_rows - 1, h_cols, num_y, num_x),
            _grid_index(h_rows, h_cols, num_y, num_x),
        ],
        axis=1,
    )

    n = n_vertical + n_horizontal
    return EdgeArrays(
        midpoint=np.concatenate([v_midpoint, h_midpoint]).astype(np.float64),
        border=np.concatenate([v_border, h_border]),
        corners=np.concatenate([v_corners, h_corners]).astype(np.intp),
        sites=np.concatenate([v_sites, h_sites]).astype(np.intp),
        elevation=np.zeros(n, dtype=np.float64),
        moisture=np.zeros(n, dtype=np.float64),
        flux=np.zeros(n, dtype=np.float64),
        river=np.zeros(n, dtype=np.intp),
    )
