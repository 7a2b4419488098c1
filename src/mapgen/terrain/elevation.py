"""Corner and region elevations.

Corner elevations start as a multi-source relaxation outward from water,
are later remapped by rank so lowlands dominate, and finally feed site
(region) elevations. Ocean sites get depths from a second flood fill
outward from the coast.
"""

import logging
from collections import deque

import numpy as np

from ..exceptions import NoWaterSourceError
from ..mesh import NO_NEIGHBOR, SITE_CARDINAL_SLOTS, TileMesh
from .config import ElevationConfig
from .shapes import LandShape

logger = logging.getLogger(__name__)


def assign_corner_elevations(
    mesh: TileMesh,
    shape: LandShape,
    rng: np.random.Generator,
    config: ElevationConfig,
    border_ocean: bool = False,
) -> None:
    """Classify corners as water and grow elevations outward from water.

    Water corners start at 0, everything else at +inf. Each relaxation
    step adds ``config.step``, plus ``land_step + U(0, 1)`` when both
    corners are land. Every land corner therefore ends up with a strictly
    lower neighbor, so steepest descent always reaches water.

    Args:
        mesh: Mesh to update in place.
        shape: Land shape predicate.
        rng: Random stream for per-step jitter.
        config: Elevation parameters.
        border_ocean: Treat every corner on the grid border as water.

    Raises:
        NoWaterSourceError: If no corner is water, leaving elevations
            unbounded.
    """
    corners = mesh.corners
    points = corners.point.tolist()
    border = corners.border.tolist()

    water = [
        (border_ocean and border[i]) or not shape.is_land((p[0], p[1]))
        for i, p in enumerate(points)
    ]
    if not any(water):
        raise NoWaterSourceError(
            f"No water corners in {mesh.num_x}x{mesh.num_y} grid: "
            "corner elevations would stay unbounded"
        )

    elevation = [0.0 if w else float("inf") for w in water]
    neighbors = corners.neighbors.tolist()
    queue = deque(i for i, w in enumerate(water) if w)
    pushes = 0

    while queue:
        current = queue.popleft()
        for adjacent in neighbors[current]:
            if adjacent == NO_NEIGHBOR:
                continue
            new_elevation = config.step + elevation[current]
            if not water[current] and not water[adjacent]:
                new_elevation += config.land_step + rng.random()
            # Re-queue changed corners so their neighbors get relaxed too
            if new_elevation < elevation[adjacent]:
                elevation[adjacent] = new_elevation
                queue.append(adjacent)
                pushes += 1

    corners.water[:] = water
    corners.elevation[:] = elevation

    logger.debug(
        f"Corner elevations: {sum(water)} water seeds, {pushes} relaxations, "
        f"max {max(elevation):.3f}"
    )


def redistribute_corner_elevations(mesh: TileMesh, scale_factor: float) -> None:
    """Remap inland corner elevations by rank to favor lowlands.

    Inland corners (not coast, not ocean) are sorted by elevation and the
    one at rank ratio ``y`` gets ``x = sqrt(S) - sqrt(S * (1 - y))``,
    the inverse of ``y = 1 - (1 - x)^2`` scaled by ``S``, clamped to
    [0, 1]. Coastal and ocean corners are pinned to sea level.

    Args:
        mesh: Mesh to update in place.
        scale_factor: ``S``; values above 1 give more highland.
    """
    corners = mesh.corners
    sea_level = corners.coast | corners.ocean
    inland = np.flatnonzero(~sea_level)

    if len(inland) > 0:
        order = inland[np.argsort(corners.elevation[inland], kind="stable")]
        if len(order) == 1:
            ratio = np.ones(1)
        else:
            ratio = np.arange(len(order)) / (len(order) - 1)
        remapped = np.sqrt(scale_factor) - np.sqrt(scale_factor * (1.0 - ratio))
        corners.elevation[order] = np.clip(remapped, 0.0, 1.0)

    corners.elevation[sea_level] = 0.0
    logger.debug(f"Redistributed {len(inland)} inland corner elevations")


def assign_land_region_elevations(mesh: TileMesh) -> None:
    """Set every site's elevation to the mean of its four corners."""
    sites = mesh.sites
    sites.elevation[:] = mesh.corners.elevation[sites.corners].mean(axis=1)


def assign_ocean_region_elevations(mesh: TileMesh, config: ElevationConfig) -> None:
    """Deepen ocean sites with distance from the coast.

    Coastal ocean sites sit at ``config.coastal_ocean_elevation``. Each
    4-connected hop further out multiplies the parent's depth by
    ``config.ocean_depth_factor``, floored at -1. Ocean sites that no
    coastal ocean site can reach sit at -1.
    """
    sites = mesh.sites
    ocean = sites.ocean
    elevation = sites.elevation.tolist()
    neighbors = sites.neighbors.tolist()

    queue: deque[int] = deque()
    for i in np.flatnonzero(ocean).tolist():
        if sites.coast[i]:
            elevation[i] = config.coastal_ocean_elevation
            queue.append(i)
        else:
            elevation[i] = float("-inf")

    while queue:
        current = queue.popleft()
        for slot in SITE_CARDINAL_SLOTS:
            adjacent = neighbors[current][slot]
            if adjacent == NO_NEIGHBOR:
                continue
            if elevation[adjacent] < -1.0:
                elevation[adjacent] = max(
                    elevation[current] * config.ocean_depth_factor, -1.0
                )
                queue.append(adjacent)

    result = np.array(elevation, dtype=np.float64)
    unreached = np.isneginf(result)
    if unreached.any():
        logger.debug(f"{int(unreached.sum())} ocean sites unreachable from the coast")
        result[unreached] = -1.0
    sites.elevation[:] = result
