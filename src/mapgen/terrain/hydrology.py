"""Hydrology: steepest-descent drainage, watershed basins, river tracing.

Every corner points downhill to its lowest cardinal neighbor (or to itself
at a basin floor). Watersheds collapse those chains onto the first coastal
corner or water corner they reach, and rivers are traced by walking the
chains from randomly sampled highland corners.
"""

import logging

import numpy as np

from ..mesh import NO_NEIGHBOR, TileMesh
from .config import RiverConfig

logger = logging.getLogger(__name__)


def calculate_downslopes(mesh: TileMesh) -> None:
    """Point each corner at its steepest-descent neighbor.

    Self is the starting choice and a neighbor replaces the current choice
    only when strictly lower, so chains strictly descend and a flat or a
    pit resolves to a self-loop.
    """
    corners = mesh.corners
    elevation = corners.elevation.tolist()
    neighbors = corners.neighbors.tolist()

    downslope = list(range(len(corners)))
    for c, adjacent in enumerate(neighbors):
        lowest = c
        for n in adjacent:
            if n != NO_NEIGHBOR and elevation[n] < elevation[lowest]:
                lowest = n
        downslope[c] = lowest

    corners.downslope[:] = downslope


def follow_downslope(mesh: TileMesh, start: int) -> list[int]:
    """Return the downslope chain from start to its self-loop, inclusive.

    Read-only accessor for consumers of a finished mesh, such as renderers
    drawing drainage paths. The pipeline itself walks chains inline.

    Args:
        mesh: Mesh with downslopes assigned.
        start: Corner index to start from.

    Returns:
        Corner indices visited in order; the last one is its own downslope.
    """
    downslope = mesh.corners.downslope
    path = [start]
    current = start
    # Strict descent bounds the walk; the cap guards against corrupted input
    for _ in range(len(downslope)):
        nxt = int(downslope[current])
        if nxt == current:
            break
        path.append(nxt)
        current = nxt
    return path


def calculate_watersheds(mesh: TileMesh, max_rounds: int = 100) -> None:
    """Collapse downslope chains into drainage basins.

    Corners start as their own watershed; inland land corners start at
    their downslope. Each round, an inland corner whose watershed is not
    yet coastal adopts its downslope's watershed unless that is ocean.
    Rounds stop after a pass with no change, or after ``max_rounds``.

    ``watershed_size`` then counts the corners draining into each basin,
    or is -1 when the basin terminus is itself water.

    Args:
        mesh: Mesh with downslopes assigned.
        max_rounds: Upper bound on relaxation rounds.
    """
    corners = mesh.corners
    n = len(corners)
    coast = corners.coast.tolist()
    ocean = corners.ocean.tolist()
    downslope = corners.downslope.tolist()

    inland = [not ocean[c] and not coast[c] for c in range(n)]
    watershed = [downslope[c] if inland[c] else c for c in range(n)]

    rounds = 0
    for rounds in range(1, max_rounds + 1):
        changed = False
        for c in range(n):
            if not inland[c] or coast[watershed[c]]:
                continue
            basin = watershed[downslope[c]]
            if not ocean[basin] and basin != watershed[c]:
                watershed[c] = basin
                changed = True
        if not changed:
            break
    else:
        logger.warning(f"Watershed relaxation hit the {max_rounds}-round cap")

    water = corners.water.tolist()
    size = [0] * n
    for c in range(n):
        basin = watershed[c]
        if water[basin]:
            size[basin] = -1
        else:
            size[basin] += 1

    corners.watershed[:] = watershed
    corners.watershed_size[:] = size

    basins = len(set(watershed))
    logger.debug(f"Watersheds: {basins} basins after {rounds} rounds")


def create_rivers(
    mesh: TileMesh,
    rng: np.random.Generator,
    config: RiverConfig,
) -> int:
    """Trace rivers down the downslope chains from random highland corners.

    Draws ``int((width + height) * density)`` corners. A corner is
    accepted when it is not ocean and its elevation lies within
    ``[min_elevation, max_elevation]``. From each accepted corner the walk
    follows downslope until it reaches a coastal corner, bumping the
    ``river`` counter of every corner it leaves and of the edge it takes.
    A walk that ends at an inland basin floor tags that floor too.

    Args:
        mesh: Mesh with downslopes assigned.
        rng: Random stream for source sampling.
        config: River parameters.

    Returns:
        Number of accepted river sources.
    """
    corners = mesh.corners
    samples = int((mesh.width + mesh.height) * config.density)
    if samples <= 0:
        return 0

    ocean = corners.ocean.tolist()
    coast = corners.coast.tolist()
    elevation = corners.elevation.tolist()
    downslope = corners.downslope.tolist()
    neighbors = corners.neighbors.tolist()
    corner_edges = corners.edges.tolist()
    corner_river = corners.river.tolist()
    edge_river = mesh.edges.river.tolist()

    sources = 0
    for c in rng.integers(0, len(corners), size=samples).tolist():
        if ocean[c]:
            continue
        if not config.min_elevation <= elevation[c] <= config.max_elevation:
            continue
        sources += 1

        while not coast[c]:
            d = downslope[c]
            if d == c:
                corner_river[c] += 1
                break
            slot = neighbors[c].index(d)
            edge_river[corner_edges[c][slot]] += 1
            corner_river[c] += 1
            c = d

    corners.river[:] = corner_river
    mesh.edges.river[:] = edge_river

    logger.debug(
        f"Rivers: {sources}/{samples} sources accepted, "
        f"{sum(1 for r in edge_river if r > 0)} river edges"
    )
    return sources
