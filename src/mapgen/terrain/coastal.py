"""Ocean/coast classification: flood fills over sites and corners."""

import logging

import numpy as np
from numpy.typing import NDArray
from scipy import ndimage

from ..biome_types import BiomeType
from ..mesh import TileMesh

logger = logging.getLogger(__name__)


def flood_ocean_sites(mesh: TileMesh, lake_threshold: int = 2) -> None:
    """Tag water sites connected to the map border as ocean.

    A site is water when any of its corners is a water corner on the map
    border (an ocean seed) or when at least ``lake_threshold`` of its four
    corners are water. Ocean is every 4-connected body of water sites that
    holds a seed; water bodies without one stay lakes.

    Args:
        mesh: Mesh to update in place.
        lake_threshold: Water corners (1-4) needed to make a site water.
    """
    sites = mesh.sites
    corner_water = mesh.corners.water[sites.corners]
    corner_border = mesh.corners.border[sites.corners]

    seeds = np.any(corner_water & corner_border, axis=1)
    num_water = corner_water.sum(axis=1)
    sites.water[:] = seeds | (num_water >= lake_threshold)

    structure = ndimage.generate_binary_structure(2, 1)
    labeled, num_bodies = ndimage.label(
        sites.water.reshape(mesh.num_y, mesh.num_x), structure=structure
    )
    labels = labeled.ravel()
    ocean_mask = np.isin(labels, labels[seeds])

    sites.biome[ocean_mask] = BiomeType.OCEAN

    n_water = int(sites.water.sum())
    n_ocean = int(ocean_mask.sum())
    logger.debug(
        f"Ocean flood: {num_bodies} water bodies, {n_ocean} ocean sites, "
        f"{n_water - n_ocean} lake sites"
    )


def assign_site_coasts(mesh: TileMesh) -> None:
    """A site is coast when its 8-neighborhood holds both ocean and land."""
    sites = mesh.sites
    neighbors = sites.neighbors
    # Missing neighbors index the trailing False sentinel and count as neither
    ocean = _with_sentinel(sites.ocean, False)[neighbors]
    land = _with_sentinel(~sites.water, False)[neighbors]
    sites.coast[:] = ocean.any(axis=1) & land.any(axis=1)


def assign_corner_coasts(mesh: TileMesh) -> None:
    """Classify corners from the four sites around them.

    Missing sites beyond the map border count as ocean. A corner is coast
    when it touches both ocean and land, ocean when all four sites are
    ocean, and water unless it is coast or fully surrounded by land.
    """
    corners = mesh.corners
    site_ocean = mesh.sites.ocean
    site_land = ~mesh.sites.water

    num_ocean = _with_sentinel(site_ocean, True)[corners.sites].sum(axis=1)
    num_land = _with_sentinel(site_land, False)[corners.sites].sum(axis=1)

    corners.biome[num_ocean == 4] = BiomeType.OCEAN
    corners.coast[:] = (num_ocean > 0) & (num_land > 0)
    corners.water[:] = (num_land != 4) & ~corners.coast


def assign_ocean_coast_and_land(mesh: TileMesh, lake_threshold: int = 2) -> None:
    """Run the full ocean/coast classification in order."""
    flood_ocean_sites(mesh, lake_threshold)
    assign_site_coasts(mesh)
    assign_corner_coasts(mesh)

    logger.debug(
        f"Coast: {int(mesh.sites.coast.sum())} sites, "
        f"{int(mesh.corners.coast.sum())} corners"
    )


def _with_sentinel(values: NDArray[np.bool_], sentinel: bool) -> NDArray[np.bool_]:
    """Append a trailing sentinel so index -1 reads it."""
    return np.append(values, sentinel)
