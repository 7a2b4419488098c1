"""Biome classification: elevation-only threshold ladder over sites."""

import logging

import numpy as np

from ..biome_types import BiomeType
from ..mesh import TileMesh
from .config import BiomeConfig

logger = logging.getLogger(__name__)


def assign_site_biomes(mesh: TileMesh, config: BiomeConfig) -> None:
    """Assign a biome to every site from its water flag and elevation.

    Ocean sites keep OCEAN. Other water sites become MARSH, ICE or LAKE.
    Land sites become SNOW, BARE or GRASSLAND from the top down; land too
    low for any of those is reclassified as water with biome RIVER.

    Only a handful of the BiomeType categories are produced here. The
    remaining ones exist for a moisture-aware classifier.
    """
    sites = mesh.sites
    elevation = sites.elevation
    ocean = sites.ocean
    lake = sites.water & ~ocean
    land = ~sites.water

    biome = sites.biome.copy()

    biome[lake] = np.select(
        [elevation[lake] < config.marsh, elevation[lake] > config.ice],
        [BiomeType.MARSH, BiomeType.ICE],
        default=BiomeType.LAKE,
    )

    land_elevation = elevation[land]
    biome[land] = np.select(
        [
            land_elevation > config.snow,
            land_elevation > config.bare,
            land_elevation > config.grassland,
        ],
        [BiomeType.SNOW, BiomeType.BARE, BiomeType.GRASSLAND],
        default=BiomeType.RIVER,
    )

    lowland = land & (elevation <= config.grassland)
    sites.water[lowland] = True
    sites.biome[:] = biome

    logger.debug(f"Biomes: {int(lowland.sum())} low land sites reclassified as river")
