"""Biome categories and their properties."""

from enum import IntEnum


class BiomeType(IntEnum):
    """Surface biome categories stored as small integers in the mesh arrays."""

    CLIFF = 0
    OCEAN = 1
    COAST = 2
    LAKESHORE = 3
    MARSH = 4
    ICE = 5
    LAKE = 6
    RIVER = 7
    BEACH = 8
    LAVA = 9
    SNOW = 10
    TUNDRA = 11
    BARE = 12
    SCORCHED = 13
    TAIGA = 14
    SHRUBLAND = 15
    TEMPERATE_DESERT = 16
    TEMPERATE_RAIN_FOREST = 17
    TEMPERATE_DECIDUOUS_FOREST = 18
    GRASSLAND = 19
    TROPICAL_RAIN_FOREST = 20
    TROPICAL_SEASONAL_FOREST = 21
    SUBTROPICAL_DESERT = 22

    @property
    def water(self) -> bool:
        """Whether this biome is a body of water."""
        return self in _WATER_TYPES

    @property
    def land(self) -> bool:
        """Whether this biome is dry land."""
        return self not in _WATER_TYPES and self is not BiomeType.CLIFF


# Define sets for O(1) lookup
_WATER_TYPES = frozenset({
    BiomeType.OCEAN,
    BiomeType.MARSH,
    BiomeType.ICE,
    BiomeType.LAKE,
    BiomeType.RIVER,
})
