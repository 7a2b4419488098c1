"""Tests for biome classification."""

import numpy as np
import pytest

from mapgen.biome_types import BiomeType
from mapgen.mesh import TileMesh
from mapgen.terrain.classification import assign_site_biomes
from mapgen.terrain.config import BiomeConfig
from mapgen.terrain.topology import build_mesh


def _row(elevations: list[float], water: list[bool]) -> TileMesh:
    n = len(elevations)
    mesh = build_mesh(n, 1, n, 1)
    mesh.sites.elevation[:] = elevations
    mesh.sites.water[:] = water
    return mesh


class TestAssignSiteBiomes:
    """Tests for the elevation ladder."""

    @pytest.mark.parametrize(
        "elevation,expected",
        [
            (0.95, BiomeType.SNOW),
            (0.8, BiomeType.BARE),
            (0.6, BiomeType.BARE),
            (0.5, BiomeType.GRASSLAND),
            (0.3, BiomeType.GRASSLAND),
            (0.1, BiomeType.RIVER),
            (0.0, BiomeType.RIVER),
        ],
    )
    def test_land_ladder(self, elevation: float, expected: BiomeType) -> None:
        """Land biomes step down with elevation; thresholds are exclusive."""
        mesh = _row([elevation], [False])
        assign_site_biomes(mesh, BiomeConfig())
        assert mesh.sites.biome[0] == expected

    @pytest.mark.parametrize(
        "elevation,expected",
        [
            (0.05, BiomeType.MARSH),
            (0.1, BiomeType.LAKE),
            (0.5, BiomeType.LAKE),
            (0.8, BiomeType.LAKE),
            (0.85, BiomeType.ICE),
        ],
    )
    def test_lake_ladder(self, elevation: float, expected: BiomeType) -> None:
        """Inland water becomes marsh, lake or ice."""
        mesh = _row([elevation], [True])
        assign_site_biomes(mesh, BiomeConfig())
        assert mesh.sites.biome[0] == expected

    def test_ocean_kept(self) -> None:
        """Ocean sites keep their biome whatever their elevation."""
        mesh = _row([-0.5, 0.9], [True, True])
        mesh.sites.biome[:] = BiomeType.OCEAN
        assign_site_biomes(mesh, BiomeConfig())
        assert np.all(mesh.sites.biome == BiomeType.OCEAN)

    def test_low_land_becomes_water(self) -> None:
        """Land too low for grassland is reclassified as water."""
        mesh = _row([0.05, 0.4], [False, False])
        assign_site_biomes(mesh, BiomeConfig())
        assert mesh.sites.water.tolist() == [True, False]

    def test_custom_thresholds(self) -> None:
        """Thresholds come from the config."""
        mesh = _row([0.3], [False])
        assign_site_biomes(mesh, BiomeConfig(bare=0.2))
        assert mesh.sites.biome[0] == BiomeType.BARE

    def test_mixed_row(self) -> None:
        """Ocean, lake and land sites are classified together."""
        mesh = _row([-0.2, 0.5, 0.9, 0.3], [True, True, False, False])
        mesh.sites.biome[0] = BiomeType.OCEAN
        assign_site_biomes(mesh, BiomeConfig())
        assert [BiomeType(b) for b in mesh.sites.biome] == [
            BiomeType.OCEAN,
            BiomeType.LAKE,
            BiomeType.SNOW,
            BiomeType.GRASSLAND,
        ]

    def test_island_interior_grassland(self, island_mesh: TileMesh) -> None:
        """The 8x8 island interior sits at 0.25 and is grassland."""
        interior = [5, 6, 9, 10]
        assert np.all(island_mesh.sites.biome[interior] == BiomeType.GRASSLAND)
