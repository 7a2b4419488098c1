"""Tests for ocean/coast classification."""

import numpy as np
import pytest

from mapgen.biome_types import BiomeType
from mapgen.mesh import TileMesh
from mapgen.terrain.coastal import (
    assign_corner_coasts,
    assign_ocean_coast_and_land,
    assign_site_coasts,
    flood_ocean_sites,
)
from mapgen.terrain.config import ElevationConfig, RadialShapeConfig
from mapgen.terrain.elevation import assign_corner_elevations
from mapgen.terrain.shapes import RadialIsland, RadialParams
from mapgen.terrain.topology import build_mesh


def _ring_mesh() -> TileMesh:
    """8x8 map, 4x4 tiles, water only on the border corners."""
    mesh = build_mesh(8, 8, 4, 4)
    mesh.corners.water[:] = mesh.corners.border
    return mesh


def _lake_mesh() -> TileMesh:
    """12x12 tiles with border water and a pond around corner (6, 6)."""
    mesh = build_mesh(12, 12, 12, 12)
    water = mesh.corners.border.copy()
    stride = 13
    for row, col in [(6, 6), (6, 7), (7, 6), (7, 7)]:
        water[row * stride + col] = True
    mesh.corners.water[:] = water
    return mesh


class TestFloodOceanSites:
    """Tests for the ocean flood fill."""

    def test_border_sites_become_ocean(self) -> None:
        """Sites touching border water are ocean seeds."""
        mesh = _ring_mesh()
        flood_ocean_sites(mesh)
        ocean = mesh.sites.ocean.reshape(4, 4)
        assert ocean[0].all() and ocean[3].all()
        assert ocean[:, 0].all() and ocean[:, 3].all()
        assert not ocean[1:3, 1:3].any()

    def test_land_sites_not_water(self) -> None:
        """Sites with no water corners stay land."""
        mesh = _ring_mesh()
        flood_ocean_sites(mesh)
        assert int((~mesh.sites.water).sum()) == 4

    def test_enclosed_water_is_lake(self) -> None:
        """Water not connected to the border stays a lake."""
        mesh = _lake_mesh()
        flood_ocean_sites(mesh, lake_threshold=2)
        sites = mesh.sites
        pond = 6 * 12 + 6
        assert sites.water[pond]
        assert not sites.ocean[pond]
        # Sharing two pond corners is enough at threshold 2
        assert sites.water[5 * 12 + 6]
        assert not sites.water[5 * 12 + 5]
        assert int((sites.water & ~sites.ocean).sum()) == 5

    def test_lake_threshold(self) -> None:
        """A stricter threshold keeps only fully submerged sites."""
        mesh = _lake_mesh()
        flood_ocean_sites(mesh, lake_threshold=4)
        lakes = np.flatnonzero(mesh.sites.water & ~mesh.sites.ocean)
        assert lakes.tolist() == [6 * 12 + 6]

    def test_ocean_is_border_ring(self) -> None:
        """Only the border ring floods when the interior is dry."""
        mesh = _lake_mesh()
        flood_ocean_sites(mesh)
        assert int(mesh.sites.ocean.sum()) == 44
        np.testing.assert_array_equal(mesh.sites.ocean, mesh.sites.border)

    def test_flood_reaches_connected_water(self) -> None:
        """Water sites 4-connected to a seed are ocean too."""
        mesh = _ring_mesh()
        # Flood the whole top interior row of corners
        mesh.corners.water[5:10] = True
        flood_ocean_sites(mesh)
        ocean = mesh.sites.ocean.reshape(4, 4)
        assert ocean[1].all()
        assert not ocean[2, 1:3].any()

    def test_flood_ignores_diagonals(self) -> None:
        """Water touching the ocean only at a diagonal stays a lake."""
        mesh = build_mesh(12, 12, 12, 12)
        water = mesh.corners.border.copy()
        stride = 13
        # Site (1, 1) joins the ocean; the lake below it touches it diagonally
        for row, col in [(1, 1), (1, 2), (3, 2), (3, 3)]:
            water[row * stride + col] = True
        mesh.corners.water[:] = water
        flood_ocean_sites(mesh)

        sites = mesh.sites
        assert sites.ocean[1 * 12 + 1]
        for lake in (2 * 12 + 2, 3 * 12 + 2):
            assert sites.water[lake]
            assert not sites.ocean[lake]
        assert not sites.water[2 * 12 + 1]
        assert not sites.water[1 * 12 + 2]


class TestSiteCoasts:
    """Tests for site coast tagging."""

    def test_ring_map(self) -> None:
        """Every site touches both ocean and land on the ring map."""
        mesh = _ring_mesh()
        flood_ocean_sites(mesh)
        assign_site_coasts(mesh)
        assert mesh.sites.coast.all()

    def test_far_sites_not_coast(self) -> None:
        """Sites with only land or only ocean around them are not coast."""
        mesh = _lake_mesh()
        flood_ocean_sites(mesh)
        assign_site_coasts(mesh)
        coast = mesh.sites.coast.reshape(12, 12)
        # Corner ocean site touches land site (1, 1) diagonally
        assert coast[0, 0]
        # Deep inland, next to the lake but no ocean
        assert not coast[5, 5]
        assert not coast[6, 6]

    def test_coast_invariant(self) -> None:
        """Coast sites always have ocean and non-water neighbors."""
        mesh = build_mesh(120, 120, 30, 30)
        params = RadialParams.draw(np.random.default_rng(21), RadialShapeConfig())
        shape = RadialIsland(120, 120, params, offset=(2.0, 2.0))
        assign_corner_elevations(
            mesh, shape, np.random.default_rng(21), ElevationConfig(), border_ocean=True
        )
        assign_ocean_coast_and_land(mesh)

        sites = mesh.sites
        ocean = np.append(sites.ocean, False)[sites.neighbors].any(axis=1)
        land = np.append(~sites.water, False)[sites.neighbors].any(axis=1)
        np.testing.assert_array_equal(sites.coast, ocean & land)


class TestCornerCoasts:
    """Tests for corner classification."""

    @pytest.fixture
    def ring(self) -> TileMesh:
        mesh = _ring_mesh()
        flood_ocean_sites(mesh)
        assign_site_coasts(mesh)
        assign_corner_coasts(mesh)
        return mesh

    def test_border_corners_ocean(self, ring: TileMesh) -> None:
        """Corners surrounded by ocean or the map edge are ocean water."""
        corners = ring.corners
        assert np.all(corners.biome[corners.border] == BiomeType.OCEAN)
        assert corners.water[corners.border].all()
        assert not corners.coast[corners.border].any()

    def test_inner_ring_coast(self, ring: TileMesh) -> None:
        """Corners between ocean and land are coast, not water."""
        inner = [6, 7, 8, 11, 13, 16, 17, 18]
        assert ring.corners.coast[inner].all()
        assert not ring.corners.water[inner].any()

    def test_center_land(self, ring: TileMesh) -> None:
        """A corner surrounded by land is dry and not coast."""
        assert not ring.corners.coast[12]
        assert not ring.corners.water[12]
        assert not ring.corners.ocean[12]

    def test_lake_corner_water(self) -> None:
        """Corners touching a lake but no ocean are water, not coast."""
        mesh = _lake_mesh()
        assign_ocean_coast_and_land(mesh)
        pond_corner = 6 * 13 + 6
        assert mesh.corners.water[pond_corner]
        assert not mesh.corners.coast[pond_corner]
        assert not mesh.corners.ocean[pond_corner]
