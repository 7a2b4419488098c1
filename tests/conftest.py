"""Shared test fixtures for map generation tests."""

from dataclasses import fields

import pytest

from mapgen.mesh import Point, TileMesh
from mapgen.terrain.config import LandShapeConfig, MapConfig
from mapgen.terrain.generator import generate_map
from mapgen.terrain.shapes import RadialIsland, RadialParams
from mapgen.terrain.topology import build_mesh


class ConstantShape:
    """Land shape that gives the same answer everywhere."""

    def __init__(self, land: bool) -> None:
        self.land = land

    def is_land(self, point: Point) -> bool:
        return self.land


@pytest.fixture
def all_land() -> ConstantShape:
    return ConstantShape(True)


@pytest.fixture
def all_water() -> ConstantShape:
    return ConstantShape(False)


@pytest.fixture
def small_mesh() -> TileMesh:
    """8x8 map split into 4x4 tiles of 2x2."""
    return build_mesh(8, 8, 4, 4)


@pytest.fixture
def center_island() -> RadialIsland:
    """Radial island with one bump and no waviness.

    On the 8x8 map every interior corner is land and the 16 border corners
    fall outside the outer bound, so they are water.
    """
    params = RadialParams(
        bumps=1,
        start_angle=0.0,
        dip_angle=0.0,
        dip_width=0.0,
        start=0.4,
        end=0.6,
        inner_amplitude=0.0,
        outer_amplitude=0.0,
        dip_inner=0.0,
        dip_outer=1.0,
    )
    return RadialIsland(8, 8, params, offset=(1.0, 1.0))


@pytest.fixture
def island_config() -> MapConfig:
    """Config for the 8x8 map; the island shape alone rings it with water."""
    return MapConfig(
        seed=1234,
        width=8,
        height=8,
        num_x=4,
        num_y=4,
        land_shape=LandShapeConfig(border_ocean=False),
    )


@pytest.fixture
def island_mesh(island_config: MapConfig, center_island: RadialIsland) -> TileMesh:
    """Fully generated 8x8 island with writable arrays."""
    return _thaw(generate_map(island_config, land_shape=center_island))


@pytest.fixture
def random_mesh() -> TileMesh:
    """Generated 24x24 tile radial island with writable arrays."""
    config = MapConfig(seed=99, width=240, height=240, num_x=24, num_y=24)
    return _thaw(generate_map(config))


def _thaw(mesh: TileMesh) -> TileMesh:
    """Replace every frozen array with a writable copy."""
    for group in (mesh.sites, mesh.corners, mesh.edges):
        for f in fields(group):
            setattr(group, f.name, getattr(group, f.name).copy())
    return mesh
