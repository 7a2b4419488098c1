"""Procedural tile map generation package.

This package builds a regular tile mesh and runs the terrain pipeline over
it: land shape, corner elevations, ocean/coast flood fills, elevation
redistribution, drainage, rivers and biomes.
"""

from .config import (
    BiomeConfig,
    ElevationConfig,
    LandShapeConfig,
    LandShapeKind,
    MapConfig,
    NoiseShapeConfig,
    RadialShapeConfig,
    RiverConfig,
)
from .generator import generate_map
from .shapes import LandShape, NoiseIsland, RadialIsland, RadialParams, make_land_shape
from .topology import build_mesh
from .validation import ValidationResult, validate_mesh

__all__ = [
    "BiomeConfig",
    "ElevationConfig",
    "LandShape",
    "LandShapeConfig",
    "LandShapeKind",
    "MapConfig",
    "NoiseIsland",
    "NoiseShapeConfig",
    "RadialIsland",
    "RadialParams",
    "RadialShapeConfig",
    "RiverConfig",
    "ValidationResult",
    "build_mesh",
    "generate_map",
    "make_land_shape",
    "validate_mesh",
]
