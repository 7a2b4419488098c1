"""Tile map generator core."""

from .biome_types import BiomeType
from .config import find_config, list_configs, load_config
from .exceptions import (
    InvalidGridDimensionsError,
    MapGenError,
    MeshInvariantError,
    NoWaterSourceError,
)
from .mesh import Corner, Edge, Site, TileMesh
from .terrain import MapConfig, generate_map

__all__ = [
    # Types
    "BiomeType",
    # Mesh
    "TileMesh",
    "Site",
    "Corner",
    "Edge",
    # Generation
    "MapConfig",
    "generate_map",
    # Config loading
    "load_config",
    "find_config",
    "list_configs",
    # Exceptions
    "MapGenError",
    "InvalidGridDimensionsError",
    "NoWaterSourceError",
    "MeshInvariantError",
]
