"""Main map generation orchestration."""

import logging

import numpy as np

from ..biome_types import BiomeType
from ..exceptions import MeshInvariantError
from ..mesh import TileMesh
from .classification import assign_site_biomes
from .coastal import assign_ocean_coast_and_land
from .config import MapConfig
from .elevation import (
    assign_corner_elevations,
    assign_land_region_elevations,
    assign_ocean_region_elevations,
    redistribute_corner_elevations,
)
from .hydrology import calculate_downslopes, calculate_watersheds, create_rivers
from .shapes import LandShape, make_land_shape
from .topology import build_mesh
from .validation import validate_mesh

logger = logging.getLogger(__name__)


def generate_map(config: MapConfig, land_shape: LandShape | None = None) -> TileMesh:
    """Generate a complete tile map from configuration.

    A single random stream seeded from ``config.seed`` feeds land shape
    construction, elevation jitter and river sampling, so the same
    configuration always yields the same mesh.

    Args:
        config: Map generation configuration.
        land_shape: Land predicate to use instead of the configured one.

    Returns:
        Frozen TileMesh with every stage applied.

    Raises:
        InvalidGridDimensionsError: If the map cannot be split into the
            requested tiles.
        NoWaterSourceError: If the land shape leaves no water corner.
        MeshInvariantError: If validation is enabled and finds errors.
    """
    rng = np.random.default_rng(config.seed)

    logger.info(
        f"Generating {config.width}x{config.height} map "
        f"({config.num_x}x{config.num_y} tiles) with seed {config.seed}"
    )

    # Stage A: Topology
    logger.info("Stage A: Building mesh...")
    mesh = build_mesh(config.width, config.height, config.num_x, config.num_y)

    # Stage B: Land shape
    logger.info("Stage B: Shaping land...")
    if land_shape is None:
        # Corner points sit half a tile up-left of the site grid
        offset = (mesh.tile_width * 0.5, mesh.tile_height * 0.5)
        land_shape = make_land_shape(
            config.land_shape, config.width, config.height, rng, offset
        )

    # Stage C: Corner elevations
    logger.info("Stage C: Propagating corner elevations...")
    assign_corner_elevations(
        mesh,
        land_shape,
        rng,
        config.elevation,
        border_ocean=config.land_shape.border_ocean,
    )

    # Stage D: Ocean and coast
    logger.info("Stage D: Classifying ocean and coast...")
    assign_ocean_coast_and_land(mesh, config.lake_threshold)

    # Stage E: Elevation shaping
    logger.info("Stage E: Redistributing elevations...")
    redistribute_corner_elevations(mesh, config.elevation.scale_factor)
    assign_land_region_elevations(mesh)
    assign_ocean_region_elevations(mesh, config.elevation)

    # Stage F: Drainage
    logger.info("Stage F: Computing drainage...")
    calculate_downslopes(mesh)
    calculate_watersheds(mesh, config.rivers.watershed_max_rounds)

    if config.rivers.enabled:
        sources = create_rivers(mesh, rng, config.rivers)
        logger.info(f"Traced {sources} rivers")

    # Stage G: Biomes
    logger.info("Stage G: Assigning biomes...")
    assign_site_biomes(mesh, config.biomes)

    # Stage H: Validation
    if config.validate_output:
        result = validate_mesh(mesh)
        if not result.passed:
            raise MeshInvariantError(result.errors)

    _log_mesh_stats(mesh)

    mesh.freeze()
    return mesh


def _log_mesh_stats(mesh: TileMesh) -> None:
    """Log map generation statistics."""
    sites = mesh.sites
    total = len(sites)
    land_count = int(np.sum(~sites.water))

    logger.info(f"Map stats ({total:,} sites):")
    counts = np.bincount(sites.biome.astype(np.intp), minlength=len(BiomeType))
    for biome in BiomeType:
        count = int(counts[biome])
        if count == 0:
            continue
        pct = count / total * 100
        logger.info(f"  {biome.name.lower()}: {count:,} ({pct:.1f}%)")

    if land_count > 0:
        coast_pct = np.sum(sites.coast & ~sites.water) / land_count * 100
        logger.info(f"  Coastal fraction of land: {coast_pct:.1f}%")
