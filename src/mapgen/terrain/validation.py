"""Post-generation invariant checks over a finished tile mesh."""

import logging

import numpy as np
from scipy import ndimage

from ..biome_types import BiomeType
from ..mesh import NO_NEIGHBOR, SITE_CARDINAL_SLOTS, TileMesh

logger = logging.getLogger(__name__)

# Lookup tables indexed by biome value
_BIOME_IS_WATER = np.array([biome.water for biome in BiomeType])
_BIOME_IS_LAND = np.array([biome.land for biome in BiomeType])


class ValidationResult:
    """Result of mesh validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_mesh(mesh: TileMesh) -> ValidationResult:
    """Validate a generated mesh against its structural invariants.

    Args:
        mesh: Mesh that has been through the full pipeline.

    Returns:
        ValidationResult with any errors/warnings.
    """
    result = ValidationResult()

    # Check 1: Every cross reference in bounds
    _check_indices(mesh, result)
    if not result.passed:
        # Later checks index through these tables
        _log_result(result)
        return result

    # Check 2: Elevations finite and in range
    _check_elevations(mesh, result)

    # Check 3: Downslope chains descend and reach their watershed
    _check_drainage(mesh, result)

    # Check 4: Coast sites touch both ocean and land
    _check_site_coasts(mesh, result)

    # Check 5: Ocean deepens away from the coast
    _check_ocean_depth(mesh, result)

    # Check 6: River counters consistent
    _check_rivers(mesh, result)

    # Check 7: Biome tags agree with the water flags
    _check_biomes(mesh, result)

    # Check 8: Land/ocean balance
    _check_land_and_ocean(mesh, result)

    _log_result(result)
    return result


def _log_result(result: ValidationResult) -> None:
    if result.passed:
        logger.info("Mesh validation passed")
    else:
        logger.warning(f"Mesh validation failed with {len(result.errors)} errors")
        for error in result.errors:
            logger.error(f"  - {error}")

    for warning in result.warnings:
        logger.warning(f"  - {warning}")


def _check_indices(mesh: TileMesh, result: ValidationResult) -> None:
    """Check neighbor tables only hold valid indices or -1."""
    n_sites = len(mesh.sites)
    n_corners = len(mesh.corners)
    n_edges = len(mesh.edges)

    tables = [
        ("site neighbors", mesh.sites.neighbors, n_sites),
        ("site edges", mesh.sites.edges, n_edges),
        ("site corners", mesh.sites.corners, n_corners),
        ("corner neighbors", mesh.corners.neighbors, n_corners),
        ("corner sites", mesh.corners.sites, n_sites),
        ("corner edges", mesh.corners.edges, n_edges),
        ("edge corners", mesh.edges.corners, n_corners),
        ("edge sites", mesh.edges.sites, n_sites),
    ]
    for name, table, size in tables:
        bad = (table < NO_NEIGHBOR) | (table >= size)
        if bad.any():
            result.add_error(f"{int(bad.sum())} out-of-range entries in {name}")

    for name, values in (
        ("corner downslopes", mesh.corners.downslope),
        ("corner watersheds", mesh.corners.watershed),
    ):
        bad = values >= n_corners
        if bad.any():
            result.add_error(f"{int(bad.sum())} out-of-range entries in {name}")


def _check_elevations(mesh: TileMesh, result: ValidationResult) -> None:
    """Check elevations are finite and sites lie within [-1, 1]."""
    if not np.isfinite(mesh.corners.elevation).all():
        result.add_error("Non-finite corner elevations")

    site_elevation = mesh.sites.elevation
    if not np.isfinite(site_elevation).all():
        result.add_error("Non-finite site elevations")
    elif (site_elevation < -1.0).any() or (site_elevation > 1.0).any():
        result.add_error(
            f"Site elevations outside [-1, 1]: "
            f"min {site_elevation.min():.3f}, max {site_elevation.max():.3f}"
        )


def _check_drainage(mesh: TileMesh, result: ValidationResult) -> None:
    """Check downslope never climbs and watersheds lie on the chain."""
    corners = mesh.corners
    elevation = corners.elevation
    downslope = corners.downslope

    if (downslope < 0).any():
        result.add_error("Corners without a downslope")
        return

    uphill = elevation[downslope] > elevation
    if uphill.any():
        result.add_error(f"{int(uphill.sum())} corners drain uphill")

    n = len(corners)
    downslope_list = downslope.tolist()
    watershed = corners.watershed.tolist()
    unreached = 0
    for c in range(n):
        current = c
        for _ in range(n):
            if current == watershed[c]:
                break
            nxt = downslope_list[current]
            if nxt == current:
                break
            current = nxt
        if current != watershed[c]:
            unreached += 1

    if unreached > 0:
        result.add_error(f"{unreached} corners cannot reach their watershed downslope")


def _check_site_coasts(mesh: TileMesh, result: ValidationResult) -> None:
    """Check coast sites have an ocean neighbor and a non-ocean neighbor.

    Biome assignment may turn low land into river water after coasts are
    fixed, so the second half only asks for a non-ocean neighbor.
    """
    sites = mesh.sites
    ocean = np.append(sites.ocean, False)[sites.neighbors]
    inland = np.append(~sites.ocean, False)[sites.neighbors]

    no_ocean = sites.coast & ~ocean.any(axis=1)
    if no_ocean.any():
        result.add_error(f"{int(no_ocean.sum())} coast sites without ocean neighbors")

    no_land = sites.coast & ~inland.any(axis=1)
    if no_land.any():
        result.add_error(f"{int(no_land.sum())} coast sites without land neighbors")


def _check_ocean_depth(mesh: TileMesh, result: ValidationResult) -> None:
    """Check every deep ocean site has a shallower ocean neighbor."""
    sites = mesh.sites
    ocean = sites.ocean
    elevation = sites.elevation
    cardinal = sites.neighbors[:, list(SITE_CARDINAL_SLOTS)]

    neighbor_ocean = np.append(ocean, False)[cardinal]
    neighbor_elevation = np.append(elevation, -np.inf)[cardinal]
    shallower = (neighbor_ocean & (neighbor_elevation >= elevation[:, None])).any(axis=1)

    deep = ocean & ~sites.coast & (elevation > -1.0)
    stranded = deep & ~shallower
    if stranded.any():
        result.add_error(f"{int(stranded.sum())} ocean sites deeper than the path to the coast")


def _check_rivers(mesh: TileMesh, result: ValidationResult) -> None:
    """Check river counters are non-negative and river edges join river corners."""
    corners = mesh.corners
    edges = mesh.edges

    if (corners.river < 0).any() or (edges.river < 0).any():
        result.add_error("Negative river counters")

    river_edges = edges.corners[edges.river > 0]
    tagged = (corners.river > 0) | corners.coast
    loose = ~tagged[river_edges].all(axis=1)
    if loose.any():
        result.add_error(f"{int(loose.sum())} river edges touch untagged corners")


def _check_biomes(mesh: TileMesh, result: ValidationResult) -> None:
    """Check every site biome is known and matches the site's water flag."""
    sites = mesh.sites
    biome = sites.biome.astype(np.intp)

    known = (biome >= 0) & (biome < len(BiomeType))
    if not known.all():
        result.add_error(f"{int((~known).sum())} sites with unknown biome values")
        return

    water_biome = _BIOME_IS_WATER[biome]
    wet_land = sites.water & ~water_biome
    if wet_land.any():
        result.add_error(f"{int(wet_land.sum())} water sites tagged with a land biome")

    land_biome = _BIOME_IS_LAND[biome]
    dry_water = ~sites.water & ~land_biome
    if dry_water.any():
        result.add_error(f"{int(dry_water.sum())} land sites tagged with a non-land biome")


def _check_land_and_ocean(mesh: TileMesh, result: ValidationResult) -> None:
    """Warn on maps with no land, no ocean, or several ocean bodies."""
    sites = mesh.sites
    land = ~sites.water
    ocean = sites.ocean

    if not land.any():
        result.add_warning("No land sites")
    if not ocean.any():
        result.add_warning("No ocean sites")
        return

    # Ocean floods 4-connected, so count components the same way
    grid = ocean.reshape(mesh.num_y, mesh.num_x)
    _, num_features = ndimage.label(grid)
    if num_features > 1:
        result.add_warning(f"Ocean split into {num_features} disconnected bodies")
