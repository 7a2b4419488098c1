"""Tile mesh storage: index-linked sites, corners and edges.

All three entity kinds live in flat numpy arrays addressed by integer index.
Cross references are indices into the sibling arrays, with -1 meaning
"no neighbor" where the grid boundary truncates a neighborhood.
"""

from dataclasses import dataclass, fields

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel

from .biome_types import BiomeType

NO_NEIGHBOR = -1

# Site neighbor slots s0..s7 as (dx, dy); slot k is opposite slot 7 - k
SITE_NEIGHBOR_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (0, -1),
    (1, -1),
    (-1, 0),
    (1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)

# Cardinal site neighbor slots (up, left, right, down) used by flood fills
SITE_CARDINAL_SLOTS: tuple[int, ...] = (1, 3, 4, 6)

# Corner neighbor / edge slots: left, right, up, down (slot k opposite k ^ 1)
CORNER_LEFT, CORNER_RIGHT, CORNER_UP, CORNER_DOWN = 0, 1, 2, 3


Point = tuple[float, float]


@dataclass
class SiteArrays:
    """Per-site fields, one row per grid cell."""

    point: NDArray[np.float64]  # (n, 2)
    water: NDArray[np.bool_]
    island: NDArray[np.bool_]
    coast: NDArray[np.bool_]
    border: NDArray[np.bool_]
    biome: NDArray[np.int8]
    neighbors: NDArray[np.intp]  # (n, 8)
    edges: NDArray[np.intp]  # (n, 4) left, right, top, bottom
    corners: NDArray[np.intp]  # (n, 4) top-left, top-right, bottom-left, bottom-right
    elevation: NDArray[np.float64]
    moisture: NDArray[np.float64]
    flux: NDArray[np.float64]

    def __len__(self) -> int:
        return len(self.point)

    @property
    def ocean(self) -> NDArray[np.bool_]:
        return self.biome == BiomeType.OCEAN


@dataclass
class CornerArrays:
    """Per-corner fields, one row per grid vertex."""

    point: NDArray[np.float64]  # (n, 2)
    water: NDArray[np.bool_]
    coast: NDArray[np.bool_]
    border: NDArray[np.bool_]
    biome: NDArray[np.int8]
    neighbors: NDArray[np.intp]  # (n, 4) left, right, up, down
    sites: NDArray[np.intp]  # (n, 4) up-left, up-right, down-left, down-right
    edges: NDArray[np.intp]  # (n, 4) aligned with neighbors
    elevation: NDArray[np.float64]
    moisture: NDArray[np.float64]
    flux: NDArray[np.float64]
    downslope: NDArray[np.intp]
    watershed: NDArray[np.intp]
    watershed_size: NDArray[np.intp]
    river: NDArray[np.intp]

    def __len__(self) -> int:
        return len(self.point)

    @property
    def ocean(self) -> NDArray[np.bool_]:
        return self.biome == BiomeType.OCEAN


@dataclass
class EdgeArrays:
    """Per-edge fields; vertical edges first, then horizontal edges."""

    midpoint: NDArray[np.float64]  # (n, 2)
    border: NDArray[np.bool_]
    corners: NDArray[np.intp]  # (n, 2) c0, c1
    sites: NDArray[np.intp]  # (n, 2) s0, s1
    elevation: NDArray[np.float64]
    moisture: NDArray[np.float64]
    flux: NDArray[np.float64]
    river: NDArray[np.intp]

    def __len__(self) -> int:
        return len(self.midpoint)


class Site(BaseModel, frozen=True):
    """Immutable snapshot of one site."""

    index: int
    point: Point
    water: bool
    island: bool
    coast: bool
    border: bool
    biome: BiomeType
    neighbors: tuple[int, ...]
    edges: tuple[int, ...]
    corners: tuple[int, ...]
    elevation: float
    moisture: float
    flux: float

    @property
    def ocean(self) -> bool:
        return self.biome is BiomeType.OCEAN


class Corner(BaseModel, frozen=True):
    """Immutable snapshot of one corner."""

    index: int
    point: Point
    water: bool
    coast: bool
    border: bool
    biome: BiomeType
    neighbors: tuple[int, ...]
    sites: tuple[int, ...]
    edges: tuple[int, ...]
    elevation: float
    moisture: float
    flux: float
    downslope: int
    watershed: int
    watershed_size: int
    river: int

    @property
    def ocean(self) -> bool:
        return self.biome is BiomeType.OCEAN


class Edge(BaseModel, frozen=True):
    """Immutable snapshot of one edge."""

    index: int
    midpoint: Point
    border: bool
    corners: tuple[int, int]
    sites: tuple[int, int]
    elevation: float
    moisture: float
    flux: float
    river: int


class TileMesh:
    """Regular rectangular tile mesh shared by all generation stages.

    Stages mutate the arrays in place while the mesh is being generated.
    Once :meth:`freeze` has been called every array is read-only.
    """

    def __init__(
        self,
        width: int,
        height: int,
        num_x: int,
        num_y: int,
        sites: SiteArrays,
        corners: CornerArrays,
        edges: EdgeArrays,
    ):
        self.width = width
        self.height = height
        self.num_x = num_x
        self.num_y = num_y
        self.sites = sites
        self.corners = corners
        self.edges = edges
        self._frozen = False

    @property
    def tile_width(self) -> int:
        return self.width // self.num_x

    @property
    def tile_height(self) -> int:
        return self.height // self.num_y

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Mark every array read-only so consumers cannot mutate the mesh."""
        for group in (self.sites, self.corners, self.edges):
            for f in fields(group):
                getattr(group, f.name).flags.writeable = False
        self._frozen = True

    def site(self, index: int) -> Site:
        """Get a snapshot of the site at index."""
        s = self.sites
        return Site(
            index=index,
            point=_point(s.point[index]),
            water=bool(s.water[index]),
            island=bool(s.island[index]),
            coast=bool(s.coast[index]),
            border=bool(s.border[index]),
            biome=BiomeType(int(s.biome[index])),
            neighbors=tuple(s.neighbors[index].tolist()),
            edges=tuple(s.edges[index].tolist()),
            corners=tuple(s.corners[index].tolist()),
            elevation=float(s.elevation[index]),
            moisture=float(s.moisture[index]),
            flux=float(s.flux[index]),
        )

    def corner(self, index: int) -> Corner:
        """Get a snapshot of the corner at index."""
        c = self.corners
        return Corner(
            index=index,
            point=_point(c.point[index]),
            water=bool(c.water[index]),
            coast=bool(c.coast[index]),
            border=bool(c.border[index]),
            biome=BiomeType(int(c.biome[index])),
            neighbors=tuple(c.neighbors[index].tolist()),
            sites=tuple(c.sites[index].tolist()),
            edges=tuple(c.edges[index].tolist()),
            elevation=float(c.elevation[index]),
            moisture=float(c.moisture[index]),
            flux=float(c.flux[index]),
            downslope=int(c.downslope[index]),
            watershed=int(c.watershed[index]),
            watershed_size=int(c.watershed_size[index]),
            river=int(c.river[index]),
        )

    def edge(self, index: int) -> Edge:
        """Get a snapshot of the edge at index."""
        e = self.edges
        c0, c1 = e.corners[index].tolist()
        s0, s1 = e.sites[index].tolist()
        return Edge(
            index=index,
            midpoint=_point(e.midpoint[index]),
            border=bool(e.border[index]),
            corners=(c0, c1),
            sites=(s0, s1),
            elevation=float(e.elevation[index]),
            moisture=float(e.moisture[index]),
            flux=float(e.flux[index]),
            river=int(e.river[index]),
        )

    def __repr__(self) -> str:
        return (
            f"TileMesh({self.width}x{self.height}, tiles={self.num_x}x{self.num_y}, "
            f"sites={len(self.sites)}, corners={len(self.corners)}, "
            f"edges={len(self.edges)})"
        )


def _point(row: NDArray[np.float64]) -> Point:
    return (float(row[0]), float(row[1]))
