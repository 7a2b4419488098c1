"""Map generation configuration models."""

from enum import Enum

from pydantic import BaseModel, Field


class LandShapeKind(str, Enum):
    """Available land shape strategies."""

    RADIAL = "radial"
    SIMPLEX = "simplex"
    FRACTAL = "fractal"
    PERIODIC = "periodic"
    CELLULAR = "cellular"


class RadialShapeConfig(BaseModel):
    """Overlapping-sine island parameters."""

    factor: float = Field(
        default=1.03, description="Gap between inner land and outer ring (1.0 = flat)"
    )
    scale: float = Field(default=0.35, description="Larger values shrink the land")
    slope: float = Field(
        default=0.7,
        description="Bay shelf: near 0 gives sharper bays, near 1 a wider shelf",
    )
    min_bumps: int = Field(default=1, description="Minimum number of coastline bumps")
    max_bumps: int = Field(default=5, description="Maximum number of coastline bumps")


class NoiseShapeConfig(BaseModel):
    """Noise-field land shape parameters."""

    frequency: float = Field(default=4.0, description="Noise cycles across the map")
    threshold: float = Field(
        default=0.0, description="Sampled values above this cutoff are land"
    )
    octaves: int = Field(default=4, description="Octaves for fractal noise")
    lacunarity: float = Field(default=2.0, description="Frequency multiplier per octave")
    gain: float = Field(default=0.5, description="Amplitude multiplier per octave")
    jitter: float = Field(
        default=0.05, description="Per-call sample offset when extra randomness is on"
    )


class LandShapeConfig(BaseModel):
    """Land/water predicate selection."""

    kind: LandShapeKind = Field(
        default=LandShapeKind.RADIAL, description="Land shape strategy"
    )
    border_ocean: bool = Field(
        default=False, description="Force corners on the grid border to water"
    )
    extra_randomness: bool = Field(
        default=True,
        description="Redraw jitter on every evaluation (repeated queries may differ)",
    )
    radial: RadialShapeConfig = Field(default_factory=RadialShapeConfig)
    noise: NoiseShapeConfig = Field(default_factory=NoiseShapeConfig)


class ElevationConfig(BaseModel):
    """Corner and region elevation parameters."""

    step: float = Field(default=0.01, description="Elevation added per corner hop")
    land_step: float = Field(
        default=1.0, description="Extra elevation per hop between two land corners"
    )
    scale_factor: float = Field(
        default=1.1, description="Redistribution scale (>1 gives more highland)"
    )
    ocean_depth_factor: float = Field(
        default=1.1, description="Ocean depth multiplier per hop away from the coast"
    )
    coastal_ocean_elevation: float = Field(
        default=-0.2, description="Elevation of ocean sites touching the coast"
    )


class RiverConfig(BaseModel):
    """Drainage and river tracing parameters."""

    enabled: bool = Field(default=True, description="Trace rivers along edges")
    density: float = Field(
        default=0.25, description="River samples per unit of (width + height)"
    )
    min_elevation: float = Field(default=0.3, description="Lowest river source")
    max_elevation: float = Field(default=0.9, description="Highest river source")
    watershed_max_rounds: int = Field(
        default=100, description="Cap on watershed relaxation passes"
    )


class BiomeConfig(BaseModel):
    """Elevation thresholds for the biome ladder."""

    snow: float = Field(default=0.8, description="Land above this is snow")
    bare: float = Field(default=0.5, description="Land above this is bare")
    grassland: float = Field(default=0.1, description="Land above this is grassland")
    marsh: float = Field(default=0.1, description="Lake water below this is marsh")
    ice: float = Field(default=0.8, description="Lake water above this is ice")


class MapConfig(BaseModel):
    """Complete map generation configuration."""

    seed: int = Field(default=10000, description="Random seed for reproducibility")
    width: int = Field(default=800, description="Map width in map units")
    height: int = Field(default=600, description="Map height in map units")
    num_x: int = Field(default=40, description="Tiles along the x axis")
    num_y: int = Field(default=30, description="Tiles along the y axis")
    lake_threshold: int = Field(
        default=2, description="Water corners (1-4) needed for a site to be water"
    )
    validate_output: bool = Field(
        default=True, description="Validate mesh invariants after generation"
    )

    land_shape: LandShapeConfig = Field(default_factory=LandShapeConfig)
    elevation: ElevationConfig = Field(default_factory=ElevationConfig)
    rivers: RiverConfig = Field(default_factory=RiverConfig)
    biomes: BiomeConfig = Field(default_factory=BiomeConfig)
