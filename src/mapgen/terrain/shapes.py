"""Land shape predicates: decide whether a map-space point is land.

Every strategy draws its parameters from the shared random stream once,
at construction. With extra randomness enabled a shape keeps a handle on
the stream and redraws small jitter amounts on every call, so asking about
the same point twice may give different answers.
"""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

import numpy as np

from ..mesh import Point
from .config import LandShapeConfig, LandShapeKind, NoiseShapeConfig, RadialShapeConfig
from .noise import CellularNoise, FractalNoise, PeriodicNoise, SimplexNoise

logger = logging.getLogger(__name__)


class LandShape(Protocol):
    """Membership predicate over map-space points."""

    def is_land(self, point: Point) -> bool: ...


class NoiseSource(Protocol):
    def sample(self, x: float, y: float) -> float: ...


@dataclass(frozen=True)
class RadialParams:
    """Random parameters of a radial island, drawn once per map."""

    bumps: int
    start_angle: float
    dip_angle: float
    dip_width: float
    start: float
    end: float
    inner_amplitude: float
    outer_amplitude: float
    dip_inner: float
    dip_outer: float

    @classmethod
    def draw(cls, rng: np.random.Generator, config: RadialShapeConfig) -> "RadialParams":
        """Draw island parameters from the random stream."""
        bumps = int(rng.integers(config.min_bumps, config.max_bumps + 1))
        start_angle = rng.random() * 2.0 * math.pi
        dip_angle = rng.random() * 2.0 * math.pi
        mix = rng.random()
        start = rng.uniform(0.0, 0.5)
        end = rng.uniform(0.5, 1.0)
        return cls(
            bumps=bumps,
            start_angle=start_angle,
            dip_angle=dip_angle,
            dip_width=(end - start) * mix + start,
            start=start,
            end=end,
            inner_amplitude=rng.uniform(0.0, 0.5),
            outer_amplitude=rng.uniform(0.0, 0.5),
            dip_inner=rng.uniform(0.0, config.slope),
            dip_outer=rng.uniform(config.slope, 1.0),
        )


class RadialIsland:
    """Island bounded by overlapping sine waves around the map center.

    A point is land when its radius falls inside the inner bound, or in the
    ring between ``factor`` times the inner bound and the outer bound. One
    sector around ``dip_angle`` swaps in narrower bounds to carve a bay.
    """

    def __init__(
        self,
        width: float,
        height: float,
        params: RadialParams,
        config: RadialShapeConfig | None = None,
        offset: Point = (0.0, 0.0),
        rng: np.random.Generator | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.params = params
        self.config = config or RadialShapeConfig()
        self.offset = offset
        self._rng = rng

    def is_land(self, point: Point) -> bool:
        p = self.params
        qx = (point[0] + self.offset[0]) / self.width * 2.0 - 1.0
        qy = (point[1] + self.offset[1]) / self.height * 2.0 - 1.0
        angle = math.atan2(qy, qx)
        length = self.config.scale * (max(abs(qx), abs(qy)) + math.hypot(qx, qy))

        if self._rng is not None:
            inner_amplitude = self._rng.uniform(0.0, 0.5)
            outer_amplitude = self._rng.uniform(0.0, 0.5)
        else:
            inner_amplitude = p.inner_amplitude
            outer_amplitude = p.outer_amplitude

        wave = p.start_angle + p.bumps * angle
        r1 = p.start + inner_amplitude * math.sin(wave + math.cos((p.bumps + 3) * angle))
        r2 = p.end - outer_amplitude * math.sin(wave - math.sin((p.bumps + 2) * angle))

        if self._in_dip(angle):
            if self._rng is not None:
                r1 = self._rng.uniform(0.0, self.config.slope)
                r2 = self._rng.uniform(self.config.slope, 1.0)
            else:
                r1 = p.dip_inner
                r2 = p.dip_outer

        return length < r1 or (r1 * self.config.factor < length < r2)

    def _in_dip(self, angle: float) -> bool:
        delta = angle - self.params.dip_angle
        width = self.params.dip_width
        return (
            abs(delta) < width
            or abs(delta + 2.0 * math.pi) < width
            or abs(delta - 2.0 * math.pi) < width
        )


class NoiseIsland:
    """Land wherever a noise field rises above a cutoff."""

    def __init__(
        self,
        source: NoiseSource,
        width: float,
        height: float,
        config: NoiseShapeConfig | None = None,
        offset: Point = (0.0, 0.0),
        rng: np.random.Generator | None = None,
    ) -> None:
        self.source = source
        self.width = width
        self.height = height
        self.config = config or NoiseShapeConfig()
        self.offset = offset
        self._rng = rng

    def is_land(self, point: Point) -> bool:
        frequency = self.config.frequency
        u = (point[0] + self.offset[0]) / self.width * frequency
        v = (point[1] + self.offset[1]) / self.height * frequency
        if self._rng is not None:
            jitter = self.config.jitter
            u += self._rng.uniform(-jitter, jitter)
            v += self._rng.uniform(-jitter, jitter)
        return self.source.sample(u, v) > self.config.threshold


def make_land_shape(
    config: LandShapeConfig,
    width: float,
    height: float,
    rng: np.random.Generator,
    offset: Point = (0.0, 0.0),
) -> LandShape:
    """Construct the configured land shape strategy.

    Args:
        config: Land shape configuration.
        width: Map width in map units.
        height: Map height in map units.
        rng: Shared random stream; parameters are drawn from it here.
        offset: Added to query points before normalizing them to the map.

    Returns:
        A LandShape whose ``is_land`` answers membership queries.
    """
    jitter_rng = rng if config.extra_randomness else None

    if config.kind == LandShapeKind.RADIAL:
        params = RadialParams.draw(rng, config.radial)
        logger.debug(f"Radial island: {params}")
        return RadialIsland(width, height, params, config.radial, offset, jitter_rng)

    noise = config.noise
    source: NoiseSource
    if config.kind == LandShapeKind.CELLULAR:
        source = CellularNoise(rng, noise.frequency, noise.frequency)
    else:
        seed = int(rng.integers(0, 2**31 - 1))
        if config.kind == LandShapeKind.SIMPLEX:
            source = SimplexNoise(seed)
        elif config.kind == LandShapeKind.FRACTAL:
            source = FractalNoise(seed, noise.octaves, noise.lacunarity, noise.gain)
        else:
            source = PeriodicNoise(seed, period=noise.frequency)

    logger.debug(f"Noise island: {config.kind.value}, frequency={noise.frequency}")
    return NoiseIsland(source, width, height, noise, offset, jitter_rng)
