"""Noise sources for noise-field land shapes.

Provides plain simplex, fractal (fBm) simplex, periodic (tileable) simplex
and cellular (Worley) noise. Every source is seeded once at construction
and is a pure function of its input coordinates afterwards.
"""

import math

import numpy as np
from opensimplex import OpenSimplex
from scipy.spatial import cKDTree


class SimplexNoise:
    """Single-octave OpenSimplex noise."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._simplex = OpenSimplex(seed=seed)

    def sample(self, x: float, y: float) -> float:
        """Sample 2D noise at the given coordinates. Returns value in [-1, 1]."""
        return self._simplex.noise2(x, y)


class FractalNoise:
    """Fractal Brownian motion built from summed simplex octaves."""

    def __init__(
        self,
        seed: int,
        octaves: int = 4,
        lacunarity: float = 2.0,
        gain: float = 0.5,
    ) -> None:
        self.seed = seed
        self.octaves = octaves
        self.lacunarity = lacunarity
        self.gain = gain
        self._simplex = OpenSimplex(seed=seed)

    def sample(self, x: float, y: float) -> float:
        """Generate fBm noise at the given coordinates.

        Sums octaves at increasing frequencies and decreasing amplitudes,
        normalized back to roughly [-1, 1].
        """
        total = 0.0
        amplitude = 1.0
        frequency = 1.0
        max_amplitude = 0.0

        for _ in range(self.octaves):
            total += amplitude * self._simplex.noise2(x * frequency, y * frequency)
            max_amplitude += amplitude
            amplitude *= self.gain
            frequency *= self.lacunarity

        return total / max_amplitude


class PeriodicNoise:
    """Simplex noise that repeats every ``period`` units along both axes.

    Each axis is wrapped onto a circle and the pair of circles is sampled
    as a torus in 4D noise space, so opposite map edges line up.
    """

    def __init__(self, seed: int, period: float) -> None:
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self.seed = seed
        self.period = period
        self._radius = period / (2.0 * math.pi)
        self._simplex = OpenSimplex(seed=seed)

    def sample(self, x: float, y: float) -> float:
        """Sample tileable noise at the given coordinates."""
        ax = 2.0 * math.pi * x / self.period
        ay = 2.0 * math.pi * y / self.period
        r = self._radius
        return self._simplex.noise4(
            r * math.cos(ax), r * math.sin(ax), r * math.cos(ay), r * math.sin(ay)
        )


class CellularNoise:
    """Worley noise over one jittered feature point per unit cell.

    The raw F1 distance (to the nearest feature point) is mapped to
    ``1 - 2 * min(F1, 1)`` so values are high near feature points and the
    result lies in [-1, 1] like the other sources.
    """

    def __init__(
        self,
        rng: np.random.Generator,
        extent_x: float,
        extent_y: float,
    ) -> None:
        # One ring of padding cells so points near the extent see every
        # feature point that could be their nearest.
        cells_x = int(math.ceil(extent_x)) + 2
        cells_y = int(math.ceil(extent_y)) + 2
        gy, gx = np.mgrid[-1 : cells_y - 1, -1 : cells_x - 1]
        cells = np.stack([gx.ravel(), gy.ravel()], axis=1).astype(np.float64)
        self.points = cells + rng.random(cells.shape)
        self._tree = cKDTree(self.points)

    def distance(self, x: float, y: float) -> float:
        """Distance from (x, y) to the nearest feature point."""
        dist, _ = self._tree.query((x, y))
        return float(dist)

    def sample(self, x: float, y: float) -> float:
        """Sample cellular noise at the given coordinates."""
        return 1.0 - 2.0 * min(self.distance(x, y), 1.0)
