"""Custom exceptions for map generation."""


class MapGenError(Exception):
    """Base exception for map generation errors."""

    pass


class InvalidGridDimensionsError(MapGenError):
    """Raised when the map size cannot be split evenly into tiles."""

    def __init__(self, width: int, height: int, num_x: int, num_y: int):
        self.width = width
        self.height = height
        self.num_x = num_x
        self.num_y = num_y
        super().__init__(
            f"Map {width}x{height} cannot be divided into {num_x}x{num_y} tiles"
        )


class NoWaterSourceError(MapGenError):
    """Raised when corner elevations cannot be seeded from any water corner."""

    pass


class MeshInvariantError(MapGenError):
    """Raised when a generated mesh fails post-generation validation."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        summary = "; ".join(errors[:5])
        if len(errors) > 5:
            summary += f" (+{len(errors) - 5} more)"
        super().__init__(f"Mesh failed validation: {summary}")
