"""Command-line interface for map generation."""

import argparse
import logging
import sys
import time

import numpy as np

from ..biome_types import BiomeType
from ..mesh import TileMesh


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate a procedural tile map and print a summary"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Preset name under configs/ or path to a TOML file",
    )
    parser.add_argument("--width", type=int, default=None, help="Map width")
    parser.add_argument("--height", type=int, default=None, help="Map height")
    parser.add_argument("--num-x", type=int, default=None, help="Tiles along x")
    parser.add_argument("--num-y", type=int, default=None, help="Tiles along y")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument(
        "--shape",
        type=str,
        default=None,
        choices=["radial", "simplex", "fractal", "periodic", "cellular"],
        help="Land shape strategy",
    )
    parser.add_argument(
        "--no-rivers", action="store_true", help="Skip river tracing"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for map generation."""
    args = build_parser().parse_args(argv)

    # Configure logging
    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    # Import here to avoid slow startup for --help
    from ..config import find_config, load_config
    from ..exceptions import MapGenError
    from .config import LandShapeKind, MapConfig
    from .generator import generate_map

    try:
        config = load_config(find_config(args.config)) if args.config else MapConfig()
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    overrides = {
        "width": args.width,
        "height": args.height,
        "num_x": args.num_x,
        "num_y": args.num_y,
        "seed": args.seed,
    }
    config = config.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )
    if args.shape is not None:
        land_shape = config.land_shape.model_copy(
            update={"kind": LandShapeKind(args.shape)}
        )
        config = config.model_copy(update={"land_shape": land_shape})
    if args.no_rivers:
        rivers = config.rivers.model_copy(update={"enabled": False})
        config = config.model_copy(update={"rivers": rivers})

    print(
        f"Generating {config.width}x{config.height} map "
        f"({config.num_x}x{config.num_y} tiles, {config.land_shape.kind.value}) "
        f"with seed {config.seed}"
    )
    print()

    start_time = time.time()
    try:
        mesh = generate_map(config)
    except MapGenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    gen_time = time.time() - start_time

    print()
    print(f"Generation complete in {gen_time:.2f}s")
    print(_summarize(mesh))
    return 0


def _summarize(mesh: TileMesh) -> str:
    sites = mesh.sites
    ocean = sites.ocean
    lines = [
        f"Grid: {mesh.num_x}x{mesh.num_y} tiles of {mesh.tile_width}x{mesh.tile_height}",
        f"Sites: {len(sites)}, corners: {len(mesh.corners)}, edges: {len(mesh.edges)}",
        f"Ocean sites: {int(ocean.sum())}",
        f"Inland water sites: {int((sites.water & ~ocean).sum())}",
        f"Coast sites: {int(sites.coast.sum())}",
        f"Land sites: {int((~sites.water).sum())}",
        f"River corners: {int((mesh.corners.river > 0).sum())}",
        "Biomes:",
    ]
    counts = np.bincount(sites.biome.astype(np.intp), minlength=len(BiomeType))
    for biome in BiomeType:
        if counts[biome] > 0:
            lines.append(f"  {biome.name.lower()}: {int(counts[biome])}")
    return "\n".join(lines)


if __name__ == "__main__":
    sys.exit(main())
