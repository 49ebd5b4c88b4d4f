"""
Command-line entry point.

Usage:
    find-hikes map.txt
    find-hikes map.txt --parallel --workers 8
    find-hikes map.txt --plot routes.png
"""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

from hike import MAX_WORKERS, find_best_routes
from routes import Route
from terrain import GridLoadError, load_elevation_map

logger = logging.getLogger(__name__)


def format_routes(routes: Sequence[Route]) -> str:
    """Render best routes as text, one route per line, root first."""
    if not routes:
        return "no routes found!!"

    lines = [
        f"found {len(routes)} route(s) with length {routes[0].length} "
        f"and steep {routes[0].steepness}:",
        "",
    ]
    for route in routes:
        lines.append(" -> ".join(str(v) for v in route.path()))
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="find-hikes",
        description="Find the longest, steepest descending hikes in an elevation map.",
    )
    parser.add_argument("mapfile", nargs="?", help="map file to read")
    parser.add_argument("--parallel", action="store_true",
                        help="explore source cells on a thread pool")
    parser.add_argument("--workers", type=int, default=MAX_WORKERS,
                        help=f"thread pool size for --parallel (default {MAX_WORKERS})")
    parser.add_argument("--plot", metavar="FILE",
                        help="save a plot of the best routes to FILE")
    parser.add_argument("--debug", action="store_true",
                        help="enable debug logging")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args, extra = parser.parse_known_args(argv)

    if args.mapfile is None or extra:
        parser.print_usage()
        return 0
    if args.workers < 1:
        parser.error("--workers must be >= 1")

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        grid = load_elevation_map(args.mapfile)
    except (OSError, GridLoadError) as exc:
        print(f"could not read mapfile: {exc}")
        return 1

    routes = find_best_routes(
        grid, parallel=args.parallel, max_workers=args.workers, debug=args.debug,
    )
    print(format_routes(routes))

    if args.plot:
        import matplotlib
        matplotlib.use("Agg")
        from plotting import plot_routes, set_nature_style

        set_nature_style()
        fig, _ = plot_routes(grid, routes, annotate=grid.n_cells <= 400)
        fig.savefig(args.plot)
        logger.info("Saved route plot to %s", args.plot)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
