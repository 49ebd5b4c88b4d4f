"""Longest descending hike search over integer elevation maps.

Modules
-------
terrain
    Cell/grid arena and the map-file loader.
adjacency
    Descending-edge graph (CSR) and source-cell flags.
explorer
    Depth-first exploration from one source cell.
routes
    Route type, route reconstruction, best-route selection.
hike
    End-to-end search, sequential or on a bounded thread pool.
plotting
    Elevation map with the best routes overlaid.
cli
    ``find-hikes`` command-line entry point.
"""

__version__ = "0.1.0"
