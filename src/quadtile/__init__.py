"""Slippy map tile selection for viewports, with adaptive refinement where tiles fail to load."""

from quadtile.models.tile import Tile, LatLng, Bounds, ROOT_TILE
from quadtile.interfaces.tile_status import ITileStatus
from quadtile.utils.tile_calculator import TileCalculator
from quadtile.core.view_resolver import AdaptiveViewResolver, tiles_for_view
from quadtile.exceptions.quadtile_exceptions import (
    QuadtileException, ConfigurationError, ValidationError, TileSourceError
)

__version__ = "0.1.0"

latlng2tile = TileCalculator.latlng2tile
tile2latlng = TileCalculator.tile2latlng
tile_bounds = TileCalculator.tile_bounds
tiles_for_bounds = TileCalculator.tiles_for_bounds
tiles_for_polygon = TileCalculator.tiles_for_polygon
divide = TileCalculator.divide
parent_of = TileCalculator.parent_of
zoom_out = TileCalculator.zoom_out
bounds_intersect = TileCalculator.bounds_intersect
metres_to_pixels = TileCalculator.metres_to_pixels

__all__ = [
    'Tile',
    'LatLng',
    'Bounds',
    'ROOT_TILE',
    'ITileStatus',
    'TileCalculator',
    'AdaptiveViewResolver',
    'tiles_for_view',
    'latlng2tile',
    'tile2latlng',
    'tile_bounds',
    'tiles_for_bounds',
    'tiles_for_polygon',
    'divide',
    'parent_of',
    'zoom_out',
    'bounds_intersect',
    'metres_to_pixels',
    'QuadtileException',
    'ConfigurationError',
    'ValidationError',
    'TileSourceError',
]
