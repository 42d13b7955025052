import math
from typing import List, Optional
from shapely.geometry import shape
from shapely.prepared import prep

from quadtile.models.tile import Tile, LatLng, Bounds, ROOT_TILE


EARTH_CIRCUMFERENCE = 40075016.686  # metres, equatorial
TILE_SIZE_BITS = 8  # 256 px tiles


class TileCalculator:
    """Utility class for Web Mercator tile coordinate calculations"""

    @staticmethod
    def latlng2tile(point: LatLng, zoom: int) -> Tile:
        """Convert lat/lng to the tile containing it at the given zoom"""
        lat_rad = math.radians(point.lat)
        n = 2.0 ** zoom
        xtile = math.floor((point.lng + 180.0) / 360.0 * n)
        ytile = math.floor((1.0 - math.asinh(math.tan(lat_rad)) / math.pi) / 2.0 * n)
        xtile, ytile = TileCalculator._snap_to_grid(point, xtile, ytile, zoom)
        return Tile(xtile, max(ytile, 0), zoom)

    @staticmethod
    def _snap_to_grid(point: LatLng, xtile: int, ytile: int, zoom: int):
        """Move a floored index by one where float error put it in a neighbour.

        Rounding error grows with 2**zoom, so the candidate is checked against
        the grid lines tile2latlng produces. A point on a grid line belongs to
        the tile starting there.
        """
        n = 1 << zoom
        if 0 <= xtile <= n:
            if TileCalculator.tile2latlng(Tile(xtile + 1, 0, zoom)).lng <= point.lng:
                xtile += 1
            elif TileCalculator.tile2latlng(Tile(xtile, 0, zoom)).lng > point.lng:
                xtile -= 1
        if 0 <= ytile <= n:
            # rows grow southward, so a larger row has a smaller top latitude
            if TileCalculator.tile2latlng(Tile(0, ytile + 1, zoom)).lat >= point.lat:
                ytile += 1
            elif TileCalculator.tile2latlng(Tile(0, ytile, zoom)).lat < point.lat:
                ytile -= 1
        return xtile, ytile

    @staticmethod
    def tile2latlng(tile: Tile) -> LatLng:
        """Convert tile to the lat/lng of its northwest corner"""
        n = 2.0 ** tile.z
        lng = tile.x / n * 360.0 - 180.0
        merc_y = math.pi - 2.0 * math.pi * tile.y / n
        lat = math.degrees(math.atan(math.sinh(merc_y)))
        return LatLng(lat, lng)

    @staticmethod
    def tile_bounds(tile: Tile) -> Bounds:
        """Return geographic bounds covered by a tile"""
        top_left = TileCalculator.tile2latlng(tile)
        bottom_right = TileCalculator.tile2latlng(Tile(tile.x + 1, tile.y + 1, tile.z))
        return Bounds(top_left, bottom_right)

    @staticmethod
    def _tile_range(bounds: Bounds, zoom: int):
        max_index = (1 << zoom) - 1
        corner_a = TileCalculator.latlng2tile(bounds.top_left, zoom)
        corner_b = TileCalculator.latlng2tile(bounds.bottom_right, zoom)

        min_x = max(0, min(corner_a.x, corner_b.x))
        max_x = min(max_index, max(corner_a.x, corner_b.x))
        min_y = max(0, min(corner_a.y, corner_b.y))
        max_y = min(max_index, max(corner_a.y, corner_b.y))
        return min_x, max_x, min_y, max_y

    @staticmethod
    def tiles_for_bounds(bounds: Bounds, zoom: int) -> List[Tile]:
        """Get every tile intersecting bounds at zoom, rows outer and columns inner"""
        if zoom == 0:
            return [ROOT_TILE]

        min_x, max_x, min_y, max_y = TileCalculator._tile_range(bounds, zoom)

        tiles = []
        for y in range(min_y, max_y + 1):
            for x in range(min_x, max_x + 1):
                tiles.append(Tile(x, y, zoom))

        return tiles

    @staticmethod
    def calculate_tile_count(bounds: Bounds, zoom: int) -> int:
        """Calculate number of tiles tiles_for_bounds would return"""
        if zoom == 0:
            return 1

        min_x, max_x, min_y, max_y = TileCalculator._tile_range(bounds, zoom)
        return max(0, max_x - min_x + 1) * max(0, max_y - min_y + 1)

    @staticmethod
    def tiles_for_polygon(polygon_geojson: dict, zoom: int,
                          bbox_hint: Optional[List[float]] = None) -> List[Tile]:
        """Get tiles intersecting a polygon (GeoJSON geometry dict). Uses bbox hint if provided to limit candidates."""
        poly = shape(polygon_geojson)
        poly = poly.buffer(0) if not poly.is_valid else poly
        prepared = prep(poly)

        if bbox_hint is None:
            bbox_hint = list(poly.bounds)

        candidates = TileCalculator.tiles_for_bounds(Bounds.from_bbox(bbox_hint), zoom)
        return [tile for tile in candidates
                if prepared.intersects(TileCalculator.tile_bounds(tile).to_polygon())]

    @staticmethod
    def bounds_intersect(first: Bounds, second: Bounds) -> bool:
        """Check whether two bounds overlap"""
        return first.intersects(second)

    @staticmethod
    def divide(tile: Tile) -> List[Tile]:
        """Split a tile into its four children at the next zoom level"""
        x, y, z = 2 * tile.x, 2 * tile.y, tile.z + 1
        return [
            Tile(x, y, z),
            Tile(x + 1, y, z),
            Tile(x, y + 1, z),
            Tile(x + 1, y + 1, z),
        ]

    @staticmethod
    def parent_of(tile: Tile) -> Tile:
        """Get the enclosing tile one zoom level up; the root tile is its own parent"""
        return Tile(tile.x // 2, tile.y // 2, TileCalculator.zoom_out(tile.z))

    @staticmethod
    def zoom_out(zoom: int) -> int:
        return max(zoom - 1, 0)

    @staticmethod
    def metres_per_pixel(zoom: int, lat: float) -> float:
        """Ground resolution at a latitude.

        Scales by |latitude| in radians rather than cos(latitude); existing
        overlays are calibrated against this approximation.
        """
        return EARTH_CIRCUMFERENCE * abs(math.radians(lat)) / 2 ** (zoom + TILE_SIZE_BITS)

    @staticmethod
    def metres_to_pixels(zoom: int, metres: float, centre: LatLng) -> float:
        """Convert a ground distance to screen pixels around the viewport centre"""
        resolution = TileCalculator.metres_per_pixel(zoom, centre.lat)
        if resolution == 0:
            # degenerate at the equator
            return 0.0 if metres == 0 else math.copysign(math.inf, metres)
        return metres / resolution
