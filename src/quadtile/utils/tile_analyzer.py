from typing import Dict, Any, List, Tuple

from quadtile.models.tile import Tile, LatLng, Bounds
from quadtile.utils.tile_calculator import TileCalculator


class TileAnalyzer:
    """Utility class for summarizing resolved tile sets"""

    @staticmethod
    def count_by_zoom(tiles: List[Tile]) -> Dict[int, int]:
        """Count tiles per zoom level"""
        counts: Dict[int, int] = {}
        for tile in tiles:
            counts[tile.z] = counts.get(tile.z, 0) + 1
        return dict(sorted(counts.items()))

    @staticmethod
    def zoom_range(tiles: List[Tile]) -> Tuple[int, int]:
        """Get min and max zoom levels from tiles"""
        if not tiles:
            raise ValueError("No tiles provided")

        zooms = [t.z for t in tiles]
        return (min(zooms), max(zooms))

    @staticmethod
    def coverage_bounds(tiles: List[Tile]) -> Bounds:
        """Calculate the union of the tiles' geographic bounds"""
        if not tiles:
            raise ValueError("No tiles provided")

        north = float('-inf')
        west = float('inf')
        south = float('inf')
        east = float('-inf')

        for tile in tiles:
            bounds = TileCalculator.tile_bounds(tile)
            north = max(north, bounds.top_left.lat)
            west = min(west, bounds.top_left.lng)
            south = min(south, bounds.bottom_right.lat)
            east = max(east, bounds.bottom_right.lng)

        return Bounds(LatLng(north, west), LatLng(south, east))

    @staticmethod
    def summarize(tiles: List[Tile]) -> Dict[str, Any]:
        """Summarize a resolved tile list"""
        if not tiles:
            return {'total_tiles': 0, 'by_zoom': {}, 'zoom_range': None, 'coverage_bbox': None}

        return {
            'total_tiles': len(tiles),
            'by_zoom': TileAnalyzer.count_by_zoom(tiles),
            'zoom_range': TileAnalyzer.zoom_range(tiles),
            'coverage_bbox': TileAnalyzer.coverage_bounds(tiles).to_bbox()
        }
