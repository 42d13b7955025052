"""
Adaptive tile selection for a map viewport.

Starts from a coarse covering a few zoom levels above the target and
refines depth-first only where a tile has failed to load, so there is
always something on screen while finer tiles arrive.
"""

import logging
from typing import Callable, Iterator, List, Union

from quadtile.interfaces.tile_status import ITileStatus
from quadtile.models.tile import Tile, Bounds
from quadtile.utils.tile_calculator import TileCalculator

logger = logging.getLogger(__name__)

TileStatus = Union[Callable[[Tile], bool], ITileStatus]

DEFAULT_SEED_ZOOM_OFFSET = 3
DEFAULT_MAX_OVERSHOOT = 1


class AdaptiveViewResolver:
    """Resolve the tiles needed to draw a view at a target zoom"""

    def __init__(self, seed_zoom_offset: int = DEFAULT_SEED_ZOOM_OFFSET,
                 max_overshoot: int = DEFAULT_MAX_OVERSHOOT):
        self.seed_zoom_offset = seed_zoom_offset
        self.max_overshoot = max_overshoot

    def seed_zoom(self, target_zoom: int) -> int:
        """Zoom level of the initial coarse covering"""
        zoom = target_zoom
        for _ in range(self.seed_zoom_offset):
            zoom = TileCalculator.zoom_out(zoom)
        return zoom

    def resolve(self, view: Bounds, target_zoom: int, is_failed: TileStatus) -> List[Tile]:
        """Get tiles for view, refined wherever is_failed reports a failure"""
        tiles = list(self.iter_tiles(view, target_zoom, is_failed))
        logger.debug("Resolved %d tiles for target zoom %d", len(tiles), target_zoom)
        return tiles

    def iter_tiles(self, view: Bounds, target_zoom: int, is_failed: TileStatus) -> Iterator[Tile]:
        """Yield the same tiles as resolve(), lazily and in the same order"""
        if isinstance(is_failed, ITileStatus):
            is_failed = is_failed.is_failed

        seed_zoom = self.seed_zoom(target_zoom)
        seeds = TileCalculator.tiles_for_bounds(view, seed_zoom)
        logger.debug("Seeding %d tiles at zoom %d", len(seeds), seed_zoom)

        stop_zoom = target_zoom + self.max_overshoot
        for seed in seeds:
            yield from self._quad_divide(seed, view, stop_zoom, is_failed)

    def _quad_divide(self, tile: Tile, view: Bounds, stop_zoom: int,
                     is_failed: Callable[[Tile], bool]) -> Iterator[Tile]:
        if tile.z >= stop_zoom or not is_failed(tile):
            yield tile
            return

        for child in TileCalculator.divide(tile):
            if TileCalculator.tile_bounds(child).intersects(view):
                yield from self._quad_divide(child, view, stop_zoom, is_failed)


def tiles_for_view(view: Bounds, target_zoom: int, is_failed: TileStatus) -> List[Tile]:
    """Resolve view tiles with the default seed offset and overshoot"""
    return AdaptiveViewResolver().resolve(view, target_zoom, is_failed)
