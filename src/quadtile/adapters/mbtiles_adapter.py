import logging
import sqlite3
from typing import Dict, Any, Optional, Tuple

from quadtile.adapters.base_adapter import BaseAdapter
from quadtile.exceptions.quadtile_exceptions import TileSourceError
from quadtile.models.tile import Tile
from quadtile.utils.mbtiles_utils import MBTilesUtils

logger = logging.getLogger(__name__)


class MBTilesStatusAdapter(BaseAdapter):
    """Status source for tiles stored in an MBTiles database.

    A tile counts as failed when no row exists for it.
    """
    
    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.file_path = config.get('path', '')
        self.is_tms = True
        self._query: Optional[str] = None
        self._zoom_range: Optional[Tuple[int, int]] = None
    
    def initialize(self) -> bool:
        """Initialize the MBTiles adapter"""
        if not MBTilesUtils.validate_mbtiles_file(self.file_path):
            logger.warning("Not a valid MBTiles file for source %s: %s", self.name, self.file_path)
            return False
        
        try:
            metadata = MBTilesUtils.get_mbtiles_metadata(self.file_path)
            self._zoom_range = MBTilesUtils.get_mbtiles_zoom_range(self.file_path)
        except ValueError as e:
            logger.warning("Failed to initialize MBTiles source %s: %s", self.name, e)
            return False
        
        # MBTiles rows are TMS unless the file says otherwise
        self.is_tms = metadata.get('scheme', 'tms').lower() == 'tms'
        
        tables = MBTilesUtils.list_tables(self.file_path)
        if 'tiles' in tables:
            self._query = ("SELECT 1 FROM tiles "
                           "WHERE zoom_level = ? AND tile_column = ? AND tile_row = ? LIMIT 1")
        else:
            self._query = ("SELECT 1 FROM map "
                           "WHERE zoom_level = ? AND tile_column = ? AND tile_row = ? LIMIT 1")
        return True
    
    def get_zoom_range(self) -> Optional[Tuple[int, int]]:
        """Get available zoom range from metadata"""
        return self._zoom_range
    
    def has_tile(self, tile: Tile) -> bool:
        """Check whether the database stores this tile"""
        if self._query is None:
            raise TileSourceError(f"MBTiles source {self.name} is not initialized")
        
        row = MBTilesUtils.flip_y(tile.y, tile.z) if self.is_tms else tile.y
        try:
            with sqlite3.connect(self.file_path) as conn:
                cursor = conn.cursor()
                cursor.execute(self._query, (tile.z, tile.x, row))
                return cursor.fetchone() is not None
        except sqlite3.DatabaseError as e:
            raise TileSourceError(f"Failed to look up tile {tile} in {self.file_path}: {e}")
    
    def is_failed(self, tile: Tile) -> bool:
        return not self.has_tile(tile)
