import logging
import os
from typing import Dict, Any

from quadtile.adapters.base_adapter import BaseAdapter
from quadtile.models.tile import Tile
from quadtile.utils.file_utils import FileUtils

logger = logging.getLogger(__name__)


class DirectoryStatusAdapter(BaseAdapter):
    """Status source for tiles cached on disk as <root>/<z>/<x>/<y>.<ext>.

    A tile counts as failed when its file is missing or zero bytes.
    """
    
    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.root_dir = config.get('path', '')
        self.extension = config.get('extension', 'png')
    
    def initialize(self) -> bool:
        """Check that the tile directory exists"""
        if not self.root_dir or not os.path.isdir(self.root_dir):
            logger.warning("Tile directory not found for source %s: %s", self.name, self.root_dir)
            return False
        return True
    
    def is_failed(self, tile: Tile) -> bool:
        tile_path = FileUtils.get_tile_path(self.root_dir, tile.z, tile.x, tile.y, self.extension)
        return FileUtils.get_file_size(tile_path) == 0
