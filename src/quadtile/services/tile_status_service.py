import logging
from typing import Dict, Any, List, Optional

from quadtile.adapters.base_adapter import BaseAdapter
from quadtile.adapters.directory_adapter import DirectoryStatusAdapter
from quadtile.adapters.mbtiles_adapter import MBTilesStatusAdapter
from quadtile.adapters.memory_adapter import InMemoryStatusAdapter
from quadtile.exceptions.quadtile_exceptions import TileSourceError
from quadtile.interfaces.tile_status import ITileStatus
from quadtile.models.tile import Tile

logger = logging.getLogger(__name__)


class TileStatusService(ITileStatus):
    """Combines registered status sources into one load-status predicate.

    A tile is failed unless at least one registered source has it.
    With no sources registered every tile is failed. Tiles passed to
    mark_failed() are failed whatever the sources say.
    """
    
    ADAPTERS = {
        'memory': InMemoryStatusAdapter,
        'directory': DirectoryStatusAdapter,
        'mbtiles': MBTilesStatusAdapter,
    }
    
    def __init__(self):
        self.sources: Dict[str, BaseAdapter] = {}
        self._forced = InMemoryStatusAdapter({'name': 'forced', 'type': 'memory'})
    
    def register_source(self, source_config: Dict[str, Any]) -> bool:
        """Register a status source from its config entry"""
        source_type = source_config.get('type', '')
        source_name = source_config.get('name', '')
        
        adapter_class = self.ADAPTERS.get(source_type)
        if adapter_class is None:
            raise TileSourceError(f"Unsupported source type: {source_type}")
        
        adapter = adapter_class(source_config)
        if not adapter.initialize():
            logger.warning("Skipping unavailable source: %s", source_name)
            return False
        
        self.add_source(adapter)
        return True
    
    def add_source(self, adapter: BaseAdapter) -> None:
        """Register an already built adapter"""
        self.sources[adapter.get_name()] = adapter
        logger.debug("Registered %s source %s", adapter.get_source_type(), adapter.get_name())
    
    def get_source(self, source_name: str) -> Optional[BaseAdapter]:
        """Get a registered source"""
        return self.sources.get(source_name)
    
    def list_sources(self) -> List[str]:
        """List all registered sources"""
        return list(self.sources.keys())
    
    def mark_failed(self, tile: Tile) -> None:
        """Force a tile to be reported as failed"""
        self._forced.mark_failed(tile)
    
    def is_failed(self, tile: Tile) -> bool:
        if self._forced.is_failed(tile):
            return True
        return all(source.is_failed(tile) for source in self.sources.values())
