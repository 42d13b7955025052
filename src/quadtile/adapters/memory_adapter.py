from typing import Dict, Any, Iterable, Optional, Set

from quadtile.adapters.base_adapter import BaseAdapter
from quadtile.exceptions.quadtile_exceptions import TileSourceError
from quadtile.models.tile import Tile


class InMemoryStatusAdapter(BaseAdapter):
    """Status source backed by an explicit set of failed tiles"""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 failed: Iterable[Tile] = ()):
        super().__init__(config or {'name': 'memory', 'type': 'memory'})
        self._failed: Set[Tile] = set(failed)
        for text in self.config.get('failed', []):
            try:
                self._failed.add(Tile.parse(text))
            except (ValueError, AttributeError):
                raise TileSourceError(
                    f"Invalid failed tile {text!r} in source {self.get_name()}, expected z/x/y")
    
    def initialize(self) -> bool:
        return True
    
    def mark_failed(self, tile: Tile) -> None:
        self._failed.add(tile)
    
    def mark_loaded(self, tile: Tile) -> None:
        self._failed.discard(tile)
    
    def is_failed(self, tile: Tile) -> bool:
        return tile in self._failed
    
    def __len__(self) -> int:
        return len(self._failed)
