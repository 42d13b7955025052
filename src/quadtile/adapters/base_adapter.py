from abc import abstractmethod
from typing import Dict, Any

from quadtile.interfaces.tile_status import ITileStatus


class BaseAdapter(ITileStatus):
    """Base adapter class for all tile status sources"""
    
    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.name = config.get('name', 'unknown')
        self.source_type = config.get('type', 'unknown')
    
    @abstractmethod
    def initialize(self) -> bool:
        """Initialize the adapter"""
        pass
    
    def get_name(self) -> str:
        """Get adapter name"""
        return self.name
    
    def get_source_type(self) -> str:
        """Get source type"""
        return self.source_type
