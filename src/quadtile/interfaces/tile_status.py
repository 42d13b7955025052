from abc import ABC, abstractmethod
from typing import Dict, Any

from quadtile.models.tile import Tile


class ITileStatus(ABC):
    """Interface for tile load status lookups.

    Instances are callable so they can be passed wherever a plain
    ``Tile -> bool`` predicate is accepted.
    """

    @abstractmethod
    def is_failed(self, tile: Tile) -> bool:
        """True if the tile has failed to load"""
        pass

    def __call__(self, tile: Tile) -> bool:
        return self.is_failed(tile)


class IConfigLoader(ABC):
    """Interface for configuration loading"""

    @abstractmethod
    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from file"""
        pass

    @abstractmethod
    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate configuration"""
        pass
