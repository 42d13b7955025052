from dataclasses import dataclass

from quadtile.models.tile import Bounds


@dataclass
class ViewPreset:
    """Data model for a named viewport"""
    name: str
    bounds: Bounds
    zoom: int
    description: str = ""


@dataclass
class ResolverConfig:
    """Data model for resolver settings"""
    seed_zoom_offset: int = 3
    max_overshoot: int = 1
