from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class Tile:
    """Slippy map tile index (column, row, zoom)"""
    x: int
    y: int
    z: int

    def is_valid(self) -> bool:
        """Check that x and y lie inside the grid for this zoom"""
        if self.z < 0:
            return False
        n = 1 << self.z
        return 0 <= self.x < n and 0 <= self.y < n

    def parent(self) -> 'Tile':
        """Get the enclosing tile one zoom level up"""
        from quadtile.utils.tile_calculator import TileCalculator
        return TileCalculator.parent_of(self)

    def children(self) -> List['Tile']:
        """Get the four tiles one zoom level down"""
        from quadtile.utils.tile_calculator import TileCalculator
        return TileCalculator.divide(self)

    def bounds(self) -> 'Bounds':
        """Get geographic bounds covered by this tile"""
        from quadtile.utils.tile_calculator import TileCalculator
        return TileCalculator.tile_bounds(self)

    def __str__(self) -> str:
        return f"{self.z}/{self.x}/{self.y}"

    @classmethod
    def parse(cls, text: str) -> 'Tile':
        """Parse a "z/x/y" string"""
        z, x, y = (int(part) for part in text.strip().split('/'))
        return cls(x, y, z)


ROOT_TILE = Tile(0, 0, 0)


@dataclass(frozen=True)
class LatLng:
    """Geographic point in degrees"""
    lat: float
    lng: float


@dataclass(frozen=True)
class Bounds:
    """Geographic rectangle given by its northwest and southeast corners.

    Views crossing the antimeridian are not supported: top_left.lng is
    expected to be <= bottom_right.lng. Such bounds can be built, and
    crosses_antimeridian() reports them, but tile enumeration covers the
    columns between the two longitudes instead of wrapping around.
    """
    top_left: LatLng
    bottom_right: LatLng

    @classmethod
    def from_bbox(cls, bbox: List[float]) -> 'Bounds':
        """Build bounds from [min_lon, min_lat, max_lon, max_lat]"""
        min_lon, min_lat, max_lon, max_lat = bbox
        return cls(LatLng(max_lat, min_lon), LatLng(min_lat, max_lon))

    def to_bbox(self) -> List[float]:
        """Return bounds as [min_lon, min_lat, max_lon, max_lat]"""
        return [self.top_left.lng, self.bottom_right.lat,
                self.bottom_right.lng, self.top_left.lat]

    @property
    def center(self) -> LatLng:
        return LatLng(
            (self.top_left.lat + self.bottom_right.lat) / 2,
            (self.top_left.lng + self.bottom_right.lng) / 2
        )

    def intersects(self, other: 'Bounds') -> bool:
        """Check whether two rectangles overlap (shared edges count)"""
        # latitude decreases downward, so top_left.lat is the larger value
        lat_overlap = (other.bottom_right.lat <= self.top_left.lat and
                       other.top_left.lat >= self.bottom_right.lat)
        lng_overlap = (other.top_left.lng <= self.bottom_right.lng and
                       other.bottom_right.lng >= self.top_left.lng)
        return lat_overlap and lng_overlap

    def crosses_antimeridian(self) -> bool:
        return self.top_left.lng > self.bottom_right.lng

    def to_polygon(self):
        """Return a shapely box in lon/lat order"""
        from shapely.geometry import box
        min_lon, min_lat, max_lon, max_lat = self.to_bbox()
        return box(min_lon, min_lat, max_lon, max_lat)
