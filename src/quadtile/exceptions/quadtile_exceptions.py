class QuadtileException(Exception):
    """Base exception for quadtile"""
    pass


class ConfigurationError(QuadtileException):
    """Configuration related errors"""
    pass


class ValidationError(QuadtileException):
    """Validation related errors"""
    pass


class TileSourceError(QuadtileException):
    """Tile status source related errors"""
    pass
