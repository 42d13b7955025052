import json
import os
from typing import Dict, Any, List, Optional

from quadtile.exceptions.quadtile_exceptions import ConfigurationError, ValidationError
from quadtile.interfaces.tile_status import IConfigLoader
from quadtile.models.tile import Bounds
from quadtile.models.view_preset import ViewPreset, ResolverConfig


DEFAULT_ZOOM = 10


class ConfigService(IConfigLoader):
    """Service for loading and validating configuration"""
    
    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from JSON file"""
        if not os.path.exists(config_path):
            raise ConfigurationError(f"Config file {config_path} not found!")
        
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid JSON in {config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Error loading config: {e}")
        
        self.validate_config(config)
        return config
    
    def validate_config(self, config: Dict[str, Any]) -> bool:
        """Validate configuration structure"""
        if not isinstance(config, dict):
            raise ValidationError("Configuration must be a JSON object")
        
        required_keys = ['views', 'sources']
        for key in required_keys:
            if key not in config:
                raise ValidationError(f"Missing required key: {key}")
        
        if not isinstance(config['views'], dict):
            raise ValidationError("views must be a dictionary")
        
        if not isinstance(config['sources'], list):
            raise ValidationError("sources must be a list")
        
        for name, view_data in config['views'].items():
            if not isinstance(view_data, dict) or 'bbox' not in view_data:
                raise ValidationError(f"View '{name}' must define a bbox")
            self.validate_bbox(view_data['bbox'])
            if 'zoom' in view_data:
                self.validate_non_negative_int(f"View '{name}' zoom", view_data['zoom'])
        
        for key in ('seed_zoom_offset', 'max_overshoot'):
            if key in config:
                self.validate_non_negative_int(key, config[key])
        
        for source in config['sources']:
            if not isinstance(source, dict) or not source.get('name'):
                raise ValidationError("Every source needs a name")
        
        return True
    
    @staticmethod
    def validate_non_negative_int(label: str, value: Any) -> int:
        """Zoom levels and resolver offsets must be whole numbers >= 0"""
        if not isinstance(value, int) or isinstance(value, bool) or value < 0:
            raise ValidationError(f"{label} must be a non-negative integer, got {value!r}")
        return value
    
    @staticmethod
    def validate_bbox(bbox: List[float]) -> Bounds:
        """Validate [min_lon, min_lat, max_lon, max_lat] and build Bounds from it"""
        if not isinstance(bbox, (list, tuple)) or len(bbox) != 4:
            raise ValidationError(f"bbox must have 4 values, got {bbox!r}")
        if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in bbox):
            raise ValidationError(f"bbox values must be numbers, got {bbox!r}")
        
        min_lon, min_lat, max_lon, max_lat = bbox
        if min_lat > max_lat:
            raise ValidationError(f"bbox min_lat {min_lat} is above max_lat {max_lat}")
        if min_lon > max_lon:
            raise ValidationError(
                f"bbox min_lon {min_lon} is east of max_lon {max_lon}; "
                "views crossing the antimeridian are not supported")
        if min_lat < -90 or max_lat > 90:
            raise ValidationError(f"bbox latitudes must lie within [-90, 90], got {bbox!r}")
        
        return Bounds.from_bbox(list(bbox))
    
    def get_view(self, config: Dict[str, Any], view_name: str) -> ViewPreset:
        """Get view configuration by name"""
        views = config.get('views', {})
        if view_name not in views:
            raise ConfigurationError(f"View '{view_name}' not found")
        
        view_data = views[view_name]
        return ViewPreset(
            name=view_name,
            bounds=self.validate_bbox(view_data['bbox']),
            zoom=self.validate_non_negative_int(
                f"View '{view_name}' zoom", view_data.get('zoom', DEFAULT_ZOOM)),
            description=view_data.get('description', '')
        )
    
    def get_sources(self, config: Dict[str, Any], names: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        """Get source config entries, optionally restricted to the given names"""
        sources = config.get('sources', [])
        if not names:
            return list(sources)
        
        by_name = {source['name']: source for source in sources}
        missing = [name for name in names if name not in by_name]
        if missing:
            raise ConfigurationError(f"Unknown source(s): {', '.join(missing)}")
        return [by_name[name] for name in names]
    
    def get_resolver_config(self, config: Dict[str, Any]) -> ResolverConfig:
        """Get resolver tuning values"""
        return ResolverConfig(
            seed_zoom_offset=self.validate_non_negative_int(
                'seed_zoom_offset', config.get('seed_zoom_offset', 3)),
            max_overshoot=self.validate_non_negative_int(
                'max_overshoot', config.get('max_overshoot', 1))
        )
