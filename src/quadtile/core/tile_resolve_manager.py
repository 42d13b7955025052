import argparse
import logging
import os
from typing import Dict, Any, List, Optional, Iterable

from quadtile.core.view_resolver import AdaptiveViewResolver
from quadtile.adapters.memory_adapter import InMemoryStatusAdapter
from quadtile.exceptions.quadtile_exceptions import ConfigurationError, ValidationError
from quadtile.infrastructure.logging import LoggingManager
from quadtile.models.tile import Tile, Bounds
from quadtile.services.config_service import ConfigService, DEFAULT_ZOOM
from quadtile.services.tile_status_service import TileStatusService
from quadtile.utils.tile_analyzer import TileAnalyzer
from quadtile.utils.tile_calculator import TileCalculator

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"


class TileResolveManager:
    """Main manager class for resolving viewport tiles"""

    def __init__(self, config_path: Optional[str] = None):
        self.config_service = ConfigService()
        self.config_path = config_path
        # loaded on first use, after any --config flag has been applied
        self._config: Optional[Dict[str, Any]] = None
        self._resolver: Optional[AdaptiveViewResolver] = None

    @property
    def config(self) -> Dict[str, Any]:
        if self._config is None:
            self._configure(self.config_path)
        return self._config

    @property
    def resolver(self) -> AdaptiveViewResolver:
        if self._resolver is None:
            self._configure(self.config_path)
        return self._resolver

    def _configure(self, config_path: Optional[str]) -> None:
        config = self._load_config(config_path)
        resolver_config = self.config_service.get_resolver_config(config)
        self.config_path = config_path
        self._config = config
        self._resolver = AdaptiveViewResolver(
            seed_zoom_offset=resolver_config.seed_zoom_offset,
            max_overshoot=resolver_config.max_overshoot
        )

    def _load_config(self, config_path: Optional[str]) -> Dict[str, Any]:
        if config_path is not None:
            return self.config_service.load_config(config_path)
        if os.path.exists(DEFAULT_CONFIG_PATH):
            return self.config_service.load_config(DEFAULT_CONFIG_PATH)
        logger.debug("No config file, using an empty configuration")
        return {'views': {}, 'sources': []}

    def list_views(self) -> None:
        """List configured views"""
        print("Available views:")
        for name, view_data in self.config['views'].items():
            description = view_data.get('description', 'No description')
            zoom = view_data.get('zoom', DEFAULT_ZOOM)
            print(f"  {name} (zoom {zoom}): {description}")

    def list_sources(self) -> None:
        """List configured tile status sources"""
        print("Available sources:")
        for source in self.config['sources']:
            location = source.get('path', '-')
            print(f"  {source['name']} ({source.get('type', 'unknown')}): {location}")

    def build_status(self, source_names: Optional[List[str]] = None,
                     failed: Iterable[Tile] = ()) -> TileStatusService:
        """Build the load-status predicate from configured sources"""
        status = TileStatusService()
        for source_config in self.config_service.get_sources(self.config, source_names):
            status.register_source(source_config)

        if not status.list_sources():
            # Nothing to consult: treat everything not explicitly failed as loaded
            status.add_source(InMemoryStatusAdapter())

        for tile in failed:
            status.mark_failed(tile)
        return status

    def resolve(self, bounds: Bounds, zoom: int, source_names: Optional[List[str]] = None,
                failed: Iterable[Tile] = ()) -> List[Tile]:
        """Resolve tiles for a bounds at a target zoom"""
        if zoom < 0:
            raise ValidationError(f"Zoom must be non-negative, got {zoom}")

        status = self.build_status(source_names, failed)
        return self.resolver.resolve(bounds, zoom, status)

    def resolve_view(self, view_name: str, zoom: Optional[int] = None,
                     source_names: Optional[List[str]] = None,
                     failed: Iterable[Tile] = ()) -> List[Tile]:
        """Resolve tiles for a configured view"""
        view = self.config_service.get_view(self.config, view_name)
        target_zoom = view.zoom if zoom is None else zoom
        return self.resolve(view.bounds, target_zoom, source_names, failed)

    @staticmethod
    def _parse_failed(values: Optional[List[str]]) -> List[Tile]:
        tiles = []
        for value in values or []:
            try:
                tiles.append(Tile.parse(value))
            except ValueError:
                raise ValidationError(f"Invalid tile '{value}', expected z/x/y")
        return tiles

    def run_from_command_line(self, argv: Optional[List[str]] = None) -> None:
        """Run tile resolution command-line interface"""
        parser = argparse.ArgumentParser(
            description='Resolve the map tiles needed to draw a viewport, refining where tiles failed to load.',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog=(
                'Examples:\n\n'
                '1) Configured view:\n'
                '   quadtile --view istanbul\n\n'
                '2) Custom BBOX (lon/lat order) with known failed tiles:\n'
                '   quadtile --bbox 28.5 40.8 29.5 41.2 --zoom 12 --failed 9/297/191\n\n'
                '3) Check against a local MBTiles cache only:\n'
                '   quadtile --view istanbul --source offline_mbtiles --summary\n\n'
                'Notes:\n'
                '- Views crossing the antimeridian are not supported.\n'
                '- Output is one z/x/y per line.'
            )
        )
        parser.add_argument('--config', help='Path to JSON config (default: ./config.json if present)')
        parser.add_argument('--view', help='View name from config -> views')
        parser.add_argument('--bbox', nargs=4, type=float, metavar=('min_lon', 'min_lat', 'max_lon', 'max_lat'),
                            help='Custom viewport BBOX (lon/lat)')
        parser.add_argument('--zoom', type=int, help=f'Target zoom level (default: view zoom or {DEFAULT_ZOOM})')
        parser.add_argument('--source', action='append', dest='sources',
                            help='Status source name from config -> sources (repeatable)')
        parser.add_argument('--failed', action='append', metavar='z/x/y',
                            help='Treat this tile as failed to load (repeatable)')
        parser.add_argument('--metres', type=float,
                            help='Also print how many pixels this ground distance spans at the view centre')
        parser.add_argument('--summary', action='store_true', help='Print tile counts per zoom and coverage bbox')
        parser.add_argument('--list-views', action='store_true', help='List configured views')
        parser.add_argument('--list-sources', action='store_true', help='List configured status sources')
        parser.add_argument('--log-level', help='Override config -> logging.level')

        args = parser.parse_args(argv)

        if args.config:
            self._configure(args.config)

        logging_config = dict(self.config.get('logging', {}))
        if args.log_level:
            logging_config['level'] = args.log_level
        LoggingManager.setup_logging({'logging': logging_config})

        if args.list_views:
            self.list_views()
            return

        if args.list_sources:
            self.list_sources()
            return

        if bool(args.view) == bool(args.bbox):
            raise ConfigurationError("Provide exactly one of --view or --bbox")

        failed = self._parse_failed(args.failed)

        if args.view:
            view = self.config_service.get_view(self.config, args.view)
            bounds = view.bounds
            zoom = view.zoom if args.zoom is None else args.zoom
        else:
            bounds = ConfigService.validate_bbox(args.bbox)
            zoom = DEFAULT_ZOOM if args.zoom is None else args.zoom

        tiles = self.resolve(bounds, zoom, args.sources, failed)
        for tile in tiles:
            print(tile)

        if args.summary:
            summary = TileAnalyzer.summarize(tiles)
            print(f"\nTotal tiles: {summary['total_tiles']}")
            for tile_zoom, count in summary['by_zoom'].items():
                print(f"  zoom {tile_zoom}: {count}")
            if summary['coverage_bbox']:
                print("Coverage bbox: [" + ", ".join(f"{v:.6f}" for v in summary['coverage_bbox']) + "]")

        if args.metres is not None:
            pixels = TileCalculator.metres_to_pixels(zoom, args.metres, bounds.center)
            print(f"\n{args.metres:g} m = {pixels:.2f} px at zoom {zoom}")
