#!/usr/bin/env python3
"""
Quadtile - Main Entry Point
Resolve the slippy map tiles needed to draw a viewport
"""

import sys
import logging
from typing import List, Optional

from quadtile.core.tile_resolve_manager import TileResolveManager
from quadtile.exceptions.quadtile_exceptions import QuadtileException
from quadtile.infrastructure.logging import LoggingManager


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the tile resolver application"""
    try:
        # Setup logging (defaults); the config may override it later
        LoggingManager.setup_logging({})
        logger = logging.getLogger(__name__)
        
        logger.debug("Starting quadtile")
        
        manager = TileResolveManager()
        manager.run_from_command_line(argv)
        
    except KeyboardInterrupt:
        print("\nInterrupted by user.", file=sys.stderr)
        sys.exit(1)
    except QuadtileException as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
