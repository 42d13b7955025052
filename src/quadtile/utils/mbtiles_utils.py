import sqlite3
import os
from typing import List, Optional, Dict, Any, Tuple


class MBTilesUtils:
    """Utility class for MBTiles operations"""
    
    @staticmethod
    def list_tables(file_path: str) -> List[str]:
        """List table names in an MBTiles database"""
        with sqlite3.connect(file_path) as conn:
            cursor = conn.cursor()
            cursor.execute("SELECT name FROM sqlite_master WHERE type='table'")
            return [row[0] for row in cursor.fetchall()]
    
    @staticmethod
    def validate_mbtiles_file(file_path: str) -> bool:
        """Validate if file is a valid MBTiles database"""
        if not os.path.isfile(file_path):
            return False
        
        try:
            tables = MBTilesUtils.list_tables(file_path)
        except sqlite3.DatabaseError:
            return False
        
        if 'metadata' not in tables:
            return False
        
        # Standard layout (tiles) or deduplicated layout (images + map)
        return 'tiles' in tables or ('images' in tables and 'map' in tables)
    
    @staticmethod
    def get_mbtiles_metadata(file_path: str) -> Dict[str, Any]:
        """Get MBTiles metadata"""
        metadata = {}
        
        try:
            with sqlite3.connect(file_path) as conn:
                cursor = conn.cursor()
                cursor.execute("SELECT name, value FROM metadata")
                
                for row in cursor.fetchall():
                    metadata[row[0]] = row[1]
                
                return metadata
        except sqlite3.DatabaseError as e:
            raise ValueError(f"Failed to read MBTiles metadata: {e}")
    
    @staticmethod
    def get_mbtiles_zoom_range(file_path: str) -> Optional[Tuple[int, int]]:
        """Get MBTiles zoom range from metadata"""
        metadata = MBTilesUtils.get_mbtiles_metadata(file_path)
        min_zoom = metadata.get('minzoom')
        max_zoom = metadata.get('maxzoom')
        
        if min_zoom is not None and max_zoom is not None:
            return (int(min_zoom), int(max_zoom))
        
        return None
    
    @staticmethod
    def flip_y(y: int, zoom: int) -> int:
        """Convert between XYZ and TMS row numbering"""
        return (1 << zoom) - 1 - y
