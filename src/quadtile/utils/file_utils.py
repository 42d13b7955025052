import os


class FileUtils:
    """Utility class for tile file lookups"""
    
    @staticmethod
    def get_tile_path(root_dir: str, zoom: int, x: int, y: int, extension: str) -> str:
        """Generate tile file path in <root>/<z>/<x>/<y>.<ext> layout"""
        return os.path.join(root_dir, str(zoom), str(x), f"{y}.{extension}")
    
    @staticmethod
    def get_file_size(file_path: str) -> int:
        """Get file size in bytes, 0 when missing"""
        return os.path.getsize(file_path) if os.path.isfile(file_path) else 0
