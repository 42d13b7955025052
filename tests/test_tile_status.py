from pathlib import Path

import pytest

from quadtile.adapters.directory_adapter import DirectoryStatusAdapter
from quadtile.adapters.mbtiles_adapter import MBTilesStatusAdapter
from quadtile.adapters.memory_adapter import InMemoryStatusAdapter
from quadtile.exceptions.quadtile_exceptions import TileSourceError
from quadtile.models.tile import Tile
from quadtile.services.tile_status_service import TileStatusService


def write_tile(root: Path, tile: Tile, payload: bytes, extension: str = "png") -> None:
    tile_dir = root / str(tile.z) / str(tile.x)
    tile_dir.mkdir(parents=True, exist_ok=True)
    (tile_dir / f"{tile.y}.{extension}").write_bytes(payload)


class TestInMemoryStatusAdapter:

    def test_mark_failed_and_loaded(self):
        status = InMemoryStatusAdapter()
        tile = Tile(3, 2, 2)

        assert not status.is_failed(tile)
        status.mark_failed(tile)
        assert status.is_failed(tile)
        assert status(tile)
        status.mark_loaded(tile)
        assert not status.is_failed(tile)

    def test_failed_tiles_from_config(self):
        status = InMemoryStatusAdapter({'name': 'm', 'type': 'memory', 'failed': ['2/3/1']})

        assert status.is_failed(Tile(3, 1, 2))
        assert len(status) == 1

    @pytest.mark.parametrize("entry", ["1/2", "a/b/c", "2/3/1/4", 5])
    def test_malformed_failed_tile_in_config(self, entry):
        with pytest.raises(TileSourceError, match="expected z/x/y"):
            InMemoryStatusAdapter({'name': 'm', 'type': 'memory', 'failed': ['2/3/1', entry]})

    def test_malformed_failed_tile_through_service(self):
        with pytest.raises(TileSourceError):
            TileStatusService().register_source({'name': 'm', 'type': 'memory', 'failed': ['1/2']})


class TestDirectoryStatusAdapter:

    def test_missing_and_empty_files_are_failed(self, tmp_path):
        write_tile(tmp_path, Tile(1, 0, 1), b"\x89PNG\r\n\x1a\nvalid")
        write_tile(tmp_path, Tile(0, 1, 1), b"")
        status = DirectoryStatusAdapter({'name': 'cache', 'type': 'directory', 'path': str(tmp_path)})

        assert status.initialize()
        assert not status.is_failed(Tile(1, 0, 1))
        assert status.is_failed(Tile(0, 1, 1))
        assert status.is_failed(Tile(1, 1, 1))

    def test_extension(self, tmp_path):
        write_tile(tmp_path, Tile(1, 0, 1), b"pbf", extension="pbf")
        status = DirectoryStatusAdapter({'name': 'vec', 'path': str(tmp_path), 'extension': 'pbf'})

        assert not status.is_failed(Tile(1, 0, 1))

    def test_missing_directory(self, tmp_path):
        status = DirectoryStatusAdapter({'name': 'gone', 'path': str(tmp_path / 'nope')})

        assert not status.initialize()


class TestMBTilesStatusAdapter:

    def test_tms_rows_are_flipped(self, make_mbtiles):
        # XYZ tile 1/1/0 is TMS row 1
        path = make_mbtiles('tms.mbtiles', [(1, 1, 1)])
        status = MBTilesStatusAdapter({'name': 'offline', 'type': 'mbtiles', 'path': path})

        assert status.initialize()
        assert status.has_tile(Tile(1, 0, 1))
        assert not status.is_failed(Tile(1, 0, 1))
        assert status.is_failed(Tile(1, 1, 1))
        assert status.get_zoom_range() == (0, 4)

    def test_xyz_scheme(self, make_mbtiles):
        path = make_mbtiles('xyz.mbtiles', [(1, 1, 1)], scheme='xyz')
        status = MBTilesStatusAdapter({'name': 'offline', 'path': path})

        assert status.initialize()
        assert status.has_tile(Tile(1, 1, 1))
        assert not status.has_tile(Tile(1, 0, 1))

    def test_images_and_map_layout(self, make_mbtiles):
        path = make_mbtiles('dedup.mbtiles', [(2, 3, 1)], scheme='xyz', layout='map')
        status = MBTilesStatusAdapter({'name': 'offline', 'path': path})

        assert status.initialize()
        assert status.has_tile(Tile(3, 1, 2))
        assert status.is_failed(Tile(3, 2, 2))

    def test_invalid_file(self, tmp_path):
        path = tmp_path / 'broken.mbtiles'
        path.write_bytes(b"not a database")
        status = MBTilesStatusAdapter({'name': 'broken', 'path': str(path)})

        assert not status.initialize()

    def test_lookup_before_initialize(self, make_mbtiles):
        status = MBTilesStatusAdapter({'name': 'offline', 'path': make_mbtiles('a.mbtiles', [])})

        with pytest.raises(TileSourceError):
            status.is_failed(Tile(0, 0, 0))


class TestTileStatusService:

    def test_no_sources_means_everything_failed(self):
        assert TileStatusService().is_failed(Tile(0, 0, 0))

    def test_loaded_in_any_source(self, tmp_path, make_mbtiles):
        cache = tmp_path / 'cache'
        write_tile(cache, Tile(0, 0, 1), b"png")
        mbtiles = make_mbtiles('offline.mbtiles', [(1, 1, 1)])

        service = TileStatusService()
        assert service.register_source({'name': 'cache', 'type': 'directory', 'path': str(cache)})
        assert service.register_source({'name': 'offline', 'type': 'mbtiles', 'path': mbtiles})

        assert service.list_sources() == ['cache', 'offline']
        assert not service.is_failed(Tile(0, 0, 1))
        assert not service.is_failed(Tile(1, 0, 1))
        assert service.is_failed(Tile(1, 1, 1))

    def test_unavailable_source_is_skipped(self, tmp_path):
        service = TileStatusService()

        assert not service.register_source({'name': 'gone', 'type': 'directory', 'path': str(tmp_path / 'x')})
        assert service.get_source('gone') is None

    def test_unsupported_type(self):
        with pytest.raises(TileSourceError):
            TileStatusService().register_source({'name': 'web', 'type': 'http'})

    def test_forced_failures_override_sources(self):
        service = TileStatusService()
        service.add_source(InMemoryStatusAdapter())
        service.mark_failed(Tile(0, 0, 1))

        assert service(Tile(0, 0, 1))
        assert not service(Tile(1, 0, 1))
