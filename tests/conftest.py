"""Shared pytest fixtures for quadtile tests."""

import json
import sqlite3

import pytest

from quadtile.models.tile import Bounds


@pytest.fixture
def world_bounds():
    """Bounds covering the Web Mercator world (minus the polar caps)."""
    return Bounds.from_bbox([-180, -85, 180, 85])


@pytest.fixture
def istanbul_bounds():
    return Bounds.from_bbox([28.5, 40.8, 29.5, 41.2])


@pytest.fixture
def make_mbtiles(tmp_path):
    """Create an MBTiles file holding the given (z, x, row) entries."""
    def _make(name, rows, scheme=None, layout='tiles'):
        path = tmp_path / name
        with sqlite3.connect(path) as conn:
            conn.execute("CREATE TABLE metadata (name TEXT, value TEXT)")
            conn.execute("INSERT INTO metadata VALUES ('minzoom', '0'), ('maxzoom', '4')")
            if scheme is not None:
                conn.execute("INSERT INTO metadata VALUES ('scheme', ?)", (scheme,))
            if layout == 'tiles':
                conn.execute("CREATE TABLE tiles (zoom_level INTEGER, tile_column INTEGER, "
                             "tile_row INTEGER, tile_data BLOB)")
                conn.executemany("INSERT INTO tiles VALUES (?, ?, ?, ?)",
                                 [(z, x, row, b"tile") for z, x, row in rows])
            else:
                conn.execute("CREATE TABLE images (tile_data BLOB, tile_id TEXT)")
                conn.execute("CREATE TABLE map (zoom_level INTEGER, tile_column INTEGER, "
                             "tile_row INTEGER, tile_id TEXT)")
                for z, x, row in rows:
                    tile_id = f"{z}-{x}-{row}"
                    conn.execute("INSERT INTO images VALUES (?, ?)", (b"tile", tile_id))
                    conn.execute("INSERT INTO map VALUES (?, ?, ?, ?)", (z, x, row, tile_id))
        return str(path)
    return _make


@pytest.fixture
def write_config(tmp_path):
    """Write a JSON config into tmp_path and return its path."""
    def _write(config, name='config.json'):
        path = tmp_path / name
        path.write_text(json.dumps(config), encoding='utf-8')
        return str(path)
    return _write
