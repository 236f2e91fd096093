# This file is part of the TileView project.
# Copyright (C) 2010 Omniscale <http://omniscale.de>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
import threading

import pytest

from tileview.cache.base import DummyCache, CacheBackendError
from tileview.cache.file import FileCache
from tileview.cache.memory import MemoryCache
from tileview.grid import TileIndex


class TileCacheTestBase(object):
    def create_cache(self):
        raise NotImplementedError

    @pytest.fixture(autouse=True)
    def init_cache(self, tmpdir):
        self.tmpdir = tmpdir
        self.cache = self.create_cache()

    def test_find_missing(self):
        assert self.cache.find(TileIndex(1, 2, 3)) is None
        assert not self.cache.is_cached(TileIndex(1, 2, 3))

    def test_add_find(self):
        self.cache.add(TileIndex(1, 2, 3), b'tile123')
        assert self.cache.find(TileIndex(1, 2, 3)) == b'tile123'
        assert self.cache.is_cached(TileIndex(1, 2, 3))
        assert self.cache.find(TileIndex(1, 2, 4)) is None

    def test_add_replaces(self):
        self.cache.add(TileIndex(1, 2, 3), b'old')
        self.cache.add(TileIndex(1, 2, 3), b'new')
        assert self.cache.find(TileIndex(1, 2, 3)) == b'new'

    def test_remove(self):
        self.cache.add(TileIndex(1, 2, 3), b'tile123')
        assert self.cache.remove(TileIndex(1, 2, 3))
        assert self.cache.find(TileIndex(1, 2, 3)) is None
        assert not self.cache.remove(TileIndex(1, 2, 3))

    def test_find_many(self):
        self.cache.add(TileIndex(0, 0, 1), b'a')
        self.cache.add(TileIndex(1, 0, 1), b'b')
        result = self.cache.find_many([TileIndex(0, 0, 1), TileIndex(1, 0, 1), TileIndex(1, 1, 1)])
        assert result == {TileIndex(0, 0, 1): b'a', TileIndex(1, 0, 1): b'b'}

    def test_concurrent_add(self):
        def add(col):
            for row in range(20):
                self.cache.add(TileIndex(col, row, 5), b'%d-%d' % (col, row))

        threads = [threading.Thread(target=add, args=(col, )) for col in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        for col in range(5):
            for row in range(20):
                assert self.cache.find(TileIndex(col, row, 5)) == b'%d-%d' % (col, row)


class TestMemoryCache(TileCacheTestBase):
    def create_cache(self):
        return MemoryCache()

    def test_len_clear(self):
        self.cache.add(TileIndex(0, 0, 0), b'x')
        assert len(self.cache) == 1
        self.cache.clear()
        assert len(self.cache) == 0

    def test_add_none(self):
        with pytest.raises(ValueError):
            self.cache.add(TileIndex(0, 0, 0), None)


class TestFileCache(TileCacheTestBase):
    def create_cache(self):
        self.cache_dir = self.tmpdir.join('cache').strpath
        return FileCache(self.cache_dir, 'png')

    def test_location(self):
        self.cache.add(TileIndex(1, 2, 3), b'tile123')
        location = os.path.join(self.cache_dir, '03', '000', '000', '001', '000', '000', '002.png')
        assert os.path.exists(location)
        with open(location, 'rb') as f:
            assert f.read() == b'tile123'

    def test_no_tmp_files(self):
        self.cache.add(TileIndex(1, 2, 3), b'tile123')
        level_dir = self.cache.level_location(3)
        for dirpath, dirnames, filenames in os.walk(level_dir):
            for filename in filenames:
                assert '.tmp-' not in filename

    @pytest.mark.parametrize('layout,path', [
        ('tc', ['03', '000', '000', '001', '000', '000', '002.png']),
        ('tms', ['3', '1', '2.png']),
        ('quadkey', ['021.png']),
        ('arcgis', ['L03', 'R00000002', 'C00000001.png']),
    ])
    def test_directory_layouts(self, layout, path):
        cache = FileCache(self.cache_dir, 'png', directory_layout=layout)
        assert cache.tile_location(TileIndex(1, 2, 3)) == os.path.join(self.cache_dir, *path)
        cache.add(TileIndex(1, 2, 3), b'tile')
        assert cache.find(TileIndex(1, 2, 3)) == b'tile'

    def test_quadkey_root_tile(self):
        cache = FileCache(self.cache_dir, 'png', directory_layout='quadkey')
        cache.add(TileIndex(0, 0, 0), b'root')
        assert cache.find(TileIndex(0, 0, 0)) == b'root'

    def test_unknown_layout(self):
        with pytest.raises(ValueError):
            FileCache(self.cache_dir, 'png', directory_layout='mp')

    def test_backend_errors(self):
        # a file where the cache directory should be
        self.tmpdir.join('cache').write('')
        with pytest.raises(CacheBackendError):
            self.cache.add(TileIndex(1, 2, 3), b'tile')
        with pytest.raises(CacheBackendError):
            self.cache.find(TileIndex(1, 2, 3))


class TestDummyCache(object):
    def test_never_cached(self):
        cache = DummyCache()
        cache.add(TileIndex(0, 0, 0), b'x')
        assert cache.find(TileIndex(0, 0, 0)) is None
        assert not cache.is_cached(TileIndex(0, 0, 0))
        assert not cache.remove(TileIndex(0, 0, 0))
