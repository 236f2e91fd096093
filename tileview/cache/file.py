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

from tileview.cache import path
from tileview.cache.base import TileCacheBase, CacheBackendError
from tileview.util.fs import write_atomic, remove_file_if_exists

import logging
log = logging.getLogger('tileview.cache.file')


class FileCache(TileCacheBase):
    """
    This class is responsible to store and load the actual tile data.
    """
    def __init__(self, cache_dir, file_ext, directory_layout='tc'):
        """
        :param cache_dir: the path where the tile will be stored
        :param file_ext: the file extension that will be appended to
            each tile (e.g. 'png')
        """
        self.cache_dir = cache_dir
        self.file_ext = file_ext
        self.directory_layout = directory_layout
        self._tile_location, self._level_location = path.location_funcs(layout=directory_layout)

    def tile_location(self, index, create_dir=False):
        return self._tile_location(index, self.cache_dir, self.file_ext, create_dir=create_dir)

    def level_location(self, level):
        """
        Return the path where all tiles for `level` will be stored.

        >>> c = FileCache(cache_dir='/tmp/cache/', file_ext='png')
        >>> c.level_location(2).replace('\\\\', '/')
        '/tmp/cache/02'
        """
        return self._level_location(level, self.cache_dir)

    def is_cached(self, index):
        """
        Returns ``True`` if the tile data is present.
        """
        return os.path.exists(self.tile_location(index))

    def find(self, index):
        location = self.tile_location(index)
        try:
            with open(location, 'rb') as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise CacheBackendError('could not read %s: %s' % (location, e)) from e

    def add(self, index, data):
        """
        Store the `data` of the tile `index` at `FileCache.tile_location`.

        :raises CacheBackendError: if the tile could not be written
        """
        try:
            location = self.tile_location(index, create_dir=True)
            log.debug('writing %r to %s', tuple(index), location)
            write_atomic(location, data)
        except OSError as e:
            raise CacheBackendError('could not store tile %s in %s: %s' % (
                tuple(index), self.cache_dir, e)) from e

    def remove(self, index):
        return remove_file_if_exists(self.tile_location(index))

    def __repr__(self):
        return '%s(%r, %r, directory_layout=%r)' % (
            self.__class__.__name__, self.cache_dir, self.file_ext, self.directory_layout)
