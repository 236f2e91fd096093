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

"""
Directory layouts of file caches.
"""
import os

from tileview.client.locator import tilecache_path, tms_path, quadkey, arcgiscache_path
from tileview.util.fs import ensure_directory


def location_funcs(layout):
    """
    Return the tile and level location functions for the `layout`.
    """
    if layout == 'tc':
        return tile_location_tc, level_location
    elif layout == 'tms':
        return tile_location_tms, level_location_tms
    elif layout == 'quadkey':
        return tile_location_quadkey, no_level_location
    elif layout == 'arcgis':
        return tile_location_arcgiscache, level_location_arcgiscache
    else:
        raise ValueError('unknown directory_layout "%s"' % layout)


def level_location(level, cache_dir):
    """
    Return the path where all tiles for `level` will be stored.

    >>> level_location(2, '/tmp/cache').replace('\\\\', '/')
    '/tmp/cache/02'
    """
    if isinstance(level, str):
        return os.path.join(cache_dir, level)
    else:
        return os.path.join(cache_dir, "%02d" % level)


def _location(cache_dir, path, file_ext, create_dir):
    location = os.path.join(cache_dir, *path.split('/')) + '.' + file_ext
    if create_dir:
        ensure_directory(location)
    return location


def tile_location_tc(index, cache_dir, file_ext, create_dir=False):
    """
    Return the location of the tile `index`.

    :param index: the `TileIndex`
    :param create_dir: if True, create all necessary directories
    :return: the full filename of the tile

    >>> from tileview.grid import TileIndex
    >>> tile_location_tc(TileIndex(3, 4, 2), '/tmp/cache', 'png').replace('\\\\', '/')
    '/tmp/cache/02/000/000/003/000/000/004.png'
    """
    return _location(cache_dir, tilecache_path(index), file_ext, create_dir)


def tile_location_tms(index, cache_dir, file_ext, create_dir=False):
    """
    >>> from tileview.grid import TileIndex
    >>> tile_location_tms(TileIndex(3, 4, 2), '/tmp/cache', 'png').replace('\\\\', '/')
    '/tmp/cache/2/3/4.png'
    """
    return _location(cache_dir, tms_path(index), file_ext, create_dir)


def level_location_tms(level, cache_dir):
    return level_location(str(level), cache_dir=cache_dir)


def tile_location_quadkey(index, cache_dir, file_ext, create_dir=False):
    """
    >>> from tileview.grid import TileIndex
    >>> tile_location_quadkey(TileIndex(3, 4, 2), '/tmp/cache', 'png').replace('\\\\', '/')
    '/tmp/cache/11.png'
    """
    if index.level == 0:
        # the single root tile has an empty quadkey
        return _location(cache_dir, 'root', file_ext, create_dir)
    return _location(cache_dir, quadkey(index), file_ext, create_dir)


def no_level_location(level, cache_dir):
    # quadkey caches store all tiles in one directory
    raise NotImplementedError('cache does not have any level location')


def tile_location_arcgiscache(index, cache_dir, file_ext, create_dir=False):
    """
    >>> from tileview.grid import TileIndex
    >>> tile_location_arcgiscache(TileIndex(1234567, 87654321, 9), '/tmp/cache', 'png').replace('\\\\', '/')
    '/tmp/cache/L09/R05397fb1/C0012d687.png'
    """
    return _location(cache_dir, arcgiscache_path(index), file_ext, create_dir)


def level_location_arcgiscache(level, cache_dir):
    return level_location('L%02d' % level, cache_dir=cache_dir)
