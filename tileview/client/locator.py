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
Tile locators: URL templates of tile services.
"""
from string import Formatter

from tileview.grid import TileIndex, TileInfo

ARCGIS_TEMPLATE = '{base}/tile/{level}/{row}/{col}'
TMS_TEMPLATE = '{base}/{level}/{col}/{row}.{format}'
XYZ_TEMPLATE = '{base}/{level}/{col}/{row}.{format}'
QUADKEY_TEMPLATE = '{base}/{quadkey}.{format}'


class TileLocator(object):
    """
    Builds the URL of a tile from a template.

    Supported placeholders: ``{base}``, ``{level}``, ``{row}``, ``{col}``,
    ``{format}``, ``{quadkey}``, ``{tc_path}``, ``{tms_path}``,
    ``{arcgiscache_path}`` and ``{tms_row}`` (requires a `schema`).

    >>> t = TileLocator('http://foo/tiles/{level}/{col}/{row}.png')
    >>> t.build(TileIndex(7, 4, 3))
    'http://foo/tiles/3/7/4.png'

    >>> t = TileLocator('{base}/tiles/{tc_path}.{format}', 'http://foo', format='jpeg')
    >>> t.build(TileIndex(7, 4, 3))
    'http://foo/tiles/03/000/000/007/000/000/004.jpeg'

    >>> t = TileLocator(ARCGIS_TEMPLATE, 'http://x')
    >>> t.build(TileIndex(col=3, row=5, level=2))
    'http://x/tile/2/5/3'
    """
    def __init__(self, template, base_url=None, format='png', schema=None):
        self.template = template
        self.base_url = base_url.rstrip('/') if base_url else base_url
        self.format = format
        self.schema = schema
        fields = set(name for _, name, _, _ in Formatter().parse(template) if name)
        self.with_quadkey = 'quadkey' in fields
        self.with_tc_path = 'tc_path' in fields
        self.with_tms_path = 'tms_path' in fields
        self.with_arcgiscache_path = 'arcgiscache_path' in fields
        self.with_tms_row = 'tms_row' in fields
        if 'base' in fields and self.base_url is None:
            raise ValueError('template %r requires a base url' % (template, ))
        if self.with_tms_row and schema is None:
            raise ValueError('template %r requires a schema' % (template, ))

    def build(self, tile):
        """
        Return the URL for `tile` (`TileInfo` or `TileIndex`).
        """
        if isinstance(tile, TileInfo):
            tile = tile.index
        col, row, level = tile
        data = dict(base=self.base_url, col=col, row=row, level=level, format=self.format)
        if self.with_quadkey:
            data['quadkey'] = quadkey(tile)
        if self.with_tc_path:
            data['tc_path'] = tilecache_path(tile)
        if self.with_tms_path:
            data['tms_path'] = tms_path(tile)
        if self.with_arcgiscache_path:
            data['arcgiscache_path'] = arcgiscache_path(tile)
        if self.with_tms_row:
            data['tms_row'] = self.schema.grid_size(level)[1] - 1 - row
        return self.template.format(**data)

    def __repr__(self):
        return '%s(%r, %r, format=%r)' % (
            self.__class__.__name__, self.template, self.base_url, self.format)


def build_locator(template, base_url, tile_info):
    """
    >>> build_locator(ARCGIS_TEMPLATE, 'http://x', TileIndex(3, 5, 2))
    'http://x/tile/2/5/3'
    """
    return TileLocator(template, base_url).build(tile_info)


def arcgis_locator(base_url, format=None):
    """
    Locator for ArcGIS REST tile services (``MapServer/tile/level/row/col``).
    """
    return TileLocator(ARCGIS_TEMPLATE, base_url, format=format)


def tms_locator(base_url, format='png'):
    return TileLocator(TMS_TEMPLATE, base_url, format=format)


def xyz_locator(base_url, format='png'):
    """
    Locator for OSM/Google style services. Use with `InvertedY` schemas.
    """
    return TileLocator(XYZ_TEMPLATE, base_url, format=format)


def quadkey_locator(base_url, format='png'):
    return TileLocator(QUADKEY_TEMPLATE, base_url, format=format)


locator_types = {
    'arcgis': arcgis_locator,
    'tms': tms_locator,
    'xyz': xyz_locator,
    'quadkey': quadkey_locator,
}


def locator_for_type(type, base_url, format='png', template=None, schema=None):
    """
    Return the locator for a configured source `type`. The type
    ``template`` uses the `template` as is.

    >>> locator_for_type('arcgis', 'http://x/MapServer/')
    TileLocator('{base}/tile/{level}/{row}/{col}', 'http://x/MapServer', format='png')
    """
    if type == 'template':
        if not template:
            raise ValueError('source type template requires a url template')
        return TileLocator(template, base_url, format=format, schema=schema)
    if type not in locator_types:
        raise ValueError('unknown source type %r' % (type, ))
    return locator_types[type](base_url, format=format)


def tilecache_path(tile_index):
    """
    >>> tilecache_path((1234567, 87654321, 9))
    '09/001/234/567/087/654/321'
    """
    x, y, z = tile_index
    parts = ("%02d" % z,
             "%03d" % int(x / 1000000),
             "%03d" % (int(x / 1000) % 1000),
             "%03d" % (int(x) % 1000),
             "%03d" % int(y / 1000000),
             "%03d" % (int(y / 1000) % 1000),
             "%03d" % (int(y) % 1000))
    return '/'.join(parts)


def quadkey(tile_index):
    """
    >>> quadkey((0, 0, 1))
    '0'
    >>> quadkey((1, 0, 1))
    '1'
    >>> quadkey((1, 2, 2))
    '21'
    """
    x, y, z = tile_index
    quad_key = ""
    for i in range(z, 0, -1):
        digit = 0
        mask = 1 << (i-1)
        if (x & mask) != 0:
            digit += 1
        if (y & mask) != 0:
            digit += 2
        quad_key += str(digit)
    return quad_key


def tms_path(tile_index):
    """
    >>> tms_path((1234567, 87654321, 9))
    '9/1234567/87654321'
    """
    return '%d/%d/%d' % (tile_index[2], tile_index[0], tile_index[1])


def arcgiscache_path(tile_index):
    """
    >>> arcgiscache_path((1234567, 87654321, 9))
    'L09/R05397fb1/C0012d687'
    """
    return 'L%02d/R%08x/C%08x' % (tile_index[2], tile_index[1], tile_index[0])
