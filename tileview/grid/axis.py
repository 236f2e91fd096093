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
Conversion between world extents and tile ranges for both row numbering
conventions of a tile schema.
"""

import math

from tileview.extent import Extent
from tileview.grid import AxisDirection, TileRange


def tile_world_size(schema, level):
    """
    Return the world size (width, height) of a single tile at `level`.
    """
    res = schema.resolutions[level]
    return res * schema.tile_width, res * schema.tile_height


class NormalAxis(object):
    """
    Rows increase with increasing Y, columns with increasing X.
    Row and column 0 start at the schema origin.
    """
    direction = AxisDirection.NORMAL

    def world_to_tile(self, extent, level, schema):
        w, h = tile_world_size(schema, level)
        first_col = int(math.floor((extent[0] - schema.origin_x) / w))
        first_row = int(math.floor((extent[1] - schema.origin_y) / h))
        # ceil gives the exclusive upper bound, TileRange is inclusive
        last_col = int(math.ceil((extent[2] - schema.origin_x) / w)) - 1
        last_row = int(math.ceil((extent[3] - schema.origin_y) / h)) - 1
        return TileRange(first_col, first_row,
                         max(first_col, last_col), max(first_row, last_row))

    def tile_to_world(self, tile_range, level, schema):
        w, h = tile_world_size(schema, level)
        minx = tile_range.first_col * w + schema.origin_x
        miny = tile_range.first_row * h + schema.origin_y
        maxx = (tile_range.last_col + 1) * w + schema.origin_x
        maxy = (tile_range.last_row + 1) * h + schema.origin_y
        return Extent(minx, miny, maxx, maxy)

    def __repr__(self):
        return '%s()' % (self.__class__.__name__, )


class InvertedYAxis(NormalAxis):
    """
    Rows increase with decreasing Y. Row 0 is the top row of the schema
    at each level, the row numbers are the mirror of the `NormalAxis`
    rows::

        inverted_row = (rows_at_level - 1) - normal_row
    """
    direction = AxisDirection.INVERTED_Y

    def _flip(self, tile_range, level, schema):
        rows = schema.grid_size(level)[1]
        return TileRange(
            tile_range.first_col, rows - 1 - tile_range.last_row,
            tile_range.last_col, rows - 1 - tile_range.first_row,
        )

    def world_to_tile(self, extent, level, schema):
        normal_range = NormalAxis.world_to_tile(self, extent, level, schema)
        return self._flip(normal_range, level, schema)

    def tile_to_world(self, tile_range, level, schema):
        normal_range = self._flip(tile_range, level, schema)
        return NormalAxis.tile_to_world(self, normal_range, level, schema)


def create_axis(direction):
    """
    Return the axis strategy for the `AxisDirection`.

    >>> create_axis(AxisDirection.INVERTED_Y)
    InvertedYAxis()
    """
    if direction is AxisDirection.NORMAL:
        return NormalAxis()
    elif direction is AxisDirection.INVERTED_Y:
        return InvertedYAxis()
    raise ValueError('could not find axis for %r' % (direction, ))
