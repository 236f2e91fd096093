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
Tile grids: indices, ranges and the tile schema.
"""
from collections import namedtuple
from enum import Enum


class GridError(Exception):
    pass


class SchemaValidationError(GridError):
    """
    Raised for incomplete or invalid tile schemas.

    :ivar schema_name: name of the invalid schema
    :ivar field: the first violated field (in validation order)
    :ivar errors: all violations as list of ``(field, message)`` tuples
    """
    def __init__(self, schema_name, errors):
        self.schema_name = schema_name
        self.errors = list(errors)
        self.field, msg = self.errors[0]
        GridError.__init__(self, msg)


class AxisDirection(Enum):
    """
    Row numbering of a tile schema, relative to the coordinate system.

    ``NORMAL`` rows increase with increasing Y (north-up), ``INVERTED_Y``
    rows increase with decreasing Y.

    The schema origin is the lower-left corner of the grid for both
    directions. ``INVERTED_Y`` rows are counted from the top of the schema
    extent, so row 0 is the top row of each level. Services that define
    a top-left origin (OSM, Google) are configured with the lower-left
    corner of their extent as origin.
    """
    NORMAL = 'normal'
    INVERTED_Y = 'inverted_y'

    @classmethod
    def from_string(cls, value):
        """
        >>> AxisDirection.from_string('InvertedY')
        <AxisDirection.INVERTED_Y: 'inverted_y'>
        >>> AxisDirection.from_string('nw')
        <AxisDirection.INVERTED_Y: 'inverted_y'>
        """
        if isinstance(value, AxisDirection):
            return value
        value = value.lower().replace('-', '_')
        if value in ('normal', 'sw', 'll'):
            return cls.NORMAL
        if value in ('inverted_y', 'invertedy', 'nw', 'ul'):
            return cls.INVERTED_Y
        raise ValueError('unknown axis direction %r' % (value, ))


class TileIndex(namedtuple('TileIndex', 'col row level')):
    """
    Identifies a single tile in the grid. Used as cache key.
    """
    __slots__ = ()


class TileRange(namedtuple('TileRange', 'first_col first_row last_col last_row')):
    """
    Rectangular span of tiles at one level.
    Both `last_col` and `last_row` are inclusive.

    >>> r = TileRange(0, 0, 1, 2)
    >>> r.count
    6
    >>> list(r.tiles())[:3]
    [(0, 0), (1, 0), (0, 1)]
    >>> TileRange.single(3, 4)
    TileRange(first_col=3, first_row=4, last_col=3, last_row=4)
    """
    __slots__ = ()

    @classmethod
    def single(cls, col, row):
        return cls(col, row, col, row)

    @property
    def cols(self):
        return range(self.first_col, self.last_col + 1)

    @property
    def rows(self):
        return range(self.first_row, self.last_row + 1)

    def tiles(self):
        """
        Iterate over all `(col, row)` pairs, row by row.
        """
        for row in self.rows:
            for col in self.cols:
                yield col, row

    @property
    def count(self):
        return len(self.cols) * len(self.rows)


class TileInfo(namedtuple('TileInfo', 'index extent')):
    """
    A tile index paired with its world extent.
    """
    __slots__ = ()
