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
Tile schemas (grid configuration, validation and view enumeration).
"""

import math

from tileview.extent import Extent
from tileview.grid import (
    AxisDirection,
    GridError,
    SchemaValidationError,
    TileIndex,
    TileInfo,
    TileRange,
)
from tileview.grid.axis import create_axis
from tileview.grid.resolutions import nearest_level, resolutions as calc_resolutions

import logging
log = logging.getLogger('tileview.grid')

# tiles that overlap the schema extent by less than this share of their own
# area are not served by tile services
MIN_TILE_OVERLAP = 0.001


class TileSchema(object):
    """
    Configuration of a tile grid.

    The attributes can be set after construction; call `validate` before
    the schema is used. Use `tile_schema` to create a validated schema in
    one step.

    :ivar origin_x: X of the lower-left grid corner, also for
        `AxisDirection.INVERTED_Y` schemas
    :ivar origin_y: Y of the lower-left grid corner
    :ivar resolutions: units per pixel for each level, coarsest first
    :ivar axis: the `AxisDirection` of the row numbering
    """
    def __init__(self, name=None, srs=None, extent=None, origin_x=float('nan'),
                 origin_y=float('nan'), tile_width=0, tile_height=0, format=None,
                 resolutions=None, axis=AxisDirection.NORMAL):
        self.name = name
        self.srs = srs
        self.extent = extent
        self.origin_x = origin_x
        self.origin_y = origin_y
        self.tile_width = tile_width
        self.tile_height = tile_height
        self.format = format
        self.resolutions = list(resolutions or [])
        self.axis = axis

    @property
    def extent(self):
        return self._extent

    @extent.setter
    def extent(self, extent):
        self._extent = Extent.from_bbox(extent) if extent is not None else Extent.default()

    @property
    def axis(self):
        return self._axis_direction

    @axis.setter
    def axis(self, direction):
        self._axis_direction = AxisDirection.from_string(direction)
        self._axis = create_axis(self._axis_direction)

    @property
    def tile_size(self):
        return self.tile_width, self.tile_height

    @property
    def levels(self):
        return len(self.resolutions)

    def resolution(self, level):
        """
        Returns the resolution of the `level` in units/pixel.
        """
        return self.resolutions[level]

    def validation_errors(self):
        """
        Return all problems of this schema as a list of ``(field, message)``
        tuples. The list is ordered by field priority and empty for valid
        schemas.
        """
        errors = []
        if not self.srs:
            errors.append(('srs', "The SRS was not set for TileSchema '%s'" % self.name))
        if self.extent == Extent.default():
            errors.append(('extent', "The extent was not set for TileSchema '%s'" % self.name))
        if not _is_finite(self.origin_x):
            errors.append(('origin_x', "TileSchema '%s' origin_x was not a finite number, "
                "perhaps it was not initialized" % self.name))
        if not _is_finite(self.origin_y):
            errors.append(('origin_y', "TileSchema '%s' origin_y was not a finite number, "
                "perhaps it was not initialized" % self.name))
        if not self.resolutions:
            errors.append(('resolutions', "No resolutions were added for TileSchema '%s'" % self.name))
        if not self.tile_width or self.tile_width < 0:
            errors.append(('tile_width', "The tile width was not set for TileSchema '%s'" % self.name))
        if not self.tile_height or self.tile_height < 0:
            errors.append(('tile_height', "The tile height was not set for TileSchema '%s'" % self.name))
        if not self.format:
            errors.append(('format', "The format was not set for TileSchema '%s'" % self.name))
        return errors

    def validate(self):
        """
        Check that all fields are properly initialized.

        :raises SchemaValidationError: with the first violated field
        """
        errors = self.validation_errors()
        if errors:
            raise SchemaValidationError(self.name, errors)

    def grid_size(self, level):
        """
        Return the number of (columns, rows) that cover the schema extent
        at `level`, counted from the origin.
        """
        res = self.resolutions[level]
        cols = math.ceil((self.extent.maxx - self.origin_x) / (res * self.tile_width))
        rows = math.ceil((self.extent.maxy - self.origin_y) / (res * self.tile_height))
        return max(int(cols), 1), max(int(rows), 1)

    def nearest_level(self, res):
        return nearest_level(self.resolutions, res)

    def world_to_tile(self, extent, level):
        return self._axis.world_to_tile(extent, level, self)

    def tile_to_world(self, tile_range, level):
        return self._axis.tile_to_world(tile_range, level, self)

    def tile_extent(self, index):
        """
        Return the world extent of a single tile.
        """
        col, row, level = index
        return self._axis.tile_to_world(TileRange.single(col, row), level, self)

    def get_tiles_in_view(self, extent, level=None, resolution=None):
        """
        Returns a list of `TileInfo` that cover the `extent`.

        Either the `level` or the target `resolution` is required. The
        resolution is mapped to the nearest level of the schema.
        Tiles outside of the schema extent, or with a negligible overlap,
        are not returned.
        """
        if level is None:
            if resolution is None:
                raise GridError('get_tiles_in_view requires level or resolution')
            level = self.nearest_level(resolution)
        elif resolution is not None:
            raise GridError('get_tiles_in_view takes either level or resolution, not both')

        if not 0 <= level < self.levels:
            raise GridError('level %r not in schema %s' % (level, self.name))

        extent = Extent.from_bbox(extent)
        tile_range = self._axis.world_to_tile(extent, level, self)
        infos = []
        for col, row in tile_range.tiles():
            tile_extent = self._axis.tile_to_world(TileRange.single(col, row), level, self)
            if within_schema_extent(self.extent, tile_extent):
                infos.append(TileInfo(TileIndex(col, row, level), tile_extent))
        return infos

    def get_extent_of_tiles_in_view(self, extent, level):
        """
        Return the grid-aligned extent of all tiles that cover `extent`.
        """
        tile_range = self._axis.world_to_tile(Extent.from_bbox(extent), level, self)
        return self._axis.tile_to_world(tile_range, level, self)

    def __repr__(self):
        return '%s(%r, srs=%r, extent=%r, origin=(%r, %r), tile_size=%r, format=%r, levels=%d, axis=%s)' % (
            self.__class__.__name__, self.name, self.srs, tuple(self.extent),
            self.origin_x, self.origin_y, self.tile_size, self.format, self.levels,
            self.axis.value)


def within_schema_extent(schema_extent, tile_extent):
    """
    Return ``True`` if the tile is served for this schema extent.

    Tiles that only touch the schema extent, or overlap it by less than
    0.1% of their area, are mostly false positives from rounding errors
    at the grid boundary.

    >>> within_schema_extent(Extent(0, 0, 1000, 1000), Extent(0, 0, 1024, 1024))
    True
    >>> within_schema_extent(Extent(0, 0, 1000, 1000), Extent(999.9, 0, 2023.9, 1024))
    False
    """
    if not tile_extent.intersects(schema_extent):
        return False
    return tile_extent.intersect(schema_extent).area / tile_extent.area > MIN_TILE_OVERLAP


def _is_finite(value):
    try:
        return math.isfinite(value)
    except TypeError:
        return False


def tile_schema(name=None, srs=None, extent=None, origin=None, tile_size=(256, 256),
                format='png', res=None, res_factor=2.0, num_levels=None,
                min_res=None, max_res=None, axis=AxisDirection.NORMAL):
    """
    This function creates and validates a new TileSchema.

    Without an explicit `origin`, the lower-left corner of the `extent` is
    used. Without `res`, the resolutions are calculated from the extent
    (see `tileview.grid.resolutions.resolutions`).

    :raises SchemaValidationError: for incomplete schemas
    """
    if extent is not None:
        extent = Extent.from_bbox(extent)

    if origin is None:
        if extent is not None:
            origin = (extent.minx, extent.miny)
        else:
            origin = (float('nan'), float('nan'))

    if res:
        if not isinstance(res, (list, tuple)):
            raise ValueError('res is not a list, use res_factor for float values')
        res = sorted(res, reverse=True)
    elif extent is not None:
        res = calc_resolutions(min_res=min_res, max_res=max_res, res_factor=res_factor,
                               num_levels=num_levels, bbox=extent, tile_size=tile_size)

    schema = TileSchema(
        name=name,
        srs=srs,
        extent=extent,
        origin_x=origin[0],
        origin_y=origin[1],
        tile_width=tile_size[0],
        tile_height=tile_size[1],
        format=format,
        resolutions=res,
        axis=axis,
    )
    schema.validate()
    log.debug('created %r', schema)
    return schema


GLOBAL_MERCATOR_EXTENT = (
    -20037508.342789244, -20037508.342789244,
    20037508.342789244, 20037508.342789244,
)


def global_mercator_schema(name='GLOBAL_WEBMERCATOR', format='png', num_levels=20,
                           axis=AxisDirection.INVERTED_Y):
    """
    Schema of the common web map tile services (OSM, Google, Bing).

    >>> schema = global_mercator_schema()
    >>> '%.5f' % schema.resolution(1)
    '78271.51696'
    """
    return tile_schema(
        name=name, srs='EPSG:3857', extent=GLOBAL_MERCATOR_EXTENT,
        format=format, num_levels=num_levels, axis=axis,
    )


def global_geodetic_schema(name='GLOBAL_GEODETIC', format='png', num_levels=20,
                           axis=AxisDirection.NORMAL):
    """
    Schema for EPSG:4326 with two tiles at level 0.

    >>> global_geodetic_schema().grid_size(0)
    (2, 1)
    """
    return tile_schema(
        name=name, srs='EPSG:4326', extent=(-180, -90, 180, 90),
        min_res=180 / 256, format=format, num_levels=num_levels, axis=axis,
    )
