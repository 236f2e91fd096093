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
Map viewport: the visible world extent for a map of a given pixel size.
"""

from tileview.extent import Extent


class Viewport(object):
    """
    Transformation between world coordinates and map (pixel) coordinates
    of a map view. Pixel coordinates start at the upper-left corner.

    >>> v = Viewport(center=(500, 500), resolution=2, width=100, height=50)
    >>> v.extent
    Extent(minx=400.0, miny=450.0, maxx=600.0, maxy=550.0)
    >>> v.world_to_map(400, 550)
    (0.0, 0.0)
    >>> v.map_to_world(100, 50)
    (600.0, 450.0)
    """
    def __init__(self, center, resolution, width, height):
        self.center = tuple(center)
        self.resolution = resolution
        self.width = width
        self.height = height

    @classmethod
    def from_extent(cls, extent, width, height):
        """
        Create a viewport that shows the complete `extent`.
        """
        extent = Extent.from_bbox(extent)
        resolution = max(extent.width / width, extent.height / height)
        return cls(extent.center, resolution, width, height)

    @property
    def extent(self):
        half_w = self.width * self.resolution / 2
        half_h = self.height * self.resolution / 2
        x, y = self.center
        return Extent(x - half_w, y - half_h, x + half_w, y + half_h)

    def world_to_map(self, x, y):
        extent = self.extent
        return ((x - extent.minx) / self.resolution,
                (extent.maxy - y) / self.resolution)

    def map_to_world(self, x, y):
        extent = self.extent
        return (extent.minx + x * self.resolution,
                extent.maxy - y * self.resolution)

    def pan(self, dx, dy):
        """
        Move the view by `dx`/`dy` pixels.
        """
        x, y = self.center
        self.center = (x - dx * self.resolution, y + dy * self.resolution)

    def zoom(self, factor, anchor=None):
        """
        Divide the resolution by `factor` (> 1 zooms in). The world
        coordinate below the `anchor` pixel stays in place.
        """
        if anchor is None:
            self.resolution /= factor
            return
        world_x, world_y = self.map_to_world(*anchor)
        self.resolution /= factor
        new_x, new_y = self.map_to_world(*anchor)
        x, y = self.center
        self.center = (x + world_x - new_x, y + world_y - new_y)

    def __repr__(self):
        return '%s(center=%r, resolution=%r, width=%r, height=%r)' % (
            self.__class__.__name__, self.center, self.resolution, self.width, self.height)
