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
Axis-aligned world extents and bbox helpers.
"""

from collections import namedtuple


class Extent(namedtuple('Extent', 'minx miny maxx maxy')):
    """
    Axis-aligned rectangle in world coordinates.

    >>> Extent(0, 0, 10, 20).area
    200.0
    >>> Extent(0, 0, 10, 10).intersects(Extent(10, 0, 20, 10))
    False
    """
    __slots__ = ()

    def __new__(cls, minx, miny, maxx, maxy):
        minx, miny, maxx, maxy = float(minx), float(miny), float(maxx), float(maxy)
        if minx > maxx or miny > maxy:
            raise ValueError('invalid extent (%r, %r, %r, %r): min > max' % (
                minx, miny, maxx, maxy))
        return super(Extent, cls).__new__(cls, minx, miny, maxx, maxy)

    @classmethod
    def default(cls):
        """
        The degenerate (0, 0, 0, 0) extent of an unconfigured schema.
        """
        return cls(0, 0, 0, 0)

    @classmethod
    def from_bbox(cls, bbox):
        if isinstance(bbox, Extent):
            return bbox
        return cls(*bbox_tuple(bbox))

    @property
    def width(self):
        return self.maxx - self.minx

    @property
    def height(self):
        return self.maxy - self.miny

    @property
    def area(self):
        return self.width * self.height

    @property
    def center(self):
        return (self.minx + self.maxx) / 2.0, (self.miny + self.maxy) / 2.0

    def intersects(self, other):
        """
        Return ``True`` if both extents overlap with a positive area.
        Extents that only share an edge do not intersect.
        """
        return bbox_intersects(self, other)

    def intersect(self, other):
        """
        Return the overlapping part of both extents.

        Disjoint extents result in a zero-area extent, so calling ``.area``
        on the result is always safe.

        >>> Extent(0, 0, 10, 10).intersect(Extent(5, 5, 20, 20))
        Extent(minx=5.0, miny=5.0, maxx=10.0, maxy=10.0)
        >>> Extent(0, 0, 10, 10).intersect(Extent(20, 20, 30, 30)).area
        0.0
        """
        minx = max(self.minx, other[0])
        miny = max(self.miny, other[1])
        maxx = min(self.maxx, other[2])
        maxy = min(self.maxy, other[3])
        if minx > maxx:
            maxx = minx
        if miny > maxy:
            maxy = miny
        return Extent(minx, miny, maxx, maxy)

    def contains(self, other):
        return bbox_contains(self, other)

    def __str__(self):
        return '%r,%r,%r,%r' % tuple(self)


def bbox_intersects(one, two):
    """
    >>> bbox_intersects((0, 0, 10, 10), (5, 5, 15, 15))
    True
    >>> bbox_intersects((0, 0, 10, 10), (10, 0, 20, 10))
    False
    """
    a_x0, a_y0, a_x1, a_y1 = one
    b_x0, b_y0, b_x1, b_y1 = two

    if (
        a_x0 < b_x1 and
        a_x1 > b_x0 and
        a_y0 < b_y1 and
        a_y1 > b_y0
    ):
        return True

    return False


def bbox_contains(one, two):
    """
    Returns ``True`` if `one` contains `two`. Touching edges are contained.

    >>> bbox_contains([0, 0, 10, 10], [2, 2, 4, 4])
    True
    >>> bbox_contains([0, 0, 10, 10], [0, 0, 11, 10])
    False
    >>> bbox_contains([0, 0, 10, 10], [0, 0, 10, 10])
    True
    """
    a_x0, a_y0, a_x1, a_y1 = one
    b_x0, b_y0, b_x1, b_y1 = two

    if (
        a_x0 <= b_x0 and
        a_x1 >= b_x1 and
        a_y0 <= b_y0 and
        a_y1 >= b_y1
    ):
        return True

    return False


def merge_bbox(bbox1, bbox2):
    """
    Merge two bboxes.

    >>> merge_bbox((-10, 20, 0, 30), (30, -20, 90, 10))
    (-10, -20, 90, 30)
    """
    minx = min(bbox1[0], bbox2[0])
    miny = min(bbox1[1], bbox2[1])
    maxx = max(bbox1[2], bbox2[2])
    maxy = max(bbox1[3], bbox2[3])
    return (minx, miny, maxx, maxy)


def bbox_tuple(bbox):
    """
    >>> bbox_tuple('20,-30,40,-10')
    (20.0, -30.0, 40.0, -10.0)
    >>> bbox_tuple([20,-30,40,-10])
    (20.0, -30.0, 40.0, -10.0)
    """
    if isinstance(bbox, str):
        bbox = bbox.split(',')
    bbox = tuple(map(float, bbox))
    if len(bbox) != 4:
        raise ValueError('bbox needs four values, got %r' % (bbox, ))
    return bbox
