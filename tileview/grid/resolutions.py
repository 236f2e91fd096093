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
Resolution ladders and resolution lookup.
"""

import math


def nearest_level(resolutions, res):
    """
    Return the level whose resolution is closest to `res`.
    Ties resolve to the first (coarsest) level.

    >>> nearest_level([1000, 500, 250, 125], 300)
    2
    >>> nearest_level([1000, 500, 250, 125], 375)
    1
    >>> nearest_level([1000, 500, 250, 125], 1e9)
    0
    """
    if not resolutions:
        raise ValueError('no resolutions')
    level = 0
    distance = abs(resolutions[0] - res)
    for i, l_res in enumerate(resolutions):
        d = abs(l_res - res)
        if d < distance:
            level = i
            distance = d
    return level


def resolutions(min_res=None, max_res=None, res_factor=2.0, num_levels=None,
                bbox=None, tile_size=(256, 256)):
    """
    Generate a resolution ladder, coarsest resolution first.

    Without `min_res`, the first level covers the `bbox` with a single tile.

    >>> resolutions(min_res=1000, max_res=80)
    [1000, 500.0, 250.0, 125.0]
    >>> resolutions(bbox=(0, 0, 1024, 512), num_levels=3)
    [4.0, 2.0, 1.0]
    """
    if res_factor == 'sqrt2':
        res_factor = math.sqrt(2)

    res = []
    if not min_res:
        width = bbox[2] - bbox[0]
        height = bbox[3] - bbox[1]
        min_res = max(width/tile_size[0], height/tile_size[1])

    if max_res:
        if num_levels:
            res_step = (math.log10(min_res) - math.log10(max_res)) / (num_levels-1)
            res = [10**(math.log10(min_res) - res_step*i) for i in range(num_levels)]
        else:
            res = [min_res]
            while True:
                next_res = res[-1]/res_factor
                if max_res >= next_res:
                    break
                res.append(next_res)
    else:
        if not num_levels:
            num_levels = 20 if res_factor != math.sqrt(2) else 40
        res = [min_res]
        while len(res) < num_levels:
            res.append(res[-1]/res_factor)

    return res
