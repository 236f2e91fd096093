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

import threading

from tileview.cache.base import TileCacheBase


class MemoryCache(TileCacheBase):
    """
    Keeps all tiles in a dictionary. Safe for concurrent use.
    """
    def __init__(self):
        self._tiles = {}
        self._lock = threading.Lock()

    def find(self, index):
        with self._lock:
            return self._tiles.get(index)

    def add(self, index, data):
        if data is None:
            raise ValueError('cannot cache tile %r without data' % (index, ))
        with self._lock:
            self._tiles[index] = data

    def remove(self, index):
        with self._lock:
            return self._tiles.pop(index, None) is not None

    def is_cached(self, index):
        with self._lock:
            return index in self._tiles

    def __len__(self):
        with self._lock:
            return len(self._tiles)

    def clear(self):
        with self._lock:
            self._tiles.clear()
