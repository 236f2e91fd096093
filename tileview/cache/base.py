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

from abc import ABC, abstractmethod


class CacheBackendError(Exception):
    pass


class TileCacheBase(ABC):
    """
    Base implementation of a tile cache.
    """

    @abstractmethod
    def find(self, index):
        """
        Return the cached bytes of the tile `index`, or ``None``
        if the tile is not cached.
        """
        pass

    @abstractmethod
    def add(self, index, data):
        """
        Store `data` for the tile `index`. Replaces existing entries.
        """
        pass

    @abstractmethod
    def remove(self, index):
        """
        Remove the tile `index`. Returns ``False`` if it was not cached.
        """
        pass

    def is_cached(self, index):
        """
        Return ``True`` if the tile is cached.
        """
        return self.find(index) is not None

    def find_many(self, indices):
        """
        Return a dict of the cached bytes for all cached `indices`.
        """
        result = {}
        for index in indices:
            data = self.find(index)
            if data is not None:
                result[index] = data
        return result


class DummyCache(TileCacheBase):
    """
    Cache that never stores anything.
    """
    def find(self, index):
        return None

    def add(self, index, data):
        pass

    def remove(self, index):
        return False

    def is_cached(self, index):
        return False
