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
In-process locks for single tiles.
"""
import threading

__all__ = ['TileLocker']


class _RefLock(object):
    __slots__ = ('lock', 'users')

    def __init__(self):
        self.lock = threading.Lock()
        self.users = 0


class TileLock(object):
    """
    Lock for one tile index. Returned by `TileLocker.lock`.
    """
    def __init__(self, locker, key):
        self.locker = locker
        self.key = key
        self._ref = None

    def __enter__(self):
        self.lock()

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.unlock()

    def lock(self):
        self._ref = self.locker._acquire_ref(self.key)
        self._ref.lock.acquire()

    def unlock(self):
        if self._ref is None:
            return
        self._ref.lock.release()
        self.locker._release_ref(self.key)
        self._ref = None


class TileLocker(object):
    """
    Hands out one lock per tile index, so that only one thread fetches
    a missing tile while concurrent requests for the same tile wait.

    Lock objects are only kept as long as a thread holds or waits for them.
    """
    def __init__(self, lock_id=None):
        self.lock_id = lock_id
        self._locks = {}
        self._registry_lock = threading.Lock()

    def lock(self, index):
        """
        Returns a lock object for this tile index.
        """
        return TileLock(self, index)

    def _acquire_ref(self, key):
        with self._registry_lock:
            ref = self._locks.get(key)
            if ref is None:
                ref = self._locks[key] = _RefLock()
            ref.users += 1
            return ref

    def _release_ref(self, key):
        with self._registry_lock:
            ref = self._locks[key]
            ref.users -= 1
            if ref.users == 0:
                del self._locks[key]

    @property
    def active_locks(self):
        with self._registry_lock:
            return len(self._locks)
