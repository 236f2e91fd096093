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
Concurrent fetching of all tiles of a view.

Each call of `TileLayer.update_data` or `TileLayer.fetch_tiles` starts a
new request generation and starts fetching the tiles right away. Tiles
of older generations are still fetched and cached if they are already
in progress, but they are delivered as `FetchCancelled`.
"""
import threading
from collections import namedtuple

from tileview.source import SourceError, FetchCancelled
from tileview.util import async_

import logging
log = logging.getLogger('tileview.source.layer')


class TileResult(namedtuple('TileResult', 'tile_info data exception generation')):
    """
    Delivery of a single tile. Either `data` or `exception` is set.
    """
    __slots__ = ()

    @property
    def cancelled(self):
        return isinstance(self.exception, FetchCancelled)

    @property
    def ok(self):
        return self.exception is None


class TileRequest(object):
    """
    All tiles of one request generation.

    The tiles are fetched in the background as soon as the request is
    created. `results` returns them in the order they arrive. Iterating
    again returns the same results without fetching.

    The `callback` is called from the worker threads for each result,
    also if nobody iterates the results.
    """
    def __init__(self, layer, generation, tile_infos, callback=None):
        self.layer = layer
        self.generation = generation
        self.tile_infos = list(tile_infos)
        self.callback = callback
        self.errors = []
        self._results = []
        self._pool = async_.ThreadPool(min(layer.concurrent_requests, len(self.tile_infos)))
        self._pool.start(self._fetch, [(info, ) for info in self.tile_infos])
        self._pending = self._pool.completed()

    @property
    def superseded(self):
        return self.layer.current_generation != self.generation

    def _fetch(self, tile_info):
        result = self.layer._fetch(tile_info, self.generation)
        if result.exception is not None and not result.cancelled:
            self.errors.append(result)
        if self.callback is not None:
            self.callback(result)
        return result

    def results(self):
        """
        Yield a `TileResult` for every tile of this request.
        """
        i = 0
        while True:
            if i < len(self._results):
                yield self._results[i]
                i += 1
                continue
            try:
                _, result = next(self._pending)
            except StopIteration:
                return
            self._results.append(result)

    def tiles(self):
        """
        Yield ``(tile_info, data)`` of all successfully fetched tiles.
        Failed tiles are collected in `errors`, cancelled tiles are skipped.
        """
        for result in self.results():
            if result.ok:
                yield result.tile_info, result.data

    def wait(self):
        """
        Wait for all tiles and return the list of results.
        """
        return list(self.results())

    def __repr__(self):
        return '<TileRequest generation=%d tiles=%d>' % (self.generation, len(self.tile_infos))


class TileLayer(object):
    """
    Fetches the tiles of a view from a `TileSource` with
    `concurrent_requests` threads.
    """
    def __init__(self, source, concurrent_requests=4):
        self.source = source
        self.concurrent_requests = concurrent_requests
        self._generation = 0
        self._generation_lock = threading.Lock()

    @property
    def schema(self):
        return self.source.schema

    @property
    def current_generation(self):
        with self._generation_lock:
            return self._generation

    def _next_generation(self):
        with self._generation_lock:
            self._generation += 1
            return self._generation

    def is_stale(self, generation):
        return self.current_generation != generation

    def update_data(self, extent, resolution, callback=None):
        """
        Start a request for all tiles in `extent` at the level with the
        nearest resolution to `resolution`. Supersedes all previous requests.
        """
        tile_infos = self.schema.get_tiles_in_view(extent, resolution=resolution)
        return self.fetch_tiles(tile_infos, callback=callback)

    def fetch_tiles(self, tile_infos, callback=None):
        """
        Start a request for `tile_infos`. Supersedes all previous requests.
        """
        generation = self._next_generation()
        log.debug('starting tile request generation %d', generation)
        return TileRequest(self, generation, tile_infos, callback=callback)

    def _cancelled(self, tile_info, generation):
        return TileResult(tile_info, None, FetchCancelled(
            'request generation %d superseded' % (generation, )), generation)

    def _fetch(self, tile_info, generation):
        if self.is_stale(generation):
            return self._cancelled(tile_info, generation)
        try:
            data = self.source.fetch_tile(tile_info)
        except SourceError as ex:
            return TileResult(tile_info, None, ex, generation)
        if self.is_stale(generation):
            # the tile is cached, but nobody waits for it anymore
            return self._cancelled(tile_info, generation)
        return TileResult(tile_info, data, None, generation)
