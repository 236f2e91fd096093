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
Retrieve tiles from tile servers, cache-first.
"""
from tileview.cache.base import DummyCache, CacheBackendError
from tileview.client.http import HTTPClient, HTTPClientError
from tileview.grid import TileInfo
from tileview.image import response_matches_format
from tileview.source import TransportError, FormatError
from tileview.util.lock import TileLocker

import logging
log = logging.getLogger('tileview.source.tile')


def _content_type(headers):
    if headers is None:
        return None
    for key, value in headers.items():
        if key.lower() == 'content-type':
            return value
    return None


class TileSource(object):
    """
    Returns the bytes of single tiles, from the `cache` if possible,
    otherwise from the tile service addressed by `locator`.

    :param schema: the `TileSchema` of the tile service
    :param locator: `TileLocator` that builds the tile URLs
    :param cache: `TileCacheBase` implementation, tiles are not cached
        if ``None``
    :param http_client: transport with an ``open(url)`` method
    :param http_client_factory: callable that returns the transport,
        used if no `http_client` is given
    :param check_format: check responses against ``schema.format``
    :param locker: `TileLocker` for tiles that are fetched concurrently
    """
    def __init__(self, schema, locator, cache=None, http_client=None,
                 http_client_factory=None, check_format=True, locker=None, name=None):
        self.schema = schema
        self.locator = locator
        self.cache = cache if cache is not None else DummyCache()
        if http_client is None:
            http_client = (http_client_factory or HTTPClient)()
        self.http_client = http_client
        self.check_format = check_format
        self.locker = locker if locker is not None else TileLocker(name)
        self.name = name or schema.name

    def fetch_tile(self, tile_info):
        """
        Return the bytes of the tile `tile_info` (`TileInfo` or `TileIndex`).

        Cache failures are logged. Tiles that can't be read from the cache
        are fetched, tiles that can't be stored are returned anyway.

        :raises TransportError: if the tile service is not reachable or
            returns an error status
        :raises FormatError: if the response does not match the schema format
        """
        index = tile_info.index if isinstance(tile_info, TileInfo) else tile_info
        data = self._cache_find(index)
        if data is not None:
            return data

        with self.locker.lock(index):
            # another thread might have fetched the tile while we waited
            data = self._cache_find(index)
            if data is not None:
                return data
            data = self._fetch(index)
            self._cache_add(index, data)
        return data

    get_tile = fetch_tile

    def _cache_find(self, index):
        try:
            return self.cache.find(index)
        except (CacheBackendError, OSError) as e:
            log.warning('could not read tile %s from cache %r: %s', tuple(index), self.cache, e)
            return None

    def _cache_add(self, index, data):
        try:
            self.cache.add(index, data)
        except (CacheBackendError, OSError) as e:
            log.warning('could not store tile %s in cache %r: %s', tuple(index), self.cache, e)

    def _fetch(self, index):
        url = self.locator.build(index)
        try:
            resp = self.http_client.open(url)
        except HTTPClientError as e:
            log.warning('could not retrieve tile %s: %s', tuple(index), e)
            raise TransportError(e.args[0], response_code=e.response_code) from e

        data = resp.content
        if not data:
            log.warning('empty response for tile %s from %s', tuple(index), url)
            raise FormatError('empty response from "%s"' % (url, ))

        if self.check_format and self.schema.format:
            content_type = _content_type(getattr(resp, 'headers', None))
            if not response_matches_format(data, content_type, self.schema.format):
                log.warning('unexpected response for tile %s from %s: %s',
                            tuple(index), url, content_type or 'unknown format')
                raise FormatError('response from "%s" is not %s (content-type: %s)' % (
                    url, self.schema.format, content_type or '-'))
        return data

    def __repr__(self):
        return '%s(%r, %r, cache=%r)' % (
            self.__class__.__name__, self.name, self.locator, self.cache)
