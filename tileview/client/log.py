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
Request log of the tile transport.

One line per request: ``method url status size_kib duration_ms``.
Unknown values are logged as ``-``.
"""
import logging
log = logging.getLogger('tileview.source.request')


def _response_size(response):
    length = response.headers.get('Content-Length')
    if length is not None:
        return int(length)
    return len(response.content or b'')


def log_request(url, status, response=None, method='GET', duration=None):
    """
    Log a finished tile request. `response` is ``None`` for requests
    that failed before a response arrived.
    """
    if not log.isEnabledFor(logging.INFO):
        return

    size = '-'
    if response is not None:
        size = '%.1f' % (_response_size(response) / 1024.0, )
    log.info('%s %s %s %s %s', method, url, status or '-', size,
             '%d' % (duration * 1000) if duration is not None else '-')
