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
Tile sources: retrieval of tiles from tile services, with caching.
"""


class SourceError(Exception):
    pass


class TransportError(SourceError):
    """
    Network level error: no connection, timeout or an unsuccessful
    HTTP status. `response_code` is ``None`` if there was no response.
    """
    def __init__(self, msg, response_code=None):
        SourceError.__init__(self, msg)
        self.response_code = response_code


class FormatError(SourceError):
    """
    The response does not match the format of the tile schema (e.g. an
    error document instead of a PNG).
    """
    pass


class FetchCancelled(SourceError):
    """
    The fetch belongs to a request that was superseded by a newer one.
    """
    pass
