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
Image formats of tile responses.

Tiles are handled as opaque bytes. Only the header is inspected to check
that a response matches the declared format of a tile schema.
"""
from io import BytesIO

from PIL import Image, UnidentifiedImageError

import logging
log = logging.getLogger('tileview.image')


_format_aliases = {
    'jpg': 'jpeg',
    'tif': 'tiff',
    'png8': 'png',
    'png24': 'png',
    'png32': 'png',
    'mixed': 'png',
}


class ImageFormat(str):
    """
    >>> ImageFormat('image/png').ext
    'png'
    >>> ImageFormat('jpg').mime_type
    'image/jpeg'
    >>> ImageFormat('image/jpeg; charset=binary') == 'jpg'
    True
    """
    def __new__(cls, value, *args, **keywargs):
        if isinstance(value, ImageFormat):
            return value
        return str.__new__(cls, value)

    @property
    def mime_type(self):
        if self.startswith('image/'):
            return self.split(';', 1)[0].strip()
        return 'image/' + self.ext

    @property
    def ext(self):
        ext = self
        if '/' in ext:
            ext = ext.split('/', 1)[1]
        if ';' in ext:
            ext = ext.split(';', 1)[0]
        ext = ext.strip().lower()
        return _format_aliases.get(ext, ext)

    def __eq__(self, other):
        if isinstance(other, str):
            other = ImageFormat(other)
        else:
            return NotImplemented

        return self.ext == other.ext

    def __ne__(self, other):
        return not (self == other)

    def __hash__(self):
        return hash(self.ext)


magic_bytes = [
    ('png', (b"\211PNG\r\n\032\n",)),
    ('jpeg', (b"\xFF\xD8",)),
    ('tiff', (b"MM\x00\x2a", b"II\x2a\x00",)),
    ('gif', (b"GIF87a", b"GIF89a",)),
]


def peek_image_format(data):
    """
    Return the image format of `data` (bytes), or ``None`` if the format
    is unknown.

    >>> peek_image_format(b"GIF89a...")
    'gif'
    >>> peek_image_format(b"<html></html>") is None
    True
    """
    header = data[:10]
    for format, bytes in magic_bytes:
        if header.startswith(bytes):
            return format
    try:
        # only parses the header, the image is not decoded
        with Image.open(BytesIO(data)) as img:
            if img.format:
                return img.format.lower()
    except (UnidentifiedImageError, OSError, ValueError):
        pass
    return None


def response_matches_format(data, content_type, format):
    """
    Check if the response `data` matches the expected `format`.

    An ``image/*`` content-type of the response is compared with `format`.
    Generic content-types (missing or ``application/octet-stream``) are
    resolved by the image header of `data`.

    >>> response_matches_format(b'', 'image/png', 'png')
    True
    >>> response_matches_format(b'error', 'text/plain', 'png')
    False
    >>> response_matches_format(b"\\211PNG\\r\\n\\032\\n", None, 'png')
    True
    """
    format = ImageFormat(format)
    if content_type:
        content_type = content_type.split(';', 1)[0].strip().lower()
        if content_type.startswith('image/'):
            return ImageFormat(content_type) == format
        if content_type.endswith('/' + format.ext):
            # non-image tiles, e.g. application/x-protobuf for protobuf
            return True
        if content_type not in ('application/octet-stream', 'binary/octet-stream'):
            return False
    return peek_image_format(data) == format.ext
