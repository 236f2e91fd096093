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

from io import BytesIO

from PIL import Image, ImageColor, ImageDraw


magic_bytes = {'png': [b"\211PNG\r\n\032\n"],
               'tiff': [b"MM\x00\x2a", b"II\x2a\x00"],
               'gif': [b"GIF87a", b"GIF89a"],
               'jpeg': [b"\xFF\xD8"],
               }


def has_magic_bytes(data, magic):
    return any(data.startswith(m) for m in magic)


def is_png(data):
    return has_magic_bytes(data, magic_bytes['png'])


def is_jpeg(data):
    return has_magic_bytes(data, magic_bytes['jpeg'])


def create_debug_img(size, transparent=True):
    if transparent:
        img = Image.new("RGBA", size)
    else:
        img = Image.new("RGB", size, ImageColor.getrgb("#EEE"))

    draw = ImageDraw.Draw(img)
    w, h = size
    black_color = ImageColor.getrgb("black")
    draw.rectangle((0, 0, w-1, h-1), outline=black_color)
    draw.ellipse((0, 0, w-1, h-1), outline=black_color)
    return img


def create_tmp_image(size, format='png', color=None, mode='RGB'):
    """
    Return the encoded bytes of a new image.
    """
    if color is not None:
        img = Image.new(mode, size, color=color)
    else:
        img = create_debug_img(size, transparent=(format != 'jpeg'))
    data = BytesIO()
    img.save(data, format)
    return data.getvalue()


def create_tile(format='png', size=(256, 256)):
    return create_tmp_image(size, format=format, color=(100, 150, 200))
