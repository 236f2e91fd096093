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
File system related utility functions.
"""
import os
import random


def ensure_directory(file_name):
    """
    Create the parent directory of `file_name` if it does not exist.
    """
    dir_name = os.path.dirname(file_name)
    if dir_name:
        os.makedirs(dir_name, exist_ok=True)


def write_atomic(filename, data):
    """
    write_atomic writes `data` to a random file in filename's directory
    first and renames that file to the target filename afterwards.
    Rename is atomic on all POSIX platforms and replaces existing
    files on Windows.
    """
    # random filename prevents concurrent writes to one temp file
    path_tmp = filename + '.tmp-' + str(random.randint(0, 99999999))
    try:
        fd = os.open(path_tmp, os.O_EXCL | os.O_CREAT | os.O_WRONLY
                     | getattr(os, 'O_BINARY', 0))
        with os.fdopen(fd, 'wb') as f:
            f.write(data)
        os.replace(path_tmp, filename)
    except OSError:
        try:
            os.unlink(path_tmp)
        except OSError:
            pass
        raise


def remove_file_if_exists(filename):
    """
    Remove `filename`. Returns False if there was no such file.
    """
    try:
        os.remove(filename)
    except FileNotFoundError:
        return False
    return True
