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

import optparse
import sys

from tileview.extent import bbox_tuple
from tileview.grid import GridError
from tileview.script.schemas import load_conf_or_exit


def _tile_options(parser):
    parser.add_option("-f", "--tileview-conf", dest="tileview_conf",
                      help="TileView configuration.")
    parser.add_option("-e", "--extent", dest="extent",
                      help="Extent as minx,miny,maxx,maxy in schema units.")
    parser.add_option("-l", "--level", dest="level", type="int",
                      help="Zoom level.")
    parser.add_option("-r", "--res", dest="res", type="float",
                      help="Resolution, the nearest level is used.")


def _parse_tile_args(parser, args):
    if args:
        args = args[1:]  # remove script name
    (options, args) = parser.parse_args(args)

    if not options.tileview_conf and len(args) == 1:
        options.tileview_conf = args[0]
    if not options.tileview_conf or not options.extent:
        parser.print_help()
        print('\nERROR: configuration and --extent required.', file=sys.stderr)
        sys.exit(1)
    if (options.level is None) == (options.res is None):
        parser.print_help()
        print('\nERROR: one of --level or --res required.', file=sys.stderr)
        sys.exit(1)
    try:
        options.extent = bbox_tuple(options.extent)
    except ValueError as e:
        print('ERROR: invalid extent: %s' % (e, ), file=sys.stderr)
        sys.exit(1)
    return options


def _tiles_in_view(schema, options):
    try:
        return schema.get_tiles_in_view(
            options.extent, level=options.level, resolution=options.res)
    except (GridError, ValueError) as e:
        print('ERROR: %s' % (e, ), file=sys.stderr)
        sys.exit(1)


def tiles_command(args=None):
    parser = optparse.OptionParser("%prog tiles [options] tileview_conf")
    _tile_options(parser)
    parser.add_option("-s", "--schema", dest="schema_name",
                      help="Name of the schema.")

    from tileview.script.util import setup_logging
    import logging
    setup_logging(logging.WARN)

    options = _parse_tile_args(parser, args)
    if not options.schema_name:
        parser.print_help()
        print('\nERROR: --schema required.', file=sys.stderr)
        sys.exit(1)

    configuration = load_conf_or_exit(options.tileview_conf)
    if options.schema_name not in configuration.schemas:
        print('schema not found: %s' % (options.schema_name,), file=sys.stderr)
        sys.exit(1)

    schema = configuration.schemas[options.schema_name]
    for info in _tiles_in_view(schema, options):
        col, row, level = info.index
        print('%d %d %d  %s' % (level, col, row, ','.join('%r' % v for v in info.extent)))


def fetch_command(args=None):
    parser = optparse.OptionParser("%prog fetch [options] tileview_conf")
    _tile_options(parser)
    parser.add_option("--source", dest="source_name",
                      help="Name of the tile source.")
    parser.add_option("-q", "--quiet", dest="quiet", action="store_true", default=False,
                      help="Only log errors.")

    options = _parse_tile_args(parser, args)

    from tileview.script.util import setup_logging
    import logging
    setup_logging(logging.WARN if options.quiet else logging.INFO)

    if not options.source_name:
        parser.print_help()
        print('\nERROR: --source required.', file=sys.stderr)
        sys.exit(1)

    configuration = load_conf_or_exit(options.tileview_conf)
    if options.source_name not in configuration.sources:
        print('source not found: %s' % (options.source_name,), file=sys.stderr)
        sys.exit(1)

    layer = configuration.layer(options.source_name)
    tile_infos = _tiles_in_view(layer.schema, options)
    request = layer.fetch_tiles(tile_infos)
    fetched = sum(1 for _ in request.tiles())

    print('fetched %d of %d tiles' % (fetched, len(tile_infos)))
    for result in request.errors:
        col, row, level = result.tile_info.index
        print('ERROR: tile %d %d %d: %s' % (level, col, row, result.exception), file=sys.stderr)
    if request.errors:
        sys.exit(3)

