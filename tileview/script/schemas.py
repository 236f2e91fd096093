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

import math
import optparse
import sys

from tileview.config.loader import load_configuration, ConfigurationError


def format_conf_value(value):
    if isinstance(value, tuple):
        # YAML only supports lists, convert for clarity
        value = list(value)
    return repr(value)


def human_readable_number(num):
    if num > 10**6:
        return '%7.2fM' % (num/10**6)
    if math.isnan(num):
        return '?'
    return '%d' % int(num)


def display_schema(schema, out=sys.stdout):
    print('%s:' % (schema.name,), file=out)
    print('    Configuration:', file=out)
    conf_dict = {
        'srs': schema.srs,
        'extent': tuple(schema.extent),
        'origin': (schema.origin_x, schema.origin_y),
        'tile_size': schema.tile_size,
        'format': schema.format,
        'axis': schema.axis.value,
    }
    for key in sorted(conf_dict):
        print('        %s: %s' % (key, format_conf_value(conf_dict[key])), file=out)

    print('    Levels: Resolutions, # x * y = total tiles', file=out)
    max_digits = max([len("%r" % (res,)) for res in schema.resolutions])
    for level, res in enumerate(schema.resolutions):
        tiles_in_x, tiles_in_y = schema.grid_size(level)
        total_tiles = tiles_in_x * tiles_in_y
        spaces = max_digits - len("%r" % (res,)) + 1
        print("        %.2d:  %r,%s# %6d * %-6d = %10s" % (
            level, res, ' '*spaces, tiles_in_x, tiles_in_y,
            human_readable_number(total_tiles)), file=out)


def load_conf_or_exit(conf_file):
    try:
        return load_configuration(conf_file)
    except ConfigurationError as e:
        print(e, file=sys.stderr)
        print('ERROR: invalid configuration (see above)', file=sys.stderr)
        sys.exit(2)


def schemas_command(args=None):
    parser = optparse.OptionParser("%prog schemas [options] tileview_conf")
    parser.add_option("-f", "--tileview-conf", dest="tileview_conf",
                      help="TileView configuration.")
    parser.add_option("-s", "--schema", dest="schema_name",
                      help="Display only information about the specified schema.")
    parser.add_option("-l", "--list", dest="list_schemas", action="store_true", default=False,
                      help="List names of configured schemas.")

    from tileview.script.util import setup_logging
    import logging
    setup_logging(logging.WARN)

    if args:
        args = args[1:]  # remove script name

    (options, args) = parser.parse_args(args)
    if not options.tileview_conf:
        if len(args) != 1:
            parser.print_help()
            sys.exit(1)
        else:
            options.tileview_conf = args[0]

    configuration = load_conf_or_exit(options.tileview_conf)
    schemas = configuration.schemas

    if options.schema_name:
        if options.schema_name not in schemas:
            print('schema not found: %s' % (options.schema_name,))
            sys.exit(1)
        schemas = {options.schema_name: schemas[options.schema_name]}

    if options.list_schemas:
        for name in sorted(schemas):
            print(name)
        return

    for i, name in enumerate(sorted(schemas)):
        if i != 0:
            print()
        display_schema(schemas[name])
