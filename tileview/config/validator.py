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
Validation of configuration dictionaries.

The structure is checked with the JSON schema in ``config-schema.json``,
references between sections (base schemas, source schemas) are checked
afterwards.
"""
import json
import os.path

from jsonschema.validators import Draft202012Validator

import logging
log = logging.getLogger('tileview.config')


with open(os.path.join(os.path.dirname(__file__), 'config-schema.json')) as schema_file:
    schema = json.load(schema_file)

# schemas that are always available
DEFAULT_SCHEMAS = ('GLOBAL_WEBMERCATOR', 'GLOBAL_GEODETIC')


def get_error_messages(errors):
    msgs = []
    for error in errors:
        path = error.json_path.replace('$', 'root')
        msgs.append('%s in %s' % (error.message, path))
        if error.context is not None:
            msgs += get_error_messages(error.context)
    return msgs


def validate(conf_dict):
    """
    Return a list with all errors of `conf_dict`. Returns an empty
    list for valid configurations.
    """
    validator = Draft202012Validator(schema=schema)
    errors = get_error_messages(validator.iter_errors(conf_dict))
    if errors:
        # references can't be checked for invalid structures
        return errors

    schemas_conf = conf_dict.get('schemas') or {}
    for name, schema_conf in schemas_conf.items():
        errors += _validate_schema(schemas_conf, name, schema_conf)

    sources_conf = conf_dict.get('sources') or {}
    for name, source_conf in sources_conf.items():
        errors += _validate_source(schemas_conf, name, source_conf)
    return errors


def _validate_schema(schemas_conf, name, schema_conf):
    errors = []
    seen = set([name])
    base = schema_conf.get('base')
    while base is not None:
        if base in DEFAULT_SCHEMAS:
            break
        if base not in schemas_conf:
            errors.append("Base schema '%s' for schema '%s' not found" % (base, name))
            break
        if base in seen:
            errors.append("Schema '%s' has a recursive base" % (name, ))
            break
        seen.add(base)
        base = schemas_conf[base].get('base')

    if 'resolutions' in schema_conf and ('num_levels' in schema_conf or
                                         'res_factor' in schema_conf):
        errors.append("Schema '%s' has resolutions and num_levels/res_factor,"
                      " use one of both" % (name, ))
    return errors


def _validate_source(schemas_conf, name, source_conf):
    errors = []
    schema_name = source_conf['schema']
    if schema_name not in schemas_conf and schema_name not in DEFAULT_SCHEMAS:
        errors.append("Schema '%s' for source '%s' not in schemas section" % (
            schema_name, name))

    if source_conf['type'] == 'template':
        if 'template' not in source_conf:
            errors.append("Missing 'template' for source '%s' of type template" % (name, ))
        elif '{base}' in source_conf['template'] and 'url' not in source_conf:
            errors.append("Missing 'url' for {base} of source '%s'" % (name, ))
    elif 'url' not in source_conf:
        errors.append("Missing 'url' for source '%s'" % (name, ))
    return errors
