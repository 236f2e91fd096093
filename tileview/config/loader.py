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
Configuration loading and system initializing.
"""
import copy
import os

from tileview.cache.base import DummyCache
from tileview.cache.file import FileCache
from tileview.cache.memory import MemoryCache
from tileview.client.http import HTTPClient, auth_data_from_url
from tileview.client.locator import locator_for_type
from tileview.config.validator import validate
from tileview.extent import bbox_tuple
from tileview.grid import GridError
from tileview.grid.schema import tile_schema, global_mercator_schema, global_geodetic_schema
from tileview.image import ImageFormat
from tileview.source.layer import TileLayer
from tileview.source.tile import TileSource
from tileview.util.yaml import load_yaml_file, YAMLError

import logging
log = logging.getLogger('tileview.config')


class ConfigurationError(Exception):
    pass


def load_configuration(conf, conf_base_dir=None):
    """
    Load and validate a configuration and return a `TileViewConfiguration`.

    :param conf: filename of a YAML configuration, or the configuration
        as dictionary
    :param conf_base_dir: directory for relative cache paths, defaults to
        the directory of the configuration file (or the working directory)
    :raises ConfigurationError: for invalid configurations
    """
    if isinstance(conf, dict):
        conf_dict = copy.deepcopy(conf)
        if conf_base_dir is None:
            conf_base_dir = os.getcwd()
    else:
        if conf_base_dir is None:
            conf_base_dir = os.path.abspath(os.path.dirname(conf))
        log.info('reading: %s', conf)
        try:
            conf_dict = load_yaml_file(conf)
        except (YAMLError, OSError) as ex:
            raise ConfigurationError(ex) from ex

    errors = validate(conf_dict)
    if errors:
        for error in errors:
            log.warning(error)
        raise ConfigurationError('invalid configuration: %s' % '; '.join(errors))

    return TileViewConfiguration(conf_dict, conf_base_dir=conf_base_dir)


class TileViewConfiguration(object):
    """
    Initialized configuration with all `schemas` and `sources`
    (dictionaries by name).
    """
    def __init__(self, conf, conf_base_dir=None):
        self.conf = conf
        self.conf_base_dir = conf_base_dir or os.getcwd()
        self.globals = conf.get('globals') or {}
        self.schemas = self._load_schemas(conf.get('schemas') or {})
        self.sources = {}
        for name, source_conf in (conf.get('sources') or {}).items():
            self.sources[name] = self._load_source(name, source_conf)

    def _load_schemas(self, schemas_conf):
        schemas = {
            'GLOBAL_WEBMERCATOR': global_mercator_schema(),
            'GLOBAL_GEODETIC': global_geodetic_schema(),
        }
        for name in schemas_conf:
            schemas[name] = self._load_schema(name, schemas_conf, schemas)
        return schemas

    def _schema_conf(self, name, schemas_conf):
        conf = dict(schemas_conf[name])
        base = conf.pop('base', None)
        if base is not None and base in schemas_conf:
            base_conf = self._schema_conf(base, schemas_conf)
            base_conf.update(conf)
            conf = base_conf
        elif base is not None:
            conf = dict(base=base, **conf)
        return conf

    def _load_schema(self, name, schemas_conf, schemas):
        conf = self._schema_conf(name, schemas_conf)
        base = conf.pop('base', None)
        if base is not None:
            # base is one of the default schemas
            base_schema = schemas[base]
            defaults = dict(
                srs=base_schema.srs,
                extent=tuple(base_schema.extent),
                origin=[base_schema.origin_x, base_schema.origin_y],
                tile_size=list(base_schema.tile_size),
                format=base_schema.format,
                axis=base_schema.axis.value,
                resolutions=list(base_schema.resolutions),
            )
            if 'num_levels' in conf or 'res_factor' in conf:
                defaults.pop('resolutions')
            defaults.update(conf)
            conf = defaults

        extent = conf.get('extent')
        try:
            if extent is not None:
                extent = bbox_tuple(extent)
            return tile_schema(
                name=name,
                srs=conf.get('srs'),
                extent=extent,
                origin=conf.get('origin'),
                tile_size=tuple(conf.get('tile_size', (256, 256))),
                format=conf.get('format', 'png'),
                res=conf.get('resolutions'),
                res_factor=conf.get('res_factor', 2.0),
                num_levels=conf.get('num_levels'),
                min_res=conf.get('min_res'),
                max_res=conf.get('max_res'),
                axis=conf.get('axis', 'normal'),
            )
        except (GridError, ValueError) as ex:
            log.error('invalid schema %s: %s', name, ex)
            raise ConfigurationError('invalid schema %s: %s' % (name, ex)) from ex

    def _http_client_factory(self, source_conf, url):
        http_conf = dict(self.globals.get('http') or {})
        http_conf.update(source_conf.get('http') or {})
        url, (username, password) = auth_data_from_url(url)

        def factory():
            return HTTPClient(
                url,
                username=username,
                password=password,
                insecure=http_conf.get('ssl_no_cert_checks', False),
                ssl_ca_certs=http_conf.get('ssl_ca_certs'),
                timeout=http_conf.get('client_timeout', 60),
                headers=http_conf.get('headers'),
                hide_error_details=http_conf.get('hide_error_details', False),
            )
        return url, factory

    def _cache(self, name, source_conf, schema):
        global_cache_conf = self.globals.get('cache') or {}
        cache_conf = source_conf.get('cache') or {}
        cache_type = cache_conf.get('type', global_cache_conf.get('type', 'file'))
        if cache_type == 'none':
            return DummyCache()
        if cache_type == 'memory':
            return MemoryCache()

        cache_dir = cache_conf.get('directory')
        if cache_dir is None:
            base_dir = global_cache_conf.get('base_dir', './cache_data')
            cache_dir = os.path.join(base_dir, name)
        cache_dir = os.path.normpath(os.path.join(self.conf_base_dir, cache_dir))
        layout = cache_conf.get('directory_layout',
                                global_cache_conf.get('directory_layout', 'tc'))
        return FileCache(cache_dir, ImageFormat(schema.format).ext, directory_layout=layout)

    def _load_source(self, name, source_conf):
        schema = self.schemas[source_conf['schema']]
        url, http_client_factory = self._http_client_factory(source_conf, source_conf.get('url'))
        format = source_conf.get('format', schema.format)
        try:
            locator = locator_for_type(
                source_conf['type'], url,
                format=format,
                template=source_conf.get('template'),
                schema=schema,
            )
        except ValueError as ex:
            raise ConfigurationError('invalid source %s: %s' % (name, ex)) from ex

        return TileSource(
            schema,
            locator,
            cache=self._cache(name, source_conf, schema),
            http_client_factory=http_client_factory,
            check_format=source_conf.get('check_format', True),
            name=name,
        )

    def source(self, name):
        try:
            return self.sources[name]
        except KeyError:
            raise ConfigurationError('unknown source %s' % (name, ))

    def schema(self, name):
        try:
            return self.schemas[name]
        except KeyError:
            raise ConfigurationError('unknown schema %s' % (name, ))

    def layer(self, name):
        """
        Return a `TileLayer` for the source `name`.
        """
        source = self.source(name)
        source_conf = self.conf['sources'][name]
        concurrent_requests = source_conf.get(
            'concurrent_requests', self.globals.get('concurrent_requests', 4))
        return TileLayer(source, concurrent_requests=concurrent_requests)
