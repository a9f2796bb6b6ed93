"""
Tweaking of the PyYAML.

This module provides load(), a replacement for yaml.safe_load() that
reports duplicate keys in a mapping as an error instead of letting them
silently overwrite each other. Mappings keep their order.
"""

from collections.abc import Hashable

import yaml
from yaml.nodes import MappingNode

import logging
logger = logging.getLogger(__name__)


class TeachLoader(yaml.loader.SafeLoader):

    def construct_unique_mapping(self, node, deep=False):
        if not isinstance(node, MappingNode):
            raise yaml.constructor.ConstructorError(
                None, None,
                "expected a mapping node, but found %s" % node.id,
                node.start_mark )
        seen_keys = dict()
        for key_node, value_node in node.value:
            if key_node.tag == 'tag:yaml.org,2002:merge':
                continue
            key = self.construct_object(key_node, deep=deep)
            if not isinstance(key, Hashable):
                continue # reported by construct_mapping()
            if key in seen_keys:
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping", node.start_mark,
                    "found duplicate key %r" % (key,),
                    key_node.start_mark )
            seen_keys[key] = key_node
        return super().construct_mapping(node, deep=deep)

    def construct_yaml_map(self, node):
        data = {}
        yield data
        data.update(self.construct_unique_mapping(node))

TeachLoader.add_constructor(
    'tag:yaml.org,2002:map',
    TeachLoader.construct_yaml_map )

def load(stream, Loader=TeachLoader):
    return yaml.load(stream, Loader=Loader)
