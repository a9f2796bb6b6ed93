"""Tests for the YAML loader."""

import pytest
import yaml

import teach.yaml


class TestLoad:

    def test_duplicate_key_is_rejected(self):
        with pytest.raises(yaml.constructor.ConstructorError) as info:
            teach.yaml.load("a: 1\nb: 2\na: 3\n")
        assert "found duplicate key 'a'" in str(info.value)

    def test_duplicate_key_in_nested_mapping_is_rejected(self):
        with pytest.raises(yaml.constructor.ConstructorError):
            teach.yaml.load("outer:\n  x: 1\n  x: 2\n")

    def test_mapping_order_is_kept(self):
        data = teach.yaml.load("zeta: 1\nalpha: 2\nmid: 3\n")
        assert list(data) == ['zeta', 'alpha', 'mid']

    def test_merge_keys_are_allowed(self):
        data = teach.yaml.load(
            "base: &base {x: 1}\n"
            "child:\n"
            "  <<: *base\n"
            "  y: 2\n" )
        assert data['child'] == {'x': 1, 'y': 2}

    def test_arbitrary_tags_are_not_constructed(self):
        with pytest.raises(yaml.constructor.ConstructorError):
            teach.yaml.load("!!python/object:os.system {}\n")

