"""Tests for ConfigNode subcomponent navigation, settings access and persistence."""

from __future__ import annotations

import pytest

from stackconf.core.node import ConfigNode
from stackconf.core.serialization import SerializationFormat
from stackconf.exceptions import (
    KeyNotFoundError,
    PathNotFoundError,
    StorageError,
    TypeConflictError,
)
from tests.fakes import BrokenStore


class TestGetSubcomponent:
    """Tests for auto-vivifying subcomponent lookup."""

    def test_empty_path_returns_self(self, sample_node):
        assert sample_node.get_subcomponent("") is sample_node
        assert sample_node.get_subcomponent([]) is sample_node

    def test_existing_subcomponent(self, sample_node):
        cache = sample_node.get_subcomponent("api.cache")
        assert cache.settings.get("ttl") == "60"

    def test_creates_missing_chain(self):
        node = ConfigNode()
        leaf = node.get_subcomponent("a.b.c")
        assert node.has_subcomponent("a")
        assert node.has_subcomponent("a.b")
        assert node.has_subcomponent("a.b.c")
        assert leaf is node.children["a"].children["b"].children["c"]

    def test_returns_same_instance(self):
        node = ConfigNode()
        assert node.get_subcomponent("a.b") is node.get_subcomponent("a.b")

    def test_logs_creation(self, log_messages):
        ConfigNode().get_subcomponent("myapp")
        assert "Creating new subcomponent configuration for myapp" in log_messages


class TestHasSubcomponent:
    """Tests for read-only subcomponent lookup."""

    def test_present(self, sample_node):
        assert sample_node.has_subcomponent("api")
        assert sample_node.has_subcomponent("api.cache")

    def test_absent(self, sample_node):
        assert not sample_node.has_subcomponent("db")
        assert not sample_node.has_subcomponent("api.db")

    def test_does_not_create(self, sample_node):
        sample_node.has_subcomponent("x.y.z")
        assert sample_node.find_subcomponent("x") is None
        assert set(sample_node.children) == {"api", "worker"}


class TestRemoveSubcomponent:
    """Tests for removing subcomponent configs."""

    def test_remove_top_level(self, sample_node):
        sample_node.remove_subcomponent("worker")
        assert set(sample_node.children) == {"api"}

    def test_remove_nested_keeps_parent(self, sample_node):
        sample_node.remove_subcomponent("api.cache")
        assert sample_node.has_subcomponent("api")
        assert not sample_node.has_subcomponent("api.cache")
        assert sample_node.get_subcomponent("api").settings.get("port") == "8080"

    def test_missing_intermediate_raises(self, sample_node):
        with pytest.raises(PathNotFoundError) as exc_info:
            sample_node.remove_subcomponent("db.replica")
        assert exc_info.value.path == "db"
        assert exc_info.value.target == "db.replica"

    def test_missing_final_raises(self, sample_node):
        with pytest.raises(
            PathNotFoundError, match="'nope' not found in config path 'api'"
        ) as exc_info:
            sample_node.remove_subcomponent("api.nope")
        assert exc_info.value.path == "api"
        assert exc_info.value.target == "api.nope"
        assert sample_node.has_subcomponent("api.cache")

    def test_does_not_create_on_failure(self, sample_node):
        with pytest.raises(PathNotFoundError):
            sample_node.remove_subcomponent("db.replica")
        assert not sample_node.has_subcomponent("db")

    def test_empty_path_raises(self, sample_node):
        with pytest.raises(ValueError):
            sample_node.remove_subcomponent("")


class TestSetAndUnsetValue:
    """Tests for settings access through subcomponent paths."""

    def test_set_value_on_root(self):
        node = ConfigNode()
        node.set_value("", "foo", "bar")
        assert node.settings.get("foo") == "bar"

    def test_set_value_creates_subcomponent(self):
        node = ConfigNode()
        node.set_value("a", "x.y.z", "abc")
        assert node.get_subcomponent("a").settings.to_dict() == {"x": {"y": {"z": "abc"}}}

    def test_set_value_type_conflict(self):
        node = ConfigNode()
        node.set_value("b", "foo.bar", "baz")
        with pytest.raises(TypeConflictError):
            node.set_value("b", "foo.bar.baz", "x")

    def test_unset_value(self):
        node = ConfigNode()
        node.set_value("a", "x.y.z", "abc")
        node.set_value("a", "foo", "foo")
        node.unset_value("a", "x.y.z")
        assert node.get_subcomponent("a").settings.to_dict() == {"x": {"y": {}}, "foo": "foo"}

    def test_unset_under_missing_subcomponent_creates_it(self):
        node = ConfigNode()
        with pytest.raises(KeyNotFoundError):
            node.unset_value("ghost", "some.key")
        assert node.has_subcomponent("ghost")
        assert len(node.get_subcomponent("ghost").settings) == 0

    def test_has_value(self, sample_node):
        assert sample_node.has_value("", "data.pool.size")
        assert sample_node.has_value("api", "port")
        assert not sample_node.has_value("api", "missing")
        assert not sample_node.has_value("db", "port")
        assert not sample_node.has_subcomponent("db")


class TestConfigNodeConversion:
    """Tests for to_dict / from_dict / copy."""

    def test_empty_node_serializes_to_empty_dict(self):
        assert ConfigNode().to_dict() == {}

    def test_empty_fields_are_omitted(self):
        node = ConfigNode()
        node.get_subcomponent("a").settings.set("x.y.z", "1")
        node.get_subcomponent("a").settings.unset("x.y.z")
        assert node.to_dict() == {"subcomponents": {"a": {"config": {"x": {"y": {}}}}}}

    def test_namespace_fields(self):
        node = ConfigNode(namespace="ns", inject_namespace=True)
        assert node.to_dict() == {"namespace": "ns", "injectNamespace": True}

    def test_from_dict_round_trip(self, sample_node):
        assert ConfigNode.from_dict(sample_node.to_dict()).to_dict() == sample_node.to_dict()

    def test_from_dict_reads_fields(self, sample_node):
        assert sample_node.namespace == "apps"
        assert sample_node.inject_namespace is False
        assert sample_node.children["worker"].inject_namespace is True
        assert sample_node.location == "component"

    def test_copy_shares_nothing(self, sample_node):
        clone = sample_node.copy()
        clone.set_value("api.cache", "ttl", "999")
        clone.remove_subcomponent("worker")
        assert sample_node.get_subcomponent("api.cache").settings.get("ttl") == "60"
        assert sample_node.has_subcomponent("worker")
        assert clone.children["api"] is not sample_node.children["api"]


class TestConfigNodeLoad:
    """Tests for ConfigNode.load format fallback."""

    def test_loads_yaml(self, memory_store):
        memory_store.put("comp", "common", SerializationFormat.YAML, "config:\n  foo: bar\n")
        node = ConfigNode(location="comp")
        node.load("common", memory_store)
        assert node.format is SerializationFormat.YAML
        assert node.settings.get("foo") == "bar"

    def test_prefers_yaml_over_json(self, memory_store):
        memory_store.put("comp", "common", SerializationFormat.YAML, "config:\n  src: yaml\n")
        memory_store.put("comp", "common", SerializationFormat.JSON, '{"config": {"src": "json"}}')
        node = ConfigNode(location="comp")
        node.load("common", memory_store)
        assert node.settings.get("src") == "yaml"

    def test_falls_back_to_json(self, memory_store):
        memory_store.put("comp", "prod", SerializationFormat.JSON, '{"namespace": "prod-ns"}')
        node = ConfigNode(location="comp")
        node.load("prod", memory_store)
        assert node.format is SerializationFormat.JSON
        assert node.namespace == "prod-ns"
        assert memory_store.reads == ["comp/config/prod.yaml", "comp/config/prod.json"]

    def test_undecodable_yaml_falls_back_to_json(self, memory_store, log_messages):
        memory_store.put("comp", "common", SerializationFormat.YAML, "config: [unclosed\n")
        memory_store.put("comp", "common", SerializationFormat.JSON, '{"config": {"a": "1"}}')
        node = ConfigNode(location="comp")
        node.load("common", memory_store)
        assert node.format is SerializationFormat.JSON
        assert node.settings.get("a") == "1"
        assert any("Ignoring unreadable yaml config" in m for m in log_messages)

    def test_missing_everywhere_is_not_an_error(self, memory_store):
        node = ConfigNode(location="comp")
        node.load("staging", memory_store)
        assert node.to_dict() == {}
        assert node.format is SerializationFormat.YAML

    def test_missing_everywhere_uses_default_format(self, memory_store):
        node = ConfigNode(location="comp")
        node.load("staging", memory_store, default_format=SerializationFormat.JSON)
        assert node.format is SerializationFormat.JSON

    def test_storage_error_propagates(self):
        node = ConfigNode(location="comp")
        with pytest.raises(StorageError, match="Permission denied"):
            node.load("common", BrokenStore())

    def test_merge_config_file(self, memory_store):
        memory_store.put(
            "base", "common", SerializationFormat.YAML, "config:\n  a: base\n  b: base\n"
        )
        node = ConfigNode(location="override")
        node.settings.set("a", "override")
        node.merge_config_file("base", "common", memory_store)
        assert node.settings.to_dict() == {"a": "override", "b": "base"}


class TestConfigNodeWrite:
    """Tests for ConfigNode.write."""

    def test_write_uses_node_format(self, memory_store):
        node = ConfigNode(location="comp", format=SerializationFormat.JSON)
        node.settings.set("foo", "bar")
        path = node.write("prod", memory_store)
        assert path.as_posix() == "comp/config/prod.json"
        assert memory_store.files["comp/config/prod.json"].startswith(b"{")

    def test_write_then_load(self, memory_store, sample_node):
        sample_node.location = "comp"
        sample_node.write("common", memory_store)
        loaded = ConfigNode(location="comp")
        loaded.load("common", memory_store)
        assert loaded.to_dict() == sample_node.to_dict()

    def test_writer_error_propagates(self, sample_node):
        with pytest.raises(StorageError, match="Read-only"):
            sample_node.write("common", BrokenStore())

    def test_config_path(self):
        node = ConfigNode(location="services/api", format=SerializationFormat.JSON)
        assert node.config_path("prod").as_posix() == "services/api/config/prod.json"
