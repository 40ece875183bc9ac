"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from stackconf.config import user_config
from stackconf.core.node import ConfigNode
from stackconf.storage import FileSystemStore
from tests.fakes import InMemoryStore


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep tests away from the real user config, env vars and log sinks."""
    for name in (
        "STACKCONF_ENVIRONMENT",
        "STACKCONF_FORMAT",
        "STACKCONF_COMPONENT_PATH",
        "STACKCONF_VERBOSITY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        user_config, "get_user_config_path", lambda: tmp_path / "user-config" / "config.yaml"
    )
    yield
    logger.remove()


@pytest.fixture
def log_messages() -> Iterator[list[str]]:
    """Collect loguru messages emitted during the test."""
    messages: list[str] = []
    handler_id = logger.add(lambda msg: messages.append(msg.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def component_dir(tmp_path: Path) -> Path:
    """Empty component directory."""
    path = tmp_path / "component"
    path.mkdir()
    return path


@pytest.fixture
def fs_store() -> FileSystemStore:
    return FileSystemStore()


@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def sample_node() -> ConfigNode:
    """Component with nested settings and two levels of subcomponents."""
    return ConfigNode.from_dict(
        {
            "namespace": "apps",
            "config": {"replicas": "2", "data": {"endpoint": "db.local", "pool": {"size": "5"}}},
            "subcomponents": {
                "api": {
                    "config": {"port": "8080"},
                    "subcomponents": {"cache": {"config": {"ttl": "60"}}},
                },
                "worker": {"injectNamespace": True, "config": {"queue": "jobs"}},
            },
        },
        location="component",
    )
