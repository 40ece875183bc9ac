"""Storage backends for persisted component configs."""

from stackconf.storage.filesystem import FileSystemStore

__all__ = ["FileSystemStore"]
