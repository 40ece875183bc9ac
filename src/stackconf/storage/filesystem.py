"""File system storage for component config files.

Directory structure:
    <component>/
    └── config/
        ├── common.yaml
        ├── prod.yaml
        └── staging.json
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from pathlib import Path

from loguru import logger

from stackconf.core.serialization import SerializationFormat, config_file_path
from stackconf.exceptions import ConfigNotFoundError, StorageError


def _atomic_write(data: bytes, path: Path) -> None:
    """Write data to path atomically via temp file + os.replace().

    Cleans up temp file on failure.
    """
    tmp_fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=path.stem)
    try:
        with os.fdopen(tmp_fd, "wb") as f:
            f.write(data)
        os.replace(tmp_path, path)
    except Exception:
        with contextlib.suppress(OSError):
            os.unlink(tmp_path)
        raise


class FileSystemStore:
    """Reads and writes ``<location>/config/<environment>.<ext>`` files.

    Implements both the ConfigLoader and ConfigWriter protocols.
    """

    def __init__(self, file_mode: int = 0o644):
        """Initialize store.

        Args:
            file_mode: Permission bits applied to written files.
        """
        self._file_mode = file_mode

    def path_for(self, location: str, environment: str, fmt: SerializationFormat) -> Path:
        return config_file_path(location, environment, fmt)

    def read(self, location: str, environment: str, fmt: SerializationFormat) -> bytes:
        """Read the config file for (location, environment, format).

        Raises:
            ConfigNotFoundError: If the file does not exist.
            StorageError: If the file exists but cannot be read.
        """
        path = self.path_for(location, environment, fmt)
        try:
            return path.read_bytes()
        except FileNotFoundError as e:
            raise ConfigNotFoundError(location, environment, str(path)) from e
        except OSError as e:
            raise StorageError(f"Failed to read {path}: {e}") from e

    def write(
        self,
        location: str,
        environment: str,
        fmt: SerializationFormat,
        data: bytes,
    ) -> Path:
        """Write the config file, creating the component and config dirs.

        Returns:
            Path to the written file.

        Raises:
            StorageError: If the directories or the file cannot be written.
        """
        path = self.path_for(location, environment, fmt)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            _atomic_write(data, path)
            os.chmod(path, self._file_mode)
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

        logger.debug(f"Config written: {path}")
        return path
