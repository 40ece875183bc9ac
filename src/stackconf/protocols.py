"""Protocol definitions for stackconf storage collaborators.

The core never touches the filesystem; it reads and writes config bytes
through these interfaces, which keeps it testable with in-memory fakes.
"""

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from stackconf.core.serialization import SerializationFormat


@runtime_checkable
class ConfigLoader(Protocol):
    """Protocol for reading a component's persisted config."""

    def read(self, location: str, environment: str, fmt: "SerializationFormat") -> bytes:
        """Return the raw bytes stored for (location, environment, format).

        Args:
            location: Component directory.
            environment: Environment name (e.g. "common", "prod").
            fmt: Serialization format; selects the file extension.

        Returns:
            File contents.

        Raises:
            ConfigNotFoundError: Nothing is stored for this environment/format.
            StorageError: Any other storage failure.
        """
        ...


@runtime_checkable
class ConfigWriter(Protocol):
    """Protocol for persisting a component's config."""

    def write(
        self,
        location: str,
        environment: str,
        fmt: "SerializationFormat",
        data: bytes,
    ) -> Path:
        """Persist ``data``, creating any missing directories.

        Returns:
            Path the data was written to.

        Raises:
            StorageError: If the data could not be written.
        """
        ...


@runtime_checkable
class ConfigStore(ConfigLoader, ConfigWriter, Protocol):
    """A backend that can both read and write component configs."""
