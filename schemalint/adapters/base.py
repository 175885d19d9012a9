from __future__ import annotations

from abc import ABC, abstractmethod
from typing import BinaryIO, Optional

from schemalint.core.descriptor import SourceDescriptor
from schemalint.policy.config_schema import CLIConfig


class SchemaSource(ABC):
    def __init__(self, descriptor: SourceDescriptor, config: Optional[CLIConfig] = None) -> None:
        # constructing an adapter never touches the filesystem or network
        self.descriptor = descriptor
        self.config = config or CLIConfig()

    @abstractmethod
    def write_schema(self, sink: BinaryIO) -> None:  # pragma: no cover - interface
        """Write the raw schema text of the source into sink.

        Any resource acquired here must be released before returning,
        whether or not an error is raised.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.descriptor!r})"
