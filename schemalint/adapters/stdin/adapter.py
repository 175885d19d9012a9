from __future__ import annotations

import logging
import shutil
import sys
from typing import BinaryIO, Optional

from schemalint.adapters.base import SchemaSource
from schemalint.core.descriptor import StdinSourceDescriptor
from schemalint.core.errors import SourceReadError
from schemalint.policy.config_schema import CLIConfig

logger = logging.getLogger(__name__)


class StdinSource(SchemaSource):
    descriptor: StdinSourceDescriptor

    def __init__(
        self,
        descriptor: StdinSourceDescriptor,
        config: Optional[CLIConfig] = None,
        stream: Optional[BinaryIO] = None,
    ) -> None:
        super().__init__(descriptor, config)
        self._stream = stream

    def write_schema(self, sink: BinaryIO) -> None:
        # sys.stdin is looked up at read time so test runners can swap it
        stream = self._stream if self._stream is not None else sys.stdin.buffer
        logger.debug("reading schema from stdin")
        try:
            shutil.copyfileobj(stream, sink)
        except OSError as e:
            raise SourceReadError(f"failed to read from stdin: {e}") from e
