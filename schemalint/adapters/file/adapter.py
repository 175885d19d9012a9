from __future__ import annotations

import logging
import shutil
from typing import BinaryIO

from schemalint.adapters.base import SchemaSource
from schemalint.core.descriptor import FileSourceDescriptor
from schemalint.core.errors import SourceNotFound, SourceReadError

logger = logging.getLogger(__name__)


class LocalFileSource(SchemaSource):
    descriptor: FileSourceDescriptor

    def write_schema(self, sink: BinaryIO) -> None:
        path = self.descriptor.path
        logger.debug("reading schema from file %s", path)
        try:
            f = open(path, "rb")
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError, PermissionError) as e:
            raise SourceNotFound(f"cannot open {path}: {e.strerror or e}") from e
        except OSError as e:
            raise SourceReadError(f"cannot open {path}: {e}") from e
        with f:
            try:
                shutil.copyfileobj(f, sink)
            except OSError as e:
                raise SourceReadError(f"failed to read {path}: {e}") from e
