"""Writes generated Terraform text to disk."""

import logging
from pathlib import Path
from typing import Union

from ..exceptions import OutputWriteError

logger = logging.getLogger(__name__)


class TerraformFileWriter:
    """Writes one UTF-8 file per application into an output directory."""

    def __init__(self, extension: str = ".tf"):
        self.extension = extension

    def path_for(self, directory: Union[str, Path], file_name: str) -> Path:
        return Path(directory) / f"{file_name}{self.extension}"

    def write(self, directory: Union[str, Path], file_name: str, content: str) -> Path:
        """Write ``content`` to ``<directory>/<file_name><extension>``.

        The directory is created when missing; an existing file is replaced.

        Raises:
            OutputWriteError: If the directory or file cannot be written
        """
        path = self.path_for(directory, file_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise OutputWriteError(
                f"Failed to write {path}: {e.strerror or e}", path=str(path), cause=e
            ) from e

        logger.info(f"Wrote {path} ({len(content)} bytes)")
        return path
