"""
Deployment artifact handling.

An artifact is the zip package to deploy plus the path it came from.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from lambda_zip_deployer.exceptions import ValidationError

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSION = ".zip"


@dataclass(frozen=True)
class Artifact:
    """Zip package contents and origin path."""

    contents: bytes
    path: str

    @property
    def size(self) -> int:
        return len(self.contents)

    def validate(self) -> None:
        """
        Check the artifact carries code and is a zip package.

        Raises:
            ValidationError: If the artifact is empty or not a zip
        """
        if not self.contents:
            raise ValidationError("No code provided")
        if not self.path.endswith(ARCHIVE_EXTENSION):
            raise ValidationError(f"Given file is not a zip: {self.path}")

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Artifact":
        """
        Read an artifact from disk.

        Args:
            path: Path to the zip package

        Returns:
            The Artifact (not yet validated)

        Raises:
            ValidationError: If the file cannot be read
        """
        path = Path(path)
        try:
            contents = path.read_bytes()
        except OSError as e:
            raise ValidationError(f"Could not read artifact {path}: {e}") from e

        logger.debug(f"Read {len(contents)} bytes from {path}")
        return cls(contents=contents, path=str(path))
