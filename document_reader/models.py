"""
Data model for documents handed to the reader.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class UploadedDocument:
    """
    One user-selected file. The extension in ``name`` decides how it is read.
    """
    name: str
    payload: bytes | str

    @property
    def extension(self) -> str:
        """Lower-cased text after the last dot; the whole name when there is no dot."""
        return self.name.rsplit(".", 1)[-1].lower()

    @classmethod
    def from_path(cls, path: str | Path) -> UploadedDocument:
        """Load a local file as an uploaded document.

        :param path: Path to a local file.
        :return: An UploadedDocument holding the file's bytes.
        """
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        return cls(name=path.name, payload=path.read_bytes())
