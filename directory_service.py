"""Single-level directory listing relative to the served root"""

import os
import logging
from typing import List

from pydantic import BaseModel, Field

from config import Settings

logger = logging.getLogger(__name__)

class DirectoryEntry(BaseModel):
    """One immediate child of a listed directory"""
    name: str = Field(..., description="File or directory name")
    is_dir: bool = Field(..., description="True when the entry is a directory")

class ListError(Exception):
    message = "Failed to list directory"

    def __init__(self, path: str, message: str = None):
        self.path = path
        super().__init__(message or self.message)

class NotFound(ListError):
    message = "Directory not found"

class ReadError(ListError):
    message = "Failed to read directory"

class DirectoryService:
    def __init__(self, root_dir: str, confine_to_root: bool = True):
        self.root = os.path.realpath(root_dir)
        self.confine_to_root = confine_to_root

    @classmethod
    def from_settings(cls, config: Settings) -> "DirectoryService":
        return cls(config.root_path, confine_to_root=config.confine_to_root)

    def resolve(self, path: str) -> str:
        """Map a client-supplied relative path onto the filesystem.

        An empty path is the root itself. When confined, anything that
        resolves outside the root (``..``, absolute paths, symlinks) is
        reported as missing.
        """
        if not path:
            return self.root

        if not self.confine_to_root:
            return os.path.join(self.root, path)

        try:
            resolved = os.path.realpath(os.path.join(self.root, path))
        except (ValueError, OSError) as e:
            logger.warning(f"Rejected unresolvable path {path!r}: {e}")
            raise NotFound(path) from e
        if not self.contains(resolved):
            logger.warning(f"Rejected path outside root: {path!r}")
            raise NotFound(path)
        return resolved

    def contains(self, real_path: str) -> bool:
        """True when an already resolved path is the root or lies under it"""
        return real_path == self.root or os.path.commonpath([self.root, real_path]) == self.root

    def list_directory(self, path: str = "") -> List[DirectoryEntry]:
        """List the immediate children of ``path`` in filesystem order"""
        dir_path = self.resolve(path)

        if not os.path.exists(dir_path):
            raise NotFound(path)

        try:
            it = os.scandir(dir_path)
        except OSError as e:
            logger.warning(f"Failed to read directory {dir_path}: {e}")
            raise ReadError(path) from e

        entries = []
        with it:
            try:
                for entry in it:
                    try:
                        is_dir = entry.is_dir(follow_symlinks=False)
                        entry.name.encode("utf-8")
                    except (OSError, UnicodeEncodeError) as e:
                        logger.debug(f"Skipping entry {entry.name!r} in {dir_path}: {e}")
                        continue
                    entries.append(DirectoryEntry(name=entry.name, is_dir=is_dir))
            except OSError as e:
                # Enumeration broke off part way; keep what was read
                logger.warning(f"Listing of {dir_path} truncated: {e}")

        return entries
